"""FastAPI application entry point."""

from ddtrace import patch_all
from fastapi import FastAPI

from routes import health_router, transcriptions_router, ui_router

patch_all()

app = FastAPI(title="Audio Transcription API")
app.include_router(transcriptions_router)
app.include_router(health_router)
app.include_router(ui_router)
