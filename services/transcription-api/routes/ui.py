"""Single-page upload UI."""

from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

INDEX_PATH = Path(__file__).resolve().parent / "static" / "index.html"

router = APIRouter(tags=["ui"])


@router.get("/", include_in_schema=False)
def get_index() -> HTMLResponse:
    """Serve the upload page."""
    return HTMLResponse(INDEX_PATH.read_text(encoding="utf-8"))
