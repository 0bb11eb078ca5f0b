import os
import tempfile

# dependencies.py builds its adapters at import time; keep it away from the
# working directory and give it a key so the OpenAI client can be created.
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="transcription-tests-"))
os.environ.setdefault("OPENAI_API_KEY", "test-key")
os.environ.setdefault("TRANSCRIPTION_PROVIDER", "openai")

import pytest

from config import ChunkingConfig, UploadConfig
from handlers import ChunkedTranscriptionPipeline, TranscriptionHandler, UploadReceiver
from infrastructure import InMemoryTranscriptionStore

from fakes import FakeProbe, FakeTranscoder, FakeTranscriber


@pytest.fixture
def upload_dir(tmp_path):
    directory = tmp_path / "uploads"
    directory.mkdir()
    return directory


@pytest.fixture
def chunking_config():
    return ChunkingConfig(
        size_threshold_bytes=1000,
        duration_threshold_seconds=600,
        chunk_duration_seconds=600,
        min_segment_bytes=10,
    )


@pytest.fixture
def probe():
    return FakeProbe(duration=180.0)


@pytest.fixture
def transcoder():
    return FakeTranscoder()


@pytest.fixture
def transcriber():
    return FakeTranscriber()


@pytest.fixture
def pipeline(probe, transcoder, transcriber, chunking_config, upload_dir):
    return ChunkedTranscriptionPipeline(
        probe=probe,
        transcoder=transcoder,
        transcription_service=transcriber,
        config=chunking_config,
        work_dir=upload_dir,
    )


@pytest.fixture
def store():
    return InMemoryTranscriptionStore()


@pytest.fixture
def handler(pipeline, store):
    return TranscriptionHandler(pipeline, store, confidence=0.94)


@pytest.fixture
def receiver(upload_dir):
    return UploadReceiver(UploadConfig(directory=upload_dir, max_upload_bytes=50_000))
