from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from config import UploadConfig
from dependencies import get_handler, get_store, get_upload_receiver
from exceptions import TranscriptionErrorKind
from handlers import UploadReceiver
import routes
from main import app
from routes.ui import INDEX_PATH

from fakes import make_error


@pytest.fixture
def client(handler, receiver, store):
    app.dependency_overrides[get_handler] = lambda: handler
    app.dependency_overrides[get_upload_receiver] = lambda: receiver
    app.dependency_overrides[get_store] = lambda: store
    yield AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
    app.dependency_overrides.clear()


def _upload(name="reuniao.mp3", data=b"\x01" * 500, content_type="audio/mpeg"):
    return {"audioFile": (name, data, content_type)}


# ---------------------------------------------------------------------------
# GET /api/health and GET /
# ---------------------------------------------------------------------------

class TestStaticEndpoints:
    @pytest.mark.asyncio
    async def test_health(self, client):
        async with client:
            response = await client.get("/api/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["service"] == "audio-transcription-api"
        assert "timestamp" in body

    @pytest.mark.asyncio
    async def test_index_page(self, client):
        async with client:
            response = await client.get("/")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "audioFile" in response.text

    @pytest.mark.asyncio
    async def test_index_page_offers_download_and_reset(self, client):
        async with client:
            response = await client.get("/")

        assert 'id="download"' in response.text
        assert "_transcrição.txt" in response.text
        assert "new Blob(" in response.text
        assert "Nova Transcrição" in response.text

    def test_index_page_ships_inside_routes_package(self):
        assert INDEX_PATH.is_file()
        assert INDEX_PATH.parent.parent == Path(routes.__file__).resolve().parent


# ---------------------------------------------------------------------------
# POST /api/transcribe
# ---------------------------------------------------------------------------

class TestTranscribe:
    @pytest.mark.asyncio
    async def test_small_file_round_trip(self, client, transcriber, upload_dir):
        transcriber.script = ["olá  a todos\nobrigado"]

        async with client:
            response = await client.post("/api/transcribe", files=_upload())

        assert response.status_code == 200
        body = response.json()
        assert body["filename"] == "reuniao.mp3"
        assert body["transcriptionText"] == "olá  a todos\nobrigado"
        assert body["wordCount"] == 4
        assert body["confidence"] == 0.94
        assert body["duration"] == 180.0
        assert "totalChunks" not in body
        assert body["processingTime"] >= 0
        assert body["createdAt"]
        assert len(transcriber.calls) == 1
        assert list(upload_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_long_file_reports_chunks(self, client, probe, transcriber, upload_dir):
        probe.duration = 1500.0
        transcriber.script = ["um", "dois", "três"]

        async with client:
            response = await client.post("/api/transcribe", files=_upload("aula.wav", content_type="audio/wav"))

        assert response.status_code == 200
        body = response.json()
        assert body["totalChunks"] == 3
        assert body["transcriptionText"] == "um dois três"
        assert list(upload_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_partial_failure_still_succeeds(self, client, probe, transcriber, upload_dir):
        probe.duration = 1500.0
        transcriber.script = ["um", make_error(TranscriptionErrorKind.CONNECTION), "três"]

        async with client:
            response = await client.post("/api/transcribe", files=_upload())

        assert response.status_code == 200
        text = response.json()["transcriptionText"]
        assert text.startswith("um [Erro na transcrição do segmento 2: Erro de conexão")
        assert text.endswith("] três")
        assert list(upload_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_unsupported_extension_is_rejected_before_any_work(
        self, client, probe, transcoder, transcriber, upload_dir
    ):
        async with client:
            response = await client.post("/api/transcribe", files=_upload("notas.txt", content_type="text/plain"))

        assert response.status_code == 400
        assert response.json()["detail"].startswith("Formato de arquivo não suportado")
        assert list(upload_dir.iterdir()) == []
        assert probe.calls == []
        assert transcoder.calls == []
        assert transcriber.calls == []

    @pytest.mark.asyncio
    async def test_missing_file_is_rejected(self, client):
        async with client:
            response = await client.post("/api/transcribe")

        assert response.status_code == 400
        assert response.json()["detail"].startswith("Nenhum arquivo foi enviado")

    @pytest.mark.asyncio
    async def test_oversized_upload_is_rejected(self, handler, store, transcriber, upload_dir):
        small_receiver = UploadReceiver(UploadConfig(directory=upload_dir, max_upload_bytes=100))
        app.dependency_overrides[get_handler] = lambda: handler
        app.dependency_overrides[get_upload_receiver] = lambda: small_receiver
        try:
            async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
                response = await client.post("/api/transcribe", files=_upload(data=b"\x01" * 500))
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 400
        assert response.json()["detail"].startswith("Arquivo muito grande")
        assert transcriber.calls == []
        assert list(upload_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_empty_upload_is_rejected(self, client, upload_dir):
        async with client:
            response = await client.post("/api/transcribe", files=_upload(data=b""))

        assert response.status_code == 400
        assert list(upload_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_fatal_transcription_error_returns_mapped_message(self, client, transcriber, upload_dir):
        transcriber.script = [make_error(TranscriptionErrorKind.INVALID_CREDENTIALS)]

        async with client:
            response = await client.post("/api/transcribe", files=_upload())

        assert response.status_code == 500
        assert response.json()["detail"].startswith("Chave da API de transcrição inválida")
        assert list(upload_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_opus_conversion_failure(self, client, transcoder, transcriber, upload_dir):
        transcoder.fail_conversion = True

        async with client:
            response = await client.post("/api/transcribe", files=_upload("voz.opus", content_type="audio/opus"))

        assert response.status_code == 500
        assert response.json()["detail"].startswith("Erro ao converter arquivo OPUS")
        assert transcriber.calls == []
        assert list(upload_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_all_segments_failing_is_an_error(self, client, probe, transcriber, upload_dir):
        probe.duration = 1200.0
        transcriber.script = [
            make_error(TranscriptionErrorKind.SERVER_ERROR),
            make_error(TranscriptionErrorKind.SERVER_ERROR),
        ]

        async with client:
            response = await client.post("/api/transcribe", files=_upload())

        assert response.status_code == 500
        assert response.json()["detail"].startswith("Não foi possível transcrever nenhum segmento")
        assert list(upload_dir.iterdir()) == []


# ---------------------------------------------------------------------------
# GET /api/transcriptions/{id}
# ---------------------------------------------------------------------------

class TestGetTranscription:
    @pytest.mark.asyncio
    async def test_stored_result_can_be_fetched(self, client):
        async with client:
            created = (await client.post("/api/transcribe", files=_upload())).json()
            response = await client.get(f"/api/transcriptions/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    @pytest.mark.asyncio
    async def test_unknown_id_is_404(self, client):
        async with client:
            response = await client.get("/api/transcriptions/does-not-exist")

        assert response.status_code == 404
        assert response.json()["detail"] == "Transcrição não encontrada."
