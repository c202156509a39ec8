"""
HTTP surface tests.

Verifies:
✔ /api/ia/ask validates, forwards context and returns the answer
✔ /api/ia/voice enforces upload rules and returns transcription metadata
✔ Invalid input maps to 400
✔ Health probes never contact providers
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from api.ia import get_orchestrator, transcribe_voice
from agent.canned_responses import canned_answer
from agent.orchestrator import AIRequestOrchestrator
from config import Config
from inference import Capability, StubProviderClient
from inference.types import AttemptOutcome
from infra import InfraBootstrap
from main import app


@pytest.fixture
def text_stub():
    return StubProviderClient("text", script=["Repasa los apuntes de la semana."])


@pytest.fixture
def audio_stub():
    return StubProviderClient(
        "audio", capability=Capability.AUDIO_TRANSCRIPTION, script=["hola clase"]
    )


@pytest.fixture
def client(text_stub, audio_stub):
    orchestrator = AIRequestOrchestrator([text_stub], [audio_stub])
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestAskEndpoint:
    def test_ask_returns_answer(self, client, text_stub):
        response = client.post("/api/ia/ask", json={"prompt": "¿Qué estudio hoy?"})

        assert response.status_code == 200
        body = response.json()
        assert body["response"] == "Repasa los apuntes de la semana."
        assert "timestamp" in body
        assert list(text_stub.payloads) == ["¿Qué estudio hoy?"]

    def test_ask_with_context(self, client, text_stub):
        response = client.post(
            "/api/ia/ask",
            json={"prompt": "¿Qué repaso?", "context": "examen de física"},
        )

        assert response.status_code == 200
        assert list(text_stub.payloads) == [
            "Context: examen de física\n\nQuestion: ¿Qué repaso?"
        ]

    @pytest.mark.parametrize("body", [{"prompt": ""}, {"prompt": "   "}, {}])
    def test_blank_prompt_is_400(self, client, text_stub, body):
        response = client.post("/api/ia/ask", json=body)

        assert response.status_code == 400
        assert text_stub.calls == 0

    def test_exhausted_providers_still_answer_200(self):
        failing = StubProviderClient(
            "text", script=[AttemptOutcome.permanent("text", "http_error", "HTTP 401", 401)]
        )
        orchestrator = AIRequestOrchestrator([failing], [])
        app.dependency_overrides[get_orchestrator] = lambda: orchestrator
        try:
            response = TestClient(app).post(
                "/api/ia/ask", json={"prompt": "¿Cómo organizo mi tiempo?"}
            )
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 200
        assert response.json()["response"] == canned_answer("¿Cómo organizo mi tiempo?")


class TestVoiceEndpoint:
    def test_voice_transcribes_upload(self, client, audio_stub):
        response = client.post(
            "/api/ia/voice",
            files={"audioFile": ("clase.mp3", b"ID3audio-bytes", "audio/mpeg")},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["transcription"] == "hola clase"
        assert body["file_name"] == "clase.mp3"
        assert body["file_size"] == len(b"ID3audio-bytes")
        assert body["content_type"] == "audio/mpeg"
        assert audio_stub.payloads[0].data == b"ID3audio-bytes"

    def test_missing_file_is_400(self, client):
        response = client.post("/api/ia/voice")
        assert response.status_code == 400

    def test_empty_file_is_400(self, client, audio_stub):
        response = client.post(
            "/api/ia/voice", files={"audioFile": ("clase.mp3", b"", "audio/mpeg")}
        )

        assert response.status_code == 400
        assert audio_stub.calls == 0

    def test_unsupported_format_is_400(self, client, audio_stub):
        response = client.post(
            "/api/ia/voice", files={"audioFile": ("notas.txt", b"texto", "text/plain")}
        )

        assert response.status_code == 400
        assert "Formato de audio no soportado" in response.json()["detail"]
        assert audio_stub.calls == 0

    def test_oversized_file_is_400(self, client, audio_stub, monkeypatch):
        monkeypatch.setattr(Config, "MAX_AUDIO_BYTES", 8)

        response = client.post(
            "/api/ia/voice", files={"audioFile": ("clase.wav", b"123456789", "audio/wav")}
        )

        assert response.status_code == 400
        assert audio_stub.calls == 0


class TestUploadLimit:
    """Oversized uploads are rejected without buffering the whole file."""

    @staticmethod
    def fake_upload(data, size):
        upload = MagicMock()
        upload.filename = "clase.mp3"
        upload.content_type = "audio/mpeg"
        upload.size = size
        upload.read = AsyncMock(side_effect=lambda n=-1: data if n < 0 else data[:n])
        return upload

    @pytest.mark.asyncio
    async def test_declared_size_over_limit_skips_read(self, audio_stub, monkeypatch):
        monkeypatch.setattr(Config, "MAX_AUDIO_BYTES", 8)
        upload = self.fake_upload(b"123456789", size=9)
        orchestrator = AIRequestOrchestrator([], [audio_stub])

        with pytest.raises(HTTPException) as exc_info:
            await transcribe_voice(audioFile=upload, orchestrator=orchestrator)

        assert exc_info.value.status_code == 400
        upload.read.assert_not_called()
        assert audio_stub.calls == 0

    @pytest.mark.asyncio
    async def test_unknown_size_reads_one_byte_past_limit(self, audio_stub, monkeypatch):
        monkeypatch.setattr(Config, "MAX_AUDIO_BYTES", 8)
        upload = self.fake_upload(b"x" * 1000, size=None)
        orchestrator = AIRequestOrchestrator([], [audio_stub])

        with pytest.raises(HTTPException) as exc_info:
            await transcribe_voice(audioFile=upload, orchestrator=orchestrator)

        assert exc_info.value.status_code == 400
        upload.read.assert_awaited_once_with(9)
        assert audio_stub.calls == 0

    @pytest.mark.asyncio
    async def test_file_at_limit_is_accepted(self, audio_stub, monkeypatch):
        monkeypatch.setattr(Config, "MAX_AUDIO_BYTES", 8)
        upload = self.fake_upload(b"12345678", size=None)
        orchestrator = AIRequestOrchestrator([], [audio_stub])

        result = await transcribe_voice(audioFile=upload, orchestrator=orchestrator)

        assert result.transcription == "hola clase"
        assert result.file_size == 8


class TestHealthEndpoints:
    @pytest.fixture(autouse=True)
    def stub_backend(self, monkeypatch):
        monkeypatch.setenv("AI_BACKEND", "stub")
        InfraBootstrap.reset()
        yield
        InfraBootstrap.reset()

    def test_live(self):
        response = TestClient(app).get("/health/live")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_ready_with_stub_backend(self):
        response = TestClient(app).get("/health/ready")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["backend"] == "stub"
        assert body["providers"] == {"stub": True}

    def test_ready_degraded_without_credentials(self, monkeypatch):
        monkeypatch.setenv("AI_BACKEND", "remote")
        monkeypatch.setenv("GEMINI_API_KEY", "")
        monkeypatch.setenv("HUGGINGFACE_API_KEY", "your-huggingface-api-key-here")

        response = TestClient(app).get("/health/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "degraded"

    def test_root_lists_endpoints(self):
        response = TestClient(app).get("/")

        assert response.status_code == 200
        assert response.json()["endpoints"]["ask"] == "POST /api/ia/ask"
