"""
Tests for the HTTP endpoints: status, metrics and translation.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from translation_relay import application
from translation_relay.dependencies import get_providers
from translation_relay.exceptions import ProviderError
from translation_relay.providers import MockTranscriptionProvider, Providers
from translation_relay.settings import app_settings


@pytest.fixture
def app():
    return application()


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


class TestStatusEndpoints:
    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json() == {"message": "Live translation API is running"}

    def test_health(self, client):
        with client.websocket_connect("/ws") as websocket:
            websocket.send_json({"type": "join_room", "roomId": "r1"})
            websocket.receive_json()

            response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["sessions"] == 1
        assert body["participants"] == 1
        assert body["active_connections"] == 1

        after = client.get("/health").json()
        assert after["sessions"] == 0
        assert after["active_connections"] == 0

    def test_correlation_id_header(self, client):
        response = client.get("/health", headers={"X-Correlation-ID": "abcd1234"})

        assert response.headers["X-Correlation-ID"] == "abcd1234"

    def test_metrics(self, client):
        response = client.get("/metrics")

        assert response.status_code == 200
        assert "relay_sessions_active" in response.text
        assert "ws_connections_active" in response.text


class TestTranslateText:
    def test_translate_with_mock_provider(self, client):
        response = client.post(
            "/api/translate-text",
            json={"text": "merhaba", "targetLanguage": "en"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "originalText": "merhaba",
            "translation": "[en] merhaba",
            "targetLanguage": "en",
        }

    def test_default_target_language(self, client):
        response = client.post("/api/translate-text", json={"text": "merhaba"})

        assert response.json()["targetLanguage"] == "en"

    def test_empty_text(self, client):
        response = client.post("/api/translate-text", json={"text": "  "})

        assert response.status_code == 400
        assert response.json()["detail"] == "Text to translate is required"

    def test_provider_failure(self, app, client):
        translator = AsyncMock()
        translator.translate.side_effect = ProviderError("Translation error: down")
        app.dependency_overrides[get_providers] = lambda: Providers(
            translator=translator, transcriber=MockTranscriptionProvider()
        )

        response = client.post("/api/translate-text", json={"text": "merhaba"})

        assert response.status_code == 502
        assert response.json()["detail"] == "Translation error: down"


class TestTranslateAudio:
    def test_translate_audio(self, client):
        response = client.post(
            "/api/translate-audio",
            files={"audio": ("speech.webm", b"fake webm bytes", "audio/webm")},
            data={"targetLanguage": "tr"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "transcript": "Test speech - audio detected",
            "translation": "[tr] Test speech - audio detected",
            "originalLanguage": "auto-detected",
            "targetLanguage": "tr",
        }

    def test_missing_file(self, client):
        response = client.post("/api/translate-audio", data={"targetLanguage": "tr"})

        assert response.status_code == 400

    def test_non_audio_file(self, client):
        response = client.post(
            "/api/translate-audio",
            files={"audio": ("notes.txt", b"hello", "text/plain")},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Only audio files are accepted"

    def test_file_too_large(self, client, monkeypatch):
        monkeypatch.setattr(app_settings, "MAX_AUDIO_UPLOAD_BYTES", 4)

        response = client.post(
            "/api/translate-audio",
            files={"audio": ("speech.webm", b"fake webm bytes", "audio/webm")},
        )

        assert response.status_code == 413
