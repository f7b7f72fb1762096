"""
Chat assistant tests
The Gemini endpoint is replaced by a fake requests session.
"""

import pytest
import requests

from brewpos.config.environments.testing import TestingSettings
from brewpos.core.exceptions import ExternalServiceError, ValidationError
from brewpos.services.chat_service import FALLBACK_REPLY, ChatService

API = "/api/v1"


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON")
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


def reply(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class TestChatService:
    """Gemini client"""

    def test_ask_returns_first_candidate(self):
        http = FakeSession(FakeResponse(payload=reply(" We open at 7am. ")))
        chat = ChatService(TestingSettings(), session=http)

        assert chat.ask("When do you open?") == "We open at 7am."

        url, kwargs = http.calls[0]
        assert url.endswith("/models/gemini-1.5-flash:generateContent")
        assert kwargs["params"] == {"key": "test-gemini-key"}
        assert kwargs["timeout"] == 15.0
        assert "When do you open?" in kwargs["json"]["contents"][0]["parts"][0]["text"]
        assert kwargs["json"]["generationConfig"]["maxOutputTokens"] == 100

    def test_empty_question(self):
        chat = ChatService(TestingSettings(), session=FakeSession())
        with pytest.raises(ValidationError):
            chat.ask("   ")

    def test_missing_api_key(self):
        http = FakeSession()
        chat = ChatService(TestingSettings(gemini_api_key=None), session=http)
        with pytest.raises(ExternalServiceError) as exc_info:
            chat.ask("Hi")
        assert exc_info.value.error_code == "CHAT_API_KEY_MISSING"
        assert http.calls == []

    def test_network_error(self):
        http = FakeSession(error=requests.ConnectionError("connection refused"))
        chat = ChatService(TestingSettings(), session=http)
        with pytest.raises(ExternalServiceError) as exc_info:
            chat.ask("Hi")
        assert exc_info.value.error_code == "CHAT_UNAVAILABLE"

    def test_upstream_error_message(self):
        payload = {"error": {"message": "API key not valid"}}
        chat = ChatService(TestingSettings(), session=FakeSession(FakeResponse(400, payload)))
        with pytest.raises(ExternalServiceError) as exc_info:
            chat.ask("Hi")
        assert exc_info.value.message == "API key not valid"
        assert exc_info.value.details["status_code"] == 400

    def test_upstream_error_without_body(self):
        chat = ChatService(TestingSettings(), session=FakeSession(FakeResponse(503)))
        with pytest.raises(ExternalServiceError) as exc_info:
            chat.ask("Hi")
        assert exc_info.value.message == "HTTP 503"

    @pytest.mark.parametrize("payload", [{}, {"candidates": []}, reply("")])
    def test_fallback_reply(self, payload):
        assert ChatService.extract_text(payload) == FALLBACK_REPLY


class TestChatAPI:
    """POST /chat"""

    def test_reply(self, client, monkeypatch):
        monkeypatch.setattr(ChatService, "ask", lambda self, message: "Try our latte!")
        response = client.post(f"{API}/chat", json={"message": "Recommend something"})

        assert response.status_code == 200
        assert response.json()["text"] == "Try our latte!"
        assert response.json()["error"] is False

    def test_upstream_failure_becomes_error_bubble(self, client, monkeypatch):
        def fail(self, message):
            raise ExternalServiceError("quota exceeded", "CHAT_UPSTREAM_ERROR")

        monkeypatch.setattr(ChatService, "ask", fail)
        response = client.post(f"{API}/chat", json={"message": "Hi"})

        assert response.status_code == 200
        assert response.json()["error"] is True
        assert response.json()["text"] == "⚠️ Error: quota exceeded"

    def test_greeting(self, client):
        data = client.get(f"{API}/chat").json()
        assert data["sender"] == "bot"
        assert "coffee shop assistant" in data["text"]
