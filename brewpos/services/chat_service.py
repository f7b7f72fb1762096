"""
Chat assistant service
Sends the customer's question to the Gemini generateContent endpoint and
returns the first candidate's text. Failures surface as ExternalServiceError;
they never touch the order flow.
"""

from typing import Any, Dict, Optional

import requests

from ..config.settings import Settings, settings as default_settings
from ..core.exceptions import ExternalServiceError, ValidationError
from ..core.logger import get_logger

logger = get_logger("chat")

PROMPT_TEMPLATE = (
    "You are a helpful coffee shop assistant. Answer briefly in 1-2 sentences. "
    "Question: {question}"
)
FALLBACK_REPLY = "Sorry, I couldn't generate a response."
GREETING = "Hi! 👋 I'm your coffee shop assistant. How can I help you today?"


class ChatService:
    """Gemini client"""

    def __init__(self, config: Optional[Settings] = None,
                 session: Optional[requests.Session] = None):
        self.config = config or default_settings
        self.http = session or requests.Session()

    @property
    def endpoint(self) -> str:
        base = self.config.gemini_api_base.rstrip("/")
        return f"{base}/models/{self.config.gemini_model}:generateContent"

    def build_payload(self, question: str) -> Dict[str, Any]:
        return {
            "contents": [
                {"parts": [{"text": PROMPT_TEMPLATE.format(question=question)}]}
            ],
            "generationConfig": {
                "maxOutputTokens": 100,
                "temperature": 0.7,
            },
        }

    def ask(self, question: str) -> str:
        """
        Raises:
            ValidationError: empty question
            ExternalServiceError: missing API key, network failure or upstream error
        """
        question = (question or "").strip()
        if not question:
            raise ValidationError("Message cannot be empty", details={"field": "message"})

        api_key = self.config.gemini_api_key
        if not api_key:
            raise ExternalServiceError(
                "API key missing. Set GEMINI_API_KEY and restart the server.",
                "CHAT_API_KEY_MISSING"
            )

        try:
            response = self.http.post(
                self.endpoint,
                params={"key": api_key},
                json=self.build_payload(question),
                timeout=self.config.chat_timeout_seconds,
            )
        except requests.RequestException as e:
            logger.warning("Chat request failed: %s", e)
            raise ExternalServiceError(f"Chat service unreachable: {e}", "CHAT_UNAVAILABLE")

        try:
            result = response.json()
        except ValueError:
            result = {}

        if not response.ok:
            message = (result.get("error") or {}).get("message") or f"HTTP {response.status_code}"
            logger.warning("Chat API error %s: %s", response.status_code, message)
            raise ExternalServiceError(message, "CHAT_UPSTREAM_ERROR",
                                       details={"status_code": response.status_code})

        return self.extract_text(result)

    @staticmethod
    def extract_text(result: Dict[str, Any]) -> str:
        try:
            text = result["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            return FALLBACK_REPLY
        return text.strip() or FALLBACK_REPLY
