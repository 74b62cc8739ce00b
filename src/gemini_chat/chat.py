"""Async client for Gemini's single-turn generateContent endpoint."""

from __future__ import annotations

import json
import logging
import time
from typing import Any

import httpx

from .classification import SAFETY_FALLBACK_REPLY
from .exceptions import (
    GeminiChatError,
    GeminiConnectionError,
    GeminiResponseError,
    MissingCredentialError,
    RemoteApiError,
)

LOGGER = logging.getLogger(__name__)

DEFAULT_HOST = "https://generativelanguage.googleapis.com"
DEFAULT_API_VERSION = "v1"
DEFAULT_MODEL = "gemini-2.5-flash"
REMOTE_ERROR_FALLBACK = "API Error"


def build_request_body(prompt: str) -> dict[str, Any]:
    """Return the JSON body for a single-turn prompt with no history."""
    return {"contents": [{"parts": [{"text": prompt}]}]}


def extract_reply_text(payload: Any) -> str:
    """Pull ``candidates[0].content.parts[0].text`` or fall back to the safety reply."""
    try:
        text = payload["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return SAFETY_FALLBACK_REPLY
    if not isinstance(text, str) or not text:
        return SAFETY_FALLBACK_REPLY
    return text


def extract_remote_error(payload: Any) -> str | None:
    """Return the remote error message, or None when the body carries no error."""
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if not error:
        return None
    message = error.get("message") if isinstance(error, dict) else None
    if isinstance(message, str) and message:
        return message
    return REMOTE_ERROR_FALLBACK


class GeminiClient:
    """Issue one stateless generateContent call per prompt."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        host: str = DEFAULT_HOST,
        api_version: str = DEFAULT_API_VERSION,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        normalized_key = (api_key or "").strip()
        if not normalized_key:
            raise MissingCredentialError("A Gemini API key is required.")
        self._api_key = normalized_key
        self.model = model
        self.host = host.rstrip("/")
        self.api_version = api_version.strip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def endpoint(self) -> str:
        """Full generateContent URL without the credential."""
        return f"{self.host}/{self.api_version}/models/{self.model}:generateContent"

    async def generate(self, prompt: str) -> str:
        """Send ``prompt`` and return the first candidate's text.

        A structurally incomplete response (no candidates, blocked output)
        resolves to ``SAFETY_FALLBACK_REPLY`` instead of raising.
        """
        started = time.perf_counter()
        LOGGER.info(
            "chat.request.start",
            extra={
                "event": "chat.request.start",
                "model": self.model,
                "prompt_chars": len(prompt),
            },
        )
        try:
            response = await self._client.post(
                self.endpoint,
                params={"key": self._api_key},
                json=build_request_body(prompt),
            )
            payload = self._parse_body(response)
            remote_error = extract_remote_error(payload)
            if remote_error is not None:
                raise RemoteApiError(remote_error, status_code=response.status_code)
        except Exception as exc:
            mapped = self._map_exception(exc)
            LOGGER.error(
                "chat.request.failed",
                extra={
                    "event": "chat.request.failed",
                    "model": self.model,
                    "error_type": type(mapped).__name__,
                    "error": str(mapped),
                    "status_code": getattr(mapped, "status_code", None),
                },
            )
            raise mapped from exc

        reply = extract_reply_text(payload)
        LOGGER.info(
            "chat.request.complete",
            extra={
                "event": "chat.request.complete",
                "model": self.model,
                "status_code": response.status_code,
                "fallback": reply == SAFETY_FALLBACK_REPLY,
                "elapsed_ms": round((time.perf_counter() - started) * 1000, 1),
            },
        )
        return reply

    async def aclose(self) -> None:
        """Close the underlying HTTP client when this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    @staticmethod
    def _parse_body(response: httpx.Response) -> Any:
        # Error responses carry JSON too, so the status is not checked first.
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            # The status stays off the message text, which is matched against
            # error markers such as "404".
            raise GeminiResponseError(
                "Response body is not valid JSON",
                status_code=response.status_code,
            ) from exc

    def _map_exception(self, exc: Exception) -> GeminiChatError:
        if isinstance(exc, GeminiChatError):
            return exc
        if isinstance(exc, httpx.HTTPError):
            detail = str(exc) or type(exc).__name__
            return GeminiConnectionError(
                f"Unable to reach {self.host}: {detail}"
            )
        return GeminiChatError(str(exc) or type(exc).__name__)
