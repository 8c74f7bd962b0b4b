from __future__ import annotations

from typing import Any

import httpx

from texttune.core.config import Settings
from texttune.core.errors import UpstreamEmptyResponseError, UpstreamHttpError, UpstreamTransportError
from texttune.core.logging import get_logger

logger = get_logger(__name__)


def build_payload(prompt: str, *, temperature: float, max_output_tokens: int) -> dict[str, Any]:
    # maxOutputTokens bounds tokens, not words; word guidance lives in the prompt.
    return {
        "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        "generationConfig": {
            "temperature": temperature,
            "maxOutputTokens": max_output_tokens,
        },
    }


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return f"Error from AI service (HTTP {response.status_code})"


def extract_text(payload: Any) -> str:
    """Return the first candidate's first part text, trimmed."""
    try:
        text = payload["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        raise UpstreamEmptyResponseError() from None
    if not isinstance(text, str):
        raise UpstreamEmptyResponseError()
    return text.strip()


class GeminiClient:
    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.url = settings.generate_content_url
        self.model = settings.gemini_model
        self._api_key = settings.gemini_api_key
        self._timeout = settings.gemini_timeout_seconds
        self._transport = transport
        if not self._api_key:
            logger.warning("gemini_api_key_missing", model=self.model)

    async def generate(self, prompt: str, *, temperature: float, max_output_tokens: int) -> str:
        payload = build_payload(prompt, temperature=temperature, max_output_tokens=max_output_tokens)
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(self.url, params={"key": self._api_key}, json=payload)
        except httpx.HTTPError as exc:
            logger.warning("gemini_transport_failed", model=self.model, error=type(exc).__name__)
            raise UpstreamTransportError(f"Could not reach AI service: {exc}") from exc

        if response.is_error:
            message = _error_message(response)
            logger.warning("gemini_http_error", model=self.model, status=response.status_code, error=message)
            raise UpstreamHttpError(response.status_code, message)

        try:
            body = response.json()
        except ValueError:
            raise UpstreamEmptyResponseError() from None

        text = extract_text(body)
        logger.info("gemini_completed", model=self.model, output_chars=len(text))
        return text
