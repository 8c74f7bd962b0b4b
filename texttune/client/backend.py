from __future__ import annotations

from typing import Any

import httpx

DEFAULT_BACKEND_URL = "http://localhost:5000"


class BackendError(Exception):
    """The backend answered with a non-success status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class BackendClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BACKEND_URL,
        *,
        api_prefix: str = "/api",
        timeout: float = 90.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_prefix = api_prefix
        self._timeout = timeout
        self._transport = transport

    async def call(self, endpoint: str, data: dict[str, Any]) -> dict[str, Any]:
        """POST ``data`` to ``endpoint`` and return the decoded JSON body.

        Raises ``BackendError`` carrying the backend's ``error`` text (or a
        status-based message) on a non-success status. Network failures
        surface as ``httpx.HTTPError``.
        """
        url = f"{self.base_url}{self.api_prefix}{endpoint}"
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            response = await client.post(url, json=data)

        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = None
            message = body.get("error") if isinstance(body, dict) else None
            raise BackendError(
                response.status_code,
                message or f"API error: {response.status_code} {response.reason_phrase}",
            )
        return response.json()
