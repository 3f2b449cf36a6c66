"""Wrapper de httpx.

- Estandariza timeouts, headers y la credencial en cada llamada.
- Se puede sustituir por un stub (`httpx.MockTransport`) en tests.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from core.config import AppSettings
from core.errors import TransportError

logger = logging.getLogger(__name__)


def build_async_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Centraliza timeouts/headers para que todos los recursos se comporten igual.
    `transport` permite inyectar un `httpx.MockTransport`.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    return httpx.AsyncClient(
        base_url=settings.base_url,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


class HttpTransport:
    """Transporte concreto sobre `httpx.AsyncClient`.

    La credencial se recibe explícitamente y se añade como `api_key`; nunca se
    escribe en logs.
    """

    def __init__(self, *, api_key: str, client: httpx.AsyncClient) -> None:
        if not api_key:
            raise ValueError("api_key is required")
        self._api_key = api_key
        self._client = client

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "HttpTransport":
        return cls(
            api_key=settings.api_key,
            client=build_async_client(settings, transport=transport),
        )

    async def send(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        public_params = dict(params or {})
        logger.debug("GET %s params=%s", path, public_params)

        merged = {**public_params, "api_key": self._api_key}
        try:
            response = await self._client.get(path, params=merged)
        except httpx.HTTPError as exc:
            # El mensaje de httpx puede incluir la URL completa con la credencial.
            raise TransportError(f"{type(exc).__name__} while requesting {path}") from exc

        if not response.is_success:
            raise TransportError(
                _error_message(response),
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(
                f"response body for {path} is not valid JSON",
                status_code=response.status_code,
            ) from exc

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpTransport":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def _error_message(response: httpx.Response) -> str:
    """Extrae un mensaje legible del cuerpo de error del servicio."""

    try:
        data = response.json()
    except ValueError:
        return response.reason_phrase or "request failed"

    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"]
        for key in ("msg", "message", "error_message"):
            value = data.get(key)
            if isinstance(value, str) and value:
                return value
    return response.reason_phrase or "request failed"
