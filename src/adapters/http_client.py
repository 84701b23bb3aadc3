"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y redirects para las fuentes URL.
- Facilita testeo: se puede inyectar un `httpx.AsyncClient` con `MockTransport`.
"""

from __future__ import annotations

import logging

import httpx

from core.config import AppSettings

logger = logging.getLogger(__name__)


def build_async_client(
    settings: AppSettings | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros."""

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "*/*",
    }
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
    )


async def fetch_bytes(
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    settings: AppSettings | None = None,
) -> bytes:
    """Descarga `url` con un único GET y devuelve el cuerpo completo.

    Reglas:
    - Sin reintentos; cualquier error es terminal.
    - Respuestas no-2xx lanzan `httpx.HTTPStatusError`.
    - Si se pasa `client`, no se cierra (lo gestiona el caller).
    """

    if client is not None:
        response = await client.get(url)
    else:
        async with build_async_client(settings) as own_client:
            response = await own_client.get(url)

    response.raise_for_status()
    logger.debug("GET %s -> %s (%d bytes)", url, response.status_code, len(response.content))
    return response.content
