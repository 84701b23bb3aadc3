"""Adquisición de bytes por variante de `Source`.

Estas funciones están en adapters porque son I/O puro (disco, HTTP, streams).
Todas devuelven un único buffer contiguo (`bytes`); los fallos se envuelven
en `AcquisitionError` con la causa encadenada.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import AsyncIterable, AsyncIterator, Iterable
from pathlib import Path
from typing import Any

import httpx

from adapters.http_client import fetch_bytes
from core.config import AppSettings
from core.domain.models import BlobFile
from core.domain.sources import Source
from core.errors import AcquisitionError, InvalidSourceTypeError

logger = logging.getLogger(__name__)

READ_CHUNK_SIZE = 64 * 1024


async def read_file_bytes(path: Path) -> bytes:
    """Lee el archivo completo en un hilo de trabajo."""

    try:
        return await asyncio.to_thread(Path(path).read_bytes)
    except OSError as exc:
        raise AcquisitionError(f"Error reading file {str(path)!r}") from exc


async def read_url_bytes(
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    settings: AppSettings | None = None,
) -> bytes:
    try:
        return await fetch_bytes(url, client=client, settings=settings)
    except httpx.HTTPError as exc:
        raise AcquisitionError(f"Error fetching URL {url!r}") from exc


async def read_blob_bytes(file: BlobFile) -> bytes:
    return await file.read()


def _as_chunk(value: Any, index: int) -> bytes:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise AcquisitionError(f"Stream chunk #{index} is {type(value).__name__}, expected bytes")


async def _pull_chunks(stream: Any) -> AsyncIterator[Any]:
    """Itera los chunks en orden de emisión, un pull cada vez."""

    if isinstance(stream, AsyncIterable):
        async for chunk in stream:
            yield chunk
        return

    read = getattr(stream, "read", None)
    if callable(read):
        while True:
            if inspect.iscoroutinefunction(read):
                chunk = await read(READ_CHUNK_SIZE)
            else:
                chunk = await asyncio.to_thread(read, READ_CHUNK_SIZE)
                if inspect.isawaitable(chunk):
                    chunk = await chunk
            # Solo b"" marca el fin; None es "sin datos todavía" (lectura no bloqueante).
            if chunk is None:
                raise AcquisitionError("Stream reader returned None (no data available yet)")
            if isinstance(chunk, (bytes, bytearray, memoryview)) and len(chunk) == 0:
                return
            yield chunk

    if isinstance(stream, Iterable):
        for chunk in stream:
            yield chunk
        return

    raise InvalidSourceTypeError(f"Not a byte stream: {type(stream).__name__}")


async def read_stream_bytes(stream: Any) -> bytes:
    """Consume el stream hasta agotarlo y concatena los chunks.

    Se registra la longitud total, se reserva un único buffer del tamaño
    exacto y cada chunk se copia en su offset, en el orden en que llegó.
    """

    chunks: list[bytes] = []
    total = 0
    try:
        async for raw in _pull_chunks(stream):
            chunk = _as_chunk(raw, len(chunks))
            chunks.append(chunk)
            total += len(chunk)
    except (AcquisitionError, InvalidSourceTypeError):
        raise
    except Exception as exc:
        raise AcquisitionError("Error reading stream") from exc

    buffer = bytearray(total)
    offset = 0
    for chunk in chunks:
        buffer[offset : offset + len(chunk)] = chunk
        offset += len(chunk)

    logger.debug("stream drained: %d chunks, %d bytes", len(chunks), total)
    return bytes(buffer)


async def acquire_bytes(
    source: Source,
    *,
    client: httpx.AsyncClient | None = None,
    settings: AppSettings | None = None,
) -> bytes:
    """Normaliza cualquier variante de `Source` a un buffer contiguo."""

    kind = source.kind
    if kind == "path":
        return await read_file_bytes(source.path)
    if kind == "url":
        return await read_url_bytes(source.url, client=client, settings=settings)
    if kind == "buffer":
        return source.data
    if kind == "file":
        return await read_blob_bytes(source.file)
    if kind == "stream":
        return await read_stream_bytes(source.stream)

    raise InvalidSourceTypeError(f"Unknown source variant: {kind!r}")
