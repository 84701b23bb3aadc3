"""Binary source conversion service.

This module ties together source resolution, byte acquisition and the
base64/hex codecs. The CLI and any other entry-point delegate here, which
keeps side-effects (printing, exit codes) out of the conversion logic.

Error policy:
- Forward direction (source -> text) never raises: failures are logged and
  collapsed to ``None`` (``file_to_*``) or to a failed ``ConversionResult``
  (``convert``).
- Reverse direction (text -> bytes/file) raises, so callers know whether
  anything was actually produced or written.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any

import httpx

from adapters.byte_sources import acquire_bytes
from core.codecs import decode, encode
from core.config import AppSettings
from core.domain.environment import Environment
from core.domain.models import (
    BlobFile,
    ConversionErrorKind,
    ConversionFailure,
    ConversionResult,
    Encoding,
)
from core.domain.sources import resolve_source
from core.errors import ConversionError, MissingRequiredParameterError

logger = logging.getLogger(__name__)


class FileConverter:
    """Convert files, URLs, buffers, blobs and streams to base64/hex and back.

    ``environment`` pins the execution context; when it is ``None`` (and the
    settings do not pin one either) it is detected again on every call.
    ``http_client`` is reused for URL sources and never closed here.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        environment: Environment | str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._environment = environment if environment is not None else self._settings.environment
        self._http_client = http_client

    def environment(self, override: Environment | str | None = None) -> Environment:
        """Return the environment for one call (override > pinned > detected)."""

        if override is not None:
            return Environment(override)
        return Environment.resolve(self._environment)

    async def to_bytes(self, source: Any, *, environment: Environment | str | None = None) -> bytes:
        """Resolve `source` and read it into one contiguous buffer.

        Unlike the ``file_to_*`` helpers this raises ``ConversionError``.
        """

        env = self.environment(environment)
        resolved = resolve_source(source, env)
        return await acquire_bytes(resolved, client=self._http_client, settings=self._settings)

    async def convert(
        self,
        source: Any,
        encoding: Encoding | str = Encoding.BASE64,
        *,
        environment: Environment | str | None = None,
    ) -> ConversionResult:
        try:
            encoding = Encoding(encoding)
            env = self.environment(environment)
        except ValueError as exc:
            logger.error("Invalid conversion parameter: %s", exc)
            return ConversionResult(
                error=ConversionFailure(kind=ConversionErrorKind.INVALID_PARAMETER, message=str(exc)),
            )

        try:
            data = await self.to_bytes(source, environment=env)
            text = encode(data, encoding, environment=env)
        except ConversionError as exc:
            logger.error("Error converting to %s: %s", encoding.value, exc.to_failure().message)
            return ConversionResult(encoding=encoding, error=exc.to_failure())
        except Exception as exc:
            logger.exception("Unexpected error converting to %s", encoding.value)
            return ConversionResult(
                encoding=encoding,
                error=ConversionFailure(kind=ConversionErrorKind.ACQUISITION_FAILURE, message=str(exc)),
            )
        return ConversionResult(value=text, encoding=encoding)

    async def file_to_base64(
        self, source: Any, *, environment: Environment | str | None = None
    ) -> str | None:
        """Base64 of `source`, or ``None`` if anything failed."""

        result = await self.convert(source, Encoding.BASE64, environment=environment)
        return result.unwrap_or_none()

    async def file_to_hex(
        self, source: Any, *, environment: Environment | str | None = None
    ) -> str | None:
        """Lowercase hex of `source`, or ``None`` if anything failed."""

        result = await self.convert(source, Encoding.HEX, environment=environment)
        return result.unwrap_or_none()

    async def base64_to_file(
        self,
        text: str,
        name: str | None = None,
        *,
        media_type: str | None = None,
        environment: Environment | str | None = None,
    ) -> bytes | BlobFile:
        """Decode base64 into ``bytes`` (server) or a named ``BlobFile`` (browser)."""

        return self._reconstruct(text, Encoding.BASE64, name, media_type, self.environment(environment))

    async def hex_to_file(
        self,
        text: str,
        name: str | None = None,
        *,
        media_type: str | None = None,
        environment: Environment | str | None = None,
    ) -> bytes | BlobFile:
        """Decode hex into ``bytes`` (server) or a named ``BlobFile`` (browser)."""

        return self._reconstruct(text, Encoding.HEX, name, media_type, self.environment(environment))

    async def write_base64_to_path(self, text: str, output_path: str | Path) -> Path:
        return await self._write(text, Encoding.BASE64, Path(output_path))

    async def write_hex_to_path(self, text: str, output_path: str | Path) -> Path:
        return await self._write(text, Encoding.HEX, Path(output_path))

    def _reconstruct(
        self,
        text: str,
        encoding: Encoding,
        name: str | None,
        media_type: str | None,
        env: Environment,
    ) -> bytes | BlobFile:
        # The name check must run before any decoding.
        if env.is_browser and not name:
            raise MissingRequiredParameterError(
                "A file name is required to build a File in a browser environment."
            )

        data = decode(text, encoding, environment=env)
        if env.is_browser:
            if media_type:
                return BlobFile(name=name, data=data, media_type=media_type)
            return BlobFile(name=name, data=data)
        return data

    async def _write(self, text: str, encoding: Encoding, output_path: Path) -> Path:
        """Decode and write the whole file; every failure propagates."""

        try:
            data = decode(text, encoding, environment=Environment.SERVER)
            await asyncio.to_thread(output_path.write_bytes, data)
        except Exception:
            logger.error("Error writing %s to file %s", encoding.value, output_path, exc_info=True)
            raise
        logger.info("Wrote %d bytes to %s", len(data), output_path)
        return output_path
