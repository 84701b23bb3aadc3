"""Fuentes de bytes (unión etiquetada).

Por qué una unión discriminada:
- Cada variante se construye explícitamente (`from_path`, `from_url`, ...)
  y el conversor despacha por `kind`, sin depender de isinstance en el Core.
- `resolve_source` clasifica valores crudos en el borde, para los callers
  que pasan un `str`, `bytes`, `BlobFile` o un stream directamente.
"""

from __future__ import annotations

from collections.abc import AsyncIterable, Iterable
from pathlib import Path
from typing import Annotated, Any, Literal, Union
from urllib.parse import urlsplit

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from core.domain.environment import Environment
from core.domain.models import BlobFile
from core.errors import InvalidSourceTypeError


def is_absolute_url(value: str) -> bool:
    """True si `value` tiene esquema y autoridad (p.ej. `https://host/x`)."""

    try:
        parts = urlsplit(value.strip())
    except ValueError:
        return False
    return bool(parts.scheme) and bool(parts.netloc)


class FilePathSource(BaseModel):
    kind: Literal["path"] = "path"
    path: Path = Field(..., description="Ruta local (absoluta o relativa al cwd).")


class UrlSource(BaseModel):
    kind: Literal["url"] = "url"
    url: str = Field(..., min_length=1, description="URL absoluta a descargar con un único GET.")

    @field_validator("url")
    @classmethod
    def _require_absolute(cls, value: str) -> str:
        if not is_absolute_url(value):
            raise ValueError(f"not an absolute URL: {value!r}")
        return value.strip()


class FileHandleSource(BaseModel):
    kind: Literal["file"] = "file"
    file: BlobFile


class ByteBufferSource(BaseModel):
    kind: Literal["buffer"] = "buffer"
    data: bytes = Field(default=b"", description="Buffer contiguo en memoria.")


class ByteStreamSource(BaseModel):
    """Secuencia de chunks que se consume por pull hasta agotarse."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    kind: Literal["stream"] = "stream"
    stream: Any = Field(
        ...,
        description="Async iterable, iterable de bytes o reader con `read()` (sync o async).",
    )


Source = Annotated[
    Union[FilePathSource, UrlSource, FileHandleSource, ByteBufferSource, ByteStreamSource],
    Field(discriminator="kind"),
]

_SOURCE_TYPES = (FilePathSource, UrlSource, FileHandleSource, ByteBufferSource, ByteStreamSource)


def from_path(path: str | Path) -> FilePathSource:
    return FilePathSource(path=Path(path))


def from_url(url: str) -> UrlSource:
    return UrlSource(url=url)


def from_file(file: BlobFile) -> FileHandleSource:
    return FileHandleSource(file=file)


def from_bytes(data: bytes | bytearray | memoryview) -> ByteBufferSource:
    return ByteBufferSource(data=bytes(data))


def from_stream(stream: Any) -> ByteStreamSource:
    return ByteStreamSource(stream=stream)


def _is_stream(value: Any) -> bool:
    if isinstance(value, (str, bytes, bytearray, memoryview, dict)):
        return False
    if isinstance(value, (AsyncIterable, Iterable)):
        return True
    return callable(getattr(value, "read", None))


def resolve_source(value: Any, environment: Environment = Environment.SERVER) -> Source:
    """Clasifica un valor crudo en exactamente una variante de `Source`.

    Orden:
    1) str -> URL si es absoluta; si no, ruta local (solo en server).
    2) bytes/bytearray/memoryview -> ByteBuffer.
    3) BlobFile -> FileHandle.
    4) async iterable / iterable / reader -> ByteStream.
    5) cualquier otra cosa -> InvalidSourceTypeError.
    """

    if isinstance(value, _SOURCE_TYPES):
        if environment is Environment.BROWSER and isinstance(value, FilePathSource):
            raise InvalidSourceTypeError(
                "Local file paths are not supported in a browser environment."
            )
        return value

    if isinstance(value, (str, Path)):
        if isinstance(value, str) and is_absolute_url(value):
            return from_url(value)
        if environment is Environment.BROWSER:
            raise InvalidSourceTypeError(
                "Only URLs are accepted as string sources in a browser environment."
            )
        return from_path(value)

    if isinstance(value, (bytes, bytearray, memoryview)):
        return from_bytes(value)

    if isinstance(value, BlobFile):
        return from_file(value)

    if _is_stream(value):
        return from_stream(value)

    raise InvalidSourceTypeError(
        "Invalid source type. Provide a file path, URL, bytes, BlobFile or byte stream "
        f"(got {type(value).__name__})."
    )
