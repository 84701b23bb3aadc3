"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta y documentación autocontenida (Field) sin acoplar el
  Core a librerías de I/O.
- Los artefactos (BlobFile) y resultados (ConversionResult) se serializan
  igual desde la CLI o desde código de terceros.

Nota:
- Estos modelos describen *qué* se convierte, no *cómo* se obtienen los bytes.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class Encoding(str, Enum):
    """Alfabetos de texto soportados."""

    BASE64 = "base64"
    HEX = "hex"


class ConversionErrorKind(str, Enum):
    """Taxonomía de fallos del conversor."""

    INVALID_SOURCE_TYPE = "invalid_source_type"
    ACQUISITION_FAILURE = "acquisition_failure"
    MALFORMED_TEXT = "malformed_text"
    MISSING_REQUIRED_PARAMETER = "missing_required_parameter"
    INVALID_PARAMETER = "invalid_parameter"


def _now_ms() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


class BlobFile(BaseModel):
    """Objeto tipo `File` del navegador: nombre + bytes + media type.

    Se usa en dos sentidos:
    - como fuente (FileHandle) de la conversión directa;
    - como artefacto de salida de la reconstrucción en modo browser.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ...,
        min_length=1,
        description="Nombre del archivo (equivalente a `File.name`).",
    )
    data: bytes = Field(
        default=b"",
        description="Contenido binario completo.",
    )
    media_type: str = Field(
        default="application/octet-stream",
        description="MIME type (equivalente a `Blob.type`).",
    )
    last_modified: int = Field(
        default_factory=_now_ms,
        ge=0,
        description="Marca de tiempo en milisegundos desde epoch (UTC).",
    )

    @property
    def size(self) -> int:
        return len(self.data)

    async def read(self) -> bytes:
        return self.data

    async def array_buffer(self) -> memoryview:
        return memoryview(self.data)

    async def text(self, encoding: str = "utf-8") -> str:
        """Decodifica el contenido como texto (UTF-8 por defecto, como `Blob.text()`)."""

        return self.data.decode(encoding)


class ConversionFailure(BaseModel):
    """Fallo distinguible de una conversión directa."""

    kind: ConversionErrorKind = Field(..., description="Categoría del fallo.")
    message: str = Field(default="", description="Detalle legible (incluye la causa).")


class ConversionResult(BaseModel):
    """Resultado de `FileConverter.convert`: valor o fallo, nunca ambos.

    `unwrap_or_none()` colapsa el resultado al contrato laxo (`str | None`)
    de `file_to_base64` / `file_to_hex`.
    """

    value: str | None = Field(default=None, description="Texto codificado si la conversión tuvo éxito.")
    encoding: Encoding | None = Field(default=None, description="Alfabeto usado (None si el parámetro era inválido).")
    error: ConversionFailure | None = Field(default=None, description="Fallo, si lo hubo.")

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap_or_none(self) -> str | None:
        return self.value if self.error is None else None
