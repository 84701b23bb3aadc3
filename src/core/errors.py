"""Excepciones del conversor.

Reglas:
- Cada excepción lleva su `ConversionErrorKind` para poder mapearla a un
  `ConversionResult` sin inspeccionar mensajes.
- La causa subyacente se encadena con `raise ... from exc`.
"""

from __future__ import annotations

from core.domain.models import ConversionErrorKind, ConversionFailure


class ConversionError(Exception):
    """Base de todos los fallos de conversión."""

    kind: ConversionErrorKind = ConversionErrorKind.ACQUISITION_FAILURE

    def to_failure(self) -> ConversionFailure:
        message = str(self)
        if self.__cause__ is not None:
            message = f"{message}: {self.__cause__}"
        return ConversionFailure(kind=self.kind, message=message)


class InvalidSourceTypeError(ConversionError, TypeError):
    kind = ConversionErrorKind.INVALID_SOURCE_TYPE


class AcquisitionError(ConversionError):
    """Falló la lectura del archivo, la descarga o la lectura del stream."""

    kind = ConversionErrorKind.ACQUISITION_FAILURE


class MalformedTextError(ConversionError, ValueError):
    """El texto no es base64/hex válido para el alfabeto activo."""

    kind = ConversionErrorKind.MALFORMED_TEXT


class MissingRequiredParameterError(ConversionError, ValueError):
    kind = ConversionErrorKind.MISSING_REQUIRED_PARAMETER


class LocalizationError(ValueError):
    """Locale no soportado o número de teléfono no parseable."""
