"""Contrato de los codecs bytes <-> texto.

Reglas de diseño:
- Los codecs son puros y síncronos: no hacen I/O.
- `decode_*` lanza `MalformedTextError` ante texto inválido; nunca trunca.
- Dos implementaciones del mismo contrato deben producir texto idéntico
  para los mismos bytes.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ByteTextCodec(Protocol):
    """Conversión determinista y total entre bytes y base64/hex."""

    def encode_base64(self, data: bytes) -> str:
        ...

    def decode_base64(self, text: str) -> bytes:
        ...

    def encode_hex(self, data: bytes) -> str:
        ...

    def decode_hex(self, text: str) -> bytes:
        ...
