"""Codecs base64/hex por entorno.

- `ServerCodec` usa las primitivas nativas (`base64`, `bytes.hex`).
- `BrowserCodec` calcula lo mismo a mano, iterando códigos de carácter, para
  runtimes donde no queremos depender de esas primitivas.

Ambos validan la entrada con las mismas expresiones regulares antes de
decodificar, así el texto malformado falla igual en los dos entornos.
"""

from __future__ import annotations

import base64
import binascii
import re

from core.domain.environment import Environment
from core.domain.models import Encoding
from core.errors import MalformedTextError
from core.interfaces.codec import ByteTextCodec

_B64_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_B64_INDEX = {ch: i for i, ch in enumerate(_B64_ALPHABET)}
_HEX_DIGITS = "0123456789abcdef"

_B64_RE = re.compile(r"(?:[A-Za-z0-9+/]{4})*(?:[A-Za-z0-9+/]{2}==|[A-Za-z0-9+/]{3}=)?")
_HEX_RE = re.compile(r"(?:[0-9a-fA-F]{2})*")


def _check_base64(text: str) -> str:
    if not isinstance(text, str):
        raise MalformedTextError(f"base64 input must be str, got {type(text).__name__}")
    value = text.strip()
    if len(value) % 4 != 0:
        raise MalformedTextError(f"base64 length must be a multiple of 4 (got {len(value)})")
    if not _B64_RE.fullmatch(value):
        raise MalformedTextError("invalid base64 alphabet or padding")
    return value


def _check_hex(text: str) -> str:
    if not isinstance(text, str):
        raise MalformedTextError(f"hex input must be str, got {type(text).__name__}")
    value = text.strip()
    if len(value) % 2 != 0:
        raise MalformedTextError(f"hex input must have an even length (got {len(value)})")
    if not _HEX_RE.fullmatch(value):
        raise MalformedTextError("invalid hex digit")
    return value


class ServerCodec(ByteTextCodec):
    """Codec con primitivas nativas de CPython."""

    def encode_base64(self, data: bytes) -> str:
        return base64.b64encode(data).decode("ascii")

    def decode_base64(self, text: str) -> bytes:
        value = _check_base64(text)
        try:
            return base64.b64decode(value, validate=True)
        except binascii.Error as exc:
            raise MalformedTextError("invalid base64 input") from exc

    def encode_hex(self, data: bytes) -> str:
        return bytes(data).hex()

    def decode_hex(self, text: str) -> bytes:
        return bytes.fromhex(_check_hex(text))


class BrowserCodec(ByteTextCodec):
    """Codec manual (sin `base64`/`binascii`)."""

    def encode_base64(self, data: bytes) -> str:
        out: list[str] = []
        n = len(data)
        full = n - n % 3
        for i in range(0, full, 3):
            triple = (data[i] << 16) | (data[i + 1] << 8) | data[i + 2]
            out.append(
                _B64_ALPHABET[(triple >> 18) & 63]
                + _B64_ALPHABET[(triple >> 12) & 63]
                + _B64_ALPHABET[(triple >> 6) & 63]
                + _B64_ALPHABET[triple & 63]
            )

        rest = n - full
        if rest == 1:
            triple = data[full] << 16
            out.append(_B64_ALPHABET[(triple >> 18) & 63] + _B64_ALPHABET[(triple >> 12) & 63] + "==")
        elif rest == 2:
            triple = (data[full] << 16) | (data[full + 1] << 8)
            out.append(
                _B64_ALPHABET[(triple >> 18) & 63]
                + _B64_ALPHABET[(triple >> 12) & 63]
                + _B64_ALPHABET[(triple >> 6) & 63]
                + "="
            )
        return "".join(out)

    def decode_base64(self, text: str) -> bytes:
        value = _check_base64(text)
        out = bytearray()
        for i in range(0, len(value), 4):
            sextets = [_B64_INDEX[ch] for ch in value[i : i + 4] if ch != "="]
            acc = 0
            for sextet in sextets:
                acc = (acc << 6) | sextet
            acc <<= 6 * (4 - len(sextets))
            # 4 sextetos -> 3 bytes, 3 -> 2, 2 -> 1
            for shift in (16, 8, 0)[: len(sextets) - 1]:
                out.append((acc >> shift) & 0xFF)
        return bytes(out)

    def encode_hex(self, data: bytes) -> str:
        return "".join(_HEX_DIGITS[byte >> 4] + _HEX_DIGITS[byte & 0x0F] for byte in data)

    def decode_hex(self, text: str) -> bytes:
        value = _check_hex(text)
        out = bytearray(len(value) // 2)
        for i in range(0, len(value), 2):
            out[i // 2] = (_hex_nibble(value[i]) << 4) | _hex_nibble(value[i + 1])
        return bytes(out)


def _hex_nibble(ch: str) -> int:
    code = ord(ch)
    if 0x30 <= code <= 0x39:  # 0-9
        return code - 0x30
    if 0x61 <= code <= 0x66:  # a-f
        return code - 0x61 + 10
    if 0x41 <= code <= 0x46:  # A-F
        return code - 0x41 + 10
    raise MalformedTextError(f"invalid hex digit: {ch!r}")


_CODECS: dict[Environment, ByteTextCodec] = {
    Environment.SERVER: ServerCodec(),
    Environment.BROWSER: BrowserCodec(),
}


def get_codec(environment: Environment) -> ByteTextCodec:
    return _CODECS[Environment(environment)]


def encode(data: bytes, encoding: Encoding, *, environment: Environment = Environment.SERVER) -> str:
    codec = get_codec(environment)
    if Encoding(encoding) is Encoding.HEX:
        return codec.encode_hex(data)
    return codec.encode_base64(data)


def decode(text: str, encoding: Encoding, *, environment: Environment = Environment.SERVER) -> bytes:
    codec = get_codec(environment)
    if Encoding(encoding) is Encoding.HEX:
        return codec.decode_hex(text)
    return codec.decode_base64(text)
