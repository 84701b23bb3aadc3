from __future__ import annotations

import io
from pathlib import Path

import pytest
from pydantic import ValidationError

from core.domain.environment import Environment
from core.domain.models import BlobFile
from core.domain.sources import (
    ByteBufferSource,
    ByteStreamSource,
    FileHandleSource,
    FilePathSource,
    UrlSource,
    from_bytes,
    from_path,
    from_url,
    is_absolute_url,
    resolve_source,
)
from core.errors import InvalidSourceTypeError


async def _agen():
    yield b"a"


def test_is_absolute_url() -> None:
    assert is_absolute_url("https://example.com/image.jpg")
    assert is_absolute_url("http://localhost:8000")
    assert not is_absolute_url("data/image.jpg")
    assert not is_absolute_url("/tmp/image.jpg")
    assert not is_absolute_url("C:\\tmp\\image.jpg")
    assert not is_absolute_url("mailto:someone@example.com")


def test_strings_resolve_to_url_or_path() -> None:
    url = resolve_source("https://example.com/image.jpg")
    assert isinstance(url, UrlSource)
    assert url.kind == "url"

    path = resolve_source("reports/out.bin")
    assert isinstance(path, FilePathSource)
    assert path.path == Path("reports/out.bin")

    assert isinstance(resolve_source(Path("x.bin")), FilePathSource)


def test_plain_strings_are_rejected_in_browser_mode() -> None:
    assert isinstance(resolve_source("https://example.com/a", Environment.BROWSER), UrlSource)
    with pytest.raises(InvalidSourceTypeError):
        resolve_source("reports/out.bin", Environment.BROWSER)


def test_buffers_blobs_and_streams() -> None:
    assert isinstance(resolve_source(b"abc"), ByteBufferSource)
    assert resolve_source(bytearray(b"abc")).data == b"abc"
    assert resolve_source(memoryview(b"abc")).data == b"abc"

    blob = BlobFile(name="a.txt", data=b"abc", media_type="text/plain")
    handle = resolve_source(blob)
    assert isinstance(handle, FileHandleSource)
    assert handle.file is blob

    for stream in ([b"a", b"b"], io.BytesIO(b"ab"), _agen()):
        resolved = resolve_source(stream)
        assert isinstance(resolved, ByteStreamSource)
        assert resolved.stream is stream


@pytest.mark.parametrize("value", [123, 1.5, None, {"a": 1}, object()])
def test_unsupported_values_fail(value) -> None:
    with pytest.raises(InvalidSourceTypeError):
        resolve_source(value)


def test_constructed_sources_pass_through() -> None:
    source = from_path("a/b.bin")
    assert resolve_source(source) is source
    assert from_bytes(bytearray(b"x")).data == b"x"


def test_url_source_requires_absolute_url() -> None:
    with pytest.raises(ValidationError):
        UrlSource(url="relative/path")


def test_constructed_path_sources_are_rejected_in_browser_mode() -> None:
    with pytest.raises(InvalidSourceTypeError):
        resolve_source(from_path("a/b.bin"), Environment.BROWSER)
    with pytest.raises(InvalidSourceTypeError):
        resolve_source(FilePathSource(path=Path("a/b.bin")), Environment.BROWSER)

    url = from_url("https://example.com/a.bin")
    assert resolve_source(url, Environment.BROWSER) is url
