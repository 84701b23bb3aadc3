from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from cli.main import app

runner = CliRunner()


def test_encode_file_to_base64(tmp_path: Path) -> None:
    source = tmp_path / "test.txt"
    source.write_bytes(b"Test content")

    result = runner.invoke(app, ["encode", str(source), "--env", "server"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "VGVzdCBjb250ZW50"


def test_encode_stdin_to_hex() -> None:
    result = runner.invoke(app, ["encode", "-", "--format", "hex", "--env", "server"], input=b"Hex content")
    assert result.exit_code == 0
    assert result.stdout.strip() == "48657820636f6e74656e74"


def test_encode_missing_file_exits_with_error(tmp_path: Path) -> None:
    result = runner.invoke(app, ["encode", str(tmp_path / "missing.bin"), "--env", "server"])
    assert result.exit_code == 1


def test_decode_to_output_file(tmp_path: Path) -> None:
    target = tmp_path / "out.txt"
    result = runner.invoke(app, ["decode", "VGVzdCBjb250ZW50", "--output", str(target)])
    assert result.exit_code == 0
    assert target.read_bytes() == b"Test content"


def test_decode_to_missing_directory_fails(tmp_path: Path) -> None:
    result = runner.invoke(app, ["decode", "VGVzdCBjb250ZW50", "--output", str(tmp_path / "no" / "out.txt")])
    assert result.exit_code == 1


def test_decode_server_writes_raw_bytes_to_stdout() -> None:
    result = runner.invoke(app, ["decode", "SGVsbG8gV29ybGQh", "--env", "server"])
    assert result.exit_code == 0
    assert result.stdout_bytes == b"Hello World!"


def test_decode_browser_requires_name() -> None:
    result = runner.invoke(app, ["decode", "SGVsbG8gV29ybGQh", "--env", "browser"])
    assert result.exit_code == 1

    result = runner.invoke(
        app, ["decode", "48657820636f6e74656e74", "--format", "hex", "--env", "browser", "--name", "hex.txt"]
    )
    assert result.exit_code == 0
    assert "hex.txt" in result.stdout
    assert "11 bytes" in result.stdout


def test_format_commands() -> None:
    result = runner.invoke(app, ["format", "number", "1234.56", "--locale", "de-DE"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "1.234,56"

    result = runner.invoke(app, ["format", "currency", "1234.56", "--currency", "USD", "--locale", "en-US"])
    assert result.stdout.strip() == "$1,234.56"

    result = runner.invoke(app, ["format", "date", "2025-02-19", "--locale", "en-US"])
    assert result.stdout.strip() == "Feb 19, 2025"

    result = runner.invoke(app, ["format", "phone", "+1 650-253-0000", "--style", "e164"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "+16502530000"


def test_format_with_unknown_locale_fails() -> None:
    result = runner.invoke(app, ["format", "number", "1", "--locale", "zz"])
    assert result.exit_code == 1
