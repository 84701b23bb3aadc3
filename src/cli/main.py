"""CLI principal (Typer).

Comandos:
- `encode`: fuente (ruta, URL o `-` para stdin) -> base64/hex.
- `decode`: base64/hex -> archivo, stdout o resumen del File (browser).
- `format ...` y `doctor ...` como sub-aplicaciones.

La lógica vive en `core.services.file_converter`; aquí solo hay I/O de consola.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from cli.doctor import app as doctor_app
from cli.formatting import app as format_app
from cli.ui_components import build_artifact_table, build_failure_panel
from core.config import AppSettings
from core.domain.environment import Environment
from core.domain.models import BlobFile, Encoding
from core.errors import ConversionError
from core.logging_setup import configure_logging
from core.services.file_converter import FileConverter

app = typer.Typer(no_args_is_help=True, help="Convert binary sources to base64/hex and back.")
app.add_typer(format_app, name="format")
app.add_typer(doctor_app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level."),
) -> None:
    settings = AppSettings()
    configure_logging("DEBUG" if verbose else settings.log_level)


@app.command()
def encode(
    source: str = typer.Argument(..., help="File path, absolute URL, or '-' to read stdin."),
    fmt: Encoding = typer.Option(Encoding.BASE64, "--format", "-f", help="Output alphabet."),
    env: Optional[Environment] = typer.Option(None, "--env", help="Force server/browser mode."),
) -> None:
    """Encode a source as base64 or hex and print it."""

    converter = FileConverter(environment=env)
    value: object = sys.stdin.buffer if source == "-" else source
    result = asyncio.run(converter.convert(value, fmt))
    if result.error is not None:
        _err_console.print(build_failure_panel(result.error))
        raise typer.Exit(code=1)
    typer.echo(result.value)


@app.command()
def decode(
    text: str = typer.Argument(..., help="Encoded text, or '-' to read it from stdin."),
    fmt: Encoding = typer.Option(Encoding.BASE64, "--format", "-f", help="Input alphabet."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the decoded bytes here."),
    name: Optional[str] = typer.Option(None, "--name", help="File name (required in browser mode)."),
    media_type: Optional[str] = typer.Option(None, "--type", help="Media type of the File (browser mode)."),
    env: Optional[Environment] = typer.Option(None, "--env", help="Force server/browser mode."),
) -> None:
    """Decode base64/hex text into a file, stdout, or a File summary."""

    converter = FileConverter(environment=env)
    encoded = sys.stdin.read() if text == "-" else text

    try:
        if output is not None:
            if fmt is Encoding.HEX:
                written = asyncio.run(converter.write_hex_to_path(encoded, output))
            else:
                written = asyncio.run(converter.write_base64_to_path(encoded, output))
            _err_console.print(f"[green]Saved:[/green] {written}")
            return

        if fmt is Encoding.HEX:
            artifact = asyncio.run(converter.hex_to_file(encoded, name, media_type=media_type))
        else:
            artifact = asyncio.run(converter.base64_to_file(encoded, name, media_type=media_type))
    except (ConversionError, OSError) as exc:
        _err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    if isinstance(artifact, BlobFile):
        _console.print(build_artifact_table(artifact))
        return
    sys.stdout.buffer.write(artifact)
    sys.stdout.buffer.flush()


def run() -> None:
    app()


if __name__ == "__main__":
    run()
