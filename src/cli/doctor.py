"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import phonenumbers
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import fetch_bytes
from adapters.localization import Localization
from cli.ui_components import print_banner
from core.codecs import BrowserCodec, ServerCodec
from core.config import AppSettings, write_user_env_vars
from core.domain.environment import Environment
from core.errors import LocalizationError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()

_SAMPLE = bytes(range(256)) + b"filekit doctor"


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        body = await fetch_bytes(url, settings=settings)
        return True, f"{len(body)} bytes"
    except Exception as exc:
        return False, str(exc)


def _check_codecs() -> tuple[bool, str]:
    server, browser = ServerCodec(), BrowserCodec()
    same_b64 = server.encode_base64(_SAMPLE) == browser.encode_base64(_SAMPLE)
    same_hex = server.encode_hex(_SAMPLE) == browser.encode_hex(_SAMPLE)
    if same_b64 and same_hex:
        return True, "server and browser codecs agree"
    return False, f"base64 match={same_b64}, hex match={same_hex}"


def _check_locale(settings: AppSettings) -> tuple[bool, str]:
    try:
        loc = Localization(settings=settings)
    except LocalizationError as exc:
        return False, str(exc)
    return True, f"{loc.get_locale()} -> {loc.format_number(1234.56)}"


def _check_phone() -> tuple[bool, str]:
    try:
        parsed = phonenumbers.parse("+1 650-253-0000", None)
    except phonenumbers.NumberParseException as exc:
        return False, str(exc)
    return True, phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)


@app.command()
def run(
    url: str = typer.Option("https://example.com", "--url", help="URL used for the HTTP check."),
    offline: bool = typer.Option(False, "--offline", help="Skip the HTTP check."),
) -> None:
    """Run baseline diagnostics."""

    settings = AppSettings()
    print_banner(_console)

    table = Table(title="filekit Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    detected = Environment.detect()
    table.add_row("Environment", "OK", f"detected: {detected.label()}")
    if settings.environment is not None:
        table.add_row("Environment override", "SET", settings.environment.value)

    ok, detail = _check_codecs()
    table.add_row("Codecs", "OK" if ok else "FAIL", detail)

    ok, detail = _check_locale(settings)
    table.add_row("Babel locale", "OK" if ok else "FAIL", detail)

    ok, detail = _check_phone()
    table.add_row("phonenumbers", "OK" if ok else "FAIL", detail)

    if offline:
        table.add_row("HTTP connectivity", "SKIPPED", "--offline")
    else:
        ok, detail = asyncio.run(_check_http(url, settings))
        table.add_row("HTTP connectivity", "OK" if ok else "FAIL", detail)

    _console.print(table)


@app.command(name="set-locale")
def set_locale(
    locale: str = typer.Argument(..., help="Default locale tag (e.g. fr-FR)."),
    region: str = typer.Option("", "--region", help="Default phone region (ISO-3166 alpha-2)."),
) -> None:
    """Validate and store the default locale in the user config .env."""

    try:
        Localization(locale)
    except LocalizationError as exc:
        raise typer.BadParameter(str(exc)) from exc

    values = {"FILEKIT_DEFAULT_LOCALE": locale}
    if region:
        values["FILEKIT_DEFAULT_PHONE_REGION"] = region.upper()
    env_path = write_user_env_vars(values)
    _console.print(f"[green]Saved locale config to:[/green] {env_path}")
