"""Format commands (Babel / phonenumbers)."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

from adapters.localization import Localization
from core.errors import LocalizationError

app = typer.Typer(no_args_is_help=True, help="Locale-aware formatting of numbers, dates and phones.")

_err_console = Console(stderr=True)

_LOCALE_OPTION = typer.Option(None, "--locale", "-l", help="Locale tag (e.g. en-US, fr, de-DE).")


def _localization(locale: str | None) -> Localization:
    try:
        return Localization(locale)
    except LocalizationError as exc:
        _err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc


@app.command()
def number(value: float, locale: Optional[str] = _LOCALE_OPTION) -> None:
    """Format a decimal number."""

    typer.echo(_localization(locale).format_number(value))


@app.command()
def currency(
    value: float,
    code: str = typer.Option("USD", "--currency", "-c", help="ISO-4217 currency code."),
    locale: Optional[str] = _LOCALE_OPTION,
) -> None:
    """Format an amount of money."""

    typer.echo(_localization(locale).format_currency(value, code))


@app.command()
def date(
    value: str = typer.Argument(..., help="ISO date, e.g. 2025-02-19."),
    style: str = typer.Option("medium", "--style", "-s", help="short, medium, long, full or a CLDR pattern."),
    locale: Optional[str] = _LOCALE_OPTION,
) -> None:
    """Format a date."""

    typer.echo(_localization(locale).format_date(value, style))


@app.command()
def phone(
    value: str,
    region: Optional[str] = typer.Option(None, "--region", "-r", help="Default region (ISO-3166 alpha-2)."),
    style: str = typer.Option("international", "--style", "-s", help="e164, international, national, rfc3966."),
    locale: Optional[str] = _LOCALE_OPTION,
) -> None:
    """Parse and format a phone number."""

    loc = _localization(locale)
    try:
        parsed = loc.parse_phone_number(value, region)
    except LocalizationError as exc:
        _err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    try:
        formatted = loc.format_phone_number(value, region, style)
    except LocalizationError as exc:
        raise typer.BadParameter(str(exc)) from exc

    typer.echo(formatted)
    if not loc.is_valid_phone_number(value, region):
        _err_console.print(f"[yellow]Warning:[/yellow] {parsed.national_number} is not a valid number for its region")
