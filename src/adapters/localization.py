"""Fachada de localización (Babel + phonenumbers).

Por qué en adapters:
- Es un envoltorio fino sobre librerías externas con datos CLDR y
  libphonenumber; no tiene estado propio más allá del locale activo.

Reglas:
- `set_locale` falla con `LocalizationError` si Babel no conoce el locale.
- Los `format_*` registran el error y devuelven `str(value)` si Babel no
  puede formatear (mismo fallback que la versión JS).
"""

from __future__ import annotations

import logging
from datetime import date, datetime

import phonenumbers
from babel import Locale, UnknownLocaleError
from babel.dates import format_date as babel_format_date
from babel.numbers import format_currency as babel_format_currency
from babel.numbers import format_decimal, format_percent
from phonenumbers import NumberParseException, PhoneNumber, PhoneNumberFormat

from core.config import AppSettings
from core.errors import LocalizationError

logger = logging.getLogger(__name__)

PHONE_FORMATS: dict[str, int] = {
    "e164": PhoneNumberFormat.E164,
    "international": PhoneNumberFormat.INTERNATIONAL,
    "national": PhoneNumberFormat.NATIONAL,
    "rfc3966": PhoneNumberFormat.RFC3966,
}


def parse_locale(code: str) -> Locale:
    """Acepta `en-US`, `en_US` o `FR` y devuelve el `Locale` de Babel."""

    identifier = (code or "").strip().replace("-", "_")
    if not identifier:
        raise LocalizationError("Locale code must not be empty.")
    try:
        return Locale.parse(identifier)
    except (UnknownLocaleError, ValueError) as exc:
        raise LocalizationError(f"Locale '{code}' is not supported.") from exc


def _coerce_date(value: date | datetime | str) -> date | datetime:
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text)
    return value


class Localization:
    """Formateo de números, monedas, fechas y teléfonos según un locale."""

    def __init__(self, locale: str | None = None, settings: AppSettings | None = None) -> None:
        self._settings = settings or AppSettings()
        code = locale or self._settings.default_locale
        self._locale: Locale = parse_locale(code)
        self._code = code

    def set_locale(self, code: str) -> None:
        self._locale = parse_locale(code)
        self._code = code

    def get_locale(self) -> str:
        return self._code

    @property
    def locale(self) -> Locale:
        return self._locale

    @property
    def region(self) -> str | None:
        """Región por defecto para teléfonos: settings > territorio del locale."""

        return self._settings.default_phone_region or self.locale.territory

    def format_number(self, value: float | int) -> str:
        try:
            return format_decimal(value, locale=self.locale)
        except (ValueError, TypeError, ArithmeticError):
            logger.error("Error formatting number %r", value, exc_info=True)
            return str(value)

    def format_currency(self, value: float | int, currency: str = "USD") -> str:
        try:
            return babel_format_currency(value, currency.upper(), locale=self.locale)
        except (ValueError, TypeError, ArithmeticError):
            logger.error("Error formatting currency %r (%s)", value, currency, exc_info=True)
            return str(value)

    def format_percent(self, value: float | int) -> str:
        try:
            return format_percent(value, locale=self.locale)
        except (ValueError, TypeError, ArithmeticError):
            logger.error("Error formatting percent %r", value, exc_info=True)
            return str(value)

    def format_date(self, value: date | datetime | str, style: str = "medium") -> str:
        """Formatea una fecha; `style` es short/medium/long/full o un patrón CLDR."""

        try:
            return babel_format_date(_coerce_date(value), format=style, locale=self.locale)
        except (ValueError, TypeError, AttributeError):
            logger.error("Error formatting date %r", value, exc_info=True)
            return value.isoformat() if isinstance(value, (date, datetime)) else str(value)

    def parse_phone_number(self, number: str, region: str | None = None) -> PhoneNumber:
        try:
            return phonenumbers.parse(number, region or self.region)
        except NumberParseException as exc:
            raise LocalizationError(f"Cannot parse phone number {number!r}: {exc}") from exc

    def is_valid_phone_number(self, number: str, region: str | None = None) -> bool:
        try:
            parsed = self.parse_phone_number(number, region)
        except LocalizationError:
            return False
        return phonenumbers.is_valid_number(parsed)

    def format_phone_number(
        self,
        number: str,
        region: str | None = None,
        style: str = "international",
    ) -> str:
        """Formatea un teléfono (e164/international/national/rfc3966).

        Si el número no se puede parsear se devuelve tal cual.
        """

        fmt = PHONE_FORMATS.get(style.strip().lower())
        if fmt is None:
            raise LocalizationError(f"Unknown phone format '{style}' (use: {', '.join(PHONE_FORMATS)})")
        try:
            parsed = self.parse_phone_number(number, region)
        except LocalizationError:
            logger.error("Error formatting phone number %r", number, exc_info=True)
            return number
        return phonenumbers.format_number(parsed, fmt)
