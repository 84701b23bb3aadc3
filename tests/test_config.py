from __future__ import annotations

import builtins
import sys
import types
from pathlib import Path

import pytest

from core.config import AppSettings, write_user_env_vars
from core.domain.environment import Environment


def test_detect_defaults_to_server() -> None:
    assert Environment.detect() is Environment.SERVER
    assert Environment.resolve(None) is Environment.SERVER
    assert Environment.resolve("browser") is Environment.BROWSER


def test_detect_needs_both_window_and_document(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(builtins, "window", object(), raising=False)
    assert Environment.detect() is Environment.SERVER

    monkeypatch.setattr(builtins, "document", object(), raising=False)
    assert Environment.detect() is Environment.BROWSER


def test_detect_through_js_bridge(monkeypatch: pytest.MonkeyPatch) -> None:
    fake_js = types.SimpleNamespace(window=object(), document=object())
    monkeypatch.setitem(sys.modules, "js", fake_js)
    assert Environment.detect() is Environment.BROWSER

    monkeypatch.setitem(sys.modules, "js", types.SimpleNamespace(window=object()))
    assert Environment.detect() is Environment.SERVER


def test_settings_read_prefixed_env_vars(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FILEKIT_ENVIRONMENT", "browser")
    monkeypatch.setenv("FILEKIT_DEFAULT_LOCALE", "fr-FR")
    monkeypatch.setenv("FILEKIT_HTTP_TIMEOUT_SECONDS", "3.5")

    settings = AppSettings(_env_file=None)
    assert settings.environment is Environment.BROWSER
    assert settings.default_locale == "fr-FR"
    assert settings.http_timeout_seconds == 3.5


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("FILEKIT_ENVIRONMENT", "FILEKIT_DEFAULT_LOCALE", "FILEKIT_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)

    settings = AppSettings(_env_file=None)
    assert settings.environment is None
    assert settings.default_locale == "en-US"
    assert settings.log_level == "WARNING"


def test_write_user_env_vars_merges_existing_keys(tmp_path: Path) -> None:
    env_path = tmp_path / "cfg" / ".env"
    write_user_env_vars({"FILEKIT_DEFAULT_LOCALE": "de-DE"}, env_path=env_path)
    write_user_env_vars({"FILEKIT_DEFAULT_PHONE_REGION": "DE"}, env_path=env_path)

    lines = env_path.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("#")
    assert "FILEKIT_DEFAULT_LOCALE=de-DE" in lines
    assert "FILEKIT_DEFAULT_PHONE_REGION=DE" in lines
