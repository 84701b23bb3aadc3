"""Execution environment for filekit.

The converter behaves differently depending on where it runs: on a regular
interpreter ("server") it hands back raw ``bytes`` and uses the native codec
primitives, while inside a browser runtime (Pyodide/PyScript) it builds
File-like artifacts and computes encodings by hand. Keeping the enum in the
domain layer lets both the CLI and the services share it without importing
adapters.
"""

from __future__ import annotations

import builtins
import importlib
from enum import Enum


class Environment(str, Enum):
    """Supported execution contexts."""

    SERVER = "server"
    BROWSER = "browser"

    @classmethod
    def detect(cls) -> "Environment":
        """Probe the browser globals.

        Browser iff both a ``window`` and a ``document`` global are reachable,
        either through the Pyodide ``js`` bridge or injected into builtins.
        Never cached: every call probes again.
        """

        if hasattr(builtins, "window") and hasattr(builtins, "document"):
            return cls.BROWSER

        try:
            js = importlib.import_module("js")
        except ImportError:
            return cls.SERVER

        if hasattr(js, "window") and hasattr(js, "document"):
            return cls.BROWSER
        return cls.SERVER

    @classmethod
    def resolve(cls, value: "Environment | str | None") -> "Environment":
        """Return `value` as an enum, detecting when it is not given."""

        if value is None:
            return cls.detect()
        return cls(value)

    @property
    def is_browser(self) -> bool:
        return self is Environment.BROWSER

    def label(self) -> str:
        """Human readable label for tables and logging."""

        return "Browser" if self is Environment.BROWSER else "Server"
