"""Process-wide key/value settings with environment-variable fallback."""

from __future__ import annotations

import os

_values: dict[str, str] = {}


def get_global_value(key: str) -> str:
    """Return the value stored for ``key``.

    Falls back to the environment variable of the same name, and to an
    empty string when neither is set.
    """
    try:
        return _values[key]
    except KeyError:
        return os.environ.get(key, "")


def set_global_value(key: str, value: str) -> None:
    """Store ``value`` under ``key``, overriding any environment variable."""
    _values[key] = value