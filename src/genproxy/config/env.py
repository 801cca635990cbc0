"""Environment variable lookups."""

from __future__ import annotations

import os


def optional_env_var(name: str) -> str | None:
    """Return ``name`` from the environment with surrounding whitespace removed.

    Unset and blank values both read as ``None``.
    """

    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()
