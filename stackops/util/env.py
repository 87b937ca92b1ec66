"""Environment variable helpers."""

from __future__ import annotations

import os

__all__ = ["get_env_var"]


def get_env_var(key: str, base_default: str) -> str:
    """Return the value of environment variable ``key``, or ``base_default`` if it is unset."""
    return os.environ.get(key, base_default)