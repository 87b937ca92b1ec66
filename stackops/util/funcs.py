"""Small helpers for mappings, sequences and JSON text."""

from __future__ import annotations

import json
from typing import Any, Mapping, Sequence

__all__ = ["get_or", "is_set", "is_json", "remove_index", "string_in_slice"]


def get_or(mapping: Mapping[str, Any], key: str, fallback: str) -> Any:
    """Return ``mapping[key]``, or ``fallback`` if the key is missing or holds an empty string."""
    if key not in mapping:
        return fallback
    value = mapping[key]
    if isinstance(value, str) and value == "":
        return fallback
    return value


def is_set(mapping: Mapping[str, Any], key: str) -> Any:
    """Return ``mapping[key]`` if the key exists, otherwise ``False``."""
    if key in mapping:
        return mapping[key]
    return False


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def is_json(text: str) -> bool:
    """Return True if ``text`` holds a JSON object (or null); raise ValueError otherwise."""
    parsed = json.loads(text, parse_constant=_reject_constant)
    if parsed is not None and not isinstance(parsed, dict):
        raise ValueError(
            f"cannot unmarshal {type(parsed).__name__} into an object"
        )
    return True


def remove_index(items: Sequence[str], index: int) -> list[str]:
    """Return a new list with the element at ``index`` removed."""
    if not 0 <= index < len(items):
        raise IndexError(f"index {index} out of range for length {len(items)}")
    return [*items[:index], *items[index + 1 :]]


def string_in_slice(value: str, items: Sequence[str]) -> bool:
    """Return True if ``value`` is one of ``items``."""
    return value in items