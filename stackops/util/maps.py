"""Helpers for merging and ordering mappings."""

from __future__ import annotations

from typing import Mapping, NamedTuple, TypeVar

__all__ = ["Pair", "merge_string_maps", "sort_string_map_by_value", "merge_maps"]

K = TypeVar("K")
V = TypeVar("V")


class Pair(NamedTuple):
    """A key/value pair taken from a string mapping."""

    key: str
    value: str


def merge_maps(
    base_map: Mapping[K, V] | None, *extra_maps: Mapping[K, V] | None
) -> dict[K, V]:
    """Merge mappings; where a key repeats, the earliest value wins."""
    merged: dict[K, V] = dict(base_map or {})
    for extra in extra_maps:
        for key, value in (extra or {}).items():
            merged.setdefault(key, value)
    return merged


def merge_string_maps(
    base_map: Mapping[str, str] | None, *extra_maps: Mapping[str, str] | None
) -> dict[str, str] | None:
    """Merge string mappings like :func:`merge_maps`, returning None when the result is empty."""
    merged = merge_maps(base_map, *extra_maps)
    return merged or None


def sort_string_map_by_value(mapping: Mapping[str, str]) -> list[Pair]:
    """Return the mapping's items as pairs sorted by key."""
    return sorted((Pair(key, value) for key, value in mapping.items()), key=lambda p: p.key)