"""Deterministic hashing of JSON-serialisable objects."""

from __future__ import annotations

import base64
import dataclasses
import enum
import hashlib
import json
from typing import Any, Mapping

__all__ = ["Hash", "safe_encode_string", "object_hash", "set_hash"]

_ALPHANUMS = "bcdfghjklmnpqrstvwxz2456789"

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


@dataclasses.dataclass
class Hash:
    """A named hash, as recorded in a resource status."""

    name: str = ""
    hash: str = ""


def safe_encode_string(text: str) -> str:
    """Map every character of ``text`` onto a small alphabet safe for resource names."""
    return "".join(_ALPHANUMS[ord(ch) % len(_ALPHANUMS)] for ch in text)


def _map_key(key: Any) -> str:
    if isinstance(key, enum.Enum):
        key = key.value
    if isinstance(key, str):
        return key
    if isinstance(key, int) and not isinstance(key, bool):
        return str(key)
    raise TypeError(f"unsupported map key type: {type(key).__name__}")


def _normalise(obj: Any) -> Any:
    """Turn ``obj`` into plain JSON values, with map keys sorted and struct fields in order."""
    if isinstance(obj, enum.Enum):
        return _normalise(obj.value)
    if obj is None or isinstance(obj, (str, bool, int)):
        return obj
    if isinstance(obj, float):
        if obj.is_integer() and abs(obj) < 1e21:
            return int(obj)
        return obj
    if isinstance(obj, (bytes, bytearray)):
        return base64.b64encode(bytes(obj)).decode("ascii")
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {
            field.name: _normalise(getattr(obj, field.name))
            for field in dataclasses.fields(obj)
        }
    if isinstance(obj, Mapping):
        items = {_map_key(key): _normalise(value) for key, value in obj.items()}
        return {key: items[key] for key in sorted(items)}
    if isinstance(obj, (list, tuple)):
        return [_normalise(item) for item in obj]
    raise TypeError(f"unsupported type: {type(obj).__name__}")


def _to_json(obj: Any) -> str:
    encoded = json.dumps(
        _normalise(obj),
        ensure_ascii=False,
        separators=(",", ":"),
        allow_nan=False,
    )
    for char, escape in _HTML_ESCAPES.items():
        encoded = encoded.replace(char, escape)
    return encoded


def object_hash(obj: Any) -> str:
    """Return a deep hash of ``obj`` as a safely encoded string.

    Raises ValueError if the object cannot be converted to JSON.
    """
    try:
        encoded = _to_json(obj)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"unable to convert to JSON: {exc}") from exc
    digest = hashlib.sha256(encoded.encode("utf-8")).digest()
    printed = "[" + " ".join(str(byte) for byte in digest) + "]"
    return safe_encode_string(printed)


def set_hash(
    hash_map: dict[str, str] | None, hash_type: str, hash_str: str
) -> tuple[dict[str, str], bool]:
    """Store ``hash_str`` under ``hash_type``; return the map and whether it changed."""
    if hash_map is None:
        hash_map = {}
    if hash_map.get(hash_type) != hash_str or hash_type not in hash_map:
        hash_map[hash_type] = hash_str
        return hash_map, True
    return hash_map, False