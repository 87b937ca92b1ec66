from dataclasses import dataclass

import pytest

from stackops.util.hashing import Hash, object_hash, safe_encode_string, set_hash

ALPHABET = set("bcdfghjklmnpqrstvwxz2456789")


def test_object_hash_known_value():
    expected = (
        "n548h65h79hffh74h59hf7h9ch8h65bh56fh665h66h98h575hdh74h58hbfh5c9"
        "h65dh655hbch55dh699hf5h689h695h5c7h5c7h5bbh5ffq"
    )
    assert object_hash({"a": "a"}) == expected


def test_object_hash_ignores_mapping_insertion_order():
    assert object_hash({"b": 1, "a": 2}) == object_hash({"a": 2, "b": 1})


def test_object_hash_differs_for_different_values():
    assert object_hash({"a": "a"}) != object_hash({"a": "b"})


def test_object_hash_uses_safe_alphabet_and_brackets():
    result = object_hash([1, 2, 3])
    assert set(result) <= ALPHABET
    assert result.startswith("n")
    assert result.endswith("q")


def test_object_hash_dataclass_matches_ordered_fields():
    @dataclass
    class Item:
        name: str
        value: int

    assert object_hash(Item("x", 1)) == object_hash(Item("x", 1))
    assert object_hash(Item("x", 1)) != object_hash(Item("x", 2))


def test_object_hash_unserialisable_raises():
    with pytest.raises(ValueError, match="unable to convert to JSON"):
        object_hash({"a": object()})


def test_object_hash_nan_raises():
    with pytest.raises(ValueError, match="unable to convert to JSON"):
        object_hash({"a": float("nan")})


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("[", "n"),
        ("]", "q"),
        (" ", "h"),
        ("0123456789", "4567896bcdf"[:10]),
    ],
)
def test_safe_encode_string(text, expected):
    assert safe_encode_string(text) == expected


def test_set_hash_sequence():
    hash_map: dict[str, str] = {}
    steps = [
        ("a", "a", True, {"a": "a"}),
        ("b", "b", True, {"a": "a", "b": "b"}),
        ("a", "aa", True, {"a": "aa", "b": "b"}),
        ("b", "b", False, {"a": "aa", "b": "b"}),
    ]
    for hash_type, hash_str, changed_expected, want in steps:
        hash_map, changed = set_hash(hash_map, hash_type, hash_str)
        assert changed is changed_expected
        assert hash_map == want


def test_set_hash_none_map_creates_one():
    hash_map, changed = set_hash(None, "x", "")
    assert hash_map == {"x": ""}
    assert changed is True


def test_hash_defaults():
    record = Hash()
    assert (record.name, record.hash) == ("", "")