import json

import pytest

from stackops.util.funcs import get_or, is_json, is_set, remove_index, string_in_slice


@pytest.mark.parametrize(
    ("data", "key", "expected"),
    [
        ({"one": "111"}, "one", "111"),
        ({"one": ""}, "one", "fallback"),
        ({"one": "111"}, "four", "fallback"),
    ],
)
def test_get_or(data, key, expected):
    assert get_or(data, key, "fallback") == expected


def test_get_or_keeps_non_string_zero_values():
    assert get_or({"n": 0}, "n", "fallback") == 0


@pytest.mark.parametrize(
    ("data", "key", "expected"),
    [
        ({"one": "111"}, "one", "111"),
        ({"one": "111"}, "four", False),
    ],
)
def test_is_set(data, key, expected):
    assert is_set(data, key) == expected


def test_is_set_returns_zero_values():
    assert is_set({"one": ""}, "one") == ""


def test_is_json_valid():
    assert is_json('{"some":"json"}') is True


def test_is_json_null_is_accepted():
    assert is_json("null") is True


@pytest.mark.parametrize("text", ["", "not valid json", "[1, 2]", "42", "NaN"])
def test_is_json_invalid(text):
    with pytest.raises(ValueError):
        is_json(text)


def test_is_json_error_is_decode_error_for_garbage():
    with pytest.raises(json.JSONDecodeError):
        is_json("not valid json")


@pytest.mark.parametrize(
    ("data", "index", "expected"),
    [
        (["111", "222", "333"], 0, ["222", "333"]),
        (["111", "222", "333"], 1, ["111", "333"]),
    ],
)
def test_remove_index(data, index, expected):
    assert remove_index(data, index) == expected


def test_remove_index_out_of_range():
    with pytest.raises(IndexError):
        remove_index(["a"], 1)


@pytest.mark.parametrize(
    ("items", "value", "expected"),
    [
        (["foo", "bar"], "foo", True),
        (["foo", "bar"], "boo", False),
    ],
)
def test_string_in_slice(items, value, expected):
    assert string_in_slice(value, items) is expected