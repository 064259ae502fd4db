import json

import pytest

from gqlparser.path import format_path, parse_path_json, path_to_json


@pytest.mark.parametrize(
    "path, expected",
    [
        (["a", 2, "c"], "a[2].c"),
        ([], ""),
        ([1, "b"], "[1].b"),
    ],
)
def test_format_path(path, expected):
    assert format_path(path) == expected


@pytest.mark.parametrize(
    "path, expected",
    [
        (["a", 2, "c"], '["a",2,"c"]'),
        ([], "[]"),
        ([1, "b"], '[1,"b"]'),
    ],
)
def test_path_to_json(path, expected):
    assert path_to_json(path) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ('["a",2,"c"]', ["a", 2, "c"]),
        ("[]", []),
        ('[1,"b"]', [1, "b"]),
    ],
)
def test_parse_path_json(text, expected):
    assert parse_path_json(text) == expected


def test_parse_path_json_truncates_floats():
    result = parse_path_json("[2.0]")
    assert result == [2]
    assert isinstance(result[0], int)


@pytest.mark.parametrize("text", ["[true]", "[null]", '[{"a":1}]', "[[1]]"])
def test_parse_path_json_rejects_unknown_elements(text):
    with pytest.raises(ValueError):
        parse_path_json(text)


def test_parse_path_json_rejects_non_array():
    with pytest.raises(ValueError):
        parse_path_json('"a"')


def test_parse_path_json_rejects_invalid_json():
    with pytest.raises(json.JSONDecodeError):
        parse_path_json("[")


def test_json_round_trip():
    path = ["hero", 0, "friends", 3, "name"]
    assert parse_path_json(path_to_json(path)) == path


@pytest.mark.parametrize("bad", [[True], [1.5], [None]])
def test_format_path_rejects_unknown_elements(bad):
    with pytest.raises(TypeError):
        format_path(bad)
    with pytest.raises(TypeError):
        path_to_json(bad)