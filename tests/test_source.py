from dataclasses import FrozenInstanceError, replace

import pytest

from gqlparser.source import Position, Source


def test_source_holds_given_fields():
    src = Source(name="schema.graphql", input="type Query { a: Int }", built_in=True)
    assert src.name == "schema.graphql"
    assert src.input == "type Query { a: Int }"
    assert src.built_in is True


def test_source_defaults_are_empty():
    src = Source()
    assert (src.name, src.input, src.built_in) == ("", "", False)


def test_source_is_immutable_and_hashable():
    src = Source(name="a", input="{ a }")
    with pytest.raises(FrozenInstanceError):
        src.name = "b"  # type: ignore[misc]
    assert {src: 1}[Source(name="a", input="{ a }")] == 1


def test_position_refers_to_its_source():
    src = Source(name="spec", input="query")
    pos = Position(start=0, end=5, line=1, column=1, src=src)
    assert pos.src is src
    assert pos.file_name == "spec"


def test_position_without_source_has_empty_file_name():
    assert Position(line=3, column=4).file_name == ""


def test_position_replace_round_trip():
    src = Source(name="spec", input="{ a }")
    pos = Position(start=2, end=3, line=1, column=3, src=src)
    moved = replace(pos, start=pos.start - 1, end=pos.end + 1)
    assert (moved.start, moved.end) == (pos.start - 1, pos.end + 1)
    assert replace(moved, start=pos.start, end=pos.end) == pos