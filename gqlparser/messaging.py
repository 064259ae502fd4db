"""Helpers for building validation error messages."""

from __future__ import annotations

from typing import Callable, Iterable, Optional

from .errors import GraphQLError, Location
from .source import Position

ErrorOption = Callable[[GraphQLError], None]

_MAX_LIST_ITEMS = 5


def or_list(items: Iterable[str]) -> str:
    """Given ``["A", "B", "C"]`` return ``"A, B, or C"``; at most five items are kept."""
    shown = list(items)[:_MAX_LIST_ITEMS]
    if len(shown) == 2:
        return f"{shown[0]} or {shown[1]}"
    if len(shown) <= 1:
        return "".join(shown)
    return ", ".join(shown[:-1]) + ", or " + shown[-1]


def quoted_or_list(items: Iterable[str]) -> str:
    """Given ``["A", "B", "C"]`` return ``'"A", "B", or "C"'``."""
    return or_list(f'"{item}"' for item in items)


def message(text: str) -> ErrorOption:
    """An option that appends ``text`` to the error message."""

    def apply(err: GraphQLError) -> None:
        err.message += text

    return apply


def at(position: Optional[Position]) -> ErrorOption:
    """An option that adds the position as a location and records its file."""

    def apply(err: GraphQLError) -> None:
        if position is None:
            return
        err.locations.append(Location(line=position.line, column=position.column))
        if position.file_name:
            err.set_file(position.file_name)

    return apply


def suggest(suggestion: str) -> ErrorOption:
    """An option that appends a "Did you mean ...?" hint."""

    def apply(err: GraphQLError) -> None:
        err.message += f" Did you mean {suggestion}?"

    return apply