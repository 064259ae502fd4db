"""The block string value algorithm from the GraphQL specification."""

from __future__ import annotations

from typing import Optional


def _leading_whitespace(line: str) -> Optional[int]:
    """Count leading spaces and tabs, or ``None`` if the line is all whitespace."""
    for index, char in enumerate(line):
        if char not in " \t":
            return index
    return None


def block_string_value(raw: str) -> str:
    """Remove common indentation and blank leading and trailing lines from a block string."""
    lines = raw.split("\n")

    indents = (_leading_whitespace(line) for line in lines)
    common_indent = min((i for i in indents if i is not None), default=None)

    if common_indent is not None:
        lines = lines[:1] + [
            "" if len(line) < common_indent else line[common_indent:] for line in lines[1:]
        ]

    start, end = 0, len(lines)
    while start < end and _leading_whitespace(lines[start]) is None:
        start += 1
    while start < end and _leading_whitespace(lines[end - 1]) is None:
        end -= 1

    return "\n".join(lines[start:end])