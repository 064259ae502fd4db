"""Response paths: sequences of field names and list indices."""

from __future__ import annotations

import json
from typing import Iterable, List, Union

PathElement = Union[str, int]
Path = List[PathElement]


def _check_element(element: object) -> None:
    if isinstance(element, bool) or not isinstance(element, (str, int)):
        raise TypeError(f"unknown type: {type(element).__name__}")


def format_path(path: Iterable[PathElement]) -> str:
    """Render a path such as ``["a", 2, "c"]`` as ``a[2].c``."""
    parts = []
    for position, element in enumerate(path):
        _check_element(element)
        if isinstance(element, int):
            parts.append(f"[{element}]")
        else:
            if position != 0:
                parts.append(".")
            parts.append(element)
    return "".join(parts)


def path_to_json(path: Iterable[PathElement]) -> str:
    """Encode a path as a compact JSON array."""
    elements = list(path)
    for element in elements:
        _check_element(element)
    return json.dumps(elements, separators=(",", ":"), ensure_ascii=False)


def parse_path_json(text: Union[str, bytes]) -> Path:
    """Decode a JSON array of names and indices into a path.

    Numbers are truncated to integers; any other element type raises
    ``ValueError``.
    """
    values = json.loads(text)
    if not isinstance(values, list):
        raise ValueError(f"path must be a JSON array, got {type(values).__name__}")
    path: Path = []
    for value in values:
        if isinstance(value, bool):
            raise ValueError("unknown path element type: bool")
        if isinstance(value, str):
            path.append(value)
        elif isinstance(value, (int, float)):
            path.append(int(value))
        else:
            raise ValueError(f"unknown path element type: {type(value).__name__}")
    return path