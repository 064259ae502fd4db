"""A stable, human-readable text form of syntax trees, used for comparisons."""

from __future__ import annotations

import dataclasses
import re
from enum import Enum
from typing import Any, List, Optional

from .ast import Type, Value
from .token import _quote

_LIST_ANNOTATION = re.compile(r"List\[\s*['\"]?(?:[\w.]*\.)?(\w+)['\"]?\s*\]")
_BUILTIN_LABELS = {"str": "string", "bool": "bool", "int": "int", "float": "float64"}


def _type_label(name: str) -> str:
    return _BUILTIN_LABELS.get(name, name)


def _element_label(annotation: Any) -> Optional[str]:
    """The element type name of a list field's annotation, if it has one."""
    text = annotation if isinstance(annotation, str) else str(annotation)
    match = _LIST_ANNOTATION.search(text)
    return _type_label(match.group(1)) if match else None


def _field_label(name: str) -> str:
    return "".join(part.capitalize() for part in name.split("_"))


def _is_zero(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (bool, int, float, str)):
        return not value
    if isinstance(value, (list, tuple)):
        return all(_is_zero(item) for item in value)
    if isinstance(value, dict):
        return not value
    return False


class _Dumper:
    def __init__(self) -> None:
        self._parts: List[str] = []
        self._indent = 0

    def text(self) -> str:
        return "".join(self._parts)

    def _newline(self) -> None:
        self._parts.append("\n" + "  " * self._indent)

    def write(self, node: Any, element_label: Optional[str] = None) -> None:
        if isinstance(node, (Type, Value)):
            self._parts.append(str(node))
        elif node is None:
            self._parts.append("nil")
        elif isinstance(node, bool):
            self._parts.append("true" if node else "false")
        elif isinstance(node, Enum):
            if isinstance(node.value, str):
                self._parts.append(f"{type(node).__name__}({_quote(node.value)})")
            else:
                self._parts.append(str(node.value))
        elif isinstance(node, int):
            self._parts.append(str(node))
        elif isinstance(node, float):
            self._parts.append(f"{node:.2f}")
        elif isinstance(node, str):
            self._parts.append(_quote(node))
        elif isinstance(node, (list, tuple)):
            self._write_list(node, element_label)
        elif dataclasses.is_dataclass(node) and not isinstance(node, type):
            self._write_struct(node)
        else:
            raise TypeError(f"unsupported kind: {type(node).__name__}")

    def _write_list(self, items: Any, element_label: Optional[str]) -> None:
        if element_label is None:
            element_label = _type_label(type(items[0]).__name__) if items else ""
        self._parts.append(f"[{element_label}]")
        for item in items:
            self._newline()
            self._parts.append("- ")
            self._indent += 1
            self.write(item)
            self._indent -= 1

    def _write_struct(self, node: Any) -> None:
        self._parts.append(f"<{type(node).__name__}>")
        self._indent += 1
        for spec in dataclasses.fields(node):
            if not spec.metadata.get("dump", True):
                continue
            value = getattr(node, spec.name)
            if _is_zero(value):
                continue
            self._newline()
            self._parts.append(_field_label(spec.name) + ": ")
            self.write(value, _element_label(spec.type))
        self._indent -= 1


def dump(node: Any) -> str:
    """Render a syntax tree node as indented text, leaving out empty fields and positions."""
    dumper = _Dumper()
    dumper.write(node)
    return dumper.text()