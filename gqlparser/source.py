"""Source documents and positions of tokens within them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Source:
    """A single GraphQL document, such as the contents of a ``.graphql`` file."""

    name: str = ""
    """The file name of the source."""
    input: str = ""
    """The text of the document."""
    built_in: bool = False
    """Whether the source is part of the specification's prelude."""


@dataclass
class Position:
    """Where a token or node sits in its source.

    ``start`` and ``end`` count characters from the beginning of the input;
    ``line`` and ``column`` are one-based.
    """

    start: int = 0
    end: int = 0
    line: int = 0
    column: int = 0
    src: Optional[Source] = None

    @property
    def file_name(self) -> str:
        """The name of the source this position belongs to, or an empty string."""
        return self.src.name if self.src is not None else ""