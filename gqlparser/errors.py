"""The standard GraphQL error type and lists of errors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional, Type, TypeVar, overload

from .path import Path, format_path
from .source import Position

E = TypeVar("E", bound=BaseException)


@dataclass
class Location:
    """A one-based line and column in a source."""

    line: int = 0
    column: int = 0

    def to_dict(self) -> Dict[str, int]:
        """Return the JSON form, leaving out zero fields."""
        result: Dict[str, int] = {}
        if self.line:
            result["line"] = self.line
        if self.column:
            result["column"] = self.column
        return result


class GraphQLError(Exception):
    """An error as described by the GraphQL specification."""

    def __init__(
        self,
        message: str = "",
        *,
        path: Optional[Path] = None,
        locations: Optional[List[Location]] = None,
        extensions: Optional[Dict[str, Any]] = None,
        rule: str = "",
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path: Path = list(path) if path else []
        self.locations: List[Location] = list(locations) if locations else []
        self.extensions: Dict[str, Any] = dict(extensions) if extensions else {}
        self.rule = rule
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def set_file(self, file: str) -> None:
        """Record the file name in the extensions, ignoring empty names."""
        if not file:
            return
        self.extensions["file"] = file

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON form of the error, leaving out empty members."""
        result: Dict[str, Any] = {"message": self.message}
        if self.path:
            result["path"] = list(self.path)
        if self.locations:
            result["locations"] = [loc.to_dict() for loc in self.locations]
        if self.extensions:
            result["extensions"] = dict(self.extensions)
        return result

    def __str__(self) -> str:
        file = self.extensions.get("file")
        filename = file if isinstance(file, str) and file else "input"
        text = filename
        if self.locations:
            text += f":{self.locations[0].line}"
        text += ": "
        path_text = format_path(self.path)
        if path_text:
            text += path_text + " "
        return text + self.message

    def __repr__(self) -> str:
        return f"GraphQLError({self.message!r}, path={self.path!r}, locations={self.locations!r})"


class ErrorList(Exception):
    """Several GraphQL errors raised together."""

    def __init__(self, errors: Iterable[GraphQLError] = ()) -> None:
        self.errors: List[GraphQLError] = list(errors)
        super().__init__(self.errors)

    def __str__(self) -> str:
        return "".join(f"{err}\n" for err in self.errors)

    def __repr__(self) -> str:
        return f"ErrorList({self.errors!r})"

    def __iter__(self) -> Iterator[GraphQLError]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    def __bool__(self) -> bool:
        return bool(self.errors)

    @overload
    def __getitem__(self, index: int) -> GraphQLError: ...

    @overload
    def __getitem__(self, index: slice) -> List[GraphQLError]: ...

    def __getitem__(self, index):
        return self.errors[index]

    def append(self, error: GraphQLError) -> None:
        self.errors.append(error)

    def extend(self, errors: Iterable[GraphQLError]) -> None:
        self.errors.extend(errors)

    def find(self, error_type: Type[E]) -> Optional[E]:
        """Return the first error, or wrapped cause, that is an instance of ``error_type``."""
        for err in self.errors:
            current: Optional[BaseException] = err
            seen = set()
            while current is not None and id(current) not in seen:
                if isinstance(current, error_type):
                    return current
                seen.add(id(current))
                current = getattr(current, "cause", None) or current.__cause__
        return None


def wrap_path(path: Path, err: BaseException) -> GraphQLError:
    """Wrap any exception as a GraphQL error at ``path``."""
    return GraphQLError(str(err), path=path, cause=err)


def error_path(path: Path, message: str) -> GraphQLError:
    """Create an error attached to a response path."""
    return GraphQLError(message, path=path)


def error_pos(position: Position, message: str) -> GraphQLError:
    """Create an error at the given source position."""
    return error_loc(position.file_name, position.line, position.column, message)


def error_loc(file: str, line: int, column: int, message: str) -> GraphQLError:
    """Create an error at a line and column, recording the file if it has a name."""
    extensions = {"file": file} if file else None
    return GraphQLError(
        message,
        extensions=extensions,
        locations=[Location(line=line, column=column)],
    )