"""Syntax tree nodes for GraphQL query and schema documents."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, TypeVar, Union

from .source import Position
from .token import _quote


def _position() -> Any:
    """A position field: left out of dumps, comparisons and reprs."""
    return field(default=None, repr=False, compare=False, metadata={"dump": False})


def _reference() -> Any:
    """A field filled in by validation that may point back into the tree."""
    return field(default=None, repr=False, compare=False)


class _StrEnum(str, Enum):
    def __str__(self) -> str:
        return self.value

    def __format__(self, spec: str) -> str:
        return format(self.value, spec)


class DefinitionKind(_StrEnum):
    """The kind of a named type definition."""

    SCALAR = "SCALAR"
    OBJECT = "OBJECT"
    INTERFACE = "INTERFACE"
    UNION = "UNION"
    ENUM = "ENUM"
    INPUT_OBJECT = "INPUT_OBJECT"


class DirectiveLocation(_StrEnum):
    """Where a directive may appear."""

    QUERY = "QUERY"
    MUTATION = "MUTATION"
    SUBSCRIPTION = "SUBSCRIPTION"
    FIELD = "FIELD"
    FRAGMENT_DEFINITION = "FRAGMENT_DEFINITION"
    FRAGMENT_SPREAD = "FRAGMENT_SPREAD"
    INLINE_FRAGMENT = "INLINE_FRAGMENT"

    SCHEMA = "SCHEMA"
    SCALAR = "SCALAR"
    OBJECT = "OBJECT"
    FIELD_DEFINITION = "FIELD_DEFINITION"
    ARGUMENT_DEFINITION = "ARGUMENT_DEFINITION"
    INTERFACE = "INTERFACE"
    UNION = "UNION"
    ENUM = "ENUM"
    ENUM_VALUE = "ENUM_VALUE"
    INPUT_OBJECT = "INPUT_OBJECT"
    INPUT_FIELD_DEFINITION = "INPUT_FIELD_DEFINITION"
    VARIABLE_DEFINITION = "VARIABLE_DEFINITION"


class Operation(_StrEnum):
    """The type of an operation."""

    QUERY = "query"
    MUTATION = "mutation"
    SUBSCRIPTION = "subscription"


class ValueKind(IntEnum):
    """The kind of a literal value."""

    VARIABLE = 0
    INT = 1
    FLOAT = 2
    STRING = 3
    BLOCK = 4
    BOOLEAN = 5
    NULL = 6
    ENUM = 7
    LIST = 8
    OBJECT = 9


# ---------------------------------------------------------------------------
# Types


@dataclass
class Type:
    """A type reference: a named type or a list of another type, optionally non-null."""

    named_type: str = ""
    elem: Optional["Type"] = None
    non_null: bool = False
    position: Optional[Position] = _position()

    def base_name(self) -> str:
        """The name of the innermost named type."""
        if self.named_type:
            return self.named_type
        if self.elem is None:
            return ""
        return self.elem.base_name()

    def is_compatible(self, other: "Type") -> bool:
        """Whether a value of this type may be used where ``other`` is expected."""
        if self.named_type != other.named_type:
            return False
        if self.elem is not None and other.elem is None:
            return False
        if self.elem is not None and not self.elem.is_compatible(other.elem):
            return False
        if other.non_null:
            return self.non_null
        return True

    def __str__(self) -> str:
        suffix = "!" if self.non_null else ""
        if self.named_type:
            return self.named_type + suffix
        return f"[{self.elem}]{suffix}"


def named_type(name: str, position: Optional[Position] = None) -> Type:
    """A nullable named type."""
    return Type(named_type=name, non_null=False, position=position)


def non_null_named_type(name: str, position: Optional[Position] = None) -> Type:
    """A non-null named type."""
    return Type(named_type=name, non_null=True, position=position)


def list_type(elem: Type, position: Optional[Position] = None) -> Type:
    """A nullable list of ``elem``."""
    return Type(elem=elem, non_null=False, position=position)


def non_null_list_type(elem: Type, position: Optional[Position] = None) -> Type:
    """A non-null list of ``elem``."""
    return Type(elem=elem, non_null=True, position=position)


# ---------------------------------------------------------------------------
# Values

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT_MIN = -(2**63)
_INT_MAX = 2**63 - 1
_INFINITE_WORDS = {"inf", "+inf", "-inf", "infinity", "+infinity", "-infinity"}
_TRUE_WORDS = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE_WORDS = {"0", "f", "F", "FALSE", "false", "False"}


def _parse_int(raw: str) -> int:
    if not _INT_PATTERN.fullmatch(raw):
        raise ValueError(f"invalid integer literal: {raw!r}")
    result = int(raw)
    if not _INT_MIN <= result <= _INT_MAX:
        raise ValueError(f"integer literal out of range: {raw!r}")
    return result


def _parse_float(raw: str) -> float:
    if "_" in raw:
        raise ValueError(f"invalid float literal: {raw!r}")
    result = float(raw)
    if math.isinf(result) and raw.lower() not in _INFINITE_WORDS:
        raise ValueError(f"float literal out of range: {raw!r}")
    return result


def _parse_bool(raw: str) -> bool:
    if raw in _TRUE_WORDS:
        return True
    if raw in _FALSE_WORDS:
        return False
    raise ValueError(f"invalid boolean literal: {raw!r}")


def _value_of(value: Optional["Value"], variables: Optional[Mapping[str, Any]]) -> Any:
    return None if value is None else value.to_python(variables)


def _text_of(value: Optional["Value"]) -> str:
    return "<nil>" if value is None else str(value)


@dataclass
class ChildValue:
    """An element of a list value or a field of an object value."""

    name: str = ""
    value: Optional["Value"] = None
    position: Optional[Position] = _position()


@dataclass
class Value:
    """A literal value or a variable reference."""

    raw: str = ""
    children: List[ChildValue] = field(default_factory=list)
    kind: ValueKind = ValueKind.VARIABLE
    position: Optional[Position] = _position()

    definition: Optional["Definition"] = _reference()
    variable_definition: Optional["VariableDefinition"] = _reference()
    expected_type: Optional[Type] = _reference()

    def to_python(self, variables: Optional[Mapping[str, Any]] = None) -> Any:
        """Convert the value to plain Python data, resolving variables.

        Raises ``ValueError`` for malformed numeric or boolean literals.
        """
        variables = variables if variables is not None else {}
        kind = self.kind
        if kind == ValueKind.VARIABLE:
            if self.raw in variables:
                return variables[self.raw]
            definition = self.variable_definition
            if definition is not None and definition.default_value is not None:
                return definition.default_value.to_python(variables)
            return None
        if kind == ValueKind.INT:
            return _parse_int(self.raw)
        if kind == ValueKind.FLOAT:
            return _parse_float(self.raw)
        if kind in (ValueKind.STRING, ValueKind.BLOCK, ValueKind.ENUM):
            return self.raw
        if kind == ValueKind.BOOLEAN:
            return _parse_bool(self.raw)
        if kind == ValueKind.NULL:
            return None
        if kind == ValueKind.LIST:
            return [_value_of(child.value, variables) for child in self.children]
        if kind == ValueKind.OBJECT:
            return {child.name: _value_of(child.value, variables) for child in self.children}
        raise ValueError(f"unknown value kind {kind}")

    def __str__(self) -> str:
        kind = self.kind
        if kind == ValueKind.VARIABLE:
            return "$" + self.raw
        if kind in (
            ValueKind.INT,
            ValueKind.FLOAT,
            ValueKind.ENUM,
            ValueKind.BOOLEAN,
            ValueKind.NULL,
        ):
            return self.raw
        if kind in (ValueKind.STRING, ValueKind.BLOCK):
            return _quote(self.raw)
        if kind == ValueKind.LIST:
            return "[" + ",".join(_text_of(child.value) for child in self.children) + "]"
        if kind == ValueKind.OBJECT:
            return (
                "{"
                + ",".join(f"{child.name}:{_text_of(child.value)}" for child in self.children)
                + "}"
            )
        raise ValueError(f"unknown value kind {kind}")


# ---------------------------------------------------------------------------
# Type system definitions


@dataclass
class Argument:
    """An argument passed to a field or directive."""

    name: str = ""
    value: Optional[Value] = None
    position: Optional[Position] = _position()


@dataclass
class ArgumentDefinition:
    """An argument declared on a field or directive definition."""

    description: str = ""
    name: str = ""
    default_value: Optional[Value] = None
    type: Optional[Type] = None
    directives: List["Directive"] = field(default_factory=list)
    position: Optional[Position] = _position()


@dataclass
class Directive:
    """A directive applied to a node."""

    name: str = ""
    arguments: List[Argument] = field(default_factory=list)
    position: Optional[Position] = _position()

    parent_definition: Optional["Definition"] = _reference()
    definition: Optional["DirectiveDefinition"] = _reference()
    location: Optional[DirectiveLocation] = _reference()

    def argument_map(self, variables: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Resolve the directive's arguments against its definition."""
        if self.definition is None:
            raise ValueError(f"directive @{self.name} has no definition")
        return argument_map(self.definition.arguments, self.arguments, variables)


@dataclass
class FieldDefinition:
    """A field of an object, interface or input object type."""

    description: str = ""
    name: str = ""
    arguments: List[ArgumentDefinition] = field(default_factory=list)
    default_value: Optional[Value] = None
    type: Optional[Type] = None
    directives: List[Directive] = field(default_factory=list)
    position: Optional[Position] = _position()


@dataclass
class EnumValueDefinition:
    """One value of an enum type."""

    description: str = ""
    name: str = ""
    directives: List[Directive] = field(default_factory=list)
    position: Optional[Position] = _position()


@dataclass
class Definition:
    """A named type definition or extension of any kind."""

    kind: Optional[DefinitionKind] = None
    description: str = ""
    name: str = ""
    directives: List[Directive] = field(default_factory=list)
    interfaces: List[str] = field(default_factory=list)
    fields: List[FieldDefinition] = field(default_factory=list)
    types: List[str] = field(default_factory=list)
    enum_values: List[EnumValueDefinition] = field(default_factory=list)

    position: Optional[Position] = _position()
    built_in: bool = field(default=False, compare=False, metadata={"dump": False})

    def is_leaf_type(self) -> bool:
        return self.kind in (DefinitionKind.ENUM, DefinitionKind.SCALAR)

    def is_abstract_type(self) -> bool:
        return self.kind in (DefinitionKind.INTERFACE, DefinitionKind.UNION)

    def is_composite_type(self) -> bool:
        return self.kind in (
            DefinitionKind.OBJECT,
            DefinitionKind.INTERFACE,
            DefinitionKind.UNION,
        )

    def is_input_type(self) -> bool:
        return self.kind in (
            DefinitionKind.SCALAR,
            DefinitionKind.ENUM,
            DefinitionKind.INPUT_OBJECT,
        )

    def one_of(self, *args: str) -> bool:
        """Whether the definition's name is one of ``args``."""
        return self.name in args


@dataclass
class DirectiveDefinition:
    """A ``directive @name`` declaration."""

    description: str = ""
    name: str = ""
    arguments: List[ArgumentDefinition] = field(default_factory=list)
    locations: List[DirectiveLocation] = field(default_factory=list)
    is_repeatable: bool = False
    position: Optional[Position] = _position()


@dataclass
class OperationTypeDefinition:
    """An operation-to-type binding inside a schema definition."""

    operation: Optional[Operation] = None
    type: str = ""
    position: Optional[Position] = _position()


@dataclass
class SchemaDefinition:
    """A ``schema { ... }`` block or its extension."""

    description: str = ""
    directives: List[Directive] = field(default_factory=list)
    operation_types: List[OperationTypeDefinition] = field(default_factory=list)
    position: Optional[Position] = _position()


# ---------------------------------------------------------------------------
# Executable definitions


@dataclass
class VariableDefinition:
    """A variable declared by an operation or fragment."""

    variable: str = ""
    type: Optional[Type] = None
    default_value: Optional[Value] = None
    directives: List[Directive] = field(default_factory=list)
    position: Optional[Position] = _position()

    definition: Optional[Definition] = _reference()
    used: bool = field(default=False, compare=False, metadata={"dump": False})


@dataclass
class Field:
    """A field selection."""

    alias: str = ""
    name: str = ""
    arguments: List[Argument] = field(default_factory=list)
    directives: List[Directive] = field(default_factory=list)
    selection_set: List["Selection"] = field(default_factory=list)
    position: Optional[Position] = _position()

    definition: Optional[FieldDefinition] = _reference()
    object_definition: Optional[Definition] = _reference()

    def argument_map(self, variables: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Resolve the field's arguments against its definition."""
        if self.definition is None:
            raise ValueError(f"field {self.name} has no definition")
        return argument_map(self.definition.arguments, self.arguments, variables)


@dataclass
class FragmentSpread:
    """A ``...Name`` selection."""

    name: str = ""
    directives: List[Directive] = field(default_factory=list)

    object_definition: Optional[Definition] = _reference()
    definition: Optional["FragmentDefinition"] = _reference()

    position: Optional[Position] = _position()


@dataclass
class InlineFragment:
    """A ``... on Type { ... }`` selection."""

    type_condition: str = ""
    directives: List[Directive] = field(default_factory=list)
    selection_set: List["Selection"] = field(default_factory=list)

    object_definition: Optional[Definition] = _reference()

    position: Optional[Position] = _position()


Selection = Union[Field, FragmentSpread, InlineFragment]


@dataclass
class FragmentDefinition:
    """A named fragment."""

    name: str = ""
    variable_definition: List[VariableDefinition] = field(default_factory=list)
    type_condition: str = ""
    directives: List[Directive] = field(default_factory=list)
    selection_set: List[Selection] = field(default_factory=list)

    definition: Optional[Definition] = _reference()

    position: Optional[Position] = _position()


@dataclass
class OperationDefinition:
    """A query, mutation or subscription."""

    operation: Optional[Operation] = None
    name: str = ""
    variable_definitions: List[VariableDefinition] = field(default_factory=list)
    directives: List[Directive] = field(default_factory=list)
    selection_set: List[Selection] = field(default_factory=list)
    position: Optional[Position] = _position()


# ---------------------------------------------------------------------------
# Documents and schemas


@dataclass
class QueryDocument:
    """An executable document."""

    operations: List[OperationDefinition] = field(default_factory=list)
    fragments: List[FragmentDefinition] = field(default_factory=list)
    position: Optional[Position] = _position()


@dataclass
class SchemaDocument:
    """A type system document."""

    schema: List[SchemaDefinition] = field(default_factory=list)
    schema_extension: List[SchemaDefinition] = field(default_factory=list)
    directives: List[DirectiveDefinition] = field(default_factory=list)
    definitions: List[Definition] = field(default_factory=list)
    extensions: List[Definition] = field(default_factory=list)
    position: Optional[Position] = _position()

    def merge(self, other: "SchemaDocument") -> None:
        """Append every definition of ``other`` to this document."""
        self.schema.extend(other.schema)
        self.schema_extension.extend(other.schema_extension)
        self.directives.extend(other.directives)
        self.definitions.extend(other.definitions)
        self.extensions.extend(other.extensions)


@dataclass
class Schema:
    """A built schema: its root types, named types and directives."""

    query: Optional[Definition] = None
    mutation: Optional[Definition] = None
    subscription: Optional[Definition] = None

    types: Dict[str, Definition] = field(default_factory=dict)
    directives: Dict[str, DirectiveDefinition] = field(default_factory=dict)

    possible_types: Dict[str, List[Definition]] = field(default_factory=dict)
    implements: Dict[str, List[Definition]] = field(default_factory=dict)

    description: str = ""

    def add_possible_type(self, name: str, definition: Definition) -> None:
        self.possible_types.setdefault(name, []).append(definition)

    def get_possible_types(self, definition: Definition) -> List[Definition]:
        """All definitions that belong to the given interface or union."""
        return list(self.possible_types.get(definition.name, []))

    def add_implements(self, name: str, definition: Definition) -> None:
        self.implements.setdefault(name, []).append(definition)

    def get_implements(self, definition: Definition) -> List[Definition]:
        """All interfaces and unions that the given definition satisfies."""
        return list(self.implements.get(definition.name, []))


# ---------------------------------------------------------------------------
# Lookups

T = TypeVar("T")


def find_named(items: Iterable[T], name: str) -> Optional[T]:
    """The first item whose ``name`` equals ``name``, or ``None``."""
    return next((item for item in items if getattr(item, "name") == name), None)


def find_all_named(items: Iterable[T], name: str) -> List[T]:
    """Every item whose ``name`` equals ``name``."""
    return [item for item in items if getattr(item, "name") == name]


def find_operation(
    operations: Sequence[OperationDefinition], name: str
) -> Optional[OperationDefinition]:
    """The operation called ``name``; an empty name picks a lone operation."""
    if name == "" and len(operations) == 1:
        return operations[0]
    return find_named(operations, name)


def find_variable(
    definitions: Iterable[VariableDefinition], name: str
) -> Optional[VariableDefinition]:
    """The variable definition for ``$name``, or ``None``."""
    return next((item for item in definitions if item.variable == name), None)


def find_operation_type(
    definitions: Iterable[OperationTypeDefinition], type_name: str
) -> Optional[OperationTypeDefinition]:
    """The operation type binding whose type is ``type_name``, or ``None``."""
    return next((item for item in definitions if item.type == type_name), None)


def child_value(children: Iterable[ChildValue], name: str) -> Optional[Value]:
    """The value of the object field called ``name``, or ``None``."""
    return next((child.value for child in children if child.name == name), None)


def argument_map(
    definitions: Iterable[ArgumentDefinition],
    arguments: Sequence[Argument],
    variables: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """Resolve supplied arguments, variables and defaults into a dict keyed by name.

    Arguments that have neither a value nor a default are left out.
    """
    variables = variables if variables is not None else {}
    result: Dict[str, Any] = {}
    for definition in definitions:
        value: Any = None
        has_value = False

        argument = find_named(arguments, definition.name)
        if argument is not None:
            if argument.value is not None and argument.value.kind == ValueKind.VARIABLE:
                if argument.value.raw in variables:
                    value = variables[argument.value.raw]
                    has_value = True
            else:
                value = _value_of(argument.value, variables)
                has_value = True

        if not has_value and definition.default_value is not None:
            value = definition.default_value.to_python(variables)
            has_value = True

        if has_value:
            result[definition.name] = value
    return result