"""Pretty-printing of schemas, schema documents and query documents as GraphQL text."""

from __future__ import annotations

import io
from typing import Iterable, Optional, TextIO

from .ast import (
    Argument,
    ArgumentDefinition,
    Definition,
    DefinitionKind,
    Directive,
    DirectiveDefinition,
    DirectiveLocation,
    EnumValueDefinition,
    Field,
    FieldDefinition,
    FragmentDefinition,
    FragmentSpread,
    InlineFragment,
    OperationDefinition,
    OperationTypeDefinition,
    QueryDocument,
    Schema,
    SchemaDefinition,
    SchemaDocument,
    Type,
    Value,
    VariableDefinition,
)

_KIND_KEYWORDS = {
    DefinitionKind.SCALAR: "scalar",
    DefinitionKind.OBJECT: "type",
    DefinitionKind.INTERFACE: "interface",
    DefinitionKind.UNION: "union",
    DefinitionKind.ENUM: "enum",
    DefinitionKind.INPUT_OBJECT: "input",
}


class Formatter:
    """Writes GraphQL text for syntax trees to a text stream.

    Built-in definitions (those from the prelude) and fields whose names start
    with ``__`` are left out unless ``emit_builtin`` is set.
    """

    def __init__(self, writer: TextIO, emit_builtin: bool = False) -> None:
        self._writer = writer
        self.emit_builtin = emit_builtin
        self._indent = 0
        self._pad_next = False
        self._line_head = False

    # -- low-level output ----------------------------------------------------

    def _emit(self, text: str) -> None:
        self._writer.write(text)

    def _write_indent(self) -> Formatter:
        if self._line_head:
            self._emit("\t" * self._indent)
        self._line_head = False
        self._pad_next = False
        return self

    def _newline(self) -> Formatter:
        self._emit("\n")
        self._line_head = True
        self._pad_next = False
        return self

    def _word(self, word: str) -> Formatter:
        if self._line_head:
            self._write_indent()
        if self._pad_next:
            self._emit(" ")
        self._emit(word.strip())
        self._pad_next = True
        return self

    def _string(self, text: str) -> Formatter:
        if self._line_head:
            self._write_indent()
        if self._pad_next:
            self._emit(" ")
        self._emit(text)
        self._pad_next = False
        return self

    def _description(self, text: str) -> Formatter:
        if not text:
            return self
        self._string('"""')._newline()
        for line in text.split("\n"):
            self._string(line)._newline()
        self._string('"""')._newline()
        return self

    def _no_padding(self) -> Formatter:
        self._pad_next = False
        return self

    def _need_padding(self) -> Formatter:
        self._pad_next = True
        return self

    def _colon(self) -> Formatter:
        return self._no_padding()._string(":")._need_padding()

    # -- entry points --------------------------------------------------------

    def format_schema(self, schema: Optional[Schema]) -> None:
        """Write a loaded schema: root operation types, directives and types, sorted by name."""
        if schema is None:
            return

        in_schema = False
        roots = (
            ("query", schema.query, "Query"),
            ("mutation", schema.mutation, "Mutation"),
            ("subscription", schema.subscription, "Subscription"),
        )
        for keyword, definition, default_name in roots:
            if definition is None or definition.name == default_name:
                continue
            if not in_schema:
                in_schema = True
                self._word("schema")._string("{")._newline()
                self._indent += 1
            self._word(keyword)._colon()
            self._word(definition.name)._newline()
        if in_schema:
            self._indent -= 1
            self._string("}")._newline()

        directives = schema.directives or {}
        for name in sorted(directives):
            self._directive_definition(directives[name])

        types = schema.types or {}
        for name in sorted(types):
            self._definition(types[name], False)

    def format_schema_document(self, document: Optional[SchemaDocument]) -> None:
        """Write a parsed type system document."""
        if document is None:
            return
        self._schema_definitions(document.schema, False)
        self._schema_definitions(document.schema_extension, True)
        for directive in document.directives:
            self._directive_definition(directive)
        for definition in document.definitions:
            self._definition(definition, False)
        for definition in document.extensions:
            self._definition(definition, True)

    def format_query_document(self, document: Optional[QueryDocument]) -> None:
        """Write a parsed executable document: operations first, then fragments."""
        if document is None:
            return
        for operation in document.operations:
            self._operation_definition(operation)
        for fragment in document.fragments:
            self._fragment_definition(fragment)

    # -- type system ---------------------------------------------------------

    def _schema_definitions(self, definitions: Iterable[SchemaDefinition], extension: bool) -> None:
        definitions = list(definitions)
        if not definitions:
            return
        if extension:
            self._word("extend")
        self._word("schema")._string("{")._newline()
        self._indent += 1
        for definition in definitions:
            self._description(definition.description)
            self._directives(definition.directives)
            for operation_type in definition.operation_types:
                self._operation_type_definition(operation_type)
        self._indent -= 1
        self._string("}")._newline()

    def _operation_type_definition(self, definition: OperationTypeDefinition) -> None:
        operation = definition.operation.value if definition.operation is not None else ""
        self._word(operation)._colon()
        self._word(definition.type)
        self._newline()

    def _field_list(self, fields: Iterable[FieldDefinition]) -> None:
        fields = list(fields)
        if not fields:
            return
        self._string("{")._newline()
        self._indent += 1
        for field in fields:
            self._field_definition(field)
        self._indent -= 1
        self._string("}")

    def _field_definition(self, field: FieldDefinition) -> None:
        if not self.emit_builtin and field.name.startswith("__"):
            return
        self._description(field.description)
        self._word(field.name)._no_padding()
        self._argument_definitions(field.arguments)
        self._colon()
        self._type(field.type)
        if field.default_value is not None:
            self._word("=")
            self._value(field.default_value)
        self._directives(field.directives)
        self._newline()

    def _argument_definitions(self, arguments: Iterable[ArgumentDefinition]) -> None:
        arguments = list(arguments)
        if not arguments:
            return
        self._string("(")
        for index, argument in enumerate(arguments):
            self._argument_definition(argument)
            if index != len(arguments) - 1:
                self._no_padding()._word(",")
        self._no_padding()._string(")")._need_padding()

    def _argument_definition(self, argument: ArgumentDefinition) -> None:
        if argument.description:
            self._newline()
            self._indent += 1
            self._description(argument.description)

        self._word(argument.name)._colon()
        self._type(argument.type)
        if argument.default_value is not None:
            self._word("=")
            self._value(argument.default_value)

        if argument.description:
            self._indent -= 1
            self._newline()

    def _directive_definition(self, definition: DirectiveDefinition) -> None:
        position = definition.position
        if (
            not self.emit_builtin
            and position is not None
            and position.src is not None
            and position.src.built_in
        ):
            return

        self._description(definition.description)
        self._word("directive")._string("@")._word(definition.name)

        if definition.arguments:
            self._no_padding()
            self._argument_definitions(definition.arguments)

        locations = list(definition.locations)
        if locations:
            self._word("on")
            for index, location in enumerate(locations):
                self._directive_location(location)
                if index != len(locations) - 1:
                    self._word("|")

        self._newline()

    def _directive_location(self, location: DirectiveLocation) -> None:
        self._word(location.value)

    def _definition(self, definition: Definition, extend: bool) -> None:
        if not self.emit_builtin and definition.built_in:
            return

        self._description(definition.description)
        if extend:
            self._word("extend")

        keyword = _KIND_KEYWORDS.get(definition.kind)
        if keyword is not None:
            self._word(keyword)._word(definition.name)

        if definition.interfaces:
            self._word("implements")._word(" & ".join(definition.interfaces))

        self._directives(definition.directives)

        if definition.types:
            self._word("=")._word(" | ".join(definition.types))

        self._field_list(definition.fields)
        self._enum_values(definition.enum_values)
        self._newline()

    def _enum_values(self, values: Iterable[EnumValueDefinition]) -> None:
        values = list(values)
        if not values:
            return
        self._string("{")._newline()
        self._indent += 1
        for value in values:
            self._description(value.description)
            self._word(value.name)
            self._directives(value.directives)
            self._newline()
        self._indent -= 1
        self._string("}")

    # -- executable documents ------------------------------------------------

    def _operation_definition(self, definition: OperationDefinition) -> None:
        operation = definition.operation.value if definition.operation is not None else ""
        self._word(operation)
        if definition.name:
            self._word(definition.name)
        self._variable_definitions(definition.variable_definitions)
        self._directives(definition.directives)
        if definition.selection_set:
            self._selection_set(definition.selection_set)
            self._newline()

    def _directives(self, directives: Iterable[Directive]) -> None:
        for directive in directives:
            self._string("@")._word(directive.name)
            self._arguments(directive.arguments)

    def _arguments(self, arguments: Iterable[Argument]) -> None:
        arguments = list(arguments)
        if not arguments:
            return
        self._no_padding()._string("(")
        for index, argument in enumerate(arguments):
            self._word(argument.name)._colon()
            self._string(str(argument.value))
            if index != len(arguments) - 1:
                self._no_padding()._word(",")
        self._string(")")._need_padding()

    def _fragment_definition(self, definition: FragmentDefinition) -> None:
        self._word("fragment")._word(definition.name)
        self._variable_definitions(definition.variable_definition)
        self._word("on")._word(definition.type_condition)
        self._directives(definition.directives)
        if definition.selection_set:
            self._selection_set(definition.selection_set)
            self._newline()

    def _variable_definitions(self, definitions: Iterable[VariableDefinition]) -> None:
        definitions = list(definitions)
        if not definitions:
            return
        self._string("(")
        for index, definition in enumerate(definitions):
            self._string("$")._word(definition.variable)._colon()
            self._type(definition.type)
            if definition.default_value is not None:
                self._word("=")
                self._value(definition.default_value)
            if index != len(definitions) - 1:
                self._no_padding()._word(",")
        self._no_padding()._string(")")._need_padding()

    def _selection_set(self, selections: Iterable[object]) -> None:
        selections = list(selections)
        if not selections:
            return
        self._string("{")._newline()
        self._indent += 1
        for selection in selections:
            self._selection(selection)
        self._indent -= 1
        self._string("}")

    def _selection(self, selection: object) -> None:
        if isinstance(selection, Field):
            self._field(selection)
        elif isinstance(selection, FragmentSpread):
            self._word("...")._word(selection.name)
            self._directives(selection.directives)
        elif isinstance(selection, InlineFragment):
            self._word("...")
            if selection.type_condition:
                self._word("on")._word(selection.type_condition)
            self._directives(selection.directives)
            self._selection_set(selection.selection_set)
        else:
            raise TypeError(f"unknown Selection type: {type(selection).__name__}")
        self._newline()

    def _field(self, field: Field) -> None:
        if field.alias and field.alias != field.name:
            self._word(field.alias)._colon()
        self._word(field.name)
        if field.arguments:
            self._no_padding()
            self._arguments(field.arguments)
            self._need_padding()
        self._directives(field.directives)
        self._selection_set(field.selection_set)

    def _type(self, reference: Type) -> None:
        self._word(str(reference))

    def _value(self, value: Value) -> None:
        self._string(str(value))


def format_schema(schema: Optional[Schema]) -> str:
    """Return the GraphQL text of a loaded schema."""
    buffer = io.StringIO()
    Formatter(buffer).format_schema(schema)
    return buffer.getvalue()


def format_schema_document(document: Optional[SchemaDocument]) -> str:
    """Return the GraphQL text of a type system document."""
    buffer = io.StringIO()
    Formatter(buffer).format_schema_document(document)
    return buffer.getvalue()


def format_query_document(document: Optional[QueryDocument]) -> str:
    """Return the GraphQL text of an executable document."""
    buffer = io.StringIO()
    Formatter(buffer).format_query_document(document)
    return buffer.getvalue()