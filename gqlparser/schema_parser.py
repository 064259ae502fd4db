"""Parsing of GraphQL type system (schema) documents."""

from __future__ import annotations

from typing import List, Optional

from .ast import (
    ArgumentDefinition,
    Definition,
    DefinitionKind,
    DirectiveDefinition,
    DirectiveLocation,
    EnumValueDefinition,
    FieldDefinition,
    OperationTypeDefinition,
    SchemaDefinition,
    SchemaDocument,
)
from .parser import Parser
from .source import Source
from .token import TokenKind

_LOCATIONS = {location.value: location for location in DirectiveLocation}
_TYPE_KEYWORDS = ("scalar", "type", "interface", "union", "enum", "input")


class _SchemaParser(Parser):
    """Adds the type system grammar to the shared token-level parser."""

    def parse_schema_document(self) -> Optional[SchemaDocument]:
        document = SchemaDocument()
        document.position = self.peek_pos()
        while self.peek().kind is not TokenKind.EOF:
            if self.err is not None:
                return None

            description = ""
            if self.peek().kind in (TokenKind.BLOCK_STRING, TokenKind.STRING):
                description = self.parse_description()

            if self.peek().kind is not TokenKind.NAME:
                self.unexpected_error()
                break

            keyword = self.peek().value
            if keyword in _TYPE_KEYWORDS:
                document.definitions.append(self.parse_type_system_definition(description))
            elif keyword == "schema":
                document.schema.append(self.parse_schema_definition(description))
            elif keyword == "directive":
                document.directives.append(self.parse_directive_definition(description))
            elif keyword == "extend":
                if description:
                    self.unexpected_token(self.prev)
                self.parse_type_system_extension(document)
            else:
                self.unexpected_error()
                return None
        return document

    def parse_description(self) -> str:
        if self.peek().kind not in (TokenKind.BLOCK_STRING, TokenKind.STRING):
            return ""
        return self.next().value

    def parse_type_system_definition(self, description: str) -> Optional[Definition]:
        token = self.peek()
        if token.kind is not TokenKind.NAME:
            self.unexpected_error()
            return None
        handlers = {
            "scalar": self.parse_scalar_type_definition,
            "type": self.parse_object_type_definition,
            "interface": self.parse_interface_type_definition,
            "union": self.parse_union_type_definition,
            "enum": self.parse_enum_type_definition,
            "input": self.parse_input_object_type_definition,
        }
        handler = handlers.get(token.value)
        if handler is None:
            self.unexpected_error()
            return None
        return handler(description)

    def parse_schema_definition(self, description: str) -> SchemaDefinition:
        self.expect_keyword("schema")
        definition = SchemaDefinition(description=description)
        definition.position = self.peek_pos()
        definition.directives = self.parse_directives(True)
        self.some(
            TokenKind.BRACE_L,
            TokenKind.BRACE_R,
            lambda: definition.operation_types.append(self.parse_operation_type_definition()),
        )
        return definition

    def parse_operation_type_definition(self) -> OperationTypeDefinition:
        definition = OperationTypeDefinition()
        definition.position = self.peek_pos()
        definition.operation = self.parse_operation_type()
        self.expect(TokenKind.COLON)
        definition.type = self.parse_name()
        return definition

    def _start_definition(self, keyword: str, kind: DefinitionKind, description: str) -> Definition:
        self.expect_keyword(keyword)
        definition = Definition()
        definition.position = self.peek_pos()
        definition.kind = kind
        definition.description = description
        definition.name = self.parse_name()
        return definition

    def parse_scalar_type_definition(self, description: str) -> Definition:
        definition = self._start_definition("scalar", DefinitionKind.SCALAR, description)
        definition.directives = self.parse_directives(True)
        return definition

    def parse_object_type_definition(self, description: str) -> Definition:
        definition = self._start_definition("type", DefinitionKind.OBJECT, description)
        definition.interfaces = self.parse_implements_interfaces()
        definition.directives = self.parse_directives(True)
        definition.fields = self.parse_fields_definition()
        return definition

    def parse_implements_interfaces(self) -> List[str]:
        types: List[str] = []
        if self.peek().value == "implements":
            self.next()
            self.skip(TokenKind.AMP)
            types.append(self.parse_name())
            while self.skip(TokenKind.AMP) and self.err is None:
                types.append(self.parse_name())
        return types

    def parse_fields_definition(self) -> List[FieldDefinition]:
        fields: List[FieldDefinition] = []
        self.some(
            TokenKind.BRACE_L,
            TokenKind.BRACE_R,
            lambda: fields.append(self.parse_field_definition()),
        )
        return fields

    def parse_field_definition(self) -> FieldDefinition:
        definition = FieldDefinition()
        definition.position = self.peek_pos()
        definition.description = self.parse_description()
        definition.name = self.parse_name()
        definition.arguments = self.parse_argument_defs()
        self.expect(TokenKind.COLON)
        definition.type = self.parse_type_reference()
        definition.directives = self.parse_directives(True)
        return definition

    def parse_argument_defs(self) -> List[ArgumentDefinition]:
        arguments: List[ArgumentDefinition] = []
        self.some(
            TokenKind.PAREN_L,
            TokenKind.PAREN_R,
            lambda: arguments.append(self.parse_argument_def()),
        )
        return arguments

    def parse_argument_def(self) -> ArgumentDefinition:
        definition = ArgumentDefinition()
        definition.position = self.peek_pos()
        definition.description = self.parse_description()
        definition.name = self.parse_name()
        self.expect(TokenKind.COLON)
        definition.type = self.parse_type_reference()
        if self.skip(TokenKind.EQUALS):
            definition.default_value = self.parse_value_literal(True)
        definition.directives = self.parse_directives(True)
        return definition

    def parse_input_value_def(self) -> FieldDefinition:
        definition = FieldDefinition()
        definition.position = self.peek_pos()
        definition.description = self.parse_description()
        definition.name = self.parse_name()
        self.expect(TokenKind.COLON)
        definition.type = self.parse_type_reference()
        if self.skip(TokenKind.EQUALS):
            definition.default_value = self.parse_value_literal(True)
        definition.directives = self.parse_directives(True)
        return definition

    def parse_interface_type_definition(self, description: str) -> Definition:
        definition = self._start_definition("interface", DefinitionKind.INTERFACE, description)
        definition.interfaces = self.parse_implements_interfaces()
        definition.directives = self.parse_directives(True)
        definition.fields = self.parse_fields_definition()
        return definition

    def parse_union_type_definition(self, description: str) -> Definition:
        definition = self._start_definition("union", DefinitionKind.UNION, description)
        definition.directives = self.parse_directives(True)
        definition.types = self.parse_union_member_types()
        return definition

    def parse_union_member_types(self) -> List[str]:
        types: List[str] = []
        if self.skip(TokenKind.EQUALS):
            self.skip(TokenKind.PIPE)
            types.append(self.parse_name())
            while self.skip(TokenKind.PIPE) and self.err is None:
                types.append(self.parse_name())
        return types

    def parse_enum_type_definition(self, description: str) -> Definition:
        definition = self._start_definition("enum", DefinitionKind.ENUM, description)
        definition.directives = self.parse_directives(True)
        definition.enum_values = self.parse_enum_values_definition()
        return definition

    def parse_enum_values_definition(self) -> List[EnumValueDefinition]:
        values: List[EnumValueDefinition] = []
        self.some(
            TokenKind.BRACE_L,
            TokenKind.BRACE_R,
            lambda: values.append(self.parse_enum_value_definition()),
        )
        return values

    def parse_enum_value_definition(self) -> EnumValueDefinition:
        position = self.peek_pos()
        description = self.parse_description()
        name = self.parse_name()
        directives = self.parse_directives(True)
        return EnumValueDefinition(
            position=position, description=description, name=name, directives=directives
        )

    def parse_input_object_type_definition(self, description: str) -> Definition:
        definition = self._start_definition("input", DefinitionKind.INPUT_OBJECT, description)
        definition.directives = self.parse_directives(True)
        definition.fields = self.parse_input_fields_definition()
        return definition

    def parse_input_fields_definition(self) -> List[FieldDefinition]:
        fields: List[FieldDefinition] = []
        self.some(
            TokenKind.BRACE_L,
            TokenKind.BRACE_R,
            lambda: fields.append(self.parse_input_value_def()),
        )
        return fields

    # -- extensions ----------------------------------------------------------

    def parse_type_system_extension(self, document: SchemaDocument) -> None:
        self.expect_keyword("extend")
        keyword = self.peek().value
        if keyword == "schema":
            document.schema_extension.append(self.parse_schema_extension())
            return
        handlers = {
            "scalar": self.parse_scalar_type_extension,
            "type": self.parse_object_type_extension,
            "interface": self.parse_interface_type_extension,
            "union": self.parse_union_type_extension,
            "enum": self.parse_enum_type_extension,
            "input": self.parse_input_object_type_extension,
        }
        handler = handlers.get(keyword)
        if handler is None:
            self.unexpected_error()
            return
        document.extensions.append(handler())

    def parse_schema_extension(self) -> SchemaDefinition:
        self.expect_keyword("schema")
        definition = SchemaDefinition()
        definition.position = self.peek_pos()
        definition.directives = self.parse_directives(True)
        self.some(
            TokenKind.BRACE_L,
            TokenKind.BRACE_R,
            lambda: definition.operation_types.append(self.parse_operation_type_definition()),
        )
        if not definition.directives and not definition.operation_types:
            self.unexpected_error()
        return definition

    def parse_scalar_type_extension(self) -> Definition:
        definition = self._start_definition("scalar", DefinitionKind.SCALAR, "")
        definition.directives = self.parse_directives(True)
        if not definition.directives:
            self.unexpected_error()
        return definition

    def parse_object_type_extension(self) -> Definition:
        definition = self._start_definition("type", DefinitionKind.OBJECT, "")
        definition.interfaces = self.parse_implements_interfaces()
        definition.directives = self.parse_directives(True)
        definition.fields = self.parse_fields_definition()
        if not definition.interfaces and not definition.directives and not definition.fields:
            self.unexpected_error()
        return definition

    def parse_interface_type_extension(self) -> Definition:
        definition = self._start_definition("interface", DefinitionKind.INTERFACE, "")
        definition.directives = self.parse_directives(True)
        definition.fields = self.parse_fields_definition()
        if not definition.directives and not definition.fields:
            self.unexpected_error()
        return definition

    def parse_union_type_extension(self) -> Definition:
        definition = self._start_definition("union", DefinitionKind.UNION, "")
        definition.directives = self.parse_directives(True)
        definition.types = self.parse_union_member_types()
        if not definition.directives and not definition.types:
            self.unexpected_error()
        return definition

    def parse_enum_type_extension(self) -> Definition:
        definition = self._start_definition("enum", DefinitionKind.ENUM, "")
        definition.directives = self.parse_directives(True)
        definition.enum_values = self.parse_enum_values_definition()
        if not definition.directives and not definition.enum_values:
            self.unexpected_error()
        return definition

    def parse_input_object_type_extension(self) -> Definition:
        definition = self._start_definition("input", DefinitionKind.INPUT_OBJECT, "")
        definition.directives = self.parse_directives(False)
        definition.fields = self.parse_input_fields_definition()
        if not definition.directives and not definition.fields:
            self.unexpected_error()
        return definition

    # -- directive definitions -----------------------------------------------

    def parse_directive_definition(self, description: str) -> DirectiveDefinition:
        self.expect_keyword("directive")
        self.expect(TokenKind.AT)

        definition = DirectiveDefinition()
        definition.position = self.peek_pos()
        definition.description = description
        definition.name = self.parse_name()
        definition.arguments = self.parse_argument_defs()

        token = self.peek()
        if token.kind is TokenKind.NAME and token.value == "repeatable":
            definition.is_repeatable = True
            self.skip(TokenKind.NAME)

        self.expect_keyword("on")
        definition.locations = self.parse_directive_locations()
        return definition

    def parse_directive_locations(self) -> List[DirectiveLocation]:
        self.skip(TokenKind.PIPE)
        locations = [self.parse_directive_location()]
        while self.skip(TokenKind.PIPE) and self.err is None:
            locations.append(self.parse_directive_location())
        return [location for location in locations if location is not None]

    def parse_directive_location(self) -> Optional[DirectiveLocation]:
        token = self.expect(TokenKind.NAME)
        location = _LOCATIONS.get(token.value)
        if location is None:
            self.unexpected_token(token)
        return location


def parse_schema(source: Source) -> SchemaDocument:
    """Parse a type system document, raising ``GraphQLError`` on the first syntax error.

    Every type definition and extension is marked built-in when the source is.
    """
    parser = _SchemaParser(source)
    document = parser.parse_schema_document()
    if parser.err is not None:
        raise parser.err
    if document is None:
        document = SchemaDocument()
    for definition in (*document.definitions, *document.extensions):
        definition.built_in = source.built_in
    return document


def parse_schemas(*args: Source) -> SchemaDocument:
    """Parse several sources and merge them into one document, in order."""
    merged = SchemaDocument()
    for source in args:
        merged.merge(parse_schema(source))
    return merged