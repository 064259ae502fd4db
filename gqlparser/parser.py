"""A recursive-descent parser for GraphQL executable documents."""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple

from .ast import (
    Argument,
    ChildValue,
    Directive,
    Field,
    FragmentDefinition,
    FragmentSpread,
    InlineFragment,
    Operation,
    OperationDefinition,
    QueryDocument,
    Selection,
    Type,
    Value,
    ValueKind,
    VariableDefinition,
)
from .errors import GraphQLError, Location, error_loc
from .lexer import Lexer
from .source import Position, Source
from .token import Token, TokenKind, _quote

_OPERATIONS = {
    "query": Operation.QUERY,
    "mutation": Operation.MUTATION,
    "subscription": Operation.SUBSCRIPTION,
}


class Parser:
    """Token-level parsing state shared by the query and schema grammars.

    The first error encountered is kept in ``err``; once it is set, every
    further read returns the previous token, so parsing winds down quietly
    and the caller raises the recorded error.
    """

    def __init__(self, source: Source) -> None:
        self._lexer = Lexer(source)
        self.err: Optional[GraphQLError] = None
        self._peeked = False
        self._peek_token = Token(TokenKind.INVALID)
        self._peek_error: Optional[GraphQLError] = None
        self.prev = Token(TokenKind.INVALID)

    def _read(self) -> Tuple[Token, Optional[GraphQLError]]:
        try:
            return self._lexer.read_token(), None
        except GraphQLError as exc:
            location = exc.locations[0] if exc.locations else Location()
            position = Position(
                line=location.line, column=location.column, src=self._lexer.source
            )
            return Token(TokenKind.INVALID, pos=position), exc

    def peek_pos(self) -> Optional[Position]:
        """The position of the next token, or ``None`` once an error is recorded."""
        if self.err is not None:
            return None
        return self.peek().pos

    def peek(self) -> Token:
        """Look at the next token without consuming it."""
        if self.err is not None:
            return self.prev
        if not self._peeked:
            self._peek_token, self._peek_error = self._read()
            self._peeked = True
        return self._peek_token

    def next(self) -> Token:
        """Consume and return the next token."""
        if self.err is not None:
            return self.prev
        if self._peeked:
            self._peeked = False
            self.prev, self.err = self._peek_token, self._peek_error
        else:
            self.prev, self.err = self._read()
        return self.prev

    def error(self, token: Token, message: str) -> None:
        """Record an error at ``token`` unless one is already recorded."""
        if self.err is not None:
            return
        self.err = error_loc(token.pos.file_name, token.pos.line, token.pos.column, message)

    def expect_keyword(self, value: str) -> Token:
        """Consume a name token with the given value, or record an error."""
        token = self.peek()
        if token.kind is TokenKind.NAME and token.value == value:
            return self.next()
        self.error(token, f"Expected {_quote(value)}, found {token}")
        return token

    def expect(self, kind: TokenKind) -> Token:
        """Consume a token of the given kind, or record an error."""
        token = self.peek()
        if token.kind is kind:
            return self.next()
        self.error(token, f"Expected {kind}, found {token.kind}")
        return token

    def skip(self, kind: TokenKind) -> bool:
        """Consume the next token if it is of the given kind."""
        if self.err is not None:
            return False
        if self.peek().kind is not kind:
            return False
        self.next()
        return True

    def unexpected_error(self) -> None:
        """Record an error about the next token."""
        self.unexpected_token(self.peek())

    def unexpected_token(self, token: Token) -> None:
        """Record an error about ``token``."""
        self.error(token, f"Unexpected {token}")

    def many(self, start: TokenKind, end: TokenKind, callback: Callable[[], None]) -> None:
        """Call ``callback`` for each item between ``start`` and ``end``, if ``start`` is next."""
        if not self.skip(start):
            return
        while self.peek().kind is not end and self.err is None:
            callback()
        self.next()

    def some(self, start: TokenKind, end: TokenKind, callback: Callable[[], None]) -> None:
        """Like ``many``, but at least one item is required between the delimiters."""
        if not self.skip(start):
            return
        called = False
        while self.peek().kind is not end and self.err is None:
            called = True
            callback()
        if not called:
            self.error(
                self.peek(), f"expected at least one definition, found {self.peek().kind}"
            )
            return
        self.next()

    # -- query grammar -------------------------------------------------------

    def parse_query_document(self) -> QueryDocument:
        document = QueryDocument()
        while self.peek().kind is not TokenKind.EOF:
            if self.err is not None:
                return document
            document.position = self.peek_pos()
            token = self.peek()
            if token.kind is TokenKind.NAME:
                if token.value in _OPERATIONS:
                    document.operations.append(self.parse_operation_definition())
                elif token.value == "fragment":
                    document.fragments.append(self.parse_fragment_definition())
                else:
                    self.unexpected_error()
            elif token.kind is TokenKind.BRACE_L:
                document.operations.append(self.parse_operation_definition())
            else:
                self.unexpected_error()
        return document

    def parse_operation_definition(self) -> OperationDefinition:
        if self.peek().kind is TokenKind.BRACE_L:
            position = self.peek_pos()
            return OperationDefinition(
                position=position,
                operation=Operation.QUERY,
                selection_set=self.parse_required_selection_set(),
            )

        definition = OperationDefinition()
        definition.position = self.peek_pos()
        definition.operation = self.parse_operation_type()
        if self.peek().kind is TokenKind.NAME:
            definition.name = self.next().value
        definition.variable_definitions = self.parse_variable_definitions()
        definition.directives = self.parse_directives(False)
        definition.selection_set = self.parse_required_selection_set()
        return definition

    def parse_operation_type(self) -> Optional[Operation]:
        token = self.next()
        operation = _OPERATIONS.get(token.value)
        if operation is None:
            self.unexpected_token(token)
        return operation

    def parse_variable_definitions(self) -> List[VariableDefinition]:
        definitions: List[VariableDefinition] = []
        self.many(
            TokenKind.PAREN_L,
            TokenKind.PAREN_R,
            lambda: definitions.append(self.parse_variable_definition()),
        )
        return definitions

    def parse_variable_definition(self) -> VariableDefinition:
        definition = VariableDefinition()
        definition.position = self.peek_pos()
        definition.variable = self.parse_variable()
        self.expect(TokenKind.COLON)
        definition.type = self.parse_type_reference()
        if self.skip(TokenKind.EQUALS):
            definition.default_value = self.parse_value_literal(True)
        definition.directives = self.parse_directives(False)
        return definition

    def parse_variable(self) -> str:
        self.expect(TokenKind.DOLLAR)
        return self.parse_name()

    def parse_optional_selection_set(self) -> List[Selection]:
        selections: List[Selection] = []
        self.some(
            TokenKind.BRACE_L,
            TokenKind.BRACE_R,
            lambda: selections.append(self.parse_selection()),
        )
        return selections

    def parse_required_selection_set(self) -> List[Selection]:
        token = self.peek()
        if token.kind is not TokenKind.BRACE_L:
            self.error(token, f"Expected {TokenKind.BRACE_L}, found {token.kind}")
            return []
        return self.parse_optional_selection_set()

    def parse_selection(self) -> Selection:
        if self.peek().kind is TokenKind.SPREAD:
            return self.parse_fragment()
        return self.parse_field()

    def parse_field(self) -> Field:
        selection = Field()
        selection.position = self.peek_pos()
        selection.alias = self.parse_name()
        if self.skip(TokenKind.COLON):
            selection.name = self.parse_name()
        else:
            selection.name = selection.alias
        selection.arguments = self.parse_arguments(False)
        selection.directives = self.parse_directives(False)
        if self.peek().kind is TokenKind.BRACE_L:
            selection.selection_set = self.parse_optional_selection_set()
        return selection

    def parse_arguments(self, is_const: bool) -> List[Argument]:
        arguments: List[Argument] = []
        self.many(
            TokenKind.PAREN_L,
            TokenKind.PAREN_R,
            lambda: arguments.append(self.parse_argument(is_const)),
        )
        return arguments

    def parse_argument(self, is_const: bool) -> Argument:
        argument = Argument()
        argument.position = self.peek_pos()
        argument.name = self.parse_name()
        self.expect(TokenKind.COLON)
        argument.value = self.parse_value_literal(is_const)
        return argument

    def parse_fragment(self) -> Selection:
        self.expect(TokenKind.SPREAD)

        token = self.peek()
        if token.kind is TokenKind.NAME and token.value != "on":
            position = self.peek_pos()
            name = self.parse_fragment_name()
            return FragmentSpread(
                position=position, name=name, directives=self.parse_directives(False)
            )

        fragment = InlineFragment()
        fragment.position = self.peek_pos()
        if self.peek().value == "on":
            self.next()
            fragment.type_condition = self.parse_name()
        fragment.directives = self.parse_directives(False)
        fragment.selection_set = self.parse_required_selection_set()
        return fragment

    def parse_fragment_definition(self) -> FragmentDefinition:
        definition = FragmentDefinition()
        definition.position = self.peek_pos()
        self.expect_keyword("fragment")
        definition.name = self.parse_fragment_name()
        definition.variable_definition = self.parse_variable_definitions()
        self.expect_keyword("on")
        definition.type_condition = self.parse_name()
        definition.directives = self.parse_directives(False)
        definition.selection_set = self.parse_required_selection_set()
        return definition

    def parse_fragment_name(self) -> str:
        if self.peek().value == "on":
            self.unexpected_error()
            return ""
        return self.parse_name()

    def parse_value_literal(self, is_const: bool) -> Optional[Value]:
        token = self.peek()
        kind = token.kind

        if kind is TokenKind.BRACKET_L:
            return self.parse_list(is_const)
        if kind is TokenKind.BRACE_L:
            return self.parse_object(is_const)
        if kind is TokenKind.DOLLAR:
            if is_const:
                self.unexpected_error()
                return None
            return Value(position=token.pos, raw=self.parse_variable(), kind=ValueKind.VARIABLE)

        if kind is TokenKind.INT:
            value_kind = ValueKind.INT
        elif kind is TokenKind.FLOAT:
            value_kind = ValueKind.FLOAT
        elif kind is TokenKind.STRING:
            value_kind = ValueKind.STRING
        elif kind is TokenKind.BLOCK_STRING:
            value_kind = ValueKind.BLOCK
        elif kind is TokenKind.NAME:
            if token.value in ("true", "false"):
                value_kind = ValueKind.BOOLEAN
            elif token.value == "null":
                value_kind = ValueKind.NULL
            else:
                value_kind = ValueKind.ENUM
        else:
            self.unexpected_error()
            return None

        self.next()
        return Value(position=token.pos, raw=token.value, kind=value_kind)

    def parse_list(self, is_const: bool) -> Value:
        values: List[ChildValue] = []
        position = self.peek_pos()
        self.many(
            TokenKind.BRACKET_L,
            TokenKind.BRACKET_R,
            lambda: values.append(ChildValue(value=self.parse_value_literal(is_const))),
        )
        return Value(children=values, kind=ValueKind.LIST, position=position)

    def parse_object(self, is_const: bool) -> Value:
        fields: List[ChildValue] = []
        position = self.peek_pos()
        self.many(
            TokenKind.BRACE_L,
            TokenKind.BRACE_R,
            lambda: fields.append(self.parse_object_field(is_const)),
        )
        return Value(children=fields, kind=ValueKind.OBJECT, position=position)

    def parse_object_field(self, is_const: bool) -> ChildValue:
        child = ChildValue()
        child.position = self.peek_pos()
        child.name = self.parse_name()
        self.expect(TokenKind.COLON)
        child.value = self.parse_value_literal(is_const)
        return child

    def parse_directives(self, is_const: bool) -> List[Directive]:
        directives: List[Directive] = []
        while self.peek().kind is TokenKind.AT:
            if self.err is not None:
                break
            directives.append(self.parse_directive(is_const))
        return directives

    def parse_directive(self, is_const: bool) -> Directive:
        self.expect(TokenKind.AT)
        position = self.peek_pos()
        name = self.parse_name()
        return Directive(position=position, name=name, arguments=self.parse_arguments(is_const))

    def parse_type_reference(self) -> Type:
        reference = Type()
        if self.skip(TokenKind.BRACKET_L):
            reference.position = self.peek_pos()
            reference.elem = self.parse_type_reference()
            self.expect(TokenKind.BRACKET_R)
        else:
            reference.position = self.peek_pos()
            reference.named_type = self.parse_name()

        if self.skip(TokenKind.BANG):
            reference.position = self.peek_pos()
            reference.non_null = True
        return reference

    def parse_name(self) -> str:
        return self.expect(TokenKind.NAME).value


def parse_query(source: Source) -> QueryDocument:
    """Parse an executable document, raising ``GraphQLError`` on the first syntax error."""
    parser = Parser(source)
    document = parser.parse_query_document()
    if parser.err is not None:
        raise parser.err
    return document