import pytest

from gqlparser.source import Position, Source
from gqlparser.token import Token, TokenKind


@pytest.mark.parametrize(
    "kind, text",
    [
        (TokenKind.INVALID, "<Invalid>"),
        (TokenKind.EOF, "<EOF>"),
        (TokenKind.BANG, "!"),
        (TokenKind.SPREAD, "..."),
        (TokenKind.BRACE_R, "}"),
        (TokenKind.NAME, "Name"),
        (TokenKind.BLOCK_STRING, "BlockString"),
    ],
)
def test_kind_str(kind, text):
    assert str(kind) == text


def test_kind_format_matches_str():
    token = Token(TokenKind.FLOAT)
    assert f"Expected {token.kind}" == "Expected Float"
    assert f"{Token(TokenKind.BRACE_L).kind}" == str(Token(TokenKind.BRACE_L))


def test_kind_labels_match_member_names():
    for kind in TokenKind:
        looked_up = TokenKind(kind.value)
        assert looked_up.label.lower() == kind.name.replace("_", "").lower()


def test_kind_labels_for_punctuation():
    assert Token(TokenKind.PAREN_L).kind.label == "ParenL"
    assert Token(TokenKind.AMP).kind.label == "Amp"


def test_kinds_are_ordered_and_distinct():
    values = [kind.value for kind in TokenKind]
    assert values == sorted(set(values))
    assert TokenKind(0) is TokenKind.INVALID


def test_token_without_value_shows_kind():
    assert str(Token(TokenKind.BRACE_L)) == "{"


def test_token_with_value_quotes_it():
    assert str(Token(TokenKind.NAME, "foo")) == 'Name "foo"'
    assert str(Token(TokenKind.INT, "1")) == 'Int "1"'


def test_token_quote_escapes_specials():
    token = Token(TokenKind.STRING, 'a"b\\c\n')
    assert str(token) == 'String "a\\"b\\\\c\\n"'


def test_token_quote_keeps_printable_unicode():
    token = Token(TokenKind.STRING, "é")
    assert str(token) == 'String "é"'


def test_token_default_position_is_fresh():
    first = Token(TokenKind.EOF)
    second = Token(TokenKind.EOF)
    first.pos.line = 5
    assert second.pos.line != first.pos.line


def test_token_carries_position():
    src = Source(name="spec", input="foo")
    token = Token(TokenKind.NAME, "foo", Position(0, 3, 1, 1, src))
    assert token.pos.src is src
    assert token.pos.end - token.pos.start == len(token.value)