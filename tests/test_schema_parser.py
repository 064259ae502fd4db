import pytest

from gqlparser.ast import DefinitionKind, DirectiveLocation, Operation, ValueKind
from gqlparser.dumper import dump
from gqlparser.errors import GraphQLError
from gqlparser.schema_parser import parse_schema, parse_schemas
from gqlparser.source import Source


def parse(text, **kwargs):
    return parse_schema(Source(name="spec", input=text, **kwargs))


def parse_error(text):
    with pytest.raises(GraphQLError) as info:
        parse(text)
    return info.value


def test_simple_object_dump():
    doc = parse("type Hello { world: String }")
    expected = "\n".join(
        [
            "<SchemaDocument>",
            "  Definitions: [Definition]",
            "  - <Definition>",
            '      Kind: DefinitionKind("OBJECT")',
            '      Name: "Hello"',
            "      Fields: [FieldDefinition]",
            "      - <FieldDefinition>",
            '          Name: "world"',
            "          Type: String",
        ]
    )
    assert dump(doc) == expected


def test_object_with_interfaces_and_arguments():
    doc = parse(
        "type Hello implements & World & Other { world(flag: Boolean = true, n: [Int!]!): String }"
    )
    definition = doc.definitions[0]
    assert definition.kind is DefinitionKind.OBJECT
    assert definition.interfaces == ["World", "Other"]
    field = definition.fields[0]
    assert [arg.name for arg in field.arguments] == ["flag", "n"]
    assert field.arguments[0].default_value.kind is ValueKind.BOOLEAN
    assert field.arguments[0].default_value.raw == "true"
    assert str(field.arguments[1].type) == "[Int!]!"


def test_descriptions():
    doc = parse('"""Type desc"""\ntype A {\n  "field desc" f: Int\n}\n')
    definition = doc.definitions[0]
    assert definition.description == "Type desc"
    assert definition.fields[0].description == "field desc"


def test_scalar_union_enum_input_interface():
    doc = parse(
        """
        scalar Time @foo
        union U = | A | B
        enum E { ONE TWO }
        input I { a: String = "x" }
        interface N implements M { id: ID! }
        """
    )
    kinds = [d.kind for d in doc.definitions]
    assert kinds == [
        DefinitionKind.SCALAR,
        DefinitionKind.UNION,
        DefinitionKind.ENUM,
        DefinitionKind.INPUT_OBJECT,
        DefinitionKind.INTERFACE,
    ]
    assert doc.definitions[0].directives[0].name == "foo"
    assert doc.definitions[1].types == ["A", "B"]
    assert [v.name for v in doc.definitions[2].enum_values] == ["ONE", "TWO"]
    assert doc.definitions[3].fields[0].default_value.raw == "x"
    assert doc.definitions[4].interfaces == ["M"]


def test_schema_definition():
    doc = parse("schema { query: Q mutation: M }")
    ops = doc.schema[0].operation_types
    assert [(op.operation, op.type) for op in ops] == [
        (Operation.QUERY, "Q"),
        (Operation.MUTATION, "M"),
    ]


def test_directive_definition():
    doc = parse("directive @skip(if: Boolean!) repeatable on | FIELD | FRAGMENT_SPREAD")
    directive = doc.directives[0]
    assert directive.name == "skip"
    assert directive.is_repeatable is True
    assert directive.arguments[0].name == "if"
    assert directive.locations == [
        DirectiveLocation.FIELD,
        DirectiveLocation.FRAGMENT_SPREAD,
    ]


def test_extensions():
    doc = parse(
        """
        extend schema @foo
        extend type Hello { more: Int }
        extend scalar S @bar
        extend union U = C
        extend enum E { THREE }
        extend input I { b: Int }
        extend interface N { other: Int }
        """
    )
    assert doc.schema_extension[0].directives[0].name == "foo"
    assert [d.name for d in doc.extensions] == ["Hello", "S", "U", "E", "I", "N"]
    assert doc.extensions[0].fields[0].name == "more"
    assert doc.definitions == []


def test_built_in_flag():
    doc = parse("type A { f: Int }\nextend type A { g: Int }", built_in=True)
    assert doc.definitions[0].built_in is True
    assert doc.extensions[0].built_in is True
    assert parse("type A { f: Int }").definitions[0].built_in is False


def test_parse_schemas_merges_in_order():
    doc = parse_schemas(
        Source(name="a", input="type A { f: Int }"),
        Source(name="b", input="type B { f: Int } directive @d on FIELD"),
    )
    assert [d.name for d in doc.definitions] == ["A", "B"]
    assert [d.name for d in doc.directives] == ["d"]


def test_parse_schemas_propagates_error():
    with pytest.raises(GraphQLError) as info:
        parse_schemas(Source(name="a", input="type A { f: Int }"), Source(name="b", input="bad"))
    assert str(info.value) == 'b:1: Unexpected Name "bad"'


def test_empty_fields_error():
    err = parse_error("type Hello { }")
    assert err.message == "expected at least one definition, found }"
    assert (err.locations[0].line, err.locations[0].column) == (1, 14)


def test_unknown_keyword():
    err = parse_error("foo")
    assert err.message == 'Unexpected Name "foo"'
    assert str(err) == 'spec:1: Unexpected Name "foo"'


@pytest.mark.parametrize(
    "text",
    ["extend scalar Foo", "extend type Hello", "extend schema", "extend union U", "extend enum E"],
)
def test_empty_extension_errors(text):
    assert parse_error(text).message == "Unexpected <EOF>"


def test_unknown_extension_kind():
    assert parse_error("extend foo").message == 'Unexpected Name "foo"'


def test_description_on_extension_is_error():
    err = parse_error('"desc" extend type A @x')
    assert err.message == 'Unexpected String "desc"'
    assert err.locations[0].line == 1


def test_bad_directive_location():
    assert parse_error("directive @foo on FIELD | BAD").message == 'Unexpected Name "BAD"'


def test_variable_in_const_default_is_error():
    assert parse_error("type A { f(a: Int = $x): Int }").message == "Unexpected $"


def test_missing_on_in_directive():
    err = parse_error("directive @foo FIELD")
    assert err.message == 'Expected "on", found Name "FIELD"'


def test_error_line_numbers():
    err = parse_error("type A { f: Int }\n\ntype B {")
    assert err.message == "Expected Name, found <EOF>"
    assert err.locations[0].line == 3
    assert err.extensions["file"] == "spec"


def test_empty_document():
    doc = parse("   # just a comment\n")
    assert doc.definitions == [] and doc.schema == [] and doc.directives == []