import pytest

from gqlparser.ast import (
    Argument,
    ArgumentDefinition,
    ChildValue,
    Definition,
    DefinitionKind,
    Directive,
    DirectiveDefinition,
    Field,
    FieldDefinition,
    FragmentDefinition,
    Operation,
    OperationDefinition,
    OperationTypeDefinition,
    QueryDocument,
    Schema,
    SchemaDocument,
    Value,
    ValueKind,
    VariableDefinition,
    argument_map,
    child_value,
    find_all_named,
    find_named,
    find_operation,
    find_operation_type,
    find_variable,
    list_type,
    named_type,
    non_null_list_type,
    non_null_named_type,
)


@pytest.fixture
def defs():
    return [
        ArgumentDefinition(
            name="A",
            type=named_type("String"),
            default_value=Value(kind=ValueKind.STRING, raw="defaultA"),
        ),
        ArgumentDefinition(name="B", type=named_type("String")),
    ]


def test_argmap_defaults(defs):
    args = argument_map(defs, [], None)
    assert args["A"] == "defaultA"
    assert "B" not in args


def test_argmap_values(defs):
    args = argument_map(
        defs,
        [
            Argument(name="A", value=Value(kind=ValueKind.STRING, raw="valA")),
            Argument(name="B", value=Value(kind=ValueKind.STRING, raw="valB")),
        ],
        None,
    )
    assert args == {"A": "valA", "B": "valB"}


def test_argmap_nulls(defs):
    args = argument_map(
        defs,
        [
            Argument(name="A", value=Value(kind=ValueKind.NULL)),
            Argument(name="B", value=Value(kind=ValueKind.NULL)),
        ],
        None,
    )
    assert args == {"A": None, "B": None}


def _variable_args():
    return [
        Argument(name="A", value=Value(kind=ValueKind.VARIABLE, raw="VarA")),
        Argument(name="B", value=Value(kind=ValueKind.VARIABLE, raw="VarB")),
    ]


def test_argmap_undefined_variables(defs):
    args = argument_map(defs, _variable_args(), {})
    assert args["A"] == "defaultA"
    assert "B" not in args


def test_argmap_nil_variables(defs):
    args = argument_map(defs, _variable_args(), {"VarA": None, "VarB": None})
    assert args == {"A": None, "B": None}


def test_argmap_defined_variables(defs):
    args = argument_map(defs, _variable_args(), {"VarA": "varvalA", "VarB": "varvalB"})
    assert args == {"A": "varvalA", "B": "varvalB"}


def test_field_and_directive_argument_map(defs):
    field_def = FieldDefinition(name="f", arguments=defs)
    fld = Field(name="f", definition=field_def)
    assert fld.argument_map({}) == {"A": "defaultA"}

    directive = Directive(
        name="d",
        arguments=[Argument(name="B", value=Value(kind=ValueKind.INT, raw="3"))],
        definition=DirectiveDefinition(name="d", arguments=defs),
    )
    assert directive.argument_map(None) == {"A": "defaultA", "B": 3}


def test_argument_map_without_definition_raises():
    with pytest.raises(ValueError):
        Field(name="f").argument_map({})


def _doc():
    return QueryDocument(
        operations=[OperationDefinition(operation=Operation.QUERY, name="Bob")],
        fragments=[FragmentDefinition(name="Frag", type_condition="Foo")],
    )


def test_query_doc_get_operation():
    doc = _doc()
    assert find_operation(doc.operations, "Bob").name == "Bob"
    assert find_operation(doc.operations, "Alice") is None


def test_query_doc_get_fragment():
    doc = _doc()
    assert find_named(doc.fragments, "Frag").name == "Frag"
    assert find_named(doc.fragments, "Alice") is None


def test_find_operation_empty_name_single():
    doc = _doc()
    assert find_operation(doc.operations, "").name == "Bob"
    two = doc.operations + [OperationDefinition(name="Other")]
    assert find_operation(two, "") is None


@pytest.mark.parametrize(
    "left, right, expected",
    [
        (named_type("A"), named_type("A"), True),
        (named_type("A"), named_type("B"), False),
        (list_type(named_type("A")), list_type(named_type("A")), True),
        (list_type(named_type("A")), list_type(named_type("B")), False),
        (non_null_named_type("A"), named_type("A"), True),
        (named_type("A"), non_null_named_type("A"), False),
        (
            non_null_list_type(named_type("String")),
            non_null_list_type(named_type("String")),
            True,
        ),
        (non_null_list_type(named_type("String")), list_type(named_type("String")), True),
        (list_type(named_type("String")), non_null_list_type(named_type("String")), False),
        (list_type(non_null_named_type("String")), list_type(named_type("String")), True),
        (list_type(named_type("String")), list_type(non_null_named_type("String")), False),
    ],
)
def test_named_type_compatibility(left, right, expected):
    assert left.is_compatible(right) is expected


def test_type_string_and_name():
    t = non_null_list_type(list_type(non_null_named_type("Int")))
    assert str(t) == "[[Int!]]!"
    assert t.base_name() == "Int"


def test_value_to_python_scalars():
    assert Value(kind=ValueKind.INT, raw="-42").to_python() == -42
    assert Value(kind=ValueKind.FLOAT, raw="1.5e2").to_python() == 150.0
    assert Value(kind=ValueKind.BOOLEAN, raw="true").to_python() is True
    assert Value(kind=ValueKind.BOOLEAN, raw="false").to_python() is False
    assert Value(kind=ValueKind.ENUM, raw="RED").to_python() == "RED"
    assert Value(kind=ValueKind.NULL, raw="null").to_python() is None


def test_value_to_python_errors():
    with pytest.raises(ValueError):
        Value(kind=ValueKind.INT, raw="99999999999999999999").to_python()
    with pytest.raises(ValueError):
        Value(kind=ValueKind.BOOLEAN, raw="yes").to_python()
    with pytest.raises(ValueError):
        Value(kind=ValueKind.FLOAT, raw="1e999").to_python()


def test_value_to_python_nested():
    value = Value(
        kind=ValueKind.OBJECT,
        children=[
            ChildValue(name="a", value=Value(kind=ValueKind.INT, raw="1")),
            ChildValue(
                name="b",
                value=Value(
                    kind=ValueKind.LIST,
                    children=[
                        ChildValue(value=Value(kind=ValueKind.STRING, raw="x")),
                        ChildValue(value=Value(kind=ValueKind.VARIABLE, raw="v")),
                    ],
                ),
            ),
        ],
    )
    assert value.to_python({"v": 7}) == {"a": 1, "b": ["x", 7]}
    assert str(value) == '{a:1,b:["x",$v]}'
    assert child_value(value.children, "a").raw == "1"
    assert child_value(value.children, "zzz") is None


def test_variable_default_value():
    var_def = VariableDefinition(
        variable="v", default_value=Value(kind=ValueKind.INT, raw="5")
    )
    value = Value(kind=ValueKind.VARIABLE, raw="v", variable_definition=var_def)
    assert value.to_python({}) == 5
    assert value.to_python({"v": 9}) == 9


def test_string_value_is_quoted():
    assert str(Value(kind=ValueKind.STRING, raw='a"b\n')) == '"a\\"b\\n"'


def test_definition_predicates():
    scalar = Definition(kind=DefinitionKind.SCALAR, name="Date")
    union = Definition(kind=DefinitionKind.UNION, name="U")
    assert scalar.is_leaf_type() and scalar.is_input_type()
    assert not scalar.is_composite_type()
    assert union.is_abstract_type() and union.is_composite_type()
    assert not union.is_input_type()
    assert scalar.one_of("Int", "Date") is True
    assert scalar.one_of("Int") is False


def test_schema_document_merge():
    first = SchemaDocument(definitions=[Definition(name="A")])
    second = SchemaDocument(
        definitions=[Definition(name="B")], directives=[DirectiveDefinition(name="d")]
    )
    first.merge(second)
    assert [d.name for d in first.definitions] == ["A", "B"]
    assert [d.name for d in first.directives] == ["d"]


def test_schema_possible_types_and_implements():
    schema = Schema()
    iface = Definition(kind=DefinitionKind.INTERFACE, name="Node")
    obj = Definition(kind=DefinitionKind.OBJECT, name="User")
    schema.add_possible_type("Node", obj)
    schema.add_implements("User", iface)
    assert schema.get_possible_types(iface) == [obj]
    assert schema.get_implements(obj) == [iface]
    assert schema.get_possible_types(obj) == []


def test_lookup_helpers():
    directives = [Directive(name="a"), Directive(name="b"), Directive(name="a")]
    assert len(find_all_named(directives, "a")) == 2
    assert find_all_named(directives, "c") == []
    var_defs = [VariableDefinition(variable="x"), VariableDefinition(variable="y")]
    assert find_variable(var_defs, "y").variable == "y"
    assert find_variable(var_defs, "z") is None
    op_types = [OperationTypeDefinition(operation=Operation.QUERY, type="Root")]
    assert find_operation_type(op_types, "Root").operation is Operation.QUERY
    assert find_operation_type(op_types, "Other") is None


def test_enum_strings():
    operation = OperationDefinition(operation=Operation.MUTATION, name="M")
    assert str(operation.operation) == "mutation"
    definition = Definition(kind=DefinitionKind.INPUT_OBJECT, name="In")
    assert str(definition.kind) == "INPUT_OBJECT"
    assert definition.is_input_type() is True