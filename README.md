# gqlparser

A pure-Python GraphQL toolkit: a lexer, parsers for executable (query) and
type system (schema) documents, a typed syntax tree, a dumper that renders
trees as stable indented text, and a formatter that prints documents and
schemas back as GraphQL text.

## Installation

```
pip install .
```

No third-party packages are needed at run time.

## Parsing a query

```python
from gqlparser.source import Source
from gqlparser.parser import parse_query
from gqlparser.ast import find_operation

document = parse_query(Source(name="query.graphql", input="""
    query Hero($episode: Episode = JEDI) {
        hero(episode: $episode) { name ...Friends }
    }
    fragment Friends on Character { friends { name } }
"""))

operation = find_operation(document.operations, "Hero")
print(operation.selection_set[0].name)   # hero
```

`parse_query` raises `gqlparser.errors.GraphQLError` at the first syntax
error. The error carries the message, the line and column, and the source's
file name in its extensions:

```python
from gqlparser.errors import GraphQLError

try:
    parse_query(Source(name="bad.graphql", input="{ hero("))
except GraphQLError as err:
    print(err)            # bad.graphql:1: ...
    print(err.to_dict())  # {"message": ..., "locations": [...], "extensions": {"file": ...}}
```

`ErrorList` groups several errors into one exception; `wrap_path`,
`error_path`, `error_pos` and `error_loc` build errors from a path, a
position or a line and column.

## Parsing a schema

```python
from gqlparser.source import Source
from gqlparser.schema_parser import parse_schema, parse_schemas

schema_doc = parse_schema(Source(name="schema.graphql", input="""
    type Query { hero: Character }
    interface Character { name: String! }
"""))

merged = parse_schemas(
    Source(name="a.graphql", input="type Query { a: Int }"),
    Source(name="b.graphql", input="extend type Query { b: Int }"),
)
print(len(merged.definitions), len(merged.extensions))  # 1 1
```

Definitions parsed from a `Source` with `built_in=True` are marked built-in.

## Formatting

```python
from gqlparser.formatter import format_query_document, format_schema_document

print(format_query_document(document))
print(format_schema_document(schema_doc))
```

`format_schema` prints a `gqlparser.ast.Schema`: non-default root operation
types, then directives and types sorted by name. The `Formatter` class does
the same work against any text stream; built-in definitions and fields whose
names start with `__` are left out unless it is created with
`emit_builtin=True`.

## Other pieces

- `gqlparser.lexer.Lexer` reads tokens one at a time with `read_token()`;
  iterating over a lexer yields every token up to end of input.
- `gqlparser.token` defines `TokenKind` and `Token`.
- `gqlparser.dumper.dump` renders any syntax tree node as indented text,
  leaving out empty fields and positions.
- `gqlparser.ast` holds the node classes, the type helpers `named_type`,
  `non_null_named_type`, `list_type`, `non_null_list_type` and
  `Type.is_compatible`, `Value.to_python`, lookup helpers such as
  `find_named` and `find_variable`, and `argument_map`, which resolves
  arguments against variables and defaults.
- `gqlparser.blockstring.block_string_value` strips common indentation and
  blank edge lines from block strings.
- `gqlparser.path` formats (`a[2].c`), encodes and decodes response paths.
- `gqlparser.messaging` builds message text with `or_list` and
  `quoted_or_list`, and error options with `message`, `at` and `suggest`.

## What this package does not do

It parses and prints GraphQL, but it does not build a `Schema` from schema
documents and does not validate queries against a schema. A `Schema` to pass
to `format_schema` must be assembled by hand. There is no command-line tool.

## Running the tests

```
pip install .[test]
pytest
```