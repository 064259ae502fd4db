"""GraphQL lexer, query and schema parsers, syntax tree, dumper and formatter."""

__version__ = "2.0.0"