[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gqlparser"
version = "2.0.0"
description = "GraphQL query and schema lexer, parser, AST, dumper and formatter"
requires-python = ">=3.10"
dependencies = []
keywords = ["graphql", "parser", "lexer", "ast", "schema", "formatter"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gqlparser"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
