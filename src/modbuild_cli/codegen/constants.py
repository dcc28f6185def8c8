"""Shared constants for cross-module code generation."""

# A placeholder named X is matched as the literal substring {{X}}
PLACEHOLDER_OPEN = "{{"
PLACEHOLDER_CLOSE = "}}"

# Placeholder names ending with this suffix keep every distinct value
# (templated mode). Any other name must resolve to a single value.
LIST_SUFFIX = "List"

# Contributing a value for this variable grants the contributor's include
# directory to the compile of the declaring module.
INCLUDE_VARIABLE = "Include"

# A formatted line starting with INCLUDE_DIRECTIVE and containing
# EMPTY_QUOTES references nothing and is dropped.
INCLUDE_DIRECTIVE = "#include"
EMPTY_QUOTES = '""'

LINE_SEPARATOR = "\n"
