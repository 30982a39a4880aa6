# Ethan Doughty
# patterns.py
"""Default regular expressions for splitting and classifying expressions.

ALL is the delimiter pattern handed to the splitter. Every alternative sits
inside one capturing group, so the matched text (operators, parentheses,
numbers, identifiers and whitespace runs) is kept as a lexeme instead of
being discarded by re.split. Anything the pattern does not recognise falls
through as the text between two delimiters.
"""

import re

# Integer or decimal with at most one point
NUMBER_SPEC = r"\d+(?:\.\d+)?|\.\d+"
IDENTIFIER_SPEC = r"[A-Za-z_]\w*"
WHITESPACE_SPEC = r"\s+"
SYMBOL_SPEC = r"[+\-*/(),]"

NUMBER = re.compile(NUMBER_SPEC)
IDENTIFIER = re.compile(IDENTIFIER_SPEC)
WHITESPACE = re.compile(WHITESPACE_SPEC)

# Order matters: numbers before identifiers so "2x" splits as "2", "x"
ALL = re.compile("(" + "|".join((
    WHITESPACE_SPEC,
    SYMBOL_SPEC,
    NUMBER_SPEC,
    IDENTIFIER_SPEC,
)) + ")")


def is_number(lexeme: str) -> bool:
    return NUMBER.fullmatch(lexeme) is not None


def is_identifier(lexeme: str) -> bool:
    return IDENTIFIER.fullmatch(lexeme) is not None
