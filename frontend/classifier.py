# Ethan Doughty
# classifier.py
"""Classify a single lexeme into a token.

Classification is a pure function of the lexeme, its position, the
previously emitted token and the ClassifierRules collaborators. It never
raises: a lexeme nothing recognises becomes an UnknownToken and is left for
the parser to reject.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Callable, FrozenSet, Iterable, Optional

from analysis.functions import DEFAULT_REGISTRY
from frontend import patterns
from frontend.tokens import (
    Meta, MetaToken, Operand, OperandToken, Operator, OperatorToken,
    Token, TokenKind, UnknownToken,
)


@dataclass(frozen=True)
class ClassifierRules:
    """Collaborators consulted by classify().

    Fields:
        is_number: Predicate for numeric literals
        is_identifier: Predicate for variable identifiers
        functions: Known function names (None or empty: no lexeme is a function)
    """
    is_number: Callable[[str], bool] = patterns.is_number
    is_identifier: Callable[[str], bool] = patterns.is_identifier
    functions: Optional[FrozenSet[str]] = DEFAULT_REGISTRY

    def with_functions(self, names: Optional[Iterable[str]]) -> ClassifierRules:
        """Copy of these rules with a different function registry."""
        return replace(self, functions=frozenset(names) if names is not None else None)

    def is_function(self, lexeme: str) -> bool:
        return bool(self.functions) and lexeme in self.functions


DEFAULT_RULES = ClassifierRules()

# Fixed single-character symbols; + and - are resolved by context
_SYMBOLS = {
    "*": (OperatorToken, Operator.MULTIPLICATION),
    "/": (OperatorToken, Operator.DIVISION),
    "(": (MetaToken, Meta.LEFT_PARENTHESIS),
    ")": (MetaToken, Meta.RIGHT_PARENTHESIS),
    ",": (MetaToken, Meta.COMMA),
}

_SIGNS = {
    "+": (Operator.UNARY_PLUS, Operator.ADDITION),
    "-": (Operator.UNARY_MINUS, Operator.SUBTRACTION),
}


def is_unary_context(previous: Optional[Token]) -> bool:
    """Return True if a +/- following `previous` is a unary operator.

    Unary at the start of the expression, after "(" or ",", and after any
    operator (so "- -3" chains). Binary after operands, ")" and unknowns.
    """
    if previous is None:
        return True
    if previous.kind is TokenKind.META:
        return previous.subkind in {Meta.LEFT_PARENTHESIS, Meta.COMMA}
    return previous.kind is TokenKind.OPERATOR


def classify(lexeme: str, position: int, previous: Optional[Token],
             rules: ClassifierRules = DEFAULT_RULES) -> Token:
    """Classify one lexeme.

    Args:
        lexeme: Non-empty lexeme text
        position: Offset of the lexeme in the original expression
        previous: Last emitted token, or None at the start of the expression
        rules: Numeric/identifier predicates and function registry

    Returns:
        OperatorToken, MetaToken, OperandToken or UnknownToken
    """
    if lexeme in _SIGNS:
        unary, binary = _SIGNS[lexeme]
        return OperatorToken(lexeme, position, unary if is_unary_context(previous) else binary)

    if lexeme in _SYMBOLS:
        token_cls, subkind = _SYMBOLS[lexeme]
        return token_cls(lexeme, position, subkind)

    if rules.is_number(lexeme):
        return OperandToken(lexeme, position, Operand.NUMERIC)

    if rules.is_function(lexeme):
        return OperatorToken(lexeme, position, Operator.FUNCTION)

    if rules.is_identifier(lexeme):
        return OperandToken(lexeme, position, Operand.VARIABLE)

    return UnknownToken(lexeme, position)
