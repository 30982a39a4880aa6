# Ethan Doughty
# tokens.py
"""Token data model for the expression tokenizer.

Tokens form a closed set of four variants. Every token carries its lexeme,
its zero-based position in the original expression and a TokenKind tag;
the operator, meta and operand variants add a typed sub-kind.
"""

from __future__ import annotations
import enum
from dataclasses import dataclass
from typing import ClassVar, Optional, Union


class TokenKind(enum.Enum):
    OPERATOR = "Operator"
    META = "Meta"
    OPERAND = "Operand"
    UNKNOWN = "Unknown"

    def __str__(self):
        return self.value


class Operator(enum.Enum):
    UNARY_PLUS = "UnaryPlus"
    UNARY_MINUS = "UnaryMinus"
    ADDITION = "Addition"
    SUBTRACTION = "Subtraction"
    MULTIPLICATION = "Multiplication"
    DIVISION = "Division"
    FUNCTION = "Function"

    def __str__(self):
        return self.value

    @property
    def is_unary(self) -> bool:
        return self in {Operator.UNARY_PLUS, Operator.UNARY_MINUS}


class Meta(enum.Enum):
    LEFT_PARENTHESIS = "LeftParenthesis"
    RIGHT_PARENTHESIS = "RightParenthesis"
    COMMA = "Comma"

    def __str__(self):
        return self.value


class Operand(enum.Enum):
    NUMERIC = "Numeric"
    VARIABLE = "Variable"

    def __str__(self):
        return self.value


SubKind = Union[Operator, Meta, Operand]


@dataclass(frozen=True)
class Token:
    """Base class for all tokens."""
    lexeme: str
    position: int

    kind: ClassVar[TokenKind]

    @property
    def subkind(self) -> Optional[SubKind]:
        return None

    @property
    def end(self) -> int:
        """Offset one past the last character of the lexeme."""
        return self.position + len(self.lexeme)

    def __str__(self) -> str:
        if self.subkind is None:
            return f"{self.kind}({self.lexeme!r})@{self.position}"
        return f"{self.kind}.{self.subkind}({self.lexeme!r})@{self.position}"


@dataclass(frozen=True)
class OperatorToken(Token):
    """Arithmetic operator or function name."""
    type: Operator

    kind: ClassVar[TokenKind] = TokenKind.OPERATOR

    @property
    def subkind(self) -> Operator:
        return self.type

    @property
    def is_unary(self) -> bool:
        return self.type.is_unary


@dataclass(frozen=True)
class MetaToken(Token):
    """Structural punctuation: parentheses and comma."""
    type: Meta

    kind: ClassVar[TokenKind] = TokenKind.META

    @property
    def subkind(self) -> Meta:
        return self.type


@dataclass(frozen=True)
class OperandToken(Token):
    """Numeric literal or variable reference."""
    type: Operand

    kind: ClassVar[TokenKind] = TokenKind.OPERAND

    @property
    def subkind(self) -> Operand:
        return self.type


@dataclass(frozen=True)
class UnknownToken(Token):
    """Lexeme that matched no other variant."""

    kind: ClassVar[TokenKind] = TokenKind.UNKNOWN
