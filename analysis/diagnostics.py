# Ethan Doughty
# diagnostics.py

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List

from frontend.tokens import Meta, Operator, Token, TokenKind

# Advisory codes, only reported in strict mode
STRICT_ONLY_CODES = {
    "W_TRAILING_OPERATOR",
}

# ---------------
# Diagnostic dataclass
# ---------------

@dataclass(frozen=True)
class Diagnostic:
    """Positioned warning derived from a token stream.

    Fields:
        position: Zero-based offset of the offending lexeme
        length: Length of the offending lexeme
        code: Warning code (e.g. "W_UNKNOWN_TOKEN")
        message: Human-readable message (no column prefix)
    """
    position: int
    length: int
    code: str
    message: str

    @property
    def col(self) -> int:
        """1-based column of the diagnostic."""
        return self.position + 1

    def __str__(self) -> str:
        return f"{self.code} col {self.col}: {self.message}"


def has_errors(diagnostics: Iterable[Diagnostic]) -> bool:
    """Check whether any diagnostic is not advisory."""
    return any(d.code not in STRICT_ONLY_CODES for d in diagnostics)

# ---------------
# Token checks
# ---------------

def diagnose(tokens: Iterable[Token]) -> List[Diagnostic]:
    """Collect diagnostics for a token stream.

    Reports unknown lexemes, unbalanced parentheses and a dangling
    operator at the end of the expression.

    Args:
        tokens: Tokens in stream order

    Returns:
        Diagnostics ordered by position
    """
    diagnostics: List[Diagnostic] = []
    open_parens: List[Token] = []
    last = None

    for tok in tokens:
        last = tok
        if tok.kind is TokenKind.UNKNOWN:
            diagnostics.append(Diagnostic(
                tok.position, len(tok.lexeme), "W_UNKNOWN_TOKEN",
                f"Unrecognized lexeme {tok.lexeme!r}"
            ))
        elif tok.subkind is Meta.LEFT_PARENTHESIS:
            open_parens.append(tok)
        elif tok.subkind is Meta.RIGHT_PARENTHESIS:
            if open_parens:
                open_parens.pop()
            else:
                diagnostics.append(Diagnostic(
                    tok.position, 1, "W_UNBALANCED_PARENTHESIS",
                    "Closing parenthesis has no matching '('"
                ))

    for tok in open_parens:
        diagnostics.append(Diagnostic(
            tok.position, 1, "W_UNBALANCED_PARENTHESIS",
            "Parenthesis is never closed"
        ))

    if last is not None and last.kind is TokenKind.OPERATOR and last.subkind is not Operator.FUNCTION:
        diagnostics.append(Diagnostic(
            last.position, len(last.lexeme), "W_TRAILING_OPERATOR",
            f"Expression ends with operator {last.lexeme!r}"
        ))

    diagnostics.sort(key=lambda d: d.position)
    return diagnostics
