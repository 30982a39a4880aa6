# Ethan Doughty
# tokenizer.py
"""Turn a lexeme sequence into a lazy stream of tokens.

Whitespace-only lexemes are never classified or emitted, but their length
still counts toward the position of later tokens. They are also invisible
as "previous" context, so in "3 - 2" the minus follows the operand 3 and
resolves to Subtraction.
"""

from __future__ import annotations
from typing import Iterable, Iterator, Optional

from frontend.classifier import ClassifierRules, DEFAULT_RULES, classify
from frontend.errors import InvalidArgument
from frontend.tokens import Token


def _tokens(lexemes: Iterable[str], rules: ClassifierRules) -> Iterator[Token]:
    position = 0
    previous: Optional[Token] = None

    for lexeme in lexemes:
        if lexeme.strip():
            current = classify(lexeme, position, previous, rules)
            previous = current
            yield current

        position += len(lexeme)


def tokenize(lexemes: Optional[Iterable[str]],
             rules: ClassifierRules = DEFAULT_RULES) -> Iterator[Token]:
    """Classify lexemes into tokens, one lexeme per pull.

    Args:
        lexemes: Lexemes in input order (e.g. the output of split())
        rules: Classifier collaborators (predicates, function registry)

    Returns:
        Lazy, single-use iterator of tokens

    Raises:
        InvalidArgument: lexemes is None (raised immediately)
    """
    if lexemes is None:
        raise InvalidArgument("parameter cannot be None", "lexemes")
    return _tokens(lexemes, rules)
