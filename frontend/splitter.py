# Ethan Doughty
# splitter.py
"""Split an expression string into lexemes.

The splitter is a thin layer over re.split: the delimiter pattern is
expected to wrap its delimiters in a capturing group so the delimiter text
comes back as lexemes too. Whitespace is kept (the tokenizer needs its
length for position tracking); only None and empty fragments are dropped.
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Iterator, Optional, Union

from frontend import patterns
from frontend.errors import InvalidArgument

PatternLike = Union[str, "re.Pattern[str]"]


@dataclass(frozen=True)
class Lexeme:
    """A split fragment and the offset of its first character."""
    text: str
    offset: int

    @property
    def end(self) -> int:
        return self.offset + len(self.text)


def _check_expression(expression: Optional[str]) -> None:
    if expression is None or expression == "":
        raise InvalidArgument("parameter cannot be None or empty", "expression")


def _fragments(expression: str, pattern: PatternLike) -> Iterator[str]:
    # Non-participating groups come back as None, adjacent matches as ""
    for fragment in re.split(pattern, expression):
        if fragment:
            yield fragment


def split(expression: Optional[str], pattern: PatternLike = patterns.ALL) -> Iterator[str]:
    """Split an expression into lexemes.

    Args:
        expression: Raw expression text
        pattern: Delimiter pattern (string or compiled), delimiters captured

    Returns:
        Lazy iterator over the non-empty fragments, left to right

    Raises:
        InvalidArgument: expression is None or empty (raised immediately)
    """
    _check_expression(expression)
    return _fragments(expression, pattern)


def split_lexemes(expression: Optional[str], pattern: PatternLike = patterns.ALL) -> Iterator[Lexeme]:
    """Like split(), but pair each fragment with its offset.

    Offsets are running sums of fragment lengths, the same accounting the
    tokenizer uses for Token.position.
    """
    _check_expression(expression)

    def _with_offsets() -> Iterator[Lexeme]:
        offset = 0
        for text in _fragments(expression, pattern):
            yield Lexeme(text, offset)
            offset += len(text)

    return _with_offsets()
