# frontend/pipeline.py
"""Convenience functions for the split -> tokenize pipeline."""

from __future__ import annotations
import logging
from typing import List, Optional

from frontend import patterns
from frontend.classifier import ClassifierRules, DEFAULT_RULES
from frontend.splitter import PatternLike, split
from frontend.tokenizer import tokenize
from frontend.tokens import Token

logger = logging.getLogger(__name__)


def lex_expression(src: Optional[str], pattern: PatternLike = patterns.ALL,
                   rules: ClassifierRules = DEFAULT_RULES) -> List[Token]:
    """Split and tokenize an expression in one go.

    Args:
        src: Expression text
        pattern: Delimiter pattern for the splitter
        rules: Classifier collaborators

    Returns:
        All tokens of the expression

    Raises:
        InvalidArgument: src is None or empty
    """
    tokens = list(tokenize(split(src, pattern), rules))
    logger.debug("Tokenized %d characters into %d tokens", len(src), len(tokens))
    return tokens
