"""Tokenize an expression document line by line."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from frontend import patterns
from frontend.classifier import ClassifierRules, DEFAULT_RULES
from frontend.splitter import PatternLike, split
from frontend.tokenizer import tokenize
from frontend.tokens import Token
from analysis.diagnostics import Diagnostic, diagnose, STRICT_ONLY_CODES


@dataclass
class DocumentAnalysis:
    """Tokens and diagnostics for one document.

    Each non-blank line that does not start with '#' is an independent
    expression; token positions are code-point offsets within their line.
    The source lines are kept so LSP ranges can be converted to client units.
    """
    tokens: Dict[int, List[Token]] = field(default_factory=dict)
    diagnostics: List[Tuple[int, Diagnostic]] = field(default_factory=list)
    lines: List[str] = field(default_factory=list)

    def token_at(self, line: int, character: int) -> Optional[Token]:
        """Return the token covering (line, character), if any."""
        for tok in self.tokens.get(line, []):
            if tok.position <= character < tok.end:
                return tok
        return None


def is_expression_line(text: str) -> bool:
    stripped = text.strip()
    return bool(stripped) and not stripped.startswith("#")


def analyze_document(source: str, pattern: PatternLike = patterns.ALL,
                     rules: ClassifierRules = DEFAULT_RULES,
                     strict: bool = False) -> DocumentAnalysis:
    """Tokenize every expression line and collect diagnostics.

    Args:
        source: Full document text
        pattern: Delimiter pattern for the splitter
        rules: Classifier collaborators
        strict: If True, keep advisory diagnostics

    Returns:
        DocumentAnalysis keyed by 0-based line number
    """
    result = DocumentAnalysis(lines=source.split("\n"))

    for line_num, text in enumerate(result.lines):
        # Blank lines would be rejected by split(); they hold no tokens anyway
        if not is_expression_line(text):
            continue

        tokens = list(tokenize(split(text, pattern), rules))
        result.tokens[line_num] = tokens

        for d in diagnose(tokens):
            if strict or d.code not in STRICT_ONLY_CODES:
                result.diagnostics.append((line_num, d))

    return result
