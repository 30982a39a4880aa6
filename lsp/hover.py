"""Hover provider for showing the token under the cursor."""
from __future__ import annotations

from typing import Optional
from lsprotocol import types

from frontend.tokens import TokenKind
from lsp.diagnostics import position_codec, to_client_range
from lsp.document import DocumentAnalysis


def get_hover(analysis: DocumentAnalysis, line: int, character: int) -> Optional[types.Hover]:
    """Get hover information for the token at the given position.

    Args:
        analysis: Tokenized document
        line: Zero-indexed line number
        character: Zero-indexed character position in line (UTF-16 units)

    Returns:
        Hover object describing the token, or None if no token at cursor
    """
    if line not in analysis.tokens:
        return None

    if analysis.lines:
        character = position_codec.position_from_client_units(
            analysis.lines, types.Position(line=line, character=character)
        ).character

    tok = analysis.token_at(line, character)
    if tok is None:
        return None

    if tok.kind is TokenKind.UNKNOWN:
        hover_text = f"(unknown) `{tok.lexeme}` at offset {tok.position}"
    else:
        hover_text = f"({str(tok.kind).lower()}) `{tok.lexeme}`: {tok.subkind} at offset {tok.position}"

    return types.Hover(
        contents=types.MarkupContent(
            kind=types.MarkupKind.Markdown,
            value=hover_text,
        ),
        range=to_client_range(analysis.lines, line, tok.position, tok.end),
    )
