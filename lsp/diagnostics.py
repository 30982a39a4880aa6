"""Convert mathlex Diagnostic objects to LSP Diagnostic objects."""
from __future__ import annotations

from typing import Optional, Sequence

from lsprotocol import types
from pygls.workspace.position_codec import PositionCodec

from analysis.diagnostics import Diagnostic as MathlexDiagnostic, STRICT_ONLY_CODES

# Codes that make the expression unparseable
ERROR_CODES = {
    "W_UNKNOWN_TOKEN",
    "W_UNBALANCED_PARENTHESIS",
}

# Token offsets are code points; LSP positions default to UTF-16 code units
position_codec = PositionCodec(encoding=types.PositionEncodingKind.Utf16)


def to_client_range(lines: Optional[Sequence[str]], line: int,
                    start: int, end: int) -> types.Range:
    """Build a range from code-point offsets on one line, in client units."""
    range_ = types.Range(
        start=types.Position(line=line, character=start),
        end=types.Position(line=line, character=end),
    )
    if not lines:
        return range_
    return position_codec.range_to_client_units(lines, range_)


def to_lsp_diagnostic(d: MathlexDiagnostic, line: int,
                      lines: Optional[Sequence[str]] = None) -> types.Diagnostic:
    """Convert a mathlex Diagnostic to an LSP Diagnostic.

    Args:
        d: mathlex diagnostic with a 0-based offset into its line
        line: 0-based line number of the expression
        lines: Document lines; when given, columns are converted to UTF-16 units

    Returns:
        LSP Diagnostic spanning the offending lexeme
    """
    range_ = to_client_range(lines, line, d.position, d.position + max(d.length, 1))

    if d.code in ERROR_CODES:
        severity = types.DiagnosticSeverity.Error
    elif d.code in STRICT_ONLY_CODES:
        severity = types.DiagnosticSeverity.Information
    else:
        severity = types.DiagnosticSeverity.Warning

    return types.Diagnostic(
        range=range_,
        severity=severity,
        code=d.code,
        source="mathlex",
        message=d.message,
    )


def internal_error_diagnostic(message: str) -> types.Diagnostic:
    """Single document-level diagnostic for failures inside the server."""
    return types.Diagnostic(
        range=types.Range(
            start=types.Position(line=0, character=0),
            end=types.Position(line=0, character=0),
        ),
        severity=types.DiagnosticSeverity.Error,
        source="mathlex",
        message=message,
    )
