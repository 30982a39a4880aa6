"""Code actions (quick fixes) for mathlex diagnostics."""
from __future__ import annotations

from typing import List

from lsprotocol import types

from lsp.diagnostics import position_codec


def _edit(uri: str, range_: types.Range, new_text: str) -> types.WorkspaceEdit:
    return types.WorkspaceEdit(
        changes={uri: [types.TextEdit(range=range_, new_text=new_text)]}
    )


def code_actions_for_diagnostic(
    diagnostic: types.Diagnostic,
    uri: str,
    source_lines: list[str],
) -> List[types.CodeAction]:
    """Generate code actions for a single diagnostic.

    Args:
        diagnostic: LSP diagnostic to generate fixes for
        uri: Document URI
        source_lines: Source code split into lines

    Returns:
        List of CodeAction quick fixes (may be empty)
    """
    actions: List[types.CodeAction] = []
    code = diagnostic.code
    line_num = diagnostic.range.start.line

    if line_num < 0 or line_num >= len(source_lines):
        return actions

    line_text = source_lines[line_num]
    # Diagnostic ranges are in client units; slicing needs code points
    span = position_codec.range_from_client_units(source_lines, diagnostic.range)

    if code == "W_UNKNOWN_TOKEN":
        lexeme = line_text[span.start.character:span.end.character]
        actions.append(
            types.CodeAction(
                title=f"Remove unrecognized {lexeme!r}",
                kind=types.CodeActionKind.QuickFix,
                diagnostics=[diagnostic],
                edit=_edit(uri, diagnostic.range, ""),
            )
        )

    elif code == "W_UNBALANCED_PARENTHESIS":
        start = span.start.character
        if line_text[start:start + 1] == "(":
            # Unclosed '(': close it at the end of the line
            end = position_codec.position_to_client_units(
                source_lines, types.Position(line=line_num, character=len(line_text.rstrip()))
            )
            actions.append(
                types.CodeAction(
                    title="Insert missing ')'",
                    kind=types.CodeActionKind.QuickFix,
                    diagnostics=[diagnostic],
                    edit=_edit(uri, types.Range(start=end, end=end), ")"),
                )
            )
        else:
            actions.append(
                types.CodeAction(
                    title="Remove unmatched ')'",
                    kind=types.CodeActionKind.QuickFix,
                    diagnostics=[diagnostic],
                    edit=_edit(uri, diagnostic.range, ""),
                )
            )

    return actions
