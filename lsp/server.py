"""LSP server for the mathlex expression tokenizer."""
from __future__ import annotations

import asyncio
import hashlib
import logging
import re
import time
from dataclasses import dataclass
from typing import Dict, List, Optional

from pygls.lsp.server import LanguageServer
from lsprotocol import types

from frontend import patterns
from frontend.classifier import ClassifierRules
from frontend.splitter import PatternLike
from analysis.functions import build_registry
from lsp.code_actions import code_actions_for_diagnostic
from lsp.diagnostics import internal_error_diagnostic, to_lsp_diagnostic
from lsp.document import DocumentAnalysis, analyze_document
from lsp.hover import get_hover

logger = logging.getLogger(__name__)


@dataclass
class AnalysisCache:
    """Cache for last-good analysis results per document."""

    analysis: DocumentAnalysis
    source_hash: str
    settings_hash: str  # Hash of settings used during analysis


# Global cache: URI -> AnalysisCache
analysis_cache: Dict[str, AnalysisCache] = {}

# Debouncing: URI -> asyncio.Task
debounce_tasks: Dict[str, asyncio.Task] = {}

# Server settings (updated via workspace/didChangeConfiguration or initializationOptions)
server_settings: Dict[str, object] = {
    "strict": False,
    "analyze_on_change": False,
    "functions": [],
    "include_default_functions": True,
    "pattern": None,
}

# Create server instance
server = LanguageServer(
    "mathlex", "v1.0", text_document_sync_kind=types.TextDocumentSyncKind.Full
)


def _compute_hash(source: str) -> str:
    """Compute hash of source text for cache validation."""
    return hashlib.sha256(source.encode("utf-8")).hexdigest()


def _compute_settings_hash() -> str:
    """Compute hash of current server settings for cache validation."""
    settings_str = (
        f"{server_settings['strict']}{sorted(server_settings['functions'])}"
        f"{server_settings['include_default_functions']}{server_settings['pattern']}"
    )
    return hashlib.sha256(settings_str.encode("utf-8")).hexdigest()


def current_rules() -> ClassifierRules:
    """Classifier rules for the current function settings."""
    registry = build_registry(
        server_settings["functions"],
        include_defaults=bool(server_settings["include_default_functions"]),
    )
    return ClassifierRules().with_functions(registry)


def current_pattern() -> PatternLike:
    """Delimiter pattern from settings, falling back to the default on bad regexes."""
    pattern = server_settings["pattern"]
    if not pattern:
        return patterns.ALL
    try:
        return re.compile(str(pattern))
    except re.error as e:
        logger.error("Invalid delimiter pattern %r, using default: %s", pattern, e)
        return patterns.ALL


def apply_settings(options: Optional[dict]) -> None:
    """Update server_settings from a client settings dict (camelCase keys)."""
    if not options or not isinstance(options, dict):
        return
    if "strict" in options:
        server_settings["strict"] = bool(options["strict"])
    if "analyzeOnChange" in options:
        server_settings["analyze_on_change"] = bool(options["analyzeOnChange"])
    if "functions" in options and isinstance(options["functions"], list):
        server_settings["functions"] = [str(name) for name in options["functions"]]
    if "includeDefaultFunctions" in options:
        server_settings["include_default_functions"] = bool(options["includeDefaultFunctions"])
    if "pattern" in options:
        server_settings["pattern"] = options["pattern"] or None


def _publish(ls: LanguageServer, uri: str, diagnostics: List[types.Diagnostic]) -> None:
    ls.text_document_publish_diagnostics(
        types.PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


def _validate(ls: LanguageServer, uri: str, source: str, force: bool = False) -> None:
    """Tokenize an expression document and publish diagnostics.

    Args:
        ls: Language server instance
        uri: Document URI
        source: Document source text
        force: If True, bypass cache and force re-analysis
    """
    start_time = time.time()
    logger.info("Tokenizing %s", uri)

    source_hash = _compute_hash(source)
    settings_hash = _compute_settings_hash()

    # Check cache: skip re-analysis if source and settings unchanged
    if not force and uri in analysis_cache:
        cached = analysis_cache[uri]
        if cached.source_hash == source_hash and cached.settings_hash == settings_hash:
            _publish(ls, uri, [
                to_lsp_diagnostic(d, line, cached.analysis.lines)
                for line, d in cached.analysis.diagnostics
            ])
            logger.info("Cache hit for %s (source unchanged)", uri)
            return

    try:
        analysis = analyze_document(
            source,
            pattern=current_pattern(),
            rules=current_rules(),
            strict=bool(server_settings["strict"]),
        )

        _publish(ls, uri, [
            to_lsp_diagnostic(d, line, analysis.lines) for line, d in analysis.diagnostics
        ])

        analysis_cache[uri] = AnalysisCache(
            analysis=analysis,
            source_hash=source_hash,
            settings_hash=settings_hash,
        )

        elapsed = time.time() - start_time
        logger.info("Tokenizing complete: %s (%.3fs, %d diagnostics)",
                    uri, elapsed, len(analysis.diagnostics))

    except Exception as e:
        # Internal error: tokenizer bug
        _publish(ls, uri, [internal_error_diagnostic(f"Internal error: {str(e)}")])
        logger.error("Tokenizing failed for %s: %s", uri, e, exc_info=True)


@server.feature(types.INITIALIZE)
def initialize(ls: LanguageServer, params: types.InitializeParams):
    """Handle initialize request: apply initialization options."""
    logger.info("Server initialized")
    apply_settings(params.initialization_options)


@server.feature(types.TEXT_DOCUMENT_DID_OPEN)
async def did_open(ls: LanguageServer, params: types.DidOpenTextDocumentParams):
    """Handle document open: tokenize immediately."""
    _validate(ls, params.text_document.uri, params.text_document.text)


@server.feature(types.TEXT_DOCUMENT_DID_SAVE)
async def did_save(ls: LanguageServer, params: types.DidSaveTextDocumentParams):
    """Handle document save: tokenize immediately (no debounce)."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    _validate(ls, params.text_document.uri, doc.source)


@server.feature(types.TEXT_DOCUMENT_DID_CLOSE)
def did_close(ls: LanguageServer, params: types.DidCloseTextDocumentParams):
    """Handle document close: drop cached tokens and pending work."""
    uri = params.text_document.uri
    analysis_cache.pop(uri, None)
    task = debounce_tasks.pop(uri, None)
    if task is not None:
        task.cancel()


@server.feature(types.TEXT_DOCUMENT_DID_CHANGE)
async def did_change(ls: LanguageServer, params: types.DidChangeTextDocumentParams):
    """Handle document change: debounce tokenizing by 500ms (if enabled)."""
    if not server_settings["analyze_on_change"]:
        return

    uri = params.text_document.uri

    # Cancel existing debounce task if any
    if uri in debounce_tasks:
        debounce_tasks[uri].cancel()

    async def debounced_validate():
        """Wait 500ms then validate."""
        await asyncio.sleep(0.5)
        doc = ls.workspace.get_text_document(uri)
        _validate(ls, uri, doc.source)
        # Clean up task reference
        if uri in debounce_tasks:
            del debounce_tasks[uri]

    # Schedule new debounced validation
    task = asyncio.create_task(debounced_validate())
    debounce_tasks[uri] = task


@server.feature(types.TEXT_DOCUMENT_HOVER)
def hover(ls: LanguageServer, params: types.HoverParams) -> Optional[types.Hover]:
    """Handle hover request: describe the token under the cursor."""
    uri = params.text_document.uri

    if uri not in analysis_cache:
        return None

    return get_hover(
        analysis_cache[uri].analysis,
        params.position.line,
        params.position.character,
    )


@server.feature(
    types.TEXT_DOCUMENT_CODE_ACTION,
    types.CodeActionOptions(code_action_kinds=[types.CodeActionKind.QuickFix]),
)
def code_action(
    ls: LanguageServer, params: types.CodeActionParams
) -> Optional[list[types.CodeAction]]:
    """Handle code action request: return quick fixes for diagnostics."""
    uri = params.text_document.uri
    doc = ls.workspace.get_text_document(uri)

    source_lines = doc.source.split("\n")
    actions: list[types.CodeAction] = []

    for diagnostic in params.context.diagnostics:
        actions.extend(code_actions_for_diagnostic(diagnostic, uri, source_lines))

    return actions if actions else None


@server.feature(types.WORKSPACE_DID_CHANGE_CONFIGURATION)
def did_change_configuration(
    ls: LanguageServer, params: types.DidChangeConfigurationParams
):
    """Handle configuration changes from the client."""
    settings = getattr(params, "settings", None)
    if settings and isinstance(settings, dict):
        apply_settings(settings.get("mathlex", {}))

    # Re-tokenize all open documents with new settings
    for uri in list(analysis_cache.keys()):
        doc = ls.workspace.get_text_document(uri)
        _validate(ls, uri, doc.source)
