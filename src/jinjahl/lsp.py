"""Language server for Jinja highlighting: pushed decorations and semantic tokens."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from lsprotocol.types import (
    INITIALIZE,
    SHUTDOWN,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL,
    WORKSPACE_DID_CHANGE_CONFIGURATION,
    DidChangeConfigurationParams,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    InitializeParams,
    SemanticTokens,
    SemanticTokensLegend,
    SemanticTokensParams,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer
from pygls.workspace import PositionCodec

from jinjahl import __version__
from jinjahl.config import HighlightConfig, load_config
from jinjahl.errors import ConfigError
from jinjahl.policy import is_eligible
from jinjahl.scanner import scan
from jinjahl.scheduler import TimerLoop
from jinjahl.session import HighlightSession
from jinjahl.tokens import Category, Span, Token
from jinjahl.tokens import Position as TextPosition

logger = logging.getLogger(__name__)

DECORATIONS_NOTIFICATION = "jinjahl/decorations"
SETTINGS_SECTION = "jinjahl"

LEGEND = SemanticTokensLegend(
    token_types=[category.value for category in Category],
    token_modifiers=[],
)
_TYPE_INDEX: dict[Category, int] = {category: i for i, category in enumerate(Category)}


class JinjaLanguageServer(LanguageServer):
    """Language server holding one highlight session per open document."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.highlight_config = HighlightConfig()
        self.sessions: dict[str, HighlightSession] = {}
        # Timer source for debouncing; the running asyncio loop when unset
        self.scheduler_loop: TimerLoop | None = None

    def open_session(self, uri: str) -> HighlightSession:
        self.close_session(uri)
        loop = self.scheduler_loop
        if loop is None:
            loop = asyncio.get_running_loop()
        session = HighlightSession(NotificationRenderer(self), self.highlight_config, loop=loop)
        self.sessions[uri] = session
        session.set_active(WorkspaceDocument(self, uri))
        return session

    def close_session(self, uri: str) -> None:
        session = self.sessions.pop(uri, None)
        if session is not None:
            session.dispose()

    def close_all(self) -> None:
        for uri in list(self.sessions):
            self.close_session(uri)

    def update_config(self, config: HighlightConfig) -> None:
        """Apply new settings and re-highlight every open document."""
        self.highlight_config = config
        for session in self.sessions.values():
            session.config = config
            session.trigger(throttled=False)


class WorkspaceDocument:
    """Session document backed by the server's workspace; text is always current."""

    def __init__(self, ls: LanguageServer, uri: str) -> None:
        self._ls = ls
        self._uri = uri

    @property
    def path(self) -> str:
        return self._uri

    @property
    def kind(self) -> str:
        return self._ls.workspace.get_text_document(self._uri).language_id or ""

    def get_text(self) -> str:
        return self._ls.workspace.get_text_document(self._uri).source


# ---------------------------------------------------------------------------
# Pushed decorations
# ---------------------------------------------------------------------------


def _client_position(codec: PositionCodec, text: str, pos: TextPosition) -> dict[str, int]:
    line_start = pos.offset - pos.column
    return {"line": pos.line, "character": codec.client_num_units(text[line_start : pos.offset])}


def _range_json(codec: PositionCodec, text: str, span: Span) -> dict[str, dict[str, int]]:
    """Convert a span to an LSP range in the client's position encoding."""
    return {
        "start": _client_position(codec, text, span.start),
        "end": _client_position(codec, text, span.end),
    }


class NotificationStyle:
    """Style handle that publishes its ranges to the client."""

    def __init__(self, ls: LanguageServer, category: Category) -> None:
        self._ls = ls
        self._category = category
        self._decorated: set[str] = set()

    def apply(self, path: str, spans: Sequence[Span]) -> None:
        doc = self._ls.workspace.get_text_document(path)
        codec, text = doc.position_codec, doc.source
        self._publish(path, [_range_json(codec, text, span) for span in spans])
        self._decorated.add(path)

    def clear(self, path: str) -> None:
        self._publish(path, [])
        self._decorated.discard(path)

    def dispose(self) -> None:
        for uri in sorted(self._decorated):
            self._publish(uri, [])
        self._decorated.clear()

    def _publish(self, uri: str, ranges: list[dict[str, dict[str, int]]]) -> None:
        self._ls.protocol.notify(
            DECORATIONS_NOTIFICATION,
            {"uri": uri, "category": self._category.value, "ranges": ranges},
        )


class NotificationRenderer:
    def __init__(self, ls: LanguageServer) -> None:
        self._ls = ls

    def create_style(self, category: Category) -> NotificationStyle:
        return NotificationStyle(self._ls, category)


# ---------------------------------------------------------------------------
# Semantic tokens
# ---------------------------------------------------------------------------


def encode_semantic_tokens(
    text: str, tokens: Sequence[Token], codec: PositionCodec | None = None
) -> list[int]:
    """Encode tokens in document order as LSP relative semantic token data.

    Columns and lengths are counted in the codec's client units (UTF-16
    when no codec is given). Tokens spanning several lines are split into
    one entry per line.
    """
    if codec is None:
        codec = PositionCodec()
    data: list[int] = []
    prev_line = 0
    prev_col = 0
    for tok in tokens:
        type_index = _TYPE_INDEX[tok.category]
        line = tok.span.start.line
        offset = tok.span.start.offset
        line_start = offset - tok.span.start.column
        end = tok.span.end.offset
        while offset < end:
            newline = text.find("\n", offset, end)
            piece_end = end if newline < 0 else newline
            if piece_end > offset:
                col = codec.client_num_units(text[line_start:offset])
                length = codec.client_num_units(text[offset:piece_end])
                delta_line = line - prev_line
                delta_col = col - prev_col if delta_line == 0 else col
                data.extend((delta_line, delta_col, length, type_index, 0))
                prev_line, prev_col = line, col
            if newline < 0:
                break
            offset = line_start = newline + 1
            line += 1
    return data


def _semantic_tokens(ls: JinjaLanguageServer, uri: str) -> SemanticTokens:
    doc = ls.workspace.get_text_document(uri)
    if not is_eligible(uri, doc.language_id or "", ls.highlight_config):
        return SemanticTokens(data=[])
    source = doc.source
    return SemanticTokens(data=encode_semantic_tokens(source, scan(source), doc.position_codec))


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


def _settings_section(settings: Any) -> Mapping[str, Any] | None:
    """Return the jinjahl section of client settings, or the settings themselves."""
    if not isinstance(settings, Mapping):
        return None
    section = settings.get(SETTINGS_SECTION)
    if isinstance(section, Mapping):
        return section
    return settings


def _initial_config(root_path: str | None, options: Any) -> HighlightConfig:
    """Settings from jinjahl.toml in the workspace root, overridden by client options."""
    config = HighlightConfig()
    if root_path:
        try:
            config = load_config(None, Path(root_path))
        except ConfigError as exc:
            logger.warning("%s; using default settings", exc.format())
    return HighlightConfig.from_mapping(_settings_section(options), base=config)


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------

server = JinjaLanguageServer(
    "jinjahl-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


@server.feature(INITIALIZE)
def initialize(ls: JinjaLanguageServer, params: InitializeParams) -> None:
    ls.highlight_config = _initial_config(params.root_path, params.initialization_options)


@server.feature(WORKSPACE_DID_CHANGE_CONFIGURATION)
def did_change_configuration(
    ls: JinjaLanguageServer, params: DidChangeConfigurationParams
) -> None:
    section = _settings_section(params.settings)
    ls.update_config(HighlightConfig.from_mapping(section, base=ls.highlight_config))


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: JinjaLanguageServer, params: DidOpenTextDocumentParams) -> None:
    ls.open_session(params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: JinjaLanguageServer, params: DidChangeTextDocumentParams) -> None:
    session = ls.sessions.get(params.text_document.uri)
    if session is None or session.active is None:
        return
    session.document_changed(session.active)


@server.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(ls: JinjaLanguageServer, params: DidCloseTextDocumentParams) -> None:
    ls.close_session(params.text_document.uri)


@server.feature(SHUTDOWN)
def shutdown(ls: JinjaLanguageServer, params: None) -> None:
    ls.close_all()


@server.feature(TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL, LEGEND)
def semantic_tokens_full(ls: JinjaLanguageServer, params: SemanticTokensParams) -> SemanticTokens:
    return _semantic_tokens(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
