"""Language-server features: semantic tokens, diagnostics, completion and signature help."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from kelplsp.line_index import LineIndex, Position, normalize_line_endings
from kelplsp.messages import (
    Expectation,
    ExpectationKind,
    ParseError,
    generate_message_error,
)

SERVER_SOURCE = "kelp-lsp"

DIAGNOSTIC_SEVERITY_ERROR = 1
COMPLETION_KIND_KEYWORD = 14
INSERT_TEXT_FORMAT_SNIPPET = 2
TEXT_DOCUMENT_SYNC_FULL = 1

COMPLETION_TRIGGER_CHARACTERS = (" ", "/", ".", ":", "(", "[", ",", "=", "{", "@")
SIGNATURE_TRIGGER_CHARACTERS = (" ",)

LEGEND_TYPES: tuple[str, ...] = (
    "namespace",
    "class",
    "enum",
    "interface",
    "struct",
    "typeParameter",
    "type",
    "parameter",
    "variable",
    "property",
    "enumMember",
    "decorator",
    "event",
    "function",
    "method",
    "macro",
    "comment",
    "string",
    "keyword",
    "number",
    "regexp",
    "operator",
)

_SNIPPETS = {
    "(": "($0)",
    "{": "{$0}",
    "[": "[$0]",
    '"': '"$0"',
    "'": "'$0'",
}


class SemanticTokenKind(enum.Enum):
    """Kinds of semantic tokens the parser reports; values are legend names."""

    NAMESPACE = "namespace"
    CLASS = "class"
    ENUM = "enum"
    INTERFACE = "interface"
    STRUCT = "struct"
    TYPE_PARAMETER = "typeParameter"
    TYPE = "type"
    PARAMETER = "parameter"
    VARIABLE = "variable"
    PROPERTY = "property"
    ENUM_MEMBER = "enumMember"
    DECORATOR = "decorator"
    EVENT = "event"
    FUNCTION = "function"
    METHOD = "method"
    MACRO = "macro"
    COMMENT = "comment"
    STRING = "string"
    KEYWORD = "keyword"
    NUMBER = "number"
    REGULAR_EXPRESSION = "regexp"
    OPERATOR = "operator"


@dataclass(frozen=True)
class ParserSemanticToken:
    """A token span in character offsets, as found by the parser."""

    start: int
    end: int
    kind: SemanticTokenKind


@dataclass(frozen=True)
class LspSemanticToken:
    """A token in the relative encoding used by the protocol."""

    delta_line: int
    delta_start: int
    length: int
    token_type: int
    token_modifiers: int = 0

    def encode(self) -> tuple[int, int, int, int, int]:
        return (
            self.delta_line,
            self.delta_start,
            self.length,
            self.token_type,
            self.token_modifiers,
        )


@dataclass(frozen=True)
class Suggestion:
    """Something the parser would have accepted at a cursor offset."""

    start: int
    end: int
    expected: Expectation


@dataclass(frozen=True)
class Signature:
    """A signature found around the cursor, with (label, documentation) parameters."""

    label: str
    parameters: Sequence[tuple[str, str | None]] = ()
    active_parameter: int | None = None
    documentation: str | None = None


@dataclass(frozen=True)
class ValidationError:
    """A semantic error found while parsing."""

    start: int
    end: int
    message: str


@dataclass
class DocumentState:
    """The text of an open document and its line index."""

    text: str
    line_index: LineIndex = field(init=False)

    def __post_init__(self) -> None:
        self.line_index = LineIndex(self.text)

    def position(self, offset: int) -> Position:
        return self.line_index.offset_to_position(offset, self.text)

    def offset(self, position: Position) -> int | None:
        return self.line_index.position_to_offset(position, self.text)


class DocumentStore:
    """Open documents by URI."""

    def __init__(self) -> None:
        self._documents: dict[str, DocumentState] = {}

    def update(self, uri: str, text: str) -> DocumentState:
        """Store the text of a document with normalised line endings."""
        state = DocumentState(normalize_line_endings(text))
        self._documents[uri] = state
        return state

    def get(self, uri: str) -> DocumentState | None:
        return self._documents.get(uri)

    def semantic_range(
        self, uri: str, start: Position, end: Position
    ) -> tuple[int, int] | None:
        """Return the offsets of a position range, or None if either end is invalid."""
        state = self._documents.get(uri)
        if state is None:
            raise KeyError("Document not found")
        start_offset = state.offset(start)
        end_offset = state.offset(end)
        if start_offset is None or end_offset is None:
            return None
        return start_offset, end_offset


def _utf16_length(text: str) -> int:
    return sum(2 if ord(char) > 0xFFFF else 1 for char in text)


def _position_json(position: Position) -> dict[str, int]:
    return {"line": position.line, "character": position.character}


def _range_json(start: Position, end: Position) -> dict[str, Any]:
    return {"start": _position_json(start), "end": _position_json(end)}


def semantic_token_kind_to_type_index(kind: SemanticTokenKind) -> int:
    """Return the index of a token kind in the semantic token legend."""
    return LEGEND_TYPES.index(kind.value)


def process_semantic_tokens(
    text: str, line_index: LineIndex, parser_tokens: Iterable[ParserSemanticToken]
) -> list[LspSemanticToken]:
    """Sort parser tokens by start and encode them relative to each other."""
    previous_line = 0
    previous_start = 0
    encoded = []
    for token in sorted(parser_tokens, key=lambda t: t.start):
        start = line_index.offset_to_position(token.start, text)
        delta_line = start.line - previous_line
        delta_start = start.character - previous_start if delta_line == 0 else start.character
        encoded.append(
            LspSemanticToken(
                delta_line=delta_line,
                delta_start=delta_start,
                length=_utf16_length(text[token.start : token.end]),
                token_type=semantic_token_kind_to_type_index(token.kind),
            )
        )
        previous_line = start.line
        previous_start = start.character
    return encoded


def _diagnostic(
    text: str, line_index: LineIndex, start: int, end: int, message: str
) -> dict[str, Any]:
    return {
        "range": _range_json(
            line_index.offset_to_position(start, text),
            line_index.offset_to_position(end, text),
        ),
        "severity": DIAGNOSTIC_SEVERITY_ERROR,
        "source": SERVER_SOURCE,
        "message": message,
    }


def build_diagnostics(
    text: str,
    line_index: LineIndex,
    error: ParseError | None,
    validation_errors: Iterable[ValidationError],
) -> list[dict[str, Any]]:
    """Diagnostics for a failed parse (if any) followed by validation errors."""
    diagnostics = []
    if error is not None:
        diagnostics.append(
            _diagnostic(text, line_index, error.start, error.end, generate_message_error(error))
        )
    diagnostics.extend(
        _diagnostic(text, line_index, item.start, item.end, item.message)
        for item in validation_errors
    )
    return diagnostics


def completion_items(
    state: DocumentState, suggestions: Iterable[Suggestion]
) -> list[dict[str, Any]] | None:
    """Completion items for literal and character suggestions, or None if there are none."""
    items = []
    for suggestion in suggestions:
        if suggestion.expected.kind not in (ExpectationKind.LITERAL, ExpectationKind.CHAR):
            continue
        label = str(suggestion.expected.value)
        at = state.position(suggestion.start)
        items.append(
            {
                "label": label,
                "kind": COMPLETION_KIND_KEYWORD,
                "insertTextFormat": INSERT_TEXT_FORMAT_SNIPPET,
                "textEdit": {
                    "range": _range_json(at, at),
                    "newText": _SNIPPETS.get(label, label),
                },
            }
        )
    return items or None


def _signature_json(signature: Signature) -> dict[str, Any]:
    parameters = []
    for label, documentation in signature.parameters:
        parameter: dict[str, Any] = {"label": label}
        if documentation is not None:
            parameter["documentation"] = documentation
        parameters.append(parameter)
    active = signature.active_parameter
    result: dict[str, Any] = {
        "label": signature.label,
        "parameters": parameters,
        "activeParameter": len(signature.parameters) if active is None else active,
    }
    if signature.documentation is not None:
        result["documentation"] = signature.documentation
    return result


def signature_help(signatures: Iterable[Signature]) -> dict[str, Any] | None:
    """Signature help for the given signatures, or None if there are none."""
    encoded = [_signature_json(signature) for signature in signatures]
    if not encoded:
        return None
    return {"signatures": encoded}


def server_capabilities() -> dict[str, Any]:
    """The capabilities the server announces on initialisation."""
    return {
        "semanticTokensProvider": {
            "legend": {"tokenTypes": list(LEGEND_TYPES), "tokenModifiers": []},
            "full": True,
            "range": True,
        },
        "completionProvider": {
            "resolveProvider": False,
            "triggerCharacters": list(COMPLETION_TRIGGER_CHARACTERS),
        },
        "signatureHelpProvider": {
            "triggerCharacters": list(SIGNATURE_TRIGGER_CHARACTERS),
            "retriggerCharacters": list(SIGNATURE_TRIGGER_CHARACTERS),
        },
        "textDocumentSync": TEXT_DOCUMENT_SYNC_FULL,
    }