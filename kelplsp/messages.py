"""Human-readable error messages for parse failures."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass, field


class ExpectationKind(enum.Enum):
    """What the parser expected to find at the failing position."""

    LITERAL = "literal"
    CUSTOM = "custom"
    CHAR = "char"
    DIGIT = "digit"
    IDENTIFIER = "identifier"
    NEWLINE_WHITESPACE = "newline_whitespace"
    WHITESPACE = "whitespace"
    START_OF_FILE = "start_of_file"
    END_OF_FILE = "end_of_file"


_VALUED_KINDS = frozenset(
    {ExpectationKind.LITERAL, ExpectationKind.CUSTOM, ExpectationKind.CHAR}
)

_FIXED_DESCRIPTIONS = {
    ExpectationKind.DIGIT: "digit",
    ExpectationKind.IDENTIFIER: "identifier",
    ExpectationKind.NEWLINE_WHITESPACE: "whitespace containing a newline",
    ExpectationKind.WHITESPACE: "whitespace",
    ExpectationKind.START_OF_FILE: "start of file",
    ExpectationKind.END_OF_FILE: "end of file",
}


@dataclass(frozen=True)
class Expectation:
    """A single thing the parser expected; literal, custom and char carry a value."""

    kind: ExpectationKind
    value: str | None = None

    def __post_init__(self) -> None:
        if self.kind in _VALUED_KINDS:
            if self.value is None:
                raise ValueError(f"{self.kind.name} expectation needs a value")
            if self.kind is ExpectationKind.CHAR and len(self.value) != 1:
                raise ValueError("CHAR expectation must hold exactly one character")
        elif self.value is not None:
            raise ValueError(f"{self.kind.name} expectation takes no value")

    @classmethod
    def literal(cls, text: str) -> Expectation:
        return cls(ExpectationKind.LITERAL, text)

    @classmethod
    def custom(cls, text: str) -> Expectation:
        return cls(ExpectationKind.CUSTOM, text)

    @classmethod
    def char(cls, character: str) -> Expectation:
        return cls(ExpectationKind.CHAR, character)

    def describe(self) -> str:
        """Return the wording used for this expectation in error messages."""
        if self.kind is ExpectationKind.LITERAL:
            return f'"{self.value}"'
        if self.kind is ExpectationKind.CUSTOM:
            return str(self.value)
        if self.kind is ExpectationKind.CHAR:
            return f"'{self.value}'"
        return _FIXED_DESCRIPTIONS[self.kind]


@dataclass
class ParseError:
    """The furthest parse failure: its span, explicit messages and expectations."""

    start: int = 0
    end: int = 0
    messages: list[str] = field(default_factory=list)
    expected: list[Expectation] = field(default_factory=list)


def format_expected(items: Iterable[object]) -> str:
    """Join items into an "expected ..." phrase."""
    words = [str(item) for item in items]
    if not words:
        return ""
    if len(words) == 1:
        return f"expected {words[0]}"
    if len(words) == 2:
        return f"expected {words[0]} or {words[1]}"
    *head, last = words
    return f"expected {', '.join(head)}, or {last}"


def generate_message_error(error: ParseError) -> str:
    """Build the diagnostic message for a parse error."""
    if error.messages:
        return format_expected(error.messages)
    return format_expected(expectation.describe() for expectation in error.expected)