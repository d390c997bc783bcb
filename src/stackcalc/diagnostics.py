# src/stackcalc/diagnostics.py
"""Diagnostics chain and exception types.

Every fallible operation takes a ``Diagnostics`` instance and pushes a
message onto it when it fails; each caller checks ``is_empty()`` right after
the call, pushes its own context line and gives up. Rendering walks the
chain backwards so the innermost context is printed first.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional

DELIMITER = "\n - "


class ErrorKind(Enum):
    LEXICAL = "lexical"
    SYNTAX = "syntax"
    UNSUPPORTED = "unsupported"
    ARITHMETIC = "arithmetic"
    RESOURCE = "resource"
    IO = "io"
    CONTEXT = "context"


@dataclass(frozen=True)
class Diagnostic:
    kind: ErrorKind
    message: str

    def __str__(self):
        return self.message


class Diagnostics:
    """Append-only, ordered collection of error messages."""

    def __init__(self):
        self._entries: List[Diagnostic] = []

    def push(self, message: str, kind: ErrorKind = ErrorKind.CONTEXT) -> None:
        self._entries.append(Diagnostic(kind, message))

    def extend(self, other: "Diagnostics") -> None:
        self._entries.extend(other._entries)

    def is_empty(self) -> bool:
        return not self._entries

    def clear(self) -> None:
        self._entries = []

    def render(self) -> str:
        """Most recently pushed message first, earliest message last."""
        return DELIMITER.join(entry.message for entry in reversed(self._entries))

    @property
    def kinds(self) -> List[ErrorKind]:
        return [entry.kind for entry in self._entries]

    @property
    def root_cause(self) -> Optional[Diagnostic]:
        return self._entries[0] if self._entries else None

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)

    def __bool__(self):
        # truthy only when something failed: ``if diagnostics: ...``
        return bool(self._entries)

    def __repr__(self):
        return f"Diagnostics({[entry.message for entry in self._entries]!r})"


class StackcalcError(Exception):
    """Base class for errors raised by stackcalc."""


class SourceError(StackcalcError):
    """The source file could not be opened, mapped or closed."""


class EvaluationError(StackcalcError):
    """A statement failed; carries the diagnostics chain and failure position."""

    def __init__(self, diagnostics: Diagnostics, line: int = 0, column: int = 0):
        self.diagnostics = diagnostics
        self.line = line
        self.column = column
        super().__init__(f"{diagnostics.render()}\nLine: {line}\nCol: {column}")

    @property
    def kind(self) -> Optional[ErrorKind]:
        root = self.diagnostics.root_cause
        return root.kind if root else None


class FatalEvaluationError(StackcalcError):
    """Unrecoverable runtime fault; never routed through diagnostics."""


class IntegerDivisionByZero(FatalEvaluationError):
    def __init__(self, dividend: int):
        self.dividend = dividend
        super().__init__(f"integer division by zero ({dividend} / 0)")
