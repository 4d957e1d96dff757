"""
Diagnostics and source locations.

Every decode step in earlydecoder reports problems as values rather than
raising: a step returns ``(value, Diagnostics)`` and the caller appends the
diagnostics to its own sequence before moving on.
"""

from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict


class Pos(BaseModel):
    """A single position in a source file (1-based line and column)."""

    model_config = ConfigDict(frozen=True)

    line: int = 1
    column: int = 1
    byte: int = 0


class Range(BaseModel):
    """A span of source text within one file."""

    model_config = ConfigDict(frozen=True)

    filename: str = ""
    start: Pos = Pos()
    end: Pos = Pos()

    def __str__(self) -> str:
        if self.start.line == self.end.line:
            span = f"{self.start.line},{self.start.column}-{self.end.column}"
        else:
            span = f"{self.start.line},{self.start.column}-{self.end.line},{self.end.column}"
        if self.filename:
            return f"{self.filename}:{span}"
        return span


class Severity(str, Enum):
    """Diagnostic severities."""
    ERROR = "error"
    WARNING = "warning"


class Diagnostic(BaseModel):
    """A structured error or warning anchored at an optional source range."""

    severity: Severity = Severity.ERROR
    summary: str
    detail: str = ""
    subject: Optional[Range] = None

    def __str__(self) -> str:
        text = f"{self.severity.value.capitalize()}: {self.summary}"
        if self.subject is not None:
            text = f"{text} (at {self.subject})"
        if self.detail:
            text = f"{text}; {self.detail}"
        return text


class Diagnostics(list):
    """An ordered sequence of diagnostics."""

    def __init__(self, items: Iterable[Diagnostic] = ()):
        super().__init__(items)

    def has_errors(self) -> bool:
        return any(d.severity == Severity.ERROR for d in self)

    def errors(self) -> "Diagnostics":
        return Diagnostics(d for d in self if d.severity == Severity.ERROR)

    def warnings(self) -> "Diagnostics":
        return Diagnostics(d for d in self if d.severity == Severity.WARNING)


def error(summary: str, detail: str = "", subject: Optional[Range] = None) -> Diagnostic:
    """Shorthand for building an error diagnostic."""
    return Diagnostic(severity=Severity.ERROR, summary=summary, detail=detail, subject=subject)
