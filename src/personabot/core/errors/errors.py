"""
Unified error taxonomy and Result container so pipeline stages can degrade or abort
according to severity.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, TypeVar, Union, cast


class ErrorSeverity(Enum):
    WARNING = "warning"      # recovered locally
    ERROR = "error"          # turn falls back
    CRITICAL = "critical"    # configuration bug


@dataclass
class PersonaBotError(Exception):
    message: str
    severity: ErrorSeverity = ErrorSeverity.ERROR
    code: str = "UNKNOWN"
    context: Dict[str, Any] | None = None

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


@dataclass
class AnalysisFailure(PersonaBotError):
    """Scoring or tokenization failed; callers recover to the neutral analysis."""

    severity: ErrorSeverity = ErrorSeverity.WARNING
    code: str = "ANALYSIS_FAILURE"


@dataclass
class ClassificationFailure(PersonaBotError):
    """A classifier was declared without a default label."""

    severity: ErrorSeverity = ErrorSeverity.CRITICAL
    code: str = "CLASSIFICATION_FAILURE"


@dataclass
class PersistenceFailure(PersonaBotError):
    """Memory store unreachable, failing or slow; logged and swallowed."""

    severity: ErrorSeverity = ErrorSeverity.WARNING
    code: str = "PERSISTENCE_FAILURE"


@dataclass
class TemplateFailure(PersonaBotError):
    """Template provider raised or produced empty text."""

    severity: ErrorSeverity = ErrorSeverity.ERROR
    code: str = "TEMPLATE_FAILURE"


T = TypeVar("T")
E = TypeVar("E", bound=PersonaBotError)


@dataclass
class Result(Generic[T, E]):
    """Functional result wrapper, avoids scattered status dicts."""

    _value: Union[T, E]
    _is_ok: bool

    @classmethod
    def ok(cls, value: T) -> "Result[T, E]":
        return cls(_value=value, _is_ok=True)

    @classmethod
    def err(cls, error: E) -> "Result[T, E]":
        return cls(_value=error, _is_ok=False)

    def is_ok(self) -> bool:
        return self._is_ok

    @property
    def error(self) -> E | None:
        return None if self._is_ok else cast(E, self._value)

    def unwrap(self) -> T:
        if not self._is_ok:
            raise cast(E, self._value)
        return cast(T, self._value)

    def unwrap_or(self, default: T) -> T:
        return cast(T, self._value) if self._is_ok else default

    def map(self, fn) -> "Result[T, E]":
        if self._is_ok:
            return Result.ok(fn(self._value))  # type: ignore[arg-type]
        return self
