"""
Unified error module.
"""

from .errors import (
    ErrorSeverity,
    PersonaBotError,
    AnalysisFailure,
    ClassificationFailure,
    PersistenceFailure,
    TemplateFailure,
    Result,
)

__all__ = [
    "ErrorSeverity",
    "PersonaBotError",
    "AnalysisFailure",
    "ClassificationFailure",
    "PersistenceFailure",
    "TemplateFailure",
    "Result",
]
