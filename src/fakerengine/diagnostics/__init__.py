"""Diagnostic system for fakerengine errors.

Provides structured error diagnostics with codes, spans and hints.
Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, ErrorCategory, SourceSpan
from .errors import (
    EmptyCandidateListError,
    FakerError,
    FakerReferenceError,
    FakerResolutionError,
    FakerSyntaxError,
    RecursionLimitExceededError,
    UnsupportedPatternConstructError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "EmptyCandidateListError",
    "ErrorCategory",
    "ErrorTemplate",
    "FakerError",
    "FakerReferenceError",
    "FakerResolutionError",
    "FakerSyntaxError",
    "OutputFormat",
    "RecursionLimitExceededError",
    "SourceSpan",
    "UnsupportedPatternConstructError",
]
