"""Diagnostic system for reltime errors.

Provides structured error diagnostics with codes and hints.
Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, ErrorCategory, ParseType
from .errors import (
    RelativityConfigurationError,
    RelativityError,
    RelativityInternalError,
    RelativityParseError,
    UnitNotEnabledError,
)
from .templates import ErrorTemplate

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "ErrorCategory",
    "ErrorTemplate",
    "ParseType",
    "RelativityConfigurationError",
    "RelativityError",
    "RelativityInternalError",
    "RelativityParseError",
    "UnitNotEnabledError",
]
