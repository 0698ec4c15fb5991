"""Failure types surfaced by the translation pipeline.

Only these exceptions cross the public API. Each carries the diagnostics that
caused it so callers can render them with a Reporter.
"""
from __future__ import annotations
from typing import Optional, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from simgo.internals.report import Diagnostic, Span


class TranspileError(Exception):
    """Base class: translation stopped and produced no output."""
    def __init__(self, message: str, diagnostics: Sequence['Diagnostic'] = ()):
        super().__init__(message)
        self.diagnostics = list(diagnostics)


class ValidationFailure(TranspileError):
    """One or more unsupported Go constructs were found."""


class TypeMappingFailure(TranspileError):
    """A type expression has no SimplicityHL equivalent."""


class ParseFailure(TranspileError):
    """The source text is not valid for the supported Go subset."""


class CompileError(TranspileError):
    """Driver-level failure (unknown or unimplemented target)."""


class TypeMappingError(Exception):
    """Raised by the type mapper; carries a catalog code and its parameters."""
    def __init__(self, code: str, span: Optional['Span'] = None, **params):
        from simgo.internals.errors import format_message
        super().__init__(format_message(code, **params))
        self.code = code
        self.span = span
        self.params = params

    def wrap(self, what: str) -> 'TypeMappingError':
        """Re-raise context: 'failed to map <what>: <inner message>'."""
        return TypeMappingError("SG3007", self.span, what=what, detail=str(self))
