"""Custom exceptions for AST building errors."""
from __future__ import annotations
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from simgo.internals.report import Span


class ASTBuildError(Exception):
    """Exception raised when a parse tree has a shape the AST cannot represent."""
    def __init__(self, message: str, span: Optional['Span'] = None):
        super().__init__(message)
        self.span = span
