"""Shared parse exception handling for the pipeline and CLI."""
from __future__ import annotations

from lark import Lark, UnexpectedInput

from simgo.semantics.ast_builder import ASTBuildError


def handle_parse_exception(exc: Exception, reporter, parser: Lark | None = None) -> bool:
    """Handle a parse exception by emitting diagnostics through the reporter.

    Args:
        exc: The exception to handle.
        reporter: Reporter for error/warning collection.
        parser: The Lark instance that raised, used to name expected tokens.

    Returns:
        True if the exception was handled, False otherwise.
    """
    from simgo.internals import errors as er
    from simgo.internals.parser import build_parser, improve_parse_error

    if isinstance(exc, ASTBuildError):
        er.emit(reporter, er.ERR.SG1002, exc.span, detail=str(exc))
        return True

    if isinstance(exc, UnexpectedInput):
        code, detail, span = improve_parse_error(exc, parser or build_parser())
        if code == "SG1003":
            er.emit(reporter, er.ERR[code], span, char=detail)
        else:
            er.emit(reporter, er.ERR[code], span, detail=detail)
        return True

    return False
