"""Lark parser setup and AST construction."""
from __future__ import annotations
import sys
from pathlib import Path
from typing import Tuple

from lark import Lark, Tree, UnexpectedInput, UnexpectedToken, UnexpectedCharacters
from lark.lexer import PatternStr

from simgo.internals.postlexer import SemicolonInserter
from simgo.internals.report import Span
from simgo.semantics.ast import Program
from simgo.semantics.ast_builder import ASTBuilder

GRAMMAR_PATH = Path(__file__).resolve().parent.parent / "grammar.lark"

# Expected-terminal lists longer than this are summarized
_MAX_EXPECTED = 8


def build_parser() -> Lark:
    """Fresh LALR parser for the Go subset."""
    kwargs = dict(
        parser="lalr",
        propagate_positions=True,
        maybe_placeholders=False,
        postlex=SemicolonInserter(),
        lexer="basic",
    )
    return Lark.open(str(GRAMMAR_PATH), **kwargs)


def parse_to_ast(src: str, dump_parse: bool = False) -> Tuple[Program, Tree]:
    """Parse Go source into (Program, raw lark tree).

    Raises lark.UnexpectedInput on syntax errors and ASTBuildError for trees
    the AST cannot represent.
    """
    parser = build_parser()
    tree = parser.parse(src)
    if dump_parse:
        print(tree.pretty(), file=sys.stderr)

    # Fresh builder per parse
    return ASTBuilder().build(tree), tree


def _describe_terminal(parser: Lark, name: str) -> str:
    if name == "$END":
        return "end of file"
    if name == "_SEMI":
        return "';' or newline"
    try:
        term = parser.get_terminal(name)
    except KeyError:
        return name.lower()
    if isinstance(term.pattern, PatternStr):
        return f"'{term.pattern.value}'"
    return name.lower()


def _describe_token(tok) -> str:
    if tok.type == "$END":
        return "end of file"
    if tok.type == "_SEMI":
        return "newline" if tok.value == "\n" else "';'"
    if tok.type == "NAME":
        return f"name '{tok.value}'"
    if tok.type in ("INT", "STRING", "RAW_STRING", "CHAR"):
        return f"literal {tok.value}"
    return f"'{tok.value}'"


def improve_parse_error(e: UnexpectedInput, parser: Lark) -> Tuple[str, str, Span]:
    """Turn a lark syntax error into (catalog code, detail, span)."""
    # lark reports '?' or -1 when it has no position
    line = e.line if isinstance(getattr(e, "line", None), int) and e.line > 0 else 1
    col = e.column if isinstance(getattr(e, "column", None), int) and e.column > 0 else 1

    if isinstance(e, UnexpectedCharacters):
        return "SG1003", e.char, Span(line, col, line, col + 1)

    if isinstance(e, UnexpectedToken):
        tok = e.token
        what = _describe_token(tok)
        expected = sorted(e.expected)

        # Go's classic mistake: the opening brace on its own line
        if tok.type == "_SEMI" and tok.value == "\n" and "LBRACE" in expected:
            return "SG1001", "unexpected newline before '{'", Span(line, col, line, col)

        shown = [_describe_terminal(parser, name) for name in expected[:_MAX_EXPECTED]]
        detail = f"unexpected {what}"
        if shown:
            more = ", ..." if len(expected) > _MAX_EXPECTED else ""
            detail += f", expected one of: {', '.join(shown)}{more}"
        end_col = col + max(1, len(str(tok.value))) if tok.type != "$END" else col
        return "SG1001", detail, Span(line, col, line, end_col)

    # UnexpectedEOF and anything else lark may raise
    return "SG1001", str(e).strip().splitlines()[0], Span(line, col, line, col)
