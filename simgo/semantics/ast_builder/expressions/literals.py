"""Literal and identifier parsing."""
from __future__ import annotations
from typing import TYPE_CHECKING
from lark import Tree, Token
from simgo.semantics.ast import BasicLit, Ident, Expr
from simgo.internals.report import span_of

if TYPE_CHECKING:
    from simgo.semantics.ast_builder.builder import ASTBuilder


def _token(node: Tree) -> Token:
    return next(c for c in node.children if isinstance(c, Token))


def parse_int_lit(node: Tree, ast_builder: 'ASTBuilder') -> BasicLit:
    return BasicLit(loc=span_of(node), kind="INT", value=str(_token(node)))


def parse_string_lit(node: Tree, ast_builder: 'ASTBuilder') -> BasicLit:
    # Value keeps its quotes: literals pass through to the output as written
    return BasicLit(loc=span_of(node), kind="STRING", value=str(_token(node)))


def parse_char_lit(node: Tree, ast_builder: 'ASTBuilder') -> BasicLit:
    return BasicLit(loc=span_of(node), kind="CHAR", value=str(_token(node)))


def parse_name(node: Tree, ast_builder: 'ASTBuilder') -> Expr:
    """NAME; `true` and `false` become boolean literals."""
    name = str(_token(node))
    if name in ("true", "false"):
        return BasicLit(loc=span_of(node), kind="BOOL", value=name)
    return Ident(loc=span_of(node), name=name)
