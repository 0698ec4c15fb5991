"""Binary and unary operator parsing."""
from __future__ import annotations
from typing import TYPE_CHECKING
from lark import Tree, Token
from simgo.semantics.ast import BinaryExpr, UnaryExpr
from simgo.semantics.ast_builder.exceptions import ASTBuildError
from simgo.internals.report import span_of

if TYPE_CHECKING:
    from simgo.semantics.ast_builder.builder import ASTBuilder


def parse_binary(node: Tree, ast_builder: 'ASTBuilder') -> BinaryExpr:
    """Parse binary: lhs OP rhs (one precedence level per grammar rule)."""
    if len(node.children) != 3 or not isinstance(node.children[1], Token):
        raise ASTBuildError("binary: malformed operands", span_of(node))
    lhs, op, rhs = node.children
    return BinaryExpr(loc=span_of(node), op=str(op),
                      x=ast_builder._expr(lhs), y=ast_builder._expr(rhs))


def parse_unary(node: Tree, ast_builder: 'ASTBuilder') -> UnaryExpr:
    """Parse unary: OP operand"""
    if len(node.children) != 2 or not isinstance(node.children[0], Token):
        raise ASTBuildError("unary: malformed operand", span_of(node))
    op, operand = node.children
    return UnaryExpr(loc=span_of(node), op=str(op), x=ast_builder._expr(operand))
