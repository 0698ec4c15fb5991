"""Simple statements: expression, assignment, :=, ++/-- and channel send."""
from __future__ import annotations
from typing import List, TYPE_CHECKING
from lark import Tree, Token
from simgo.semantics.ast import AssignStmt, ExprStmt, IncDecStmt, SendStmt, Expr
from simgo.semantics.ast_builder.utils.tree_navigation import tokens, trees
from simgo.internals.report import span_of

if TYPE_CHECKING:
    from simgo.semantics.ast_builder.builder import ASTBuilder


def _expr_list(node: Tree, ast_builder: 'ASTBuilder') -> List[Expr]:
    return [ast_builder._expr(e) for e in trees(node)]


def parse_expr_stmt(node: Tree, ast_builder: 'ASTBuilder') -> ExprStmt:
    return ExprStmt(loc=span_of(node), x=ast_builder._expr(trees(node)[0]))


def parse_assign_stmt(node: Tree, ast_builder: 'ASTBuilder') -> AssignStmt:
    """Parse assign_stmt: expr_list ('=' | ASSIGN_OP) expr_list"""
    lhs, rhs = trees(node)
    op = tokens(node)
    return AssignStmt(loc=span_of(node), lhs=_expr_list(lhs, ast_builder),
                      tok=str(op[0]) if op else "=", rhs=_expr_list(rhs, ast_builder))


def parse_short_var_decl(node: Tree, ast_builder: 'ASTBuilder') -> AssignStmt:
    """Parse short_var_decl: expr_list ':=' expr_list"""
    lhs, rhs = trees(node)
    return AssignStmt(loc=span_of(node), lhs=_expr_list(lhs, ast_builder),
                      tok=":=", rhs=_expr_list(rhs, ast_builder))


def parse_inc_dec_stmt(node: Tree, ast_builder: 'ASTBuilder') -> IncDecStmt:
    target, op = node.children
    assert isinstance(op, Token)
    return IncDecStmt(loc=span_of(node), x=ast_builder._expr(target), tok=str(op))


def parse_send_stmt(node: Tree, ast_builder: 'ASTBuilder') -> SendStmt:
    chan, value = trees(node)
    return SendStmt(loc=span_of(node), chan=ast_builder._expr(chan), value=ast_builder._expr(value))
