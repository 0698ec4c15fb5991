"""Call, selector, index and function literal parsing."""
from __future__ import annotations
from typing import TYPE_CHECKING
from lark import Tree, Token
from simgo.semantics.ast import CallExpr, SelectorExpr, IndexExpr, FuncLit
from simgo.semantics.ast_builder.exceptions import ASTBuildError
from simgo.semantics.ast_builder.utils.tree_navigation import first_tree, trees
from simgo.internals.report import span_of

if TYPE_CHECKING:
    from simgo.semantics.ast_builder.builder import ASTBuilder


def parse_call(node: Tree, ast_builder: 'ASTBuilder') -> CallExpr:
    """Parse call: primary_expr arguments"""
    fun, args = node.children
    return CallExpr(loc=span_of(node), fun=ast_builder._expr(fun),
                    args=[ast_builder._expr(a) for a in trees(args)])


def parse_selector(node: Tree, ast_builder: 'ASTBuilder') -> SelectorExpr:
    """Parse selector: primary_expr '.' NAME"""
    target, sel = node.children
    if not isinstance(sel, Token):
        raise ASTBuildError("selector: missing field name", span_of(node))
    return SelectorExpr(loc=span_of(node), x=ast_builder._expr(target), sel=str(sel))


def parse_index(node: Tree, ast_builder: 'ASTBuilder') -> IndexExpr:
    """Parse index: primary_expr '[' expr ']'"""
    target, index = node.children
    return IndexExpr(loc=span_of(node), x=ast_builder._expr(target), index=ast_builder._expr(index))


def parse_func_lit(node: Tree, ast_builder: 'ASTBuilder') -> FuncLit:
    """Parse func_lit: 'func' signature block"""
    from simgo.semantics.ast_builder.declarations.functions import parse_signature
    params, results = parse_signature(first_tree(node.children, "signature"), ast_builder)
    return FuncLit(loc=span_of(node), params=params, results=results,
                   body=ast_builder._block(first_tree(node.children, "block")))
