"""Control flow statement parsing: if/else, return, go, break/continue."""
from __future__ import annotations
from typing import TYPE_CHECKING
from lark import Tree
from simgo.semantics.ast import IfStmt, ReturnStmt, GoStmt, BranchStmt
from simgo.semantics.ast_builder.exceptions import ASTBuildError
from simgo.semantics.ast_builder.utils.tree_navigation import first_tree, trees
from simgo.internals.report import span_of

if TYPE_CHECKING:
    from simgo.semantics.ast_builder.builder import ASTBuilder


def parse_if_stmt(node: Tree, ast_builder: 'ASTBuilder') -> IfStmt:
    """Parse if_stmt: 'if' expr block else_clause?
    and if_init_stmt: 'if' simple_stmt ';' expr block else_clause?
    """
    parts = trees(node)
    init = None
    if node.data == "if_init_stmt":
        init = ast_builder._stmt(parts.pop(0))

    cond, body = parts[0], parts[1]
    else_ = None
    else_clause = first_tree(parts[2:], "else_clause")
    if else_clause is not None:
        target = trees(else_clause)[0]
        else_ = ast_builder._stmt(target)

    return IfStmt(loc=span_of(node), init=init, cond=ast_builder._expr(cond),
                  body=ast_builder._block(body), else_=else_)


def parse_return_stmt(node: Tree, ast_builder: 'ASTBuilder') -> ReturnStmt:
    """Parse return_stmt: 'return' expr_list?"""
    values = first_tree(node.children, "expr_list")
    results = [ast_builder._expr(e) for e in trees(values)] if values is not None else []
    return ReturnStmt(loc=span_of(node), results=results)


def parse_go_stmt(node: Tree, ast_builder: 'ASTBuilder') -> GoStmt:
    """Parse go_stmt: 'go' expr"""
    parts = trees(node)
    if not parts:
        raise ASTBuildError("go: missing call", span_of(node))
    return GoStmt(loc=span_of(node), call=ast_builder._expr(parts[0]))


def parse_branch_stmt(node: Tree, ast_builder: 'ASTBuilder') -> BranchStmt:
    return BranchStmt(loc=span_of(node), tok="break" if node.data == "break_stmt" else "continue")
