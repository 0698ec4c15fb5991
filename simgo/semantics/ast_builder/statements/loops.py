"""Loop parsing: every `for` form and `for ... range`.

Loops are parsed only so the validator can point at them.
"""
from __future__ import annotations
from typing import TYPE_CHECKING
from lark import Tree
from simgo.semantics.ast import ForStmt, RangeStmt
from simgo.semantics.ast_builder.utils.tree_navigation import first_tree, trees
from simgo.internals.report import span_of

if TYPE_CHECKING:
    from simgo.semantics.ast_builder.builder import ASTBuilder


def parse_for_stmt(node: Tree, ast_builder: 'ASTBuilder') -> ForStmt:
    """Parse for_forever / for_while / for_clause_stmt."""
    loc = span_of(node)
    body = ast_builder._block(first_tree(node.children, "block"))

    if node.data == "for_forever":
        return ForStmt(loc=loc, init=None, cond=None, post=None, body=body)

    if node.data == "for_while":
        return ForStmt(loc=loc, init=None, cond=ast_builder._expr(trees(node)[0]), post=None, body=body)

    clause = first_tree(node.children, "for_clause")
    init_node, cond_node, post_node = (
        first_tree(clause.children, part) for part in ("for_init", "for_cond", "for_post")
    )
    init = ast_builder._stmt(init_node.children[0]) if init_node.children else None
    cond = ast_builder._expr(cond_node.children[0]) if cond_node.children else None
    post = ast_builder._stmt(post_node.children[0]) if post_node.children else None
    return ForStmt(loc=loc, init=init, cond=cond, post=post, body=body)


def parse_range_stmt(node: Tree, ast_builder: 'ASTBuilder') -> RangeStmt:
    """Parse for_range: 'for' range_clause block"""
    clause, block = trees(node)
    body = ast_builder._block(block)
    parts = trees(clause)

    if clause.data == "range_bare":
        return RangeStmt(loc=span_of(node), key=None, value=None, tok=None,
                         x=ast_builder._expr(parts[0]), body=body)

    targets = [ast_builder._expr(e) for e in trees(parts[0])]
    key = targets[0] if targets else None
    value = targets[1] if len(targets) > 1 else None
    tok = ":=" if clause.data == "range_define" else "="
    return RangeStmt(loc=span_of(node), key=key, value=value, tok=tok,
                     x=ast_builder._expr(parts[1]), body=body)
