"""Main expression parser coordinating specialized expression parsers."""
from __future__ import annotations
from typing import TYPE_CHECKING
from lark import Tree
from simgo.semantics.ast import Expr
from simgo.semantics.ast_builder.exceptions import ASTBuildError
from simgo.semantics.ast_builder.expressions import literals, operators, calls
from simgo.internals.report import span_of

if TYPE_CHECKING:
    from simgo.semantics.ast_builder.builder import ASTBuilder


# Composite types accepted in argument position (make(map[K]V), make(chan T))
_TYPE_NODES = frozenset({
    "array_type", "slice_type", "map_type", "chan_type", "struct_type", "interface_type",
})


class ExpressionParser:
    """Coordinates expression parsing across specialized parsers."""

    def __init__(self, ast_builder: 'ASTBuilder'):
        self.ast_builder = ast_builder

    def parse_expr(self, node: Tree) -> Expr:
        """Parse an expression node into an Expr object.

        Main dispatcher for all expression kinds.
        """
        if not isinstance(node, Tree):
            raise ASTBuildError(f"expected an expression, found {node!r}", span_of(node))

        expr_handlers = {
            "int_lit": literals.parse_int_lit,
            "string_lit": literals.parse_string_lit,
            "char_lit": literals.parse_char_lit,
            "name": literals.parse_name,
            "binary": operators.parse_binary,
            "unary": operators.parse_unary,
            "call": calls.parse_call,
            "selector": calls.parse_selector,
            "index": calls.parse_index,
            "func_lit": calls.parse_func_lit,
        }

        handler = expr_handlers.get(node.data)
        if handler:
            return handler(node, self.ast_builder)

        if node.data in _TYPE_NODES:
            return self.ast_builder._type(node)

        raise ASTBuildError(f"unhandled expression node: {node.data}", span_of(node))
