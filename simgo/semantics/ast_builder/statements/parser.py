"""Main statement parser coordinating specialized statement parsers."""
from __future__ import annotations
from typing import TYPE_CHECKING
from lark import Tree
from simgo.semantics.ast import Stmt, DeclStmt
from simgo.semantics.ast_builder.exceptions import ASTBuildError
from simgo.semantics.ast_builder.statements import simple, control_flow, loops
from simgo.internals.report import span_of

if TYPE_CHECKING:
    from simgo.semantics.ast_builder.builder import ASTBuilder


class StatementParser:
    """Coordinates statement parsing across specialized parsers."""

    def __init__(self, ast_builder: 'ASTBuilder'):
        """Initialize StatementParser with reference to ASTBuilder for recursive parsing."""
        self.ast_builder = ast_builder

    def parse_stmt(self, node: Tree) -> Stmt:
        """Parse a statement node into a Stmt object.

        Main dispatcher for all statement types.
        """
        stmt_handlers = {
            "expr_stmt": simple.parse_expr_stmt,
            "assign_stmt": simple.parse_assign_stmt,
            "short_var_decl": simple.parse_short_var_decl,
            "inc_dec_stmt": simple.parse_inc_dec_stmt,
            "send_stmt": simple.parse_send_stmt,
            "return_stmt": control_flow.parse_return_stmt,
            "if_stmt": control_flow.parse_if_stmt,
            "if_init_stmt": control_flow.parse_if_stmt,
            "go_stmt": control_flow.parse_go_stmt,
            "break_stmt": control_flow.parse_branch_stmt,
            "continue_stmt": control_flow.parse_branch_stmt,
            "for_forever": loops.parse_for_stmt,
            "for_while": loops.parse_for_stmt,
            "for_clause_stmt": loops.parse_for_stmt,
            "for_range": loops.parse_range_stmt,
        }

        if not isinstance(node, Tree):
            raise ASTBuildError(f"expected a statement, found {node!r}", span_of(node))

        if node.data == "block":
            return self.ast_builder._block(node)

        if node.data in ("const_decl", "var_decl", "type_decl"):
            from simgo.semantics.ast_builder.declarations.values import parse_gen_decl
            return DeclStmt(loc=span_of(node), decl=parse_gen_decl(node, self.ast_builder))

        handler = stmt_handlers.get(node.data)
        if handler:
            return handler(node, self.ast_builder)

        raise ASTBuildError(f"unhandled statement node: {node.data}", span_of(node))
