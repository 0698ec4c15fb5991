"""Main ASTBuilder orchestrator for the simgo front end.

This module contains the ASTBuilder class that turns the Lark parse tree of a
Go source file into the dataclass nodes of simgo.semantics.ast. The builder
delegates to specialized parsers:

- Type parsing: semantics.ast_builder.types
- Expression parsing: semantics.ast_builder.expressions
- Statement parsing: semantics.ast_builder.statements
- Declaration parsing: semantics.ast_builder.declarations
- Utilities: semantics.ast_builder.utils

Parsers are created lazily and keep a back reference to the builder so that
they can recurse into each other (an array length is an expression, a
function literal holds a block, and so on).
"""
from __future__ import annotations
from typing import List

from lark import Tree, Token

from simgo.semantics.ast import Program, ImportSpec, Block, Stmt, Expr
from simgo.semantics.ast_builder.exceptions import ASTBuildError
from simgo.semantics.ast_builder.utils.tree_navigation import first_name, first_tree, trees
from simgo.internals.report import span_of


class ASTBuilder:
    def __init__(self):
        """Initialize ASTBuilder with lazy-loaded parsers."""
        self._type_parser = None
        self._expr_parser = None
        self._stmt_parser = None

    @property
    def type_parser(self):
        """Lazy-load TypeParser on first use."""
        if self._type_parser is None:
            from simgo.semantics.ast_builder.types.parser import TypeParser
            self._type_parser = TypeParser(self)
        return self._type_parser

    @property
    def expr_parser(self):
        """Lazy-load ExpressionParser on first use."""
        if self._expr_parser is None:
            from simgo.semantics.ast_builder.expressions.parser import ExpressionParser
            self._expr_parser = ExpressionParser(self)
        return self._expr_parser

    @property
    def stmt_parser(self):
        """Lazy-load StatementParser on first use."""
        if self._stmt_parser is None:
            from simgo.semantics.ast_builder.statements.parser import StatementParser
            self._stmt_parser = StatementParser(self)
        return self._stmt_parser

    def build(self, tree: Tree) -> Program:
        """Build Program AST from parse tree."""
        from simgo.semantics.ast_builder.declarations import imports, functions, values

        if not (isinstance(tree, Tree) and tree.data == "start"):
            raise ASTBuildError("expected a complete source file", span_of(tree))

        package_clause = first_tree(tree.children, "package_clause")
        package_name = first_name(package_clause.children) if package_clause is not None else None
        if package_name is None:
            raise ASTBuildError("missing package clause", span_of(tree))

        specs: List[ImportSpec] = []
        decls = []
        for node in trees(tree):
            if node.data == "package_clause":
                continue
            if node.data == "import_decl":
                specs.extend(imports.parse_import_decl(node, self))
            elif node.data == "func_decl":
                decls.append(functions.parse_func_decl(node, self))
            elif node.data in ("const_decl", "var_decl", "type_decl"):
                decls.append(values.parse_gen_decl(node, self))
            else:
                raise ASTBuildError(f"unexpected top-level declaration '{node.data}'", span_of(node))

        return Program(loc=span_of(tree), package=str(package_name), imports=specs, decls=decls)

    # Entry points used by the specialized parsers

    def _expr(self, node) -> Expr:
        return self.expr_parser.parse_expr(node)

    def _type(self, node) -> Expr:
        return self.type_parser.parse_type(node)

    def _stmt(self, node: Tree) -> Stmt:
        return self.stmt_parser.parse_stmt(node)

    def _block(self, node: Tree) -> Block:
        if not (isinstance(node, Tree) and node.data == "block"):
            raise ASTBuildError("expected a block", span_of(node))
        return Block(loc=span_of(node), stmts=[self._stmt(ch) for ch in node.children if not isinstance(ch, Token)])
