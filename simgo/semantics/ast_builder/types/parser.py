"""Type expression parsing.

Type expressions become ordinary expression nodes the way go/ast models them:
a named type is an Ident, `pkg.Name` a SelectorExpr, and composite types use
the dedicated *Type nodes.
"""
from __future__ import annotations
from typing import TYPE_CHECKING
from lark import Tree, Token
from simgo.semantics.ast import (
    Expr, Ident, SelectorExpr, ArrayType, StructType, MapType, ChanType,
    InterfaceType, FuncType, StarExpr,
)
from simgo.semantics.ast_builder.exceptions import ASTBuildError
from simgo.semantics.ast_builder.utils.tree_navigation import first_tree, trees
from simgo.internals.report import span_of

if TYPE_CHECKING:
    from simgo.semantics.ast_builder.builder import ASTBuilder


class TypeParser:
    """Builds type expression nodes from type_* parse trees."""

    def __init__(self, ast_builder: 'ASTBuilder'):
        self.ast_builder = ast_builder

    def parse_type(self, node: Tree) -> Expr:
        if not isinstance(node, Tree):
            raise ASTBuildError(f"expected a type, found {node!r}", span_of(node))

        loc = span_of(node)
        kids = trees(node)
        match node.data:
            case "type_name":
                return Ident(loc=loc, name=str(node.children[0]))
            case "qualified_type":
                pkg, name = (str(t) for t in node.children if isinstance(t, Token))
                return SelectorExpr(loc=loc, x=Ident(loc=span_of(node.children[0]), name=pkg), sel=name)
            case "array_type":
                length, elt = kids
                return ArrayType(loc=loc, len=self.ast_builder._expr(length), elt=self.parse_type(elt))
            case "slice_type":
                return ArrayType(loc=loc, len=None, elt=self.parse_type(kids[0]))
            case "struct_type":
                from simgo.semantics.ast_builder.declarations.functions import parse_field
                return StructType(loc=loc, fields=[parse_field(f, self.ast_builder) for f in kids])
            case "map_type":
                key, value = kids
                return MapType(loc=loc, key=self.parse_type(key), value=self.parse_type(value))
            case "chan_type":
                send_only = any(isinstance(t, Token) and t.type == "ARROW" for t in node.children)
                return ChanType(loc=loc, value=self.parse_type(kids[0]), send_only=send_only)
            case "interface_type":
                from simgo.semantics.ast_builder.declarations.functions import parse_field
                return InterfaceType(loc=loc, methods=[parse_field(m, self.ast_builder) for m in kids])
            case "func_type":
                from simgo.semantics.ast_builder.declarations.functions import parse_signature
                params, results = parse_signature(first_tree(node.children, "signature"), self.ast_builder)
                return FuncType(loc=loc, params=params, results=results)
            case "pointer_type":
                return StarExpr(loc=loc, x=self.parse_type(kids[0]))
            case _:
                raise ASTBuildError(f"unexpected type node '{node.data}'", loc)
