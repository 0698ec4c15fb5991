"""const / var / type declaration parsing."""
from __future__ import annotations
from typing import TYPE_CHECKING
from lark import Tree
from simgo.semantics.ast import GenDecl, ValueSpec, TypeSpec
from simgo.semantics.ast_builder.exceptions import ASTBuildError
from simgo.semantics.ast_builder.utils.tree_navigation import first_name, first_tree, trees, names_of
from simgo.internals.report import span_of

if TYPE_CHECKING:
    from simgo.semantics.ast_builder.builder import ASTBuilder


_DECL_KEYWORDS = {"const_decl": "const", "var_decl": "var", "type_decl": "type"}


def parse_gen_decl(node: Tree, ast_builder: 'ASTBuilder') -> GenDecl:
    """Parse const_decl / var_decl / type_decl, single or grouped."""
    tok = _DECL_KEYWORDS[node.data]
    if tok == "type":
        specs = [parse_type_spec(spec, ast_builder) for spec in trees(node)]
    else:
        specs = [parse_value_spec(spec, ast_builder) for spec in trees(node)]
    return GenDecl(loc=span_of(node), tok=tok, specs=specs)


def parse_value_spec(node: Tree, ast_builder: 'ASTBuilder') -> ValueSpec:
    """Parse const_spec / var_spec: name_list type? ('=' expr_list)?"""
    names_node = first_tree(node.children, "name_list")
    if names_node is None:
        raise ASTBuildError(f"{node.data}: missing names", span_of(node))

    values_node = first_tree(node.children, "expr_list")
    ty = None
    for ch in trees(node):
        if ch is not names_node and ch is not values_node:
            ty = ast_builder._type(ch)

    values = [ast_builder._expr(e) for e in trees(values_node)] if values_node is not None else []
    return ValueSpec(loc=span_of(node), names=names_of(names_node), ty=ty, values=values)


def parse_type_spec(node: Tree, ast_builder: 'ASTBuilder') -> TypeSpec:
    """Parse type_spec: NAME type | alias_spec: NAME '=' type"""
    name = first_name(node.children)
    ty_nodes = trees(node)
    if name is None or len(ty_nodes) != 1:
        raise ASTBuildError("type: malformed declaration", span_of(node))
    return TypeSpec(loc=span_of(node), name=str(name), ty=ast_builder._type(ty_nodes[0]),
                    is_alias=node.data == "alias_spec")
