"""Function declaration and signature parsing."""
from __future__ import annotations
from typing import List, Tuple, TYPE_CHECKING
from lark import Tree
from simgo.semantics.ast import FuncDecl, Field, Expr
from simgo.semantics.ast_builder.exceptions import ASTBuildError
from simgo.semantics.ast_builder.utils.tree_navigation import first_name, first_tree, trees, names_of
from simgo.internals.report import span_of

if TYPE_CHECKING:
    from simgo.semantics.ast_builder.builder import ASTBuilder


def parse_func_decl(node: Tree, ast_builder: 'ASTBuilder') -> FuncDecl:
    """Parse func_decl: 'func' NAME signature block"""
    name = first_name(node.children)
    sig = first_tree(node.children, "signature")
    block = first_tree(node.children, "block")
    if name is None or sig is None or block is None:
        raise ASTBuildError("func: malformed declaration", span_of(node))

    params, results = parse_signature(sig, ast_builder)
    return FuncDecl(
        loc=span_of(node),
        name=str(name),
        params=params,
        results=results,
        body=ast_builder._block(block),
    )


def parse_signature(node: Tree, ast_builder: 'ASTBuilder') -> Tuple[List[Field], List[Expr]]:
    """Parse signature: parameters result?

    Returns the parameter groups and the result types.
    """
    params_node = first_tree(node.children, "parameters")
    params: List[Field] = []
    if params_node is not None:
        for decl in trees(params_node):
            params.append(parse_field(decl, ast_builder))

    results: List[Expr] = []
    result_node = first_tree(node.children, "result")
    if result_node is not None:
        results = [ast_builder._type(t) for t in trees(result_node)]
    return params, results


def parse_field(node: Tree, ast_builder: 'ASTBuilder') -> Field:
    """Parse param_decl / field_decl (name_list type) or an embedded field (type_name)."""
    if node.data in ("embedded_field", "embedded_interface"):
        return Field(loc=span_of(node), names=[], ty=ast_builder._type(trees(node)[0]))

    if node.data == "method_spec":
        from simgo.semantics.ast import FuncType
        name = first_name(node.children)
        sig = first_tree(node.children, "signature")
        params, results = parse_signature(sig, ast_builder)
        return Field(loc=span_of(node), names=[str(name)],
                     ty=FuncType(loc=span_of(sig), params=params, results=results))

    names_node = first_tree(node.children, "name_list")
    rest = [t for t in trees(node) if t is not names_node]
    if names_node is None or len(rest) != 1:
        raise ASTBuildError(f"malformed field '{node.data}'", span_of(node))
    return Field(loc=span_of(node), names=names_of(names_node), ty=ast_builder._type(rest[0]))
