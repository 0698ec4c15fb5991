"""Import declaration parsing."""
from __future__ import annotations
from typing import List, TYPE_CHECKING
from lark import Tree, Token
from simgo.semantics.ast import ImportSpec
from simgo.semantics.ast_builder.exceptions import ASTBuildError
from simgo.semantics.ast_builder.utils.tree_navigation import first_name, first_tree, trees, unquote
from simgo.internals.report import span_of

if TYPE_CHECKING:
    from simgo.semantics.ast_builder.builder import ASTBuilder


def parse_import_decl(node: Tree, ast_builder: 'ASTBuilder') -> List[ImportSpec]:
    """Parse import_decl: 'import' spec | 'import' '(' spec* ')'"""
    return [parse_import_spec(spec) for spec in trees(node) if spec.data == "import_spec"]


def parse_import_spec(node: Tree) -> ImportSpec:
    """Parse import_spec: NAME? string_lit"""
    lit = first_tree(node.children, "string_lit")
    if lit is None:
        raise ASTBuildError("import: missing path", span_of(node))
    path_tok = next(c for c in lit.children if isinstance(c, Token))
    alias = first_name(node.children)
    return ImportSpec(loc=span_of(node), path=unquote(str(path_tok)),
                      alias=str(alias) if alias is not None else None)
