"""
AST Builder module for the simgo front end.

Exports:
    ASTBuilder: Main class for building the dataclass AST from Lark parse trees
    ASTBuildError: Raised for parse trees the AST cannot represent
"""
# Main ASTBuilder class
from simgo.semantics.ast_builder.builder import ASTBuilder

# Exception classes
from simgo.semantics.ast_builder.exceptions import ASTBuildError

__all__ = [
    'ASTBuilder',
    'ASTBuildError',
]
