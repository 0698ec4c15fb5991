# semantics/ast.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Union

from simgo.internals.report import Span
from simgo.internals.errors import raise_internal_error

# === Core node base ===

@dataclass
class Node:
    loc: Optional[Span]

@dataclass
class Stmt(Node):
    pass

@dataclass
class Expr(Node):
    pass

# === Program structure ===

@dataclass
class ImportSpec(Node):
    path: str                        # Unquoted import path, e.g. "github.com/x/bitcoin"
    alias: Optional[str] = None

@dataclass
class Program(Node):
    package: str
    imports: List[ImportSpec]
    decls: List["Decl"]

@dataclass
class Field(Node):
    """One parameter or struct field group: `a, b u32` has two names and one type.

    An embedded struct field has no names.
    """
    names: List[str]
    ty: "Expr"

@dataclass
class FuncDecl(Node):
    name: str
    params: List[Field]
    results: List["Expr"]            # Result types in order; empty when the function returns nothing
    body: "Block"

@dataclass
class ValueSpec(Node):
    names: List[str]
    ty: Optional["Expr"]
    values: List["Expr"]

@dataclass
class TypeSpec(Node):
    name: str
    ty: "Expr"
    is_alias: bool = False

@dataclass
class GenDecl(Node):
    """`const`, `var` or `type` declaration, grouped or not."""
    tok: str                         # "const" | "var" | "type"
    specs: List[Union[ValueSpec, TypeSpec]]

Decl = Union[FuncDecl, GenDecl]

# === Statements ===

@dataclass
class Block(Stmt):
    stmts: List[Stmt]

@dataclass
class DeclStmt(Stmt):
    decl: GenDecl

@dataclass
class AssignStmt(Stmt):
    lhs: List["Expr"]
    tok: str                         # "=", ":=" or an op-assign such as "+="
    rhs: List["Expr"]

@dataclass
class ExprStmt(Stmt):
    x: "Expr"

@dataclass
class IncDecStmt(Stmt):
    x: "Expr"
    tok: str                         # "++" | "--"

@dataclass
class SendStmt(Stmt):
    chan: "Expr"
    value: "Expr"

@dataclass
class ReturnStmt(Stmt):
    results: List["Expr"]

@dataclass
class IfStmt(Stmt):
    init: Optional[Stmt]
    cond: "Expr"
    body: Block
    else_: Optional[Stmt] = None     # Block or nested IfStmt

@dataclass
class ForStmt(Stmt):
    init: Optional[Stmt]
    cond: Optional["Expr"]
    post: Optional[Stmt]
    body: Block

@dataclass
class RangeStmt(Stmt):
    key: Optional["Expr"]
    value: Optional["Expr"]
    tok: Optional[str]               # ":=", "=" or None for `for range x`
    x: "Expr"
    body: Block

@dataclass
class GoStmt(Stmt):
    call: "Expr"

@dataclass
class BranchStmt(Stmt):
    tok: str                         # "break" | "continue"

# === Expressions ===

@dataclass
class Ident(Expr):
    name: str

@dataclass
class BasicLit(Expr):
    kind: str                        # "INT" | "STRING" | "CHAR" | "BOOL"
    value: str                       # Literal text exactly as written

@dataclass
class BinaryExpr(Expr):
    op: str
    x: Expr
    y: Expr

@dataclass
class UnaryExpr(Expr):
    op: str                          # "!", "-", "+", "^", "<-", "&", "*"
    x: Expr

@dataclass
class CallExpr(Expr):
    fun: Expr
    args: List[Expr]

@dataclass
class SelectorExpr(Expr):
    x: Expr
    sel: str

@dataclass
class IndexExpr(Expr):
    x: Expr
    index: Expr

@dataclass
class FuncLit(Expr):
    params: List[Field]
    results: List[Expr]
    body: Block

# === Type expressions ===

@dataclass
class ArrayType(Expr):
    """`[len]elt`; `len` is None for a slice."""
    len: Optional[Expr]
    elt: Expr

@dataclass
class StructType(Expr):
    fields: List[Field]

@dataclass
class MapType(Expr):
    key: Expr
    value: Expr

@dataclass
class ChanType(Expr):
    value: Expr
    send_only: bool = False

@dataclass
class InterfaceType(Expr):
    methods: List[Field] = field(default_factory=list)

@dataclass
class FuncType(Expr):
    params: List[Field]
    results: List[Expr]

@dataclass
class StarExpr(Expr):
    x: Expr


def iter_children(node: Node) -> Iterator[Node]:
    """Yield the direct child nodes of `node` in source order."""
    match node:
        case Program():
            yield from node.imports
            yield from node.decls
        case ImportSpec() | Ident() | BasicLit() | BranchStmt():
            return
        case Field():
            yield node.ty
        case FuncDecl() | FuncLit():
            yield from node.params
            yield from node.results
            yield node.body
        case GenDecl():
            yield from node.specs
        case ValueSpec():
            if node.ty is not None:
                yield node.ty
            yield from node.values
        case TypeSpec():
            yield node.ty
        case Block():
            yield from node.stmts
        case DeclStmt():
            yield node.decl
        case AssignStmt():
            yield from node.lhs
            yield from node.rhs
        case ExprStmt() | IncDecStmt():
            yield node.x
        case SendStmt():
            yield node.chan
            yield node.value
        case ReturnStmt():
            yield from node.results
        case IfStmt():
            if node.init is not None:
                yield node.init
            yield node.cond
            yield node.body
            if node.else_ is not None:
                yield node.else_
        case ForStmt():
            for part in (node.init, node.cond, node.post):
                if part is not None:
                    yield part
            yield node.body
        case RangeStmt():
            for part in (node.key, node.value):
                if part is not None:
                    yield part
            yield node.x
            yield node.body
        case GoStmt():
            yield node.call
        case BinaryExpr():
            yield node.x
            yield node.y
        case UnaryExpr():
            yield node.x
        case CallExpr():
            yield node.fun
            yield from node.args
        case SelectorExpr():
            yield node.x
        case IndexExpr():
            yield node.x
            yield node.index
        case ArrayType():
            if node.len is not None:
                yield node.len
            yield node.elt
        case StructType():
            yield from node.fields
        case MapType():
            yield node.key
            yield node.value
        case ChanType():
            yield node.value
        case InterfaceType():
            yield from node.methods
        case FuncType():
            yield from node.params
            yield from node.results
        case StarExpr():
            yield node.x
        case _:
            raise_internal_error("SG0001", node=type(node).__name__)


def walk(node: Node) -> Iterator[Node]:
    """Pre-order traversal of `node` and all of its descendants."""
    yield node
    for child in iter_children(node):
        yield from walk(child)
