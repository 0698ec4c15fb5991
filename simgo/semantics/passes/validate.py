# semantics/passes/validate.py
"""
Feature validation for the Simplicity subset of Go.

Simplicity programs are loop free and statically bounded, so every construct
that implies unbounded work or dynamic dispatch is rejected before analysis:

- for / range loops
- go statements
- channels (types, sends, receives)
- interfaces
- slices (arrays without a length)
- maps
- make() of any of the above

The pass walks the whole tree and reports every occurrence, not just the
first. It does not descend into a node it has reported, so a slice of slices
is reported once, and make(map[K]V) is reported through its type argument
only. The tree is never modified.
"""
from __future__ import annotations

from simgo.semantics.ast import (
    Node, Program, ForStmt, RangeStmt, GoStmt, ChanType, SendStmt, UnaryExpr,
    InterfaceType, ArrayType, MapType, iter_children,
)
from simgo.internals.report import Reporter
from simgo.internals import errors as er


class Validator:
    def __init__(self, reporter: Reporter):
        self.reporter = reporter

    def run(self, program: Program) -> None:
        self._visit(program)

    def _visit(self, node: Node) -> None:
        if self._check(node):
            return
        for child in iter_children(node):
            self._visit(child)

    def _check(self, node: Node) -> bool:
        """Report `node` if it is disallowed. Returns True when reported."""
        match node:
            case ForStmt() | RangeStmt():
                er.emit(self.reporter, er.ERR.SG2001, node.loc)
            case GoStmt():
                er.emit(self.reporter, er.ERR.SG2002, node.loc)
            case ChanType() | SendStmt() | UnaryExpr(op="<-"):
                er.emit(self.reporter, er.ERR.SG2003, node.loc)
            case InterfaceType():
                er.emit(self.reporter, er.ERR.SG2004, node.loc)
            case ArrayType(len=None):
                er.emit(self.reporter, er.ERR.SG2005, node.loc)
            case MapType():
                er.emit(self.reporter, er.ERR.SG2006, node.loc)
            case _:
                return False
        return True


def validate(program: Program, reporter: Reporter) -> None:
    """Emit one SG2xxx diagnostic per unsupported construct in `program`."""
    Validator(reporter).run(program)
