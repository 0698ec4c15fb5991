# semantics/semantic_analyzer.py
from __future__ import annotations
from typing import Dict, List, Optional, Tuple

from simgo.internals.report import Reporter
from simgo.internals import errors as er
from simgo.semantics.ast import (
    Program, FuncDecl, GenDecl, ValueSpec, DeclStmt, AssignStmt, ReturnStmt,
    BinaryExpr, BasicLit, Ident, Block, Expr,
)
from simgo.semantics.naming import to_snake_case, to_upper_snake
from simgo.semantics.passes.const_eval import ConstantEvaluator
from simgo.semantics.records import (
    AUTO, DEFAULT_TYPE, AnalysisResult, Constant, Function, Parameter, WitnessValue,
)
from simgo.semantics.typesys import TypeMapper


class SemanticAnalyzer:
    """
    Extracts the records the code generator needs from a validated program.

    Top-level declarations are visited once, in source order:
      - Entry function: its top-level `var x T = v` declarations and
        single-name `x := v` assignments become witnesses, with values folded
        at compile time. Nested blocks are not scanned.
      - Other functions: signature mapped to SimplicityHL types, body
        produced by a small pattern translator.
      - Top-level `const` declarations: become parameter constants.

    Type mapping errors propagate as TypeMappingError. Evaluation never fails:
    expressions it cannot fold become "true" (see passes.const_eval). With
    report_fallbacks each such fallback is reported as warning SW0001.
    """

    def __init__(self, reporter: Optional[Reporter] = None, entry: str = "main",
                 propagate_constants: bool = False, report_fallbacks: bool = False,
                 type_mapper: Optional[TypeMapper] = None) -> None:
        self.reporter = reporter
        self.entry = entry
        self.propagate_constants = propagate_constants
        self.report_fallbacks = report_fallbacks
        self.types = type_mapper or TypeMapper()

    def analyze(self, program: Program) -> AnalysisResult:
        witnesses: List[WitnessValue] = []
        constants: List[Constant] = []
        functions: List[Function] = []

        # Go name -> exactly folded value, used only when propagating constants
        env: Dict[str, str] = {}
        evaluator = ConstantEvaluator(env if self.propagate_constants else None)
        entry_found = False

        for decl in program.decls:
            match decl:
                case FuncDecl() if decl.name == self.entry:
                    entry_found = True
                    witnesses.extend(self._analyze_entry(decl, evaluator, env))
                case FuncDecl():
                    functions.append(self._analyze_function(decl))
                case GenDecl(tok="const"):
                    constants.extend(self._analyze_constants(decl, evaluator, env))
                case GenDecl():
                    # Top-level var and type declarations produce no records
                    pass

        if not entry_found and self.reporter is not None:
            er.emit(self.reporter, er.ERR.SW0004, None, name=self.entry)

        return AnalysisResult(
            witnesses=tuple(witnesses),
            constants=tuple(constants),
            functions=tuple(functions),
        )

    # --- Pass 1: entry function witnesses

    def _analyze_entry(self, fn: FuncDecl, evaluator: ConstantEvaluator,
                       env: Dict[str, str]) -> List[WitnessValue]:
        out: List[WitnessValue] = []
        for stmt in fn.body.stmts:
            match stmt:
                case DeclStmt(decl=GenDecl(tok="var")):
                    for spec in stmt.decl.specs:
                        for name, ty, value in self._valued_names(spec, evaluator, env):
                            out.append(WitnessValue(name=to_snake_case(name), type=ty,
                                                    value=value, loc=spec.loc))
                case AssignStmt(tok=":=", lhs=[Ident() as target], rhs=[rhs]) if target.name != "_":
                    value = self._fold(target.name, rhs, evaluator, env)
                    out.append(WitnessValue(name=to_snake_case(target.name), type=AUTO,
                                            value=value, loc=stmt.loc))
        return out

    # --- Pass 2: auxiliary functions

    def _analyze_function(self, fn: FuncDecl) -> Function:
        params: List[Parameter] = []
        for f in fn.params:
            ty = self.types.map_type(f.ty)
            params.extend(Parameter(name=to_snake_case(n), type=ty) for n in f.names)

        return_type = self.types.map_type(fn.results[0]) if fn.results else None

        return Function(
            name=to_snake_case(fn.name),
            params=tuple(params),
            return_type=return_type,
            body=self._translate_body(fn.body),
            loc=fn.loc,
        )

    def _translate_body(self, body: Block) -> Tuple[str, ...]:
        """Pattern-translate a function body; anything unrecognised is `true`.

        Only a body made of a single `return x > ...` or `return x` is
        translated.
        """
        if len(body.stmts) == 1 and isinstance(body.stmts[0], ReturnStmt) \
                and len(body.stmts[0].results) == 1:
            result = body.stmts[0].results[0]
            match result:
                case BinaryExpr(op=">", x=Ident()):
                    # Comparison with zero as a two-arm match; other operators are not translated
                    return (
                        f"match {to_snake_case(result.x.name)} {{",
                        "    0 => false,",
                        "    _ => true,",
                        "}",
                    )
                case Ident():
                    return (to_snake_case(result.name),)
                case BasicLit(kind="BOOL"):
                    return (result.value,)
        return ("true",)

    # --- Pass 3: constants

    def _analyze_constants(self, decl: GenDecl, evaluator: ConstantEvaluator,
                           env: Dict[str, str]) -> List[Constant]:
        out: List[Constant] = []
        for spec in decl.specs:
            for name, ty, value in self._valued_names(spec, evaluator, env):
                out.append(Constant(name=to_upper_snake(name), type=ty, value=value, loc=spec.loc))
        return out

    # --- Helpers

    def _valued_names(self, spec: ValueSpec, evaluator: ConstantEvaluator,
                      env: Dict[str, str]) -> List[Tuple[str, str, str]]:
        """(go name, type, folded value) for each name of `spec` that has a value."""
        out: List[Tuple[str, str, str]] = []
        for i, name in enumerate(spec.names):
            if i >= len(spec.values):
                continue
            value = self._fold(name, spec.values[i], evaluator, env)
            ty = self.types.map_type(spec.ty) if spec.ty is not None else DEFAULT_TYPE
            out.append((name, ty, value))
        return out

    def _fold(self, name: str, expr: Expr, evaluator: ConstantEvaluator,
              env: Dict[str, str]) -> str:
        value, exact = evaluator.evaluate_with_status(expr)
        if exact:
            env[name] = value
        else:
            env.pop(name, None)
            if self.report_fallbacks and self.reporter is not None:
                er.emit(self.reporter, er.ERR.SW0001, expr.loc, name=name)
        return value
