"""Translation pipeline: validate, analyze, generate.

`translate()` is the core entry point and works on an already parsed
Program; `Compiler` adds the Go front end and target selection on top.
Either returns the complete SimplicityHL text or raises a TranspileError
subclass. Partial output is never returned.
"""
from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Optional

from lark import UnexpectedInput

from simgo.internals import errors as er
from simgo.internals.exceptions import (
    CompileError, ParseFailure, TypeMappingError, TypeMappingFailure, ValidationFailure,
)
from simgo.internals.report import Reporter
from simgo.semantics.ast import Program
from simgo.semantics.ast_builder import ASTBuildError
from simgo.semantics.passes.validate import validate
from simgo.semantics.records import AnalysisResult
from simgo.semantics.semantic_analyzer import SemanticAnalyzer
from simgo.backend.codegen_simplicity import SimplicityCodegen

TARGETS = ("simplicityhl", "simplicity")


@dataclass
class CompilerConfig:
    target: str = "simplicityhl"
    debug: bool = False
    entry: str = "main"               # Function whose locals become witnesses
    propagate_constants: bool = False # Resolve identifiers through earlier witnesses/constants
    report_fallbacks: bool = False    # Warn when evaluation or the entry assertion falls back


def check_program(program: Program, reporter: Reporter) -> None:
    """Run the validator; raise ValidationFailure listing every unsupported construct."""
    before = len(reporter.errors)
    validate(program, reporter)
    found = reporter.errors[before:]
    if found:
        details = "\n".join(d.message for d in found)
        raise ValidationFailure(er.format_message("SG2100", details=details), found)


def analyze_program(program: Program, reporter: Reporter, entry: str = "main",
                    propagate_constants: bool = False,
                    report_fallbacks: bool = False) -> AnalysisResult:
    """Run the analyzer; a type with no SimplicityHL equivalent raises TypeMappingFailure."""
    analyzer = SemanticAnalyzer(reporter, entry=entry,
                                propagate_constants=propagate_constants,
                                report_fallbacks=report_fallbacks)
    try:
        return analyzer.analyze(program)
    except TypeMappingError as e:
        reporter.error(e.code, str(e), e.span)
        raise TypeMappingFailure(str(e), reporter.errors[-1:]) from e


def translate(program: Program, reporter: Optional[Reporter] = None, *,
              entry: str = "main", propagate_constants: bool = False,
              report_fallbacks: bool = False) -> str:
    """Translate a parsed Go program into SimplicityHL source text.

    Fresh analyzer and generator objects are built on every call, so calls
    share no state.
    """
    reporter = reporter if reporter is not None else Reporter()
    check_program(program, reporter)
    result = analyze_program(program, reporter, entry=entry,
                             propagate_constants=propagate_constants,
                             report_fallbacks=report_fallbacks)
    return SimplicityCodegen(reporter, report_fallbacks=report_fallbacks).generate(result)


class Compiler:
    """Go source text -> target text, following a CompilerConfig."""

    def __init__(self, config: Optional[CompilerConfig] = None) -> None:
        self.config = config or CompilerConfig()

    def compile(self, source: str, filename: str = "<input>",
                reporter: Optional[Reporter] = None,
                dump_parse: bool = False, dump_ast: bool = False) -> str:
        """Compile Go source.

        Raises:
            ParseFailure: the source is not valid for the supported subset
            ValidationFailure: unsupported Go features are used
            CompileError: the target is unknown or not implemented
            TypeMappingFailure: a type has no SimplicityHL equivalent
        """
        from simgo.internals.parser import parse_to_ast
        from simgo.internals.parse_errors import handle_parse_exception

        cfg = self.config
        reporter = reporter if reporter is not None else Reporter(source=source, filename=filename)

        try:
            program, tree = parse_to_ast(source, dump_parse=dump_parse or cfg.debug)
        except (UnexpectedInput, ASTBuildError) as exc:
            handle_parse_exception(exc, reporter)
            raise ParseFailure(reporter.errors[-1].message, reporter.errors[-1:]) from exc

        if dump_ast or cfg.debug:
            print(f"Parsed AST for {filename}", file=sys.stderr)
            print(program, file=sys.stderr)
            print(file=sys.stderr)

        check_program(program, reporter)

        if cfg.target == "simplicity":
            er.emit(reporter, er.ERR.SG4002, None)
            raise CompileError(er.format_message("SG4002"), reporter.errors[-1:])
        if cfg.target not in TARGETS:
            er.emit(reporter, er.ERR.SG4001, None, target=cfg.target)
            raise CompileError(er.format_message("SG4001", target=cfg.target), reporter.errors[-1:])

        result = analyze_program(program, reporter, entry=cfg.entry,
                                 propagate_constants=cfg.propagate_constants,
                                 report_fallbacks=cfg.report_fallbacks)
        if cfg.debug:
            _print_records(result)

        return SimplicityCodegen(reporter, report_fallbacks=cfg.report_fallbacks).generate(result)


def _print_records(result: AnalysisResult) -> None:
    out = sys.stderr
    print("Witnesses:", file=out)
    for w in result.witnesses:
        print(f"  {w.name}: {w.type} = {w.value}", file=out)
    print("Constants:", file=out)
    for c in result.constants:
        print(f"  {c.name}: {c.type} = {c.value}", file=out)
    print("Functions:", file=out)
    for fn in result.functions:
        params = ", ".join(f"{p.name}: {p.type}" for p in fn.params)
        ret = f" -> {fn.return_type}" if fn.return_type else ""
        print(f"  {fn.name}({params}){ret}", file=out)
    print(file=out)
