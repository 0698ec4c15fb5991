"""CLI entry point and argument parsing."""
from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from simgo.internals.version import print_banner


def get_effective_cwd() -> Path:
    """Directory relative paths are resolved against.

    SIMGO_CWD overrides the process working directory (used by wrapper
    scripts that change directory before running the transpiler).
    """
    simgo_cwd = os.environ.get('SIMGO_CWD')
    if simgo_cwd:
        return Path(simgo_cwd)
    return Path.cwd()


def print_type_table() -> int:
    """Print every supported Go type with its SimplicityHL type and width."""
    from simgo.semantics.typesys import TypeMapper, BITCOIN_TYPES

    tm = TypeMapper()
    rows = [(name, tm.builtins[name]) for name in tm.supported_types()]
    rows += [(f"bitcoin.{name}", target) for name, target in BITCOIN_TYPES.items()]

    width = max(len(name) for name, _ in rows)
    print(f"{'Go type':<{width}}  {'SimplicityHL':<12}  bits")
    for name, target in rows:
        print(f"{name:<{width}}  {target:<12}  {tm.bit_width(target)}")
    print()
    print("Fixed arrays [N]T map to [T; N]; structs map to tuples.")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Transpiler entry point.

    Returns:
        0 on success, 1 on success with warnings, 2 on errors.
    """
    ap = argparse.ArgumentParser(prog="simgo", description="Go subset to SimplicityHL transpiler")

    ap.add_argument("source", nargs='?', help="Path to Go source file")
    ap.add_argument("-i", "--input", metavar="FILE", help="Path to Go source file (alternative to SOURCE)")
    ap.add_argument("-o", "--out", metavar="OUT",
                    help="Output SimplicityHL file (default: stdout)")
    ap.add_argument("--target", choices=["simplicityhl", "simplicity"], default="simplicityhl",
                    help="Output format (default: simplicityhl)")
    ap.add_argument("--entry", metavar="NAME", default="main",
                    help="Function whose declarations become witnesses (default: main)")
    ap.add_argument("--propagate-constants", action="store_true",
                    help="Resolve identifiers through earlier witnesses and constants instead of defaulting to 'true'")
    ap.add_argument("--report-fallbacks", action="store_true",
                    help="Warn whenever a value or the entry assertion falls back to 'true'")
    ap.add_argument("--dump-parse", action="store_true", help="Print raw Lark tree")
    ap.add_argument("--dump-ast", action="store_true", help="Print AST")
    ap.add_argument("--debug", action="store_true",
                    help="Print the parse tree, AST and analysis records to stderr")
    ap.add_argument("--list-types", action="store_true", help="Show the supported type table and exit")
    ap.add_argument("--version", action="store_true", help="Show version and exit")
    args = ap.parse_args(argv)

    if args.version:
        print_banner()
        return 0

    if args.list_types:
        return print_type_table()

    if args.debug:
        print_banner(sys.stderr)

    source_arg = args.input or args.source
    if not source_arg:
        print("error: source file required", file=sys.stderr)
        return 2

    from simgo.compiler.pipeline import Compiler, CompilerConfig
    from simgo.internals import errors as er
    from simgo.internals.exceptions import TranspileError
    from simgo.internals.report import Reporter

    effective_cwd = get_effective_cwd()
    src_path = Path(source_arg)
    if not src_path.is_absolute():
        src_path = effective_cwd / src_path
    src_path = src_path.resolve()

    if not src_path.exists():
        reporter = Reporter(filename=str(src_path))
        er.emit(reporter, er.ERR.SG4005, None, path=source_arg)
        reporter.print()
        return 2

    try:
        src = src_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        reporter = Reporter(filename=str(src_path))
        er.emit(reporter, er.ERR.SG4003, None, path=src_path, reason=e)
        reporter.print()
        return 2

    reporter = Reporter(source=src, filename=str(src_path))

    # Check for missing trailing newline
    if src and not src.endswith('\n'):
        er.emit(reporter, er.ERR.SW0003, None)

    config = CompilerConfig(
        target=args.target,
        debug=args.debug,
        entry=args.entry,
        propagate_constants=args.propagate_constants,
        report_fallbacks=args.report_fallbacks,
    )

    try:
        output = Compiler(config).compile(src, str(src_path), reporter=reporter,
                                          dump_parse=args.dump_parse, dump_ast=args.dump_ast)
    except TranspileError:
        reporter.print()
        return 2

    if args.out:
        out_path = Path(args.out)
        if not out_path.is_absolute():
            out_path = effective_cwd / out_path
        try:
            out_path.write_text(output, encoding="utf-8")
        except OSError as e:
            er.emit(reporter, er.ERR.SG4004, None, path=out_path, reason=e)
            reporter.print()
            return 2
        if args.debug:
            print(f"Successfully compiled {src_path} to {out_path}", file=sys.stderr)
    else:
        sys.stdout.write(output)

    if reporter.has_warnings:
        reporter.print()
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
