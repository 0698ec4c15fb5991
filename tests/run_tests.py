#!/usr/bin/env python3
"""
Fixture runner for tests/programs.

Each test_*.go fixture is translated by the CLI in a subprocess. The exit
code must match the file name prefix (test_err_ -> 2, test_warn_ -> 1,
anything else -> 0) and every `// EXPECT_*` directive must hold against
stdout (generated code) or stderr (diagnostics).

    python tests/run_tests.py [-v] [-j N] [--filter TEXT] [--json]
"""

import argparse
import json
import os
import subprocess
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from tqdm import tqdm

sys.path.insert(0, str(Path(__file__).parent))
from test_metadata import parse_test_metadata, get_expected_exit_code, find_test_programs  # noqa: E402

PROJECT_ROOT = Path(__file__).resolve().parent.parent


@dataclass
class FixtureResult:
    name: str
    expected: int
    actual: int
    problems: list = field(default_factory=list)
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.expected == self.actual and not self.problems

    def describe(self) -> str:
        mark = "✓" if self.ok else "✗"
        return f"{mark} {self.name} (exit {self.actual}, want {self.expected})"


def check_expectations(test_file: Path, stdout: str, stderr: str) -> list[str]:
    """Unmet `// EXPECT_*` directives of a fixture, as readable strings."""
    meta = parse_test_metadata(test_file)
    problems = [f"output does not contain {t!r}" for t in meta.expect_output_contains if t not in stdout]
    problems += [f"output unexpectedly contains {t!r}" for t in meta.expect_output_absent if t in stdout]
    problems += [f"diagnostics do not contain {t!r}" for t in meta.expect_error_contains if t not in stderr]
    return problems


def run_fixture(test_file: Path) -> FixtureResult:
    flags = parse_test_metadata(test_file).compiler_flags
    cmd = [sys.executable, "-m", "simgo.compiler.cli", str(test_file), *flags]
    want = get_expected_exit_code(test_file)
    try:
        proc = subprocess.run(cmd, cwd=PROJECT_ROOT, capture_output=True, text=True,
                              env=dict(os.environ, NO_COLOR="1"), timeout=30)
    except subprocess.TimeoutExpired:
        return FixtureResult(test_file.name, want, -1, ["timed out after 30s"])

    return FixtureResult(
        name=test_file.name,
        expected=want,
        actual=proc.returncode,
        problems=check_expectations(test_file, proc.stdout, proc.stderr),
        stdout=proc.stdout,
        stderr=proc.stderr,
    )


def print_details(res: FixtureResult) -> None:
    for label, text in (("stdout", res.stdout), ("stderr", res.stderr)):
        if text:
            print(f"    --- {label}")
            for line in text.rstrip().splitlines():
                print(f"    {line}")
    for problem in res.problems:
        print(f"    ! {problem}")


def main() -> int:
    ap = argparse.ArgumentParser(description="Translate every fixture program and check its expectations")
    ap.add_argument("-v", "--verbose", action="store_true", help="print every fixture and its output")
    ap.add_argument("-j", "--jobs", type=int, default=4, help="parallel workers (default: 4)")
    ap.add_argument("--filter", help="only fixtures whose file name contains this text")
    ap.add_argument("--json", action="store_true", help="machine-readable summary on stdout")
    args = ap.parse_args()

    fixtures = find_test_programs(PROJECT_ROOT / "tests")
    if args.filter:
        fixtures = [f for f in fixtures if args.filter in f.name]
    if not fixtures:
        if not args.json:
            print("no fixtures matched")
        return 1

    started = time.monotonic()
    quiet = args.json or args.verbose
    with ThreadPoolExecutor(max_workers=args.jobs) as pool:
        it = pool.map(run_fixture, fixtures)
        results = list(it if quiet else tqdm(it, total=len(fixtures), desc="fixtures", unit="file"))
    elapsed = time.monotonic() - started
    failures = [r for r in results if not r.ok]

    if args.json:
        print(json.dumps({
            "total": len(results),
            "failed": [
                {"name": r.name, "expected": r.expected, "actual": r.actual, "problems": r.problems}
                for r in failures
            ],
            "seconds": round(elapsed, 2),
        }, indent=2))
        return 1 if failures else 0

    for res in results:
        if args.verbose or not res.ok:
            print(res.describe())
            if args.verbose or res.problems:
                print_details(res)

    print(f"\n{len(results) - len(failures)}/{len(results)} fixtures passed in {elapsed:.2f}s")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
