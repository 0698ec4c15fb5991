"""
Test metadata parsing for the simgo fixture programs.

Fixture programs under tests/programs/ carry their expectations as Go line
comments at the top of the file:

    // EXPECT_OUTPUT_CONTAINS: "const AMOUNT: u64 = 1000;"
    // EXPECT_ERROR_CONTAINS: "maps are not supported in Simplicity"
    // COMPILER_FLAGS: --propagate-constants
"""

import shlex
from dataclasses import dataclass, field
from typing import List
from pathlib import Path


@dataclass
class TestMetadata:
    """Expectations for one fixture program."""

    __test__ = False  # not a pytest test class

    expect_output_contains: List[str] = field(default_factory=list)
    expect_output_absent: List[str] = field(default_factory=list)
    expect_error_contains: List[str] = field(default_factory=list)
    compiler_flags: List[str] = field(default_factory=list)


def _unquote(value: str) -> str:
    # Remove quotes if present
    if value.startswith('"') and value.endswith('"'):
        value = value[1:-1]
    # Handle escape sequences
    return value.replace('\\n', '\n').replace('\\t', '\t')


def parse_test_metadata(test_file: Path) -> TestMetadata:
    """
    Parse test metadata from a fixture program.

    Only the first 20 lines are scanned; directives must come before the
    package clause.

    Args:
        test_file: Path to the .go fixture

    Returns:
        TestMetadata object with parsed expectations
    """
    metadata = TestMetadata()

    content = test_file.read_text(encoding='utf-8')
    for line in content.split('\n')[:20]:
        line = line.strip()
        if not line.startswith('//'):
            continue

        directive = line[2:].strip()
        if ':' not in directive:
            continue
        key, value = directive.split(':', 1)
        value = value.strip()

        if key == 'EXPECT_OUTPUT_CONTAINS':
            metadata.expect_output_contains.append(_unquote(value))
        elif key == 'EXPECT_OUTPUT_ABSENT':
            metadata.expect_output_absent.append(_unquote(value))
        elif key == 'EXPECT_ERROR_CONTAINS':
            metadata.expect_error_contains.append(_unquote(value))
        elif key == 'COMPILER_FLAGS':
            metadata.compiler_flags.extend(shlex.split(value))

    return metadata


def get_test_category(test_file: Path) -> str:
    """
    Determine test category based on filename pattern.

    Returns:
        'error': Should fail translation (test_err_*)
        'warning': Should succeed with warnings (test_warn_*)
        'success': Should succeed without warnings (test_*)
    """
    filename = test_file.name

    if filename.startswith('test_err_'):
        return 'error'
    elif filename.startswith('test_warn_'):
        return 'warning'
    else:
        return 'success'


def get_expected_exit_code(test_file: Path) -> int:
    """Exit code the CLI must return for a fixture (0, 1 or 2)."""
    return {'success': 0, 'warning': 1, 'error': 2}[get_test_category(test_file)]


def find_test_programs(tests_dir: Path) -> List[Path]:
    """All fixture programs under tests/programs, sorted by name."""
    return sorted((tests_dir / "programs").glob("test_*.go"))
