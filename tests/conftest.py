"""Pytest configuration for the simgo test suite."""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(Path(__file__).parent))

from simgo.internals.parser import parse_to_ast
from simgo.internals.report import Reporter


@pytest.fixture
def parse():
    """Parse Go source into a Program."""
    def _parse(src: str):
        program, _tree = parse_to_ast(src)
        return program
    return _parse


@pytest.fixture
def reporter():
    return Reporter(filename="test.go")
