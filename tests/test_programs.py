"""Run every fixture under tests/programs through the CLI in-process."""

from pathlib import Path

import pytest

from simgo.compiler.cli import main
from test_metadata import find_test_programs, get_expected_exit_code, parse_test_metadata

PROGRAMS = find_test_programs(Path(__file__).parent)


@pytest.mark.parametrize("program", PROGRAMS, ids=[p.stem for p in PROGRAMS])
def test_program(program, capsys, monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")
    metadata = parse_test_metadata(program)

    exit_code = main([str(program), *metadata.compiler_flags])
    captured = capsys.readouterr()

    assert exit_code == get_expected_exit_code(program), captured.err
    for text in metadata.expect_output_contains:
        assert text in captured.out
    for text in metadata.expect_output_absent:
        assert text not in captured.out
    for text in metadata.expect_error_contains:
        assert text in captured.err
    if exit_code == 2:
        assert captured.out == ""


def test_fixture_set_is_not_empty():
    assert len(PROGRAMS) > 20
