"""Command-line interface: files, flags and exit codes."""

from pathlib import Path

import pytest

from simgo.compiler.cli import get_effective_cwd, main

SOURCE = """\
package main

func ValidateAmount(amountValid bool) bool {
    return amountValid
}

func main() {
    var amount uint64 = 1000
    amountValid := amount > 0
    result := ValidateAmount(amountValid)
}
"""


@pytest.fixture
def go_file(tmp_path):
    path = tmp_path / "contract.go"
    path.write_text(SOURCE, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def plain_output(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.delenv("SIMGO_CWD", raising=False)


def test_writes_to_stdout(go_file, capsys):
    assert main([str(go_file)]) == 0
    captured = capsys.readouterr()
    assert captured.out.startswith("mod witness {\n")
    assert "assert!(witness::RESULT);" in captured.out
    assert captured.err == ""


def test_input_flag_and_output_file(go_file, tmp_path, capsys):
    out = tmp_path / "contract.simf"
    assert main(["-i", str(go_file), "-o", str(out)]) == 0
    assert capsys.readouterr().out == ""
    assert "fn validate_amount(amount_valid: bool) -> bool {" in out.read_text(encoding="utf-8")


def test_relative_paths_use_simgo_cwd(go_file, tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("SIMGO_CWD", str(tmp_path))
    assert get_effective_cwd() == tmp_path
    assert main(["contract.go", "-o", "out.simf"]) == 0
    assert (tmp_path / "out.simf").exists()


def test_missing_source_argument(capsys):
    assert main([]) == 2
    assert "source file required" in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.go")]) == 2
    assert "input file does not exist" in capsys.readouterr().err


def test_unwritable_output(go_file, tmp_path, capsys):
    assert main([str(go_file), "-o", str(tmp_path / "missing" / "out.simf")]) == 2
    assert "SG4004" in capsys.readouterr().err


def test_validation_errors_exit_2(tmp_path, capsys):
    src = tmp_path / "bad.go"
    src.write_text("package main\nfunc f(d []byte, m map[uint8]bool) {}\n", encoding="utf-8")
    assert main([str(src)]) == 2
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "[SG2005]: slices are not supported, use fixed-size arrays." in captured.err
    assert "[SG2006]: maps are not supported in Simplicity." in captured.err


def test_syntax_error_exit_2(tmp_path, capsys):
    src = tmp_path / "bad.go"
    src.write_text("package main\nfunc main()\n{\n}\n", encoding="utf-8")
    assert main([str(src)]) == 2
    assert "unexpected newline before '{'" in capsys.readouterr().err


def test_simplicity_target(go_file, capsys):
    assert main([str(go_file), "--target", "simplicity"]) == 2
    assert "direct Simplicity compilation not yet implemented" in capsys.readouterr().err


def test_warnings_exit_1(go_file, capsys):
    assert main([str(go_file), "--report-fallbacks"]) == 1
    captured = capsys.readouterr()
    assert "const AMOUNT_VALID: bool = true;" in captured.out
    assert "[SW0001]" in captured.err


def test_missing_trailing_newline_warns(tmp_path, capsys):
    src = tmp_path / "nonl.go"
    src.write_text(SOURCE.rstrip("\n"), encoding="utf-8")
    assert main([str(src)]) == 1
    assert "does not end with a newline" in capsys.readouterr().err


def test_entry_and_propagation_flags(go_file, capsys):
    assert main([str(go_file), "--propagate-constants"]) == 0
    assert "const AMOUNT_VALID: bool = true;" in capsys.readouterr().out

    assert main([str(go_file), "--entry", "ValidateAmount"]) == 0
    out = capsys.readouterr().out
    assert "const AMOUNT" not in out
    assert "fn main() {\n    true\n}" in out


def test_debug_dumps_go_to_stderr(go_file, capsys):
    assert main([str(go_file), "--dump-ast", "--dump-parse"]) == 0
    captured = capsys.readouterr()
    assert captured.out.startswith("mod witness {")
    assert "Parsed AST" in captured.err
    assert "package_clause" in captured.err


def test_list_types(capsys):
    assert main(["--list-types"]) == 0
    out = capsys.readouterr().out
    assert "uint64" in out and "u64" in out
    assert "bitcoin.Signature" in out
    assert "512" in out


def test_version(capsys):
    assert main(["--version"]) == 0
    assert "simgo" in capsys.readouterr().out.lower()
