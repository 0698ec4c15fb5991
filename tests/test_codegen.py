"""SimplicityHL code generation from analysis records."""

from simgo.backend.codegen_simplicity import SimplicityCodegen, resolve_witness_type
from simgo.internals.report import Reporter
from simgo.semantics.records import AUTO, AnalysisResult, Constant, Function, Parameter, WitnessValue


def witness(name, value, type=AUTO):
    return WitnessValue(name=name, type=type, value=value, loc=None)


def function(name, params, return_type="bool", body=("true",)):
    return Function(name=name, params=tuple(Parameter(n, t) for n, t in params),
                    return_type=return_type, body=tuple(body), loc=None)


def generate(witnesses=(), constants=(), functions=(), **kwargs):
    result = AnalysisResult(witnesses=tuple(witnesses), constants=tuple(constants),
                            functions=tuple(functions))
    return SimplicityCodegen(**kwargs).generate(result)


def test_resolve_witness_type():
    assert resolve_witness_type(witness("a", "true")) == "bool"
    assert resolve_witness_type(witness("a", "false")) == "bool"
    assert resolve_witness_type(witness("a", "42")) == "u64"
    assert resolve_witness_type(witness("a", "-3")) == "u64"
    assert resolve_witness_type(witness("a", '"text"')) == "bool"
    assert resolve_witness_type(witness("a", "1", type="u8")) == "u8"


def test_empty_program():
    assert generate() == (
        "mod witness {\n"
        "}\n"
        "mod param {\n"
        "}\n"
        "\n"
        "fn main() {\n"
        "    assert!(true);\n"
        "}\n"
    )


def test_full_layout():
    out = generate(
        witnesses=[witness("amount", "1000", "u64"), witness("amount_valid", "true"),
                   witness("result", "true")],
        constants=[Constant(name="MIN_FEE", type="u64", value="100", loc=None)],
        functions=[function("validate_amount", [("amount_valid", "bool")], body=("amount_valid",))],
    )
    assert out == (
        "mod witness {\n"
        "    const AMOUNT: u64 = 1000;\n"
        "    const AMOUNT_VALID: bool = true;\n"
        "    const RESULT: bool = true;\n"
        "}\n"
        "mod param {\n"
        "    const MIN_FEE: u64 = 100;\n"
        "}\n"
        "\n"
        "fn validate_amount(amount_valid: bool) -> bool {\n"
        "    amount_valid\n"
        "}\n"
        "\n"
        "fn main() {\n"
        "    assert!(witness::RESULT);\n"
        "}\n"
    )


def test_function_body_is_indented():
    body = ("match amount {", "    0 => false,", "    _ => true,", "}")
    out = generate(functions=[function("is_positive", [("amount", "u64")], body=body)])
    assert (
        "fn is_positive(amount: u64) -> bool {\n"
        "    match amount {\n"
        "        0 => false,\n"
        "        _ => true,\n"
        "    }\n"
        "}\n"
    ) in out


def test_function_without_return_type():
    out = generate(functions=[function("noop", [], return_type=None)])
    assert "fn noop() {\n    true\n}\n" in out


def test_result_witness_is_asserted_case_insensitively():
    out = generate(witnesses=[witness("ok", "true"), witness("final_Result", "false")],
                   functions=[function("check", [("a", "bool")])])
    assert "    assert!(witness::FINAL_RESULT);\n" in out


def test_last_function_called_with_boolean_witnesses():
    out = generate(
        witnesses=[witness("count", "7"), witness("first", "true"), witness("second", "false"),
                   witness("third", "true")],
        functions=[function("other", [("x", "u64")]),
                   function("both", [("a", "bool"), ("b", "bool")])],
    )
    assert "    assert!(both(witness::FIRST, witness::SECOND));\n" in out


def test_too_few_boolean_witnesses_falls_back():
    out = generate(witnesses=[witness("first", "true")],
                   functions=[function("both", [("a", "bool"), ("b", "bool")])])
    assert "    assert!(true);\n" in out


def test_fallback_assertion_warning():
    r = Reporter()
    generate(reporter=r, report_fallbacks=True)
    assert [d.code for d in r.warnings] == ["SW0002"]

    quiet = Reporter()
    generate(reporter=quiet)
    assert quiet.items == []


def test_generation_is_deterministic():
    args = dict(witnesses=[witness("a", "true")],
                functions=[function("f", [("a", "bool")])])
    assert generate(**args) == generate(**args)
