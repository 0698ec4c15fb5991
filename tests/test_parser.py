"""Front end: grammar, semicolon insertion and AST construction."""

import pytest
from lark import UnexpectedInput

from simgo.internals.parser import parse_to_ast
from simgo.semantics.ast import (
    ArrayType, AssignStmt, BasicLit, BinaryExpr, CallExpr, ChanType, DeclStmt, ForStmt,
    FuncDecl, GenDecl, Ident, IfStmt, IncDecStmt, InterfaceType, MapType, RangeStmt,
    ReturnStmt, SelectorExpr, SendStmt, StructType, TypeSpec, UnaryExpr, ValueSpec,
)


def test_package_and_imports(parse):
    src = 'package main\n\nimport "bitcoin"\nimport (\n\tb "github.com/x/bitcoin"\n\t"math"\n)\n'
    program = parse(src)
    assert program.package == "main"
    assert [(i.alias, i.path) for i in program.imports] == [
        (None, "bitcoin"), ("b", "github.com/x/bitcoin"), (None, "math"),
    ]
    assert program.decls == []


def test_function_declaration(parse):
    (fn,) = parse("package main\nfunc Add(a, b uint32, c bool) uint32 {\n\treturn a + b\n}\n").decls
    assert isinstance(fn, FuncDecl)
    assert fn.name == "Add"
    assert [(f.names, f.ty.name) for f in fn.params] == [(["a", "b"], "uint32"), (["c"], "bool")]
    assert [r.name for r in fn.results] == ["uint32"]
    (ret,) = fn.body.stmts
    assert isinstance(ret, ReturnStmt)
    assert isinstance(ret.results[0], BinaryExpr) and ret.results[0].op == "+"


def test_multiple_results_and_trailing_comma(parse):
    src = "package main\nfunc Split(\n\tx uint64,\n\ty uint64,\n) (uint32, bool) {\n\treturn 1, true\n}\n"
    (fn,) = parse(src).decls
    assert [f.names[0] for f in fn.params] == ["x", "y"]
    assert [r.name for r in fn.results] == ["uint32", "bool"]


def test_grouped_declarations(parse):
    src = (
        "package main\n"
        "const (\n\tA uint64 = 1\n\tB = 2\n)\n"
        "var total, count uint8 = 3, 4\n"
        "type (\n\tPair struct {\n\t\tx, y uint8\n\t}\n\tAmount = uint64\n)\n"
    )
    consts, vars_, types = parse(src).decls
    assert isinstance(consts, GenDecl) and consts.tok == "const"
    assert [s.names for s in consts.specs] == [["A"], ["B"]]
    assert consts.specs[1].ty is None
    (spec,) = vars_.specs
    assert isinstance(spec, ValueSpec)
    assert spec.names == ["total", "count"]
    assert [v.value for v in spec.values] == ["3", "4"]
    pair, alias = types.specs
    assert isinstance(pair, TypeSpec) and isinstance(pair.ty, StructType)
    assert pair.ty.fields[0].names == ["x", "y"]
    assert alias.is_alias and alias.ty.name == "uint64"


def test_type_expressions(parse):
    src = (
        "package main\n"
        "func F(a [32]byte, b []uint8, c map[string]bool, d chan uint8, e bitcoin.Hash,\n"
        "\tf interface{}, g struct{}) {\n"
        "}\n"
    )
    (fn,) = parse(src).decls
    a, b, c, d, e, f, g = (p.ty for p in fn.params)
    assert isinstance(a, ArrayType) and a.len.value == "32"
    assert isinstance(b, ArrayType) and b.len is None
    assert isinstance(c, MapType)
    assert isinstance(d, ChanType)
    assert isinstance(e, SelectorExpr) and (e.x.name, e.sel) == ("bitcoin", "Hash")
    assert isinstance(f, InterfaceType)
    assert isinstance(g, StructType) and g.fields == []


def test_statements(parse):
    src = (
        "package main\n"
        "func main() {\n"
        "\tvar amount uint64 = 1000\n"
        "\tok := amount > 0 && !done\n"
        "\tamount += 5\n"
        "\tcount++\n"
        "\tch <- amount\n"
        "\tif x := f(); x {\n"
        "\t\treturn\n"
        "\t} else if ok {\n"
        "\t}\n"
        "\tfor i := 0; i < 3; i++ {\n\t}\n"
        "\tfor k, v := range items {\n\t}\n"
        "}\n"
    )
    (fn,) = parse(src).decls
    decl, short, op_assign, inc, send, if_stmt, loop, rng = fn.body.stmts
    assert isinstance(decl, DeclStmt) and decl.decl.tok == "var"
    assert isinstance(short, AssignStmt) and short.tok == ":="
    assert short.rhs[0].op == "&&"
    assert isinstance(short.rhs[0].y, UnaryExpr) and short.rhs[0].y.op == "!"
    assert op_assign.tok == "+="
    assert isinstance(inc, IncDecStmt) and inc.tok == "++"
    assert isinstance(send, SendStmt)
    assert isinstance(if_stmt, IfStmt) and if_stmt.init is not None
    assert isinstance(if_stmt.else_, IfStmt)
    assert isinstance(loop, ForStmt) and loop.cond.op == "<"
    assert isinstance(rng, RangeStmt) and rng.tok == ":=" and rng.x.name == "items"


def test_literals(parse):
    src = "package main\nfunc main() {\n\ta := 0x1F\n\tb := \"s\"\n\tc := 'x'\n\td := true\n\te := `raw`\n}\n"
    (fn,) = parse(src).decls
    values = [(s.rhs[0].kind, s.rhs[0].value) for s in fn.body.stmts]
    assert values == [("INT", "0x1F"), ("STRING", '"s"'), ("CHAR", "'x'"),
                      ("BOOL", "true"), ("STRING", "`raw`")]


def test_operator_precedence(parse):
    (fn,) = parse("package main\nfunc main() {\n\tx := 1 + 2 * 3 > 4 || y\n}\n").decls
    expr = fn.body.stmts[0].rhs[0]
    assert expr.op == "||"
    assert expr.x.op == ">"
    assert expr.x.x.op == "+"
    assert expr.x.x.y.op == "*"


def test_parentheses_group_without_a_node(parse):
    (fn,) = parse("package main\nfunc main() {\n\tx := (40 + 2) * 1\n}\n").decls
    expr = fn.body.stmts[0].rhs[0]
    assert expr.op == "*"
    assert isinstance(expr.x, BinaryExpr) and expr.x.op == "+"


def test_make_takes_a_type_argument(parse):
    (fn,) = parse("package main\nfunc main() {\n\tm := make(map[string]int, 4)\n}\n").decls
    call = fn.body.stmts[0].rhs[0]
    assert isinstance(call, CallExpr) and call.fun.name == "make"
    assert isinstance(call.args[0], MapType)
    assert isinstance(call.args[1], BasicLit)


def test_comments_and_semicolons(parse):
    src = (
        "// leading comment\n"
        "package main\n"
        "/* block\n   comment */\n"
        "func main() { a := 1; b := 2 }  // trailing\n"
    )
    (fn,) = parse(src).decls
    assert [s.lhs[0].name for s in fn.body.stmts] == ["a", "b"]


def test_missing_trailing_newline_is_accepted(parse):
    (fn,) = parse("package main\nfunc main() {\n\tok := true\n}").decls
    assert isinstance(fn.body.stmts[0].lhs[0], Ident)


def test_syntax_errors_raise_lark_errors():
    with pytest.raises(UnexpectedInput):
        parse_to_ast("package main\nfunc main()\n{\n}\n")


def test_dump_parse_goes_to_stderr(capsys):
    parse_to_ast("package main\n", dump_parse=True)
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "package_clause" in captured.err
