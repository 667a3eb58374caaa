"""Tests for evaluating programs end to end"""

import io
import time

import pytest

from salt import load, run
from salt.ast import BINARY_OP_SYMBOLS, BinaryOp
from salt.errors import (
    ArityError,
    LoadError,
    SaltArithmeticError,
    SaltNameError,
    SaltOverflowError,
    SaltTypeError,
    SaltZeroDivisionError,
)
from salt.interpreter.interpreter import ARITHMETIC_OPS, COMPARISON_OPS
from salt.value import Value, ValueType


FIB = """
fn fib_iter(i) {
    a = 0;
    b = 1;
    j = 0;
    while j < i {
        t = b;
        b = a + b;
        a = t;
        j = j + 1;
    }
    return a;
}

fn fib_rec(i) {
    if i == 0 {
        return 0;
    }
    if i == 1 {
        return 1;
    }
    return fib_rec(i - 1) + fib_rec(i - 2);
}
"""


def evaluate(expr: str) -> Value:
    return run(f"fn main() {{ return {expr}; }}")


# ---------------------------------------------------------------------------
# Reference programs
# ---------------------------------------------------------------------------


def test_math():
    assert run("fn main() { return 4 * 5 + 12 / (10 - 15 % 8); }") == Value.integer(24)


def test_if():
    source = """
    fn main() {
        if 2 >= 3 { return 1; }
        if 2 > 3 { return 2; }
        if 2 <= 3 { return 3; }
    }
    """
    assert run(source) == Value.integer(3)


def test_while():
    source = """
    fn main() {
        let i = 1;
        let product = 1;
        while i <= 10 {
            product = product * i;
            i = i + 1;
        }
        return product;
    }
    """
    assert run(source) == Value.integer(3628800)


def test_functions():
    source = """
    fn main() { return a(1, 2, 3) + b(4, 5) + c(6) + d(); }
    fn a(x, y, z) { return b(x, y) + c(z) + d() + 1; }
    fn b(x, y) { return c(x) + d() + 1; }
    fn c(x) { return d() + 1; }
    fn d() { return 1; }
    """
    assert run(source) == Value.integer(15)


def test_fib(capsys):
    source = """
    fn main() {
        print(fib_iter(10));
        return fib_iter(10) == fib_rec(10);
    }
    """ + FIB

    assert run(source) == Value.true()
    assert capsys.readouterr().out == "55\n"


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("a", [-17, -7, -1, 0, 1, 7, 17, 100])
@pytest.mark.parametrize("b", [-5, -3, -1, 1, 2, 3, 5])
def test_division_and_remainder_reconstruct_dividend(a, b):
    assert evaluate(f"({a}) / ({b}) * ({b}) + ({a}) % ({b})") == Value.integer(a)


@pytest.mark.parametrize("expr, expected", [
    ("7 / 2", 3),
    ("-7 / 2", -3),
    ("7 / -2", -3),
    ("-7 / -2", 3),
    ("7 % 3", 1),
    ("-7 % 3", -1),
    ("7 % -3", 1),
    ("-7 % -3", -1),
])
def test_division_truncates_toward_zero(expr, expected):
    assert evaluate(expr) == Value.integer(expected)


def test_no_block_scoping(capsys):
    run("fn main() { let x = 1; if true { let x = 2; } print(x); }")
    assert capsys.readouterr().out == "2\n"


def test_bindings_inside_loops_outlive_the_loop():
    source = """
    fn main() {
        let i = 0;
        while i < 3 {
            let last = i;
            i = i + 1;
        }
        return last;
    }
    """
    assert run(source) == Value.integer(2)


@pytest.mark.parametrize("n", range(0, 16))
def test_recursive_and_iterative_fib_agree(n):
    interpreter = load("fn main() {}" + FIB)
    iterative = interpreter.call_function("fib_iter", [Value.integer(n)])
    recursive = interpreter.call_function("fib_rec", [Value.integer(n)])

    assert iterative == recursive


def test_mutual_recursion():
    source = """
    fn main() { return is_even(25); }
    fn is_even(n) { if n == 0 { return true; } return is_odd(n - 1); }
    fn is_odd(n) { if n == 0 { return false; } return is_even(n - 1); }
    """
    assert run(source) == Value.false()


@pytest.mark.parametrize("args", ["1", "1, 2, 3"])
def test_arity_mismatch_is_fatal(args):
    source = f"fn main() {{ return add({args}); }} fn add(a, b) {{ return a + b; }}"
    with pytest.raises(ArityError, match="expects 2 arguments"):
        run(source)


def test_main_with_parameters_is_an_arity_error():
    with pytest.raises(ArityError):
        run("fn main(x) { return x; }")


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


def test_function_without_return_yields_unit():
    assert run("fn main() { let x = 1; }") == Value.unit()
    assert run("fn main() {}").type is ValueType.Unit


def test_return_stops_loop_and_function(capsys):
    source = """
    fn main() {
        let i = 0;
        while true {
            if i == 3 { return i; }
            print(i);
            i = i + 1;
        }
        print(99);
    }
    """
    assert run(source) == Value.integer(3)
    assert capsys.readouterr().out == "0\n1\n2\n"


def test_false_condition_skips_body(capsys):
    run("fn main() { if false { print(1); } while false { print(2); } }")
    assert capsys.readouterr().out == ""


def test_print_formats(capsys):
    run("fn main() { print(1); print(-1); print(true); print(false); print(unit()); } fn unit() {}")
    assert capsys.readouterr().out == "1\n-1\ntrue\nfalse\n()\n"


def test_print_to_custom_stream():
    stream = io.StringIO()
    run("fn main() { print(3); }", stdout=stream)
    assert stream.getvalue() == "3\n"


def test_expression_statement_runs_call_for_side_effects(capsys):
    run("fn main() { shout(); shout(); } fn shout() { print(1); return 5; }")
    assert capsys.readouterr().out == "1\n1\n"


def test_callee_cannot_see_caller_variables():
    with pytest.raises(SaltNameError, match="No such variable 'x'"):
        run("fn main() { let x = 1; return peek(); } fn peek() { return x; }")


def test_callee_bindings_do_not_leak_into_caller():
    source = """
    fn main() {
        let x = 1;
        set(5);
        return x;
    }
    fn set(v) { let x = v; }
    """
    assert run(source) == Value.integer(1)


def test_arguments_are_evaluated_left_to_right(capsys):
    source = """
    fn main() { return pair(say(1), say(2)); }
    fn say(n) { print(n); return n; }
    fn pair(a, b) { return a * 10 + b; }
    """
    assert run(source) == Value.integer(12)
    assert capsys.readouterr().out == "1\n2\n"


def test_forward_references():
    assert run("fn main() { return later(); } fn later() { return 7; }") == Value.integer(7)


def test_parameters_are_copies():
    source = """
    fn main() { let x = 1; bump(x); return x; }
    fn bump(x) { x = x + 1; return x; }
    """
    assert run(source) == Value.integer(1)


# ---------------------------------------------------------------------------
# Builtins
# ---------------------------------------------------------------------------


def test_time_is_milliseconds_since_epoch():
    before = time.time_ns() // 1_000_000
    value = evaluate("time()")
    after = time.time_ns() // 1_000_000

    assert value.type is ValueType.Integer
    assert before <= value.value <= after


def test_time_can_measure_elapsed_time():
    source = """
    fn main() {
        let start = time();
        let i = 0;
        while i < 100 { i = i + 1; }
        return time() - start;
    }
    """
    elapsed = run(source)

    assert elapsed.type is ValueType.Integer
    assert elapsed.value >= 0


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


def test_missing_main():
    with pytest.raises(LoadError, match="Could not find 'main'"):
        load("fn helper() { return 1; }")


def test_duplicate_function():
    with pytest.raises(LoadError, match="'f' is defined more than once"):
        load("fn main() {} fn f() {} fn f(x) {}")


def test_undefined_function():
    with pytest.raises(SaltNameError, match="No such function 'nope'"):
        run("fn main() { return nope(); }")


def test_undefined_variable():
    with pytest.raises(SaltNameError, match="No such variable 'y'"):
        run("fn main() { let x = 1; return y; }")


@pytest.mark.parametrize("expr", [
    "1 + true",
    "false - 1",
    "true * false",
    "1 / unit()",
    "true == true",
    "unit() == unit()",
    "1 < false",
    "true != false",
])
def test_binary_operators_require_integers(expr):
    with pytest.raises(SaltTypeError, match="both operands must be Integer"):
        run(f"fn main() {{ return {expr}; }} fn unit() {{}}")


def test_type_error_names_operator_and_kinds():
    with pytest.raises(SaltTypeError, match="Cannot apply '==' to Boolean and Boolean"):
        evaluate("true == true")


def test_negation_requires_integer():
    with pytest.raises(SaltTypeError, match="unary '-'"):
        evaluate("-true")


@pytest.mark.parametrize("stmt", ["if 1 { }", "while 0 { }", "if unit() { }"])
def test_conditions_require_booleans(stmt):
    with pytest.raises(SaltTypeError, match="condition must be a Boolean"):
        run(f"fn main() {{ {stmt} }} fn unit() {{}}")


@pytest.mark.parametrize("expr", ["1 / 0", "1 % 0", "5 / (3 - 3)"])
def test_division_by_zero(expr):
    with pytest.raises(SaltZeroDivisionError, match="by zero"):
        evaluate(expr)


@pytest.mark.parametrize("expr", [
    "9223372036854775807 + 1",
    "-9223372036854775807 - 2",
    "4611686018427387904 * 2",
    "-(-9223372036854775807 - 1)",
    "(-9223372036854775807 - 1) / -1",
])
def test_overflow_is_an_error(expr):
    with pytest.raises(SaltOverflowError, match="overflow"):
        evaluate(expr)


def test_arithmetic_errors_share_a_base():
    assert issubclass(SaltZeroDivisionError, SaltArithmeticError)
    assert issubclass(SaltOverflowError, SaltArithmeticError)


def test_largest_values_do_not_overflow():
    assert evaluate("9223372036854775807") == Value.integer(2 ** 63 - 1)
    assert evaluate("-9223372036854775807 - 1") == Value.integer(-(2 ** 63))


def test_runtime_error_stops_execution(capsys):
    with pytest.raises(SaltZeroDivisionError):
        run("fn main() { print(1); let x = 1 / 0; print(2); }")

    assert capsys.readouterr().out == "1\n"


def test_runtime_error_carries_span():
    with pytest.raises(SaltTypeError) as info:
        run("fn main() {\n    let x = 1;\n    return x + true;\n}", "span.salt")

    span = info.value.span
    assert span.filename == "span.salt"
    assert (span.start.line, span.start.column) == (3, 14)


BINARY_OP_RESULTS = {
    BinaryOp.Add: Value.integer(9),
    BinaryOp.Sub: Value.integer(5),
    BinaryOp.Mul: Value.integer(14),
    BinaryOp.Div: Value.integer(3),
    BinaryOp.Mod: Value.integer(1),
    BinaryOp.Eq: Value.false(),
    BinaryOp.Ne: Value.true(),
    BinaryOp.Lt: Value.false(),
    BinaryOp.Le: Value.false(),
    BinaryOp.Gt: Value.true(),
    BinaryOp.Ge: Value.true(),
}


@pytest.mark.parametrize("op", list(BinaryOp))
def test_every_binary_operator_evaluates(op):
    assert evaluate(f"7 {BINARY_OP_SYMBOLS[op]} 2") == BINARY_OP_RESULTS[op]


def test_every_binary_operator_has_one_implementation():
    for op in BinaryOp:
        assert (op in ARITHMETIC_OPS) != (op in COMPARISON_OPS)
