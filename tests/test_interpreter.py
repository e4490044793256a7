import math
from textwrap import dedent

import pytest

from lox.callable import LoxCallable, NativeFunction
from lox.interpreter import Interpreter, is_equal, is_truthy, run_program, stringify


def run(source):
    return run_program(dedent(source))


def output_lines(capsys):
    return capsys.readouterr().out.splitlines()


@pytest.mark.parametrize(
    "value, expected",
    [
        (4.0, "4"),
        (4.5, "4.5"),
        (-3.0, "-3"),
        (0.1 + 0.2, "0.30000000000000004"),
        (None, "nil"),
        (True, "true"),
        (False, "false"),
        ("text", "text"),
        (math.inf, "Infinity"),
        (-math.inf, "-Infinity"),
        (math.nan, "NaN"),
    ],
)
def test_stringify(value, expected):
    assert stringify(value) == expected


def test_stringify_native_function():
    assert stringify(Interpreter().globals.values["clock"]) == "<native fn: clock>"


@pytest.mark.parametrize(
    "value, truthy",
    [(None, False), (False, False), (True, True), (0.0, True), ("", True)],
)
def test_truthiness(value, truthy):
    assert is_truthy(value) is truthy


def test_equality_never_coerces_between_types():
    assert is_equal(None, None)
    assert not is_equal(None, False)
    assert not is_equal(True, 1.0)
    assert not is_equal("1", 1.0)
    assert is_equal("a", "a")
    assert is_equal(math.nan, math.nan)


@pytest.mark.parametrize(
    "source, expected",
    [
        ("print 1 + 2;", "3"),
        ("print 7 / 2;", "3.5"),
        ("print 4.0;", "4"),
        ("print 2 * 3 - 4 / 2;", "4"),
        ("print -3;", "-3"),
        ("print --3;", "3"),
        ('print "foo" + "bar";', "foobar"),
        ("print 1 < 2;", "true"),
        ("print 2 <= 1;", "false"),
        ("print 1 == 1;", "true"),
        ('print "1" == 1;', "false"),
        ("print nil == nil;", "true"),
        ("print nil == false;", "false"),
        ("print true == 1;", "false"),
        ("print 1 != 2;", "true"),
        ("print !nil;", "true"),
        ("print !0;", "false"),
        ('print !"";', "false"),
        ("print 1 / 0;", "Infinity"),
        ("print -1 / 0;", "-Infinity"),
        ("print 0 / 0;", "NaN"),
        ("print clock == clock;", "true"),
    ],
)
def test_expression_results(capsys, source, expected):
    interpreter = run(source)
    assert output_lines(capsys) == [expected]
    assert not interpreter.reporter.had_runtime_error


@pytest.mark.parametrize(
    "source, expected",
    [
        ("print false and missing;", "false"),
        ("print nil and missing;", "false"),
        ("print 1 and \"x\";", "true"),
        ("print 1 and nil;", "false"),
        ("print true or missing;", "true"),
        ("print nil or missing;", "false"),
        ("print nil or 1;", "false"),
        ("print 0 or false;", "true"),
    ],
)
def test_logical_operators_coerce_to_bool(capsys, source, expected):
    interpreter = run(source)
    assert output_lines(capsys) == [expected]
    assert not interpreter.reporter.had_runtime_error


def test_or_never_evaluates_right_operand(capsys):
    run("""\
        var hits = 0;
        var x = false or (hits = 1);
        print hits;
        print x;
    """)
    assert output_lines(capsys) == ["0", "false"]


def test_shadowing(capsys):
    run("var x = 1; { var x = 2; print x; } print x;")
    assert output_lines(capsys) == ["2", "1"]


def test_block_assigns_to_enclosing_binding(capsys):
    run("var a = 1; { a = 2; { a = a + 1; } } print a;")
    assert output_lines(capsys) == ["3"]


def test_var_without_initializer_is_nil(capsys):
    run("var a; print a;")
    assert output_lines(capsys) == ["nil"]


def test_redeclaring_a_global_overwrites(capsys):
    run("var a = 1; var a = 2; print a;")
    assert output_lines(capsys) == ["2"]


def test_assignment_is_an_expression(capsys):
    run("var a; var b; a = b = 3; print a; print b; print a = 4;")
    assert output_lines(capsys) == ["3", "3", "4"]


def test_for_loop(capsys):
    run("for (var i = 0; i < 3; i = i + 1) print i;")
    assert output_lines(capsys) == ["0", "1", "2"]


def test_for_loop_variable_does_not_leak(capsys):
    interpreter = run("for (var i = 0; i < 1; i = i + 1) {}\nprint i;")
    assert output_lines(capsys) == []
    assert interpreter.reporter.messages == ["Undefined variable 'i'.\n[line 2]"]


def test_while_loop(capsys):
    run("""\
        var n = 3;
        while (n > 0) { print n; n = n - 1; }
    """)
    assert output_lines(capsys) == ["3", "2", "1"]


def test_if_else(capsys):
    run("""\
        if (0) print "zero is truthy"; else print "unreachable";
        if (nil) print "unreachable"; else print "nil is falsy";
        if (false) print "unreachable";
    """)
    assert output_lines(capsys) == ["zero is truthy", "nil is falsy"]


def test_assignment_to_undeclared_variable_fails(capsys):
    interpreter = run("\n\ny = 1;")
    assert interpreter.reporter.had_runtime_error
    assert capsys.readouterr().err == "Undefined variable 'y'.\n[line 3]\n"


def test_reading_undeclared_variable_fails(capsys):
    interpreter = run("print nope;")
    assert interpreter.reporter.messages == ["Undefined variable 'nope'.\n[line 1]"]


@pytest.mark.parametrize(
    "source, message",
    [
        ('print -"x";', "Operand must be a number."),
        ('print 1 < "2";', "Operands must be numbers."),
        ("print nil * 2;", "Operands must be numbers."),
        ('print "a" - "b";', "Operands must be numbers."),
        ('print 1 + "a";', "Operands must be of the same type."),
        ("print nil + nil;", "Operands must be of the same type."),
        ("clock(1);", "Expected 0 arguments but got 1."),
        ("var x = 1; x();", "Can only call functions and classes."),
        ('"str"();', "Can only call functions and classes."),
    ],
)
def test_runtime_errors(capsys, source, message):
    interpreter = run(source)
    assert interpreter.reporter.had_runtime_error
    assert interpreter.reporter.messages == [f"{message}\n[line 1]"]


def test_runtime_error_aborts_rest_but_keeps_prior_output(capsys):
    interpreter = run("""\
        print "a";
        print -"x";
        print "b";
    """)
    captured = capsys.readouterr()
    assert captured.out == "a\n"
    assert captured.err == "Operand must be a number.\n[line 2]\n"
    assert not interpreter.reporter.had_error


def test_syntax_error_prevents_execution(capsys):
    interpreter = run('print "x"; print ;')
    captured = capsys.readouterr()
    assert captured.out == ""
    assert interpreter.reporter.had_error
    assert not interpreter.reporter.had_runtime_error


def test_globals_survive_runtime_error_inside_block(capsys):
    interpreter = Interpreter()
    run_program('var a = "global"; { var a = "inner"; print -a; }', interpreter)
    run_program("print a;", interpreter)
    assert output_lines(capsys) == ["global"]


def test_clock_returns_seconds(capsys):
    run("var t = clock(); print t > 1000000000; print t - t;")
    assert output_lines(capsys) == ["true", "0"]


def test_custom_native_function_is_callable(capsys):
    interpreter = Interpreter()
    interpreter.globals.define("add", NativeFunction("add", 2, lambda args: args[0] + args[1]))
    run_program("print add(1, 2); print add;", interpreter)
    assert output_lines(capsys) == ["3", "<native fn: add>"]


def test_arguments_are_evaluated_before_arity_check(capsys):
    interpreter = run("var n = 0; clock(n = 1); print n;")
    assert interpreter.reporter.messages == ["Expected 0 arguments but got 1.\n[line 1]"]
    assert output_lines(capsys) == []
    assert interpreter.globals.values["n"] == 1.0


def test_large_numbers_print_in_exponent_form(capsys):
    run("print 1000000000000000000000000;")
    assert output_lines(capsys) == ["1e+24"]


def test_callable_base_cannot_be_instantiated():
    with pytest.raises(TypeError):
        LoxCallable()


def test_callable_subclass_must_define_arity_and_call():
    class OnlyArity(LoxCallable):
        def arity(self):
            return 0

    with pytest.raises(TypeError):
        OnlyArity()
