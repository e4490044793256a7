import pytest

from lox.ast import Binary, Grouping, Literal, Unary
from lox.interpreter import Interpreter, is_equal, parse_program
from lox.printer import AstPrinter, ast_to_source, literal_to_source, print_program
from lox.tokens import Token, TokenType


def test_prints_prefix_form():
    expression = Binary(
        Unary(Token(TokenType.MINUS, "-", None, 1), Literal(123.0)),
        Token(TokenType.STAR, "*", None, 1),
        Grouping(Literal(45.67)),
    )
    assert AstPrinter().print(expression) == "(* (- 123) (group 45.67))"


def test_prints_statements(reporter):
    statements = parse_program(
        "var a = 1; var b; if (a) print a; else { a = 2; } while (a < 3) a = a + 1;",
        reporter,
    )
    assert print_program(statements) == [
        "(var a = 1)",
        "(var b)",
        "(if-else a (print a) (block (; (assign a 2))))",
        "(while (< a 3) (; (assign a (+ a 1))))",
    ]


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, "nil"),
        (True, "true"),
        (12.0, "12.0"),
        (0.00001, "0.00001"),
        (1e16, "10000000000000000"),
        (-2.5, "(-2.5)"),
        ("hi", '"hi"'),
    ],
)
def test_literal_to_source(value, expected):
    assert literal_to_source(value) == expected


def test_literal_with_quote_has_no_source_form():
    with pytest.raises(ValueError):
        literal_to_source('say "hi"')


@pytest.mark.parametrize(
    "source",
    [
        "1 + 2 * 3",
        "-(4 - 6) / 3",
        '"a" + "b"',
        "!(1 < 2) == false",
        "0.00001 * 3",
        "123456789012345678",
        "true and nil or 1",
        "1 / 0",
        "0 / 0",
        "clock() - clock() < 10",
    ],
)
def test_source_form_reparses_to_same_result(reporter, source):
    interpreter = Interpreter(reporter)
    original = parse_program(f"print {source};", reporter)[0].expression
    reparsed = parse_program(f"print {ast_to_source(original)};", reporter)[0].expression
    assert not reporter.had_error
    expected = interpreter.evaluate(original, interpreter.globals)
    actual = interpreter.evaluate(reparsed, interpreter.globals)
    assert is_equal(expected, actual)
