"""Tree-walking interpreter for Lox.

Statements are executed and expressions evaluated directly over the AST.
The active scope is passed explicitly to `execute` and `evaluate`, so a
block's scope is dropped on every exit path, including when a runtime
error propagates out of it, and the globals are always where the next
`interpret` call starts.

Runtime values map onto Python values: `nil` is None, booleans are
`bool`, numbers are always `float`, strings are `str`, and callables are
`LoxCallable` instances.
"""

from __future__ import annotations

import logging
import math
from typing import Any, List, Optional

from .ast import (
    Expr, Literal, Grouping, Unary, Binary, Logical, Variable, Assign, Call,
    Stmt, ExprStmt, PrintStmt, VarDecl, Block, IfStmt, WhileStmt,
)
from .callable import LoxCallable, NATIVES
from .environment import Environment
from .errors import ErrorReporter, LoxRuntimeError
from .parser import Parser
from .scanner import Scanner
from .tokens import Token, TokenType

logger = logging.getLogger(__name__)


def is_truthy(value: Any) -> bool:
    # nil and false are falsy; everything else, 0 and "" included, is truthy.
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(a: Any, b: Any) -> bool:
    if a is None and b is None:
        return True
    if a is None or b is None:
        return False
    # No coercion between types; note True == 1.0 in Python.
    if type(a) is not type(b):
        return False
    if isinstance(a, float) and math.isnan(a) and math.isnan(b):
        return True
    return a == b


def stringify(value: Any) -> str:
    if value is None:
        return 'nil'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        if math.isnan(value):
            return 'NaN'
        if math.isinf(value):
            return 'Infinity' if value > 0 else '-Infinity'
        text = repr(value)
        if text.endswith('.0'):
            text = text[:-2]
        return text
    return str(value)


def divide(a: float, b: float) -> float:
    """IEEE-754 division; Python raises on a zero divisor instead."""
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


class Interpreter:
    """Core interpreter that executes Lox statements."""
    def __init__(self, reporter: Optional[ErrorReporter] = None):
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.globals = Environment()
        self.load_natives()

    def load_natives(self):
        for native in NATIVES:
            self.globals.define(native.name, native)

    # Public API
    def interpret(self, statements: List[Stmt]) -> None:
        logger.info("interpreting %d statements", len(statements))
        try:
            for stmt in statements:
                self.execute(stmt, self.globals)
        except LoxRuntimeError as error:
            self.reporter.runtime_error(error)

    def execute_block(self, statements: List[Stmt], env: Environment) -> None:
        for stmt in statements:
            self.execute(stmt, env)

    def execute(self, node: Stmt, env: Environment) -> None:
        if isinstance(node, ExprStmt):
            self.evaluate(node.expression, env)
            return
        if isinstance(node, PrintStmt):
            value = self.evaluate(node.expression, env)
            print(stringify(value))
            return
        if isinstance(node, VarDecl):
            value = None
            if node.initializer is not None:
                value = self.evaluate(node.initializer, env)
            env.define(node.name.lexeme, value)
            logger.debug("declare %s = %s", node.name.lexeme, stringify(value))
            return
        if isinstance(node, Block):
            block_env = Environment(parent=env)
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("enter block at depth %d", block_env.depth)
            self.execute_block(node.statements, block_env)
            return
        if isinstance(node, IfStmt):
            if is_truthy(self.evaluate(node.condition, env)):
                self.execute(node.then_branch, env)
            elif node.else_branch is not None:
                self.execute(node.else_branch, env)
            return
        if isinstance(node, WhileStmt):
            while is_truthy(self.evaluate(node.condition, env)):
                self.execute(node.body, env)
            return
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def evaluate(self, node: Expr, env: Environment) -> Any:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Grouping):
            return self.evaluate(node.expression, env)
        if isinstance(node, Unary):
            right = self.evaluate(node.right, env)
            if node.operator.type == TokenType.BANG:
                return not is_truthy(right)
            if node.operator.type == TokenType.MINUS:
                self.check_number_operand(node.operator, right)
                return -right
            raise LoxRuntimeError(node.operator, f"Unknown unary operator '{node.operator.lexeme}'.")
        if isinstance(node, Binary):
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            return self.apply_binary_op(node.operator, left, right)
        if isinstance(node, Logical):
            left = self.evaluate(node.left, env)
            # `or` answers from the left operand alone; the right side is
            # never evaluated.
            if node.operator.type == TokenType.OR:
                return is_truthy(left)
            if not is_truthy(left):
                return False
            return is_truthy(self.evaluate(node.right, env))
        if isinstance(node, Variable):
            return env.get(node.name)
        if isinstance(node, Assign):
            value = self.evaluate(node.value, env)
            env.assign(node.name, value)
            return value
        if isinstance(node, Call):
            callee = self.evaluate(node.callee, env)
            arguments = [self.evaluate(arg, env) for arg in node.arguments]
            return self.call_function(node.paren, callee, arguments)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def call_function(self, paren: Token, callee: Any, arguments: List[Any]) -> Any:
        if not isinstance(callee, LoxCallable):
            raise LoxRuntimeError(paren, "Can only call functions and classes.")
        if len(arguments) != callee.arity():
            raise LoxRuntimeError(
                paren, f"Expected {callee.arity()} arguments but got {len(arguments)}.")
        logger.debug("call %s with %d arguments", callee, len(arguments))
        return callee.call(self, arguments)

    def apply_binary_op(self, operator: Token, left: Any, right: Any) -> Any:
        op = operator.type
        if op == TokenType.PLUS:
            if isinstance(left, float) and isinstance(right, float):
                return left + right
            if isinstance(left, str) and isinstance(right, str):
                return left + right
            raise LoxRuntimeError(operator, "Operands must be of the same type.")
        if op == TokenType.BANG_EQUAL:
            return not is_equal(left, right)
        if op == TokenType.EQUAL_EQUAL:
            return is_equal(left, right)

        self.check_number_operands(operator, left, right)
        if op == TokenType.GREATER:
            return left > right
        if op == TokenType.GREATER_EQUAL:
            return left >= right
        if op == TokenType.LESS:
            return left < right
        if op == TokenType.LESS_EQUAL:
            return left <= right
        if op == TokenType.MINUS:
            return left - right
        if op == TokenType.SLASH:
            return divide(left, right)
        if op == TokenType.STAR:
            return left * right
        raise LoxRuntimeError(operator, f"Unknown binary operator '{operator.lexeme}'.")

    def check_number_operand(self, operator: Token, operand: Any):
        if isinstance(operand, float):
            return
        raise LoxRuntimeError(operator, "Operand must be a number.")

    def check_number_operands(self, operator: Token, left: Any, right: Any):
        if isinstance(left, float) and isinstance(right, float):
            return
        raise LoxRuntimeError(operator, "Operands must be numbers.")


def parse_program(source: str, reporter: ErrorReporter) -> List[Stmt]:
    """Scan and parse Lox source; syntax errors go to `reporter`."""
    tokens = Scanner(source, reporter).scan_tokens()
    return Parser(tokens, reporter).parse()


def run_program(source: str, interpreter: Optional[Interpreter] = None) -> Interpreter:
    """Convenience function to scan, parse and run Lox source.

    Nothing is executed if the source has syntax errors. The interpreter
    is returned so callers can inspect its reporter and globals, or feed
    it further programs.
    """
    if interpreter is None:
        interpreter = Interpreter()
    statements = parse_program(source, interpreter.reporter)
    if interpreter.reporter.had_error:
        return interpreter
    interpreter.interpret(statements)
    return interpreter
