"""Debug renderings of the Lox AST.

`AstPrinter` produces a parenthesized prefix form that makes grouping
and precedence visible, e.g. `(* (- 123) (group 45.67))`.

`ast_to_source` produces fully parenthesized Lox source instead. Parsing
that text again yields an expression that evaluates to the same value.
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any, Iterable, List, Union

from .ast import (
    Expr, Literal, Grouping, Unary, Binary, Logical, Variable, Assign, Call,
    Stmt, ExprStmt, PrintStmt, VarDecl, Block, IfStmt, WhileStmt,
)
from .interpreter import stringify


class AstPrinter:
    def print(self, expr: Expr) -> str:
        if isinstance(expr, Literal):
            return stringify(expr.value)
        if isinstance(expr, Grouping):
            return self.parenthesize('group', expr.expression)
        if isinstance(expr, Unary):
            return self.parenthesize(expr.operator.lexeme, expr.right)
        if isinstance(expr, (Binary, Logical)):
            return self.parenthesize(expr.operator.lexeme, expr.left, expr.right)
        if isinstance(expr, Variable):
            return expr.name.lexeme
        if isinstance(expr, Assign):
            return self.parenthesize(f"assign {expr.name.lexeme}", expr.value)
        if isinstance(expr, Call):
            return self.parenthesize('call', expr.callee, *expr.arguments)
        raise NotImplementedError(f"print: unexpected node type {type(expr)}")

    def print_stmt(self, stmt: Stmt) -> str:
        if isinstance(stmt, ExprStmt):
            return self.parenthesize(';', stmt.expression)
        if isinstance(stmt, PrintStmt):
            return self.parenthesize('print', stmt.expression)
        if isinstance(stmt, VarDecl):
            if stmt.initializer is None:
                return f"(var {stmt.name.lexeme})"
            return self.parenthesize(f"var {stmt.name.lexeme} =", stmt.initializer)
        if isinstance(stmt, Block):
            return self.parenthesize('block', *stmt.statements)
        if isinstance(stmt, IfStmt):
            if stmt.else_branch is None:
                return self.parenthesize('if', stmt.condition, stmt.then_branch)
            return self.parenthesize('if-else', stmt.condition, stmt.then_branch, stmt.else_branch)
        if isinstance(stmt, WhileStmt):
            return self.parenthesize('while', stmt.condition, stmt.body)
        raise NotImplementedError(f"print_stmt: unexpected node type {type(stmt)}")

    def parenthesize(self, name: str, *parts: Union[Expr, Stmt]) -> str:
        pieces = [name]
        for part in parts:
            if isinstance(part, Stmt):
                pieces.append(self.print_stmt(part))
            else:
                pieces.append(self.print(part))
        return '(' + ' '.join(pieces) + ')'


def print_program(statements: Iterable[Stmt]) -> List[str]:
    printer = AstPrinter()
    return [printer.print_stmt(stmt) for stmt in statements]


def literal_to_source(value: Any) -> str:
    if value is None:
        return 'nil'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        # Number literals have no sign, exponent or special values.
        if math.isnan(value):
            return '(0 / 0)'
        if math.isinf(value):
            return '(1 / 0)' if value > 0 else '(-1 / 0)'
        text = format(Decimal(repr(abs(value))), 'f')
        return f"(-{text})" if math.copysign(1.0, value) < 0 else text
    if isinstance(value, str):
        if '"' in value:
            raise ValueError(f"string literal cannot contain a double quote: {value!r}")
        return f'"{value}"'
    raise ValueError(f"no source form for literal {value!r}")


def ast_to_source(expr: Expr) -> str:
    if isinstance(expr, Literal):
        return literal_to_source(expr.value)
    if isinstance(expr, Grouping):
        return f"({ast_to_source(expr.expression)})"
    if isinstance(expr, Unary):
        return f"({expr.operator.lexeme}{ast_to_source(expr.right)})"
    if isinstance(expr, (Binary, Logical)):
        return f"({ast_to_source(expr.left)} {expr.operator.lexeme} {ast_to_source(expr.right)})"
    if isinstance(expr, Variable):
        return expr.name.lexeme
    if isinstance(expr, Assign):
        return f"({expr.name.lexeme} = {ast_to_source(expr.value)})"
    if isinstance(expr, Call):
        args = ', '.join(ast_to_source(arg) for arg in expr.arguments)
        return f"{ast_to_source(expr.callee)}({args})"
    raise NotImplementedError(f"ast_to_source: unexpected node type {type(expr)}")
