# Lox language package
# This package provides a scanner, parser and tree-walking interpreter for Lox.
from .errors import ErrorReporter, LoxRuntimeError, ParseError
from .interpreter import Interpreter, parse_program, run_program, stringify

__all__ = [
    'ErrorReporter',
    'Interpreter',
    'LoxRuntimeError',
    'ParseError',
    'parse_program',
    'run_program',
    'stringify',
]
