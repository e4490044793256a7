"""Error types and the diagnostic sink used by every stage."""

from __future__ import annotations

import logging
import sys
from typing import List, Optional, TextIO

from .tokens import Token, TokenType

logger = logging.getLogger(__name__)


class ParseError(Exception):
    """Raised inside the parser to unwind to the nearest declaration."""


class LoxRuntimeError(Exception):
    """Exception type used to propagate Lox runtime errors.

    The offending token is kept so the report can name its source line.
    """
    def __init__(self, token: Token, message: str):
        super().__init__(message)
        self.token = token
        self.message = message


class ErrorReporter:
    """Collects syntax and runtime diagnostics for one interpreter session.

    The harness reads `had_error` and `had_runtime_error` to pick an exit
    code. Every formatted message is also kept in `messages` so callers
    (and tests) can inspect what was reported.
    """
    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream
        self.had_error = False
        self.had_runtime_error = False
        self.messages: List[str] = []

    def reset(self) -> None:
        self.had_error = False

    def error_at_line(self, line: int, message: str) -> None:
        self._report(line, '', message)

    def error(self, token: Token, message: str) -> None:
        if token.type == TokenType.EOF:
            self._report(token.line, ' at end', message)
        else:
            self._report(token.line, f" at '{token.lexeme}'", message)

    def runtime_error(self, error: LoxRuntimeError) -> None:
        text = f"{error.message}\n[line {error.token.line}]"
        self._emit(text)
        self.had_runtime_error = True
        logger.info("runtime error on line %d: %s", error.token.line, error.message)

    def _report(self, line: int, where: str, message: str) -> None:
        self._emit(f"[line {line}] Error{where}: {message}")
        self.had_error = True

    def _emit(self, text: str) -> None:
        self.messages.append(text)
        # Resolved late so pytest's capsys sees the replaced sys.stderr.
        print(text, file=self.stream if self.stream is not None else sys.stderr)
