"""Interactive REPL for Lox, powered by prompt_toolkit."""

from __future__ import annotations

import sys
from typing import Iterator, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory

from .interpreter import Interpreter, run_program


def _terminal_lines() -> Iterator[str]:
    session: PromptSession[str] = PromptSession(history=InMemoryHistory())
    print("lox repl - Ctrl-D to exit")
    while True:
        try:
            yield session.prompt("> ")
        except KeyboardInterrupt:
            continue
        except EOFError:
            print()
            return


def _piped_lines() -> Iterator[str]:
    for line in sys.stdin:
        yield line.rstrip('\n')


def repl(interpreter: Optional[Interpreter] = None) -> Interpreter:
    """Read-eval-print loop; one line is one program.

    Globals persist between lines. The syntax-error flag is cleared after
    every line so a typo does not poison the rest of the session.
    """
    if interpreter is None:
        interpreter = Interpreter()
    lines = _terminal_lines() if sys.stdin.isatty() else _piped_lines()
    for line in lines:
        if not line.strip():
            continue
        try:
            run_program(line, interpreter)
        except RecursionError:
            print("Stack overflow.", file=sys.stderr)
        interpreter.reporter.reset()
    return interpreter
