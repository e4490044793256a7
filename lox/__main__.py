"""CLI entry point for the Lox interpreter.

Usage:
    python -m lox [-v|-vv] [--debug-file PATH] [script]
    python -m lox [-v...] --print-ast <script>

Options:
  -v            Increase debug verbosity (can be repeated)
  --debug-file  Where debug information goes (default: debug.txt)
  --print-ast   Parse the script and print its syntax tree instead of running it

Without a script an interactive prompt is started. Debug information is
written to the debug file only when verbosity is greater than zero.

Exit codes: 64 bad invocation, 65 syntax error, 66 missing script,
70 runtime error.
"""

import argparse
import logging
import sys
from pathlib import Path

from .interpreter import Interpreter, parse_program, run_program
from .printer import print_program
from .repl import repl

EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70


def configure_logging(verbosity: int, debug_file: str) -> None:
    if verbosity <= 0:
        return
    handler = logging.FileHandler(debug_file, mode='w', encoding='utf-8')
    handler.setFormatter(logging.Formatter('%(levelname)s %(name)s: %(message)s'))
    package_logger = logging.getLogger('lox')
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbosity >= 2 else logging.INFO)


def run_file(path: Path, print_ast: bool = False) -> int:
    if not path.exists():
        print(f"File not found: {path}", file=sys.stderr)
        return EX_NOINPUT
    source = path.read_text(encoding='utf-8')
    interpreter = Interpreter()
    reporter = interpreter.reporter

    try:
        if print_ast:
            for line in print_program(parse_program(source, reporter)):
                print(line)
        else:
            run_program(source, interpreter)
    except RecursionError:
        print("Stack overflow.", file=sys.stderr)
        return EX_SOFTWARE
    if reporter.had_error:
        return EX_DATAERR
    if reporter.had_runtime_error:
        return EX_SOFTWARE
    return 0


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='lox', description="Lox language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--debug-file', default='debug.txt', help='file receiving debug output')
    parser.add_argument('--print-ast', action='store_true', help='print the syntax tree instead of running')
    parser.add_argument('script', nargs='*', help='Lox script to execute')
    args = parser.parse_args(argv)

    if len(args.script) > 1:
        print("Usage: lox [script]")
        sys.exit(EX_USAGE)
    if args.print_ast and not args.script:
        parser.error("--print-ast requires a script")

    configure_logging(args.v, args.debug_file)

    if args.script:
        status = run_file(Path(args.script[0]), print_ast=args.print_ast)
        if status:
            sys.exit(status)
        return
    repl()


if __name__ == '__main__':
    main()
