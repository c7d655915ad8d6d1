"""CLI entry point for the Quill interpreter.

Usage:
    python -m quill [-v|-vv|-vvv] [--lexer] [--parser] [--interpreter] [program_file]

Options:
  -v             Increase debug verbosity (can be repeated)
  --lexer        Print the token stream before parsing
  --parser       Print the AST as JSON before evaluating
  --interpreter  Print the final value of the program

Without a program file an interactive shell is started. Debug
information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

import argparse
import sys
from pathlib import Path

from termcolor import colored

from .diagnostics import report
from .interpreter import Interpreter
from .run import RunFlags, Session
from .shell import Shell


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='quill', description="Quill language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--lexer', action='store_true', help='print the token stream')
    parser.add_argument('--parser', action='store_true', help='print the AST as JSON')
    parser.add_argument('--interpreter', action='store_true', help='print the final value')
    parser.add_argument('program', nargs='?', help='Quill program file to execute (omit for the shell)')
    args = parser.parse_args(argv)

    flags = RunFlags(lexer=args.lexer, parser=args.parser, interpreter=args.interpreter)
    session = Session(flags=flags, interpreter=Interpreter(debug_level=args.v))

    try:
        if not args.program:
            Shell(session).cmdloop()
            return

        program_file = Path(args.program)
        if not program_file.exists():
            print(f"Error: file {program_file} not found", file=sys.stderr)
            sys.exit(1)
        with open(program_file, 'r', encoding='utf-8') as f:
            source = f.read()
        try:
            result = session.run(str(program_file), source)
        except RecursionError:
            print(colored("fatal: maximum recursion depth exceeded", "red", attrs=["bold"]), file=sys.stderr)
            sys.exit(1)
        if result.is_err:
            report(result.error, source)
            sys.exit(1)
    finally:
        session.close()


if __name__ == '__main__':
    main()
