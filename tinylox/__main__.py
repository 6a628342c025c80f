"""CLI entry point for the tinylox interpreter.

Usage:
    python -m tinylox [-v|-vv|-vvv] [--frontend descent|lark] <command> <filename>

Commands:
  tokenize      Print one line per token
  parse         Parse a single expression and print it in prefix form
  evaluate      Evaluate a single expression and print its value
  run           Run the file as a program

Exit status is 65 for lexical and parse errors and 70 for runtime errors.
Diagnostics go to stderr. Debug tracing is written to `debug.txt` in the
current directory when verbosity is greater than zero.
"""

import argparse
import sys
from pathlib import Path

from .errors import LoxError, LoxRuntimeError
from .grammar import parse_expression_lark, parse_program_lark
from .interpreter import Interpreter
from .parser import parse_expression, parse_program
from .printer import expr_to_str
from .scanner import Scanner
from .types import to_string

EXIT_DATA_ERROR = 65
EXIT_SOFTWARE_ERROR = 70
# deeply nested expressions recurse in the parser and the evaluator
RECURSION_LIMIT = 5000


def scan_or_exit(source: str, print_tokens: bool = False):
    scanner = Scanner(source)
    tokens = scanner.scan_tokens()
    if print_tokens:
        for token in tokens:
            print(token)
    for error in scanner.errors:
        print(error, file=sys.stderr)
    if scanner.had_error:
        sys.exit(EXIT_DATA_ERROR)
    return tokens


def parse_or_exit(source: str, frontend: str, expression_only: bool):
    tokens = scan_or_exit(source)
    try:
        if frontend == 'lark':
            return parse_expression_lark(source) if expression_only else parse_program_lark(source)
        return parse_expression(tokens) if expression_only else parse_program(tokens)
    except LoxError as e:
        print(e, file=sys.stderr)
        sys.exit(EXIT_DATA_ERROR)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='tinylox', description="tinylox language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--frontend', choices=['descent', 'lark'], default='descent',
                        help='parser used for parse, evaluate and run (default: descent)')
    parser.add_argument('command', choices=['tokenize', 'parse', 'evaluate', 'run'])
    parser.add_argument('filename', help='tinylox source file')
    args = parser.parse_args(argv)
    sys.setrecursionlimit(max(sys.getrecursionlimit(), RECURSION_LIMIT))

    source_file = Path(args.filename)
    if not source_file.exists():
        print(f"Error: file {source_file} not found", file=sys.stderr)
        sys.exit(1)
    with open(source_file, 'r', encoding='utf-8') as f:
        source = f.read()

    if args.command == 'tokenize':
        scan_or_exit(source, print_tokens=True)
        return

    if args.command == 'parse':
        expr = parse_or_exit(source, args.frontend, expression_only=True)
        print(expr_to_str(expr))
        return

    tree = parse_or_exit(source, args.frontend, expression_only=args.command == 'evaluate')
    interpreter = Interpreter(debug_level=args.v)
    try:
        if args.command == 'evaluate':
            print(to_string(interpreter.evaluate_expression(tree)))
        else:
            interpreter.run(tree)
    except LoxRuntimeError as e:
        print(e, file=sys.stderr)
        sys.exit(EXIT_SOFTWARE_ERROR)
    finally:
        interpreter.close()


if __name__ == '__main__':
    main()
