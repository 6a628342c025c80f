# tinylox language package
# This package provides a scanner, parsers and a tree-walking interpreter for tinylox.
from .errors import LoxError, ScanError, LexicalError, ParseError, LoxRuntimeError
from .scanner import Scanner, scan_tokens
from .parser import Parser, parse_program, parse_expression
from .interpreter import Interpreter, run_program, evaluate_source

__all__ = [
    'LoxError',
    'ScanError',
    'LexicalError',
    'ParseError',
    'LoxRuntimeError',
    'Scanner',
    'scan_tokens',
    'Parser',
    'parse_program',
    'parse_expression',
    'Interpreter',
    'run_program',
    'evaluate_source',
]
