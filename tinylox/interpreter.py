"""Tree-walking interpreter for the tinylox language.

Statements are executed directly from the AST produced by the parser;
there is no bytecode or separate compilation pass. Values are plain
Python objects (see `tinylox.types`). Any runtime error aborts the rest
of the program.
"""

from __future__ import annotations

import math
import sys
from typing import Any, List, Optional

from .ast import (
    Expr, Stmt, Literal, Group, Unary, Binary, Variable, Assign,
    ExprStmt, PrintStmt, VarDecl, Block,
)
from .environment import Environment
from .errors import NESTED_TOO_DEEPLY, LexicalError, LoxRuntimeError
from .parser import parse_expression, parse_program
from .scanner import Scanner
from .tokens import Token, TokenKind
from .types import to_string, type_name


class Interpreter:
    """Core interpreter that executes tinylox AST."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.global_env = Environment()
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp and not self.debug_fp.closed:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg, file=sys.stderr)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def run(self, statements: List[Stmt], env: Optional[Environment] = None):
        if env is None:
            env = self.global_env
        try:
            self.execute_block(statements, env)
        except RecursionError:
            raise LoxRuntimeError(NESTED_TOO_DEEPLY) from None

    def evaluate_expression(self, expr: Expr) -> Any:
        """Evaluate a standalone expression against the global scope."""
        try:
            return self.evaluate(expr, self.global_env)
        except RecursionError:
            raise LoxRuntimeError(NESTED_TOO_DEEPLY) from None

    def execute_block(self, statements: List[Stmt], env: Environment):
        for stmt in statements:
            self.execute(stmt, env)

    def execute(self, node: Stmt, env: Environment):
        if isinstance(node, PrintStmt):
            value = self.evaluate(node.expr, env)
            print(to_string(value))
            return
        if isinstance(node, ExprStmt):
            self.evaluate(node.expr, env)
            return
        if isinstance(node, VarDecl):
            value = self.evaluate(node.initializer, env) if node.initializer is not None else None
            env.define(node.name.lexeme, value)
            if self.debug_level >= 2:
                self.debug(f"declare {node.name.lexeme}: {type_name(value)} = {to_string(value)}")
            return
        if isinstance(node, Block):
            # new frame chained to the enclosing one; it is dropped when the block ends
            block_env = Environment(parent=env)
            if self.debug_level >= 2:
                self.debug(f"enter block at depth {block_env.depth()}")
            self.execute_block(node.statements, block_env)
            if self.debug_level >= 2:
                self.debug(f"leave block at depth {block_env.depth()}")
            return
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def evaluate(self, node: Expr, env: Environment) -> Any:
        value = self.evaluate_node(node, env)
        if self.debug_level >= 3:
            self.debug(f"eval {type(node).__name__} -> {to_string(value)}")
        return value

    def evaluate_node(self, node: Expr, env: Environment) -> Any:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Group):
            return self.evaluate(node.inner, env)
        if isinstance(node, Variable):
            return env.get(node.name)
        if isinstance(node, Assign):
            value = self.evaluate(node.value, env)
            env.assign(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"assign {node.name.lexeme} = {to_string(value)}")
            return value
        if isinstance(node, Unary):
            operand = self.evaluate(node.operand, env)
            return self.apply_unary_op(node.op, operand)
        if isinstance(node, Binary):
            return self.evaluate_binary(node, env)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def evaluate_binary(self, node: Binary, env: Environment) -> Any:
        # walk the left spine in a loop so long operator chains stay flat on the stack
        spine = []
        while isinstance(node, Binary):
            spine.append(node)
            node = node.left
        value = self.evaluate(node, env)
        for binary in reversed(spine):
            right = self.evaluate(binary.right, env)
            value = self.apply_binary_op(binary.op, value, right)
            # the outermost node is traced by evaluate()
            if binary is not spine[0] and self.debug_level >= 3:
                self.debug(f"eval Binary -> {to_string(value)}")
        return value

    def is_truthy(self, value: Any) -> bool:
        if value is None:
            return False
        if isinstance(value, bool):
            return value
        if isinstance(value, float):
            return value != 0.0
        if isinstance(value, str):
            return len(value) > 0
        return True

    def apply_unary_op(self, op: Token, operand: Any) -> Any:
        if op.kind == TokenKind.BANG:
            return not self.is_truthy(operand)
        if op.kind == TokenKind.MINUS:
            if not is_number(operand):
                raise LoxRuntimeError('Operand must be a number.', op)
            return -operand
        raise LoxRuntimeError(f"Unknown unary operator '{op.lexeme}'.", op)

    def apply_binary_op(self, op: Token, a: Any, b: Any) -> Any:
        kind = op.kind
        if kind == TokenKind.PLUS:
            if is_number(a) and is_number(b):
                return a + b
            if isinstance(a, str) and isinstance(b, str):
                return a + b
            raise LoxRuntimeError('Operands must be two numbers or two strings.', op)
        if kind == TokenKind.EQUAL_EQUAL:
            return self.equal_values(a, b)
        if kind == TokenKind.BANG_EQUAL:
            return not self.equal_values(a, b)
        if not (is_number(a) and is_number(b)):
            raise LoxRuntimeError('Operands must be numbers.', op)
        if kind == TokenKind.MINUS:
            return a - b
        if kind == TokenKind.STAR:
            return a * b
        if kind == TokenKind.SLASH:
            return divide(a, b)
        if kind == TokenKind.LESS:
            return a < b
        if kind == TokenKind.LESS_EQUAL:
            return a <= b
        if kind == TokenKind.GREATER:
            return a > b
        if kind == TokenKind.GREATER_EQUAL:
            return a >= b
        raise LoxRuntimeError(f"Unknown binary operator '{op.lexeme}'.", op)

    def equal_values(self, a: Any, b: Any) -> bool:
        # no coercion: bool is an int subclass in Python, so compare types first
        if type(a) is not type(b):
            return False
        return a == b


def is_number(value: Any) -> bool:
    return isinstance(value, float)


def divide(a: float, b: float) -> float:
    """IEEE-754 division: a zero divisor gives an infinity or NaN."""
    if b != 0.0:
        return a / b
    if a == 0.0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _scan(source: str) -> List[Token]:
    scanner = Scanner(source)
    tokens = scanner.scan_tokens()
    if scanner.had_error:
        raise LexicalError(scanner.errors)
    return tokens


def run_program(source: str, debug_level: int = 0) -> Interpreter:
    """Convenience function to scan, parse and run a tinylox program from source."""
    statements = parse_program(_scan(source))
    interpreter = Interpreter(debug_level=debug_level)
    try:
        interpreter.run(statements)
    finally:
        interpreter.close()
    return interpreter


def evaluate_source(source: str, debug_level: int = 0) -> Any:
    """Scan, parse and evaluate a single tinylox expression."""
    expr = parse_expression(_scan(source))
    interpreter = Interpreter(debug_level=debug_level)
    try:
        return interpreter.evaluate_expression(expr)
    finally:
        interpreter.close()
