"""Fully parenthesized prefix rendering of tinylox expressions.

Used by the `parse` command, e.g. `1 + 2 * 3` renders as
`(+ 1.0 (* 2.0 3.0))`.
"""

from __future__ import annotations

from .ast import Expr, Literal, Group, Unary, Binary, Variable, Assign
from .types import to_string


def expr_to_str(node: Expr) -> str:
    if isinstance(node, Literal):
        return to_string(node.value)
    if isinstance(node, Group):
        return f"(group {expr_to_str(node.inner)})"
    if isinstance(node, Unary):
        return f"({node.op.lexeme} {expr_to_str(node.operand)})"
    if isinstance(node, Binary):
        return binary_to_str(node)
    if isinstance(node, Variable):
        return f"(var {node.name.lexeme})"
    if isinstance(node, Assign):
        return f"(assign {node.name.lexeme} {expr_to_str(node.value)})"
    raise TypeError(f"expr_to_str: unexpected node type {type(node).__name__}")


def binary_to_str(node: Binary) -> str:
    # left-deep chains are unrolled so `1 + 2 + ... + n` does not nest calls
    spine = []
    while isinstance(node, Binary):
        spine.append(node)
        node = node.left
    parts = [f"({b.op.lexeme} " for b in spine]
    parts.append(expr_to_str(node))
    parts.extend(f" {expr_to_str(b.right)})" for b in reversed(spine))
    return ''.join(parts)
