"""Abstract Syntax Tree (AST) definitions for the tinylox language.

Expression nodes produce values; statement nodes produce effects. Trees
are built once by a parser and never mutated afterwards, and every node
owns its children exclusively.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

from .tokens import Token


@dataclass(frozen=True)
class Expr:
    """Base class for all expression nodes."""
    pass


@dataclass(frozen=True)
class Literal(Expr):
    value: Any  # None, bool, float or str


@dataclass(frozen=True)
class Group(Expr):
    inner: Expr


@dataclass(frozen=True)
class Unary(Expr):
    op: Token
    operand: Expr


@dataclass(frozen=True)
class Binary(Expr):
    op: Token
    left: Expr
    right: Expr


@dataclass(frozen=True)
class Variable(Expr):
    name: Token


@dataclass(frozen=True)
class Assign(Expr):
    name: Token
    value: Expr


@dataclass(frozen=True)
class Stmt:
    """Base class for all statement nodes."""
    pass


@dataclass(frozen=True)
class ExprStmt(Stmt):
    expr: Expr


@dataclass(frozen=True)
class PrintStmt(Stmt):
    expr: Expr


@dataclass(frozen=True)
class VarDecl(Stmt):
    name: Token
    initializer: Optional[Expr]


@dataclass(frozen=True)
class Block(Stmt):
    statements: List[Stmt]
