"""Recursive-descent parser for tinylox.

Precedence, lowest to highest::

    assignment -> equality -> comparison -> term -> factor -> unary -> primary

Binary levels fold left to right; assignment is right associative. The
parser stops at the first error; there is no resynchronisation.
"""

from __future__ import annotations

from typing import List

from .ast import (
    Expr, Stmt, Literal, Group, Unary, Binary, Variable, Assign,
    ExprStmt, PrintStmt, VarDecl, Block,
)
from .errors import NESTED_TOO_DEEPLY, ParseError
from .tokens import Token, TokenKind


class Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0

    def peek(self) -> Token:
        return self.tokens[self.pos]

    def previous(self) -> Token:
        return self.tokens[self.pos - 1]

    def at_end(self) -> bool:
        return self.peek().kind == TokenKind.EOF

    def advance(self) -> Token:
        if not self.at_end():
            self.pos += 1
        return self.previous()

    def check(self, kind: TokenKind) -> bool:
        return not self.at_end() and self.peek().kind == kind

    def match(self, *kinds: TokenKind) -> bool:
        for kind in kinds:
            if self.check(kind):
                self.advance()
                return True
        return False

    def consume(self, kind: TokenKind, message: str) -> Token:
        if self.check(kind):
            return self.advance()
        raise ParseError(self.peek(), message)

    # Statements
    def parse_program(self) -> List[Stmt]:
        statements: List[Stmt] = []
        while not self.at_end():
            statements.append(self.parse_statement())
        return statements

    def parse_statement(self) -> Stmt:
        if self.match(TokenKind.VAR):
            return self.parse_var_decl()
        if self.match(TokenKind.PRINT):
            return self.parse_print_stmt()
        if self.match(TokenKind.LEFT_BRACE):
            return self.parse_block()
        expr = self.parse_expression()
        self.consume(TokenKind.SEMICOLON, "Expect ';' after expression.")
        return ExprStmt(expr)

    def parse_var_decl(self) -> VarDecl:
        name = self.consume(TokenKind.IDENTIFIER, 'Expect variable name.')
        initializer = None
        if self.match(TokenKind.EQUAL):
            initializer = self.parse_expression()
        self.consume(TokenKind.SEMICOLON, "Expect ';' after variable declaration.")
        return VarDecl(name, initializer)

    def parse_print_stmt(self) -> PrintStmt:
        expr = self.parse_expression()
        self.consume(TokenKind.SEMICOLON, "Expect ';' after value.")
        return PrintStmt(expr)

    def parse_block(self) -> Block:
        statements: List[Stmt] = []
        while not self.check(TokenKind.RIGHT_BRACE) and not self.at_end():
            statements.append(self.parse_statement())
        self.consume(TokenKind.RIGHT_BRACE, "Expect '}' after block.")
        return Block(statements)

    # Expressions
    def parse_expression(self) -> Expr:
        return self.parse_assign()

    # assignment: equality ('=' assignment)?
    def parse_assign(self) -> Expr:
        """Parse an assignment or fall through to equality.

        The target is only checked once the right-hand side has been parsed.
        An invalid target is reported at the `=` token, so `1 + 2 = 3;`
        gives `Error at '='` rather than an error at the last token
        of the right-hand side.
        """
        target = self.parse_equality()
        if self.match(TokenKind.EQUAL):
            equals = self.previous()
            value = self.parse_assign()
            if isinstance(target, Variable):
                return Assign(target.name, value)
            raise ParseError(equals, 'Invalid assignment target.')
        return target

    def parse_equality(self) -> Expr:
        node = self.parse_comparison()
        while self.match(TokenKind.BANG_EQUAL, TokenKind.EQUAL_EQUAL):
            op = self.previous()
            node = Binary(op, node, self.parse_comparison())
        return node

    def parse_comparison(self) -> Expr:
        node = self.parse_term()
        while self.match(TokenKind.GREATER, TokenKind.GREATER_EQUAL,
                         TokenKind.LESS, TokenKind.LESS_EQUAL):
            op = self.previous()
            node = Binary(op, node, self.parse_term())
        return node

    def parse_term(self) -> Expr:
        node = self.parse_factor()
        while self.match(TokenKind.MINUS, TokenKind.PLUS):
            op = self.previous()
            node = Binary(op, node, self.parse_factor())
        return node

    def parse_factor(self) -> Expr:
        node = self.parse_unary()
        while self.match(TokenKind.SLASH, TokenKind.STAR):
            op = self.previous()
            node = Binary(op, node, self.parse_unary())
        return node

    def parse_unary(self) -> Expr:
        if self.match(TokenKind.BANG, TokenKind.MINUS):
            op = self.previous()
            return Unary(op, self.parse_unary())
        return self.parse_primary()

    def parse_primary(self) -> Expr:
        if self.match(TokenKind.FALSE):
            return Literal(False)
        if self.match(TokenKind.TRUE):
            return Literal(True)
        if self.match(TokenKind.NIL):
            return Literal(None)
        if self.match(TokenKind.NUMBER, TokenKind.STRING):
            return Literal(self.previous().literal)
        if self.match(TokenKind.IDENTIFIER):
            return Variable(self.previous())
        if self.match(TokenKind.LEFT_PAREN):
            inner = self.parse_expression()
            self.consume(TokenKind.RIGHT_PAREN, "Expect ')' after expression.")
            return Group(inner)
        raise ParseError(self.peek(), 'Expect expression.')


def parse_program(tokens: List[Token]) -> List[Stmt]:
    """Parse a full token list into statements (program mode)."""
    parser = Parser(tokens)
    try:
        return parser.parse_program()
    except RecursionError:
        raise ParseError(parser.peek(), NESTED_TOO_DEEPLY) from None


def parse_expression(tokens: List[Token]) -> Expr:
    """Parse a single expression; tokens after it are ignored."""
    parser = Parser(tokens)
    try:
        return parser.parse_expression()
    except RecursionError:
        raise ParseError(parser.peek(), NESTED_TOO_DEEPLY) from None
