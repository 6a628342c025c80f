"""Lark-based frontend for tinylox.

This is an alternative to the recursive-descent parser in
`tinylox.parser`. The source text is parsed by a Lark LALR parser using
the grammar below and the resulting parse tree is transformed into the
same AST classes, with `Token` objects carrying the same kind, lexeme,
literal and line as the ones produced by `tinylox.scanner`. For any valid
program both frontends build equal trees.

Reserved words are recognised by a lexer callback on IDENTIFIER, which
retypes the token to the keyword's kind. Keywords the grammar does not use
(`class`, `while`, ...) therefore surface as unexpected tokens, exactly as
they do in the descent parser.

The two frontends differ in one respect: in expression mode the descent
parser ignores anything after the first expression, while this one
requires the whole input to be a single expression.
"""

from __future__ import annotations

from typing import List

from lark import Lark, Token as LarkToken, Transformer
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken, VisitError

from .ast import (
    Expr, Stmt, Literal, Group, Unary, Binary, Variable, Assign,
    ExprStmt, PrintStmt, VarDecl, Block,
)
from .errors import NESTED_TOO_DEEPLY, ParseError
from .tokens import KEYWORDS, Token, TokenKind


TINYLOX_GRAMMAR = r"""
    program: statement*

    ?statement: var_decl
              | print_stmt
              | block
              | expr_stmt

    var_decl: VAR IDENTIFIER [_EQUAL expression] _SEMICOLON
    print_stmt: PRINT expression _SEMICOLON
    block: _LEFT_BRACE statement* _RIGHT_BRACE
    expr_stmt: expression _SEMICOLON

    // Expressions with precedence
    ?expression: assign
    ?assign: IDENTIFIER _EQUAL assign       -> assign_expr
           | equality
    ?equality: comparison ((BANG_EQUAL | EQUAL_EQUAL) comparison)*
    ?comparison: term ((GREATER | GREATER_EQUAL | LESS | LESS_EQUAL) term)*
    ?term: factor ((MINUS | PLUS) factor)*
    ?factor: unary ((SLASH | STAR) unary)*
    ?unary: (BANG | MINUS) unary            -> unary_expr
          | primary
    ?primary: TRUE                          -> true_lit
            | FALSE                         -> false_lit
            | NIL                           -> nil_lit
            | NUMBER                        -> number
            | STRING                        -> string
            | IDENTIFIER                    -> variable
            | _LEFT_PAREN expression _RIGHT_PAREN -> group

    // Tokens
    _LEFT_PAREN: "("
    _RIGHT_PAREN: ")"
    _LEFT_BRACE: "{"
    _RIGHT_BRACE: "}"
    _SEMICOLON: ";"
    _EQUAL: "="
    EQUAL_EQUAL: "=="
    BANG: "!"
    BANG_EQUAL: "!="
    LESS: "<"
    LESS_EQUAL: "<="
    GREATER: ">"
    GREATER_EQUAL: ">="
    MINUS: "-"
    PLUS: "+"
    SLASH: "/"
    STAR: "*"

    NUMBER: /[0-9]+(\.[0-9]+)?/
    STRING: /"[^"]*"/
    IDENTIFIER: /[^\W\d]\w*/

    %declare VAR PRINT TRUE FALSE NIL

    WS: /[ \t\r\n]+/
    %ignore WS

    // Comments
    LINE_COMMENT: /\/\/[^\n]*/
    %ignore LINE_COMMENT
"""


def retype_keyword(token: LarkToken) -> LarkToken:
    kind = KEYWORDS.get(str(token))
    if kind is None:
        return token
    return LarkToken.new_borrow_pos(kind.name, str(token), token)


TINYLOX_PARSER = Lark(
    TINYLOX_GRAMMAR,
    parser='lalr',
    start=['program', 'expression'],
    maybe_placeholders=True,
    lexer_callbacks={'IDENTIFIER': retype_keyword},
)


def to_token(token: LarkToken) -> Token:
    """Rebuild a scanner-style Token from a Lark token."""
    kind = TokenKind[token.type]
    text = str(token)
    literal = None
    if kind == TokenKind.NUMBER:
        literal = float(text)
    elif kind == TokenKind.STRING:
        literal = text[1:-1]
    return Token(kind, text, literal, token.line)


class ASTTransformer(Transformer):
    """Transforms the raw parse tree into an AST."""

    def program(self, items):
        return list(items)

    def var_decl(self, items):
        # items: VAR, IDENTIFIER, initializer-or-None
        name = to_token(items[1])
        initializer = items[2] if len(items) > 2 else None
        return VarDecl(name, initializer)

    def print_stmt(self, items):
        return PrintStmt(items[1])

    def block(self, items):
        return Block(list(items))

    def expr_stmt(self, items):
        return ExprStmt(items[0])

    # Expressions
    def assign_expr(self, items):
        return Assign(to_token(items[0]), items[1])

    def binary_expr(self, items):
        # items pattern: expr (op expr)*, folded left to right
        left = items[0]
        for i in range(1, len(items), 2):
            left = Binary(to_token(items[i]), left, items[i + 1])
        return left

    def equality(self, items):
        return self.binary_expr(items)

    def comparison(self, items):
        return self.binary_expr(items)

    def term(self, items):
        return self.binary_expr(items)

    def factor(self, items):
        return self.binary_expr(items)

    def unary_expr(self, items):
        return Unary(to_token(items[0]), items[1])

    def true_lit(self, items):
        return Literal(True)

    def false_lit(self, items):
        return Literal(False)

    def nil_lit(self, items):
        return Literal(None)

    def number(self, items):
        return Literal(float(items[0]))

    def string(self, items):
        return Literal(str(items[0])[1:-1])

    def variable(self, items):
        return Variable(to_token(items[0]))

    def group(self, items):
        return Group(items[0])


def end_of_input(source: str) -> Token:
    return Token(TokenKind.EOF, '', None, source.count('\n') + 1)


def error_from_lark(err: UnexpectedInput, source: str) -> ParseError:
    eof = end_of_input(source)
    if isinstance(err, UnexpectedEOF):
        return ParseError(eof, 'Unexpected end of input.')
    if isinstance(err, UnexpectedToken):
        token = err.token
        if token.type == '$END':
            return ParseError(eof, 'Unexpected end of input.')
        kind = TokenKind[token.type] if token.type in TokenKind.__members__ else TokenKind.IDENTIFIER
        return ParseError(Token(kind, str(token), None, token.line), 'Unexpected token.')
    if isinstance(err, UnexpectedCharacters):
        return ParseError(Token(TokenKind.IDENTIFIER, err.char, None, err.line), 'Unexpected character.')
    return ParseError(eof, str(err))


def _parse(source: str, start: str):
    try:
        tree = TINYLOX_PARSER.parse(source, start=start)
    except UnexpectedInput as e:
        raise error_from_lark(e, source) from e
    try:
        return ASTTransformer().transform(tree)
    except VisitError as e:
        # a rule callback hit the stack limit and lark wrapped it
        if not isinstance(e.orig_exc, RecursionError):
            raise
        raise ParseError(end_of_input(source), NESTED_TOO_DEEPLY) from None
    except RecursionError:
        raise ParseError(end_of_input(source), NESTED_TOO_DEEPLY) from None


def parse_program_lark(source: str) -> List[Stmt]:
    """Parse a full program with the Lark grammar."""
    return _parse(source, 'program')


def parse_expression_lark(source: str) -> Expr:
    """Parse source that must consist of exactly one expression."""
    return _parse(source, 'expression')
