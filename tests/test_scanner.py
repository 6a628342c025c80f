import pytest

from tinylox.scanner import Scanner, scan_tokens
from tinylox.tokens import TokenKind


def kinds(source):
    tokens, _ = scan_tokens(source)
    return [t.kind for t in tokens]


def test_punctuation_and_operators():
    assert kinds('(){},.-+;*/ = == ! != < <= > >=') == [
        TokenKind.LEFT_PAREN, TokenKind.RIGHT_PAREN, TokenKind.LEFT_BRACE, TokenKind.RIGHT_BRACE,
        TokenKind.COMMA, TokenKind.DOT, TokenKind.MINUS, TokenKind.PLUS, TokenKind.SEMICOLON,
        TokenKind.STAR, TokenKind.SLASH, TokenKind.EQUAL, TokenKind.EQUAL_EQUAL, TokenKind.BANG,
        TokenKind.BANG_EQUAL, TokenKind.LESS, TokenKind.LESS_EQUAL, TokenKind.GREATER,
        TokenKind.GREATER_EQUAL, TokenKind.EOF,
    ]


def test_two_char_operator_is_greedy():
    tokens, _ = scan_tokens('===')
    assert [(t.kind, t.lexeme) for t in tokens[:-1]] == [
        (TokenKind.EQUAL_EQUAL, '=='), (TokenKind.EQUAL, '='),
    ]


def test_line_comment_is_skipped():
    tokens, errors = scan_tokens('1 // ignored $ "\n2')
    assert errors == []
    assert [t.lexeme for t in tokens] == ['1', '2', '']
    assert tokens[1].line == 2


def test_string_literal_strips_quotes():
    tokens, _ = scan_tokens('"hello world"')
    assert tokens[0].kind == TokenKind.STRING
    assert tokens[0].lexeme == '"hello world"'
    assert tokens[0].literal == 'hello world'
    assert str(tokens[0]) == 'STRING "hello world" hello world'


def test_unterminated_string_is_reported_and_dropped():
    scanner = Scanner('var a = "abc;')
    tokens = scanner.scan_tokens()
    assert scanner.had_error
    assert [str(e) for e in scanner.errors] == ['[line 1] Error: Unterminated string.']
    assert [t.kind for t in tokens] == [TokenKind.VAR, TokenKind.IDENTIFIER, TokenKind.EQUAL, TokenKind.EOF]


@pytest.mark.parametrize('source, value', [
    ('123', 123.0),
    ('123.456', 123.456),
    ('0.5', 0.5),
    ('007', 7.0),
])
def test_number_literal(source, value):
    tokens, _ = scan_tokens(source)
    assert tokens[0].kind == TokenKind.NUMBER
    assert tokens[0].literal == value
    assert tokens[0].lexeme == source


def test_trailing_dot_is_not_part_of_number():
    tokens, _ = scan_tokens('123.')
    assert [(t.kind, t.lexeme) for t in tokens] == [
        (TokenKind.NUMBER, '123'), (TokenKind.DOT, '.'), (TokenKind.EOF, ''),
    ]


def test_number_token_rendering():
    tokens, _ = scan_tokens('42 1.50')
    assert str(tokens[0]) == 'NUMBER 42 42.0'
    assert str(tokens[1]) == 'NUMBER 1.50 1.5'


def test_keywords_and_identifiers():
    tokens, _ = scan_tokens('and class else false for fun if nil or print return super this true var while')
    assert all(t.kind.name == t.lexeme.upper() for t in tokens[:-1])
    tokens, _ = scan_tokens('orchid _private var1 classy')
    assert [t.kind for t in tokens[:-1]] == [TokenKind.IDENTIFIER] * 4
    assert str(tokens[0]) == 'IDENTIFIER orchid null'


def test_unexpected_characters_are_all_reported():
    scanner = Scanner(',.$(#\n@')
    tokens = scanner.scan_tokens()
    assert [str(e) for e in scanner.errors] == [
        '[line 1] Error: Unexpected character: $',
        '[line 1] Error: Unexpected character: #',
        '[line 2] Error: Unexpected character: @',
    ]
    assert [t.kind for t in tokens] == [TokenKind.COMMA, TokenKind.DOT, TokenKind.LEFT_PAREN, TokenKind.EOF]


def test_eof_is_last_and_unique():
    for source in ['', 'var a = 1;', '{\n}\n', '// only a comment']:
        tokens, _ = scan_tokens(source)
        assert tokens[-1].kind == TokenKind.EOF
        assert [t.kind for t in tokens].count(TokenKind.EOF) == 1
        assert str(tokens[-1]) == 'EOF  null'


def test_eof_line_counts_newlines():
    tokens, _ = scan_tokens('a\nb\n\n"multi\nline"\n')
    assert tokens[-1].line == 6
    string = tokens[2]
    assert string.literal == 'multi\nline'
    assert string.line == 4


def test_scan_is_restartable():
    scanner = Scanner('1 $')
    first = scanner.scan_tokens()
    second = scanner.scan_tokens()
    assert first == second
    assert len(scanner.errors) == 1
