from typing import List, Optional

from tinylox.tokens import Token

# reported when an input nests deeper than the Python stack allows
NESTED_TOO_DEEPLY = 'Expression nested too deeply.'


class LoxError(Exception):
    """Base class for every error raised by the tinylox pipeline."""


class ScanError(LoxError):
    """A single lexical problem. The scanner records these and keeps going."""
    def __init__(self, line: int, message: str):
        super().__init__(f"[line {line}] Error: {message}")
        self.line = line
        self.message = message


class LexicalError(LoxError):
    """Raised by the convenience helpers when scanning recorded errors."""
    def __init__(self, errors: List[ScanError]):
        super().__init__('\n'.join(str(e) for e in errors))
        self.errors = errors


class ParseError(LoxError):
    def __init__(self, token: Token, message: str):
        super().__init__(f"[line {token.line}] Error at '{token.lexeme}': {message}")
        self.token = token
        self.message = message


class LoxRuntimeError(LoxError):
    """Type mismatch or undefined variable during evaluation."""
    def __init__(self, message: str, token: Optional[Token] = None):
        super().__init__(message)
        self.token = token
        self.message = message
