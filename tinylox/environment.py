from typing import Any, Dict, Optional

from tinylox.errors import LoxRuntimeError
from tinylox.tokens import Token


def undefined_variable(name: Token) -> LoxRuntimeError:
    return LoxRuntimeError(f"Undefined variable '{name.lexeme}'.\n[line {name.line}]", name)


class Environment:
    """One scope frame mapping variable names to values.

    Frames form a chain through `parent`. Lookup and assignment walk the
    chain outwards until a frame defines the name; declaration always
    writes to the frame it is called on.
    """
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Any] = {}

    def define(self, name: str, value: Any):
        # redeclaring in the same frame overwrites
        self.values[name] = value

    def get(self, name: Token) -> Any:
        env = self.find(name.lexeme)
        if env is None:
            raise undefined_variable(name)
        return env.values[name.lexeme]

    def assign(self, name: Token, value: Any):
        env = self.find(name.lexeme)
        if env is None:
            raise undefined_variable(name)
        env.values[name.lexeme] = value

    def find(self, name: str) -> Optional['Environment']:
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                return env
            env = env.parent
        return None

    def depth(self) -> int:
        return 0 if self.parent is None else self.parent.depth() + 1
