from typing import Any, Dict, Optional

from lox.errors import LoxRuntimeError
from lox.tokens import Token


class Environment:
    """One lexical scope mapping names to values, linked to its enclosing scope."""
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Any] = {}

    @property
    def depth(self) -> int:
        # Number of scopes between this one and the globals.
        env, depth = self.parent, 0
        while env is not None:
            env, depth = env.parent, depth + 1
        return depth

    def define(self, name: str, value: Any):
        # Redeclaring in the same scope overwrites; inner scopes shadow.
        self.values[name] = value

    def get(self, name: Token) -> Any:
        if name.lexeme in self.values:
            return self.values[name.lexeme]
        if self.parent is not None:
            return self.parent.get(name)
        raise LoxRuntimeError(name, f"Undefined variable '{name.lexeme}'.")

    def assign(self, name: Token, value: Any):
        # Assignment only ever updates an existing binding.
        if name.lexeme in self.values:
            self.values[name.lexeme] = value
            return
        if self.parent is not None:
            self.parent.assign(name, value)
            return
        raise LoxRuntimeError(name, f"Undefined variable '{name.lexeme}'.")
