"""Scopes for the zarn language. An Environment maps names to runtime values and links to exactly one enclosing
Environment, or none for the global scope.

Blocks and function calls each get a fresh child Environment. A function call's child is chained to the scope the
function was declared in (its closure), not to the caller's scope.
"""

from zarn.lang.error import ZarnRuntimeError


class Environment:
    """Mutable name: value mapping, plus the enclosing scope."""

    def __init__(self, enclosing=None, strict_assign=False):
        self.enclosing = enclosing
        self.values = {}

        # a child inherits the flag so the whole chain answers assignments the same way
        self.strict_assign = enclosing.strict_assign if enclosing is not None else strict_assign

    def define(self, name, value):
        """Binds name in this scope, shadowing any binding of the same name further out."""
        self.values[name] = value

    def get(self, name):
        """Returns the value bound to the nearest binding of name token, raising if no scope binds it."""
        scope = self.find(name.lexeme)
        if scope is None:
            raise ZarnRuntimeError(f"undefined variable '{name.lexeme}'", name)
        return scope.values[name.lexeme]

    def assign(self, name, value):
        """Mutates the nearest binding of name token in place.

        If no scope in the chain binds name, the binding is created in this (the innermost) scope. With
        strict_assign, that case is an undefined variable error instead, the same as a read.
        """
        scope = self.find(name.lexeme)
        if scope is not None:
            scope.values[name.lexeme] = value
        elif self.strict_assign:
            raise ZarnRuntimeError(f"undefined variable '{name.lexeme}'", name)
        else:
            self.values[name.lexeme] = value

    def find(self, name):
        """Returns the nearest Environment in the chain that binds name, or None."""
        scope = self
        while scope is not None:
            if name in scope.values:
                return scope
            scope = scope.enclosing
        return None

    def __repr__(self):
        depth, scope = 0, self.enclosing
        while scope is not None:
            depth, scope = depth + 1, scope.enclosing
        return f"Environment(depth={depth}, names={sorted(self.values)})"
