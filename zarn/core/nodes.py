"""Abstract syntax tree for the zarn language. Two closed families of nodes, expressions and statements, both
immutable once built. Children are stored in tuples and a parent exclusively owns its children.

The interpreter dispatches on node type directly, so nodes carry no behaviour besides display.
"""

from dataclasses import dataclass, fields
from typing import Any, Optional, Tuple

from zarn.core.tokens import Token


class Node:
    """Superclass of every AST node."""

    def display(self, indents=0):
        """Recursively displays the tree with a readable format.

        Format:
        <Node>(<field>=<value>, nodes=[
            <Node>(...),
            ...
        ])
        """
        attrs, children = [], []
        for field in fields(self):
            value = getattr(self, field.name)
            if isinstance(value, Node):
                children.append(value)
            elif isinstance(value, tuple) and value and isinstance(value[0], Node):
                children.extend(value)
            elif isinstance(value, Token):
                attrs.append(f"{field.name}='{value.lexeme}'")
            elif isinstance(value, tuple):
                attrs.append(f"{field.name}=[{', '.join(tok.lexeme for tok in value)}]")
            elif value is not None or field.name == "value":
                attrs.append(f"{field.name}={value!r}")

        result = f"{'    ' * indents}{type(self).__name__}({', '.join(attrs)}"
        if children:
            result += ", " if attrs else ""
            result += "nodes=["
            for node in children:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    def __str__(self):
        return self.display()


class Expr(Node):
    """Superclass of expression nodes: evaluate to a runtime value."""


class Stmt(Node):
    """Superclass of statement nodes: executed for effect."""


# ---------------------------------------------------------------------------------------------------------------------
# expressions

@dataclass(frozen=True, repr=False)
class Literal(Expr):
    value: Any  # None (nothing), float or str


@dataclass(frozen=True, repr=False)
class Variable(Expr):
    name: Token


@dataclass(frozen=True, repr=False)
class Assign(Expr):
    name: Token
    value: Expr


@dataclass(frozen=True, repr=False)
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True, repr=False)
class Logical(Expr):
    """Short-circuiting && / ||."""
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True, repr=False)
class Unary(Expr):
    operator: Token
    right: Expr


@dataclass(frozen=True, repr=False)
class Grouping(Expr):
    expression: Expr


@dataclass(frozen=True, repr=False)
class Call(Expr):
    callee: Expr
    paren: Token  # closing paren, used for error positions
    arguments: Tuple[Expr, ...]


@dataclass(frozen=True, repr=False)
class ListLiteral(Expr):
    elements: Tuple[Expr, ...]


@dataclass(frozen=True, repr=False)
class Index(Expr):
    collection: Expr
    bracket: Token  # opening bracket, used for error positions
    index: Expr


# ---------------------------------------------------------------------------------------------------------------------
# statements

@dataclass(frozen=True, repr=False)
class Expression(Stmt):
    expression: Expr


@dataclass(frozen=True, repr=False)
class Var(Stmt):
    """Binds name in the current scope. Built by hosts; the surface language has no declaring keyword."""
    name: Token
    initializer: Optional[Expr] = None


@dataclass(frozen=True, repr=False)
class Block(Stmt):
    statements: Tuple[Stmt, ...]


@dataclass(frozen=True, repr=False)
class If(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt] = None


@dataclass(frozen=True, repr=False)
class While(Stmt):
    condition: Expr
    body: Stmt


@dataclass(frozen=True, repr=False)
class Function(Stmt):
    name: Token
    params: Tuple[Token, ...]
    body: Tuple[Stmt, ...]


@dataclass(frozen=True, repr=False)
class Return(Stmt):
    keyword: Token
    value: Optional[Expr] = None
