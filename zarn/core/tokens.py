"""Token vocabulary shared by the lexer and the parser."""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class TokenType(Enum):
    # literals
    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()

    # keywords
    FUN = auto()
    IF = auto()
    ELSE = auto()
    WHILE = auto()
    GIVEBACK = auto()
    NOTHING = auto()
    THIS = auto()
    CLASS = auto()
    USE = auto()
    TRY = auto()
    CATCH = auto()

    # operators
    PLUS = auto()
    MINUS = auto()
    MULTIPLY = auto()
    DIVIDE = auto()
    ASSIGN = auto()
    EQUAL = auto()
    NOT_EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()
    AND = auto()
    OR = auto()
    NOT = auto()

    # delimiters
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    LEFT_BRACKET = auto()
    RIGHT_BRACKET = auto()
    COMMA = auto()
    SEMICOLON = auto()
    DOT = auto()

    EOF = auto()
    NEWLINE = auto()


# `this class use try catch` are reserved: they lex as keywords but no grammar rule consumes them
KEYWORDS = {
    "fun": TokenType.FUN,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "while": TokenType.WHILE,
    "giveback": TokenType.GIVEBACK,
    "nothing": TokenType.NOTHING,
    "this": TokenType.THIS,
    "class": TokenType.CLASS,
    "use": TokenType.USE,
    "try": TokenType.TRY,
    "catch": TokenType.CATCH,
}


@dataclass(frozen=True)
class Token:
    """Smallest lexical unit. literal holds the decoded value of NUMBER/STRING tokens and is None otherwise."""
    type: TokenType
    lexeme: str
    literal: Any
    line: int
    column: int
