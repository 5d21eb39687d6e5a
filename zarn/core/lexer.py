"""Lexical analysis for the zarn language: raw source text in, flat list of Tokens out.

Lexical grammar, loosely:

```
<newline>    ::= "\n"                               ; significant: terminates a statement
<comment>    ::= "//" <char>*                       ; up to end of line, produces no token
<string>     ::= '"' <char>* '"'                    ; no escapes, may span lines
<number>     ::= <digit>+ ["." <digit>+]            ; no exponent, no sign
<identifier> ::= (<alpha> | "_") (<alpha> | <digit> | "_")*
<operator>   ::= "+" | "-" | "*" | "/" | "=" | "==" | "!" | "!=" | "<" | "<=" | ">" | ">=" | "&&" | "||"
<delimiter>  ::= "(" | ")" | "{" | "}" | "[" | "]" | "," | ";" | "."
```

Scanning is a single pass and errors are fatal: the first bad character aborts the whole scan.
"""

from zarn.core.tokens import KEYWORDS, Token, TokenType
from zarn.lang.error import LexError

UNTERMINATED_STRING = "unterminated string"


SINGLE = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    "[": TokenType.LEFT_BRACKET,
    "]": TokenType.RIGHT_BRACKET,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "*": TokenType.MULTIPLY,
}

# char: (type if followed by "=", type otherwise)
WITH_EQUALS = {
    "!": (TokenType.NOT_EQUAL, TokenType.NOT),
    "=": (TokenType.EQUAL, TokenType.ASSIGN),
    "<": (TokenType.LESS_EQUAL, TokenType.LESS),
    ">": (TokenType.GREATER_EQUAL, TokenType.GREATER),
}

DOUBLED = {"&": TokenType.AND, "|": TokenType.OR}

WHITESPACE = " \r\t"


def is_digit(char):
    return "0" <= char <= "9"


def is_alpha(char):
    return "a" <= char <= "z" or "A" <= char <= "Z" or char == "_"


def is_alphanumeric(char):
    return is_alpha(char) or is_digit(char)


class Lexer:
    """Converts source into tokens. line is the line number of the first line of source, so that chunks fed one at a
    time (command-line mode) keep counting lines.
    """

    def __init__(self, source, line=1):
        self.source = source
        self.tokens = []

        self.start = 0        # index of the first char of the token being scanned
        self.current = 0      # index of the next char to consume
        self.line = line
        self.column = 1       # column of the next char to consume

        self._start_line = line
        self._start_column = 1

    def scan_tokens(self):
        """Scans the whole source. Always ends with exactly one EOF token."""
        while not self.is_at_end():
            self.start = self.current
            self._start_line, self._start_column = self.line, self.column
            self.scan_token()

        self.tokens.append(Token(TokenType.EOF, "", None, self.line, self.column))
        return self.tokens

    def scan_token(self):
        char = self.advance()

        if char in WHITESPACE:
            return

        if char == "\n":
            self.add_token(TokenType.NEWLINE)
            self.line += 1
            self.column = 1

        elif char in SINGLE:
            self.add_token(SINGLE[char])

        elif char == "/":
            if self.match("/"):
                while self.peek() != "\n" and not self.is_at_end():
                    self.advance()
            else:
                self.add_token(TokenType.DIVIDE)

        elif char in WITH_EQUALS:
            paired, alone = WITH_EQUALS[char]
            self.add_token(paired if self.match("=") else alone)

        elif char in DOUBLED:
            if not self.match(char):
                self.error(f"unexpected character '{char}'")
            self.add_token(DOUBLED[char])

        elif char == "\"":
            self.scan_string()

        elif is_digit(char):
            self.scan_number()

        elif is_alpha(char):
            self.scan_identifier()

        else:
            self.error(f"unexpected character '{char}'")

    def scan_string(self):
        while self.peek() != "\"" and not self.is_at_end():
            if self.advance() == "\n":
                self.line += 1
                self.column = 1

        if self.is_at_end():
            raise LexError(UNTERMINATED_STRING, line=self._start_line, column=self._start_column)

        self.advance()  # closing "
        self.add_token(TokenType.STRING, self.source[self.start + 1:self.current - 1])

    def scan_number(self):
        while is_digit(self.peek()):
            self.advance()

        # a "." only belongs to the number if a digit follows it
        if self.peek() == "." and is_digit(self.peek_next()):
            self.advance()
            while is_digit(self.peek()):
                self.advance()

        self.add_token(TokenType.NUMBER, float(self.source[self.start:self.current]))

    def scan_identifier(self):
        while is_alphanumeric(self.peek()):
            self.advance()

        text = self.source[self.start:self.current]
        self.add_token(KEYWORDS.get(text, TokenType.IDENTIFIER))

    def advance(self):
        char = self.source[self.current]
        self.current += 1
        self.column += 1
        return char

    def match(self, expected):
        if self.is_at_end() or self.source[self.current] != expected:
            return False
        self.advance()
        return True

    def peek(self):
        return "" if self.is_at_end() else self.source[self.current]

    def peek_next(self):
        if self.current + 1 >= len(self.source):
            return ""
        return self.source[self.current + 1]

    def is_at_end(self):
        return self.current >= len(self.source)

    def add_token(self, token_type, literal=None):
        text = self.source[self.start:self.current]
        self.tokens.append(Token(token_type, text, literal, self._start_line, self._start_column))

    def error(self, msg):
        """Raises a LexError pointing at the char just consumed."""
        raise LexError(msg, line=self.line, column=self.column - 1)


def scan(source, line=1):
    """Returns the list of Tokens in source, ending with EOF. Raises LexError on the first lexing error."""
    return Lexer(source, line).scan_tokens()
