"""Recursive-descent parser for the zarn language: list of Tokens in, list of statements out.

Grammar, from lowest to highest precedence (all binary tiers associate to the left):

```
<program>     ::= <declaration>* EOF
<declaration> ::= <function> | <statement>
<function>    ::= "fun" IDENTIFIER "(" [IDENTIFIER ("," IDENTIFIER)*] ")" <block>
<statement>   ::= <if> | <while> | <giveback> | <block> | <expr> <end>
<if>          ::= "if" <expr> <block> ["else" (<if> | <block>)]
<while>       ::= "while" <expr> <block>
<giveback>    ::= "giveback" [<expr>] <end>            ; only inside a function body
<block>       ::= "{" <declaration>* "}"
<end>         ::= ";" | NEWLINE                         ; may be left out only at end of input

<expr>        ::= <assignment>
<assignment>  ::= <or> ["=" <assignment>]               ; right associative, l-value must be a variable
<or>          ::= <and> ("||" <and>)*
<and>         ::= <equality> ("&&" <equality>)*
<equality>    ::= <comparison> (("==" | "!=") <comparison>)*
<comparison>  ::= <term> ((">" | ">=" | "<" | "<=") <term>)*
<term>        ::= <factor> (("+" | "-") <factor>)*
<factor>      ::= <unary> (("*" | "/") <unary>)*
<unary>       ::= ("!" | "-") <unary> | <call>
<call>        ::= <primary> ("(" [<expr> ("," <expr>)*] ")" | "[" <expr> "]")*
<primary>     ::= NUMBER | STRING | "nothing" | IDENTIFIER | "(" <expr> ")" | "[" [<expr> ("," <expr>)*] "]"
```

NEWLINEs and stray ";" between statements are skipped. The first syntax error aborts the parse.
"""

from zarn.core import nodes
from zarn.core.tokens import TokenType
from zarn.lang.error import ParseError


# statement keywords the parser can resynchronize on after an error
SYNC_KEYWORDS = (TokenType.CLASS, TokenType.FUN, TokenType.IF, TokenType.WHILE, TokenType.GIVEBACK)

SEPARATORS = (TokenType.NEWLINE, TokenType.SEMICOLON)


class Parser:
    """One token of lookahead over a fixed token list."""

    def __init__(self, tokens):
        self.tokens = tokens
        self.current = 0
        self.function_depth = 0  # number of function bodies the parser is inside

    def parse(self):
        """Parses the whole token list into a list of statements. Raises ParseError on the first syntax error."""
        statements = []
        while not self.is_at_end():
            if self.match(*SEPARATORS):
                continue
            statements.append(self.declaration())
        return statements

    # -----------------------------------------------------------------------------------------------------------------
    # statements

    def declaration(self):
        try:
            if self.match(TokenType.FUN):
                return self.function()
            return self.statement()
        except ParseError:
            self.synchronize()
            raise

    def function(self):
        name = self.consume(TokenType.IDENTIFIER, "expected function name")

        self.consume(TokenType.LEFT_PAREN, "expected '(' after function name")
        params = []
        if not self.check(TokenType.RIGHT_PAREN):
            params.append(self.consume(TokenType.IDENTIFIER, "expected parameter name"))
            while self.match(TokenType.COMMA):
                params.append(self.consume(TokenType.IDENTIFIER, "expected parameter name"))
        self.consume(TokenType.RIGHT_PAREN, "expected ')' after parameters")

        self.consume(TokenType.LEFT_BRACE, "expected '{' before function body")
        self.function_depth += 1
        try:
            body = self.block()
        finally:
            self.function_depth -= 1

        return nodes.Function(name, tuple(params), tuple(body))

    def statement(self):
        if self.match(TokenType.IF):
            return self.if_statement()
        if self.match(TokenType.WHILE):
            return self.while_statement()
        if self.match(TokenType.GIVEBACK):
            return self.return_statement()
        if self.match(TokenType.LEFT_BRACE):
            return nodes.Block(tuple(self.block()))
        return self.expression_statement()

    def if_statement(self):
        condition = self.expression()
        self.consume(TokenType.LEFT_BRACE, "expected '{' after if condition")
        then_branch = nodes.Block(tuple(self.block()))

        else_branch = None
        if self.match_past_newlines(TokenType.ELSE):
            if self.match(TokenType.IF):
                else_branch = self.if_statement()
            else:
                self.consume(TokenType.LEFT_BRACE, "expected '{' after else")
                else_branch = nodes.Block(tuple(self.block()))

        return nodes.If(condition, then_branch, else_branch)

    def while_statement(self):
        condition = self.expression()
        self.consume(TokenType.LEFT_BRACE, "expected '{' after while condition")
        return nodes.While(condition, nodes.Block(tuple(self.block())))

    def return_statement(self):
        keyword = self.previous()
        if self.function_depth == 0:
            raise ParseError("giveback outside function", keyword)

        value = None
        if not self.check(*SEPARATORS) and not self.is_at_end():
            value = self.expression()

        self.consume_statement_end("expected ';' or newline after giveback value")
        return nodes.Return(keyword, value)

    def block(self):
        """Parses declarations up to the closing brace. Assumes the opening brace was consumed."""
        statements = []
        while not self.check(TokenType.RIGHT_BRACE) and not self.is_at_end():
            if self.match(*SEPARATORS):
                continue
            statements.append(self.declaration())

        self.consume(TokenType.RIGHT_BRACE, "expected '}' after block")
        return statements

    def expression_statement(self):
        expr = self.expression()
        self.consume_statement_end("expected ';' or newline after expression")
        return nodes.Expression(expr)

    # -----------------------------------------------------------------------------------------------------------------
    # expressions

    def expression(self):
        return self.assignment()

    def assignment(self):
        expr = self.logical_or()

        if self.match(TokenType.ASSIGN):
            equals = self.previous()
            value = self.assignment()

            # l-value is checked after the fact, any expression parses on the left of "="
            if isinstance(expr, nodes.Variable):
                return nodes.Assign(expr.name, value)
            raise ParseError("invalid assignment target", equals)

        return expr

    def logical_or(self):
        expr = self.logical_and()
        while self.match(TokenType.OR):
            operator = self.previous()
            expr = nodes.Logical(expr, operator, self.logical_and())
        return expr

    def logical_and(self):
        expr = self.equality()
        while self.match(TokenType.AND):
            operator = self.previous()
            expr = nodes.Logical(expr, operator, self.equality())
        return expr

    def equality(self):
        return self._binary(self.comparison, TokenType.EQUAL, TokenType.NOT_EQUAL)

    def comparison(self):
        return self._binary(
            self.term, TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS, TokenType.LESS_EQUAL
        )

    def term(self):
        return self._binary(self.factor, TokenType.PLUS, TokenType.MINUS)

    def factor(self):
        return self._binary(self.unary, TokenType.MULTIPLY, TokenType.DIVIDE)

    def _binary(self, operand, *operators):
        """Parses a left-associative tier: operand (operator operand)*."""
        expr = operand()
        while self.match(*operators):
            operator = self.previous()
            expr = nodes.Binary(expr, operator, operand())
        return expr

    def unary(self):
        if self.match(TokenType.NOT, TokenType.MINUS):
            operator = self.previous()
            return nodes.Unary(operator, self.unary())
        return self.call()

    def call(self):
        expr = self.primary()

        while True:
            if self.match(TokenType.LEFT_PAREN):
                expr = self.finish_call(expr)
            elif self.match(TokenType.LEFT_BRACKET):
                bracket = self.previous()
                index = self.expression()
                self.consume(TokenType.RIGHT_BRACKET, "expected ']' after index")
                expr = nodes.Index(expr, bracket, index)
            else:
                return expr

    def finish_call(self, callee):
        arguments = self._comma_separated(TokenType.RIGHT_PAREN)
        paren = self.consume(TokenType.RIGHT_PAREN, "expected ')' after arguments")
        return nodes.Call(callee, paren, tuple(arguments))

    def primary(self):
        if self.match(TokenType.NOTHING):
            return nodes.Literal(None)

        if self.match(TokenType.NUMBER, TokenType.STRING):
            return nodes.Literal(self.previous().literal)

        if self.match(TokenType.IDENTIFIER):
            return nodes.Variable(self.previous())

        if self.match(TokenType.LEFT_PAREN):
            expr = self.expression()
            self.consume(TokenType.RIGHT_PAREN, "expected ')' after expression")
            return nodes.Grouping(expr)

        if self.match(TokenType.LEFT_BRACKET):
            elements = self._comma_separated(TokenType.RIGHT_BRACKET)
            self.consume(TokenType.RIGHT_BRACKET, "expected ']' after list elements")
            return nodes.ListLiteral(tuple(elements))

        raise ParseError("expected expression", self.peek())

    def _comma_separated(self, closing):
        """Parses [<expr> ("," <expr>)*] up to (not including) closing."""
        exprs = []
        if not self.check(closing):
            exprs.append(self.expression())
            while self.match(TokenType.COMMA):
                exprs.append(self.expression())
        return exprs

    # -----------------------------------------------------------------------------------------------------------------
    # token helpers

    def match(self, *types):
        """Consumes the next token and returns True if it is one of types."""
        if self.check(*types):
            self.advance()
            return True
        return False

    def match_past_newlines(self, token_type):
        """Like match, but looks past NEWLINEs. The NEWLINEs are only consumed if token_type follows them."""
        idx = self.current
        while self.tokens[idx].type == TokenType.NEWLINE:
            idx += 1
        if self.tokens[idx].type != token_type:
            return False
        self.current = idx + 1
        return True

    def consume(self, token_type, msg):
        if self.check(token_type):
            return self.advance()
        raise ParseError(msg, self.peek())

    def consume_statement_end(self, msg):
        if self.match(*SEPARATORS) or self.is_at_end():
            return
        raise ParseError(msg, self.peek())

    def check(self, *types):
        return not self.is_at_end() and self.peek().type in types

    def advance(self):
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def is_at_end(self):
        return self.peek().type == TokenType.EOF

    def peek(self):
        return self.tokens[self.current]

    def previous(self):
        return self.tokens[self.current - 1]

    def synchronize(self):
        """Skips tokens up to the next statement boundary: just past a ";" or just before a statement keyword."""
        self.advance()

        while not self.is_at_end():
            if self.previous().type == TokenType.SEMICOLON:
                return
            if self.peek().type in SYNC_KEYWORDS:
                return
            self.advance()


def parse(tokens):
    """Returns the list of statements in tokens. Raises ParseError on the first syntax error."""
    return Parser(tokens).parse()
