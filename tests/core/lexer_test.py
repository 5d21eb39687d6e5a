import unittest

from zarn.core.lexer import scan
from zarn.core.tokens import KEYWORDS, TokenType
from zarn.lang.error import LexError


def types(source):
    return [token.type for token in scan(source)]


class LexerTestCase(unittest.TestCase):

    def test_scan_types(self):
        cases = {
            "": [TokenType.EOF],
            "x = 10;": [TokenType.IDENTIFIER, TokenType.ASSIGN, TokenType.NUMBER, TokenType.SEMICOLON, TokenType.EOF],
            "a == b != c": [
                TokenType.IDENTIFIER, TokenType.EQUAL, TokenType.IDENTIFIER, TokenType.NOT_EQUAL, TokenType.IDENTIFIER,
                TokenType.EOF
            ],
            "< <= > >= ! =": [
                TokenType.LESS, TokenType.LESS_EQUAL, TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.NOT,
                TokenType.ASSIGN, TokenType.EOF
            ],
            "a && b || c": [
                TokenType.IDENTIFIER, TokenType.AND, TokenType.IDENTIFIER, TokenType.OR, TokenType.IDENTIFIER,
                TokenType.EOF
            ],
            "(){}[],.;": [
                TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN, TokenType.LEFT_BRACE, TokenType.RIGHT_BRACE,
                TokenType.LEFT_BRACKET, TokenType.RIGHT_BRACKET, TokenType.COMMA, TokenType.DOT, TokenType.SEMICOLON,
                TokenType.EOF
            ],
            "+-*/": [TokenType.PLUS, TokenType.MINUS, TokenType.MULTIPLY, TokenType.DIVIDE, TokenType.EOF],
            "==": [TokenType.EQUAL, TokenType.EOF],
            "= =": [TokenType.ASSIGN, TokenType.ASSIGN, TokenType.EOF],
            "x // comment ! @ #\ny": [TokenType.IDENTIFIER, TokenType.NEWLINE, TokenType.IDENTIFIER, TokenType.EOF],
            "// only a comment": [TokenType.EOF],
            " \t\r\n": [TokenType.NEWLINE, TokenType.EOF],
            "1.": [TokenType.NUMBER, TokenType.DOT, TokenType.EOF],
            "-5": [TokenType.MINUS, TokenType.NUMBER, TokenType.EOF],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, types(case), case)

    def test_keywords(self):
        for word, token_type in KEYWORDS.items():
            self.assertEqual([token_type, TokenType.EOF], types(word), word)

        should_be_identifiers = ["funny", "iff", "_while", "Class", "giveback2", "x_1", "_"]
        for case in should_be_identifiers:
            self.assertEqual([TokenType.IDENTIFIER, TokenType.EOF], types(case), case)

    def test_literals(self):
        cases = {
            "10": 10.0,
            "3.14": 3.14,
            "007": 7.0,
            "\"hello world\"": "hello world",
            "\"\"": "",
            "\"a\\nb\"": "a\\nb",  # no escape processing
            "\"two\nlines\"": "two\nlines",
        }
        for case, expected in cases.items():
            token = scan(case)[0]
            self.assertEqual(expected, token.literal, case)
            self.assertEqual(case, token.lexeme, case)

        self.assertIsNone(scan("x")[0].literal)

    def test_positions(self):
        tokens = scan("x = 1\n  say(y)")
        positions = [(token.lexeme, token.line, token.column) for token in tokens]
        self.assertEqual([
            ("x", 1, 1), ("=", 1, 3), ("1", 1, 5), ("\n", 1, 6),
            ("say", 2, 3), ("(", 2, 6), ("y", 2, 7), (")", 2, 8), ("", 2, 9)
        ], positions)

        self.assertEqual(5, scan("x", line=5)[0].line)

        # a string spanning lines is positioned at its opening quote, and lines keep counting after it
        tokens = scan("\"a\nb\" c")
        self.assertEqual((1, 1), (tokens[0].line, tokens[0].column))
        self.assertEqual((2, 4), (tokens[1].line, tokens[1].column))

    def test_errors(self):
        should_raise = ["@", "x = 1 & 2", "a | b", "\"unterminated", "say(\"oops)", "é", "#"]
        for case in should_raise:
            self.assertRaises(LexError, scan, case)

        with self.assertRaises(LexError) as context:
            scan("x = 1\n  $")
        self.assertEqual((2, 3), (context.exception.line, context.exception.column))
        self.assertIn("'$'", context.exception.msg)

        with self.assertRaises(LexError) as context:
            scan("x\n\"abc")
        self.assertEqual("unterminated string", context.exception.msg)
        self.assertEqual((2, 1), (context.exception.line, context.exception.column))

    def test_single_eof(self):
        for case in ["", "x", "x\n", "say(1);\n\n"]:
            found = types(case)
            self.assertEqual(1, found.count(TokenType.EOF), case)
            self.assertEqual(TokenType.EOF, found[-1], case)


if __name__ == '__main__':
    unittest.main()
