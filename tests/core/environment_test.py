import unittest

from zarn.core.environment import Environment
from zarn.core.tokens import Token, TokenType
from zarn.lang.error import ZarnRuntimeError


def name(lexeme):
    return Token(TokenType.IDENTIFIER, lexeme, None, 1, 1)


class EnvironmentTestCase(unittest.TestCase):

    def test_define_get(self):
        env = Environment()
        env.define("x", 1.0)
        self.assertEqual(1.0, env.get(name("x")))

        env.define("x", "redefined")
        self.assertEqual("redefined", env.get(name("x")))

        with self.assertRaises(ZarnRuntimeError) as context:
            env.get(name("y"))
        self.assertEqual("undefined variable 'y'", context.exception.msg)

    def test_chain_lookup_and_shadowing(self):
        outer = Environment()
        outer.define("x", 1.0)
        inner = Environment(outer)

        self.assertEqual(1.0, inner.get(name("x")))
        self.assertIs(outer, inner.find("x"))

        inner.define("x", 2.0)
        self.assertEqual(2.0, inner.get(name("x")))
        self.assertEqual(1.0, outer.get(name("x")))
        self.assertIs(inner, inner.find("x"))

    def test_assign_mutates_nearest(self):
        outer = Environment()
        outer.define("x", 1.0)
        middle = Environment(outer)
        inner = Environment(middle)

        inner.assign(name("x"), 5.0)
        self.assertEqual(5.0, outer.values["x"])
        self.assertNotIn("x", inner.values)
        self.assertNotIn("x", middle.values)

        middle.define("x", 0.0)
        inner.assign(name("x"), 7.0)
        self.assertEqual(7.0, middle.values["x"])
        self.assertEqual(5.0, outer.values["x"])

    def test_assign_creates_in_innermost(self):
        outer = Environment()
        inner = Environment(outer)

        inner.assign(name("fresh"), 3.0)
        self.assertEqual(3.0, inner.get(name("fresh")))
        self.assertIsNone(outer.find("fresh"))

    def test_strict_assign(self):
        outer = Environment(strict_assign=True)
        inner = Environment(outer)
        self.assertTrue(inner.strict_assign)

        with self.assertRaises(ZarnRuntimeError) as context:
            inner.assign(name("fresh"), 3.0)
        self.assertEqual("undefined variable 'fresh'", context.exception.msg)
        self.assertIsNone(inner.find("fresh"))

        outer.define("known", 1.0)
        inner.assign(name("known"), 2.0)
        self.assertEqual(2.0, outer.values["known"])


if __name__ == '__main__':
    unittest.main()
