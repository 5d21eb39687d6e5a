import io
import unittest

from zarn.core.interpreter import Interpreter
from zarn.core.lexer import scan
from zarn.core.natives import NATIVES
from zarn.core.parser import parse
from zarn.lang.error import ZarnRuntimeError


def run(source, stdin=""):
    out = io.StringIO()
    Interpreter(stdout=out, stdin=io.StringIO(stdin)).interpret(parse(scan(source)))
    return out.getvalue()


class NativeTestCase(unittest.TestCase):

    def test_registered(self):
        interpreter = Interpreter(stdout=io.StringIO())
        for name, arity in [("say", 1), ("input", 1), ("append", 2), ("get", 2), ("set", 3), ("len", 1)]:
            native = interpreter.globals.values[name]
            self.assertEqual(arity, native.arity, name)
            self.assertEqual(f"<native fn {name}>", str(native))
        self.assertEqual(6, len(NATIVES))

    def test_say(self):
        cases = {
            "say(1)": "1\n",
            "say(\"a b\")": "a b\n",
            "say(nothing)": "nothing\n",
            "say([1, \"a\", nothing, [2]])": "[1, a, nothing, [2]]\n",
            "say(say(1))": "1\nnothing\n",
        }
        for source, expected in cases.items():
            self.assertEqual(expected, run(source), source)

    def test_input(self):
        source = "name = input(\"Name? \"); say(\"Hi \" + name)"
        self.assertEqual("Name? Hi Ada\n", run(source, "Ada\nBob\n"))

        source = "a = input(\"> \"); b = input(\"> \"); say(b + a)"
        self.assertEqual("> > BobAda\n", run(source, "Ada\r\nBob"))

        self.assertEqual("> 0\n", run("say(len(input(\"> \")))", ""))
        self.assertEqual("1nothing\n", run("say(input(1) + input(nothing))", "\n\n"))

    def test_append(self):
        self.assertEqual("[1, 2]\n", run("a = [1]; b = a; append(b, 2); say(a)"))
        self.assertEqual("nothing\n", run("say(append([], 1))"))
        self.assertEqual("[[]]\n", run("a = []; append(a, []); say(a)"))

    def test_get_set(self):
        cases = {
            "l = [1, 2, 3]; say(get(l, 1.7))": "2\n",
            "l = [1, 2, 3]; set(l, 0, \"x\"); say(l)": "[x, 2, 3]\n",
            "l = [1, 2]; m = l; set(l, 1, 9); say(m)": "[1, 9]\n",
            "l = [1]; say(set(l, 0, 2))": "nothing\n",
        }
        for source, expected in cases.items():
            self.assertEqual(expected, run(source), source)

    def test_len(self):
        cases = {
            "say(len([]))": "0\n",
            "say(len([1, [2, 3]]))": "2\n",
            "say(len(\"\"))": "0\n",
            "say(len(\"héllo\"))": "5\n",
        }
        for source, expected in cases.items():
            self.assertEqual(expected, run(source), source)

    def test_errors(self):
        should_raise = {
            "append(1, 2)": "first argument to append() must be a list",
            "get(1, 0)": "first argument to get() must be a list",
            "get([1], \"0\")": "second argument to get() must be a number",
            "get([1], 1)": "index out of bounds",
            "get([], 0)": "index out of bounds",
            "set([1], -1, 0)": "index out of bounds",
            "set(\"abc\", 0, 1)": "first argument to set() must be a list",
            "set([1], nothing, 1)": "second argument to set() must be a number",
            "len(5)": "argument to len() must be a list or string",
            "len(nothing)": "argument to len() must be a list or string",
            "say(1, 2)": "say() expected 1 argument but got 2",
            "set([1], 0)": "set() expected 3 arguments but got 2",
            "len()": "len() expected 1 argument but got 0",
        }
        for source, msg in should_raise.items():
            with self.assertRaises(ZarnRuntimeError, msg=source) as context:
                run(source)
            self.assertIn(msg, context.exception.msg, source)

    def test_errors_carry_call_site(self):
        with self.assertRaises(ZarnRuntimeError) as context:
            run("x = 1\nappend(x, 2)")
        self.assertEqual((2, 12), (context.exception.line, context.exception.column))


if __name__ == '__main__':
    unittest.main()
