"""Native functions: host-provided callables pre-registered in the global scope of every interpreter.

```
say(x)                 prints x followed by a line break, gives back nothing
input(prompt)          prints prompt without a line break, gives back one line read ("" if input is exhausted)
append(list, value)    adds value to the end of list in place, gives back nothing
get(list, index)       gives back list[index]
set(list, index, v)    replaces list[index] with v in place, gives back nothing
len(x)                 gives back the length of a list or string
```

Argument type errors are raised as ZarnRuntimeErrors without a token: the interpreter fills in the call site.
"""

from zarn.core.values import Callable, is_number, stringify, to_index, type_name
from zarn.lang.error import ZarnRuntimeError


class NativeFunction(Callable):
    """Superclass of native functions. Subclasses set name and ARITY and implement call."""
    ARITY = 0

    @property
    def arity(self):
        return self.ARITY

    def expect_list(self, value, position):
        if not isinstance(value, list):
            raise ZarnRuntimeError(f"{position} argument to {self.name}() must be a list, got {type_name(value)}")
        return value

    def expect_index(self, items, value, position):
        """Truncates value to an integer index into items, checking 0 <= index < len(items)."""
        if not is_number(value):
            raise ZarnRuntimeError(f"{position} argument to {self.name}() must be a number, got {type_name(value)}")
        index = to_index(value, len(items))
        if index is None:
            raise ZarnRuntimeError(f"index out of bounds: {stringify(value)} (length {len(items)})")
        return index

    def __str__(self):
        return f"<native fn {self.name}>"

    def __repr__(self):
        return f"{type(self).__name__}()"


class Say(NativeFunction):
    name = "say"
    ARITY = 1

    def call(self, interpreter, arguments):
        interpreter.stdout.write(stringify(arguments[0]) + "\n")


class Input(NativeFunction):
    name = "input"
    ARITY = 1

    def call(self, interpreter, arguments):
        interpreter.stdout.write(stringify(arguments[0]))
        interpreter.stdout.flush()

        line = interpreter.stdin.readline()
        if line.endswith("\n"):
            line = line[:-1]
        return line.rstrip("\r")


class Append(NativeFunction):
    name = "append"
    ARITY = 2

    def call(self, interpreter, arguments):
        items, value = arguments
        self.expect_list(items, "first").append(value)


class Get(NativeFunction):
    name = "get"
    ARITY = 2

    def call(self, interpreter, arguments):
        items = self.expect_list(arguments[0], "first")
        return items[self.expect_index(items, arguments[1], "second")]


class Set(NativeFunction):
    name = "set"
    ARITY = 3

    def call(self, interpreter, arguments):
        items = self.expect_list(arguments[0], "first")
        items[self.expect_index(items, arguments[1], "second")] = arguments[2]


class Len(NativeFunction):
    name = "len"
    ARITY = 1

    def call(self, interpreter, arguments):
        value = arguments[0]
        if isinstance(value, (list, str)):
            return float(len(value))
        raise ZarnRuntimeError(f"argument to len() must be a list or string, got {type_name(value)}")


NATIVES = [Say, Input, Append, Get, Set, Len]


def register(environment):
    """Defines every native function in environment (normally the global scope)."""
    for native in NATIVES:
        environment.define(native.name, native())
