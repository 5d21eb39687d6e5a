"""Runtime values of the zarn language and the rules every consumer of a value goes through.

A runtime value is always one of:

```
nothing   -> None
boolean   -> bool
number    -> float           ; double precision, literals never produce ints
string    -> str
list      -> list            ; mutable and shared by reference
callable  -> Callable        ; NativeFunction or ZarnFunction
```

stringify, is_truthy and is_equal cover every case above explicitly and raise on anything else.
"""

from abc import ABC, abstractmethod

from zarn.core.environment import Environment
from zarn.lang.error import ZarnError


class Callable(ABC):
    """Anything invocable with a fixed arity and a list of already-evaluated arguments."""
    name = "anonymous"

    @property
    @abstractmethod
    def arity(self):
        """Exact number of arguments a call must pass."""

    @abstractmethod
    def call(self, interpreter, arguments):
        """Runs the callable, returning a runtime value. arguments has exactly arity elements."""


class ZarnFunction(Callable):
    """User-defined function: a Function declaration paired with the scope it was declared in."""

    def __init__(self, declaration, closure):
        self.declaration = declaration
        self.closure = closure  # captured at declaration time, not at call time
        self.name = declaration.name.lexeme

    @property
    def arity(self):
        return len(self.declaration.params)

    def call(self, interpreter, arguments):
        environment = Environment(self.closure)
        for param, argument in zip(self.declaration.params, arguments):
            environment.define(param.lexeme, argument)

        outcome = interpreter.execute_block(self.declaration.body, environment)
        return None if outcome is None else outcome.value

    def __str__(self):
        return f"<fn {self.name}>"

    def __repr__(self):
        return f"ZarnFunction({self.name!r}, arity={self.arity})"


def type_name(value):
    """Name of value's type as shown in error messages."""
    if value is None:
        return "nothing"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "list"
    if isinstance(value, Callable):
        return "function"
    raise ZarnError(f"unknown runtime value '{value!r}'", internal=True)


def is_number(value):
    # bool is a subclass of int, not float, so booleans never pass
    return isinstance(value, float)


def stringify(value):
    """Converts value to its display string. Integral numbers below 1e21 print without a fraction or exponent."""
    if value is None:
        return "nothing"
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return "[" + ", ".join(stringify(element) for element in value) + "]"
    if isinstance(value, Callable):
        return str(value)
    raise ZarnError(f"unknown runtime value '{value!r}'", internal=True)


def is_truthy(value):
    """nothing and false are falsy, everything else (0 and "" included) is truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (float, str, list, Callable)):
        return True
    raise ZarnError(f"unknown runtime value '{value!r}'", internal=True)


def is_equal(left, right):
    """Value equality for nothing, booleans, numbers and strings; identity for lists and callables. Values of
    different types are never equal.
    """
    if left is None or right is None:
        return left is None and right is None
    if isinstance(left, (list, Callable)) or isinstance(right, (list, Callable)):
        return left is right
    if type_name(left) != type_name(right):
        return False
    return left == right


def to_index(value, length):
    """Truncates number value to an integer index, or returns None unless 0 <= index < length."""
    # truncation maps exactly the numbers in (-1, length) into range; nan and infinities fall outside
    if not -1 < value < length:
        return None
    return int(value)
