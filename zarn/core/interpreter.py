"""Tree-walking interpreter for the zarn language.

Expressions are evaluated to runtime values (see values.py) and statements are executed for effect. Execution is
eager, single pass and depth first. `giveback` is not an exception: executing a statement yields an outcome, either
None (the statement completed) or a Returned carrying the value, and every statement that contains other statements
stops and hands a Returned outward until the function call that owns it picks it up.
"""

import sys

from zarn.core import natives, nodes
from zarn.core.environment import Environment
from zarn.core.tokens import TokenType
from zarn.core.values import (
    Callable, ZarnFunction, is_equal, is_number, is_truthy, stringify, to_index, type_name
)
from zarn.lang.error import ZarnRuntimeError


class Returned:
    """Outcome of a statement that executed `giveback`."""
    __slots__ = ("value", "keyword")

    def __init__(self, value, keyword=None):
        self.value = value
        self.keyword = keyword  # the giveback token, for errors

    def __repr__(self):
        return f"Returned({self.value!r})"


ARITHMETIC = {
    TokenType.MINUS: lambda left, right: left - right,
    TokenType.MULTIPLY: lambda left, right: left * right,
    TokenType.DIVIDE: lambda left, right: left / right,
    TokenType.GREATER: lambda left, right: left > right,
    TokenType.GREATER_EQUAL: lambda left, right: left >= right,
    TokenType.LESS: lambda left, right: left < right,
    TokenType.LESS_EQUAL: lambda left, right: left <= right,
}


class Interpreter:
    """Runs statements against one global scope that lives as long as the interpreter. stdout is the print sink and
    stdin the input source used by the native functions.
    """

    def __init__(self, stdout=None, stdin=None, strict_assign=False):
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stdin = stdin if stdin is not None else sys.stdin

        self.globals = Environment(strict_assign=strict_assign)
        self.environment = self.globals  # innermost scope of the statement being executed

        natives.register(self.globals)

    def interpret(self, statements):
        """Executes statements top to bottom. The first ZarnRuntimeError aborts the rest."""
        for statement in statements:
            outcome = self.execute(statement)
            if outcome is not None:
                raise ZarnRuntimeError("giveback outside function", outcome.keyword)

    # -----------------------------------------------------------------------------------------------------------------
    # statements

    def execute(self, stmt):
        """Executes stmt, returning None if it completed or a Returned if it executed `giveback`."""
        if isinstance(stmt, nodes.Expression):
            self.evaluate(stmt.expression)

        elif isinstance(stmt, nodes.Var):
            value = None if stmt.initializer is None else self.evaluate(stmt.initializer)
            self.environment.define(stmt.name.lexeme, value)

        elif isinstance(stmt, nodes.Block):
            return self.execute_block(stmt.statements, Environment(self.environment))

        elif isinstance(stmt, nodes.If):
            if is_truthy(self.evaluate(stmt.condition)):
                return self.execute(stmt.then_branch)
            elif stmt.else_branch is not None:
                return self.execute(stmt.else_branch)

        elif isinstance(stmt, nodes.While):
            while is_truthy(self.evaluate(stmt.condition)):
                outcome = self.execute(stmt.body)
                if outcome is not None:
                    return outcome

        elif isinstance(stmt, nodes.Function):
            self.environment.define(stmt.name.lexeme, ZarnFunction(stmt, self.environment))

        elif isinstance(stmt, nodes.Return):
            return Returned(None if stmt.value is None else self.evaluate(stmt.value), stmt.keyword)

        else:
            raise TypeError(f"unknown statement {type(stmt).__name__}")

        return None

    def execute_block(self, statements, environment):
        """Executes statements in environment, restoring the previous scope afterwards (even on error)."""
        previous = self.environment
        self.environment = environment
        try:
            for statement in statements:
                outcome = self.execute(statement)
                if outcome is not None:
                    return outcome
        finally:
            self.environment = previous
        return None

    # -----------------------------------------------------------------------------------------------------------------
    # expressions

    def evaluate(self, expr):
        """Reduces expr to a runtime value."""
        if isinstance(expr, nodes.Literal):
            return expr.value

        if isinstance(expr, nodes.Variable):
            return self.environment.get(expr.name)

        if isinstance(expr, nodes.Assign):
            value = self.evaluate(expr.value)
            self.environment.assign(expr.name, value)
            return value

        if isinstance(expr, nodes.Grouping):
            return self.evaluate(expr.expression)

        if isinstance(expr, nodes.Logical):
            left = self.evaluate(expr.left)
            if expr.operator.type == TokenType.OR:
                if is_truthy(left):
                    return left
            elif not is_truthy(left):
                return left
            return self.evaluate(expr.right)

        if isinstance(expr, nodes.Unary):
            return self.evaluate_unary(expr)

        if isinstance(expr, nodes.Binary):
            return self.evaluate_binary(expr)

        if isinstance(expr, nodes.Call):
            return self.evaluate_call(expr)

        if isinstance(expr, nodes.ListLiteral):
            return [self.evaluate(element) for element in expr.elements]

        if isinstance(expr, nodes.Index):
            return self.evaluate_index(expr)

        raise TypeError(f"unknown expression {type(expr).__name__}")

    def evaluate_unary(self, expr):
        right = self.evaluate(expr.right)

        if expr.operator.type == TokenType.NOT:
            return not is_truthy(right)

        # only "-" is left
        if not is_number(right):
            raise ZarnRuntimeError(f"operand of '-' must be a number, got {type_name(right)}", expr.operator)
        return -right

    def evaluate_binary(self, expr):
        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)
        operator = expr.operator

        if operator.type == TokenType.EQUAL:
            return is_equal(left, right)
        if operator.type == TokenType.NOT_EQUAL:
            return not is_equal(left, right)

        if operator.type == TokenType.PLUS:
            if is_number(left) and is_number(right):
                return left + right
            if isinstance(left, str) or isinstance(right, str):
                return stringify(left) + stringify(right)
            msg = f"operands of '+' must be two numbers or at least one string, got {type_name(left)} and " \
                  f"{type_name(right)}"
            raise ZarnRuntimeError(msg, operator)

        if not (is_number(left) and is_number(right)):
            msg = f"operands of '{operator.lexeme}' must be numbers, got {type_name(left)} and {type_name(right)}"
            raise ZarnRuntimeError(msg, operator)

        if operator.type == TokenType.DIVIDE and right == 0:
            raise ZarnRuntimeError("division by zero", operator)

        return ARITHMETIC[operator.type](left, right)

    def evaluate_call(self, expr):
        callee = self.evaluate(expr.callee)
        arguments = [self.evaluate(argument) for argument in expr.arguments]

        if not isinstance(callee, Callable):
            raise ZarnRuntimeError(f"can only call functions, got {type_name(callee)}", expr.paren)

        if len(arguments) != callee.arity:
            plural = "" if callee.arity == 1 else "s"
            msg = f"{callee.name}() expected {callee.arity} argument{plural} but got {len(arguments)}"
            raise ZarnRuntimeError(msg, expr.paren)

        try:
            return callee.call(self, arguments)
        except ZarnRuntimeError as error:
            if error.token is None and error.line is None:
                error.token = expr.paren  # native functions raise without a position
            raise

    def evaluate_index(self, expr):
        collection = self.evaluate(expr.collection)
        index = self.evaluate(expr.index)

        if not isinstance(collection, list):
            raise ZarnRuntimeError(f"only lists can be indexed, got {type_name(collection)}", expr.bracket)
        if not is_number(index):
            raise ZarnRuntimeError(f"list index must be a number, got {type_name(index)}", expr.bracket)

        position = to_index(index, len(collection))
        if position is None:
            msg = f"index out of bounds: {stringify(index)} (length {len(collection)})"
            raise ZarnRuntimeError(msg, expr.bracket)
        return collection[position]
