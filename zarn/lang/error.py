"""Error handling for the zarn language. Only ZarnErrors should be encountered during running: if another type of
error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Two fatal channels exist. Lexing/parsing errors abort the current program before anything runs, runtime errors abort
the rest of the program. Neither is catchable from inside the language.
"""

import sys

from termcolor import colored


class ZarnError(Exception):
    """Templates a zarn error message. token is the offending token (if any) and is used for positioning."""
    label = "error"

    def __init__(self, msg, token=None, line=None, column=None, internal=False):
        super().__init__(msg)
        self.msg = msg
        self.token = token
        self.internal = internal

        self._line = line
        self._column = column

    @property
    def line(self):
        if self._line is None and self.token is not None:
            return self.token.line
        return self._line

    @property
    def column(self):
        if self._column is None and self.token is not None:
            return self.token.column
        return self._column

    def __str__(self):
        if self.line is None:
            return self.msg
        if self.column is None:
            return f"[line {self.line}] {self.msg}"
        return f"[line {self.line}, column {self.column}] {self.msg}"


class LexError(ZarnError):
    """Raised by the lexer on an unexpected character or an unterminated string."""
    label = "syntax error"


class ParseError(ZarnError):
    """Raised by the parser. token is the token the parser was looking at when it gave up."""
    label = "syntax error"


class ZarnRuntimeError(ZarnError):
    """Raised while a program runs. Native functions raise it without a token; the interpreter fills in the call
    site before it propagates.
    """
    label = "runtime error"


class ErrorHandler:
    """Context manager that will silently suppress Python errors and report zarn errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True, stream=None):
        self.fatal = fatal
        self.stream = stream  # None means sys.stdout at print time
        self.sources = {}     # dict of path: {line_num: line}
        self.path = None      # file currently being run

    def register_file(self, path):
        """Registers path as the file currently being run."""
        self.sources.setdefault(path, {})
        self.path = path

    def register_source(self, path, source, first_line=1):
        """Registers the lines of source under path, numbered from first_line. Used to display offending lines."""
        lines = self.sources.setdefault(path, {})
        for offset, line in enumerate(source.split("\n")):
            lines[first_line + offset] = line.rstrip("\r")

    def _print(self, msg):
        print(msg, file=self.stream if self.stream is not None else sys.stdout)

    def diagnose(self, error, warning=False):
        """Returns the offending source line with a caret under the offending column, or None if unknown."""
        line = self.sources.get(self.path, {}).get(error.line)
        if line is None or error.column is None:
            return None

        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR
        width = len(error.token.lexeme) if error.token is not None and error.token.lexeme else 1
        width = max(1, min(width, len(line) - error.column + 1))

        diagnosis = "    " + line + "\n"
        diagnosis += "    " + " " * (error.column - 1)
        diagnosis += colored("^" + "~" * (width - 1), color, attrs=["bold"])
        return diagnosis

    def warn(self, msg, token=None):
        """Generates and prints a non-fatal warning message."""
        warning = ZarnError(msg, token)

        error_msg = ""
        if self.path is not None and warning.line is not None:
            error_msg += colored(f"{self.path}:{warning.line}:{warning.column}: ", attrs=["bold"])
        error_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + warning.msg
        self._print(error_msg)

        diagnosis = self.diagnose(warning, warning=True)
        if diagnosis:
            self._print(diagnosis)

    def throw(self, error):
        """Reports error, which must be a ZarnError. Exits if this handler is fatal."""
        error_msg = ""
        if self.path is not None and error.line is not None:
            error_msg += f"File '{self.path}', line {error.line}"
            if error.column is not None:
                error_msg += f", column {error.column}"
            error_msg += ":\n"

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored(f"{error.label}: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        self._print(error_msg)

        diagnosis = None if error.internal else self.diagnose(error)
        if diagnosis:
            self._print(diagnosis)

        if self.fatal:
            sys.exit(1)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(ZarnError("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(ZarnRuntimeError("maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, ZarnError):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(ZarnError(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
