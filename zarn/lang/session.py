"""Session control for the zarn language. Drives the lexer, parser and interpreter to run a .zn file or the
command-line interpreter.
"""

from zarn.core.interpreter import Interpreter
from zarn.core.lexer import UNTERMINATED_STRING, scan
from zarn.core.parser import parse
from zarn.core.tokens import TokenType
from zarn.lang.error import LexError, ZarnError


class Session:
    """Governs a zarn session. One Interpreter, and so one global scope, lives as long as the session."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line, strict_assign=False, stdout=None, stdin=None):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.interpreter = Interpreter(stdout=stdout, stdin=stdin, strict_assign=strict_assign)
        self.to_exec = []   # parsed statements waiting for run
        self.next_line = 1  # line number the next added chunk starts at

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r", encoding="utf-8") as file:
                    source = file.read()
            except OSError:
                raise ZarnError(f"'{path}' could not be opened")
            except UnicodeDecodeError:
                raise ZarnError(f"'{path}' is not valid UTF-8")
            self.add(source)

        elif not cmd_line:
            raise ZarnError("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line, add_to_prev):
        """Preprocesses a line from the command-line. If add_to_prev, line continues an unfinished chunk. Returns
        updated value of line and whether the chunk is still unfinished (unclosed braces or an unclosed string).
        """
        if add_to_prev:
            line = add_to_prev + "\n" + line

        try:
            tokens = scan(line)
        except LexError as error:
            # a string left open continues on the next line, any other error is reported once the chunk is added
            return line, error.msg == UNTERMINATED_STRING

        depth = 0
        for token in tokens:
            if token.type == TokenType.LEFT_BRACE:
                depth += 1
            elif token.type == TokenType.RIGHT_BRACE:
                depth -= 1
        return line, depth > 0

    def add(self, source, line_num=None):
        """Lexes and parses source, queueing its statements for run. line_num is the line source starts at; by
        default it continues after the previously added source. Nothing is queued if source has a syntax error.
        """
        if line_num is None:
            line_num = self.next_line
        self.error_handler.register_source(self.path, source, line_num)
        self.next_line = line_num + source.count("\n") + 1

        statements = parse(scan(source, line_num))
        self.to_exec.extend(statements)
        return statements

    def run(self):
        """Runs queued statements in order. Raises any error that is encountered; statements after the failing one
        are dropped, output already produced stays.
        """
        statements, self.to_exec = self.to_exec, []
        self.interpreter.interpret(statements)

    def display(self):
        """Returns the syntax trees of the queued statements, one after another."""
        return "\n".join(stmt.display() for stmt in self.to_exec)
