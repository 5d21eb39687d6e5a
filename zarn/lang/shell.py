"""Handles interactive/command-line mode for the zarn interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """zarn interpreter shell."""
    intro = "ZARN Programming Language Interpreter :: Python backend\nType 'exit' to quit, 'help' for help."
    prompt = "zarn> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "zarn> "   # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0
        self._chunk_start = 1

    def default(self, line):
        """Executes arbitrary zarn code. Lines are buffered while braces are left open."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            if not self._tmp_line:
                self._chunk_start = self.line_num  # first line of the chunk being typed
            line, add_to_prev = self.sess.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            self.sess.add(line, self._chunk_start)
            self.sess.run()

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro and some examples."""
        if arg:
            return self.default(f"help {arg}")

        print("REPL commands:\n"
              "  exit    - exit the REPL\n"
              "  help    - show this help\n\n"
              "ZARN language examples:\n"
              "  say(\"Hello World\");\n"
              "  x = 10; y = 20; say(x + y);\n"
              "  fun add(a, b) { giveback a + b; }\n"
              "  numbers = [1, 2, 3]; say(len(numbers));", file=self.stdout)

    def emptyline(self):
        """Do not repeat previous command on empty line. An empty line inside an open block is kept."""
        if self._tmp_line:
            self.default("")
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print(file=self.stdout)
        return True

    def do_exit(self, arg):
        """Exits interpreter. Anything after 'exit' is treated as code (e.g. 'exit = 1')."""
        if arg:
            if not arg.lstrip().startswith(("=", "(", "[")):
                self.sess.error_handler.warn(f"unrecognized argument '{arg}' to exit, treating the line as code")
            return self.default(f"exit {arg}")
        return True
