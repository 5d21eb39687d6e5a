"""Runs .zn files, or the command-line interpreter when no file is given. Also uses the error handling context
manager. Called from the zarn executable script.
"""

import argparse
import sys

from zarn.lang.error import ErrorHandler
from zarn.lang.session import Session
from zarn.lang.shell import Shell

VERSION = "1.0.0"


def get_parser():
    """Returns the argument parser of the zarn command."""
    parser = argparse.ArgumentParser(prog="zarn", description="ZARN programming language interpreter")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("--ast", action="store_true", help="print the syntax tree of file instead of running it")
    parser.add_argument("--strict-assign", action="store_true",
                        help="assigning to a name no scope defines is an error instead of creating it")
    parser.add_argument("--recursion-limit", type=int, default=10000,
                        help="host recursion limit, which bounds how deeply zarn functions can recurse")
    parser.add_argument("--version", action="version", version=f"ZARN Programming Language v{VERSION}")
    return parser


def main(argv=None):
    """Runs zarn interpreter. Called from zarn executable script."""
    with ErrorHandler() as error_handler:
        args = get_parser().parse_args(argv)
        sys.setrecursionlimit(max(args.recursion_limit, sys.getrecursionlimit()))

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, strict_assign=args.strict_assign)
            if args.ast:
                print(sess.display())
            else:
                sess.run()

        else:
            sess = Session(error_handler, Session.SH_FILE, cmd_line=True, strict_assign=args.strict_assign)
            Shell(sess).cmdloop()


if __name__ == "__main__":
    main()
