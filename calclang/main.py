"""Runs the calc interpreter, either on a single line given with -c or in command-line mode. Called from the calc
console script and from `python -m calclang`.
"""

import argparse
import logging
import sys

from calclang.lang.error import ErrorHandler
from calclang.lang.session import Session
from calclang.lang.shell import Shell


def build_parser():
    parser = argparse.ArgumentParser(prog="calc", description="Interactive calculator-language interpreter.")
    parser.add_argument("-c", "--command", help="line to evaluate (if empty, goes to command-line mode)")
    parser.add_argument("--no-color", action="store_true", help="do not color error messages")
    parser.add_argument("--diagnose", action="store_true", help="underline the offending token of syntax errors")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="logging level (DEBUG traces parsing and evaluation)")
    return parser


def main(argv=None):
    """Runs calc interpreter. Returns the process exit status."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(name)s: %(message)s")

    cmd_line = args.command is None
    error_handler = ErrorHandler(fatal=not cmd_line, color=not args.no_color, diagnose=args.diagnose)

    sess = Session(error_handler)

    if cmd_line:
        try:
            Shell(sess).cmdloop()
        except KeyboardInterrupt:
            print()
        return 0

    line = Session.preprocess_line(args.command)
    with error_handler:
        if line and not Session.is_quit(line):
            print(sess.execute(line))

    return 0


if __name__ == "__main__":
    sys.exit(main())
