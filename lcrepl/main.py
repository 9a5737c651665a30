"""Uses implementation of pure lambda calculus/lcrepl language to interpret .lc files or run in command-line mode. Also
uses error handling context manager. Called from the lcrepl console script and from `python -m lcrepl`.
"""

import argparse

from lcrepl.lang.error import ErrorHandler
from lcrepl.lang.shell import Shell
from lcrepl.lang.session import Session


def build_parser():
    parser = argparse.ArgumentParser(prog="lcrepl", description="Untyped lambda calculus interpreter.")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("--max-steps", type=int, default=None, metavar="N",
                        help="give up on a term after N β/δ steps (default: never)")
    parser.add_argument("--no-prelude", dest="prelude", action="store_false",
                        help="do not load the standard definitions (Church numerals, booleans, Y)")
    parser.add_argument("--ascii", action="store_true", help="print 'L' instead of 'λ'")
    parser.add_argument("--trace", action="store_true", help="print every reduction step")
    return parser


def main(argv=None):
    """Runs lcrepl interpreter."""
    args = build_parser().parse_args(argv)

    with ErrorHandler(verbose=args.trace) as error_handler:
        options = dict(prelude=args.prelude, max_steps=args.max_steps, ascii=args.ascii)

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, **options)

            while sess.results:
                print(sess.pop())

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, **options)).cmdloop()

    return 0
