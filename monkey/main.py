"""Runs the monkey interpreter on a .mk file, or in command-line mode. Also uses the error handling context manager.
Installed as the `monkey` console script.
"""

import argparse

from monkey.lang.error import ErrorHandler
from monkey.lang.session import Session
from monkey.lang.shell import Shell


def main(argv=None):
    """Runs monkey interpreter. Called from monkey executable script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="monkey")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("--trace", help="print parse routines as they are entered and left", action="store_true")
        args = parser.parse_args(argv)

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, trace=args.trace)
            sess.run()

            for result in sess.results:
                print(result)

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, trace=args.trace)).cmdloop()


if __name__ == "__main__":
    main()
