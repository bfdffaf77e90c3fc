"""Command-line driver.

    cmdlisp '(sum 1 2 3)' '(print "Hello")'   one unit per argument
    cmdlisp -f script.lisp                     the whole file as one unit
    cmdlisp < commands.txt                     one unit per input line
"""
from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import Sequence

from cmdlisp import __version__
from cmdlisp.config import load_settings
from cmdlisp.errors import CmdLispError
from cmdlisp.interpreter import Interpreter


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cmdlisp",
        description="Evaluate Lisp-style command expressions.",
    )
    parser.add_argument("expressions", nargs="*", metavar="EXPR",
                        help="expressions to evaluate, one unit each")
    parser.add_argument("-f", "--file", type=Path,
                        help="evaluate the whole file as a single unit")
    parser.add_argument("--basedir", type=Path,
                        help="initial base directory (default: $CMDLISP_BASEDIR or .)")
    parser.add_argument("--debug", action="store_true",
                        help="start with debug printing enabled")
    parser.add_argument("--log-level",
                        help="logging level (default: $CMDLISP_LOG_LEVEL or WARNING)")
    parser.add_argument("--print-result", action="store_true",
                        help="print the result of each evaluated unit")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    settings = load_settings()
    overrides = {}
    if args.basedir is not None:
        overrides["basedir"] = args.basedir
    if args.debug:
        overrides["debug"] = True
    if args.log_level:
        overrides["log_level"] = args.log_level
    settings = dataclasses.replace(settings, **overrides)

    logging.basicConfig(
        level=settings.log_level_value,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )

    if args.file is not None and args.expressions:
        print("Error: use either --file or expressions, not both", file=sys.stderr)
        return 2

    try:
        interp = Interpreter(settings=settings, echo=args.print_result)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: cannot load prelude: {e}", file=sys.stderr)
        return 1
    except CmdLispError as e:
        print(f"Error: prelude failed: {e}", file=sys.stderr)
        return 1

    if args.file is not None:
        return interp.run_file(args.file)
    if args.expressions:
        return interp.run_args(args.expressions)
    return interp.run_lines(sys.stdin)


if __name__ == "__main__":
    sys.exit(main())
