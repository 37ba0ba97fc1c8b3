"""
Plus++ Interpreter

This is the main entry point for the Plus++ interpreter.

Workflow:
1. The source file name is taken from the command line, or asked for.
2. The Lexer tokenizes the source, echoing each token to stderr.
3. The Validator checks the tokens against the language grammar.
4. The Interpreter walks the tokens again, executing each statement.

Any error stops the run with a single ``[ERROR] (line N): ...`` line on
stderr and a non-zero exit status.
"""
import argparse
import logging
import os
import sys

from plusplus.config import Limits
from plusplus.exceptions import PlusPlusError
from plusplus.runner import run_source
from plusplus.source import read_source, source_filename


def build_arg_parser() -> argparse.ArgumentParser:
    """
    Build the command-line parser.
    """
    parser = argparse.ArgumentParser(
        prog="ppp",
        description="Run a Plus++ (.ppp) program.",
        allow_abbrev=False,
    )
    parser.add_argument(
        "source",
        nargs="?",
        default=None,
        help="Source file name; '.ppp' is appended if missing. Prompted for when omitted.",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Do not echo tokens and status messages to stderr",
    )
    parser.add_argument(
        "--tokens",
        action="store_true",
        help="Print the token table after lexing",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument("--max-tokens", type=int, default=None, help="Token limit (default: 1024)")
    parser.add_argument(
        "--max-identifier-length", type=int, default=None, help="Identifier length limit (default: 20)"
    )
    parser.add_argument("--max-variables", type=int, default=None, help="Variable limit (default: 100)")
    parser.add_argument(
        "--max-int-digits", type=int, default=None, help="Integer constant digit limit (default: 100)"
    )
    parser.add_argument(
        "--max-string-length", type=int, default=None, help="String constant length limit (default: 127)"
    )
    return parser


def print_diagnostic(line: str) -> None:
    """
    Diagnostic sink: write a line to stderr.
    """
    print(line, file=sys.stderr, flush=True)


def main(argv: list[str]) -> int:
    """
    Entry point for the CLI.

    Returns:
        int: 0 after a complete run, 1 if any phase failed.
    """
    args = build_arg_parser().parse_args(argv)
    debug = bool(os.environ.get('PPPDEBUG'))

    if args.verbose or debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s:%(name)s:%(message)s",
            stream=sys.stderr,
        )

    try:
        limits = Limits.from_env().override(
            max_tokens=args.max_tokens,
            max_identifier_length=args.max_identifier_length,
            max_variables=args.max_variables,
            max_int_digits=args.max_int_digits,
            max_string_length=args.max_string_length,
        )
        path = source_filename(args.source)
        code = read_source(path)
        run_source(
            code,
            out=sys.stdout,
            sink=None if args.quiet else print_diagnostic,
            limits=limits,
            show_tokens=args.tokens or debug,
        )
    except PlusPlusError as e:
        sys.stdout.flush()
        print(e.diagnostic(), file=sys.stderr)
        return 1
    return 0


def cli() -> None:
    """
    Console script entry point.
    """
    raise SystemExit(main(sys.argv[1:]))


if __name__ == "__main__":
    cli()
