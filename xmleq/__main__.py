"""
Structural equivalence of XML document trees.

Compares two XML files, and prints the location of the first difference.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import argparse
import logging
import os.path
import sys
from io import StringIO
from pathlib import Path
from typing import Iterable, Optional, Sequence

from . import __version__
from .clio import add_arguments, get_options
from .compare import deep_equals
from .environment import ArgumentError, ComparisonEnvironment, ParseError
from .formatting import describe_mismatch
from .options import ComparisonSettings
from .strings import CURRENT_CULTURE, get_string_comparer
from .xml import parse_file

EXIT_EQUIVALENT = 0
EXIT_DIFFERENT = 1
EXIT_ERROR = 2


class Arguments(argparse.Namespace):
    path1: Path
    path2: Path
    loglevel: str


class PositionalOnlyHelpFormatter(argparse.HelpFormatter):
    def _format_usage(
        self,
        usage: Optional[str],
        actions: Iterable[argparse.Action],
        groups: Iterable[argparse._MutuallyExclusiveGroup],  # pyright: ignore[reportPrivateUsage]
        prefix: Optional[str],
    ) -> str:
        # filter only positional arguments
        positional_actions = [a for a in actions if not a.option_strings]

        # format usage string with only positional arguments
        usage_str = super()._format_usage(usage, positional_actions, groups, prefix).rstrip()

        # insert [OPTIONS] as a placeholder for all options (detailed below)
        usage_str += " [OPTIONS]\n"

        return usage_str


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(formatter_class=PositionalOnlyHelpFormatter)
    parser.prog = os.path.basename(os.path.dirname(__file__))
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument("path1", type=Path, help="Path to the first (expected) XML file.")
    parser.add_argument("path2", type=Path, help="Path to the second (actual) XML file.")
    parser.add_argument(
        "-l",
        "--loglevel",
        choices=[
            logging.getLevelName(level).lower()
            for level in (
                logging.DEBUG,
                logging.INFO,
                logging.WARN,
                logging.ERROR,
                logging.CRITICAL,
            )
        ],
        default=logging.getLevelName(logging.WARN).lower(),
        help="Use this option to set the log verbosity.",
    )
    add_arguments(parser, ComparisonSettings)
    return parser


def get_help() -> str:
    parser = get_parser()
    with StringIO() as buf:
        parser.print_help(file=buf)
        return buf.getvalue()


def run(argv: Optional[Sequence[str]] = None) -> int:
    """
    Compares two XML files as instructed by command-line arguments.

    :param argv: Command-line arguments, excluding the program name.
    :returns: Process exit code.
    """

    parser = get_parser()
    args = Arguments()
    parser.parse_args(argv, namespace=args)

    logging.basicConfig(
        level=getattr(logging, args.loglevel.upper(), logging.WARN),
        format="%(asctime)s - %(levelname)s - %(funcName)s [%(lineno)d] - %(message)s",
    )

    settings = get_options(args, ComparisonSettings)
    try:
        environment = ComparisonEnvironment(preset=settings.preset, string_comparer=settings.string_comparer)
        settings.preset = environment.preset  # type: ignore[assignment]
        options = settings.to_options()
        comparer = get_string_comparer(environment.string_comparer) if environment.string_comparer else CURRENT_CULTURE
    except ArgumentError as e:
        parser.error(str(e))

    logging.debug("Comparison options: %r", options)

    try:
        document1 = parse_file(args.path1)
        document2 = parse_file(args.path2)
    except (OSError, ParseError) as e:
        logging.error(e)
        return EXIT_ERROR

    mismatch = deep_equals(document1, document2, options, comparer)
    if mismatch is None:
        logging.info("Documents are equivalent: %s and %s", args.path1, args.path2)
        return EXIT_EQUIVALENT

    print(describe_mismatch(mismatch))
    return EXIT_DIFFERENT


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
