#!/usr/bin/env python3
"""
sumtree CLI — hash lots of files fast, in parallel.
Output order always follows discovery order: argument order, depth-first directory order,
or stdin line order.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import logging
from typing import List, NoReturn, Optional

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

from sumtree import __version__
from sumtree.aliases import (
    ALGORITHM_CHOICES, ALGORITHM_HELP_TEXT, COMPATIBLE_HELP_TEXT, DEFAULT_ALGORITHM,
    EPILOG_TEXT, INPUT_HELP_TEXT, SEPARATOR_HELP_TEXT
)
from sumtree.commands import HashCommand
from sumtree.core.errors import SumtreeError
from sumtree.core.models import DEFAULT_BUFFER_FACTOR, HashingParams


def positive_int(value: str) -> int:
    """argparse type: integer >= 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: '{value}'")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {number}")
    return number


def buffer_factor(value: str) -> float:
    """argparse type: float >= 1."""
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: '{value}'")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.verbose: bool = False
        self.quiet: bool = False

    @staticmethod
    def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
        """Parse and validate command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="sumtree",
            description="sumtree — hash lots of files fast, in parallel",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "input",
            nargs="+",
            type=str,
            help=INPUT_HELP_TEXT
        )

        # Concurrency options
        parser.add_argument(
            "--walkers", "-w",
            type=positive_int,
            default=None,
            metavar="N",
            help="Directory-walking threads, if <input> is a directory. Default: CPU count"
        )
        parser.add_argument(
            "--threads", "-t",
            type=positive_int,
            default=None,
            metavar="N",
            help="Hashing threads. Default: CPU count"
        )
        parser.add_argument(
            "--buffer-factor",
            type=buffer_factor,
            default=DEFAULT_BUFFER_FACTOR,
            metavar="F",
            dest="buffer_factor",
            help=f"Paths buffered ahead of hashing, per hashing thread. Default: {DEFAULT_BUFFER_FACTOR:g}"
        )
        parser.add_argument(
            "--unordered",
            action="store_true",
            help="Print results as soon as they complete instead of in discovery order\n"
                 "(faster with mixed file sizes, output order is not reproducible)"
        )
        parser.add_argument(
            "--ignore-walk-errors",
            action="store_true",
            dest="ignore_walk_errors",
            help="Skip unreadable directories with a warning instead of aborting"
        )

        # Digest options
        parser.add_argument(
            "--algorithm", "-a",
            choices=ALGORITHM_CHOICES,
            default=DEFAULT_ALGORITHM,
            type=str,
            metavar="ALGO",
            help=ALGORITHM_HELP_TEXT
        )
        parser.add_argument(
            "--digest-length", "-d",
            type=positive_int,
            default=None,
            metavar="N",
            dest="digest_length",
            help="Maximum length of output hash digests"
        )

        # Output options
        parser.add_argument(
            "--separator", "-s",
            type=str,
            default=None,
            metavar="SEP",
            help=SEPARATOR_HELP_TEXT
        )
        parser.add_argument(
            "--compatible", "-c",
            action="store_true",
            help=COMPATIBLE_HELP_TEXT
        )
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Do not show progress information"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show debug logging on stderr"
        )
        parser.add_argument(
            "--version",
            action="version",
            version=f"%(prog)s {__version__}"
        )

        return parser.parse_args(args)

    def create_params(self, args: argparse.Namespace) -> HashingParams:
        """Create HashingParams from CLI arguments."""
        # Keep CPU-count defaults unless given explicitly
        overrides = {}
        if args.threads is not None:
            overrides["threads"] = args.threads
        if args.walkers is not None:
            overrides["walkers"] = args.walkers

        try:
            return HashingParams(
                digest_length=args.digest_length,
                quiet=args.quiet,
                separator=args.separator,
                compatible=args.compatible,
                algorithm=args.algorithm,
                buffer_factor=args.buffer_factor,
                ordered=not args.unordered,
                strict_walk=not args.ignore_walk_errors,
                **overrides,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}", code=2)

    def configure_logging(self) -> None:
        if self.verbose:
            logging.getLogger().setLevel(logging.DEBUG)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, args: Optional[List[str]] = None) -> None:
        """Main entry point."""
        parsed = self.parse_args(args)
        self.verbose = parsed.verbose
        self.quiet = parsed.quiet
        self.configure_logging()

        params = self.create_params(parsed)
        command = HashCommand(params, show_progress=not self.quiet)

        try:
            command.execute(parsed.input)
        except BrokenPipeError:
            # handled by main(), not a run error
            raise
        except (SumtreeError, OSError) as e:
            self.error_exit(str(e))


def main(args: Optional[List[str]] = None) -> None:
    """Application entry point."""
    # Undecodable path bytes round-trip to the output unchanged
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8", errors="surrogateescape")

    app = CLIApplication()
    try:
        app.run(args)
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)", file=sys.stderr)
        sys.exit(130)
    except BrokenPipeError:
        # Downstream closed early (e.g. piped into head); silence the flush at exit
        try:
            devnull = os.open(os.devnull, os.O_WRONLY)
            os.dup2(devnull, sys.stdout.fileno())
        except (OSError, ValueError):
            # stdout is not backed by a file descriptor
            pass
        sys.exit(1)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
