"""Command line entry point."""

import argparse
import sys
from typing import List, Optional

from rich.console import Console

from ... import __version__
from .commands import config_command, search_command


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="streambyter",
        description="Match a regular expression against files, stopping each read at the first match.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    search = subparsers.add_parser("search", help="Search files for a pattern")
    search.add_argument("pattern", help="Regular expression; (?P<name>...) or (?<name>...) groups")
    search.add_argument("targets", nargs="+", help="Files, directories or glob patterns")
    search.add_argument("-g", "--groups", action="store_true",
                        help="Report named capture groups of the first match")
    search.add_argument("-c", "--chunk-size", type=_positive_int, default=None,
                        help="Bytes per read (default: from config, 512)")
    search.add_argument("-j", "--max-concurrency", type=_positive_int, default=None,
                        help="Maximum files read at once (default: unbounded)")
    search.add_argument("-f", "--format", dest="output_format", choices=["console", "json"],
                        default=None, help="Output format")
    search.add_argument("-m", "--matched-only", action="store_true",
                        help="Only list files that matched")
    search.add_argument("--config", dest="config_path", default=None, help="Config file path")
    search.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    config = subparsers.add_parser("config", help="Show or create configuration")
    config.add_argument("--init", action="store_true", help="Write a default config file")
    config.add_argument("--show", action="store_true", help="Print the effective configuration")
    config.add_argument("--path", default=None, help="Config file path")

    return parser


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    args = build_parser().parse_args(argv)
    console = console or Console()

    if args.command == "search":
        return search_command(
            pattern=args.pattern,
            targets=args.targets,
            groups=args.groups,
            chunk_size=args.chunk_size,
            max_concurrency=args.max_concurrency,
            output_format=args.output_format,
            matched_only=args.matched_only,
            config_path=args.config_path,
            verbose=args.verbose,
            console=console,
        )

    return config_command(
        init=args.init,
        path=args.path,
        show=args.show,
        console=console,
    )


def run():
    sys.exit(main())
