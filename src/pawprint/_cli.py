"""Pawprint CLI — pawprint compile.

Entry point for the ``pawprint`` command-line interface.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the pawprint CLI."""
    parser = argparse.ArgumentParser(
        prog="pawprint",
        description="Compile a static site and report timings, outcomes and failures.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # pawprint compile
    compile_parser = subparsers.add_parser(
        "compile",
        help="compile pages and assets of this site",
        description=(
            "Compile all pages and all assets of the current site. If an identifier "
            "is given, only the page or asset with the given identifier will be "
            "compiled. By default, only outdated objects are compiled; use --force "
            "to compile them regardless. Use --no-pages or --no-assets to leave "
            "pages or assets out."
        ),
    )
    compile_parser.add_argument(
        "identifiers", nargs="*", metavar="identifier", help="Page or asset to compile",
    )
    compile_parser.add_argument(
        "-f", "--force", action="store_true",
        help="compile pages and assets even when they are not outdated",
    )
    compile_parser.add_argument(
        "-a", "--all", action="store_true", help="alias for --force (DEPRECATED)",
    )
    compile_parser.add_argument(
        "-P", "--no-pages", action="store_true", help="don't compile pages",
    )
    compile_parser.add_argument(
        "-A", "--no-assets", action="store_true", help="don't compile assets",
    )
    compile_parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="print outcome counts and filter profiling after compiling",
    )
    compile_parser.add_argument("--root", default=".", help="Site root directory")
    compile_parser.add_argument(
        "--site", default=None, help="Site factory as module:attr (default: site:load_site)",
    )
    compile_parser.add_argument(
        "--color", action=argparse.BooleanOptionalAction, default=None,
        help="Force colored output on or off",
    )

    return parser


def _get_version() -> str:
    """Get the package version."""
    from pawprint import __version__

    return __version__


def _compile(args: argparse.Namespace) -> int:
    from pawprint._errors import ConfigError
    from pawprint.commands.compile import CompileCommand, CompileOptions
    from pawprint.config_loader import load_config
    from pawprint.console import FileLogger
    from pawprint.site import load_site

    try:
        config = load_config(
            Path(args.root),
            site=args.site,
            color=args.color,
            verbose=True if args.verbose else None,
        )
        site = load_site(config)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    command = CompileCommand(
        site,
        logger=FileLogger.from_config(config),
        bug_tracker=config.bug_tracker,
    )
    options = CompileOptions(
        identifiers=tuple(args.identifiers),
        force=args.force,
        all=args.all,
        no_pages=args.no_pages,
        no_assets=args.no_assets,
        verbose=config.verbose,
    )
    return command.run(options)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "compile":
        sys.exit(_compile(args))


if __name__ == "__main__":
    main()
