#!/usr/bin/env python3
"""
quickpush CLI Interface

This module provides the command-line interface for quickpush, which stages
every change in the working tree, commits it and pushes the current branch.

Usage:
    quickpush [options] [message words ...]

Options:
    -p, --path PATH      Path to the repository (default: current directory)
    -r, --remote NAME    Remote to push to (default: origin)
    --no-color           Disable colored output
    -v, --verbose        Log every git command and show tracebacks
    --version            Show version information

Words that start with "-" must come after "--", e.g. ``quickpush -- -1 typo``.
"""

import argparse
import locale
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from . import __version__, main as pipeline
from .config import Config
from .utils import error_console

logger = logging.getLogger(__name__)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the bare argument parser."""
    return argparse.ArgumentParser(
        prog="quickpush",
        description="Stage, commit and push all changes in one step",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Without a message you are prompted for one; an empty answer "
               "uses 'Update: <current date and time>'.",
    )


def add_message_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "message",
        nargs="*",
        help="Commit message words, joined with spaces",
    )


def add_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-p", "--path",
        type=str,
        default=".",
        help="Path to the Git repository (default: current directory)"
    )


def add_remote_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-r", "--remote",
        type=str,
        default="origin",
        help="Remote to push to (default: origin)"
    )


def add_output_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output"
    )


def add_version_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Show version information"
    )


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = create_argument_parser()
    add_message_argument(parser)
    add_path_argument(parser)
    add_remote_argument(parser)
    add_output_arguments(parser)
    add_version_argument(parser)
    return parser


def create_config_from_args(args: argparse.Namespace) -> Config:
    """Build the run configuration from parsed arguments.

    Raises:
        ValueError: If an argument makes the configuration invalid.
    """
    return Config(remote=args.remote)


def validate_path(path: str) -> Optional[Path]:
    """Validate the repository path."""
    repo_path = Path(path).resolve()
    if not repo_path.exists():
        error_console.print(f"[red]Error:[/red] Path does not exist: {repo_path}")
        return None

    # .git is a file in worktrees and submodules
    if not (repo_path / ".git").exists():
        error_console.print(f"[red]Error:[/red] Not a git repository: {repo_path}")
        return None

    return repo_path


def configure_logging(verbose: bool = False) -> None:
    """Route log records through rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=error_console, rich_tracebacks=True, show_path=verbose)],
        force=True,
    )


def configure_locale() -> None:
    """Use the user's locale for the timestamp in default commit messages."""
    try:
        locale.setlocale(locale.LC_TIME, "")
    except locale.Error:
        logger.debug("Unsupported locale settings, keeping the C locale for timestamps")


def configure_environment(args: argparse.Namespace) -> None:
    """Configure the environment based on command-line arguments."""
    configure_logging(args.verbose)
    configure_locale()

    if args.no_color:
        pipeline.console = Console(color_system=None)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_intermixed_args(argv)

    configure_environment(args)

    try:
        config = create_config_from_args(args)
    except ValueError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        return 1

    repo_path = validate_path(args.path)
    if not repo_path:
        return 1

    original_cwd = os.getcwd()
    os.chdir(repo_path)

    try:
        return pipeline.push_changes(args.message, config)
    except KeyboardInterrupt:
        error_console.print("\nOperation cancelled by user")
        return 130
    except Exception as e:
        logger.error("Unexpected error: %s", e, exc_info=args.verbose)
        return 1
    finally:
        os.chdir(original_cwd)


if __name__ == "__main__":
    sys.exit(main())
