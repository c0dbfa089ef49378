"""Command-line argument parsing for fuse.

This module defines the command-line interface for fuse, handling argument
parsing and the validation argparse cannot express on its own.
"""

import argparse
from pathlib import Path
from typing import Optional

from filefuse import __version__
from filefuse.types import TocMode

DESCRIPTION = "Turn many files -> single file, useful for LLM prompting."

USAGE = """\
Usage:
  fuse [path/to/file_or_directory] [options]
  fuse [file1] [file2] [folder1] [folder2] [options]"""

EXAMPLES = """\
Here's a few samples to get started:
  fuse src/                                      # All files in src/
  fuse src/ test/ -e ts                          # Only .ts files in src/ and test/
  fuse src/ --toc-files --ignore "__tests__"     # Files in src/ except __tests__, with toc tree
  fuse . --ignore "*.log" --ignore "test_*"      # Skip logs and files that start with "test_"
  fuse . -o output.txt                           # Save to file instead of printing or use >"""

PATTERN_USAGE = """\
Pattern Usage:
  --ignore "test_*"        -> Matches: test_utils.py, test_data.json
  --ignore "*.log"         -> Matches: debug.log, error.log
  --ignore "*foo*"         -> Matches: foo.txt, config_foo_bar.xml
  --ignore "build/"        -> Matches: any directory named "build" and everything in it
  --ignore "src/**/*.rs"   -> Matches: .rs files at any depth below src/
  --ignore "__init__.py"   -> Matches: any file/folder named exactly "__init__.py\""""

# CLI spelling of each error action
PERMISSION_ACTIONS = {
    "fail": "raise",
    "warn": "warn",
    "ignore": "ignore",
}


def short_help() -> str:
    """Text printed when fuse is run without any arguments."""
    return f"{DESCRIPTION}\n\n{USAGE}\n\n{EXAMPLES}\n\nFor a full list of options, run `fuse --help`."


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        An ArgumentParser instance configured with fuse's options.
    """
    parser = argparse.ArgumentParser(
        prog="fuse",
        description=DESCRIPTION,
        epilog=f"{EXAMPLES}\n\n{PATTERN_USAGE}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        metavar="PATHS",
        help="Files or directories to include. When omitted, paths are read from stdin.",
    )

    input_group = parser.add_argument_group("input control")
    input_group.add_argument(
        "-e",
        "--extension",
        dest="extensions",
        action="append",
        default=[],
        metavar="EXT",
        help="Only include files with this extension (e.g. -e py -e js). Can be specified multiple times.",
    )
    input_group.add_argument(
        "--include-hidden",
        action="store_true",
        help="Include hidden files and directories (names starting with a dot).",
    )
    input_group.add_argument(
        "--ignore-files-only",
        action="store_true",
        help="Make --ignore patterns skip files only, never directories.",
    )
    input_group.add_argument(
        "--ignore-gitignore",
        action="store_true",
        help="Don't use .gitignore, .ignore, repository exclude or global ignore rules.",
    )
    input_group.add_argument(
        "--ignore",
        dest="ignore_patterns",
        action="append",
        default=[],
        metavar="PATTERN",
        help=(
            "Skip files and directories matching this glob (*.log, test_*, build/, src/**/*.rs). "
            "Can be specified multiple times."
        ),
    )

    output_group = parser.add_argument_group("output format")
    format_group = output_group.add_mutually_exclusive_group()
    format_group.add_argument(
        "-c",
        "--cxml",
        action="store_true",
        help="Output in Claude XML format.",
    )
    format_group.add_argument(
        "-m",
        "--markdown",
        action="store_true",
        help="Output as Markdown code blocks.",
    )
    output_group.add_argument(
        "-n",
        "--line-numbers",
        action="store_true",
        help="Add line numbers to file contents.",
    )
    output_group.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="Output file path. If not specified, output is written to stdout.",
    )
    output_group.add_argument(
        "--toc",
        action="store_true",
        help="Include a table of contents tree (files and directories below 100 lines, otherwise directories only).",
    )
    output_group.add_argument(
        "--toc-dirs-only",
        action="store_true",
        help="Table of contents shows directories only.",
    )
    output_group.add_argument(
        "--toc-files",
        action="store_true",
        help="Table of contents shows files and directories.",
    )

    other_group = parser.add_argument_group("other")
    other_group.add_argument(
        "-0",
        "--null",
        action="store_true",
        help="Read NUL-separated paths from stdin.",
    )
    other_group.add_argument(
        "-P",
        "--permission-action",
        choices=list(PERMISSION_ACTIONS),
        default="fail",
        help="How to handle unreadable directories and ignore files (default: fail).",
    )
    other_group.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every skipped entry to stderr.",
    )
    other_group.add_argument(
        "-V", "--version", action="version", version=f"fuse {__version__}", help="Show the version and exit."
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.toc_dirs_only and args.toc_files:
        raise ValueError("Cannot specify both --toc-dirs-only and --toc-files")


def resolve_toc_mode(args: argparse.Namespace) -> Optional[TocMode]:
    """Table of contents mode requested on the command line, or None.

    Example:
        >>> resolve_toc_mode(argparse.Namespace(toc=True, toc_dirs_only=False, toc_files=False))
        <TocMode.AUTO: 'auto'>
    """
    if args.toc_files:
        return TocMode.FILES_AND_DIRS
    if args.toc_dirs_only:
        return TocMode.DIRS_ONLY
    if args.toc:
        return TocMode.AUTO
    return None


def resolve_output_format(args: argparse.Namespace) -> str:
    if args.cxml:
        return "xml"
    if args.markdown:
        return "markdown"
    return "default"
