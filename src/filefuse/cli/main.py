"""Command-line interface for fuse.

This module provides the ``fuse`` command, which concatenates the files selected
under one or more paths into a single text suitable for LLM prompting. It handles
argument parsing, reading paths from stdin, output redirection and signal
management for graceful interruption handling.

Signal Handling Notes:
    - SIGPIPE: Handled when the output pipe is closed (e.g., when piping to `head`)
      on Unix-like systems
    - SIGINT: Handled for clean exit on Ctrl+C

Exit Codes:
    0: Successful completion (also when run without arguments)
    1: Runtime error, missing path or conflicting options
    2: Command-line syntax error
    126: Permission denied while reading a directory or ignore file
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE) on Unix-like systems

Example:
    # Concatenate all Python files below src/ with a table of contents
    $ fuse src/ -e py --toc

    # Paths from another command, NUL-separated
    $ git ls-files -z | fuse -0 --cxml
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence, TextIO

from filefuse.cli.argparser import (
    PERMISSION_ACTIONS,
    create_parser,
    resolve_output_format,
    resolve_toc_mode,
    short_help,
    validate_args,
)
from filefuse.cli.safe_writer import SafeWriter
from filefuse.cli.signal_handler import setup_signal_handling, signal_handler
from filefuse.exceptions import TraversalError
from filefuse.fuse import FileFuser
from filefuse.selection_policy import SelectionConfig

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    """Send log records to stderr; DEBUG when verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def read_paths_from_stdin(stream: TextIO, null_separated: bool = False) -> List[str]:
    """Read paths from a stream, split on whitespace or on NUL characters.

    Returns an empty list when the stream is a terminal.

    Example:
        >>> import io
        >>> read_paths_from_stdin(io.StringIO("a.py  b.py\\nsrc/"))
        ['a.py', 'b.py', 'src/']
        >>> read_paths_from_stdin(io.StringIO("my file.py\\0other.py\\0"), null_separated=True)
        ['my file.py', 'other.py']
    """
    if stream.isatty():
        return []
    data = stream.read()
    if null_separated:
        return [path for path in data.split("\0") if path]
    return data.split()


def build_selection_config(args: argparse.Namespace) -> SelectionConfig:
    return SelectionConfig(
        extensions=tuple(args.extensions),
        include_hidden=args.include_hidden,
        respect_gitignore=not args.ignore_gitignore,
        ignore_patterns=tuple(args.ignore_patterns),
        ignore_files_only=args.ignore_files_only,
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point for the fuse command-line interface.

    Args:
        argv: Arguments without the program name. Defaults to ``sys.argv[1:]``.

    Exit codes:
        0: Successful completion
        1: Runtime error during execution
        2: Command-line syntax error
        126: Permission denied
        130: Interrupted by SIGINT (Ctrl+C)
        141: Broken pipe (SIGPIPE) on Unix-like systems
    """
    if argv is None:
        argv = sys.argv[1:]
    if not argv:
        print(short_help())
        return

    setup_signal_handling()

    try:
        parser = create_parser()
        # argparse exits with 2 on usage errors and 0 for --help/--version
        args = parser.parse_args(argv)
        configure_logging(args.verbose)
        validate_args(args)

        paths = list(args.paths)
        if not paths:
            paths = [Path(path) for path in read_paths_from_stdin(sys.stdin, args.null)]
        if not paths:
            print(short_help())
            sys.exit(1)

        for path in paths:
            if not path.exists():
                raise ValueError(f"Path does not exist: {path}")

        fuser = FileFuser(
            paths,
            selection=build_selection_config(args),
            toc_mode=resolve_toc_mode(args),
            output_format=resolve_output_format(args),
            line_numbers=args.line_numbers,
            error_action=PERMISSION_ACTIONS[args.permission_action],
        )
        # Walk before the output file exists so it never selects itself.
        selection = fuser.select()
        logger.debug("Selected %d file(s) from %d path(s)", selection.file_count, len(paths))

        output_file = args.output if args.output else sys.stdout.fileno()
        with SafeWriter(output_file) as safe_writer:
            try:
                for index, part in enumerate(fuser.stream_output()):
                    if index:
                        safe_writer.write("\n")
                    safe_writer.write(part)
            except BrokenPipeError:
                pass  # SafeWriter closes in the context manager

    except TraversalError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(126 if e.is_permission_error else 1)
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)

    exit_code = signal_handler.exit_code()
    if exit_code is not None:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
