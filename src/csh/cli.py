from __future__ import annotations

import argparse
import io
import logging
import sys
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)

from csh.config import ShellConfig, generate_sample_config, load_config
from csh.errors import ConfigurationError, FatalShellError
from csh.shell import ExecutionContext, run_command, run_repl, run_script


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure logging.

    Log records go to stderr; the default level keeps routine records
    off the terminal the shell is using.

    Args:
        verbose: Enable debug logging
        quiet: Only log errors
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def tolerate_undecodable_input(stream) -> None:
    """Pass bytes that are not valid text through to commands unchanged.

    Undecodable bytes become surrogate escapes, which os.execvp turns back
    into the original bytes of the child's argument vector.
    """
    if isinstance(stream, io.TextIOWrapper):
        stream.reconfigure(errors="surrogateescape")


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="csh",
        description="Minimal interactive command interpreter",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        'script',
        nargs='?',
        type=Path,
        help='Read commands from this file instead of standard input'
    )
    parser.add_argument(
        '--command', '-c',
        metavar='COMMAND',
        help='Execute a single command line and exit'
    )
    parser.add_argument(
        '--config',
        type=Path,
        default=None,
        help='Path to a YAML configuration file (default: built-in settings)'
    )
    parser.add_argument(
        '--generate-config',
        type=Path,
        metavar='PATH',
        help='Generate a sample configuration file and exit'
    )
    parser.add_argument(
        '--prompt',
        default=None,
        help='Prompt printed before each line is read (default: "> ")'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose (debug) logging'
    )
    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Only log errors'
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point.

    Args:
        argv: Command-line arguments (sys.argv[1:] if None)

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose, args.quiet)

    if args.generate_config:
        generate_sample_config(args.generate_config)
        return 0

    try:
        config = load_config(args.config)
    except ConfigurationError as e:
        sys.stderr.write(f"{ShellConfig().prog_name}: {e}\n")
        return 1

    if args.prompt is not None:
        config = config.model_copy(update={"prompt": args.prompt})

    context = ExecutionContext(config=config)

    if args.script is not None and not args.script.is_file():
        context.error(f"{args.script}: No such file")
        return 1

    try:
        if args.command is not None:
            run_command(args.command, context)
        elif args.script is not None:
            run_script(args.script, context)
        else:
            tolerate_undecodable_input(sys.stdin)
            run_repl(context)
    except FatalShellError as e:
        logger.debug("Fatal error", exc_info=True)
        context.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
