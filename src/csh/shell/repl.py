"""REPL (Read-Eval-Print Loop) for the interactive shell.

Each cycle prints the prompt, reads a line, tokenizes it and dispatches
it, and only then reads the next line. The loop ends on the exit builtin
or at end of input.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

from csh.shell.interpreter import Dispatcher, ExecutionContext
from csh.shell.reader import LineReader
from csh.shell.types import LoopStatus

logger = logging.getLogger(__name__)


class REPL:
    """Read-Eval-Print Loop for the interactive shell."""

    def __init__(
        self,
        context: Optional[ExecutionContext] = None,
        stdin: Optional[TextIO] = None,
        prompt: Optional[str] = None,
        show_prompt: bool = True,
    ):
        """Initialize REPL.

        Args:
            context: Execution context (creates new if None)
            stdin: Input stream (sys.stdin if None)
            prompt: Prompt string (from the configuration if None)
            show_prompt: Whether to print the prompt before each read
        """
        self.context = context if context is not None else ExecutionContext()
        self.stdin = stdin if stdin is not None else sys.stdin
        self.prompt = self.context.config.prompt if prompt is None else prompt
        self.show_prompt = show_prompt
        self.dispatcher = Dispatcher(self.context)
        self.reader = LineReader(self.stdin, self.context.config.line_buffer_size)
        self.running = False

    def run(self) -> int:
        """Run the loop until exit or end of input.

        Returns:
            Exit status (always 0; fatal errors are raised)

        Raises:
            FatalShellError: On input or allocation failure
        """
        self.running = True
        while self.running:
            try:
                self._print_prompt()
                line = self.reader.read_line()
                if line is None:
                    self.running = False
                elif self.dispatcher.execute(line) is LoopStatus.STOP:
                    self.running = False
            except KeyboardInterrupt:
                # Ctrl+C at the prompt discards the current line
                self.context.stdout.write("\n")
                self.context.stdout.flush()
        logger.debug("Loop terminated")
        return 0

    def _print_prompt(self) -> None:
        if not self.show_prompt:
            return
        self.context.stdout.write(self.prompt)
        self.context.stdout.flush()


def run_repl(context: Optional[ExecutionContext] = None, stdin: Optional[TextIO] = None) -> int:
    """Run interactive REPL.

    Args:
        context: Optional execution context
        stdin: Optional input stream

    Returns:
        Exit status
    """
    repl = REPL(context=context, stdin=stdin)
    return repl.run()


def run_command(command: str, context: Optional[ExecutionContext] = None) -> LoopStatus:
    """Run a single command line non-interactively.

    Args:
        command: Command line to execute
        context: Optional execution context

    Returns:
        Loop status produced by the command
    """
    if context is None:
        context = ExecutionContext()

    return Dispatcher(context).execute(command)


def run_script(script_path: Path, context: Optional[ExecutionContext] = None) -> int:
    """Run commands from a file, one per line, without prompts.

    Args:
        script_path: Path to the command file
        context: Optional execution context

    Returns:
        Exit status
    """
    if context is None:
        context = ExecutionContext()

    logger.debug(f"Reading commands from {script_path}")
    with open(script_path, encoding="utf-8", errors="surrogateescape") as f:
        repl = REPL(context=context, stdin=f, show_prompt=False)
        return repl.run()
