"""Dispatcher for tokenized command lines.

Routes a command to a built-in handler or to the external launcher.
"""

from __future__ import annotations

import logging
import sys
from typing import List, Optional, TextIO

from csh.config import ShellConfig
from csh.shell.builtins import BuiltinRegistry, default_registry
from csh.shell.launcher import create_launcher
from csh.shell.parser import Tokenizer, parse_command
from csh.shell.types import ChildOutcome, LoopStatus, ProcessLauncher

logger = logging.getLogger(__name__)


class ExecutionContext:
    """State shared by the loop, the dispatcher and the builtins.

    Holds the configuration, the output streams, the builtin registry and
    the process launcher.
    """

    def __init__(
        self,
        config: Optional[ShellConfig] = None,
        registry: Optional[BuiltinRegistry] = None,
        launcher: Optional[ProcessLauncher] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ):
        """Initialize execution context.

        Args:
            config: Shell configuration (defaults if None)
            registry: Builtin registry (the standard one if None)
            launcher: Process launcher (chosen from config if None)
            stdout: Standard output stream
            stderr: Diagnostic output stream
        """
        self.config = config if config is not None else ShellConfig()
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stderr = stderr if stderr is not None else sys.stderr
        self.registry = registry if registry is not None else default_registry()
        if launcher is None:
            launcher = create_launcher(
                self.config.launcher,
                prog_name=self.config.prog_name,
                stderr=self.stderr,
            )
        self.launcher = launcher

    @property
    def prog_name(self) -> str:
        return self.config.prog_name

    def error(self, message: str) -> None:
        """Write a '<prog>: <message>' line to diagnostic output."""
        self.stderr.write(f"{self.prog_name}: {message}\n")
        self.stderr.flush()


class Dispatcher:
    """Decide between builtin and external execution for each line."""

    def __init__(self, context: ExecutionContext):
        self.context = context
        self.tokenizer = Tokenizer(context.config.token_buffer_size)
        # Kept for inspection only; the loop never acts on it.
        self.last_outcome: Optional[ChildOutcome] = None

    def execute(self, line: str) -> LoopStatus:
        """Tokenize and dispatch one line.

        Args:
            line: Line without its trailing newline

        Returns:
            Whether the loop should continue
        """
        return self.dispatch(self.tokenizer.split(line))

    def dispatch(self, tokens: List[str]) -> LoopStatus:
        """Run a tokenized command.

        Args:
            tokens: Token list; tokens[0] is the command name

        Returns:
            STOP only for the exit builtin, CONTINUE otherwise
        """
        command = parse_command(tokens)
        if command is None:
            return LoopStatus.CONTINUE

        builtin = self.context.registry.lookup(command.name)
        if builtin is not None:
            logger.debug(f"Running builtin {command!r}")
            return builtin.execute(command.args, self.context)

        logger.debug(f"Launching {command!r}")
        self.last_outcome = self.context.launcher.launch(command.argv)
        return LoopStatus.CONTINUE
