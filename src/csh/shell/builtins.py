"""Built-in commands for the shell.

Provides cd, help and exit. The set is closed: every member of Builtin
has exactly one handler, and the registry cannot be changed after it is
built.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Callable, Dict, Iterable, List, Mapping, Optional

from csh.shell.types import LoopStatus

if TYPE_CHECKING:
    from csh.shell.interpreter import ExecutionContext

logger = logging.getLogger(__name__)

BuiltinHandler = Callable[[List[str], "ExecutionContext"], LoopStatus]


class Builtin(Enum):
    """Names of the built-in commands."""

    CD = "cd"
    HELP = "help"
    EXIT = "exit"


@dataclass(frozen=True)
class BuiltinCommand:
    """A built-in command bound to its handler."""

    builtin: Builtin
    func: BuiltinHandler

    @property
    def name(self) -> str:
        return self.builtin.value

    def execute(self, args: List[str], context: ExecutionContext) -> LoopStatus:
        """Execute the command.

        Args:
            args: Arguments after the command name
            context: Execution context providing output streams

        Returns:
            Loop status produced by the handler
        """
        return self.func(args, context)


class BuiltinRegistry:
    """Read-only mapping from command name to built-in command."""

    def __init__(self, commands: Iterable[BuiltinCommand]):
        """Initialize registry.

        Args:
            commands: Commands to register, in listing order
        """
        table: Dict[str, BuiltinCommand] = {}
        for cmd in commands:
            if cmd.name in table:
                raise ValueError(f"Duplicate builtin: {cmd.name}")
            table[cmd.name] = cmd
        self._commands: Mapping[str, BuiltinCommand] = MappingProxyType(table)

    @property
    def commands(self) -> Mapping[str, BuiltinCommand]:
        return self._commands

    def lookup(self, name: str) -> Optional[BuiltinCommand]:
        """Get a built-in command.

        Args:
            name: Command name

        Returns:
            Command if found, None otherwise
        """
        return self._commands.get(name)

    def names(self) -> List[str]:
        """List builtin names in registration order."""
        return list(self._commands)

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __len__(self) -> int:
        return len(self._commands)


def cd_command(args: List[str], context: ExecutionContext) -> LoopStatus:
    """Change the working directory to args[0]."""
    if not args:
        context.error(f"expected argument to \"{Builtin.CD.value}\"")
        return LoopStatus.CONTINUE

    try:
        os.chdir(args[0])
    except OSError as e:
        context.error(e.strerror or str(e))
    else:
        logger.debug(f"Working directory is now {os.getcwd()}")
    return LoopStatus.CONTINUE


def help_command(args: List[str], context: ExecutionContext) -> LoopStatus:
    """Print the usage banner and the builtin names. Arguments are ignored."""
    lines = [
        f"{context.prog_name} - a minimal command interpreter",
        "Type program names and arguments, and hit enter.",
        "The following are built in:",
    ]
    for name in context.registry.names():
        lines.append(f"  {name}")
    lines.append("Use the man command for information on other programs.")

    context.stdout.write('\n'.join(lines) + '\n')
    context.stdout.flush()
    return LoopStatus.CONTINUE


def exit_command(args: List[str], context: ExecutionContext) -> LoopStatus:
    """Stop the interpreter loop. Arguments are ignored."""
    logger.debug("Exit requested")
    return LoopStatus.STOP


_HANDLERS: Dict[Builtin, BuiltinHandler] = {
    Builtin.CD: cd_command,
    Builtin.HELP: help_command,
    Builtin.EXIT: exit_command,
}


def default_registry() -> BuiltinRegistry:
    """Build the registry holding every Builtin.

    Returns:
        Registry with cd, help and exit
    """
    missing = [b.value for b in Builtin if b not in _HANDLERS]
    if missing:
        raise RuntimeError(f"Builtins without a handler: {', '.join(missing)}")

    return BuiltinRegistry(
        BuiltinCommand(builtin, func) for builtin, func in _HANDLERS.items()
    )
