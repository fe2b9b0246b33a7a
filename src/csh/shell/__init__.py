"""Interactive command interpreter.

Reads a line, splits it into words, and runs it either as a built-in
command or as an external program in the foreground.
"""

from __future__ import annotations

from csh.shell.builtins import Builtin, BuiltinRegistry, default_registry
from csh.shell.interpreter import Dispatcher, ExecutionContext
from csh.shell.launcher import ForkExecLauncher, SubprocessLauncher, create_launcher
from csh.shell.parser import Command, Tokenizer, parse_command, split_line
from csh.shell.reader import LineReader
from csh.shell.repl import REPL, run_command, run_repl, run_script
from csh.shell.types import ChildOutcome, LoopStatus, OutcomeKind

__all__ = [
    "REPL",
    "Builtin",
    "BuiltinRegistry",
    "ChildOutcome",
    "Command",
    "Dispatcher",
    "ExecutionContext",
    "ForkExecLauncher",
    "LineReader",
    "LoopStatus",
    "OutcomeKind",
    "SubprocessLauncher",
    "Tokenizer",
    "create_launcher",
    "default_registry",
    "parse_command",
    "run_command",
    "run_repl",
    "run_script",
    "split_line",
]
