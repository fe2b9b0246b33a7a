"""Tokenizer for command lines.

Splits a line into words on a fixed set of whitespace delimiters, e.g.:
    ls  -l	/tmp  ->  ['ls', '-l', '/tmp']

There is no quoting, escaping or expansion: a delimiter can never be part
of a token.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from csh.shell.buffer import GrowableBuffer

logger = logging.getLogger(__name__)

TOKEN_DELIMITERS = frozenset(" \t\r\n\a")
DEFAULT_TOKEN_BUFFER_SIZE = 64


@dataclass
class Command:
    """A command name with its arguments."""

    name: str
    args: List[str]

    @property
    def argv(self) -> List[str]:
        """Full argument vector, with the command name first."""
        return [self.name, *self.args]

    def __repr__(self) -> str:
        """String representation."""
        args_str = ', '.join(repr(a) for a in self.args)
        return f"Command({self.name!r}, [{args_str}])"


class Tokenizer:
    """Split lines into word tokens."""

    def __init__(self, buffer_size: int = DEFAULT_TOKEN_BUFFER_SIZE):
        """Initialize tokenizer.

        Args:
            buffer_size: Initial token list capacity
        """
        self.buffer_size = buffer_size

    def split(self, line: str) -> List[str]:
        """Split a line into tokens.

        Args:
            line: Line to split

        Returns:
            Tokens in left-to-right order; empty if the line holds only
            delimiters
        """
        tokens = GrowableBuffer(self.buffer_size)
        current: List[str] = []

        for char in line:
            if char in TOKEN_DELIMITERS:
                if current:
                    tokens.append(''.join(current))
                    current = []
            else:
                current.append(char)

        if current:
            tokens.append(''.join(current))

        return tokens.items()


def split_line(line: str, buffer_size: int = DEFAULT_TOKEN_BUFFER_SIZE) -> List[str]:
    """Split a line into tokens.

    Convenience function that creates a tokenizer and splits the line.

    Args:
        line: Line to split
        buffer_size: Initial token list capacity

    Returns:
        List of tokens
    """
    return Tokenizer(buffer_size).split(line)


def parse_command(tokens: List[str]) -> Optional[Command]:
    """Build a Command from a token list.

    Args:
        tokens: Tokens produced by split_line

    Returns:
        Command, or None for an empty token list
    """
    if not tokens:
        return None
    return Command(name=tokens[0], args=list(tokens[1:]))
