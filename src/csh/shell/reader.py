"""Line reader for the interactive loop.

Reads the operator's input one character at a time so that a line of any
length is returned whole.
"""

from __future__ import annotations

import logging
from typing import Optional, TextIO

from csh.errors import InputError
from csh.shell.buffer import GrowableBuffer

logger = logging.getLogger(__name__)

DEFAULT_LINE_BUFFER_SIZE = 1024


class LineReader:
    """Pull newline-terminated lines from a text stream."""

    def __init__(self, stream: TextIO, buffer_size: int = DEFAULT_LINE_BUFFER_SIZE):
        """Initialize reader.

        Args:
            stream: Text stream to read from (usually sys.stdin)
            buffer_size: Initial line buffer capacity in characters
        """
        self.stream = stream
        self.buffer_size = buffer_size

    def read_line(self) -> Optional[str]:
        """Read the next line.

        Returns:
            The characters before the newline, or None once the stream
            is exhausted and nothing was read

        Raises:
            InputError: If the stream fails
            AllocationError: If the line buffer cannot grow
        """
        buffer = GrowableBuffer(self.buffer_size)

        while True:
            try:
                char = self.stream.read(1)
            except OSError as e:
                raise InputError(f"read error: {e.strerror or e}") from e
            except UnicodeDecodeError as e:
                raise InputError(f"read error: {e.reason}") from e

            if char == '':
                if len(buffer) == 0:
                    logger.debug("End of input")
                    return None
                break
            if char == '\n':
                break
            buffer.append(char)

        return ''.join(buffer.items())
