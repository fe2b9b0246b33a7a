"""csh - a minimal interactive command interpreter.

Reads commands from the operator, runs the built-ins cd, help and exit
in-process, and launches everything else as a foreground child process.
"""

__version__ = "1.0.0"
__license__ = "MIT"

from csh.cli import main

__all__ = ["main", "__version__"]
