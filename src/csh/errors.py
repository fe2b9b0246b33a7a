"""Exception types for csh."""

from __future__ import annotations


class ShellError(Exception):
    """Base exception for csh."""


class FatalShellError(ShellError):
    """Raised when the interpreter cannot continue and must exit."""


class AllocationError(FatalShellError):
    """Raised when an input or token buffer cannot grow."""


class InputError(FatalShellError):
    """Raised when reading from the input stream fails for a reason other than end-of-input."""


class ConfigurationError(ShellError):
    """Raised when the shell configuration cannot be read or validated."""
