"""Type definitions shared by the shell components."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Protocol


class LoopStatus(Enum):
    """Whether the interpreter loop keeps running after a command."""

    CONTINUE = "continue"
    STOP = "stop"


class OutcomeKind(Enum):
    """How a launched child process ended."""

    EXITED = "exited"
    SIGNALED = "signaled"
    LAUNCH_FAILED = "launch_failed"


@dataclass(frozen=True)
class ChildOutcome:
    """Result of launching one external program."""

    kind: OutcomeKind
    exit_status: Optional[int] = None
    signal: Optional[int] = None
    error: Optional[str] = None

    @classmethod
    def exited(cls, status: int) -> ChildOutcome:
        return cls(OutcomeKind.EXITED, exit_status=status)

    @classmethod
    def signaled(cls, signal: int) -> ChildOutcome:
        return cls(OutcomeKind.SIGNALED, signal=signal)

    @classmethod
    def launch_failed(cls, error: str) -> ChildOutcome:
        return cls(OutcomeKind.LAUNCH_FAILED, error=error)

    @property
    def ran(self) -> bool:
        """True if a child process was created and has terminated."""
        return self.kind is not OutcomeKind.LAUNCH_FAILED


class ProcessLauncher(Protocol):
    """Capability that runs an external program and waits for it."""

    def launch(self, argv: List[str]) -> ChildOutcome:
        """Run a program in the foreground.

        Args:
            argv: Argument vector; argv[0] names the program

        Returns:
            How the child ended
        """
        ...
