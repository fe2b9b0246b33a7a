"""Launch external programs and wait for them to finish.

Two adapters implement the ProcessLauncher capability:

- ForkExecLauncher: POSIX fork + execvp + waitpid
- SubprocessLauncher: subprocess.Popen, for platforms without fork
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from typing import List, Optional, TextIO

from csh.config import LAUNCHER_KINDS
from csh.shell.types import ChildOutcome, ProcessLauncher

logger = logging.getLogger(__name__)

# Status of a child whose program image could not be replaced.
EXEC_FAILURE_STATUS = 127


class _DiagnosticMixin:
    """Report launch failures as '<prog>: <message>' lines."""

    prog_name: str
    _stderr: Optional[TextIO]

    @property
    def stderr(self) -> TextIO:
        return self._stderr if self._stderr is not None else sys.stderr

    def _report(self, error: OSError) -> str:
        message = error.strerror or str(error)
        self.stderr.write(f"{self.prog_name}: {message}\n")
        self.stderr.flush()
        return message


class ForkExecLauncher(_DiagnosticMixin):
    """Run programs by forking and replacing the child's image."""

    def __init__(self, prog_name: str = "csh", stderr: Optional[TextIO] = None):
        """Initialize launcher.

        Args:
            prog_name: Prefix for diagnostic messages
            stderr: Stream for diagnostics raised in the parent
                (defaults to sys.stderr at the time of writing)
        """
        if not hasattr(os, "fork"):
            raise RuntimeError("fork() is not available on this platform")
        self.prog_name = prog_name
        self._stderr = stderr

    def launch(self, argv: List[str]) -> ChildOutcome:
        """Fork, exec argv in the child and wait for it.

        Args:
            argv: Argument vector; argv[0] is resolved through PATH

        Returns:
            How the child ended
        """
        # Unflushed output would otherwise be written twice.
        sys.stdout.flush()
        sys.stderr.flush()

        try:
            pid = os.fork()
        except OSError as e:
            return ChildOutcome.launch_failed(self._report(e))

        if pid == 0:
            self._exec_child(argv)
        return self._wait(pid)

    def _exec_child(self, argv: List[str]) -> None:
        """Replace the child's image; exit the child if that fails."""
        try:
            os.execvp(argv[0], argv)
        except OSError as e:
            message = f"{self.prog_name}: {e.strerror or e}\n"
            os.write(2, message.encode(errors="replace"))
        except ValueError as e:
            message = f"{self.prog_name}: {e}\n"
            os.write(2, message.encode(errors="replace"))
        finally:
            os._exit(EXEC_FAILURE_STATUS)

    def _wait(self, pid: int) -> ChildOutcome:
        """Block until the child exits or is killed by a signal."""
        while True:
            try:
                _, status = os.waitpid(pid, os.WUNTRACED)
            except KeyboardInterrupt:
                # The child received the same interrupt; keep waiting for it.
                continue

            if os.WIFEXITED(status):
                outcome = ChildOutcome.exited(os.WEXITSTATUS(status))
                break
            if os.WIFSIGNALED(status):
                outcome = ChildOutcome.signaled(os.WTERMSIG(status))
                break
            logger.debug(f"Child {pid} stopped, still waiting")

        logger.debug(f"Child {pid} finished: {outcome}")
        return outcome


class SubprocessLauncher(_DiagnosticMixin):
    """Run programs with subprocess.Popen."""

    def __init__(self, prog_name: str = "csh", stderr: Optional[TextIO] = None):
        self.prog_name = prog_name
        self._stderr = stderr

    def launch(self, argv: List[str]) -> ChildOutcome:
        """Start argv and wait for it.

        Args:
            argv: Argument vector; argv[0] is resolved through PATH

        Returns:
            How the child ended
        """
        sys.stdout.flush()
        sys.stderr.flush()

        try:
            process = subprocess.Popen(argv)
        except OSError as e:
            return ChildOutcome.launch_failed(self._report(e))
        except ValueError as e:
            self.stderr.write(f"{self.prog_name}: {e}\n")
            self.stderr.flush()
            return ChildOutcome.launch_failed(str(e))

        logger.debug(f"Started {argv[0]} as pid {process.pid}")
        while True:
            try:
                returncode = process.wait()
                break
            except KeyboardInterrupt:
                continue

        if returncode < 0:
            outcome = ChildOutcome.signaled(-returncode)
        else:
            outcome = ChildOutcome.exited(returncode)
        logger.debug(f"Child {process.pid} finished: {outcome}")
        return outcome


def create_launcher(
    kind: str = "auto",
    prog_name: str = "csh",
    stderr: Optional[TextIO] = None
) -> ProcessLauncher:
    """Create a launcher for this platform.

    Args:
        kind: 'fork', 'subprocess', or 'auto' (fork where available)
        prog_name: Prefix for diagnostic messages
        stderr: Stream for diagnostics raised in the parent

    Returns:
        Launcher instance

    Raises:
        ValueError: If kind is unknown
    """
    if kind not in LAUNCHER_KINDS:
        raise ValueError(f"Launcher must be one of {list(LAUNCHER_KINDS)}, got '{kind}'")

    if kind == "fork" or (kind == "auto" and hasattr(os, "fork")):
        return ForkExecLauncher(prog_name=prog_name, stderr=stderr)
    return SubprocessLauncher(prog_name=prog_name, stderr=stderr)
