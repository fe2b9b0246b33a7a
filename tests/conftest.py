"""Shared fixtures for shell tests."""

import io

import pytest

from csh.config import ShellConfig
from csh.shell.interpreter import ExecutionContext
from csh.shell.types import ChildOutcome


class RecordingLauncher:
    """Launcher that records argument vectors instead of running them."""

    def __init__(self, outcome=None):
        self.calls = []
        self.outcome = outcome or ChildOutcome.exited(0)

    def launch(self, argv):
        self.calls.append(list(argv))
        return self.outcome


@pytest.fixture
def launcher():
    return RecordingLauncher()


@pytest.fixture
def context(launcher):
    """Execution context writing to in-memory streams."""
    return ExecutionContext(
        config=ShellConfig(),
        launcher=launcher,
        stdout=io.StringIO(),
        stderr=io.StringIO(),
    )
