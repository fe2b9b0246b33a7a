"""Tests for the read-tokenize-dispatch loop."""

import io
import os

import pytest

from csh.errors import InputError
from csh.shell.repl import REPL, run_command, run_script
from csh.shell.types import LoopStatus


class FailingStream:
    """Input stream whose reads always fail."""

    def read(self, size=-1):
        raise OSError(5, "Input/output error")


class InterruptOnceStream(io.StringIO):
    """Input stream that raises KeyboardInterrupt on its first read."""

    def __init__(self, text):
        super().__init__(text)
        self.interrupted = False

    def read(self, size=-1):
        if not self.interrupted:
            self.interrupted = True
            raise KeyboardInterrupt
        return super().read(size)


def run_loop(context, text):
    return REPL(context=context, stdin=io.StringIO(text)).run()


class TestREPL:
    """Test the interactive loop."""

    def test_end_of_input_first_read(self, context, launcher):
        """Test that immediate end of input exits cleanly after one prompt."""
        assert run_loop(context, "") == 0
        assert context.stdout.getvalue() == "> "
        assert context.stderr.getvalue() == ""
        assert launcher.calls == []

    def test_blank_line(self, context, launcher):
        """Test that whitespace-only input returns to the prompt silently."""
        assert run_loop(context, "  \n") == 0
        assert context.stdout.getvalue() == "> > "
        assert context.stderr.getvalue() == ""
        assert launcher.calls == []

    def test_cd_without_argument(self, context):
        """Test the usage error and that the loop continues."""
        run_loop(context, "cd\nexit\n")
        assert context.stderr.getvalue() == 'csh: expected argument to "cd"\n'
        assert context.stdout.getvalue() == "> > "

    def test_external_command(self, context, launcher):
        """Test that external commands are launched and the loop continues."""
        run_loop(context, "echo hello world\n")
        assert launcher.calls == [["echo", "hello", "world"]]
        assert context.stdout.getvalue() == "> > "

    def test_exit_with_argument(self, context, launcher):
        """Test that exit stops the loop and ignores its argument."""
        assert run_loop(context, "exit anything\necho never\n") == 0
        assert launcher.calls == []
        assert context.stdout.getvalue() == "> "

    def test_commands_run_in_order(self, context, launcher):
        """Test sequential execution."""
        run_loop(context, "first 1\n\nsecond 2\nthird\n")
        assert launcher.calls == [["first", "1"], ["second", "2"], ["third"]]
        assert context.stdout.getvalue() == "> " * 5

    def test_final_line_without_newline(self, context, launcher):
        """Test that a trailing partial line is still executed."""
        run_loop(context, "ls -l")
        assert launcher.calls == [["ls", "-l"]]

    def test_cd_then_nonexistent(self, context, monkeypatch, tmp_path):
        """Test that a failing cd leaves the directory unchanged."""
        monkeypatch.chdir(tmp_path)
        run_loop(context, "cd /nonexistent-path-xyz\n")
        assert context.stderr.getvalue().startswith("csh: ")
        assert os.path.realpath(os.getcwd()) == os.path.realpath(tmp_path)

    def test_custom_prompt(self, context):
        """Test prompt override."""
        repl = REPL(context=context, stdin=io.StringIO("\n"), prompt="$ ")
        repl.run()
        assert context.stdout.getvalue() == "$ $ "

    def test_no_prompt(self, context, launcher):
        """Test running without prompts."""
        repl = REPL(context=context, stdin=io.StringIO("true\n"), show_prompt=False)
        repl.run()
        assert context.stdout.getvalue() == ""
        assert launcher.calls == [["true"]]

    def test_interrupt_at_prompt(self, context, launcher):
        """Test that Ctrl+C at the prompt does not end the loop."""
        stream = InterruptOnceStream("echo after\n")
        REPL(context=context, stdin=stream).run()
        assert launcher.calls == [["echo", "after"]]
        assert context.stdout.getvalue() == "> \n> > "

    def test_running_cleared_on_exit(self, context):
        """Test that the running flag drops when exit stops the loop."""
        repl = REPL(context=context, stdin=io.StringIO("exit\n"))
        assert repl.run() == 0
        assert repl.running is False

    def test_running_cleared_on_end_of_input(self, context):
        """Test that the running flag drops at end of input."""
        repl = REPL(context=context, stdin=io.StringIO(""))
        repl.run()
        assert repl.running is False

    def test_input_error_is_fatal(self, context):
        """Test that read failures propagate."""
        with pytest.raises(InputError):
            REPL(context=context, stdin=FailingStream()).run()


class TestRunCommand:
    """Test one-shot execution."""

    def test_builtin(self, context):
        """Test running a builtin."""
        assert run_command("exit", context) is LoopStatus.STOP

    def test_external(self, context, launcher):
        """Test running an external command."""
        assert run_command("echo hi", context) is LoopStatus.CONTINUE
        assert launcher.calls == [["echo", "hi"]]


class TestRunScript:
    """Test reading commands from a file."""

    def test_runs_lines(self, context, launcher, tmp_path):
        """Test that each line is dispatched without prompts."""
        script = tmp_path / "commands.txt"
        script.write_text("echo one\n\ncd\necho two\nexit\necho never\n")
        assert run_script(script, context) == 0
        assert launcher.calls == [["echo", "one"], ["echo", "two"]]
        assert context.stdout.getvalue() == ""
        assert context.stderr.getvalue() == 'csh: expected argument to "cd"\n'
