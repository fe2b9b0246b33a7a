"""Tests for the command-line entry point."""

import io
import os
import sys

from csh.cli import main
from csh.shell import interpreter


class TestMain:
    """Test the csh command."""

    def test_end_of_input(self, monkeypatch, capsys):
        """Test that the shell exits 0 on immediate end of input."""
        monkeypatch.setattr(sys, "stdin", io.StringIO(""))
        assert main([]) == 0
        captured = capsys.readouterr()
        assert captured.out == "> "

    def test_exit_command(self, monkeypatch, capsys):
        """Test the exit builtin through stdin."""
        monkeypatch.setattr(sys, "stdin", io.StringIO("exit anything\n"))
        assert main([]) == 0
        assert capsys.readouterr().out == "> "

    def test_prompt_option(self, monkeypatch, capsys):
        """Test prompt override."""
        monkeypatch.setattr(sys, "stdin", io.StringIO("\n"))
        assert main(["--prompt", "% "]) == 0
        assert capsys.readouterr().out == "% % "

    def test_single_command(self, capsys):
        """Test -c with a builtin."""
        assert main(["-c", "cd"]) == 0
        assert capsys.readouterr().err == 'csh: expected argument to "cd"\n'

    def test_script(self, tmp_path, capsys):
        """Test running a command file."""
        script = tmp_path / "commands.txt"
        script.write_text("help\nexit\n")
        assert main([str(script)]) == 0
        captured = capsys.readouterr()
        assert "  help\n" in captured.out
        assert not captured.out.startswith("> ")

    def test_missing_script(self, tmp_path, capsys):
        """Test a script path that does not exist."""
        assert main([str(tmp_path / "missing.txt")]) == 1
        assert capsys.readouterr().err.startswith("csh: ")

    def test_missing_config(self, tmp_path, capsys):
        """Test a configuration file that does not exist."""
        assert main(["--config", str(tmp_path / "missing.yaml"), "-c", "exit"]) == 1
        assert "Configuration file not found" in capsys.readouterr().err

    def test_config_prog_name(self, tmp_path, capsys):
        """Test that the configured name prefixes diagnostics."""
        config = tmp_path / "csh.yaml"
        config.write_text("prog_name: mysh\n")
        assert main(["--config", str(config), "-c", "cd"]) == 0
        assert capsys.readouterr().err == 'mysh: expected argument to "cd"\n'

    def test_generate_config(self, tmp_path):
        """Test writing a sample configuration."""
        path = tmp_path / "csh.yaml"
        assert main(["--generate-config", str(path)]) == 0
        assert "launcher: auto" in path.read_text()

    def test_fatal_input_error(self, monkeypatch, capsys):
        """Test that stdin failures exit non-zero with a diagnostic."""
        class FailingStream:
            def read(self, size=-1):
                raise OSError(5, "Input/output error")

        monkeypatch.setattr(sys, "stdin", FailingStream())
        assert main([]) == 1
        assert capsys.readouterr().err == "csh: read error: Input/output error\n"

    def test_undecodable_stdin_bytes(self, monkeypatch, capsys, launcher):
        """Test that a non-UTF-8 byte reaches the program instead of crashing the shell."""
        monkeypatch.setattr(
            sys, "stdin",
            io.TextIOWrapper(io.BytesIO(b"echo \xff\nexit\n"), encoding="utf-8"),
        )
        monkeypatch.setattr(interpreter, "create_launcher", lambda *args, **kwargs: launcher)
        assert main([]) == 0
        captured = capsys.readouterr()
        assert captured.err == ""
        assert captured.out == "> > "
        assert launcher.calls == [["echo", "\udcff"]]
        assert os.fsencode(launcher.calls[0][1]) == b"\xff"

    def test_undecodable_script_bytes(self, tmp_path, monkeypatch, capsys, launcher):
        """Test that script files with non-UTF-8 bytes are run."""
        script = tmp_path / "commands.txt"
        script.write_bytes(b"echo \xfe\n")
        monkeypatch.setattr(interpreter, "create_launcher", lambda *args, **kwargs: launcher)
        assert main([str(script)]) == 0
        assert capsys.readouterr().err == ""
        assert launcher.calls == [["echo", "\udcfe"]]
