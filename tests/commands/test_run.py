"""
Tests for run command - External programs.

Programs are started with the current interpreter so the tests do not
depend on what the host has installed.
"""

import shlex
import sys

import pytest

from pipekit.codes import ResultCode
from pipekit.errors import CommandFailedError
from pipekit.executors import PipeExecutor, run_script
from pipekit.pipe.commands.run import RunCommand

PYTHON = shlex.quote(sys.executable)


class TestRun:
    """Tests for running programs."""

    def test_runs_in_pipe_cwd(self, tmp_path):
        """Programs run in the pipe's cwd."""
        script = f"run {PYTHON} -c \"open('made.txt', 'w').write('ok')\""

        assert run_script(script, cwd=str(tmp_path)) == ResultCode.SUCCESS
        assert (tmp_path / "made.txt").read_text() == "ok"

    def test_exec_alias(self, tmp_path):
        """exec is an alias of run."""
        script = f"exec {PYTHON} -c \"open('alias.txt', 'w').write('ok')\""
        run_script(script, cwd=str(tmp_path))

        assert (tmp_path / "alias.txt").exists()

    def test_unknown_name_falls_back_to_run(self, tmp_path):
        """Unknown names are run as programs."""
        script = f"{PYTHON} -c \"open('fallback.txt', 'w').write('ok')\""
        run_script(script, cwd=str(tmp_path))

        assert (tmp_path / "fallback.txt").exists()

    def test_cwd_follows_cd(self, tmp_path):
        """Programs follow cd."""
        (tmp_path / "sub").mkdir()
        script = f"cd sub\nrun {PYTHON} -c \"open('here.txt', 'w').write('ok')\""
        run_script(script, cwd=str(tmp_path))

        assert (tmp_path / "sub" / "here.txt").exists()


class TestRunFailures:
    """Tests for failing programs."""

    def test_non_zero_exit(self, env):
        """A non-zero exit fails with the program's code."""
        with pytest.raises(CommandFailedError) as excinfo:
            PipeExecutor(env).load(f'run {PYTHON} -c "raise SystemExit(3)"')

        assert excinfo.value.exit_code == 3
        assert "exited with code 3" in excinfo.value.message

    def test_missing_program(self, env):
        """A missing program fails the pipe."""
        with pytest.raises(CommandFailedError, match="Program not found"):
            PipeExecutor(env).load("run pipekit-no-such-program-xyz")

    def test_no_arguments(self, env):
        """run needs a program."""
        assert RunCommand(env).run([]) == ResultCode.MISSING_ARGUMENTS
        assert RunCommand(env).run(["--shell"]) == ResultCode.MISSING_ARGUMENTS
