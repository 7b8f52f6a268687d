"""
Tests for the pipekit command line.
"""

import pytest
from typer.testing import CliRunner

from pipekit import __version__
from pipekit.cli import app, parse_vars

runner = CliRunner()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run the CLI from an empty temporary directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestExec:
    """Tests for pipekit exec."""

    def test_inline_script(self, workdir):
        """Run an inline script with :eol: separators."""
        result = runner.invoke(app, ["exec", "mkdir out:eol:open out/a.txt -c -a hi"])

        assert result.exit_code == 0, result.output
        assert (workdir / "out" / "a.txt").read_text(encoding="utf-8") == "hi\n"

    def test_words_are_joined(self, workdir):
        """Several words form one script line."""
        result = runner.invoke(app, ["exec", "mkdir", "one", "two"])

        assert result.exit_code == 0, result.output
        assert (workdir / "one").is_dir()
        assert (workdir / "two").is_dir()

    def test_variables(self, workdir):
        """--var binds a variable for the script."""
        result = runner.invoke(app, ["exec", "--var", "name=built", "mkdir $name"])

        assert result.exit_code == 0, result.output
        assert (workdir / "built").is_dir()

    def test_cwd_option(self, workdir):
        """--cwd sets the root pipe's working directory."""
        (workdir / "elsewhere").mkdir()
        result = runner.invoke(app, ["exec", "-C", str(workdir / "elsewhere"), "mkdir x"])

        assert result.exit_code == 0, result.output
        assert (workdir / "elsewhere" / "x").is_dir()

    def test_failure_exit_code(self, workdir):
        """A failing instruction exits 1 with a diagnostic."""
        result = runner.invoke(app, ["exec", "mkdir"])

        assert result.exit_code == 1
        assert "Missing arguments" in result.output

    def test_quit_exits_cleanly(self, workdir):
        """quit ends the run with exit code 0."""
        result = runner.invoke(app, ["exec", "quit:eol:mkdir never"])

        assert result.exit_code == 0, result.output
        assert not (workdir / "never").exists()


class TestRun:
    """Tests for pipekit run."""

    def test_runs_script_file(self, workdir):
        """Run a script file from disk."""
        (workdir / "build.pipe").write_text(
            "// build\nmkdir dist\n:each folder\nopen log.txt -c -a $currentFolder\n",
            encoding="utf-8",
        )

        result = runner.invoke(app, ["run", "build.pipe"])

        assert result.exit_code == 0, result.output
        assert (workdir / "log.txt").read_text(encoding="utf-8") == "dist\n"

    def test_missing_script(self, workdir):
        """A missing script file exits 1."""
        result = runner.invoke(app, ["run", "absent.pipe"])

        assert result.exit_code == 1

    def test_config_variables(self, workdir):
        """Variables come from pipekit.yaml."""
        (workdir / "pipekit.yaml").write_text("variables:\n  target: from-config\n", encoding="utf-8")
        (workdir / "build.pipe").write_text("mkdir $target", encoding="utf-8")

        result = runner.invoke(app, ["run", "build.pipe"])

        assert result.exit_code == 0, result.output
        assert (workdir / "from-config").is_dir()

    def test_cli_variables_override_config(self, workdir):
        """--var wins over pipekit.yaml."""
        (workdir / "pipekit.yaml").write_text("variables:\n  target: from-config\n", encoding="utf-8")
        (workdir / "build.pipe").write_text("mkdir $target", encoding="utf-8")

        result = runner.invoke(app, ["run", "build.pipe", "-V", "target=from-cli"])

        assert result.exit_code == 0, result.output
        assert (workdir / "from-cli").is_dir()
        assert not (workdir / "from-config").exists()

    def test_invalid_config(self, workdir):
        """A malformed pipekit.yaml exits 1."""
        (workdir / "pipekit.yaml").write_text("- just\n- a list\n", encoding="utf-8")
        (workdir / "build.pipe").write_text("mkdir x", encoding="utf-8")

        result = runner.invoke(app, ["run", "build.pipe"])

        assert result.exit_code == 1
        assert "must be a mapping" in result.output


class TestMisc:
    """Tests for the remaining entry points."""

    def test_version(self):
        """--version prints the package version."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_commands_table(self):
        """commands lists the built-in keywords."""
        result = runner.invoke(app, ["commands"])

        assert result.exit_code == 0
        for keyword in ("copy", "open", "run", "set"):
            assert keyword in result.output

    def test_parse_vars(self):
        """name=value pairs split on the first =."""
        assert parse_vars(["a=1", "b=x=y", "c="]) == {"a": "1", "b": "x=y", "c": ""}

    def test_parse_vars_rejects_bare_name(self):
        """A --var without = is rejected."""
        result = runner.invoke(app, ["exec", "--var", "novalue", "mkdir x"])

        assert result.exit_code != 0
