"""Tests for the tpt command line."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from tptest import __version__
from tptest.cli.main import cli

PASSING = '''
from tptest import TestCase


class WhenPassing(TestCase):
    def it_passes(self):
        self.expect([1, 2]).to_have_count(2)
'''

FAILING = '''
from tptest import TestCase


class WhenFailing(TestCase):
    def it_fails(self):
        self.expect(123).to_be("123")
'''


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestRun:
    def test_passing_specs(self, runner: CliRunner, tmp_path: Path) -> None:
        spec = tmp_path / "passing.py"
        spec.write_text(PASSING)

        result = runner.invoke(cli, ["run", str(spec)])

        assert result.exit_code == 0, result.output
        assert "WhenPassing - 1/1" in result.output
        assert "1 passed, 0 failed" in result.output

    def test_failing_specs_exit_nonzero(self, runner: CliRunner, tmp_path: Path) -> None:
        spec = tmp_path / "failing.py"
        spec.write_text(FAILING)

        result = runner.invoke(cli, ["run", str(spec)])

        assert result.exit_code == 1
        assert "WhenFailing - 0/1" in result.output
        assert "FAIL" in result.output

    def test_spec_paths_from_config(self, runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "specs").mkdir()
        (tmp_path / "specs" / "passing.py").write_text(PASSING)
        (tmp_path / "tpt.yaml").write_text("spec_paths: specs\n")

        result = runner.invoke(cli, ["run", "--project", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert "WhenPassing" in result.output

    def test_load_error(self, runner: CliRunner, tmp_path: Path) -> None:
        spec = tmp_path / "broken.py"
        spec.write_text("this is not python\n")

        result = runner.invoke(cli, ["run", str(spec)])

        assert result.exit_code == 1
        assert "Error loading tests" in result.output

    def test_debug_logging_configured_before_loading(
        self, runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        spec = tmp_path / "passing.py"
        spec.write_text(PASSING)
        events: list[tuple[str, bool]] = []
        monkeypatch.setattr(
            "tptest.cli.main._setup_logging", lambda debug: events.append(("logging", debug))
        )

        def fake_load_cases(paths, config):
            events.append(("load", config.debug_mode))
            return []

        monkeypatch.setattr("tptest.loader.load_cases", fake_load_cases)

        result = runner.invoke(cli, ["run", "--debug", str(spec)])

        assert result.exit_code == 0, result.output
        assert events[:2] == [("logging", True), ("load", False)]

    def test_debug_mode_from_config_enables_logging(
        self, runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "passing.py").write_text(PASSING)
        (tmp_path / "tpt.yaml").write_text("spec_paths: passing.py\ndebug_mode: true\n")
        calls: list[bool] = []
        monkeypatch.setattr("tptest.cli.main._setup_logging", calls.append)

        result = runner.invoke(cli, ["run", "--project", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert calls == [False, True]


class TestOtherCommands:
    def test_list(self, runner: CliRunner, tmp_path: Path) -> None:
        spec = tmp_path / "passing.py"
        spec.write_text(PASSING)

        result = runner.invoke(cli, ["list", str(spec)])

        assert result.exit_code == 0, result.output
        assert "WhenPassing" in result.output
        assert "- it_passes" in result.output
        assert "1 tests in 1 cases" in result.output

    def test_init(self, runner: CliRunner, tmp_path: Path) -> None:
        with runner.isolated_filesystem(temp_dir=tmp_path) as cwd:
            result = runner.invoke(cli, ["init"])

            assert result.exit_code == 0, result.output
            assert (Path(cwd) / "spec").is_dir()
            assert (Path(cwd) / "tpt.yaml").exists()

            again = runner.invoke(cli, ["init"])
            assert "already exists" in again.output

    def test_config(self, runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "tpt.yaml").write_text("test_marker: should\n")

        result = runner.invoke(cli, ["config", "--project", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert '"test_marker": "should"' in result.output

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])

        assert __version__ in result.output
