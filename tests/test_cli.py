"""Unit tests for the assetsync command line."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from assetsync import __version__
from assetsync.cli import main
from assetsync.exceptions import SyncIOError


@pytest.fixture
def runner():
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project(runner):
    """Run inside a throwaway project with an asset tree."""
    with runner.isolated_filesystem():
        root = Path.cwd()
        assets = root / "assets"
        (assets / "b").mkdir(parents=True)
        (assets / "ignore").mkdir()
        (assets / "a.txt").write_text("alpha")
        (assets / "b" / "b.txt").write_text("bravo")
        (assets / "ignore" / "secret.txt").write_text("secret")
        yield root


def tree(root: Path) -> set[str]:
    return {p.relative_to(root).as_posix() for p in root.rglob("*")}


class TestHelp:
    """Tests for help and version output."""

    @pytest.mark.parametrize("flag", ["--help", "-h"])
    def test_help(self, runner, flag):
        result = runner.invoke(main, [flag])
        assert result.exit_code == 0
        assert "--dry-run" in result.output
        assert "-n" in result.output
        assert "ignore" in result.output

    def test_help_touches_nothing(self, runner, project):
        result = runner.invoke(main, ["--dry-run", "--help"])
        assert result.exit_code == 0
        assert not (project / "www").exists()

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestArguments:
    """Tests for rejected arguments."""

    def test_unknown_flag(self, runner, project):
        result = runner.invoke(main, ["--bogus"])

        assert result.exit_code == 2
        assert "Unknown argument: --bogus" in result.output
        assert "Usage:" in result.output
        assert not (project / "www").exists()

    def test_unknown_flag_after_valid_flag(self, runner, project):
        """Test that rejection happens before any work starts."""
        (project / "www" / "public" / "assets").mkdir(parents=True)
        (project / "www" / "public" / "assets" / "stale.txt").write_text("stale")

        result = runner.invoke(main, ["-n", "-x"])

        assert result.exit_code == 2
        assert "Unknown argument: -x" in result.output
        assert (project / "www" / "public" / "assets" / "stale.txt").exists()

    def test_positional_argument(self, runner, project):
        result = runner.invoke(main, ["somewhere"])

        assert result.exit_code == 2
        assert "Unknown argument: somewhere" in result.output
        assert not (project / "www").exists()

    def test_flag_with_value(self, runner, project):
        result = runner.invoke(main, ["--dry-run=yes"])

        assert result.exit_code == 2
        assert "Unknown argument: --dry-run" in result.output

    @pytest.mark.parametrize("args", [["--"], ["-n", "--"], ["--", "-n"]])
    def test_double_dash_rejected(self, runner, project, args):
        """Test that "--" is an unknown argument, not an end-of-options marker."""
        destination = project / "www" / "public" / "assets"
        destination.mkdir(parents=True)
        (destination / "stale.txt").write_text("stale")

        result = runner.invoke(main, args)

        assert result.exit_code == 2
        assert "Unknown argument: --" in result.output
        assert "Copying assets" not in result.output
        assert (destination / "stale.txt").read_text() == "stale"
        assert not (destination / "a.txt").exists()

    def test_single_dash_reported(self, runner, project):
        result = runner.invoke(main, ["-"])

        assert result.exit_code == 2
        assert "Unknown argument: -\n" in result.output
        assert "unexpected extra argument" not in result.output
        assert not (project / "www").exists()


class TestRun:
    """Tests for real and dry runs from the command line."""

    def test_real_run(self, runner, project):
        result = runner.invoke(main, ["--no-progress"])

        assert result.exit_code == 0, result.output
        destination = project / "www" / "public" / "assets"
        assert tree(destination) == {"a.txt", "b", "b/b.txt"}
        assert "Copied: a.txt" in result.output
        assert "DONE!" in result.output

    def test_real_run_with_progress(self, runner, project):
        result = runner.invoke(main, [])

        assert result.exit_code == 0, result.output
        assert tree(project / "www" / "public" / "assets") == {"a.txt", "b", "b/b.txt"}

    def test_stale_destination_rebuilt(self, runner, project):
        destination = project / "www" / "public" / "assets"
        destination.mkdir(parents=True)
        (destination / "stale.txt").write_text("stale")

        result = runner.invoke(main, ["-q"])

        assert result.exit_code == 0, result.output
        assert tree(destination) == {"a.txt", "b", "b/b.txt"}

    @pytest.mark.parametrize("flag", ["--dry-run", "-n"])
    def test_dry_run(self, runner, project, flag):
        result = runner.invoke(main, [flag])

        assert result.exit_code == 0, result.output
        assert not (project / "www").exists()
        assert "Running in dry-run mode" in result.output
        assert "Would create destination directory" in result.output
        assert "Would copy: a.txt" in result.output
        assert "Would copy: b/b.txt" in result.output
        assert "secret" not in result.output
        assert "Dry-run finished. No changes were made." in result.output

    def test_dry_run_existing_destination(self, runner, project):
        destination = project / "www" / "public" / "assets"
        destination.mkdir(parents=True)
        (destination / "stale.txt").write_text("stale")

        result = runner.invoke(main, ["-n"])

        assert result.exit_code == 0, result.output
        assert "Would remove existing destination directory" in result.output
        assert (destination / "stale.txt").read_text() == "stale"

    def test_json_statistics(self, runner, project):
        result = runner.invoke(main, ["-n", "--json"])

        assert result.exit_code == 0, result.output
        stats = json.loads(result.output)
        assert stats["dry_run"] is True
        assert stats["files"] == 2
        assert stats["excluded"] == 1

    def test_verbose(self, runner, project):
        result = runner.invoke(main, ["-n", "-v"])
        assert result.exit_code == 0, result.output


class TestFailures:
    """Tests for failure exit codes."""

    def test_missing_source(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(main, [])

            assert result.exit_code == 1
            assert "Source directory does not exist: assets" in result.output
            assert not Path("www").exists()

    def test_missing_source_dry_run(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(main, ["--dry-run"])
            assert result.exit_code == 1

    def test_io_failure(self, runner, project):
        with patch(
            "assetsync.sync.engine.TreeOperations.copy_file",
            side_effect=OSError(28, "No space left on device"),
        ):
            result = runner.invoke(main, ["--no-progress"])

        assert result.exit_code == 1
        assert "No space left on device" in result.output
        assert "Destination may be incomplete" in result.output

    def test_io_failure_from_engine(self, runner, project):
        with patch(
            "assetsync.cli.run_sync_with_progress",
            side_effect=SyncIOError("Failed to copy file x: boom"),
        ):
            result = runner.invoke(main, [])

        assert result.exit_code == 1
        assert "Failed to copy file x: boom" in result.output

    def test_keyboard_interrupt(self, runner, project):
        with patch(
            "assetsync.cli.run_sync_with_progress", side_effect=KeyboardInterrupt
        ):
            result = runner.invoke(main, [])

        assert result.exit_code == 130
