"""Unit tests for the plan command."""

import json
from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

from cleanctl.cli.main import app
from cleanctl.core.errors import ResolutionError
from typer.testing import CliRunner

runner = CliRunner()


def _profile(write_profile: Callable, tmp_path: Path, dumps_dir: Path) -> Path:
    return write_profile(
        {
            "name": "Example",
            "entries": [
                {"type": "file", "value": str(tmp_path / "a.txt")},
                {"type": "pattern", "value": f"{dumps_dir}/*.dmp", "exception": "mostRecent"},
            ],
        }
    )


class TestPlanCommand:
    """Tests for cleanctl plan."""

    def test_table_output_deletes_nothing(
        self, write_profile: Callable, tmp_path: Path, dumps_dir: Path
    ) -> None:
        profile = _profile(write_profile, tmp_path, dumps_dir)

        result = runner.invoke(app, ["plan", "--profile", str(profile)])

        assert result.exit_code == 0
        assert "2 path(s) would be deleted" in result.output
        assert (dumps_dir / "1.dmp").exists()

    def test_quiet_shows_table_only(
        self, write_profile: Callable, tmp_path: Path, dumps_dir: Path
    ) -> None:
        profile = _profile(write_profile, tmp_path, dumps_dir)

        result = runner.invoke(app, ["--quiet", "plan", "-p", str(profile)])

        assert result.exit_code == 0
        assert "Deletion Plan" in result.output
        assert "Keeping" not in result.output
        assert "would be deleted" not in result.output

    def test_json_output(self, write_profile: Callable, tmp_path: Path, dumps_dir: Path) -> None:
        profile = _profile(write_profile, tmp_path, dumps_dir)

        result = runner.invoke(app, ["plan", "-p", str(profile), "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["name"] == "Example"
        assert data["targets"] == [
            {"path": str(tmp_path / "a.txt"), "type": "file", "entry": 0},
            {"path": str(dumps_dir / "1.dmp"), "type": "file", "entry": 1},
        ]
        assert data["excluded"] == [str(dumps_dir / "2.dmp")]
        assert data["failures"] == []

    def test_empty_plan(self, write_profile: Callable) -> None:
        profile = write_profile({"name": "Nothing", "entries": []})

        result = runner.invoke(app, ["plan", "-p", str(profile)])

        assert result.exit_code == 0
        assert "resolves to nothing" in result.output

    def test_unreadable_entry_is_reported(
        self, write_profile: Callable, tmp_path: Path, dumps_dir: Path
    ) -> None:
        """A failing entry shows up under failures and the rest still plans."""
        profile = _profile(write_profile, tmp_path, dumps_dir)

        with patch(
            "cleanctl.filesystem.operator.LocalFilesystem.list_matching",
            side_effect=ResolutionError(str(dumps_dir), PermissionError(13, "Permission denied")),
        ):
            result = runner.invoke(app, ["plan", "-p", str(profile), "-f", "json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [t["path"] for t in data["targets"]] == [str(tmp_path / "a.txt")]
        assert data["failures"][0]["entry"] == 1

    def test_strict_fails_on_unreadable_entry(
        self, write_profile: Callable, tmp_path: Path, dumps_dir: Path
    ) -> None:
        profile = _profile(write_profile, tmp_path, dumps_dir)

        with patch(
            "cleanctl.filesystem.operator.LocalFilesystem.list_matching",
            side_effect=ResolutionError(str(dumps_dir), PermissionError(13, "Permission denied")),
        ):
            result = runner.invoke(app, ["plan", "-p", str(profile), "--strict"])

        assert result.exit_code == 1

    def test_profile_by_name(
        self, monkeypatch, tmp_path: Path, make_file: Callable
    ) -> None:
        """A bare name is looked up in the profiles directory."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
        monkeypatch.chdir(tmp_path)
        make_file(
            tmp_path / "config" / "cleanctl" / "profiles" / "logs.json",
            content=json.dumps({"name": "Logs", "entries": []}),
        )

        result = runner.invoke(app, ["plan", "-p", "logs", "-f", "json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["name"] == "Logs"
