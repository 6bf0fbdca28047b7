"""End-to-end tests for profile runs against a real temporary directory."""

from collections.abc import Callable
from pathlib import Path

import pytest
from cleanctl.core.engine import build_plan, run_profile
from cleanctl.core.errors import PatternSyntaxError
from cleanctl.core.policy import ConfirmationMode, Decision
from cleanctl.models.outcome import OutcomeStatus
from cleanctl.models.profile import (
    DirectoryEntry,
    ExceptionKind,
    FileEntry,
    PatternEntry,
    Profile,
)


@pytest.fixture
def example_profile(tmp_path: Path, make_file: Callable, dumps_dir: Path) -> Profile:
    """Profile deleting a.txt and every dump except the newest."""
    make_file(tmp_path / "a.txt", content="hello")
    return Profile(
        name="Example",
        entries=(
            FileEntry(value=str(tmp_path / "a.txt")),
            PatternEntry(value=f"{dumps_dir}/*.dmp", exception=ExceptionKind.MOST_RECENT),
        ),
    )


class TestRunProfile:
    """Tests for run_profile()."""

    def test_silent_run_spares_newest_dump(
        self, tmp_path: Path, dumps_dir: Path, example_profile: Profile
    ) -> None:
        """Only a.txt and the older dump are removed."""
        plan, report = run_profile(example_profile, ConfirmationMode.SILENT)

        assert len(plan) == 2
        assert report.deleted == 2
        assert report.failed == 0
        assert not (tmp_path / "a.txt").exists()
        assert not (dumps_dir / "1.dmp").exists()
        assert (dumps_dir / "2.dmp").exists()

    def test_second_run_is_idempotent(
        self, tmp_path: Path, dumps_dir: Path, example_profile: Profile
    ) -> None:
        """A repeated run deletes nothing more and reports no failures."""
        run_profile(example_profile, ConfirmationMode.SILENT)

        plan, report = run_profile(example_profile, ConfirmationMode.SILENT)

        # The lone remaining dump is now the newest and is spared again
        assert [t.path for t in plan.targets] == [str(tmp_path / "a.txt")]
        assert [(o.status, o.reason) for o in report.outcomes] == [
            (OutcomeStatus.SKIPPED, "not found")
        ]
        assert report.failed == 0
        assert (dumps_dir / "2.dmp").exists()

    def test_every_entry_mode_skips_declined_entries(
        self,
        tmp_path: Path,
        dumps_dir: Path,
        example_profile: Profile,
        make_confirmer: Callable,
    ) -> None:
        """Declining the pattern entry leaves all dumps in place."""
        confirmer = make_confirmer(Decision.YES, Decision.NO)

        plan, report = run_profile(
            example_profile, ConfirmationMode.EVERY_ENTRY, confirmer=confirmer
        )

        assert [t.path for t in plan.targets] == [str(tmp_path / "a.txt")]
        assert report.deleted == 1
        assert (dumps_dir / "1.dmp").exists()
        assert confirmer.asked == []
        assert len(confirmer.asked_entries) == 2

    def test_every_path_mode_prompts_per_target(
        self,
        tmp_path: Path,
        dumps_dir: Path,
        example_profile: Profile,
        make_confirmer: Callable,
    ) -> None:
        """Each existing target is confirmed individually."""
        confirmer = make_confirmer(Decision.NO, Decision.YES)

        _, report = run_profile(
            example_profile, ConfirmationMode.EVERY_PATH, confirmer=confirmer
        )

        assert confirmer.asked == [str(tmp_path / "a.txt"), str(dumps_dir / "1.dmp")]
        assert (tmp_path / "a.txt").exists()
        assert not (dumps_dir / "1.dmp").exists()
        assert report.deleted == 1
        assert report.skipped == 1

    def test_malformed_pattern_deletes_nothing(
        self, tmp_path: Path, make_file: Callable
    ) -> None:
        """A configuration error surfaces before any removal."""
        victim = make_file(tmp_path / "victim.txt")
        profile = Profile(
            name="Broken",
            entries=(
                FileEntry(value=str(victim)),
                PatternEntry(value=f"{tmp_path}/a**b"),
            ),
        )

        with pytest.raises(PatternSyntaxError):
            run_profile(profile, ConfirmationMode.SILENT)

        assert victim.exists()

    def test_directory_entry_removes_tree(self, tmp_path: Path, make_file: Callable) -> None:
        """A directory entry reclaims everything beneath it."""
        make_file(tmp_path / "cache" / "a" / "b.bin", content="x" * 10)
        make_file(tmp_path / "cache" / "c.bin", content="y" * 5)
        profile = Profile(name="Cache", entries=(DirectoryEntry(value=str(tmp_path / "cache")),))

        _, report = run_profile(profile, ConfirmationMode.SILENT)

        assert report.bytes_freed == 15
        assert not (tmp_path / "cache").exists()


def test_build_plan_does_not_delete(example_profile: Profile, tmp_path: Path) -> None:
    """Planning alone leaves the filesystem untouched."""
    plan = build_plan(example_profile)

    assert len(plan) == 2
    assert all(Path(t.path).exists() for t in plan.targets)
    assert (tmp_path / "a.txt").exists()
