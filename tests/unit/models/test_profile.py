"""Unit tests for profile models."""

import pytest
from cleanctl.models.profile import (
    DirectoryEntry,
    ExceptionKind,
    FileEntry,
    PatternEntry,
    Profile,
)
from pydantic import ValidationError


class TestEntries:
    """Tests for entry models."""

    def test_discriminated_by_type(self) -> None:
        """The 'type' field selects the entry model."""
        profile = Profile.model_validate(
            {
                "name": "p",
                "entries": [
                    {"type": "directory", "value": "/d"},
                    {"type": "pattern", "value": "/d/*"},
                ],
            }
        )

        assert isinstance(profile.entries[0], DirectoryEntry)
        assert isinstance(profile.entries[1], PatternEntry)
        assert profile.entries[1].exception is None

    def test_entries_are_frozen(self) -> None:
        """Entries cannot be modified after creation."""
        entry = FileEntry(value="/a")

        with pytest.raises(ValidationError):
            entry.value = "/b"  # type: ignore[misc]

    def test_pattern_rejects_unknown_exception(self) -> None:
        """Only the three documented exception kinds are accepted."""
        with pytest.raises(ValidationError):
            PatternEntry(value="/a/*", exception="leastRecent")  # type: ignore[arg-type]

    @pytest.mark.parametrize("value", ["mostRecent", "firstAscending", "firstDescending"])
    def test_exception_wire_names(self, value: str) -> None:
        """Exception kinds parse from their JSON names."""
        assert PatternEntry(value="/a/*", exception=value).exception == ExceptionKind(value)  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        ("entry", "expected"),
        [
            (FileEntry(value="/a"), "File </a>"),
            (DirectoryEntry(value="/d"), "Directory </d>"),
            (PatternEntry(value="/d/*"), "Pattern </d/*>"),
            (
                PatternEntry(value="/d/*", exception=ExceptionKind.FIRST_ASCENDING),
                "Pattern </d/*> except firstAscending",
            ),
        ],
    )
    def test_describe(self, entry: FileEntry | DirectoryEntry | PatternEntry, expected: str) -> None:
        """describe() produces the label shown to users."""
        assert entry.describe() == expected


class TestProfile:
    """Tests for the Profile model."""

    def test_blank_name_rejected(self) -> None:
        """A whitespace-only name is not a usable display name."""
        with pytest.raises(ValidationError, match="name cannot be blank"):
            Profile(name="  \t ", entries=())

    def test_entries_required(self) -> None:
        """A profile must list its entries, even if empty."""
        with pytest.raises(ValidationError):
            Profile.model_validate({"name": "p"})
