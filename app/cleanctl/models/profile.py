"""Profile models for declarative cleanup.

This module defines the Pydantic models representing a profile JSON
file: a display name plus an ordered list of entries describing what
to delete.
"""

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ExceptionKind(str, Enum):
    """Rule that spares one match of a pattern from deletion.

    Attributes:
        MOST_RECENT: Keep the most recently modified match.
        FIRST_ASCENDING: Keep the match whose file name sorts first.
        FIRST_DESCENDING: Keep the match whose file name sorts last.
    """

    MOST_RECENT = "mostRecent"
    FIRST_ASCENDING = "firstAscending"
    FIRST_DESCENDING = "firstDescending"


class _BaseEntry(BaseModel):
    """Fields shared by every profile entry."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    value: Annotated[str, Field(min_length=1, description="Path or pattern")]

    @field_validator("value")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject values that are only whitespace."""
        if not v.strip():
            msg = "value cannot be blank"
            raise ValueError(msg)
        return v


class FileEntry(_BaseEntry):
    """A single literal file path."""

    type: Literal["file"] = "file"

    def describe(self) -> str:
        """Human-readable label used in prompts and tables."""
        return f"File <{self.value}>"


class DirectoryEntry(_BaseEntry):
    """A single literal directory, deleted with everything beneath it."""

    type: Literal["directory"] = "directory"

    def describe(self) -> str:
        """Human-readable label used in prompts and tables."""
        return f"Directory <{self.value}>"


class PatternEntry(_BaseEntry):
    """A glob-like pattern with an optional exception rule.

    Attributes:
        exception: Rule sparing one match from deletion, if any.
    """

    type: Literal["pattern"] = "pattern"
    exception: Annotated[
        ExceptionKind | None,
        Field(description="Match to spare from deletion"),
    ] = None

    def describe(self) -> str:
        """Human-readable label used in prompts and tables."""
        if self.exception is None:
            return f"Pattern <{self.value}>"
        return f"Pattern <{self.value}> except {self.exception.value}"


Entry = Annotated[FileEntry | DirectoryEntry | PatternEntry, Field(discriminator="type")]


class Profile(BaseModel):
    """A named, ordered set of cleanup entries.

    Attributes:
        name: Display name of the profile.
        entries: Entries to resolve, in order.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: Annotated[str, Field(min_length=1, description="Profile display name")]
    entries: Annotated[tuple[Entry, ...], Field(description="Entries to delete")]

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Reject names that are only whitespace."""
        if not v.strip():
            msg = "name cannot be blank"
            raise ValueError(msg)
        return v
