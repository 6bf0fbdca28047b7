"""Profile file I/O.

This module loads profile JSON files and validates them with the
Pydantic models in :mod:`cleanctl.models.profile`.
"""

import json
import os
from pathlib import Path

from pydantic import ValidationError

from cleanctl.core.errors import ConfigurationError
from cleanctl.core.paths import get_profiles_dir
from cleanctl.models.profile import Profile


class ProfileError(ConfigurationError):
    """Base exception for profile-related errors."""


class ProfileNotFoundError(ProfileError):
    """Raised when a profile file is not found."""


class ProfileParseError(ProfileError):
    """Raised when a profile file is not valid JSON."""


class ProfileValidationError(ProfileError):
    """Raised when profile content does not match the schema."""


def find_profile(reference: Path) -> Path:
    """Locate a profile file.

    A reference that exists is used as-is. A bare name without a
    directory part (e.g. ``browsers`` or ``browsers.json``) is also
    looked up in the user profile directory.

    Args:
        reference: Path or bare profile name given by the user.

    Returns:
        Path to the profile file (which may not exist).
    """
    if reference.exists():
        return reference

    if len(reference.parts) == 1:
        name = reference.name if reference.suffix == ".json" else f"{reference.name}.json"
        candidate = get_profiles_dir() / name
        if candidate.exists():
            return candidate

    return reference


def load_profile(path: Path) -> Profile:
    """Load and validate a profile from a JSON file.

    Args:
        path: Path to the profile file, or a bare profile name.

    Returns:
        Validated, immutable Profile.

    Raises:
        ProfileNotFoundError: If the profile file doesn't exist.
        ProfileParseError: If the JSON syntax is invalid.
        ProfileValidationError: If the content doesn't match the schema.
        ProfileError: If the file cannot be read.
    """
    profile_path = find_profile(Path(os.path.expanduser(str(path))))

    if not profile_path.is_file():
        raise ProfileNotFoundError(f"Profile not found: {profile_path}")

    try:
        with open(profile_path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ProfileParseError(f"Invalid JSON syntax: {e}") from e
    except UnicodeDecodeError as e:
        raise ProfileParseError(f"Profile is not valid UTF-8: {e}") from e
    except OSError as e:
        raise ProfileError(f"Failed to read profile: {e}") from e

    return parse_profile(data)


def parse_profile(data: object) -> Profile:
    """Validate already-decoded profile data.

    Args:
        data: Decoded JSON document.

    Returns:
        Validated Profile.

    Raises:
        ProfileValidationError: If the content doesn't match the schema.
    """
    try:
        return Profile.model_validate(data)
    except ValidationError as e:
        raise ProfileValidationError(f"Invalid profile content: {e}") from e


def require_profile(profile_path: Path) -> Profile:
    """Load a profile or exit with a helpful error message.

    Convenience wrapper around load_profile() for CLI commands.

    Args:
        profile_path: Path or bare name of the profile.

    Returns:
        Loaded and validated Profile.

    Raises:
        typer.Exit: If the profile cannot be loaded.
    """
    import typer

    from cleanctl.utils.formatting import print_error, print_info

    try:
        return load_profile(profile_path)
    except ProfileNotFoundError as e:
        print_error(str(e))
        print_info(f"Profiles can also be placed in {get_profiles_dir()}.")
        raise typer.Exit(code=1) from e
    except ProfileError as e:
        print_error(f"Failed to load profile: {e}")
        raise typer.Exit(code=1) from e
