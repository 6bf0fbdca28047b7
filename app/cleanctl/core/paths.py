"""XDG-compliant path management for cleanctl.

XDG defaults:
- Config: ~/.config/cleanctl/
- Profiles: ~/.config/cleanctl/profiles/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "cleanctl"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/cleanctl/ (or XDG_CONFIG_HOME/cleanctl/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_profiles_dir() -> Path:
    """Get the directory searched for profiles referenced by name.

    Returns:
        Path to ~/.config/cleanctl/profiles/.
    """
    return get_config_dir() / "profiles"


def get_user_theme_path() -> Path:
    """Get the user theme configuration path.

    Returns:
        Path to ~/.config/cleanctl/theme.toml.
    """
    return get_config_dir() / "theme.toml"
