"""Unit tests for theme loading and Rich theme generation."""

# pyright: reportPrivateUsage=false

from pathlib import Path
from unittest.mock import patch

import cleanctl.core.theme as theme_module
import pytest
from cleanctl.core.theme import (
    ThemeColors,
    _load_toml_colors,
    get_rich_theme,
    get_theme,
    load_theme,
)
from rich.theme import Theme


class TestThemeColors:
    """Tests for ThemeColors validation."""

    def test_accepts_short_and_long_hex(self) -> None:
        colors = ThemeColors(text="#abc", deleted="#A1B2C3")

        assert colors.text == "#abc"
        assert colors.deleted == "#A1B2C3"

    @pytest.mark.parametrize(
        ("value", "message"),
        [
            ("ffffff", "must start with '#'"),
            ("#ff", "must be #RGB or #RRGGBB"),
            ("#zzzzzz", "invalid hex color"),
        ],
    )
    def test_rejects_bad_colors(self, value: str, message: str) -> None:
        with pytest.raises(ValueError, match=message):
            ThemeColors(kind_file=value)

    def test_unknown_color_rejected(self) -> None:
        with pytest.raises(ValueError):
            ThemeColors(package_manual="#ffffff")  # type: ignore[call-arg]


class TestLoadTomlColors:
    """Tests for _load_toml_colors()."""

    def test_reads_colors_section(self, tmp_path: Path) -> None:
        path = tmp_path / "theme.toml"
        path.write_text('[colors]\nskipped = "#000000"\nborder = 5\n')

        # Non-string values are dropped
        assert _load_toml_colors(path) == {"skipped": "#000000"}

    def test_missing_file(self, tmp_path: Path) -> None:
        assert _load_toml_colors(tmp_path / "absent.toml") is None

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "theme.toml"
        path.write_text("[colors\n")

        assert _load_toml_colors(path) is None


class TestLoadTheme:
    """Tests for load_theme() override behavior."""

    def test_bundled_defaults(self, tmp_path: Path) -> None:
        """Without a user file the bundled theme applies."""
        with patch(
            "cleanctl.core.theme.get_user_theme_path",
            return_value=tmp_path / "none.toml",
        ):
            colors = load_theme()

        assert colors.header == "#69B9A1"
        assert colors.kind_directory == "#c1ff62"

    def test_partial_user_override(self, tmp_path: Path) -> None:
        """A user file may override a subset of colors."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text('[colors]\ndeleted = "#00ff00"\n')

        with patch("cleanctl.core.theme.get_user_theme_path", return_value=user_theme):
            colors = load_theme()

        assert colors.deleted == "#00ff00"
        assert colors.skipped == "#faf870"

    def test_invalid_user_color_falls_back(self, tmp_path: Path) -> None:
        """An invalid override yields the model defaults rather than an error."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text('[colors]\nerror = "red"\n')

        with patch("cleanctl.core.theme.get_user_theme_path", return_value=user_theme):
            colors = load_theme()

        assert colors == ThemeColors()


class TestRichTheme:
    """Tests for get_rich_theme() and get_theme()."""

    def test_outcome_and_kind_styles(self) -> None:
        theme = get_rich_theme(ThemeColors())

        for name in (
            "kind.file",
            "kind.directory",
            "outcome.deleted",
            "outcome.skipped",
            "outcome.failed",
            "path",
        ):
            assert name in theme.styles

    def test_error_style_is_bold(self) -> None:
        theme = get_rich_theme(ThemeColors())

        assert theme.styles["error"].bold is True

    def test_get_theme_caches(self) -> None:
        theme_module._cached_theme = None

        first = get_theme()

        assert isinstance(first, Theme)
        assert get_theme() is first
