from __future__ import annotations

import sys
from unittest.mock import patch

import pytest

from depmirror.models import Category
from depmirror.utils.console import (
    DEPMIRROR_THEME,
    _should_use_color,
    colorize_category,
    confirm,
    get_raw_console,
    print_error,
    print_success,
    print_table,
    print_warning,
    reconfigure_console,
)


@pytest.mark.unit
class TestColorDetection:
    """Tests for _should_use_color."""

    def test_no_color(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NO_COLOR", "1")

        assert _should_use_color() is False

    def test_ci(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("CI", "true")

        assert _should_use_color() is False

    def test_tty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("CI", raising=False)

        with patch.object(sys.stdout, "isatty", return_value=True):
            assert _should_use_color() is True


@pytest.mark.unit
class TestConsoleSingleton:
    """Tests for the shared console."""

    def test_same_instance(self) -> None:
        assert get_raw_console() is get_raw_console()

    def test_reconfigure_creates_new_instance(self) -> None:
        first = get_raw_console()

        reconfigure_console()

        assert get_raw_console() is not first

    def test_theme_styles(self) -> None:
        for name in ("success", "error", "warning", "info", "dim", "highlight"):
            assert name in DEPMIRROR_THEME.styles


@pytest.mark.unit
class TestMessages:
    """Tests for the print helpers."""

    def test_print_success(self, capsys: pytest.CaptureFixture[str]) -> None:
        print_success("Added 2 crate(s)")

        assert "[OK] Added 2 crate(s)" in capsys.readouterr().out

    def test_print_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        print_error("Registry file not found")

        assert "[ERROR] Registry file not found" in capsys.readouterr().out

    def test_print_warning_keeps_brackets(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test bracketed text is printed literally, not as markup."""
        print_warning("serde-1.0.210 [minor/patch upgrade from 1.0.195]", prefix="")

        assert "[minor/patch upgrade from 1.0.195]" in capsys.readouterr().out

    def test_print_table(self, capsys: pytest.CaptureFixture[str]) -> None:
        print_table(
            [
                {"Package": "serde", "Change": "minor-patch"},
                {"Package": "itoa", "Change": "major"},
            ],
            title="Missing crates",
        )

        out = capsys.readouterr().out
        assert "Missing crates" in out
        assert "Package" in out
        assert "serde" in out
        assert "itoa" in out

    def test_print_table_empty(self, capsys: pytest.CaptureFixture[str]) -> None:
        print_table([])

        assert capsys.readouterr().out == ""


@pytest.mark.unit
class TestConfirm:
    """Tests for confirm."""

    @pytest.mark.parametrize(
        "answer, default, expected",
        [
            ("y", False, True),
            ("YES", False, True),
            ("n", True, False),
            ("", True, True),
            ("", False, False),
            ("maybe", False, False),
        ],
    )
    def test_answers(self, answer: str, default: bool, expected: bool) -> None:
        with patch("builtins.input", return_value=answer):
            assert confirm("Write registry?", default=default) is expected

    @pytest.mark.parametrize("error", [EOFError, KeyboardInterrupt])
    def test_interrupted(self, error: type) -> None:
        with patch("builtins.input", side_effect=error):
            assert confirm("Write registry?", default=True) is False


@pytest.mark.unit
class TestColorizeCategory:
    """Tests for colorize_category."""

    @pytest.mark.parametrize(
        "category, expected",
        [
            (Category.MINOR_PATCH_UPGRADE, "[green]minor-patch[/green]"),
            (Category.MAJOR_UPGRADE, "[red]major[/red]"),
            (Category.DOWNGRADE, "[red]downgrade[/red]"),
            (Category.NEW_DEPENDENCY, "[cyan]new[/cyan]"),
            (Category.SATISFIED_EXACT, "satisfied"),
        ],
    )
    def test_markup(self, category: Category, expected: str) -> None:
        assert colorize_category(category) == expected
