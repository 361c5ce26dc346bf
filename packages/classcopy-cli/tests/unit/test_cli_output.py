"""Unit tests for classcopy_cli.output module."""

from __future__ import annotations

from collections.abc import Iterator
import logging
from unittest.mock import patch

import pytest

from classcopy_cli import output


@pytest.fixture
def plain_console() -> Iterator[None]:
    """Swap in a colorless console writing to the captured stdout."""
    original = output.console
    output.console = output.create_console(no_color=True)
    yield
    output.console = original


class TestCreateConsole:
    def test_no_color(self) -> None:
        assert output.create_console(no_color=True).no_color is True

    def test_no_color_env_var(self) -> None:
        with patch.object(output, "_force_no_color", True):
            assert output.create_console().no_color is True


@pytest.mark.usefixtures("plain_console")
class TestMessages:
    """Tests for the status line helpers."""

    def test_success(self, capsys: pytest.CaptureFixture[str]) -> None:
        output.success("Configuration valid")

        assert capsys.readouterr().out == "✓ Configuration valid\n"

    def test_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        output.error("Compilation failed")

        assert capsys.readouterr().out == "✗ Compilation failed\n"

    def test_warning(self, capsys: pytest.CaptureFixture[str]) -> None:
        output.warning("Source root does not exist")

        assert capsys.readouterr().out == "⚠ Source root does not exist\n"

    def test_info_without_markup(self, capsys: pytest.CaptureFixture[str]) -> None:
        output.info("[not markup]", markup=False)

        assert capsys.readouterr().out == "[not markup]\n"

    def test_print_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        output.print_json({"success": True})

        assert '"success": true' in capsys.readouterr().out


class TestSetNoColor:
    def test_replaces_console(self) -> None:
        original = output.console
        try:
            output.set_no_color(True)
            assert output.console is not original
            assert output.console.no_color is True
        finally:
            output.console = original


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_defaults_to_warning(self) -> None:
        output.setup_logging()

        assert logging.getLogger().level == logging.WARNING

    def test_level_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(output.LOG_LEVEL_ENV_VAR, "debug")

        output.setup_logging()

        assert logging.getLogger().level == logging.DEBUG

    def test_unknown_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(output.LOG_LEVEL_ENV_VAR, "chatty")

        with pytest.raises(ValueError, match="Unknown log level"):
            output.setup_logging()
