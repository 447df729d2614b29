"""Tests for Rich Console factory and theme."""

from io import StringIO

from forcemap.output.console import FORCEMAP_THEME, create_console, get_output


class TestCreateConsole:
    def test_returns_console_with_stringio(self) -> None:
        console = create_console()
        assert isinstance(console.file, StringIO)

    def test_plain_output_when_not_a_terminal(self) -> None:
        console = create_console()
        console.print("[fm.error]boom[/fm.error]")
        output = get_output(console)
        assert "\x1b" not in output
        assert output == "boom\n"

    def test_fixed_width(self) -> None:
        assert create_console().width == 120


class TestTheme:
    def test_styles_registered(self) -> None:
        for name in ("fm.ok", "fm.error", "fm.op", "fm.id", "fm.group", "fm.number"):
            assert name in FORCEMAP_THEME.styles
