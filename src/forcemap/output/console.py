"""Rich Console factory and theme for forcemap output.

Consoles render into a StringIO buffer so ``format_result() -> str`` stays
a pure function. In non-TTY environments (tests, pipes) Rich drops color
codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

FORCEMAP_THEME = Theme(
    {
        "fm.ok": "bold green",
        "fm.error": "bold red",
        "fm.op": "bold cyan",
        "fm.key": "dim",
        "fm.id": "bold blue",
        "fm.group": "magenta",
        "fm.number": "cyan",
    }
)


def create_console() -> Console:
    return Console(file=StringIO(), theme=FORCEMAP_THEME, highlight=False, width=120)


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
