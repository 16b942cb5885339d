"""Rich console and styling helpers for gitlayout output.

Consoles render into a StringIO buffer so renderers stay pure
``ServiceResult -> str`` functions. Rich drops color codes on its own
when the buffer is not a terminal (tests, pipes).
"""

from __future__ import annotations

from io import StringIO
from pathlib import Path

from rich.console import Console
from rich.text import Text
from rich.theme import Theme

DEFAULT_WIDTH = 120

LAYOUT_THEME = Theme(
    {
        "gl.ok": "bold green",
        "gl.error": "bold red",
        "gl.warning": "bold yellow",
        "gl.op": "bold cyan",
        "gl.key": "dim",
        "gl.path": "bold blue",
        "gl.missing": "dim italic",
        "gl.code": "bold magenta",
        "gl.bare": "yellow",
        "gl.nonbare": "green",
    }
)

# Data keys whose values are filesystem paths.
PATH_KEYS = frozenset({"git_dir", "work_tree", "index_file", "path"})


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """A themed Console writing to an in-memory buffer."""
    return Console(
        file=StringIO(),
        theme=LAYOUT_THEME,
        no_color=no_color,
        highlight=False,
        width=width or DEFAULT_WIDTH,
    )


def get_output(console: Console) -> str:
    if not isinstance(console.file, StringIO):
        msg = "console was not created by create_console()"
        raise TypeError(msg)
    return console.file.getvalue()


def style_for_bare(bare: bool) -> str:
    return "gl.bare" if bare else "gl.nonbare"


def path_text(value: str | Path | None) -> Text:
    """A path styled as such; ``None`` shows as ``(none)``."""
    if value is None or value == "":
        return Text("(none)", style="gl.missing")
    return Text(str(value), style="gl.path")


def bare_text(bare: bool) -> Text:
    return Text(str(bare).lower(), style=style_for_bare(bare))
