"""Human-readable rendering of ServiceResult, one renderer per operation.

Renderers print into a buffer-backed Rich console; :func:`render_result`
returns the buffer text. Every operation the CLI exposes has an entry in
``_OP_RENDERERS``.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from gitlayout.output.console import (
    PATH_KEYS,
    bare_text,
    create_console,
    get_output,
    path_text,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from gitlayout.services.result import ServiceResult

    Renderer = Callable[[ServiceResult, Console, bool], None]

# Spans slower than this are highlighted in the timing tree.
SLOW_SPAN_MS = 100.0


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render *result* for a terminal; plain text when not on a TTY."""
    console = create_console()
    if not result.ok:
        _render_error(result, console, verbose)
    else:
        _OP_RENDERERS[result.op](result, console, verbose)
        if verbose and result.meta:
            _render_meta(console, result.meta)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """The single value a script would want, or a one-line error."""
    if not result.ok:
        code = result.error.code if result.error else "UNKNOWN"
        return f"ERROR: {result.op} [{code}]"
    for key in _QUIET_KEYS.get(result.op, ()):
        if result.data.get(key) is not None:
            return str(result.data[key])
    return f"OK: {result.op}"


def _value_text(key: str, value: Any) -> Text:
    if key in PATH_KEYS:
        return path_text(value)
    if key == "bare":
        return bare_text(bool(value))
    return Text(str(value))


def _print_fields(console: Console, data: dict[str, Any], keys: Iterable[str]) -> None:
    for key in keys:
        if key in data:
            console.print(
                Text.assemble(("  " + key + ": ", "gl.key"), _value_text(key, data[key]))
            )


def _print_status(console: Console, result: ServiceResult) -> None:
    console.print(Text.assemble(("OK", "gl.ok"), ("  " + result.op, "gl.op")))


def _span_label(span: dict[str, Any]) -> Text:
    duration = float(span.get("duration_ms", 0.0))
    label = Text.assemble(
        (f"{duration:8.2f}ms", "yellow" if duration > SLOW_SPAN_MS else "dim"),
        "  ",
        str(span.get("name", "?")),
    )
    notes = span.get("annotations") or {}
    if notes:
        label.append("  (" + ", ".join(f"{k}={v}" for k, v in notes.items()) + ")", style="dim")
    return label


def _add_spans(tree: Tree, span: dict[str, Any]) -> None:
    branch = tree.add(_span_label(span))
    for child in span.get("children", ()):
        _add_spans(branch, child)


def _render_meta(console: Console, meta: dict[str, Any]) -> None:
    console.print()
    tree = Tree(Text("meta", style="dim"), guide_style="dim")
    for key, value in meta.items():
        if key == "telemetry":
            _add_spans(tree, value)
        else:
            tree.add(f"{key}: {value}")
    console.print(tree)


def _render_error(result: ServiceResult, console: Console, verbose: bool) -> None:
    err = result.error
    line = Text.assemble(("ERROR", "gl.error"), ("  " + result.op, "gl.op"))
    if err is None:
        line.append(" - Unknown error")
        console.print(line)
        return
    line.append(f" [{err.code}]", style="gl.code")
    line.append(f" - {err.message}")
    console.print(line)
    if verbose and err.detail:
        console.print(Text("  detail:", style="dim"))
        for key, value in err.detail.items():
            console.print(f"    {key}: {value}")


def _render_layout(result: ServiceResult, console: Console, verbose: bool) -> None:
    """git_dir / work_tree / bare as an aligned two-column table."""
    _print_status(console, result)
    data = result.data
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column(style="gl.key", no_wrap=True)
    table.add_column()
    table.add_row("git_dir", path_text(data.get("git_dir")))
    table.add_row("work_tree", path_text(data.get("work_tree")))
    table.add_row("bare", bare_text(bool(data.get("bare"))))
    if verbose and data.get("rule"):
        table.add_row("rule", str(data["rule"]))
    console.print(table)


def _fields(*keys: str) -> Renderer:
    def render(result: ServiceResult, console: Console, verbose: bool) -> None:
        _print_status(console, result)
        _print_fields(console, result.data, keys)

    return render


_OP_RENDERERS: dict[str, Renderer] = {
    "resolve": _render_layout,
    "init": _render_layout,
    "work_tree": _fields("work_tree", "git_dir"),
    "index": _fields("index_file", "exists", "entries"),
    "config_get": _fields("section", "key", "value"),
    "config_set": _fields("section", "key", "value", "path"),
}

_QUIET_KEYS: dict[str, tuple[str, ...]] = {
    "resolve": ("git_dir",),
    "init": ("git_dir",),
    "work_tree": ("work_tree",),
    "index": ("index_file",),
    "config_get": ("value",),
}
