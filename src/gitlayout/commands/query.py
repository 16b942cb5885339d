"""Commands: working-tree queries (fail on bare repositories)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from gitlayout.commands._base import LayoutCommand

if TYPE_CHECKING:
    from gitlayout.commands._context import AppContext


@click.command(
    cls=LayoutCommand,
    examples="""\
  gitlayout worktree
  gitlayout -q --git-dir ./checkout/.git worktree""",
)
@click.pass_obj
def worktree(app: AppContext) -> None:
    """Show the working tree root."""
    app.emit(app.service().work_tree())


@click.command(
    cls=LayoutCommand,
    examples="""\
  gitlayout index
  gitlayout --json index""",
)
@click.pass_obj
def index(app: AppContext) -> None:
    """Show the index file and how many entries it holds."""
    app.emit(app.service().index())
