"""Command: resolve the repository layout."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from gitlayout.commands._base import LayoutCommand

if TYPE_CHECKING:
    from gitlayout.commands._context import AppContext


@click.command(
    cls=LayoutCommand,
    examples="""\
  gitlayout resolve
  gitlayout --git-dir /srv/repos/project.git resolve
  gitlayout --work-tree ~/src/project resolve
  gitlayout --json --git-dir ./checkout/.git resolve""",
)
@click.pass_obj
def resolve(app: AppContext) -> None:
    """Show the control directory, work tree and bareness."""
    app.emit(app.service().resolve())
