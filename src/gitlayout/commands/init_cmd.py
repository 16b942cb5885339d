"""Command: create a repository skeleton for the given layout."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from gitlayout.commands._base import LayoutCommand

if TYPE_CHECKING:
    from gitlayout.commands._context import AppContext


@click.command(
    "init",
    cls=LayoutCommand,
    examples="""\
  gitlayout init
  gitlayout --git-dir /srv/repos/project.git init --bare
  gitlayout --git-dir /tmp/meta --work-tree ~/src/project init""",
)
@click.option(
    "--bare/--no-bare",
    default=None,
    help="Force bareness; without it the usual precedence rules decide.",
)
@click.pass_obj
def init_cmd(app: AppContext, bare: bool | None) -> None:
    """Create the control directory and record core.bare."""
    app.emit(app.service(create=True).init(bare=bare))
