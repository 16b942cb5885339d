"""Command group: read and write repository-local config keys."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from gitlayout.commands._base import LayoutGroup

if TYPE_CHECKING:
    from gitlayout.commands._context import AppContext


@click.group(
    cls=LayoutGroup,
    examples="""\
  gitlayout config get core bare
  gitlayout --git-dir ./meta config set core worktree ../checkout""",
)
def config() -> None:
    """Read and write keys in <git-dir>/config."""


@config.command(
    "get",
    examples="""\
  gitlayout config get core bare
  gitlayout -q config get core worktree""",
)
@click.argument("section")
@click.argument("key")
@click.pass_obj
def config_get(app: AppContext, section: str, key: str) -> None:
    """Print the value of SECTION.KEY."""
    app.emit(app.service().config_get(section, key))


@config.command(
    "set",
    examples="""\
  gitlayout config set core bare true
  gitlayout config set core worktree /srv/checkouts/project""",
)
@click.argument("section")
@click.argument("key")
@click.argument("value")
@click.pass_obj
def config_set(app: AppContext, section: str, key: str, value: str) -> None:
    """Set SECTION.KEY to VALUE."""
    app.emit(app.service().config_set(section, key, value))
