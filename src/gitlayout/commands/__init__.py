"""gitlayout subcommands.

Command modules are imported inside :func:`register_commands` so that
importing the package stays cheap.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Attach every subcommand to the root group."""
    from gitlayout.commands import config_cmd, init_cmd, query, resolve

    for command in (
        resolve.resolve,
        query.worktree,
        query.index,
        init_cmd.init_cmd,
        config_cmd.config,
    ):
        cli.add_command(command)
