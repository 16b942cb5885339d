"""Root ``gitlayout`` command: global flags, settings and subcommands."""

from __future__ import annotations

import click

from gitlayout import __version__
from gitlayout.commands import register_commands
from gitlayout.commands._base import LayoutGroup
from gitlayout.commands._context import AppContext
from gitlayout.config.settings import LayoutSettings

_PATH = click.Path(file_okay=False, path_type=str)


@click.group(
    cls=LayoutGroup,
    invoke_without_command=True,
    examples="""\
  gitlayout resolve
  gitlayout -C ~/src/project/lib resolve
  GIT_DIR=/srv/repos/project.git gitlayout --json resolve""",
)
@click.version_option(version=__version__, prog_name="gitlayout")
@click.option("--git-dir", type=_PATH, default=None, help="Control directory (overrides GIT_DIR).")
@click.option(
    "--work-tree", type=_PATH, default=None, help="Working tree (overrides GIT_WORK_TREE)."
)
@click.option(
    "-C",
    "search_from",
    type=click.Path(exists=True, file_okay=False, path_type=str),
    default=None,
    help="Start repository discovery here instead of the current directory.",
)
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Print only the value asked for.")
@click.option("-v", "--verbose", is_flag=True, help="Resolution rule, debug logs and timings.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.pass_context
def cli(
    ctx: click.Context,
    git_dir: str | None,
    work_tree: str | None,
    search_from: str | None,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
) -> None:
    """gitlayout: find a repository's control directory, work tree and bareness."""
    ctx.obj = AppContext(
        LayoutSettings.from_cli(
            git_dir=git_dir,
            work_tree=work_tree,
            search_from=search_from,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
        )
    )
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
