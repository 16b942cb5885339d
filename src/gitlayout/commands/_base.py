"""Click base classes that add an eager ``--examples`` flag.

``examples=`` on a command or group attaches the flag; passing it prints
the text and exits before the command body (or the repository) is touched.
"""

from __future__ import annotations

from typing import Any

import click


def _examples_callback(examples: str) -> Any:
    def show(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if value and not ctx.resilient_parsing:
            click.echo(f"Examples for '{ctx.command_path}':\n")
            click.echo(examples)
            ctx.exit(0)

    return show


class _ExamplesMixin:
    params: list[click.Parameter]

    def _init_examples(self, examples: str | None) -> None:
        self.examples = examples
        if not examples:
            return
        self.params.append(
            click.Option(
                ["--examples"],
                is_flag=True,
                expose_value=False,
                is_eager=True,
                callback=_examples_callback(examples),
                help="Show usage examples.",
            )
        )


class LayoutCommand(_ExamplesMixin, click.Command):
    """Command accepting ``examples=``."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)


class LayoutGroup(_ExamplesMixin, click.Group):
    """Group accepting ``examples=``; its subcommands default to LayoutCommand."""

    command_class = LayoutCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)
