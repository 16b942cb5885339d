"""AppContext: per-invocation state shared by every subcommand.

The root group builds one from :class:`LayoutSettings`; subcommands
receive it through ``@click.pass_obj``, ask it for a LayoutService and
hand the result back to :meth:`AppContext.emit`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from gitlayout.config.logging import configure_logging
from gitlayout.output.formatters import OutputSettings, format_result
from gitlayout.services.telemetry import enable_telemetry

if TYPE_CHECKING:
    from gitlayout.config.settings import LayoutSettings
    from gitlayout.services.layout import LayoutService
    from gitlayout.services.result import ServiceResult


class AppContext:
    """Settings, logging and output routing for one CLI run."""

    def __init__(self, settings: LayoutSettings) -> None:
        self.settings = settings
        self.output = OutputSettings(
            json_output=settings.json_output,
            quiet=settings.quiet,
            verbose=settings.verbose,
        )
        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
        )
        if settings.verbose:
            enable_telemetry()

    def service(self, *, create: bool = False) -> LayoutService:
        from gitlayout.services.layout import LayoutService

        return LayoutService(self.settings.to_hints(create=create))

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; exit with status 1 when it failed.

        Successes go to stdout with warnings on stderr (JSON output carries
        warnings in the payload instead). Failures go to stderr.
        """
        rendered = format_result(result, settings=self.output)
        if not result.ok:
            click.echo(rendered, err=True)
            raise SystemExit(1)

        click.echo(rendered)
        if self.output.json_output:
            return
        for warning in result.warnings:
            click.echo(f"WARNING: {warning}", err=True)
