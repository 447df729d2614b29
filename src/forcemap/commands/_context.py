"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. The graph store is built lazily so ``--help`` never
touches the dataset.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from forcemap.config.logging import configure_logging
from forcemap.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from forcemap.config.settings import ForcemapSettings
    from forcemap.infrastructure.store import GraphStore
    from forcemap.services.result import ServiceResult


class AppContext:
    def __init__(self, settings: ForcemapSettings) -> None:
        self.settings = settings
        self._store: GraphStore | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def store(self) -> GraphStore:
        """The dataset store (created on first access)."""
        if self._store is None:
            from forcemap.infrastructure.store import GraphStore

            self._store = GraphStore(self.settings.dataset.path)
        return self._store

    def emit(self, result: ServiceResult) -> None:
        """Print a ServiceResult and exit 1 on failure.

        Success goes to stdout with warnings on stderr, so piped output
        stays clean. Failures go to stderr.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
