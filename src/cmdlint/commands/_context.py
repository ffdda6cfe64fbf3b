"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``. Plugins are discovered lazily so ``--help`` and
``--version`` never touch entry points.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from cmdlint.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from cmdlint.config.settings import CmdlintSettings
    from cmdlint.plugins.manager import PluginManager
    from cmdlint.services.batch import BatchService
    from cmdlint.services.result import ServiceResult


class AppContext:
    """State shared by every subcommand of one invocation."""

    def __init__(self, settings: CmdlintSettings) -> None:
        self.settings = settings
        self._plugins: PluginManager | None = None

        from cmdlint.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def plugins(self) -> PluginManager | None:
        """Loaded plugin manager, or None when ``[plugins] enabled = false``."""
        if not self.settings.plugins.enabled:
            return None
        if self._plugins is None:
            from cmdlint.plugins.manager import PluginManager

            self._plugins = PluginManager()
            self._plugins.discover_and_load(disabled=self.settings.plugins.disabled)
        return self._plugins

    def batch_service(self, commands_file: Path | None, *, url_checks: bool) -> BatchService:
        """Build a :class:`BatchService` over *commands_file*.

        Raises:
            ConfigurationError: If the catalogue cannot be read.
        """
        from cmdlint.infrastructure.catalog import JsonCatalog
        from cmdlint.infrastructure.http import fetch_url_status
        from cmdlint.services.batch import BatchService
        from cmdlint.services.providers import CatalogDescriptorProvider, StaticDescriptorProvider

        if commands_file is None:
            provider: CatalogDescriptorProvider | StaticDescriptorProvider = (
                StaticDescriptorProvider([])
            )
        else:
            provider = CatalogDescriptorProvider(JsonCatalog.from_path(commands_file))
        return BatchService.from_settings(
            self.settings,
            provider,
            plugins=self.plugins,
            fetch_url_status=fetch_url_status if url_checks else None,
        )

    def emit(self, result: ServiceResult, *, healthy: bool = True) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: stdout; warnings go to stderr unless ``--json`` is set.
          Exits 1 afterwards when *healthy* is false.
        * Failure: stderr, exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # JSON payloads already carry their warnings.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
            if not healthy:
                raise SystemExit(1)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
