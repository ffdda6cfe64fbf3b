"""Root CLI group for cmdlint with global flags and command registration."""

from __future__ import annotations

import click

from cmdlint import __version__
from cmdlint.commands import register_commands
from cmdlint.commands._base import LintGroup
from cmdlint.commands._context import AppContext
from cmdlint.config.settings import CmdlintSettings
from cmdlint.errors import ConfigurationError


@click.group(cls=LintGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="cmdlint")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="One line per command.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """cmdlint — convention checks for shell command definitions."""
    try:
        settings = CmdlintSettings.from_cli(
            config_path=config_path,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
        )
    except ConfigurationError as exc:
        raise click.UsageError(str(exc)) from exc
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
