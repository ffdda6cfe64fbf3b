"""Command: check commands against the rule catalogue."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from cmdlint.commands._base import LintCommand
from cmdlint.domain.types import ReportMode
from cmdlint.errors import ConfigurationError

if TYPE_CHECKING:
    from cmdlint.commands._context import AppContext


@click.command(
    cls=LintCommand,
    examples="""\
  cmdlint check Get-Widget --commands commands.json
  cmdlint check Get-Widget Set-Widget --commands commands.json --mode failed
  cmdlint check Get-Widget --commands commands.json --optional --mode full
  cmdlint check Remove-Widget --commands commands.json --regression --no-url-check
  cmdlint --json check Get-Widget --commands commands.json""",
)
@click.argument("names", nargs=-1, required=True)
@click.option(
    "--commands",
    "commands_file",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="JSON file of exported command descriptors.",
)
@click.option("--optional", "include_optional", is_flag=True, help="Include Optional rules.")
@click.option(
    "--wip",
    "include_work_in_progress",
    is_flag=True,
    help="Include WorkInProgress rules (implies --optional).",
)
@click.option(
    "--regression",
    "include_regression",
    is_flag=True,
    help="Include RegressionOnly rules (implies --wip).",
)
@click.option(
    "--max-parameters",
    type=int,
    default=None,
    help="Parameter ceiling per command (default from config, 30).",
)
@click.option(
    "--mode",
    "output_mode",
    type=click.Choice([m.value for m in ReportMode]),
    default=None,
    help="Report detail per command.",
)
@click.option("--no-url-check", is_flag=True, help="Skip fetching help URIs.")
@click.pass_obj
def check(
    app: AppContext,
    names: tuple[str, ...],
    commands_file: Path,
    include_optional: bool,
    include_work_in_progress: bool,
    include_regression: bool,
    max_parameters: int | None,
    output_mode: str | None,
    no_url_check: bool,
) -> None:
    """Check NAMES against naming, input and output conventions.

    Exits with code 1 when any command fails a rule or cannot be resolved.
    """
    from cmdlint.services.result import ServiceError, ServiceResult

    defaults = app.settings.check
    options = {
        "include_optional": include_optional or defaults.include_optional,
        "include_work_in_progress": (
            include_work_in_progress or defaults.include_work_in_progress
        ),
        "include_regression": include_regression or defaults.include_regression,
        "max_parameters": defaults.max_parameters if max_parameters is None else max_parameters,
        "output_mode": output_mode or defaults.output_mode,
        "help_timeout": defaults.help_timeout,
    }
    url_checks = defaults.check_help_uri and not no_url_check

    try:
        svc = app.batch_service(commands_file, url_checks=url_checks)
    except ConfigurationError as exc:
        app.emit(
            ServiceResult(ok=False, op="check", error=ServiceError(code=exc.code, message=str(exc)))
        )
        return

    result = svc.check(list(names), options)
    app.emit(result, healthy=bool(result.data.get("healthy", False)))
