"""Command: list the rule catalogue."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cmdlint.commands._base import LintCommand

if TYPE_CHECKING:
    from cmdlint.commands._context import AppContext


@click.command(
    cls=LintCommand,
    examples="""\
  cmdlint rules
  cmdlint rules --optional
  cmdlint rules --all
  cmdlint -q rules --all""",
)
@click.option("--optional", "include_optional", is_flag=True, help="Include Optional rules.")
@click.option("--wip", "include_work_in_progress", is_flag=True, help="Include WorkInProgress.")
@click.option("--all", "include_all", is_flag=True, help="List every rule at every severity.")
@click.pass_obj
def rules(
    app: AppContext,
    include_optional: bool,
    include_work_in_progress: bool,
    include_all: bool,
) -> None:
    """List the rules a check would run."""
    svc = app.batch_service(None, url_checks=False)
    options = {
        "include_optional": include_optional or app.settings.check.include_optional,
        "include_work_in_progress": (
            include_work_in_progress or app.settings.check.include_work_in_progress
        ),
    }
    app.emit(svc.describe_rules(options, include_all=include_all))
