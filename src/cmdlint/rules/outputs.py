"""Output rules: declared output types."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cmdlint.domain import typenames
from cmdlint.domain.types import Category, Severity
from cmdlint.rules.base import RuleContext, RuleOutcome, check_all, failed, passed, rule, skipped

if TYPE_CHECKING:
    from cmdlint.domain.descriptors import CommandDescriptor


@rule(
    "output-type-declared",
    title="Output type is declared",
    category=Category.OUTPUT,
    rationale=(
        "{command} should declare an output type "
        "because callers and tab completion rely on it"
    ),
)
def output_type_declared(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    if cmd.output_types or cmd.parameter("PassThru") is not None:
        return passed()
    return failed()


@rule(
    "output-type-resolvable",
    title="Output types resolve to specific types",
    category=Category.OUTPUT,
    rationale=(
        "Output types {details} should resolve to a specific type because "
        "untyped or unknown output cannot be formatted or completed"
    ),
)
def output_type_resolvable(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    if not cmd.output_types:
        return skipped("no output types declared")
    offenders = [
        name
        for name in sorted(cmd.output_types)
        if not ctx.types.resolves(name) or typenames.is_catch_all(name)
    ]
    return check_all(offenders)


@rule(
    "passthru-is-switch",
    title="PassThru parameter is a switch",
    category=Category.OUTPUT,
    severity=Severity.OPTIONAL,
    rationale="{command} -PassThru should be a switch because it only toggles output",
)
def passthru_is_switch(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    param = cmd.parameter("PassThru")
    if param is None:
        return skipped("no PassThru parameter")
    if typenames.is_switch(param.type):
        return passed()
    return failed(param.type)
