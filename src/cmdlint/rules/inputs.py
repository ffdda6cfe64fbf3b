"""Input rules: parameter typing, binding attributes, and parameter sets."""

from __future__ import annotations

import re
from itertools import combinations
from typing import TYPE_CHECKING

from cmdlint.domain import typenames
from cmdlint.domain.descriptors import ALL_PARAMETER_SETS
from cmdlint.domain.types import Category, Severity
from cmdlint.errors import RuleSkipped
from cmdlint.rules.base import (
    RuleContext,
    RuleOutcome,
    check_all,
    failed,
    passed,
    rule,
    skipped,
)

if TYPE_CHECKING:
    from cmdlint.domain.descriptors import CommandDescriptor, ParameterDescriptor

MAX_POSITIONAL_PER_SET = 4

NON_FUNCTIONAL_MARKER = re.compile(
    r"parameter\W+(\w+)\W+(?:is\s+)?not\s+(?:yet\s+)?functional",
    re.IGNORECASE,
)


def _set_label(set_name: str) -> str:
    return "(all sets)" if set_name == ALL_PARAMETER_SETS else set_name


def _require_parameter(cmd: CommandDescriptor, name: str) -> ParameterDescriptor:
    param = cmd.parameter(name)
    if param is None:
        raise RuleSkipped(f"no {name} parameter")
    return param


# ---------------------------------------------------------------------------
# Attributes
# ---------------------------------------------------------------------------


@rule(
    "switch-not-positional",
    title="Switch parameters are not positional",
    category=Category.INPUT,
    rationale="Switches {details} should not be positional because a switch is a named flag",
)
def switch_not_positional(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    return check_all(
        [p.name for p in cmd.parameters if typenames.is_switch(p.type) and p.is_positional]
    )


@rule(
    "no-dont-show",
    title="No parameter is hidden with DontShow",
    category=Category.INPUT,
    rationale=(
        "Parameters {details} should not set DontShow "
        "because public parameters must be discoverable"
    ),
)
def no_dont_show(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    return check_all([p.name for p in cmd.parameters if p.attributes.dont_show])


@rule(
    "no-non-functional-parameters",
    title="No parameter is documented as non-functional",
    category=Category.INPUT,
    rationale=(
        "Parameters {details} should be removed "
        "because they are documented as not functional"
    ),
)
def no_non_functional_parameters(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    if cmd.raw_definition_text is None:
        raise RuleSkipped("definition text unavailable")
    names = [m.group(1) for m in NON_FUNCTIONAL_MARKER.finditer(cmd.raw_definition_text)]
    return check_all(list(dict.fromkeys(names)))


@rule(
    "get-no-mandatory-default",
    title="Get commands need no mandatory parameters by default",
    category=Category.INPUT,
    rationale=(
        "{command} should not require {details} in its default parameter set "
        "because Get commands should work with no arguments"
    ),
)
def get_no_mandatory_default(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    if cmd.verb != "Get":
        return passed()
    default = cmd.effective_default_set
    offenders = [
        p.name
        for p in cmd.parameters
        if p.attributes.mandatory and (p.in_all_sets or (default is not None and p.in_set(default)))
    ]
    return check_all(offenders)


@rule(
    "positional-parameter",
    title="Command has a positional parameter",
    category=Category.INPUT,
    rationale=(
        "{command} should have a positional parameter "
        "because mandatory input should not need a name"
    ),
)
def positional_parameter(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    if any(p.is_positional for p in cmd.parameters):
        return passed()
    if not cmd.parameters or any(p.attributes.mandatory for p in cmd.parameters):
        return failed()
    return passed()


@rule(
    "strong-typing",
    title="Parameters are not all strings",
    category=Category.INPUT,
    rationale="{command} should type its parameters because every parameter is a string",
)
def strong_typing(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    params = cmd.user_parameters
    if not params:
        return skipped("no parameters")
    if all(typenames.is_string(p.type) for p in params):
        return failed(*(p.name for p in params))
    return passed()


@rule(
    "no-boolean-parameters",
    title="Boolean parameters are switches",
    category=Category.INPUT,
    rationale=(
        "Parameters {details} should be switches "
        "because boolean parameters need an explicit value"
    ),
)
def no_boolean_parameters(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    return check_all(
        [p.name for p in cmd.parameters if typenames.is_boolean(p.type) and p.name != "All"]
    )


@rule(
    "validate-set-boolean",
    title="True/false value sets are switches",
    category=Category.INPUT,
    rationale=(
        "Parameters {details} should be switches "
        "because their only values are true and false"
    ),
)
def validate_set_boolean(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    offenders: list[str] = []
    for param in cmd.parameters:
        values = param.attributes.valid_values
        if values is not None and {v.lower() for v in values} == {"true", "false"}:
            offenders.append(param.name)
    return check_all(offenders)


@rule(
    "pipeline-input",
    title="Command accepts pipeline input",
    category=Category.INPUT,
    rationale=(
        "{command} should accept pipeline input "
        "because commands compose through the pipeline"
    ),
)
def pipeline_input(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    if any(p.accepts_pipeline for p in cmd.parameters):
        return passed()
    return failed()


@rule(
    "input-object-present",
    title="Command has an InputObject parameter",
    category=Category.INPUT,
    severity=Severity.WORK_IN_PROGRESS,
    rationale=(
        "{command} should accept -InputObject "
        "because it lets objects flow in from the pipeline"
    ),
)
def input_object_present(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    if cmd.parameter("InputObject") is not None:
        return passed()
    return failed()


@rule(
    "test-outputs-boolean",
    title="Test commands output booleans",
    category=Category.INPUT,
    rationale=(
        "{command} should declare a boolean output type "
        "because Test commands answer yes or no"
    ),
)
def test_outputs_boolean(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    if cmd.verb != "Test":
        return skipped("not a Test command")
    if any(typenames.is_boolean(t) for t in cmd.output_types):
        return passed()
    return failed()


# ---------------------------------------------------------------------------
# Well-known parameter names
# ---------------------------------------------------------------------------


@rule(
    "path-pspath-alias",
    title="Path parameter has the PSPath alias",
    category=Category.INPUT,
    rationale=(
        "{command} -Path should carry the PSPath alias "
        "because providers pipe paths as PSPath"
    ),
)
def path_pspath_alias(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    if cmd.raw_definition_text is None:
        raise RuleSkipped("definition text unavailable")
    param = _require_parameter(cmd, "Path")
    if param.has_alias("PSPath"):
        return passed()
    return failed(param.name)


@rule(
    "path-is-string",
    title="Path parameter is a string",
    category=Category.INPUT,
    rationale="{command} -Path should be a string because paths may contain provider wildcards",
)
def path_is_string(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    param = _require_parameter(cmd, "Path")
    if typenames.is_string(param.type):
        return passed()
    return failed(param.type)


@rule(
    "uri-is-uri-type",
    title="Uri parameter uses the URI type",
    category=Category.INPUT,
    rationale="{command} -Uri should be typed System.Uri because strings skip URI validation",
)
def uri_is_uri_type(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    param = _require_parameter(cmd, "Uri")
    if typenames.same_type(param.type, typenames.URI):
        return passed()
    return failed(param.type)


@rule(
    "credential-type",
    title="Credential parameter is a PSCredential",
    category=Category.INPUT,
    severity=Severity.OPTIONAL,
    rationale=(
        "{command} -Credential should be a PSCredential "
        "because credentials must not travel as text"
    ),
)
def credential_type(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    param = _require_parameter(cmd, "Credential")
    if typenames.same_type(param.type, typenames.PSCREDENTIAL):
        return passed()
    return failed(param.type)


@rule(
    "password-secure-string",
    title="Password parameter is a SecureString",
    category=Category.INPUT,
    severity=Severity.OPTIONAL,
    rationale="{command} -Password should be a SecureString because plain text secrets leak",
)
def password_secure_string(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    param = _require_parameter(cmd, "Password")
    if typenames.same_type(param.type, typenames.SECURE_STRING):
        return passed()
    return failed(param.type)


@rule(
    "numeric-range",
    title="Integer parameters declare a range",
    category=Category.INPUT,
    severity=Severity.OPTIONAL,
    rationale=(
        "Parameters {details} should declare a range "
        "because unbounded integers accept nonsense"
    ),
)
def numeric_range(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    numeric = [p for p in cmd.parameters if typenames.is_numeric(p.type)]
    if not numeric:
        return skipped("no integer parameters")
    return check_all(
        [
            p.name
            for p in numeric
            if p.attributes.min_range is None or p.attributes.max_range is None
        ]
    )


@rule(
    "input-object-type",
    title="InputObject type resolves",
    category=Category.INPUT,
    rationale=(
        "{command} -InputObject type {details} should resolve "
        "because callers cannot build it otherwise"
    ),
)
def input_object_type(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    param = _require_parameter(cmd, "InputObject")
    if ctx.types.resolves(param.type):
        return passed()
    return failed(param.type)


# ---------------------------------------------------------------------------
# Counts and parameter sets
# ---------------------------------------------------------------------------


@rule(
    "parameter-count",
    title="Parameter count stays under the ceiling",
    category=Category.INPUT,
    rationale="{command} has too many parameters ({details}) because it likely does too much",
)
def parameter_count(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    count = len(cmd.user_parameters)
    if count <= ctx.max_parameters:
        return passed()
    return failed(f"{count} > {ctx.max_parameters}")


@rule(
    "positional-count",
    title="At most four positional parameters per set",
    category=Category.INPUT,
    rationale=(
        "Parameter sets {details} have too many positional parameters "
        "because callers cannot remember the order"
    ),
)
def positional_count(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    offenders: list[str] = []
    for set_name in cmd.set_names():
        positional = [p for p in cmd.parameters_in_set(set_name) if p.is_positional]
        if len(positional) > MAX_POSITIONAL_PER_SET:
            offenders.append(f"{_set_label(set_name)} ({len(positional)})")
    return check_all(offenders)


@rule(
    "unique-positions",
    title="Positions are unique within a set",
    category=Category.INPUT,
    rationale="Parameters {details} share a position because the binder cannot tell them apart",
)
def unique_positions(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    offenders: list[str] = []
    for set_name in cmd.set_names():
        by_position: dict[int, list[str]] = {}
        for param in cmd.parameters_in_set(set_name):
            if param.is_positional:
                by_position.setdefault(param.attributes.position, []).append(param.name)
        for position, names in sorted(by_position.items()):
            if len(names) > 1:
                offenders.append(f"{'/'.join(names)} at {position} in {_set_label(set_name)}")
    return check_all(offenders)


@rule(
    "single-pipeline-by-value",
    title="One by-value pipeline parameter per set",
    category=Category.INPUT,
    rationale=(
        "Parameter sets {details} bind more than one parameter by value "
        "because pipeline binding becomes ambiguous"
    ),
)
def single_pipeline_by_value(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    offenders: list[str] = []
    for set_name in cmd.set_names():
        by_value = [
            p.name for p in cmd.parameters_in_set(set_name) if p.attributes.value_from_pipeline
        ]
        if len(by_value) > 1:
            offenders.append(f"{_set_label(set_name)} ({', '.join(by_value)})")
    return check_all(offenders)


def _unique_parameters(
    cmd: CommandDescriptor, set_name: str, others: list[str]
) -> list[ParameterDescriptor]:
    """Parameters in *set_name* that no set in *others* can bind."""
    return [
        p
        for p in cmd.parameters_in_set(set_name)
        if not p.in_all_sets and not any(p.in_set(other) for other in others)
    ]


@rule(
    "distinct-parameter-sets",
    title="Each parameter set has a parameter of its own",
    category=Category.INPUT,
    rationale=(
        "Parameter sets {details} have no unique parameter "
        "because the binder cannot select them"
    ),
)
def distinct_parameter_sets(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    names = cmd.set_names()
    if len(names) < 3:
        return skipped("fewer than three parameter sets")
    offenders = [
        name
        for name in names
        if not _unique_parameters(cmd, name, [other for other in names if other != name])
    ]
    return check_all(offenders)


@rule(
    "default-parameter-set",
    title="Ambiguous parameter sets declare a default",
    category=Category.INPUT,
    rationale=(
        "{command} should declare a default parameter set "
        "because sets {details} are ambiguous"
    ),
)
def default_parameter_set(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    names = cmd.set_names()
    if len(names) < 2:
        return skipped("fewer than two parameter sets")
    if cmd.default_parameter_set or any(s.is_default for s in cmd.parameter_sets):
        return passed()
    offenders: list[str] = []
    for first, second in combinations(names, 2):
        first_mandatory = sum(
            1 for p in _unique_parameters(cmd, first, [second]) if p.attributes.mandatory
        )
        second_mandatory = sum(
            1 for p in _unique_parameters(cmd, second, [first]) if p.attributes.mandatory
        )
        if first_mandatory == second_mandatory:
            offenders.append(f"{first}/{second}")
    return check_all(offenders)
