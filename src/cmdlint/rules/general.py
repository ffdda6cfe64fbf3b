"""General rules: command naming, verbs, help, confirmation support."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from cmdlint.domain.descriptors import is_common_parameter
from cmdlint.domain.types import Category, CommandKind, Severity
from cmdlint.errors import RuleSkipped, TransportError
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
    from cmdlint.domain.descriptors import CommandDescriptor

FORBIDDEN_NAME_CHARACTERS = frozenset("#,(){}[]&/\\$^;:\"'<>|?@`*%+=~ ")

PASCAL_SEGMENT = re.compile(r"^(?:[A-Z]{1,3}[a-z0-9_]+[A-Z]{0,2})+$")

PLURAL_EXEMPT_SUFFIXES = ("status", "ous", "ss", "ics", "ias", "us")
PLURAL_EXEMPT_NOUNS = frozenset({"status", "statistics", "settings", "alias", "data"})

DESTRUCTIVE_VERBS = frozenset({"Stop", "Remove", "Revoke"})
STATE_CHANGING_VERBS = frozenset({"New", "Set", "Clear", "Reset"})
INVOKE_ALLOWED_NOUN_PARTS = ("script", "command", "method")

_HIGH_CONFIRM_IMPACT = re.compile(
    r"ConfirmImpact\s*=\s*['\"]?(?:\[[\w.]+\]::)?High\b",
    re.IGNORECASE,
)


def is_pascal_case(name: str) -> bool:
    """Every hyphen-delimited segment has the Pascal-case shape.

    Examples:
        >>> is_pascal_case("Get-ADUser")
        True
        >>> is_pascal_case("get-widget")
        False
    """
    return all(PASCAL_SEGMENT.match(segment) for segment in name.split("-"))


def is_plural(word: str) -> bool:
    """Ends in ``s`` and is not one of the singular-looking exceptions.

    Examples:
        >>> is_plural("Widgets")
        True
        >>> is_plural("Status")
        False
    """
    lowered = word.lower()
    if not lowered.endswith("s"):
        return False
    if lowered in PLURAL_EXEMPT_NOUNS:
        return False
    return not lowered.endswith(PLURAL_EXEMPT_SUFFIXES)


# ---------------------------------------------------------------------------
# Naming
# ---------------------------------------------------------------------------


@rule(
    "approved-verb",
    title="Command uses an approved verb",
    category=Category.GENERAL,
    rationale="{command} should use an approved verb because users discover commands by verb",
)
def approved_verb(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    if cmd.kind is CommandKind.ALIAS:
        return skipped("aliases are named freely")
    if not ctx.approved_verbs.loaded:
        return skipped(f"approved verb list unavailable ({ctx.approved_verbs.error})")
    if cmd.verb and cmd.verb in ctx.approved_verbs:
        return passed()
    return failed(cmd.verb or cmd.name)


@rule(
    "name-characters",
    title="Command name has no special characters",
    category=Category.GENERAL,
    rationale=(
        "{command} should not contain {details} because those characters "
        "need quoting or escaping in the shell"
    ),
)
def name_characters(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    found = sorted({ch for ch in cmd.name if ch in FORBIDDEN_NAME_CHARACTERS})
    return check_all([repr(ch) for ch in found])


@rule(
    "single-hyphen",
    title="Command name has exactly one hyphen",
    category=Category.GENERAL,
    rationale="{command} should contain exactly one hyphen because it separates verb from noun",
)
def single_hyphen(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    count = cmd.name.count("-")
    if count == 1:
        return passed()
    return failed(f"{count} hyphens")


@rule(
    "singular-noun",
    title="Command noun is singular",
    category=Category.GENERAL,
    rationale="{command} should use a singular noun because plural nouns read inconsistently",
)
def singular_noun(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    if is_plural(cmd.noun):
        return failed(cmd.noun)
    return passed()


@rule(
    "pascal-case-name",
    title="Command name is Pascal case",
    category=Category.GENERAL,
    rationale="{command} should be Pascal case because the shell's own commands are",
)
def pascal_case_name(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    if is_pascal_case(cmd.name):
        return passed()
    return failed(cmd.name)


@rule(
    "pascal-case-parameters",
    title="Parameter names are Pascal case",
    category=Category.GENERAL,
    rationale="Parameters {details} should be Pascal case because the shell's own parameters are",
)
def pascal_case_parameters(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    return check_all([p.name for p in cmd.user_parameters if not is_pascal_case(p.name)])


@rule(
    "reserved-parameter-names",
    title="Parameters do not reuse common parameter names",
    category=Category.GENERAL,
    rationale=(
        "Parameters {details} should be renamed because the shell supplies "
        "common parameters with those names"
    ),
)
def reserved_parameter_names(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    if cmd.kind is CommandKind.COMPILED:
        return skipped("compiled commands list engine-supplied parameters")
    return check_all([p.name for p in cmd.parameters if is_common_parameter(p.name)])


@rule(
    "standard-parameter-names",
    title="Parameter names match the standard spelling",
    category=Category.GENERAL,
    severity=Severity.OPTIONAL,
    rationale="Parameters {details} should use the standard names because users expect them",
)
def standard_parameter_names(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    if not ctx.standard_names.loaded:
        return skipped(f"standard name list unavailable ({ctx.standard_names.error})")
    offenders: list[str] = []
    for param in cmd.user_parameters:
        suggestion = ctx.standard_names.closest(param.name)
        if suggestion is not None:
            offenders.append(f"{param.name} (use {suggestion})")
    return check_all(offenders)


@rule(
    "singular-parameter-names",
    title="Parameter names are singular",
    category=Category.GENERAL,
    severity=Severity.OPTIONAL,
    rationale="Parameters {details} should be singular because plural names read inconsistently",
)
def singular_parameter_names(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    return check_all([p.name for p in cmd.user_parameters if is_plural(p.name)])


# ---------------------------------------------------------------------------
# Help
# ---------------------------------------------------------------------------


@rule(
    "help-uri-present",
    title="Command declares a help URI",
    category=Category.GENERAL,
    severity=Severity.OPTIONAL,
    rationale="{command} should declare a help URI because Get-Help -Online relies on it",
)
def help_uri_present(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    if cmd.help_uri:
        return passed()
    return failed()


@rule(
    "help-uri-resolves",
    title="Help URI resolves",
    category=Category.GENERAL,
    severity=Severity.OPTIONAL,
    rationale="{command} help URI should resolve because a dead help page is a defect: {details}",
)
def help_uri_resolves(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    if not cmd.help_uri:
        return skipped("no help URI declared")
    if ctx.fetch_url_status is None:
        return skipped("URL checks disabled")

    last_error = ""
    for _attempt in range(2):
        try:
            status = ctx.fetch_url_status(cmd.help_uri, ctx.help_timeout)
        except TransportError as exc:
            last_error = str(exc)
            continue
        if 200 <= status < 400:
            return passed()
        return failed(f"HTTP {status}")
    return failed(last_error or "transport error")


# ---------------------------------------------------------------------------
# Verbs and confirmation
# ---------------------------------------------------------------------------


@rule(
    "confirm-destructive",
    title="Destructive verbs support confirmation",
    category=Category.GENERAL,
    rationale="{command} should expose -Confirm because it removes or stops something",
)
def confirm_destructive(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    if cmd.verb not in DESTRUCTIVE_VERBS:
        return passed()
    if cmd.has_parameter("Confirm"):
        return passed()
    return failed(cmd.verb)


@rule(
    "force-with-high-impact",
    title="High-impact commands offer -Force",
    category=Category.GENERAL,
    rationale=(
        "{command} should expose -Force because ConfirmImpact High prompts "
        "unless callers can override it"
    ),
)
def force_with_high_impact(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    if cmd.raw_definition_text is None:
        raise RuleSkipped("definition text unavailable")
    if not _HIGH_CONFIRM_IMPACT.search(cmd.raw_definition_text):
        return passed()
    if not cmd.has_parameter("Confirm") or cmd.has_parameter("Force"):
        return passed()
    return failed("Force")


@rule(
    "avoid-invoke-verb",
    title="Invoke verb is reserved for scripts, commands, methods and items",
    category=Category.GENERAL,
    severity=Severity.OPTIONAL,
    rationale=(
        "{command} should use a more specific verb because Invoke says "
        "nothing about the action"
    ),
)
def avoid_invoke_verb(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    if cmd.verb != "Invoke":
        return passed()
    noun = cmd.noun.lower()
    if noun == "item" or any(part in noun for part in INVOKE_ALLOWED_NOUN_PARTS):
        return passed()
    return failed(cmd.noun)


@rule(
    "should-process-state-change",
    title="State-changing verbs support -WhatIf",
    category=Category.GENERAL,
    severity=Severity.WORK_IN_PROGRESS,
    rationale="{command} should support -WhatIf because it changes system state",
)
def should_process_state_change(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    if cmd.verb not in STATE_CHANGING_VERBS:
        return passed()
    if cmd.has_parameter("WhatIf"):
        return passed()
    return failed(cmd.verb)


# ---------------------------------------------------------------------------
# Descriptor integrity
# ---------------------------------------------------------------------------


@rule(
    "parameter-set-membership",
    title="Parameters reference declared parameter sets",
    category=Category.GENERAL,
    severity=Severity.REGRESSION_ONLY,
    rationale="Parameter sets {details} are referenced but not declared",
)
def parameter_set_membership(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    if not cmd.parameter_sets:
        return skipped("no parameter sets declared")
    declared = {s.name for s in cmd.parameter_sets}
    missing = [name for name in cmd.set_names() if name not in declared]
    return check_all(missing)


@rule(
    "default-set-declared",
    title="Default parameter set exists",
    category=Category.GENERAL,
    severity=Severity.REGRESSION_ONLY,
    rationale="{command} names a default parameter set that does not exist: {details}",
)
def default_set_declared(cmd: CommandDescriptor, ctx: RuleContext) -> RuleOutcome:
    default = cmd.default_parameter_set
    if default is None:
        return skipped("no default parameter set declared")
    if default in cmd.set_names():
        return passed()
    return failed(default)
