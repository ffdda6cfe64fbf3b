"""Rule definitions, outcomes, and the registration decorator.

A rule is a pure predicate over a :class:`CommandDescriptor` plus an
explicit :class:`RuleContext` carrying everything the predicate may read
(name registries, type resolver, run limits, URL fetcher). Nothing is
looked up globally at evaluation time: the context is bound to each rule
when the catalogue is built.

INVARIANT: Skipped is a distinct outcome, never counted as passed or failed.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from cmdlint.domain.registry import StandardNameRegistry
from cmdlint.domain.typenames import TypeResolver
from cmdlint.domain.types import Category, OutcomeStatus, Severity
from cmdlint.errors import ConfigurationError, RuleSkipped

if TYPE_CHECKING:
    from cmdlint.domain.descriptors import CommandDescriptor

DEFAULT_MAX_PARAMETERS = 30
DEFAULT_HELP_TIMEOUT = 5.0

_RULE_ID = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------


class RuleOutcome(BaseModel):
    """Result of one predicate: status plus offending names or skip reason."""

    model_config = {"frozen": True}

    status: OutcomeStatus
    details: tuple[str, ...] = ()
    reason: str | None = None

    @property
    def passed(self) -> bool:
        return self.status is OutcomeStatus.PASSED

    @property
    def failed(self) -> bool:
        return self.status is OutcomeStatus.FAILED

    @property
    def skipped(self) -> bool:
        return self.status is OutcomeStatus.SKIPPED


def passed() -> RuleOutcome:
    return RuleOutcome(status=OutcomeStatus.PASSED)


def failed(*details: str) -> RuleOutcome:
    return RuleOutcome(status=OutcomeStatus.FAILED, details=tuple(details))


def skipped(reason: str) -> RuleOutcome:
    return RuleOutcome(status=OutcomeStatus.SKIPPED, reason=reason)


def check_all(offenders: list[str]) -> RuleOutcome:
    """Pass when *offenders* is empty, otherwise fail listing them."""
    if offenders:
        return failed(*offenders)
    return passed()


# ---------------------------------------------------------------------------
# Context
# ---------------------------------------------------------------------------


UrlFetcher = Callable[[str, float], int]


@dataclass(frozen=True)
class RuleContext:
    """Read-only inputs shared by every rule in one run."""

    standard_names: StandardNameRegistry = field(
        default_factory=lambda: StandardNameRegistry.unloaded("not configured")
    )
    approved_verbs: StandardNameRegistry = field(
        default_factory=lambda: StandardNameRegistry.unloaded("not configured")
    )
    types: TypeResolver = field(default_factory=TypeResolver)
    max_parameters: int = DEFAULT_MAX_PARAMETERS
    help_timeout: float = DEFAULT_HELP_TIMEOUT
    fetch_url_status: UrlFetcher | None = None


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


Predicate = Callable[["CommandDescriptor", RuleContext], RuleOutcome]


class _Fields(dict[str, Any]):
    """format_map mapping that leaves unknown fields visible."""

    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


# What format_map raises for a template it cannot fill.
_TEMPLATE_ERRORS = (ValueError, IndexError, AttributeError, TypeError)


@dataclass(frozen=True)
class Rule:
    """Immutable rule definition.

    Attributes:
        id: Stable kebab-case identifier.
        title: Human-readable description of the convention.
        category: General, Input or Output.
        severity: Inclusion level.
        rationale: Explanation shown on failure. May reference
            ``{command}`` and ``{details}`` (comma-joined offenders).
        check: Predicate ``(descriptor, context) -> RuleOutcome``.
    """

    id: str
    title: str
    category: Category
    severity: Severity
    rationale: str
    check: Predicate = field(repr=False, compare=False)

    def render(self, command: str, outcome: RuleOutcome) -> str:
        details = ", ".join(outcome.details) if outcome.details else "none"
        try:
            return self.rationale.format_map(_Fields(command=command, details=details))
        except _TEMPLATE_ERRORS:
            return self.rationale

    def bind(self, context: RuleContext) -> BoundRule:
        return BoundRule(self, context)


@dataclass(frozen=True)
class BoundRule:
    """A rule with its context injected: callable on a descriptor alone."""

    rule: Rule
    context: RuleContext = field(repr=False, compare=False)

    def __call__(self, descriptor: CommandDescriptor) -> RuleOutcome:
        try:
            return self.rule.check(descriptor, self.context)
        except RuleSkipped as exc:
            return skipped(exc.reason)


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


_REGISTERED: dict[str, Rule] = {}


def validate_rule(candidate: Rule, existing: dict[str, Rule]) -> None:
    if not _RULE_ID.match(candidate.id):
        msg = f"Invalid rule id {candidate.id!r}: use lower-case kebab-case"
        raise ConfigurationError(msg)
    if candidate.id in existing:
        msg = f"Duplicate rule id: {candidate.id}"
        raise ConfigurationError(msg)
    try:
        candidate.rationale.format_map(_Fields(command="", details=""))
    except _TEMPLATE_ERRORS as exc:
        msg = f"Invalid rationale for rule {candidate.id}: {exc}"
        raise ConfigurationError(msg) from exc


def rule(
    id: str,  # noqa: A002
    *,
    title: str,
    category: Category,
    severity: Severity = Severity.REQUIRED,
    rationale: str,
) -> Callable[[Predicate], Predicate]:
    """Register the decorated predicate as a built-in rule.

    Usage::

        @rule("single-hyphen", title="...", category=Category.GENERAL,
              rationale="... because ...")
        def single_hyphen(cmd, ctx):
            ...
    """

    def decorator(func: Predicate) -> Predicate:
        definition = Rule(
            id=id,
            title=title,
            category=category,
            severity=severity,
            rationale=rationale,
            check=func,
        )
        validate_rule(definition, _REGISTERED)
        _REGISTERED[id] = definition
        return func

    return decorator


def registered_rules() -> tuple[Rule, ...]:
    """Built-in rules in registration order."""
    return tuple(_REGISTERED.values())
