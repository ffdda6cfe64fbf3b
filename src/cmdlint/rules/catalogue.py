"""Catalogue construction: built-in rules plus plugin rules, bound to a context."""

from __future__ import annotations

from collections.abc import Iterable

from cmdlint.domain.types import Severity

# Imported for their @rule registrations; order here is catalogue order.
from cmdlint.rules import general, inputs, outputs  # noqa: F401
from cmdlint.rules.base import BoundRule, Rule, RuleContext, registered_rules, validate_rule


def all_rules(extra: Iterable[Rule] = ()) -> tuple[Rule, ...]:
    """Built-in rules followed by *extra* rules, ids validated for uniqueness."""
    seen: dict[str, Rule] = {r.id: r for r in registered_rules()}
    ordered = list(seen.values())
    for candidate in extra:
        validate_rule(candidate, seen)
        seen[candidate.id] = candidate
        ordered.append(candidate)
    return tuple(ordered)


def build_catalogue(context: RuleContext, extra: Iterable[Rule] = ()) -> tuple[BoundRule, ...]:
    """Bind every rule to *context*.

    Raises:
        ConfigurationError: If an extra rule has an invalid or duplicate id.
    """
    return tuple(r.bind(context) for r in all_rules(extra))


def select(catalogue: Iterable[BoundRule], cutoff: Severity) -> tuple[BoundRule, ...]:
    """Rules whose severity is at or below *cutoff*, in catalogue order."""
    return tuple(b for b in catalogue if b.rule.severity <= cutoff)
