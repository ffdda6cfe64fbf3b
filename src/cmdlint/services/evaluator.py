"""Rule evaluator — run the selected rules against one descriptor.

INVARIANT: A predicate never aborts evaluation. ``RuleSkipped`` becomes a
Skipped outcome with its reason; any other exception, or a return value
that is not a ``RuleOutcome``, is logged and also recorded as Skipped.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from cmdlint.domain.descriptors import CommandDescriptor
from cmdlint.domain.results import EvaluationResult, RuleResult
from cmdlint.domain.types import Severity
from cmdlint.rules.base import BoundRule, RuleOutcome, skipped
from cmdlint.rules.catalogue import select

logger = logging.getLogger(__name__)


def _run(bound: BoundRule, descriptor: CommandDescriptor) -> RuleOutcome:
    try:
        outcome = bound(descriptor)
    except Exception as exc:
        logger.warning(
            "Rule %s raised on %s: %s",
            bound.rule.id,
            descriptor.name,
            exc,
            exc_info=True,
        )
        return skipped(f"error: {exc}")
    if not isinstance(outcome, RuleOutcome):
        logger.warning(
            "Rule %s returned %s on %s, expected a RuleOutcome",
            bound.rule.id,
            type(outcome).__name__,
            descriptor.name,
        )
        return skipped(f"error: rule returned {type(outcome).__name__}")
    return outcome


def evaluate(
    descriptor: CommandDescriptor,
    catalogue: Iterable[BoundRule],
    cutoff: Severity = Severity.REQUIRED,
) -> EvaluationResult:
    """Evaluate every rule at or below *cutoff* against *descriptor*."""
    results: list[RuleResult] = []
    for bound in select(catalogue, cutoff):
        outcome = _run(bound, descriptor)
        definition = bound.rule
        results.append(
            RuleResult(
                rule_id=definition.id,
                title=definition.title,
                category=definition.category,
                severity=definition.severity,
                status=outcome.status,
                rationale=definition.render(descriptor.name, outcome),
                details=outcome.details,
                reason=outcome.reason,
            )
        )
        logger.debug("%s %s: %s", descriptor.name, definition.id, outcome.status.value)
    return EvaluationResult(command=descriptor.name, severity_cutoff=cutoff, results=tuple(results))
