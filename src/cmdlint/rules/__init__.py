"""Rule catalogue — General, Input and Output convention checks.

Rules depend on the domain layer only. Each rule is a pure predicate over a
command descriptor and an injected :class:`RuleContext`.
"""

from cmdlint.rules.base import (
    BoundRule,
    Rule,
    RuleContext,
    RuleOutcome,
    failed,
    passed,
    rule,
    skipped,
)
from cmdlint.rules.catalogue import all_rules, build_catalogue, select

__all__ = [
    "BoundRule",
    "Rule",
    "RuleContext",
    "RuleOutcome",
    "all_rules",
    "build_catalogue",
    "failed",
    "passed",
    "rule",
    "select",
    "skipped",
]
