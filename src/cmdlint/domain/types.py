"""Rule classification and reporting enums."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class CommandKind(StrEnum):
    """How the shell exposes a command."""

    FUNCTION = "function"
    ALIAS = "alias"
    COMPILED = "compiled"


class Category(StrEnum):
    """Rule grouping shown in reports."""

    GENERAL = "general"
    INPUT = "input"
    OUTPUT = "output"


class Severity(IntEnum):
    """Inclusion level of a rule.

    Ordered: a run with cutoff ``X`` evaluates every rule whose severity
    is ``<= X``. ``REQUIRED`` is the default cutoff.
    """

    REQUIRED = 0
    OPTIONAL = 1
    WORK_IN_PROGRESS = 2
    REGRESSION_ONLY = 3

    @property
    def label(self) -> str:
        return self.name.lower().replace("_", "-")

    @classmethod
    def from_label(cls, label: str) -> Severity:
        """Parse ``"work-in-progress"`` / ``"WORK_IN_PROGRESS"`` style names."""
        key = label.strip().upper().replace("-", "_")
        try:
            return cls[key]
        except KeyError:
            msg = f"Unknown severity: {label!r}"
            raise ValueError(msg) from None


class OutcomeStatus(StrEnum):
    """Result of evaluating one rule."""

    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


class ReportMode(StrEnum):
    """Aggregated report shapes."""

    BOOLEAN = "boolean"
    SUMMARY = "summary"
    FAILED = "failed"
    FULL = "full"
