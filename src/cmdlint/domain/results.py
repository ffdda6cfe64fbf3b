"""Evaluation results and aggregated report shapes.

``EvaluationResult`` is built fresh per command by the evaluator. Every
report is derived from it deterministically and carries no state of its
own. Reports form a discriminated union on ``kind``.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, TypeAdapter

from cmdlint.domain.types import Category, OutcomeStatus, Severity


class RuleResult(BaseModel):
    """One rule's outcome for one command, with its rendered rationale."""

    model_config = {"frozen": True}

    rule_id: str
    title: str
    category: Category
    severity: Severity
    status: OutcomeStatus
    rationale: str
    details: tuple[str, ...] = ()
    reason: str | None = None


class EvaluationResult(BaseModel):
    """Every selected rule's result for one command, in catalogue order."""

    model_config = {"frozen": True}

    command: str
    severity_cutoff: Severity = Severity.REQUIRED
    results: tuple[RuleResult, ...] = ()

    def with_status(self, status: OutcomeStatus) -> list[RuleResult]:
        return [r for r in self.results if r.status is status]

    @property
    def passed_count(self) -> int:
        return len(self.with_status(OutcomeStatus.PASSED))

    @property
    def failed_count(self) -> int:
        return len(self.with_status(OutcomeStatus.FAILED))

    @property
    def skipped_count(self) -> int:
        return len(self.with_status(OutcomeStatus.SKIPPED))


# --- Report shapes ---


class BooleanReport(BaseModel):
    model_config = {"frozen": True}

    kind: Literal["boolean"] = "boolean"
    command: str
    passed: bool


class SummaryReport(BaseModel):
    model_config = {"frozen": True}

    kind: Literal["summary"] = "summary"
    command: str
    passed_count: int
    failed_count: int
    skipped_count: int = 0


class Failure(BaseModel):
    """Short explanation of one failing rule."""

    model_config = {"frozen": True}

    rule_id: str
    title: str
    reason: str


class FailedDetailReport(BaseModel):
    model_config = {"frozen": True}

    kind: Literal["failed"] = "failed"
    command: str
    failures: tuple[Failure, ...]


class NoFailures(BaseModel):
    """Failed-detail result for a command that was evaluated and failed nothing.

    Distinct from an empty :class:`FailedDetailReport` and from "not run".
    """

    model_config = {"frozen": True}

    kind: Literal["no_failures"] = "no_failures"
    command: str


class FullDetailReport(BaseModel):
    model_config = {"frozen": True}

    kind: Literal["full"] = "full"
    command: str
    results: tuple[RuleResult, ...]
    passed_count: int
    failed_count: int
    skipped_count: int


class ResolutionErrorReport(BaseModel):
    """The command could not be resolved; nothing was evaluated."""

    model_config = {"frozen": True}

    kind: Literal["error"] = "error"
    command: str
    code: str
    message: str


AggregatedReport = Annotated[
    BooleanReport
    | SummaryReport
    | FailedDetailReport
    | NoFailures
    | FullDetailReport
    | ResolutionErrorReport,
    Field(discriminator="kind"),
]

_REPORT_ADAPTER: TypeAdapter[AggregatedReport] = TypeAdapter(AggregatedReport)


def parse_report(data: Any) -> BaseModel:
    """Validate a serialized report back into its model.

    Raises:
        pydantic.ValidationError: If *data* matches no report kind.
    """
    return _REPORT_ADAPTER.validate_python(data)


def report_passed(report: BaseModel) -> bool:
    """Whether a report shows a clean command (resolved and no failures)."""
    if isinstance(report, BooleanReport):
        return report.passed
    if isinstance(report, SummaryReport | FullDetailReport):
        return report.failed_count == 0
    if isinstance(report, NoFailures):
        return True
    return False
