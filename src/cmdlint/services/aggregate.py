"""Result aggregation — reduce an EvaluationResult to one report shape."""

from __future__ import annotations

import re

from cmdlint.domain.results import (
    BooleanReport,
    EvaluationResult,
    FailedDetailReport,
    Failure,
    FullDetailReport,
    NoFailures,
    SummaryReport,
)
from cmdlint.domain.types import OutcomeStatus, ReportMode

_BECAUSE = re.compile(r"\bbecause\s+(?P<reason>.+)$", re.IGNORECASE | re.DOTALL)


def short_reason(rationale: str) -> str:
    """Text after ``because`` when present, else the whole rationale.

    Examples:
        >>> short_reason("Get-X should be fast because users wait")
        'users wait'
        >>> short_reason("Sets A/B are ambiguous")
        'Sets A/B are ambiguous'
    """
    match = _BECAUSE.search(rationale)
    if match:
        return match.group("reason").strip()
    return rationale.strip()


def aggregate(
    result: EvaluationResult, mode: ReportMode = ReportMode.BOOLEAN
) -> BooleanReport | SummaryReport | FailedDetailReport | NoFailures | FullDetailReport:
    """Build the report for *mode*. Pure; skipped rules never count as failures."""
    if mode is ReportMode.BOOLEAN:
        return BooleanReport(command=result.command, passed=result.failed_count == 0)

    if mode is ReportMode.SUMMARY:
        return SummaryReport(
            command=result.command,
            passed_count=result.passed_count,
            failed_count=result.failed_count,
            skipped_count=result.skipped_count,
        )

    if mode is ReportMode.FAILED:
        failures = tuple(
            Failure(rule_id=r.rule_id, title=r.title, reason=short_reason(r.rationale))
            for r in result.results
            if r.status is OutcomeStatus.FAILED
        )
        if not failures:
            return NoFailures(command=result.command)
        return FailedDetailReport(command=result.command, failures=failures)

    return FullDetailReport(
        command=result.command,
        results=result.results,
        passed_count=result.passed_count,
        failed_count=result.failed_count,
        skipped_count=result.skipped_count,
    )
