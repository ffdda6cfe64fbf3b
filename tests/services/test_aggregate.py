"""Tests for result aggregation."""

from __future__ import annotations

from cmdlint.domain.results import (
    BooleanReport,
    EvaluationResult,
    FailedDetailReport,
    FullDetailReport,
    NoFailures,
    RuleResult,
    SummaryReport,
)
from cmdlint.domain.types import Category, OutcomeStatus, ReportMode, Severity
from cmdlint.services.aggregate import aggregate, short_reason


def _result(rule_id: str, status: OutcomeStatus, rationale: str = "") -> RuleResult:
    return RuleResult(
        rule_id=rule_id,
        title=rule_id.replace("-", " "),
        category=Category.GENERAL,
        severity=Severity.REQUIRED,
        status=status,
        rationale=rationale,
    )


MIXED = EvaluationResult(
    command="Get-Widget",
    results=(
        _result("first", OutcomeStatus.PASSED),
        _result("second", OutcomeStatus.FAILED, "Get-Widget should be fast because users wait"),
        _result("third", OutcomeStatus.SKIPPED),
        _result("fourth", OutcomeStatus.FAILED, "Sets A/B are ambiguous"),
    ),
)

CLEAN = EvaluationResult(
    command="Get-Gadget",
    results=(_result("first", OutcomeStatus.PASSED), _result("third", OutcomeStatus.SKIPPED)),
)


class TestShortReason:
    def test_extracts_because_clause(self) -> None:
        assert short_reason("X should be fast because users wait") == "users wait"

    def test_whole_rationale_without_because(self) -> None:
        assert short_reason("Sets A/B are ambiguous ") == "Sets A/B are ambiguous"


class TestAggregate:
    def test_boolean(self) -> None:
        assert aggregate(MIXED, ReportMode.BOOLEAN) == BooleanReport(
            command="Get-Widget", passed=False
        )
        assert aggregate(CLEAN, ReportMode.BOOLEAN).passed is True

    def test_summary_excludes_skipped(self) -> None:
        report = aggregate(MIXED, ReportMode.SUMMARY)
        assert isinstance(report, SummaryReport)
        assert (report.passed_count, report.failed_count, report.skipped_count) == (1, 2, 1)

    def test_failed_detail(self) -> None:
        report = aggregate(MIXED, ReportMode.FAILED)
        assert isinstance(report, FailedDetailReport)
        assert [(f.rule_id, f.reason) for f in report.failures] == [
            ("second", "users wait"),
            ("fourth", "Sets A/B are ambiguous"),
        ]

    def test_no_failures_sentinel(self) -> None:
        report = aggregate(CLEAN, ReportMode.FAILED)
        assert isinstance(report, NoFailures)
        assert not isinstance(report, FailedDetailReport)
        assert report.kind == "no_failures"
        assert report.command == "Get-Gadget"

    def test_full_detail(self) -> None:
        report = aggregate(MIXED, ReportMode.FULL)
        assert isinstance(report, FullDetailReport)
        assert report.results == MIXED.results
        assert report.failed_count == 2

    def test_pure(self) -> None:
        assert aggregate(MIXED, ReportMode.FULL) == aggregate(MIXED, ReportMode.FULL)
        assert MIXED.failed_count == 2
