"""Tests for rule definitions, outcomes and registration."""

from __future__ import annotations

import pytest

from cmdlint.domain.descriptors import CommandDescriptor
from cmdlint.domain.types import Category, OutcomeStatus, Severity
from cmdlint.errors import ConfigurationError, RuleSkipped
from cmdlint.rules.base import (
    Rule,
    RuleContext,
    check_all,
    failed,
    passed,
    registered_rules,
    skipped,
    validate_rule,
)


def _rule(rule_id: str = "sample-rule", rationale: str = "{command} fails on {details}") -> Rule:
    return Rule(
        id=rule_id,
        title="Sample",
        category=Category.GENERAL,
        severity=Severity.REQUIRED,
        rationale=rationale,
        check=lambda cmd, ctx: passed(),
    )


class TestOutcomes:
    def test_helpers(self) -> None:
        assert passed().passed
        assert failed("A", "B").details == ("A", "B")
        assert skipped("n/a").reason == "n/a"
        assert skipped("n/a").status is OutcomeStatus.SKIPPED

    def test_check_all(self) -> None:
        assert check_all([]).passed
        outcome = check_all(["Name"])
        assert outcome.failed
        assert outcome.details == ("Name",)


class TestRender:
    def test_fills_command_and_details(self) -> None:
        text = _rule().render("Get-Widget", failed("A", "B"))
        assert text == "Get-Widget fails on A, B"

    def test_no_details(self) -> None:
        assert _rule().render("Get-Widget", passed()) == "Get-Widget fails on none"

    def test_unknown_fields_left_visible(self) -> None:
        rendered = _rule(rationale="{command} {other}").render("Get-Widget", passed())
        assert rendered == "Get-Widget {other}"

    def test_positional_field_left_as_written(self) -> None:
        rendered = _rule(rationale="use {0} for {command}").render("Get-Widget", passed())
        assert rendered == "use {0} for {command}"


class TestBoundRule:
    def test_rule_skipped_becomes_outcome(self) -> None:
        def check(cmd: CommandDescriptor, ctx: RuleContext):
            raise RuleSkipped("no source")

        bound = Rule(
            id="skips",
            title="Skips",
            category=Category.INPUT,
            severity=Severity.REQUIRED,
            rationale="",
            check=check,
        ).bind(RuleContext())
        outcome = bound(CommandDescriptor(name="Get-Widget"))
        assert outcome.skipped
        assert outcome.reason == "no source"

    def test_context_is_injected(self) -> None:
        seen: list[int] = []

        def check(cmd: CommandDescriptor, ctx: RuleContext):
            seen.append(ctx.max_parameters)
            return passed()

        rule = Rule(
            id="limits",
            title="Limits",
            category=Category.INPUT,
            severity=Severity.REQUIRED,
            rationale="",
            check=check,
        )
        rule.bind(RuleContext(max_parameters=7))(CommandDescriptor(name="Get-Widget"))
        assert seen == [7]


class TestRegistration:
    def test_rejects_bad_id(self) -> None:
        with pytest.raises(ConfigurationError, match="kebab-case"):
            validate_rule(_rule("Bad_Id"), {})

    def test_rejects_duplicate(self) -> None:
        existing = {"sample-rule": _rule()}
        with pytest.raises(ConfigurationError, match="Duplicate"):
            validate_rule(_rule(), existing)

    @pytest.mark.parametrize("rationale", ["use {0} here", "{command.missing}", "{details:>>>}"])
    def test_rejects_unrenderable_rationale(self, rationale: str) -> None:
        with pytest.raises(ConfigurationError, match="Invalid rationale"):
            validate_rule(_rule(rationale=rationale), {})

    def test_builtins_registered_in_order(self) -> None:
        ids = [r.id for r in registered_rules()]
        assert ids[0] == "approved-verb"
        assert ids.index("single-hyphen") < ids.index("switch-not-positional")
        assert ids.index("switch-not-positional") < ids.index("output-type-declared")
        assert len(ids) == len(set(ids))
