"""Tests for BatchService — batch runs, CLI results and rule listing."""

from __future__ import annotations

from pathlib import Path

import pytest

from cmdlint.config.settings import CmdlintSettings
from cmdlint.domain.descriptors import CommandDescriptor
from cmdlint.domain.registry import StandardNameRegistry
from cmdlint.domain.results import FullDetailReport, ResolutionErrorReport
from cmdlint.domain.typenames import TypeResolver
from cmdlint.domain.types import Category, Severity
from cmdlint.errors import ConfigurationError
from cmdlint.infrastructure.lines import STANDARD_NAMES_FILE
from cmdlint.rules.base import Rule, failed
from cmdlint.services.batch import BatchService, load_registry
from cmdlint.services.options import RunOptions
from cmdlint.services.providers import StaticDescriptorProvider


class SpyProvider(StaticDescriptorProvider):
    """Records every name it is asked to resolve."""

    def __init__(self, descriptors) -> None:
        super().__init__(descriptors)
        self.requested: list[str] = []

    def resolve(self, name: str) -> CommandDescriptor:
        self.requested.append(name)
        return super().resolve(name)


@pytest.fixture
def good_and_bad(clean_command, make_command, make_param) -> list[CommandDescriptor]:
    good = clean_command.model_copy(update={"name": "Good-Cmd", "verb": "Good", "noun": "Cmd"})
    bad = make_command("Bad-Cmd", make_param("name"))
    return [good, bad]


@pytest.fixture
def service(good_and_bad) -> BatchService:
    return BatchService(
        SpyProvider(good_and_bad),
        standard_names=load_registry(None, STANDARD_NAMES_FILE),
        approved_verbs=StandardNameRegistry.load(["Good", "Bad", "Get"]),
        types=TypeResolver(),
    )


class TestRun:
    def test_batch_with_unresolved_name(self, service: BatchService) -> None:
        reports = service.run(["Good-Cmd", "Bad-Cmd", "Unknown-Cmd"], {"output_mode": "full"})
        assert len(reports) == 3
        assert isinstance(reports[0], FullDetailReport)
        assert isinstance(reports[1], FullDetailReport)
        assert isinstance(reports[2], ResolutionErrorReport)
        assert reports[2].command == "Unknown-Cmd"
        assert reports[2].code == "NOT_FOUND"

    def test_input_order_preserved(self, service: BatchService) -> None:
        reports = service.run(["Bad-Cmd", "Good-Cmd"], RunOptions(output_mode="summary"))
        assert [r.command for r in reports] == ["Bad-Cmd", "Good-Cmd"]

    def test_invalid_options_fail_before_resolution(self, good_and_bad) -> None:
        provider = SpyProvider(good_and_bad)
        svc = BatchService(provider)
        with pytest.raises(ConfigurationError):
            svc.run(["Good-Cmd"], {"max_parameters": 9999})
        assert provider.requested == []

    def test_max_parameters_applies(self, make_command, make_param) -> None:
        cmd = make_command(
            "Get-Widget",
            *(make_param(f"Param{i}", position=i) for i in range(3)),
            output_types=["string"],
        )
        svc = BatchService(StaticDescriptorProvider([cmd]))
        at_limit = svc.run(["Get-Widget"], {"output_mode": "full", "max_parameters": 3})[0]
        over = svc.run(["Get-Widget"], {"output_mode": "full", "max_parameters": 2})[0]

        def status(report: FullDetailReport) -> str:
            return next(r.status for r in report.results if r.rule_id == "parameter-count")

        assert status(at_limit) == "passed"
        assert status(over) == "failed"

    def test_plugin_rules_run(self, good_and_bad) -> None:
        extra = Rule(
            id="always-fails",
            title="Always fails",
            category=Category.OUTPUT,
            severity=Severity.REQUIRED,
            rationale="{command} is never good enough",
            check=lambda cmd, ctx: failed(),
        )
        svc = BatchService(StaticDescriptorProvider(good_and_bad), extra_rules=[extra])
        report = svc.run(["Good-Cmd"], {"output_mode": "failed"})[0]
        assert "always-fails" in [f.rule_id for f in report.failures]

    def test_plugin_rule_with_wrong_return_does_not_abort(self, good_and_bad) -> None:
        extra = Rule(
            id="returns-bool",
            title="Returns a bool",
            category=Category.GENERAL,
            severity=Severity.REQUIRED,
            rationale="",
            check=lambda cmd, ctx: True,
        )
        svc = BatchService(StaticDescriptorProvider(good_and_bad), extra_rules=[extra])
        reports = svc.run(["Good-Cmd", "Bad-Cmd"], {"output_mode": "full"})
        assert [r.command for r in reports] == ["Good-Cmd", "Bad-Cmd"]
        for report in reports:
            result = next(r for r in report.results if r.rule_id == "returns-bool")
            assert result.status == "skipped"
            assert result.reason == "error: rule returned bool"

    def test_plugin_rule_with_positional_rationale_rejected(self, good_and_bad) -> None:
        provider = SpyProvider(good_and_bad)
        extra = Rule(
            id="positional-template",
            title="Positional template",
            category=Category.GENERAL,
            severity=Severity.REQUIRED,
            rationale="use {0} here",
            check=lambda cmd, ctx: failed(),
        )
        svc = BatchService(provider, extra_rules=[extra])
        with pytest.raises(ConfigurationError, match="Invalid rationale"):
            svc.run(["Good-Cmd"])
        assert provider.requested == []


class TestCheck:
    def test_result_payload(self, service: BatchService) -> None:
        result = service.check(["Good-Cmd", "Bad-Cmd", "Unknown-Cmd"], {"output_mode": "summary"})
        assert result.ok
        assert result.op == "check"
        data = result.data
        assert data["count"] == 3
        assert data["clean"] == 1
        assert data["unresolved"] == 1
        assert data["healthy"] is False
        assert data["mode"] == "summary"
        assert data["severity"] == "required"
        assert [r["kind"] for r in data["reports"]] == ["summary", "summary", "error"]
        assert result.warnings == []

    def test_all_clean_is_healthy(self, service: BatchService) -> None:
        result = service.check(["Good-Cmd"])
        assert result.data["healthy"] is True
        assert result.data["reports"] == [
            {"kind": "boolean", "command": "Good-Cmd", "passed": True}
        ]

    def test_invalid_options(self, service: BatchService) -> None:
        result = service.check(["Good-Cmd"], {"output_mode": "loud"})
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_CONFIG"

    def test_warns_about_missing_lists(self, good_and_bad) -> None:
        svc = BatchService(
            StaticDescriptorProvider(good_and_bad),
            approved_verbs=StandardNameRegistry.unloaded("verbs.txt: missing"),
        )
        result = svc.check(["Good-Cmd"])
        assert result.ok
        assert any("approved verb" in w for w in result.warnings)
        assert any("standard parameter name" in w for w in result.warnings)


class TestDescribeRules:
    def test_required_only_by_default(self, service: BatchService) -> None:
        result = service.describe_rules()
        assert result.ok
        assert result.op == "rules"
        ids = [r["id"] for r in result.data["rules"]]
        assert "single-hyphen" in ids
        assert "help-uri-present" not in ids
        assert result.data["count"] == len(ids)
        assert {r["severity"] for r in result.data["rules"]} == {"required"}

    def test_include_all(self, service: BatchService) -> None:
        result = service.describe_rules(include_all=True)
        severities = {r["severity"] for r in result.data["rules"]}
        assert severities == {"required", "optional", "work-in-progress", "regression-only"}
        assert result.data["severity"] == "all"


class TestFromSettings:
    def test_registry_paths_from_settings(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, good_and_bad
    ) -> None:
        monkeypatch.delenv("CMDLINT_CONFIG", raising=False)
        (tmp_path / "verbs.txt").write_text("Good\nBad\n", encoding="utf-8")
        (tmp_path / "cmdlint.toml").write_text(
            '[registry]\napproved_verbs = "verbs.txt"\n[types]\nextra = ["Contoso.Widget"]\n',
            encoding="utf-8",
        )
        settings = CmdlintSettings.from_cli(start=tmp_path)
        svc = BatchService.from_settings(settings, StaticDescriptorProvider(good_and_bad))

        reports = svc.run(["Good-Cmd"], {"output_mode": "full"})
        verb = next(r for r in reports[0].results if r.rule_id == "approved-verb")
        assert verb.status == "passed"
        assert svc.context(RunOptions()).types.resolves("Contoso.Widget")
