"""Shared pytest fixtures for cmdlint tests."""

from __future__ import annotations

import copy
import dataclasses
import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from cmdlint.domain.descriptors import CommandDescriptor
from cmdlint.domain.typenames import TypeResolver
from cmdlint.infrastructure.lines import APPROVED_VERBS_FILE, STANDARD_NAMES_FILE
from cmdlint.rules.base import RuleContext, RuleOutcome
from cmdlint.rules.catalogue import all_rules
from cmdlint.services.batch import load_registry

# A command that passes every Required rule with the bundled name lists.
CLEAN_COMMAND: dict[str, Any] = {
    "name": "Get-Gadget",
    "output_types": ["System.IO.FileInfo"],
    "parameters": [
        {
            "name": "Name",
            "type": "System.String",
            "attributes": {"position": 0, "value_from_pipeline_by_property_name": True},
        },
        {"name": "Count", "type": "System.Int32"},
    ],
}

# One mandatory positional string parameter on a Get command.
WIDGET_COMMAND: dict[str, Any] = {
    "name": "Get-Widget",
    "output_types": ["System.Boolean"],
    "parameters": [
        {
            "name": "Name",
            "type": "System.String",
            "attributes": {
                "mandatory": True,
                "position": 0,
                "value_from_pipeline_by_property_name": True,
            },
        }
    ],
}


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty directory so no cmdlint.toml is discovered."""
    monkeypatch.delenv("CMDLINT_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def make_param() -> Callable[..., dict[str, Any]]:
    """Build a raw parameter record: ``make_param("Name", "string", position=0)``."""

    def _make(
        name: str,
        type: str = "System.String",  # noqa: A002
        *,
        aliases: tuple[str, ...] = (),
        sets: tuple[str, ...] = (),
        **attributes: Any,
    ) -> dict[str, Any]:
        return {
            "name": name,
            "type": type,
            "aliases": list(aliases),
            "member_of_sets": list(sets),
            "attributes": attributes,
        }

    return _make


@pytest.fixture
def make_command() -> Callable[..., CommandDescriptor]:
    """Build a descriptor from a name, parameter records and extra fields."""

    def _make(name: str, *params: dict[str, Any], **fields: Any) -> CommandDescriptor:
        record = {"name": name, "parameters": list(params), **fields}
        return CommandDescriptor.model_validate(record)

    return _make


@pytest.fixture
def clean_command() -> CommandDescriptor:
    return CommandDescriptor.model_validate(copy.deepcopy(CLEAN_COMMAND))


@pytest.fixture
def widget_command() -> CommandDescriptor:
    return CommandDescriptor.model_validate(copy.deepcopy(WIDGET_COMMAND))


@pytest.fixture
def rule_context() -> RuleContext:
    """Context with the bundled name lists and one extra known type."""
    return RuleContext(
        standard_names=load_registry(None, STANDARD_NAMES_FILE),
        approved_verbs=load_registry(None, APPROVED_VERBS_FILE),
        types=TypeResolver(["Contoso.Widget"]),
    )


@pytest.fixture
def run_rule(rule_context: RuleContext) -> Callable[..., RuleOutcome]:
    """Run one built-in rule by id: ``run_rule("single-hyphen", cmd, max_parameters=3)``.

    Keyword arguments replace fields of the shared :class:`RuleContext`.
    """
    rules = {r.id: r for r in all_rules()}

    def _run(rule_id: str, descriptor: CommandDescriptor, **overrides: Any) -> RuleOutcome:
        ctx = dataclasses.replace(rule_context, **overrides) if overrides else rule_context
        return rules[rule_id].bind(ctx)(descriptor)

    return _run


@pytest.fixture
def commands_file(tmp_path: Path) -> Path:
    """JSON catalogue holding the clean and widget commands."""
    path = tmp_path / "commands.json"
    path.write_text(
        json.dumps({"commands": [CLEAN_COMMAND, WIDGET_COMMAND]}),
        encoding="utf-8",
    )
    return path
