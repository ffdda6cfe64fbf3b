"""Tests for RunOptions validation and severity cutoffs."""

from __future__ import annotations

import pytest

from cmdlint.domain.types import ReportMode, Severity
from cmdlint.errors import ConfigurationError
from cmdlint.services.options import MAX_PARAMETERS_LIMIT, RunOptions, validate_options


class TestCutoff:
    def test_default_is_required(self) -> None:
        opts = RunOptions()
        assert opts.cutoff is Severity.REQUIRED
        assert opts.output_mode is ReportMode.BOOLEAN
        assert opts.max_parameters == 30

    @pytest.mark.parametrize(
        ("flags", "expected"),
        [
            ({"include_optional": True}, Severity.OPTIONAL),
            ({"include_work_in_progress": True}, Severity.WORK_IN_PROGRESS),
            ({"include_regression": True}, Severity.REGRESSION_ONLY),
            ({"include_optional": True, "include_regression": True}, Severity.REGRESSION_ONLY),
        ],
    )
    def test_flags_nest(self, flags: dict[str, bool], expected: Severity) -> None:
        assert RunOptions(**flags).cutoff is expected

    def test_from_severity(self) -> None:
        opts = RunOptions.from_severity("work-in-progress", output_mode="full")
        assert opts.cutoff is Severity.WORK_IN_PROGRESS
        assert opts.include_optional
        assert not opts.include_regression
        assert opts.output_mode is ReportMode.FULL

    def test_from_unknown_severity(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown severity"):
            RunOptions.from_severity("critical")


class TestValidateOptions:
    def test_none_gives_defaults(self) -> None:
        assert validate_options(None) == RunOptions()

    def test_instance_passes_through(self) -> None:
        opts = RunOptions(max_parameters=10)
        assert validate_options(opts) is opts

    def test_mapping(self) -> None:
        opts = validate_options({"output_mode": "summary", "max_parameters": 0})
        assert opts.output_mode is ReportMode.SUMMARY
        assert opts.max_parameters == 0

    @pytest.mark.parametrize(
        "raw",
        [
            {"output_mode": "verbose"},
            {"max_parameters": -1},
            {"max_parameters": MAX_PARAMETERS_LIMIT + 1},
            {"help_timeout": 0},
            {"colour": "red"},
        ],
    )
    def test_invalid(self, raw: dict[str, object]) -> None:
        with pytest.raises(ConfigurationError, match="Invalid run options"):
            validate_options(raw)
