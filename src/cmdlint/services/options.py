"""Run options — what to evaluate and how to report it."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from cmdlint.domain.types import ReportMode, Severity
from cmdlint.errors import ConfigurationError
from cmdlint.rules.base import DEFAULT_HELP_TIMEOUT, DEFAULT_MAX_PARAMETERS

MAX_PARAMETERS_LIMIT = 512


class RunOptions(BaseModel):
    """Options for one batch run.

    Inclusion flags nest: work-in-progress implies optional, regression
    implies both. The resulting :attr:`cutoff` is the highest level enabled.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    include_optional: bool = False
    include_work_in_progress: bool = False
    include_regression: bool = False
    max_parameters: int = Field(default=DEFAULT_MAX_PARAMETERS, ge=0, le=MAX_PARAMETERS_LIMIT)
    output_mode: ReportMode = ReportMode.BOOLEAN
    help_timeout: float = Field(default=DEFAULT_HELP_TIMEOUT, gt=0)

    @property
    def cutoff(self) -> Severity:
        if self.include_regression:
            return Severity.REGRESSION_ONLY
        if self.include_work_in_progress:
            return Severity.WORK_IN_PROGRESS
        if self.include_optional:
            return Severity.OPTIONAL
        return Severity.REQUIRED

    @classmethod
    def from_severity(cls, severity: str | Severity, **kwargs: Any) -> RunOptions:
        """Build options from a maximum severity name such as ``"optional"``."""
        try:
            level = severity if isinstance(severity, Severity) else Severity.from_label(severity)
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc
        return validate_options(
            {
                "include_optional": level >= Severity.OPTIONAL,
                "include_work_in_progress": level >= Severity.WORK_IN_PROGRESS,
                "include_regression": level >= Severity.REGRESSION_ONLY,
                **kwargs,
            }
        )


def validate_options(raw: RunOptions | Mapping[str, Any] | None) -> RunOptions:
    """Coerce *raw* into :class:`RunOptions`.

    Raises:
        ConfigurationError: On unknown keys, an unknown output mode, or
            ``max_parameters`` outside ``[0, 512]``.
    """
    if raw is None:
        return RunOptions()
    if isinstance(raw, RunOptions):
        return raw
    try:
        return RunOptions.model_validate(dict(raw))
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'options'}: {err['msg']}"
            for err in exc.errors()
        )
        raise ConfigurationError(f"Invalid run options: {problems}") from exc
