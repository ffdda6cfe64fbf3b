"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, cmdlint.toml only contains
overrides. An empty or missing file is a valid configuration.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from cmdlint.domain.types import ReportMode

# --- cmdlint.toml sections ---


class CheckConfig(BaseModel):
    """[check] section — defaults for run options."""

    model_config = {"frozen": True}

    include_optional: bool = False
    include_work_in_progress: bool = False
    include_regression: bool = False
    max_parameters: int = 30
    output_mode: ReportMode = ReportMode.SUMMARY
    help_timeout: float = 5.0
    check_help_uri: bool = True


class RegistryConfig(BaseModel):
    """[registry] section — name list files (bundled lists when unset)."""

    model_config = {"frozen": True}

    standard_names: Path | None = None
    approved_verbs: Path | None = None


class TypesConfig(BaseModel):
    """[types] section."""

    model_config = {"frozen": True}

    extra: list[str] = Field(default_factory=list)


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    disabled: list[str] = Field(default_factory=list)
