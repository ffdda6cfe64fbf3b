"""BatchService — resolve, evaluate and aggregate a sequence of commands.

Options are validated before anything is evaluated. Name registries and
the type resolver are loaded once per service and shared read-only by
every command; each command gets a fresh EvaluationResult.

INVARIANT: One command's resolution failure never aborts the batch; it
becomes a ResolutionErrorReport in that command's slot.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

from cmdlint.domain.registry import StandardNameRegistry
from cmdlint.domain.results import ResolutionErrorReport, report_passed
from cmdlint.domain.typenames import TypeResolver
from cmdlint.domain.types import ReportMode
from cmdlint.errors import ConfigurationError, ResolutionError
from cmdlint.infrastructure.lines import (
    APPROVED_VERBS_FILE,
    STANDARD_NAMES_FILE,
    bundled_path,
    load_lines,
)
from cmdlint.rules.base import Rule, RuleContext, UrlFetcher
from cmdlint.rules.catalogue import build_catalogue, select
from cmdlint.services.aggregate import aggregate
from cmdlint.services.evaluator import evaluate
from cmdlint.services.options import RunOptions, validate_options
from cmdlint.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from pydantic import BaseModel

    from cmdlint.config.settings import CmdlintSettings
    from cmdlint.plugins.manager import PluginManager
    from cmdlint.services.providers import DescriptorProvider

log = structlog.get_logger(__name__)


def load_registry(path: Path | None, default_file: str) -> StandardNameRegistry:
    """Load a name list from *path*, or the bundled *default_file*."""
    return StandardNameRegistry.from_path(path or bundled_path(default_file), load_lines)


class BatchService:
    """Applies the rule pipeline to many command names.

    Usage::

        svc = BatchService(provider, approved_verbs=verbs)
        reports = svc.run(["Get-Widget", "Set-Widget"], {"output_mode": "summary"})
    """

    def __init__(
        self,
        provider: DescriptorProvider,
        *,
        standard_names: StandardNameRegistry | None = None,
        approved_verbs: StandardNameRegistry | None = None,
        types: TypeResolver | None = None,
        fetch_url_status: UrlFetcher | None = None,
        extra_rules: Iterable[Rule] = (),
    ) -> None:
        self._provider = provider
        self._standard_names = standard_names or StandardNameRegistry.unloaded("not configured")
        self._approved_verbs = approved_verbs or StandardNameRegistry.unloaded("not configured")
        self._types = types or TypeResolver()
        self._fetch_url_status = fetch_url_status
        self._extra_rules = tuple(extra_rules)

    @classmethod
    def from_settings(
        cls,
        settings: CmdlintSettings,
        provider: DescriptorProvider,
        *,
        plugins: PluginManager | None = None,
        fetch_url_status: UrlFetcher | None = None,
    ) -> BatchService:
        """Build a service whose registries come from configured (or bundled) lists."""
        extra: list[Rule] = plugins.collect_rules() if plugins is not None else []
        return cls(
            provider,
            standard_names=load_registry(settings.registry.standard_names, STANDARD_NAMES_FILE),
            approved_verbs=load_registry(settings.registry.approved_verbs, APPROVED_VERBS_FILE),
            types=TypeResolver(settings.types.extra),
            fetch_url_status=fetch_url_status,
            extra_rules=extra,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def context(self, options: RunOptions) -> RuleContext:
        return RuleContext(
            standard_names=self._standard_names,
            approved_verbs=self._approved_verbs,
            types=self._types,
            max_parameters=options.max_parameters,
            help_timeout=options.help_timeout,
            fetch_url_status=self._fetch_url_status,
        )

    def run(
        self,
        names: Sequence[str],
        options: RunOptions | Mapping[str, Any] | None = None,
    ) -> list[BaseModel]:
        """One report per name, in input order.

        Raises:
            ConfigurationError: If *options* are invalid or plugin rules
                collide; raised before any command is evaluated.
        """
        opts = validate_options(options)
        catalogue = build_catalogue(self.context(opts), self._extra_rules)

        reports: list[BaseModel] = []
        for name in names:
            try:
                descriptor = self._provider.resolve(name)
            except ResolutionError as exc:
                log.warning("command.unresolved", command=name, error=str(exc))
                reports.append(
                    ResolutionErrorReport(command=name, code=exc.code, message=str(exc))
                )
                continue

            result = evaluate(descriptor, catalogue, opts.cutoff)
            log.debug(
                "command.evaluated",
                command=descriptor.name,
                passed=result.passed_count,
                failed=result.failed_count,
                skipped=result.skipped_count,
            )
            reports.append(aggregate(result, opts.output_mode))
        return reports

    def check(
        self,
        names: Sequence[str],
        options: RunOptions | Mapping[str, Any] | None = None,
    ) -> ServiceResult:
        """Run the batch and wrap it for the CLI."""
        try:
            opts = validate_options(options)
            reports = self.run(names, opts)
        except ConfigurationError as exc:
            return ServiceResult(
                ok=False,
                op="check",
                error=ServiceError(code=exc.code, message=str(exc)),
            )

        warnings = [
            f"{name} list unavailable: {registry.error}"
            for name, registry in (
                ("standard parameter name", self._standard_names),
                ("approved verb", self._approved_verbs),
            )
            if not registry.loaded
        ]
        unresolved = sum(1 for r in reports if isinstance(r, ResolutionErrorReport))
        clean = sum(1 for r in reports if report_passed(r))
        return ServiceResult(
            ok=True,
            op="check",
            data={
                "mode": ReportMode(opts.output_mode).value,
                "severity": opts.cutoff.label,
                "reports": [r.model_dump(mode="json") for r in reports],
                "count": len(reports),
                "clean": clean,
                "unresolved": unresolved,
                "healthy": clean == len(reports),
            },
            warnings=warnings,
        )

    def describe_rules(
        self,
        options: RunOptions | Mapping[str, Any] | None = None,
        *,
        include_all: bool = False,
    ) -> ServiceResult:
        """List the rules a check with *options* would run (or every rule)."""
        try:
            opts = validate_options(options)
            catalogue = build_catalogue(self.context(opts), self._extra_rules)
        except ConfigurationError as exc:
            return ServiceResult(
                ok=False,
                op="rules",
                error=ServiceError(code=exc.code, message=str(exc)),
            )

        if not include_all:
            catalogue = select(catalogue, opts.cutoff)
        rules = [
            {
                "id": bound.rule.id,
                "title": bound.rule.title,
                "category": bound.rule.category.value,
                "severity": bound.rule.severity.label,
                "rationale": bound.rule.rationale,
            }
            for bound in catalogue
        ]
        return ServiceResult(
            ok=True,
            op="rules",
            data={
                "severity": "all" if include_all else opts.cutoff.label,
                "rules": rules,
                "count": len(rules),
            },
        )
