"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer. Check reports
are dispatched again by their ``kind``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError
from rich.table import Table
from rich.text import Text

from cmdlint.domain.results import parse_report, report_passed
from cmdlint.domain.types import Severity
from cmdlint.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from cmdlint.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render one line per command for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    reports = result.data.get("reports")
    if isinstance(reports, list):
        return "\n".join(f"{_verdict(r)} {r.get('command', '')}" for r in reports)

    rules = result.data.get("rules")
    if isinstance(rules, list):
        return "\n".join(str(r.get("id", "")) for r in rules)

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def report_is_clean(report: dict[str, Any]) -> bool:
    """Whether a serialized report shows no failures."""
    try:
        return report_passed(parse_report(report))
    except ValidationError:
        return False


def _verdict(report: dict[str, Any]) -> str:
    if report.get("kind") == "error":
        return "ERROR"
    return "PASS" if report_is_clean(report) else "FAIL"


def _verdict_text(report: dict[str, Any]) -> Text:
    verdict = _verdict(report)
    style = {"PASS": "lint.ok", "FAIL": "lint.error", "ERROR": "lint.warning"}[verdict]
    return Text(f"{verdict:<5}", style=style)


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="lint.ok")
    op = Text(f"  {result.op}", style="lint.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="lint.key")
    console.print(k, Text(str(value)), sep="", end="")
    console.print()


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="lint.error")
    op = Text(f"  {result.op}", style="lint.op")
    console.print(label, op, Text(" — "), msg)


# ── check ─────────────────────────────────────────────────────────────


def _render_boolean(report: dict[str, Any], console: Console, *, verbose: bool) -> None:
    console.print(_verdict_text(report), Text(report["command"], style="lint.command"))


def _render_summary(report: dict[str, Any], console: Console, *, verbose: bool) -> None:
    counts = Text(
        f"  passed {report['passed_count']}  failed {report['failed_count']}"
        f"  skipped {report.get('skipped_count', 0)}",
        style="lint.key",
    )
    console.print(
        _verdict_text(report), Text(report["command"], style="lint.command"), counts, sep=""
    )


def _render_failed(report: dict[str, Any], console: Console, *, verbose: bool) -> None:
    console.print(_verdict_text(report), Text(report["command"], style="lint.command"))
    for failure in report.get("failures", []):
        rule_id = Text(f"    {failure['rule_id']}: ", style="lint.rule")
        console.print(rule_id, Text(failure["reason"]), sep="")


def _render_no_failures(report: dict[str, Any], console: Console, *, verbose: bool) -> None:
    console.print(
        _verdict_text(report),
        Text(report["command"], style="lint.command"),
        Text("  no failures", style="lint.key"),
        sep="",
    )


def _render_full(report: dict[str, Any], console: Console, *, verbose: bool) -> None:
    _render_summary(report, console, verbose=verbose)
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Rule", style="lint.rule", no_wrap=True)
    table.add_column("Category")
    table.add_column("Severity")
    table.add_column("Status")
    table.add_column("Detail")

    for item in report.get("results", []):
        status = str(item.get("status", ""))
        if status == "skipped":
            detail = str(item.get("reason") or "")
        elif status == "failed":
            details = ", ".join(item.get("details", []))
            detail = str(item.get("rationale", "")) if verbose else details
        else:
            detail = ""
        table.add_row(
            str(item.get("rule_id", "")),
            str(item.get("category", "")),
            _severity_label(item.get("severity")),
            Text(status, style=style_for_status(status)),
            detail,
        )
    console.print(table)


def _render_unresolved(report: dict[str, Any], console: Console, *, verbose: bool) -> None:
    console.print(
        _verdict_text(report),
        Text(report["command"], style="lint.command"),
        Text(f" — {report.get('message', '')}"),
        sep="",
    )


def _severity_label(value: Any) -> str:
    try:
        return Severity(int(value)).label
    except (TypeError, ValueError):
        return str(value)


_ReportRenderer = Callable[..., None]

_REPORT_RENDERERS: dict[str, _ReportRenderer] = {
    "boolean": _render_boolean,
    "summary": _render_summary,
    "failed": _render_failed,
    "no_failures": _render_no_failures,
    "full": _render_full,
    "error": _render_unresolved,
}


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    data = result.data
    for report in data.get("reports", []):
        renderer = _REPORT_RENDERERS.get(str(report.get("kind")))
        if renderer is None:
            console.print(str(report))
            continue
        renderer(report, console, verbose=verbose)

    console.print()
    _field(console, "commands", data.get("count", 0))
    _field(console, "clean", data.get("clean", 0))
    if data.get("unresolved"):
        _field(console, "unresolved", data["unresolved"])
    if verbose:
        _field(console, "severity", data.get("severity", ""))
        _field(console, "mode", data.get("mode", ""))


# ── rules ─────────────────────────────────────────────────────────────


def _render_rules(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="lint.rule", no_wrap=True)
    table.add_column("Category")
    table.add_column("Severity")
    table.add_column("Title")
    if verbose:
        table.add_column("Rationale", style="dim")

    for item in result.data.get("rules", []):
        row = [
            str(item.get("id", "")),
            str(item.get("category", "")),
            str(item.get("severity", "")),
            str(item.get("title", "")),
        ]
        if verbose:
            row.append(str(item.get("rationale", "")))
        table.add_row(*row)
    console.print(table)
    _field(console, "count", result.data.get("count", 0))


# ── generic ───────────────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "check": _render_check,
    "rules": _render_rules,
}
