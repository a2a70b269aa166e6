"""Run report writer service."""

from __future__ import annotations

import html
import json
from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from unified_test_orchestrator.phase_handlers.phase_outcomes import PhaseResult
from unified_test_orchestrator.run_planning.plan_models import Phase, SuiteKind

from .report_models import (
    COVERAGE_DIRNAME,
    EDITOR_EXPORT_FILENAME,
    EDITOR_EXPORT_VERSION,
    LOGS_DIRNAME,
    REPORTS_DIRNAME,
    ReportPaths,
    RunSummary,
)
from .workbook_writer import write_results_workbook

_PHASE_ORDER = {phase: index for index, phase in enumerate(Phase)}

_HTML_STYLE = """
body { font-family: Segoe UI, Arial, sans-serif; margin: 24px; color: #222; }
h1 { border-bottom: 2px solid #444; padding-bottom: 4px; }
.metrics { display: flex; gap: 16px; margin-bottom: 24px; }
.metric { background: #f3f3f3; border-radius: 6px; padding: 8px 14px; }
.module { border: 1px solid #ddd; border-radius: 6px; margin-bottom: 12px; padding: 8px 14px; }
.pass { color: #1a7f37; }
.fail { color: #cf222e; }
.skip { color: #6e7781; }
ul.details { margin: 2px 0 6px 18px; color: #555; font-size: 0.9em; }
"""


def ensure_output_directories(output_dir: Path | str) -> Path:
    """Create reports/, logs/ and coverage/ under the output root if absent."""
    root = Path(output_dir)
    for name in (REPORTS_DIRNAME, LOGS_DIRNAME, COVERAGE_DIRNAME):
        (root / name).mkdir(parents=True, exist_ok=True)
    return root


def ordered_results(results: Sequence[PhaseResult]) -> list[PhaseResult]:
    """Order results by module name then phase, independent of execution order."""
    return sorted(results, key=lambda result: (result.module_name, _PHASE_ORDER[result.phase]))


def group_by_module(results: Sequence[PhaseResult]) -> dict[str, list[PhaseResult]]:
    grouped: dict[str, list[PhaseResult]] = {}
    for result in ordered_results(results):
        grouped.setdefault(result.module_name, []).append(result)
    return grouped


def summarize(
    results: Sequence[PhaseResult],
    suite_kind: SuiteKind,
    *,
    generated_at: datetime | None = None,
) -> RunSummary:
    """Compute summary statistics; a module succeeds only if all its results succeed."""
    grouped = group_by_module(results)
    successful_modules = sum(
        1 for module_results in grouped.values() if all(r.success for r in module_results)
    )
    total_tests = sum(result.tests_run for result in results)
    passed_tests = sum(result.tests_passed for result in results)
    return RunSummary(
        suite_kind=suite_kind,
        generated_at=generated_at or datetime.now(UTC),
        total_modules=len(grouped),
        successful_modules=successful_modules,
        failed_modules=len(grouped) - successful_modules,
        total_tests=total_tests,
        passed_tests=passed_tests,
        failed_tests=sum(result.tests_failed for result in results),
        success_rate=success_rate(passed_tests, total_tests),
        total_duration_seconds=sum(result.duration_seconds for result in results),
    )


def success_rate(passed: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return round(passed / total * 100, 2)


def result_document(result: PhaseResult) -> dict[str, Any]:
    return {
        "ModuleName": result.module_name,
        "Phase": result.phase.value,
        "Success": result.success,
        "TestsRun": result.tests_run,
        "TestsPassed": result.tests_passed,
        "TestsFailed": result.tests_failed,
        "Duration": round(result.duration_seconds, 3),
        "Details": list(result.details),
        "Error": result.error,
    }


def build_report_document(summary: RunSummary, results: Sequence[PhaseResult]) -> dict[str, Any]:
    return {
        "Summary": summary.as_document(),
        "Results": [result_document(result) for result in ordered_results(results)],
    }


def build_editor_export(summary: RunSummary, results: Sequence[PhaseResult]) -> dict[str, Any]:
    """Mirror results in the shape editor integrations consume."""
    return {
        "version": EDITOR_EXPORT_VERSION,
        "timestamp": summary.generated_at.isoformat(),
        "results": [
            {
                "module": result.module_name,
                "phase": result.phase.value,
                "success": result.success,
                "testsRun": result.tests_run,
                "testsPassed": result.tests_passed,
                "testsFailed": result.tests_failed,
                "duration": round(result.duration_seconds, 3),
                "details": list(result.details),
                "error": result.error,
            }
            for result in ordered_results(results)
        ],
    }


# pylint: disable=too-many-arguments
def generate_reports(
    results: Sequence[PhaseResult],
    suite_kind: SuiteKind,
    output_dir: Path | str,
    *,
    editor_export: bool = False,
    workbook: bool = False,
    generated_at: datetime | None = None,
) -> ReportPaths:
    """Write JSON, HTML and text reports plus the optional editor export and workbook."""
    root = ensure_output_directories(output_dir)
    summary = summarize(results, suite_kind, generated_at=generated_at)
    stamp = _unique_stamp(root, suite_kind, summary.generated_at)
    stem = f"test-report-{suite_kind.value.lower()}-{stamp}"

    json_path = root / REPORTS_DIRNAME / f"{stem}.json"
    _write_json(json_path, build_report_document(summary, results))

    grouped = group_by_module(results)
    html_path = root / REPORTS_DIRNAME / f"{stem}.html"
    html_path.write_text(render_html(summary, grouped), encoding="utf-8")

    log_path = root / LOGS_DIRNAME / f"test-log-{suite_kind.value.lower()}-{stamp}.log"
    log_path.write_text(render_text(summary, grouped), encoding="utf-8")

    editor_path = None
    if editor_export:
        editor_path = root / REPORTS_DIRNAME / EDITOR_EXPORT_FILENAME
        _write_json(editor_path, build_editor_export(summary, results))

    workbook_path = None
    if workbook:
        workbook_path = root / REPORTS_DIRNAME / f"{stem}.xlsx"
        write_results_workbook(workbook_path, summary, ordered_results(results))

    return ReportPaths(
        json_path=json_path,
        html_path=html_path,
        log_path=log_path,
        editor_export_path=editor_path,
        workbook_path=workbook_path,
    )


# pylint: enable=too-many-arguments


def render_html(summary: RunSummary, grouped: Mapping[str, Sequence[PhaseResult]]) -> str:
    metrics = (
        ("Test suite", summary.suite_kind.value),
        ("Modules", f"{summary.successful_modules}/{summary.total_modules} passed"),
        ("Tests", f"{summary.passed_tests}/{summary.total_tests} passed"),
        ("Success rate", f"{summary.success_rate:.2f}%"),
        ("Duration", f"{summary.total_duration_seconds:.2f}s"),
    )
    lines = [
        "<!DOCTYPE html>",
        "<html><head><meta charset=\"utf-8\">",
        f"<title>Test report - {html.escape(summary.suite_kind.value)}</title>",
        f"<style>{_HTML_STYLE}</style></head><body>",
        f"<h1>Test report: {html.escape(summary.suite_kind.value)}</h1>",
        f"<p>Generated {html.escape(summary.generated_at.isoformat())}</p>",
        "<div class=\"metrics\">",
    ]
    lines.extend(
        f"<div class=\"metric\"><strong>{html.escape(label)}</strong><br>"
        f"{html.escape(value)}</div>"
        for label, value in metrics
    )
    lines.append("</div>")
    for module_name, module_results in grouped.items():
        module_ok = all(result.success for result in module_results)
        status_class = "pass" if module_ok else "fail"
        lines.append("<div class=\"module\">")
        lines.append(
            f"<h2 class=\"{status_class}\">{html.escape(module_name)} "
            f"({'PASSED' if module_ok else 'FAILED'})</h2>"
        )
        lines.append("<ul>")
        for result in module_results:
            lines.append(
                f"<li class=\"{_status_class(result)}\">{html.escape(_result_line(result))}"
            )
            if result.details:
                lines.append("<ul class=\"details\">")
                lines.extend(f"<li>{html.escape(detail)}</li>" for detail in result.details)
                lines.append("</ul>")
            lines.append("</li>")
        lines.append("</ul></div>")
    lines.append("</body></html>")
    return "\n".join(lines) + "\n"


def render_text(summary: RunSummary, grouped: Mapping[str, Sequence[PhaseResult]]) -> str:
    lines = [
        f"Test report: {summary.suite_kind.value}",
        f"Generated: {summary.generated_at.isoformat()}",
        "=" * 60,
        f"Modules: {summary.successful_modules}/{summary.total_modules} passed",
        f"Tests: {summary.passed_tests}/{summary.total_tests} passed, "
        f"{summary.failed_tests} failed",
        f"Success rate: {summary.success_rate:.2f}%",
        f"Duration: {summary.total_duration_seconds:.2f}s",
        "=" * 60,
    ]
    for module_name, module_results in grouped.items():
        module_ok = all(result.success for result in module_results)
        lines.append("")
        lines.append(f"[{'PASSED' if module_ok else 'FAILED'}] {module_name}")
        for result in module_results:
            lines.append(f"  {_result_line(result)}")
            lines.extend(f"      {detail}" for detail in result.details)
    return "\n".join(lines) + "\n"


def _result_line(result: PhaseResult) -> str:
    if result.skipped:
        status = "SKIP"
    else:
        status = "PASS" if result.success else "FAIL"
    line = (
        f"{status} {result.phase.value}: {result.tests_passed}/{result.tests_run} passed, "
        f"{result.tests_failed} failed ({result.duration_seconds:.2f}s)"
    )
    if result.error:
        line += f" - {result.error}"
    return line


def _unique_stamp(root: Path, suite_kind: SuiteKind, generated_at: datetime) -> str:
    base = generated_at.strftime("%Y%m%d-%H%M%S-%f")
    reports_dir = root / REPORTS_DIRNAME
    stamp, counter = base, 1
    while (reports_dir / f"test-report-{suite_kind.value.lower()}-{stamp}.json").exists():
        counter += 1
        stamp = f"{base}-{counter}"
    return stamp


def _status_class(result: PhaseResult) -> str:
    if result.skipped:
        return "skip"
    return "pass" if result.success else "fail"


def _write_json(path: Path, document: Mapping[str, Any]) -> None:
    path.write_text(json.dumps(document, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
