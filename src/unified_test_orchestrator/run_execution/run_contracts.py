"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass

from unified_test_orchestrator.phase_handlers.phase_outcomes import PhaseResult
from unified_test_orchestrator.results_writing.report_models import ReportPaths, RunSummary
from unified_test_orchestrator.run_planning.plan_models import SuiteKind


@dataclass(frozen=True)
class SuiteRunRequest:  # pylint: disable=too-many-instance-attributes
    """Input contract for executing one suite run."""

    suite_kind: SuiteKind | str
    profile_name: str = "Development"
    module_filter: tuple[str, ...] | None = None
    parallel: bool = False
    output_path: str | None = None
    generate_report: bool = True
    editor_export: bool | None = None
    workbook: bool | None = None


@dataclass(frozen=True)
class SuiteRunOutcome:
    """Output contract for one completed suite run."""

    suite_kind: SuiteKind
    results: tuple[PhaseResult, ...]
    summary: RunSummary
    report_paths: ReportPaths | None
    aborted: bool = False
