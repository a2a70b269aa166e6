"""Results writing domain exports."""

from .report_models import ReportPaths, RunSummary
from .run_report_writer import (
    build_editor_export,
    build_report_document,
    ensure_output_directories,
    generate_reports,
    group_by_module,
    success_rate,
    summarize,
)
from .workbook_writer import write_results_workbook

__all__ = [
    "ReportPaths",
    "RunSummary",
    "build_editor_export",
    "build_report_document",
    "ensure_output_directories",
    "generate_reports",
    "group_by_module",
    "success_rate",
    "summarize",
    "write_results_workbook",
]
