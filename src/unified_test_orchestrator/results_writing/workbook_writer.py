"""Results workbook writer."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from unified_test_orchestrator.phase_handlers.phase_outcomes import PhaseResult

from .report_models import RunSummary

RESULTS_SHEET_NAME = "Results"
SUMMARY_SHEET_NAME = "Summary"

RESULT_COLUMNS: tuple[str, ...] = (
    "Module",
    "Phase",
    "Success",
    "TestsRun",
    "TestsPassed",
    "TestsFailed",
    "Duration",
    "Error",
    "Details",
)

_PASS_FILL = PatternFill(start_color="DAFBE1", end_color="DAFBE1", fill_type="solid")
_FAIL_FILL = PatternFill(start_color="FFEBE9", end_color="FFEBE9", fill_type="solid")


def write_results_workbook(
    output_path: Path | str,
    summary: RunSummary,
    results: Sequence[PhaseResult],
) -> Path:
    """Write a Results sheet with one row per phase result and a Summary sheet."""
    workbook = Workbook()
    sheet = workbook.active
    if sheet is None:
        raise RuntimeError("Workbook active sheet is not available.")
    assert isinstance(sheet, Worksheet)
    sheet.title = RESULTS_SHEET_NAME

    for column_index, name in enumerate(RESULT_COLUMNS, start=1):
        cell = sheet.cell(row=1, column=column_index, value=name)
        cell.style = "Headline 1"
        sheet.column_dimensions[get_column_letter(column_index)].width = max(
            12, min(len(name) + 6, 40)
        )
    sheet.column_dimensions[get_column_letter(len(RESULT_COLUMNS))].width = 80

    for row_index, result in enumerate(results, start=2):
        values = (
            result.module_name,
            result.phase.value,
            result.success,
            result.tests_run,
            result.tests_passed,
            result.tests_failed,
            round(result.duration_seconds, 3),
            result.error or "",
            "\n".join(result.details),
        )
        fill = _PASS_FILL if result.success else _FAIL_FILL
        for column_index, value in enumerate(values, start=1):
            cell = sheet.cell(row=row_index, column=column_index, value=value)
            cell.fill = fill

    _write_summary_sheet(workbook, summary)

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)
    return output


def _write_summary_sheet(workbook: Workbook, summary: RunSummary) -> None:
    sheet = workbook.create_sheet(SUMMARY_SHEET_NAME)
    for row, (key, value) in enumerate(summary.as_document().items(), start=1):
        sheet.cell(row=row, column=1, value=key).font = Font(bold=True)
        sheet.cell(row=row, column=2, value=value)
    sheet.column_dimensions["A"].width = 20
    sheet.column_dimensions["B"].width = 32
