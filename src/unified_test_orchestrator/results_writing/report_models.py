"""Results writing entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from unified_test_orchestrator.run_planning.plan_models import SuiteKind

REPORTS_DIRNAME = "reports"
LOGS_DIRNAME = "logs"
COVERAGE_DIRNAME = "coverage"
EDITOR_EXPORT_FILENAME = "editor-test-results.json"
EDITOR_EXPORT_VERSION = "1.0"


@dataclass(frozen=True)
class RunSummary:  # pylint: disable=too-many-instance-attributes
    """Aggregate statistics computed purely from phase results."""

    suite_kind: SuiteKind
    generated_at: datetime
    total_modules: int
    successful_modules: int
    failed_modules: int
    total_tests: int
    passed_tests: int
    failed_tests: int
    success_rate: float
    total_duration_seconds: float

    def as_document(self) -> dict[str, Any]:
        return {
            "TestSuite": self.suite_kind.value,
            "GeneratedAt": self.generated_at.isoformat(),
            "TotalModules": self.total_modules,
            "SuccessfulModules": self.successful_modules,
            "FailedModules": self.failed_modules,
            "TotalTests": self.total_tests,
            "PassedTests": self.passed_tests,
            "FailedTests": self.failed_tests,
            "SuccessRate": self.success_rate,
            "TotalDuration": round(self.total_duration_seconds, 3),
        }


@dataclass(frozen=True)
class ReportPaths:
    """Artifacts written for one run."""

    json_path: Path
    html_path: Path
    log_path: Path
    editor_export_path: Path | None = None
    workbook_path: Path | None = None

    def all_paths(self) -> list[Path]:
        optional = [self.editor_export_path, self.workbook_path]
        return [self.json_path, self.html_path, self.log_path] + [
            path for path in optional if path is not None
        ]
