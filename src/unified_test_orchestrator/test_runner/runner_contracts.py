"""External test runner contracts."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from unified_test_orchestrator.configuration.runtime_settings import RunConfiguration, Verbosity


class RunnerError(Exception):
    """Raised when the external runner could not execute a test path at all."""


@dataclass(frozen=True)
class RunnerSettings:
    """Settings handed to the external runner for one invocation."""

    verbosity: Verbosity
    timeout_minutes: int
    enable_coverage: bool = False
    coverage_threshold: float = 0
    coverage_target: Path | None = None
    coverage_report_path: Path | None = None
    results_path: Path | None = None

    @classmethod
    def from_configuration(
        cls,
        configuration: RunConfiguration,
        *,
        coverage_target: Path | None = None,
        coverage_report_path: Path | None = None,
        results_path: Path | None = None,
    ) -> RunnerSettings:
        return cls(
            verbosity=configuration.verbosity,
            timeout_minutes=configuration.timeout_minutes,
            enable_coverage=configuration.enable_coverage,
            coverage_threshold=configuration.coverage_threshold,
            coverage_target=coverage_target,
            coverage_report_path=coverage_report_path,
            results_path=results_path,
        )


@dataclass(frozen=True)
class RunnerOutcome:
    """Counts reported by the bundled pytest runner."""

    total: int
    passed: int
    failed: int
    skipped: int = 0
    exit_code: int = 0
    # set when pytest failed the run although every collected test passed
    error: str | None = None


class ExternalTestRunner(Protocol):  # pylint: disable=too-few-public-methods
    """Protocol for runners that execute a file or directory of tests."""

    def run(self, test_path: Path, settings: RunnerSettings) -> Any: ...
