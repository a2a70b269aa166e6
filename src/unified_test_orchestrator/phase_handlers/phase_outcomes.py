"""Phase handler outcome entities."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from unified_test_orchestrator.run_planning.plan_models import Phase
from unified_test_orchestrator.test_runner.result_shapes import CaseCounts


@dataclass(frozen=True)
class PhaseResult:  # pylint: disable=too-many-instance-attributes
    """Outcome of running one phase against one module."""

    module_name: str
    phase: Phase
    success: bool
    tests_run: int
    tests_passed: int
    tests_failed: int
    duration_seconds: float
    details: tuple[str, ...] = ()
    error: str | None = None

    def __post_init__(self) -> None:
        if min(self.tests_run, self.tests_passed, self.tests_failed) < 0:
            raise ValueError("Test counts must not be negative.")
        if self.tests_run != self.tests_passed + self.tests_failed:
            raise ValueError("tests_run must equal tests_passed + tests_failed.")
        if self.duration_seconds < 0:
            raise ValueError("duration_seconds must not be negative.")

    @property
    def skipped(self) -> bool:
        return self.success and self.tests_run == 0

    @staticmethod
    def from_counts(
        module_name: str,
        phase: Phase,
        counts: CaseCounts,
        *,
        duration_seconds: float,
        details: Sequence[str] = (),
        error: str | None = None,
    ) -> PhaseResult:
        return PhaseResult(
            module_name=module_name,
            phase=phase,
            success=counts.failed == 0 and error is None,
            tests_run=counts.run,
            tests_passed=counts.passed,
            tests_failed=counts.failed,
            duration_seconds=max(0.0, duration_seconds),
            details=tuple(details),
            error=error,
        )

    @staticmethod
    def skipped_result(
        module_name: str, phase: Phase, reason: str, *, duration_seconds: float = 0.0
    ) -> PhaseResult:
        return PhaseResult(
            module_name=module_name,
            phase=phase,
            success=True,
            tests_run=0,
            tests_passed=0,
            tests_failed=0,
            duration_seconds=max(0.0, duration_seconds),
            details=(f"Skipped: {reason}",),
        )

    @staticmethod
    def failed_attempt(
        module_name: str,
        phase: Phase,
        error: BaseException | str,
        *,
        duration_seconds: float = 0.0,
        details: Sequence[str] = (),
    ) -> PhaseResult:
        """Result for a check that could not even be attempted."""
        message = str(error) or type(error).__name__
        return PhaseResult(
            module_name=module_name,
            phase=phase,
            success=False,
            tests_run=1,
            tests_passed=0,
            tests_failed=1,
            duration_seconds=max(0.0, duration_seconds),
            details=(*details, f"{phase.value} check failed: {message}"),
            error=message,
        )

    @staticmethod
    def not_executed(module_name: str, phase: Phase, reason: str) -> PhaseResult:
        """Placeholder for a plan cell skipped because the run aborted."""
        return PhaseResult(
            module_name=module_name,
            phase=phase,
            success=False,
            tests_run=0,
            tests_passed=0,
            tests_failed=0,
            duration_seconds=0.0,
            details=(f"Not executed: {reason}",),
            error=reason,
        )
