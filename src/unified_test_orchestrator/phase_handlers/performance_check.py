"""Performance phase: a synthetic module reload timing check."""

from __future__ import annotations

from unified_test_orchestrator.configuration.runtime_settings import RunConfiguration
from unified_test_orchestrator.module_catalog.descriptor_models import ModuleDescriptor
from unified_test_orchestrator.run_planning.plan_models import Phase

from .module_loader import ModuleLoader, ModuleLoadError
from .phase_outcomes import PhaseResult

RELOAD_THRESHOLD_SECONDS = 5.0


class PerformanceCheck:  # pylint: disable=too-few-public-methods
    """Passes when reloading the module takes less than the fixed threshold."""

    phase = Phase.PERFORMANCE

    def __init__(
        self, loader: ModuleLoader, *, threshold_seconds: float = RELOAD_THRESHOLD_SECONDS
    ) -> None:
        self._loader = loader
        self._threshold_seconds = threshold_seconds

    def handle(self, module: ModuleDescriptor, configuration: RunConfiguration) -> PhaseResult:
        try:
            with self._loader.loaded(module) as loaded:
                elapsed = loaded.import_seconds
        except ModuleLoadError as exc:
            return PhaseResult.failed_attempt(module.name, self.phase, exc)

        within_budget = elapsed < self._threshold_seconds
        details = [
            f"Reload time: {elapsed:.3f}s (threshold {self._threshold_seconds:.1f}s)",
        ]
        if configuration.enable_performance_metrics:
            details.append(f"Memory budget: {configuration.max_memory_usage_mb} MB")
        return PhaseResult(
            module_name=module.name,
            phase=self.phase,
            success=within_budget,
            tests_run=1,
            tests_passed=1 if within_budget else 0,
            tests_failed=0 if within_budget else 1,
            duration_seconds=elapsed,
            details=tuple(details),
            error=None if within_budget else "Reload exceeded performance threshold",
        )
