"""Environment phase: the module must load and expose invokable units."""

from __future__ import annotations

import time

from unified_test_orchestrator.configuration.runtime_settings import RunConfiguration
from unified_test_orchestrator.module_catalog.descriptor_models import ModuleDescriptor
from unified_test_orchestrator.run_planning.plan_models import Phase

from .module_loader import ModuleLoader, ModuleLoadError, find_invokable_units
from .phase_outcomes import PhaseResult


class EnvironmentCheck:  # pylint: disable=too-few-public-methods
    """Validates that a module imports and exposes at least one invokable unit."""

    phase = Phase.ENVIRONMENT

    def __init__(self, loader: ModuleLoader) -> None:
        self._loader = loader

    def handle(self, module: ModuleDescriptor, configuration: RunConfiguration) -> PhaseResult:
        del configuration
        started = time.perf_counter()
        try:
            with self._loader.loaded(module) as loaded:
                units = find_invokable_units(loaded.module)
        except ModuleLoadError as exc:
            return PhaseResult.failed_attempt(
                module.name,
                self.phase,
                exc,
                duration_seconds=time.perf_counter() - started,
            )

        duration = time.perf_counter() - started
        if not units:
            return PhaseResult(
                module_name=module.name,
                phase=self.phase,
                success=False,
                tests_run=1,
                tests_passed=0,
                tests_failed=1,
                duration_seconds=duration,
                details=(f"Module '{module.name}' loaded but exposes no invokable units",),
                error="No invokable units exported",
            )
        return PhaseResult(
            module_name=module.name,
            phase=self.phase,
            success=True,
            tests_run=1,
            tests_passed=1,
            tests_failed=0,
            duration_seconds=duration,
            details=(f"Module '{module.name}' loaded with {len(units)} invokable unit(s)",),
        )
