"""NonInteractive phase: every invokable unit must describe itself."""

from __future__ import annotations

import inspect
import time

from unified_test_orchestrator.configuration.runtime_settings import RunConfiguration
from unified_test_orchestrator.module_catalog.descriptor_models import ModuleDescriptor
from unified_test_orchestrator.run_planning.plan_models import Phase

from .module_loader import ModuleLoader, ModuleLoadError, find_invokable_units
from .phase_outcomes import PhaseResult


def has_meaningful_help(name: str, unit: object) -> bool:
    """Own docstring present and its first line says more than the unit's name.

    Docstrings inherited from base classes do not count.
    """
    doc = inspect.cleandoc(getattr(unit, "__doc__", None) or "")
    if not doc:
        return False
    summary = doc.splitlines()[0].strip().rstrip(".").lower()
    return summary not in ("", name.lower())


class HelpMetadataCheck:  # pylint: disable=too-few-public-methods
    """Counts invokable units with and without usable help text."""

    phase = Phase.NON_INTERACTIVE

    def __init__(self, loader: ModuleLoader) -> None:
        self._loader = loader

    def handle(self, module: ModuleDescriptor, configuration: RunConfiguration) -> PhaseResult:
        del configuration
        started = time.perf_counter()
        try:
            with self._loader.loaded(module) as loaded:
                units = find_invokable_units(loaded.module)
                undocumented = sorted(
                    name for name, unit in units.items() if not has_meaningful_help(name, unit)
                )
        except ModuleLoadError as exc:
            return PhaseResult.failed_attempt(
                module.name, self.phase, exc, duration_seconds=time.perf_counter() - started
            )

        if not units:
            return PhaseResult.failed_attempt(
                module.name,
                self.phase,
                "module exposes no invokable units",
                duration_seconds=time.perf_counter() - started,
            )

        passed = len(units) - len(undocumented)
        details = [f"{passed}/{len(units)} invokable units have help metadata"]
        details.extend(f"Missing help: {name}" for name in undocumented)
        return PhaseResult(
            module_name=module.name,
            phase=self.phase,
            success=not undocumented,
            tests_run=len(units),
            tests_passed=passed,
            tests_failed=len(undocumented),
            duration_seconds=time.perf_counter() - started,
            details=tuple(details),
        )
