"""Static phase-to-handler lookup table."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

from unified_test_orchestrator.configuration.runtime_settings import RunConfiguration
from unified_test_orchestrator.module_catalog.descriptor_models import ModuleDescriptor
from unified_test_orchestrator.run_planning.plan_models import Phase
from unified_test_orchestrator.test_runner import ExternalTestRunner

from .environment_check import EnvironmentCheck
from .help_metadata_check import HelpMetadataCheck
from .module_loader import ModuleLoader
from .performance_check import PerformanceCheck
from .phase_outcomes import PhaseResult
from .test_file_phases import IntegrationTestPhase, UnitTestPhase


class UnknownPhaseError(Exception):
    """Raised when no handler is registered for a phase."""


class PhaseHandler(Protocol):  # pylint: disable=too-few-public-methods
    """Protocol shared by every phase handler."""

    def handle(self, module: ModuleDescriptor, configuration: RunConfiguration) -> PhaseResult: ...


PhaseHandlerTable = Mapping[Phase, PhaseHandler]


def build_phase_handlers(
    runner: ExternalTestRunner,
    *,
    integration_dir: Path,
    artifacts_dir: Path | None = None,
    loader: ModuleLoader | None = None,
) -> dict[Phase, PhaseHandler]:
    """Build the handler table covering every phase kind."""
    module_loader = loader or ModuleLoader()
    return {
        Phase.ENVIRONMENT: EnvironmentCheck(module_loader),
        Phase.UNIT: UnitTestPhase(runner, artifacts_dir=artifacts_dir),
        Phase.INTEGRATION: IntegrationTestPhase(
            runner, integration_dir, artifacts_dir=artifacts_dir
        ),
        Phase.PERFORMANCE: PerformanceCheck(module_loader),
        Phase.NON_INTERACTIVE: HelpMetadataCheck(module_loader),
    }


def handler_for(handlers: PhaseHandlerTable, phase: Phase) -> PhaseHandler:
    try:
        return handlers[phase]
    except KeyError as exc:
        raise UnknownPhaseError(f"No handler registered for phase '{phase.value}'.") from exc
