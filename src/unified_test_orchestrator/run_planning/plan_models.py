"""Run planning entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from unified_test_orchestrator.configuration.runtime_settings import RunConfiguration
from unified_test_orchestrator.module_catalog.descriptor_models import ModuleDescriptor


class PlanningError(Exception):
    """Raised when an execution plan cannot be built."""


class Phase(str, Enum):
    """Named testing stage with its own pass/fail semantics."""

    ENVIRONMENT = "Environment"
    UNIT = "Unit"
    INTEGRATION = "Integration"
    PERFORMANCE = "Performance"
    NON_INTERACTIVE = "NonInteractive"


class SuiteKind(str, Enum):
    """Requested test suite."""

    ALL = "All"
    UNIT = "Unit"
    INTEGRATION = "Integration"
    PERFORMANCE = "Performance"
    MODULES = "Modules"
    QUICK = "Quick"
    NON_INTERACTIVE = "NonInteractive"


# phases that load the module themselves and need Environment ahead of them
IMPORT_DEPENDENT_PHASES = frozenset({Phase.PERFORMANCE, Phase.NON_INTERACTIVE})


@dataclass(frozen=True)
class ExecutionPlan:
    """One invocation's ordered phases, module snapshot and configuration."""

    suite_kind: SuiteKind
    profile: str
    started_at: datetime
    modules: tuple[ModuleDescriptor, ...]
    phases: tuple[Phase, ...]
    configuration: RunConfiguration

    def __post_init__(self) -> None:
        if not self.phases:
            raise PlanningError(f"Suite '{self.suite_kind.value}' has no phases.")
        if len(set(self.phases)) != len(self.phases):
            raise PlanningError("Execution plan phases must not repeat.")
        needs_environment = IMPORT_DEPENDENT_PHASES.intersection(self.phases)
        if needs_environment and Phase.ENVIRONMENT not in self.phases:
            names = ", ".join(sorted(phase.value for phase in needs_environment))
            raise PlanningError(f"Phases {names} require the Environment phase.")
        if Phase.ENVIRONMENT in self.phases and self.phases[0] is not Phase.ENVIRONMENT:
            raise PlanningError("Environment phase must run first.")

    @property
    def cell_count(self) -> int:
        return len(self.phases) * len(self.modules)
