"""Phase handler exports."""

from .environment_check import EnvironmentCheck
from .help_metadata_check import HelpMetadataCheck, has_meaningful_help
from .module_loader import LoadedModule, ModuleLoader, ModuleLoadError, find_invokable_units
from .performance_check import RELOAD_THRESHOLD_SECONDS, PerformanceCheck
from .phase_outcomes import PhaseResult
from .registry import (
    PhaseHandler,
    PhaseHandlerTable,
    UnknownPhaseError,
    build_phase_handlers,
    handler_for,
)
from .test_file_phases import IntegrationTestPhase, UnitTestPhase, find_integration_tests

__all__ = [
    "PhaseResult",
    "PhaseHandler",
    "PhaseHandlerTable",
    "UnknownPhaseError",
    "build_phase_handlers",
    "handler_for",
    "EnvironmentCheck",
    "UnitTestPhase",
    "IntegrationTestPhase",
    "PerformanceCheck",
    "HelpMetadataCheck",
    "LoadedModule",
    "ModuleLoader",
    "ModuleLoadError",
    "RELOAD_THRESHOLD_SECONDS",
    "find_invokable_units",
    "find_integration_tests",
    "has_meaningful_help",
]
