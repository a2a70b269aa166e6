"""Execution planner service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from typing import Any

from unified_test_orchestrator.configuration.profile_resolver import resolve_run_configuration
from unified_test_orchestrator.module_catalog.descriptor_models import ModuleDescriptor
from unified_test_orchestrator.run_logging import LogSink

from .plan_models import ExecutionPlan, Phase, PlanningError, SuiteKind

SUITE_PHASES: Mapping[SuiteKind, tuple[Phase, ...]] = {
    SuiteKind.ALL: (Phase.ENVIRONMENT, Phase.UNIT, Phase.INTEGRATION, Phase.PERFORMANCE),
    SuiteKind.UNIT: (Phase.UNIT,),
    SuiteKind.INTEGRATION: (Phase.INTEGRATION,),
    SuiteKind.PERFORMANCE: (Phase.ENVIRONMENT, Phase.PERFORMANCE),
    SuiteKind.MODULES: (Phase.ENVIRONMENT, Phase.UNIT),
    SuiteKind.QUICK: (Phase.UNIT,),
    SuiteKind.NON_INTERACTIVE: (Phase.ENVIRONMENT, Phase.NON_INTERACTIVE),
}


def parse_suite_kind(value: SuiteKind | str) -> SuiteKind:
    """Parse a suite kind by value or name, rejecting anything outside the closed set."""
    if isinstance(value, SuiteKind):
        return value
    if isinstance(value, str):
        wanted = value.strip().lower()
        for member in SuiteKind:
            if wanted in (member.value.lower(), member.name.lower()):
                return member
    choices = ", ".join(member.value for member in SuiteKind)
    raise PlanningError(f"Unknown test suite '{value}'. Expected one of: {choices}.")


def phases_for(suite_kind: SuiteKind) -> tuple[Phase, ...]:
    try:
        return SUITE_PHASES[suite_kind]
    except KeyError as exc:
        raise PlanningError(f"No phases defined for suite '{suite_kind.value}'.") from exc


def plan_execution(
    suite_kind: SuiteKind | str,
    modules: Sequence[ModuleDescriptor],
    profile_name: str,
    *,
    extra_profiles: Mapping[str, Mapping[str, Any]] | None = None,
    log_sink: LogSink | None = None,
) -> ExecutionPlan:
    """Build the ordered phase plan for a suite and bind the resolved configuration."""
    resolved_kind = parse_suite_kind(suite_kind)
    configuration = resolve_run_configuration(
        profile_name, extra_profiles=extra_profiles, log_sink=log_sink
    )
    return ExecutionPlan(
        suite_kind=resolved_kind,
        profile=profile_name,
        started_at=datetime.now(UTC),
        modules=tuple(modules),
        phases=phases_for(resolved_kind),
        configuration=configuration,
    )
