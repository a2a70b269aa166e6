"""Run planning domain exports."""

from .execution_planner import SUITE_PHASES, parse_suite_kind, phases_for, plan_execution
from .plan_models import ExecutionPlan, Phase, PlanningError, SuiteKind

__all__ = [
    "ExecutionPlan",
    "Phase",
    "SuiteKind",
    "PlanningError",
    "SUITE_PHASES",
    "parse_suite_kind",
    "phases_for",
    "plan_execution",
]
