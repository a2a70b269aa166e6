"""Execution planner tests."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

import pytest
from unified_test_orchestrator.configuration import RunConfiguration
from unified_test_orchestrator.module_catalog import describe_module
from unified_test_orchestrator.run_planning import (
    SUITE_PHASES,
    ExecutionPlan,
    Phase,
    PlanningError,
    SuiteKind,
    parse_suite_kind,
    phases_for,
    plan_execution,
)


def _modules(tmp_path: Path, *names: str):
    descriptors = []
    for name in names:
        module_dir = tmp_path / "modules" / name
        module_dir.mkdir(parents=True)
        (module_dir / "__init__.py").write_text("", encoding="utf-8")
        descriptors.append(describe_module(module_dir, tests_root=tmp_path / "tests"))
    return descriptors


@pytest.mark.parametrize(
    ("suite_kind", "expected"),
    [
        (
            SuiteKind.ALL,
            (Phase.ENVIRONMENT, Phase.UNIT, Phase.INTEGRATION, Phase.PERFORMANCE),
        ),
        (SuiteKind.UNIT, (Phase.UNIT,)),
        (SuiteKind.INTEGRATION, (Phase.INTEGRATION,)),
        (SuiteKind.PERFORMANCE, (Phase.ENVIRONMENT, Phase.PERFORMANCE)),
        (SuiteKind.MODULES, (Phase.ENVIRONMENT, Phase.UNIT)),
        (SuiteKind.QUICK, (Phase.UNIT,)),
        (SuiteKind.NON_INTERACTIVE, (Phase.ENVIRONMENT, Phase.NON_INTERACTIVE)),
    ],
)
def test_suite_phase_table(suite_kind: SuiteKind, expected: tuple[Phase, ...]) -> None:
    assert phases_for(suite_kind) == expected


def test_every_suite_kind_has_phases() -> None:
    assert set(SUITE_PHASES) == set(SuiteKind)


@pytest.mark.parametrize("raw", ["All", "all", "NonInteractive", "non_interactive", " quick "])
def test_parse_suite_kind_accepts_values_and_names(raw: str) -> None:
    assert isinstance(parse_suite_kind(raw), SuiteKind)


def test_parse_suite_kind_rejects_unknown_values() -> None:
    with pytest.raises(PlanningError, match="Unknown test suite 'Smoke'"):
        parse_suite_kind("Smoke")


def test_plan_binds_modules_phases_and_profile_configuration(tmp_path: Path) -> None:
    modules = _modules(tmp_path, "Alpha", "Beta", "Gamma")

    plan = plan_execution("Modules", modules, "Debug")

    assert plan.suite_kind is SuiteKind.MODULES
    assert plan.profile == "Debug"
    assert plan.modules == tuple(modules)
    assert plan.phases == (Phase.ENVIRONMENT, Phase.UNIT)
    assert plan.configuration.parallel_jobs == 1
    assert plan.cell_count == 6


def test_plan_uses_project_profiles(tmp_path: Path) -> None:
    plan = plan_execution(
        SuiteKind.QUICK,
        _modules(tmp_path, "Alpha"),
        "Nightly",
        extra_profiles={"Nightly": {"retry_count": 0}},
    )

    assert plan.configuration.retry_count == 0


def test_plan_allows_empty_module_set() -> None:
    plan = plan_execution(SuiteKind.ALL, [], "CI")

    assert plan.cell_count == 0


@pytest.mark.parametrize(
    ("phases", "message"),
    [
        ((), "no phases"),
        ((Phase.UNIT, Phase.UNIT), "must not repeat"),
        ((Phase.PERFORMANCE,), "require the Environment phase"),
        ((Phase.UNIT, Phase.ENVIRONMENT), "must run first"),
    ],
)
def test_plan_invariants_are_enforced(phases, message: str) -> None:
    with pytest.raises(PlanningError, match=message):
        ExecutionPlan(
            suite_kind=SuiteKind.ALL,
            profile="CI",
            started_at=datetime.now(UTC),
            modules=(),
            phases=phases,
            configuration=RunConfiguration(),
        )
