"""Batched test scaffolding for modules without tests."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass
from pathlib import Path

from unified_test_orchestrator.module_catalog.descriptor_models import (
    ModuleDescriptor,
    ModuleTestStrategy,
)

from .scaffold_writer import generate_test

ScaffoldFunction = Callable[[ModuleDescriptor, bool], bool]


@dataclass(frozen=True)
class ScaffoldOutcome:
    """Per-module result of bulk generation."""

    module_name: str
    success: bool
    test_path: Path
    error: str | None = None


def modules_without_tests(
    catalog: Sequence[ModuleDescriptor], names: Iterable[str] | None = None
) -> list[ModuleDescriptor]:
    wanted = set(names) if names is not None else None
    return [
        module
        for module in catalog
        if module.test_strategy is ModuleTestStrategy.NONE
        and (wanted is None or module.name in wanted)
    ]


def partition(items: Sequence[ModuleDescriptor], size: int) -> list[list[ModuleDescriptor]]:
    if size < 1:
        raise ValueError("Batch size must be at least 1.")
    return [list(items[start : start + size]) for start in range(0, len(items), size)]


def generate_missing_tests(
    catalog: Sequence[ModuleDescriptor],
    names: Iterable[str] | None = None,
    *,
    max_concurrency: int = 4,
    overwrite: bool = False,
    scaffold: ScaffoldFunction | None = None,
) -> list[ScaffoldOutcome]:
    """Generate scaffolds for untested modules, one bounded batch at a time.

    Each batch runs on its own worker pool and completes before the next one
    starts. A failing module is reported in its outcome and does not affect
    other modules in the batch.
    """
    scaffold_one = scaffold or _default_scaffold
    outcomes: list[ScaffoldOutcome] = []
    for batch in partition(modules_without_tests(catalog, names), max_concurrency):
        with ThreadPoolExecutor(
            max_workers=len(batch), thread_name_prefix="uto-scaffold"
        ) as pool:
            futures = [
                pool.submit(_scaffold_isolated, scaffold_one, module, overwrite)
                for module in batch
            ]
            wait(futures)
        outcomes.extend(future.result() for future in futures)
    return outcomes


def _default_scaffold(module: ModuleDescriptor, overwrite: bool) -> bool:
    return generate_test(module, overwrite=overwrite)


def _scaffold_isolated(
    scaffold_one: ScaffoldFunction, module: ModuleDescriptor, overwrite: bool
) -> ScaffoldOutcome:
    try:
        written = scaffold_one(module, overwrite)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        return ScaffoldOutcome(
            module_name=module.name,
            success=False,
            test_path=module.colocated_test_file,
            error=f"{type(exc).__name__}: {exc}",
        )
    return ScaffoldOutcome(
        module_name=module.name,
        success=written,
        test_path=module.colocated_test_file,
        error=None if written else "Test file already exists",
    )
