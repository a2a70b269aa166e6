"""Module catalog builder service."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from unified_test_orchestrator.run_logging import LogLevel, LogSink, emit, resolve_log_sink

from .descriptor_models import (
    ENTRY_SCRIPT_NAME,
    MANIFEST_FILENAME,
    ModuleDescriptor,
    centralized_test_dir,
    colocated_test_file,
)


def build_catalog(
    modules_root: Path | str,
    name_filter: Iterable[str] | None = None,
    *,
    tests_root: Path | str,
    log_sink: LogSink | None = None,
) -> list[ModuleDescriptor]:
    """Scan the modules root and describe every module that has an entry script.

    Args:
      modules_root: Directory whose immediate subdirectories are candidate modules.
      name_filter: Optional module names to include; everything else is skipped.
      tests_root: Root of the shared test tree holding centralized tests.
      log_sink: Sink for the missing-root warning.

    Returns:
      Descriptors sorted by module name. A missing modules root yields an empty list.
    """
    root = Path(modules_root)
    sink = resolve_log_sink(log_sink)
    if not root.is_dir():
        emit(sink, LogLevel.WARN, f"Modules root not found: {root}")
        return []

    wanted = set(name_filter) if name_filter is not None else None
    descriptors: list[ModuleDescriptor] = []
    for candidate in sorted(root.iterdir(), key=lambda entry: entry.name):
        if not _is_candidate_directory(candidate):
            continue
        if wanted is not None and candidate.name not in wanted:
            continue
        descriptor = describe_module(candidate, tests_root=Path(tests_root))
        if descriptor is None:
            emit(sink, LogLevel.DEBUG, f"Skipping {candidate.name}: no {ENTRY_SCRIPT_NAME}")
            continue
        descriptors.append(descriptor)
    return descriptors


def describe_module(module_path: Path, *, tests_root: Path) -> ModuleDescriptor | None:
    """Describe one module directory, or return None when it has no entry script."""
    script_path = module_path / ENTRY_SCRIPT_NAME
    if not script_path.is_file():
        return None
    manifest_path = module_path / MANIFEST_FILENAME
    colocated = colocated_test_file(module_path, module_path.name)
    centralized = centralized_test_dir(tests_root, module_path.name)
    return ModuleDescriptor(
        name=module_path.name,
        path=module_path,
        script_path=script_path,
        manifest_path=manifest_path if manifest_path.is_file() else None,
        colocated_test_file=colocated,
        centralized_test_dir=centralized,
        has_colocated_tests=colocated.is_file(),
        has_centralized_tests=centralized.is_dir(),
    )


def _is_candidate_directory(entry: Path) -> bool:
    return entry.is_dir() and not entry.name.startswith((".", "_"))
