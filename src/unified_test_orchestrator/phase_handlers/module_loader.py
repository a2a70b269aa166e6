"""Isolated module loading for environment, performance and help checks."""

from __future__ import annotations

import importlib.util
import inspect
import sys
import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from types import ModuleType

from unified_test_orchestrator.module_catalog.descriptor_models import ModuleDescriptor

LOADED_MODULE_PREFIX = "_uto_loaded_"


class ModuleLoadError(Exception):
    """Raised when a module cannot be imported."""


@dataclass(frozen=True)
class LoadedModule:
    """A freshly imported module and the seconds its entry script took to execute."""

    module: ModuleType
    import_seconds: float


class ModuleLoader:
    """Imports catalogued modules under private names so they never shadow installed packages."""

    def __init__(self) -> None:
        self._lock = threading.RLock()

    @staticmethod
    def import_name(descriptor: ModuleDescriptor) -> str:
        return f"{LOADED_MODULE_PREFIX}{descriptor.name}"

    @contextmanager
    def loaded(self, descriptor: ModuleDescriptor) -> Iterator[LoadedModule]:
        """Import the module fresh for the duration of a check, then drop it from `sys.modules`.

        Imports are serialised across threads. `import_seconds` only covers the
        module's own execution, never time spent waiting for another import.
        """
        name = self.import_name(descriptor)
        with self._lock:
            self._purge(name)
            spec = importlib.util.spec_from_file_location(
                name,
                descriptor.script_path,
                submodule_search_locations=[str(descriptor.path)],
            )
            if spec is None or spec.loader is None:
                raise ModuleLoadError(f"Cannot build import spec for {descriptor.script_path}")
            module = importlib.util.module_from_spec(spec)
            sys.modules[name] = module
            try:
                started = time.perf_counter()
                try:
                    spec.loader.exec_module(module)
                except (Exception, SystemExit) as exc:
                    raise ModuleLoadError(
                        f"Import of module '{descriptor.name}' failed: "
                        f"{type(exc).__name__}: {exc}"
                    ) from exc
                yield LoadedModule(module=module, import_seconds=time.perf_counter() - started)
            finally:
                self._purge(name)

    @staticmethod
    def _purge(name: str) -> None:
        for loaded in [key for key in sys.modules if key == name or key.startswith(f"{name}.")]:
            del sys.modules[loaded]


def find_invokable_units(module: ModuleType) -> dict[str, object]:
    """Return the public functions and classes a loaded module exposes, by name."""
    exported = getattr(module, "__all__", None)
    if exported is not None:
        candidates = {name: getattr(module, name, None) for name in exported}
        return {
            name: unit for name, unit in sorted(candidates.items()) if _is_invokable(unit)
        }

    units: dict[str, object] = {}
    for name, unit in sorted(vars(module).items()):
        if name.startswith("_") or not _is_invokable(unit):
            continue
        owner = getattr(unit, "__module__", "") or ""
        if owner == module.__name__ or owner.startswith(f"{module.__name__}."):
            units[name] = unit
    return units


def _is_invokable(unit: object) -> bool:
    return inspect.isfunction(unit) or inspect.isclass(unit) or inspect.isbuiltin(unit)
