"""Module analysis for test scaffolding."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from unified_test_orchestrator.module_catalog.descriptor_models import ModuleDescriptor
from unified_test_orchestrator.module_catalog.manifest_reader import read_manifest

PUBLIC_DIRNAME = "public"
PRIVATE_DIRNAME = "private"
DEFAULT_VERSION = "0.0.0"


class Archetype(str, Enum):
    """Classified shape of a module used to pick a scaffold template."""

    MANAGER = "Manager"
    PROVIDER = "Provider"
    CORE = "Core"
    UTILITY = "Utility"


@dataclass(frozen=True)
class ModuleAnalysis:
    """Facts about a module that drive classification and rendering."""

    module_name: str
    description: str
    version: str
    exported_units: tuple[str, ...]
    dependencies: tuple[str, ...]
    uses_public_private_layout: bool


def analyze_module(descriptor: ModuleDescriptor) -> ModuleAnalysis:
    """Collect exports, manifest metadata and folder shape for one module."""
    manifest = read_manifest(descriptor.manifest_path)
    if manifest.declares_explicit_exports:
        exported = tuple(manifest.exports or ())
    else:
        exported = public_unit_names(descriptor.path)
    return ModuleAnalysis(
        module_name=descriptor.name,
        description=manifest.description or f"{descriptor.name} module",
        version=manifest.version or DEFAULT_VERSION,
        exported_units=exported,
        dependencies=manifest.dependencies,
        uses_public_private_layout=(
            (descriptor.path / PUBLIC_DIRNAME).is_dir()
            or (descriptor.path / PRIVATE_DIRNAME).is_dir()
        ),
    )


def public_unit_names(module_path: Path) -> tuple[str, ...]:
    """Infer exported unit names from the file names in the module's public folder."""
    public_dir = module_path / PUBLIC_DIRNAME
    if not public_dir.is_dir():
        return ()
    return tuple(
        sorted(
            path.stem
            for path in public_dir.glob("*.py")
            if path.is_file() and not path.stem.startswith("_")
        )
    )
