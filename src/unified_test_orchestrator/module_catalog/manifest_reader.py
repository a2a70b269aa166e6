"""Module manifest reader."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

WILDCARD_EXPORT = "*"


class CatalogError(Exception):
    """Raised when module metadata cannot be read."""


@dataclass(frozen=True)
class ModuleManifest:
    """Metadata declared in a module's `module.yaml`."""

    name: str | None
    version: str | None
    description: str | None
    exports: tuple[str, ...] | None
    dependencies: tuple[str, ...]

    @property
    def declares_explicit_exports(self) -> bool:
        return bool(self.exports) and WILDCARD_EXPORT not in (self.exports or ())


EMPTY_MANIFEST = ModuleManifest(
    name=None, version=None, description=None, exports=None, dependencies=()
)


def read_manifest(manifest_path: Path | str | None) -> ModuleManifest:
    """Load a module manifest; a missing path yields an empty manifest."""
    if manifest_path is None:
        return EMPTY_MANIFEST
    path = Path(manifest_path)
    if not path.exists():
        return EMPTY_MANIFEST
    try:
        parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise CatalogError(f"Failed to parse module manifest {path}: {exc}") from exc
    if parsed is None:
        return EMPTY_MANIFEST
    if not isinstance(parsed, Mapping):
        raise CatalogError(f"Module manifest root must be a mapping: {path}")

    return ModuleManifest(
        name=_optional_text(parsed.get("name")),
        version=_optional_text(parsed.get("version")),
        description=_optional_text(parsed.get("description")),
        exports=_parse_exports(parsed.get("exports"), path),
        dependencies=_string_tuple(parsed.get("dependencies"), "dependencies", path),
    )


def _parse_exports(value: Any, path: Path) -> tuple[str, ...] | None:
    if value is None:
        return None
    if isinstance(value, str):
        return (value.strip(),) if value.strip() else None
    return _string_tuple(value, "exports", path)


def _string_tuple(value: Any, key: str, path: Path) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value.strip(),) if value.strip() else ()
    if not isinstance(value, Sequence):
        raise CatalogError(f"Manifest key '{key}' must be a list of strings: {path}")
    items = []
    for item in value:
        if not isinstance(item, str):
            raise CatalogError(f"Manifest key '{key}' entries must be strings: {path}")
        if item.strip():
            items.append(item.strip())
    return tuple(items)


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
