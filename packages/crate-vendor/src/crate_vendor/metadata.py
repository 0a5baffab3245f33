# SPDX-License-Identifier: MIT
"""Build package descriptors from ``cargo metadata`` output.

Only packages that came from a registry have a cached archive, so workspace
members, path dependencies and git dependencies are left out.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .errors import MetadataError
from .models import DependencyDescriptor, DependencyKind, PackageDescriptor, SourceId


def _parse_kind(kind: str | None) -> DependencyKind:
    if kind is None:
        return DependencyKind.NORMAL
    try:
        return DependencyKind(kind)
    except ValueError:
        raise MetadataError(f"Unknown dependency kind: {kind!r}") from None


def _parse_dependency(dep: dict[str, Any]) -> DependencyDescriptor:
    return DependencyDescriptor(
        name=dep["name"],
        req=dep.get("req", "*"),
        features=list(dep.get("features", [])),
        optional=bool(dep.get("optional", False)),
        default_features=bool(dep.get("uses_default_features", True)),
        target=dep.get("target"),
        kind=_parse_kind(dep.get("kind")),
    )


def load_cargo_metadata(data: dict[str, Any]) -> list[PackageDescriptor]:
    """Convert a ``cargo metadata --format-version 1`` document.

    Args:
        data: Parsed JSON document

    Returns:
        Registry packages sorted by name, then version

    Raises:
        MetadataError: If the document is malformed
    """
    packages = data.get("packages")
    if not isinstance(packages, list):
        raise MetadataError("cargo metadata document has no 'packages' list")

    descriptors: list[PackageDescriptor] = []
    for pkg in packages:
        source = pkg.get("source")
        if not source:
            continue
        try:
            source_id = SourceId.parse(source)
        except ValueError as e:
            raise MetadataError(str(e)) from e
        if not source_id.is_registry:
            continue

        try:
            descriptors.append(
                PackageDescriptor(
                    name=pkg["name"],
                    version=pkg["version"],
                    source=source_id,
                    dependencies=[_parse_dependency(d) for d in pkg.get("dependencies", [])],
                    features={k: list(v) for k, v in pkg.get("features", {}).items()},
                )
            )
        except (KeyError, TypeError, AttributeError) as e:
            name = pkg.get("name", "<unknown>") if isinstance(pkg, dict) else "<unknown>"
            raise MetadataError(f"Malformed package entry {name!r}: {e!r}") from e

    descriptors.sort(key=lambda p: (p.name, p.version))
    return descriptors


def load_cargo_metadata_file(path: str | Path) -> list[PackageDescriptor]:
    """Read and convert a saved ``cargo metadata`` JSON file.

    Raises:
        MetadataError: If the file is not valid JSON or is malformed
        FileNotFoundError: If the file does not exist
    """
    metadata_path = Path(path)
    if not metadata_path.exists():
        raise FileNotFoundError(f"cargo metadata file not found: {metadata_path}")
    try:
        data = json.loads(metadata_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise MetadataError(f"Invalid JSON in {metadata_path}: {e}") from e
    if not isinstance(data, dict):
        raise MetadataError(f"{metadata_path} does not contain a JSON object")
    return load_cargo_metadata(data)
