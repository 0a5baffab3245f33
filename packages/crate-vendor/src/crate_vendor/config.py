# SPDX-License-Identifier: MIT
"""Vendoring configuration.

Settings are read from the ``[tool.crate-vendor]`` table of a
pyproject.toml and can be overridden by the caller.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .errors import ConfigError
from .repository import DEFAULT_COMMIT_MESSAGE, GitVersionedTree, ManifestVersionedTree, VersionedTree

BACKENDS = ("git", "manifest")


def default_cargo_home() -> Path:
    """Return ``$CARGO_HOME``, falling back to ``~/.cargo``."""
    cargo_home = os.environ.get("CARGO_HOME")
    if cargo_home:
        return Path(cargo_home)
    return Path.home() / ".cargo"


@dataclass
class VendorSettings:
    """Settings controlling how a registry is vendored.

    Attributes:
        cargo_home: Cargo home directory holding the download cache
        archive_ext: Extension of cached archives
        commit_message: Message of the index snapshot commit
        backend: How the index is versioned, ``git`` or ``manifest``
        replace_existing: Remove a previous registry at the destination first
        source_dirs: Registry URL to cache directory name overrides
    """

    cargo_home: Path = field(default_factory=default_cargo_home)
    archive_ext: str = "crate"
    commit_message: str = DEFAULT_COMMIT_MESSAGE
    backend: str = "git"
    replace_existing: bool = False
    source_dirs: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.cargo_home = Path(self.cargo_home)
        if self.backend not in BACKENDS:
            raise ConfigError(
                f"Invalid backend: {self.backend!r}. Must be one of: {', '.join(BACKENDS)}"
            )
        if not self.archive_ext or "/" in self.archive_ext:
            raise ConfigError(f"Invalid archive_ext: {self.archive_ext!r}")
        if not self.commit_message.strip():
            raise ConfigError("commit_message must not be empty")

    @property
    def registry_cache_path(self) -> Path:
        """Directory where cargo stores downloaded archives."""
        return self.cargo_home / "registry" / "cache"

    @classmethod
    def from_pyproject(cls, pyproject_path: str | Path, **overrides: Any) -> "VendorSettings":
        """Load settings from a pyproject.toml file.

        Args:
            pyproject_path: Path to pyproject.toml
            **overrides: Values taking precedence over the file

        Raises:
            ConfigError: If the file is invalid
            FileNotFoundError: If the file does not exist
        """
        path = Path(pyproject_path)
        if not path.exists():
            raise FileNotFoundError(f"pyproject.toml not found: {path}")

        try:
            with open(path, "rb") as f:
                pyproject = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML syntax: {e}") from e

        return cls.from_pyproject_dict(pyproject, base_dir=path.parent, **overrides)

    @classmethod
    def from_pyproject_dict(
        cls,
        pyproject: dict[str, Any],
        *,
        base_dir: Path | None = None,
        **overrides: Any,
    ) -> "VendorSettings":
        """Create settings from a parsed pyproject.toml dictionary.

        Relative ``cargo-home`` values are resolved against ``base_dir``.
        Overrides whose value is None are ignored.
        """
        table = pyproject.get("tool", {}).get("crate-vendor", {})
        if not isinstance(table, dict):
            raise ConfigError("[tool.crate-vendor] must be a table")

        values: dict[str, Any] = {}
        if "cargo-home" in table:
            cargo_home = Path(table["cargo-home"]).expanduser()
            if not cargo_home.is_absolute() and base_dir is not None:
                cargo_home = base_dir / cargo_home
            values["cargo_home"] = cargo_home
        if "archive-ext" in table:
            values["archive_ext"] = str(table["archive-ext"])
        if "commit-message" in table:
            values["commit_message"] = str(table["commit-message"])
        if "backend" in table:
            values["backend"] = str(table["backend"])
        if "replace-existing" in table:
            values["replace_existing"] = bool(table["replace-existing"])

        source_dirs = table.get("source-dirs", {})
        if not isinstance(source_dirs, dict):
            raise ConfigError("[tool.crate-vendor.source-dirs] must be a table")
        values["source_dirs"] = {str(k): str(v) for k, v in source_dirs.items()}

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


def make_versioned_tree(settings: VendorSettings, path: Path) -> VersionedTree:
    """Create the versioned tree backend selected by the settings."""
    if settings.backend == "manifest":
        return ManifestVersionedTree(path)
    return GitVersionedTree(path)
