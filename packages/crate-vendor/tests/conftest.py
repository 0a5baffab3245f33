# SPDX-License-Identifier: MIT
"""Pytest configuration and fixtures for vendoring tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from crate_vendor.cache import CRATES_IO_GIT_INDEX, CacheLocator
from crate_vendor.models import (
    DependencyDescriptor,
    DependencyKind,
    PackageDescriptor,
    SourceId,
)

CRATES_IO = SourceId(kind="registry", url=CRATES_IO_GIT_INDEX)
CRATES_IO_CACHE_DIR = "github.com-1ecc6299db9ec823"


@pytest.fixture
def cache_root(tmp_path: Path) -> Path:
    """Empty cargo download cache (``$CARGO_HOME/registry/cache``)."""
    root = tmp_path / "cargo_home" / "registry" / "cache"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def locator(cache_root: Path) -> CacheLocator:
    return CacheLocator(cache_root)


@pytest.fixture
def make_package() -> Callable[..., PackageDescriptor]:
    """Factory for crates.io package descriptors."""

    def _make(name: str, version: str = "1.0.0", **kwargs) -> PackageDescriptor:
        kwargs.setdefault("source", CRATES_IO)
        return PackageDescriptor(name=name, version=version, **kwargs)

    return _make


@pytest.fixture
def add_cached_crate(cache_root: Path) -> Callable[..., Path]:
    """Factory writing a fake .crate archive into the crates.io cache dir."""

    def _add(name: str, version: str = "1.0.0", content: bytes | None = None) -> Path:
        directory = cache_root / CRATES_IO_CACHE_DIR
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / f"{name}-{version}.crate"
        path.write_bytes(content if content is not None else f"{name}@{version}".encode())
        return path

    return _add


@pytest.fixture
def serde_package(make_package) -> PackageDescriptor:
    """serde 1.0.130 with a typical dependency and feature set."""
    return make_package(
        "serde",
        "1.0.130",
        dependencies=[
            DependencyDescriptor(
                name="serde_derive",
                req="=1.0.130",
                optional=True,
            ),
            DependencyDescriptor(
                name="serde_derive",
                req="^1.0",
                kind=DependencyKind.DEV,
            ),
            DependencyDescriptor(
                name="libc",
                req="^0.2",
                features=["extra_traits"],
                default_features=False,
                target="cfg(unix)",
                kind=DependencyKind.BUILD,
            ),
        ],
        features={
            "default": ["std"],
            "derive": ["serde_derive"],
            "std": [],
        },
    )


@pytest.fixture
def git_identity(monkeypatch: pytest.MonkeyPatch) -> None:
    """Give git a committer identity independent of the host configuration."""
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Vendor Test")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "vendor@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Vendor Test")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "vendor@example.com")
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
