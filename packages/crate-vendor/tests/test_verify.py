# SPDX-License-Identifier: MIT
"""Tests for verifying a vendored registry."""

from __future__ import annotations

from pathlib import Path

from crate_vendor.repository import ManifestVersionedTree
from crate_vendor.vendor import vendor_registry
from crate_vendor.verify import verify_registry


def _build(tmp_path: Path, locator, make_package, add_cached_crate) -> Path:
    add_cached_crate("serde", "1.0.130")
    add_cached_crate("log", "0.4.14")
    root = tmp_path / "registry"
    vendor_registry(
        [make_package("serde", "1.0.130"), make_package("log", "0.4.14")],
        root,
        locator,
        versioned_tree=ManifestVersionedTree,
    )
    return root


def test_fresh_registry_verifies(tmp_path: Path, locator, make_package, add_cached_crate) -> None:
    root = _build(tmp_path, locator, make_package, add_cached_crate)
    result = verify_registry(root)
    assert result.success
    assert result.checked == 2


def test_detects_tampered_archive(tmp_path: Path, locator, make_package, add_cached_crate) -> None:
    root = _build(tmp_path, locator, make_package, add_cached_crate)
    (root / "cache" / "log" / "0.4.14" / "download").write_bytes(b"tampered")

    result = verify_registry(root)

    assert not result.success
    assert result.mismatched == ["log v0.4.14"]


def test_detects_missing_archive(tmp_path: Path, locator, make_package, add_cached_crate) -> None:
    root = _build(tmp_path, locator, make_package, add_cached_crate)
    (root / "cache" / "serde" / "1.0.130" / "download").unlink()

    result = verify_registry(root)

    assert result.missing == ["serde v1.0.130"]
