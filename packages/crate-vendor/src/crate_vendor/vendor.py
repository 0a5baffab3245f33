# SPDX-License-Identifier: MIT
"""Vendor a resolved package set into a local, versioned registry.

The produced layout under the destination root is::

    cache/<name>/<version>/download     copy of the cached archive
    index/config.json                   {"dl":"<download url>","api":""}
    index/<shard>/<name>                one JSON record per vendored version

The index directory is committed as a single snapshot so the package
manager can fetch it like any other registry index.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from .cache import CacheLocator, copy_archive
from .checksum import compute_sha256_file
from .errors import (
    DirectoryAlreadyExistsError,
    InvalidPackageError,
    IoFailureError,
    PathNotUrlRepresentableError,
    VendorError,
)
from .index import INDEX_DIR, append_record
from .models import PackageDescriptor
from .records import PackageRecord
from .repository import DEFAULT_COMMIT_MESSAGE, GitVersionedTree, VersionedTree, commit_index

logger = logging.getLogger(__name__)

CACHE_DIR = "cache"
CONFIG_FILE = "config.json"


@dataclass
class VendorResult:
    """Outcome of a successful vendoring run.

    Attributes:
        index_url: file:// URL of the index repository
        download_url: file:// URL of the download directory
        records: Index records written, in vendoring order
        commit_id: Id of the index snapshot commit
    """

    index_url: str
    download_url: str
    records: list[PackageRecord] = field(default_factory=list)
    commit_id: str = ""


def path_to_url(path: Path) -> str:
    """Convert a path to a canonical ``file://`` URL.

    Raises:
        PathNotUrlRepresentableError: If the path has no URL form
    """
    try:
        return Path(path).resolve().as_uri()
    except (ValueError, OSError) as e:
        raise PathNotUrlRepresentableError(path) from e


def registry_config(download_url: str) -> str:
    """Content of the index's config.json."""
    return f'{{"dl":"{download_url}","api":""}}'


def _prepare_directories(root: Path, replace_existing: bool) -> tuple[Path, Path]:
    index_dir = root / INDEX_DIR
    download_dir = root / CACHE_DIR
    try:
        root.mkdir(parents=True, exist_ok=True)
        if replace_existing:
            for path in (index_dir, download_dir):
                if path.exists():
                    logger.info("Removing existing %s", path)
                    shutil.rmtree(path)
        for path in (index_dir, download_dir):
            try:
                path.mkdir()
            except FileExistsError:
                raise DirectoryAlreadyExistsError(path) from None
    except OSError as e:
        raise IoFailureError(f"failed to prepare `{root}`: {e}") from e
    return index_dir, download_dir


def _write_config(index_dir: Path, download_url: str) -> None:
    path = index_dir / CONFIG_FILE
    try:
        with open(path, "x", encoding="utf-8", newline="") as f:
            f.write(registry_config(download_url))
    except OSError as e:
        raise IoFailureError(f"failed to write `{path}`: {e}") from e


def vendor_package(
    package: PackageDescriptor,
    index_dir: Path,
    download_dir: Path,
    locator: CacheLocator,
) -> PackageRecord:
    """Copy one package's archive into the registry and index it.

    The checksum is taken from the copied file, not the cache, so a
    corrupted copy cannot go unnoticed by consumers.

    Raises:
        InvalidPackageError: If the package has no name, before anything
            is copied
        VendorError: With the failing stage pushed onto its context
    """
    stage = "validating package"
    try:
        if not package.name:
            raise InvalidPackageError("package name must not be empty")
        stage = "locating cached archive"
        src = locator.locate(package)
        stage = "copying archive"
        dst = copy_archive(src, download_dir, package.name, package.version)
        stage = "computing checksum"
        cksum = compute_sha256_file(dst)
        stage = "writing index entry"
        record = PackageRecord.from_descriptor(package, cksum)
        append_record(index_dir, record)
    except VendorError as e:
        raise e.add_context(stage)
    except OSError as e:
        raise IoFailureError(str(e)).add_context(stage) from e
    except ValueError as e:
        raise InvalidPackageError(str(e)).add_context(stage) from e
    logger.debug("Vendored %s (%s)", package.package_id, cksum)
    return record


def vendor_registry(
    packages: Iterable[PackageDescriptor],
    root: str | Path,
    locator: CacheLocator,
    *,
    versioned_tree: Callable[[Path], VersionedTree] = GitVersionedTree,
    commit_message: str = DEFAULT_COMMIT_MESSAGE,
    replace_existing: bool = False,
) -> VendorResult:
    """Build a registry at ``root`` from already-cached packages.

    Packages are processed one at a time in input order. The first failure
    aborts the run and nothing written so far is cleaned up.

    Args:
        packages: Resolved packages, in the order they should be indexed
        root: Destination directory
        locator: Finds each package's cached archive
        versioned_tree: Factory for the index repository backend
        commit_message: Message of the index snapshot commit
        replace_existing: Remove existing ``index`` and ``cache`` directories
            instead of failing

    Returns:
        VendorResult with the URLs to configure the package manager with

    Raises:
        DirectoryAlreadyExistsError: If the destination already holds a registry
        PathNotUrlRepresentableError: If a directory has no file URL
        VendorError: Any per-package or repository failure
    """
    root = Path(root)
    index_dir, download_dir = _prepare_directories(root, replace_existing)
    index_url = path_to_url(index_dir)
    download_url = path_to_url(download_dir)

    tree = versioned_tree(index_dir)
    tree.init()
    _write_config(index_dir, download_url)

    result = VendorResult(index_url=index_url, download_url=download_url)
    for package in packages:
        try:
            record = vendor_package(package, index_dir, download_dir, locator)
        except VendorError as e:
            raise e.add_context(f"failed to vendor `{package.package_id}`")
        result.records.append(record)

    try:
        result.commit_id = commit_index(tree, commit_message)
    except VendorError as e:
        raise e.add_context("failed to commit the index")

    logger.info("Vendored %d package(s) into %s", len(result.records), root)
    return result
