# SPDX-License-Identifier: MIT
"""Locating cached crate archives and copying them into a registry.

Cargo keeps downloaded archives under
``$CARGO_HOME/registry/cache/<host>-<short-hash>/<name>-<version>.crate``,
where the short hash is derived from the registry's source id.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from .errors import ArchiveNotFoundError, IoFailureError
from .models import PackageDescriptor, SourceId

logger = logging.getLogger(__name__)

CRATES_IO_GIT_INDEX = "https://github.com/rust-lang/crates.io-index"
CRATES_IO_SPARSE_INDEX = "https://index.crates.io/"

# Cache directory names cargo uses for crates.io. The sparse hash changed
# with the stable hasher rework in cargo 1.85.
KNOWN_SOURCE_DIRS: dict[str, tuple[str, ...]] = {
    CRATES_IO_GIT_INDEX: ("github.com-1ecc6299db9ec823",),
    CRATES_IO_SPARSE_INDEX: (
        "index.crates.io-1949cf8c6b5b557f",
        "index.crates.io-6f17d22bba15001f",
    ),
}


def _normalize_url(url: str) -> str:
    return url.rstrip("/")


class CacheLocator:
    """Find a package's archive in the package manager's download cache.

    Args:
        cache_root: Directory holding one sub-directory per registry source
        archive_ext: Archive file extension, without the dot
        source_dirs: Extra source URL to cache directory name mappings
    """

    def __init__(
        self,
        cache_root: Path,
        archive_ext: str = "crate",
        source_dirs: dict[str, str] | None = None,
    ) -> None:
        self.cache_root = Path(cache_root)
        self.archive_ext = archive_ext
        self.source_dirs = {_normalize_url(k): v for k, v in (source_dirs or {}).items()}

    def archive_name(self, package: PackageDescriptor) -> str:
        return f"{package.name}-{package.version}.{self.archive_ext}"

    def candidate_dirs(self, source: SourceId) -> list[Path]:
        """List cache directories that may hold archives for a source.

        Configured and well-known directory names come first, followed by
        any other ``<host>-*`` directory in sorted order.
        """
        url = _normalize_url(source.url)
        names: list[str] = []
        if url in self.source_dirs:
            names.append(self.source_dirs[url])
        for known_url, known_names in KNOWN_SOURCE_DIRS.items():
            if _normalize_url(known_url) == url:
                names.extend(known_names)

        dirs = [self.cache_root / name for name in names]
        if self.cache_root.is_dir():
            for path in sorted(self.cache_root.glob(f"{source.host}-*")):
                if path not in dirs:
                    dirs.append(path)
        return dirs

    def locate(self, package: PackageDescriptor) -> Path:
        """Return the path of the package's cached archive.

        Raises:
            ArchiveNotFoundError: If no candidate directory holds the archive
        """
        filename = self.archive_name(package)
        candidates = self.candidate_dirs(package.source)
        for directory in candidates:
            path = directory / filename
            if path.is_file():
                logger.debug("Found %s at %s", package.package_id, path)
                return path

        if candidates:
            expected = candidates[0] / filename
        else:
            expected = self.cache_root / f"{package.source.host}-*" / filename
        raise ArchiveNotFoundError(expected, package.package_id)


def download_path(download_root: Path, name: str, version: str) -> Path:
    """Content-addressed location of an archive inside the registry."""
    return Path(download_root) / name / version / "download"


def copy_archive(src: Path, download_root: Path, name: str, version: str) -> Path:
    """Copy a cached archive to ``<download_root>/<name>/<version>/download``.

    Args:
        src: Path of the cached archive
        download_root: Registry download directory
        name: Package name
        version: Package version

    Returns:
        Path of the copied archive

    Raises:
        IoFailureError: If the directories cannot be created or the copy fails
    """
    dst = download_path(download_root, name, version)
    try:
        dst.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(src, dst)
    except OSError as e:
        raise IoFailureError(f"failed to copy `{src}` to `{dst}`: {e}") from e
    return dst
