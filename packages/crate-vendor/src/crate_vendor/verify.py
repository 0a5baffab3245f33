# SPDX-License-Identifier: MIT
"""Check a vendored registry's archives against their index checksums."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .cache import download_path
from .checksum import compute_sha256_file
from .index import INDEX_DIR, iter_index_files, read_records
from .vendor import CACHE_DIR


@dataclass
class VerifyResult:
    """Result of verifying a registry."""

    checked: int = 0
    missing: list[str] = field(default_factory=list)
    mismatched: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.missing and not self.mismatched


def verify_registry(root: str | Path) -> VerifyResult:
    """Re-hash every archive referenced by the index.

    Args:
        root: Registry root containing ``index`` and ``cache``

    Returns:
        VerifyResult listing missing archives and checksum mismatches
    """
    index_dir = Path(root) / INDEX_DIR
    download_dir = Path(root) / CACHE_DIR
    result = VerifyResult()

    for index_file in iter_index_files(index_dir):
        for record in read_records(index_dir, index_file.name):
            package_id = f"{record.name} v{record.vers}"
            archive = download_path(download_dir, record.name, record.vers)
            result.checked += 1
            if not archive.is_file():
                result.missing.append(package_id)
            elif compute_sha256_file(archive) != record.cksum:
                result.mismatched.append(package_id)

    return result
