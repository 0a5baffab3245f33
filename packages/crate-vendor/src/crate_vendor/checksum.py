# SPDX-License-Identifier: MIT
"""Checksum utilities for crate archive integrity."""

import hashlib
from pathlib import Path

from .errors import IoFailureError


def compute_sha256(data: bytes) -> str:
    """Compute SHA256 hash of bytes data.

    Args:
        data: Bytes to hash

    Returns:
        Lowercase hex-encoded SHA256 hash
    """
    return hashlib.sha256(data).hexdigest()


def compute_sha256_file(file_path: Path) -> str:
    """Compute SHA256 hash of a file's full contents.

    The whole file is read into memory; crate archives are small.

    Args:
        file_path: Path to the file

    Returns:
        Lowercase hex-encoded SHA256 hash

    Raises:
        IoFailureError: If the file cannot be read
    """
    try:
        data = Path(file_path).read_bytes()
    except OSError as e:
        raise IoFailureError(f"failed to read `{file_path}`: {e}") from e
    return compute_sha256(data)


def verify_checksum_file(file_path: Path, expected_hash: str) -> bool:
    """Verify that a file matches expected SHA256 hash.

    Args:
        file_path: Path to the file
        expected_hash: Expected SHA256 hash (hex-encoded)

    Returns:
        True if hash matches, False otherwise
    """
    actual_hash = compute_sha256_file(file_path)
    return actual_hash.lower() == expected_hash.lower()
