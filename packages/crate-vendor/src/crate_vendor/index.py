# SPDX-License-Identifier: MIT
"""Registry index layout and record files.

Index files are sharded by package name so that no directory grows too
large, using the same layout cargo expects from any registry index:

    a       -> index/1/a
    ab      -> index/2/ab
    abc     -> index/3/a/abc
    serde   -> index/se/rd/serde
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from .errors import IoFailureError, SerializationError
from .records import PackageRecord

logger = logging.getLogger(__name__)

INDEX_DIR = "index"


def index_relpath(name: str) -> Path:
    """Sharded path of a package's index file, relative to the index dir.

    Raises:
        ValueError: If the name is empty
    """
    if not name:
        raise ValueError("Package name must not be empty")
    if len(name) == 1:
        return Path("1") / name
    if len(name) == 2:
        return Path("2") / name
    if len(name) == 3:
        return Path("3") / name[:1] / name
    return Path(name[:2]) / name[2:4] / name


def index_path(name: str) -> Path:
    """Sharded path of a package's index file, relative to the registry root."""
    return Path(INDEX_DIR) / index_relpath(name)


def serialize_record(record: PackageRecord) -> str:
    """Render a record as one compact JSON line, without the newline.

    Every field is present, including empty lists and null targets.

    Raises:
        SerializationError: If the record cannot be encoded
    """
    try:
        line = record.model_dump_json(exclude_none=False)
    except (ValueError, TypeError) as e:
        raise SerializationError(f"failed to serialize record for `{record.name}`: {e}") from e
    if "\n" in line:
        raise SerializationError(f"serialized record for `{record.name}` spans multiple lines")
    return line


def append_record(index_dir: Path, record: PackageRecord) -> Path:
    """Append a record to its package's index file.

    Creates the file and its parent directories if needed. Existing lines
    are never rewritten.

    Args:
        index_dir: Root of the index repository
        record: Record to append

    Returns:
        Path of the index file

    Raises:
        SerializationError: If the record cannot be encoded
        IoFailureError: If the file cannot be written
    """
    line = serialize_record(record)
    path = Path(index_dir) / index_relpath(record.name)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a", encoding="utf-8", newline="\n") as f:
            f.write(line + "\n")
    except OSError as e:
        raise IoFailureError(f"failed to write index file `{path}`: {e}") from e
    logger.debug("Appended %s %s to %s", record.name, record.vers, path)
    return path


def read_records(index_dir: Path, name: str) -> list[PackageRecord]:
    """Read every record from a package's index file, in file order.

    Returns:
        List of records, empty if the package has no index file

    Raises:
        IoFailureError: If the file cannot be read
        SerializationError: If a line is not a valid record
    """
    path = Path(index_dir) / index_relpath(name)
    if not path.exists():
        return []
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise IoFailureError(f"failed to read index file `{path}`: {e}") from e

    records: list[PackageRecord] = []
    for lineno, line in enumerate(content.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            records.append(PackageRecord.model_validate(json.loads(line)))
        except (json.JSONDecodeError, ValidationError) as e:
            raise SerializationError(f"{path}:{lineno}: invalid index record: {e}") from e
    return records


def iter_index_files(index_dir: Path) -> list[Path]:
    """List package index files, skipping config and repository metadata."""
    root = Path(index_dir)
    files: list[Path] = []
    for path in sorted(root.rglob("*")):
        if not path.is_file():
            continue
        rel = path.relative_to(root)
        if rel.parts[0].startswith(".") or rel == Path("config.json"):
            continue
        files.append(path)
    return files
