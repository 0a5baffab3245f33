# SPDX-License-Identifier: MIT
"""Persisting the index directory as a single versioned snapshot.

The vendoring engine only needs a narrow capability: stage every file, write
a tree, and create one parentless commit. :class:`GitVersionedTree` provides
it with the ``git`` executable so cargo can fetch the index over ``file://``.
:class:`ManifestVersionedTree` provides the same contract as a plain
manifest of file hashes for consumers that do not need git.
"""

from __future__ import annotations

import hashlib
import logging
import subprocess
from pathlib import Path
from typing import Protocol

from .errors import RepositoryCommitError, RepositoryInitError

logger = logging.getLogger(__name__)

DEFAULT_COMMIT_MESSAGE = "Initial commit"


class VersionedTree(Protocol):
    """Versioned working tree rooted at the index directory."""

    path: Path

    def init(self) -> None: ...

    def stage_all(self) -> None: ...

    def write_tree(self) -> str: ...

    def commit(self, tree_id: str, message: str) -> str: ...


class GitVersionedTree:
    """Git repository driven through the ``git`` command line.

    Author and committer identity come from the ambient git configuration
    (``user.name``/``user.email``) or the ``GIT_AUTHOR_*``/``GIT_COMMITTER_*``
    environment variables.
    """

    def __init__(self, path: Path, git_executable: str = "git") -> None:
        self.path = Path(path)
        self.git_executable = git_executable

    def _git(self, *args: str, input: str | None = None) -> str:
        cmd = [self.git_executable, *args]
        try:
            result = subprocess.run(
                cmd,
                cwd=self.path,
                input=input,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError:
            raise OSError(f"git executable not found: {self.git_executable}") from None
        if result.returncode != 0:
            raise OSError(f"`{' '.join(cmd)}` failed:\n{result.stderr.strip()}")
        return result.stdout.strip()

    def init(self) -> None:
        try:
            self._git("init", "--quiet")
        except OSError as e:
            raise RepositoryInitError(f"failed to initialize repository at `{self.path}`: {e}") from e

    def stage_all(self) -> None:
        self._git("add", "--all", "--force", ".")

    def write_tree(self) -> str:
        return self._git("write-tree")

    def commit(self, tree_id: str, message: str) -> str:
        commit_id = self._git("commit-tree", tree_id, "-F", "-", input=message + "\n")
        self._git("update-ref", "HEAD", commit_id)
        return commit_id

    def head(self) -> str | None:
        """Commit id of HEAD, or None if nothing has been committed."""
        try:
            return self._git("rev-parse", "--verify", "--quiet", "HEAD")
        except OSError:
            return None


class ManifestVersionedTree:
    """Manifest-of-hashes snapshot kept in ``<path>/.manifest``.

    ``write_tree`` records ``<sha256>  <relative path>`` lines for every
    staged file and names the manifest after its own hash. ``commit`` writes
    a single line ``<tree-id> <message>`` to ``.manifest/HEAD``; only one
    commit is ever allowed.
    """

    META_DIR = ".manifest"

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._staged: list[Path] = []

    @property
    def meta_dir(self) -> Path:
        return self.path / self.META_DIR

    def init(self) -> None:
        try:
            self.meta_dir.mkdir(parents=True, exist_ok=False)
        except OSError as e:
            raise RepositoryInitError(f"failed to initialize manifest at `{self.meta_dir}`: {e}") from e

    def stage_all(self) -> None:
        self._staged = sorted(
            p
            for p in self.path.rglob("*")
            if p.is_file() and not p.relative_to(self.path).parts[0].startswith(".")
        )

    def write_tree(self) -> str:
        lines = []
        for path in self._staged:
            digest = hashlib.sha256(path.read_bytes()).hexdigest()
            lines.append(f"{digest}  {path.relative_to(self.path).as_posix()}\n")
        manifest = "".join(lines)
        tree_id = hashlib.sha256(manifest.encode("utf-8")).hexdigest()
        (self.meta_dir / tree_id).write_text(manifest, encoding="utf-8")
        return tree_id

    def commit(self, tree_id: str, message: str) -> str:
        head = self.meta_dir / "HEAD"
        if head.exists():
            raise OSError(f"`{head}` already records a commit")
        first_line = message.splitlines()[0] if message else ""
        head.write_text(f"{tree_id} {first_line}\n", encoding="utf-8")
        return tree_id

    def head(self) -> str | None:
        head = self.meta_dir / "HEAD"
        if not head.exists():
            return None
        return head.read_text(encoding="utf-8").split(" ", 1)[0]

    def tree_entries(self, tree_id: str) -> dict[str, str]:
        """Map relative path to SHA256 for a written tree."""
        entries: dict[str, str] = {}
        for line in (self.meta_dir / tree_id).read_text(encoding="utf-8").splitlines():
            digest, _, rel = line.partition("  ")
            entries[rel] = digest
        return entries


def commit_index(tree: VersionedTree, message: str = DEFAULT_COMMIT_MESSAGE) -> str:
    """Stage the whole index tree and create its one parentless commit.

    Args:
        tree: Initialized versioned tree rooted at the index directory
        message: Commit message

    Returns:
        Commit id

    Raises:
        RepositoryCommitError: If staging, tree writing or committing fails
    """
    try:
        tree.stage_all()
        tree_id = tree.write_tree()
        commit_id = tree.commit(tree_id, message)
    except OSError as e:
        raise RepositoryCommitError(f"failed to commit the index at `{tree.path}`: {e}") from e
    logger.info("Committed index %s as %s", tree.path, commit_id)
    return commit_id
