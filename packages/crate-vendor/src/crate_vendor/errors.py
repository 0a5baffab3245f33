# SPDX-License-Identifier: MIT
"""Error types raised while building a vendored registry.

Every failure carries an :class:`ErrorKind` and a context stack. Context is
pushed as an error travels outwards (stage name, package identity), so the
rendered message reads from the outermost operation down to the root cause.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class ErrorKind(str, Enum):
    """Classification of vendoring failures."""

    DIRECTORY_ALREADY_EXISTS = "directory_already_exists"
    PATH_NOT_URL_REPRESENTABLE = "path_not_url_representable"
    ARCHIVE_NOT_FOUND = "archive_not_found"
    IO_FAILURE = "io_failure"
    SERIALIZATION_FAILURE = "serialization_failure"
    REPOSITORY_INIT_FAILURE = "repository_init_failure"
    REPOSITORY_COMMIT_FAILURE = "repository_commit_failure"
    INVALID_PACKAGE = "invalid_package"


class VendorError(Exception):
    """Base class for all vendoring failures."""

    kind: ErrorKind = ErrorKind.IO_FAILURE

    def __init__(self, message: str) -> None:
        self.message = message
        self.context: list[str] = []
        super().__init__(message)

    def add_context(self, context: str) -> "VendorError":
        """Push a context line describing the enclosing operation.

        Returns:
            The same error, so callers can ``raise err.add_context(...)``
        """
        self.context.append(context)
        return self

    def __str__(self) -> str:
        return ": ".join([*reversed(self.context), self.message])


class DirectoryAlreadyExistsError(VendorError):
    """Raised when the index or cache directory is already present."""

    kind = ErrorKind.DIRECTORY_ALREADY_EXISTS

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(
            f"directory `{path}` already exists; "
            "the destination must not contain a previous registry"
        )


class PathNotUrlRepresentableError(VendorError):
    """Raised when a filesystem path cannot be converted to a file URL."""

    kind = ErrorKind.PATH_NOT_URL_REPRESENTABLE

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"failed to convert {str(path)!r} to a URL")


class ArchiveNotFoundError(VendorError):
    """Raised when a package's archive is missing from the local cache."""

    kind = ErrorKind.ARCHIVE_NOT_FOUND

    def __init__(self, path: Path, package_id: str) -> None:
        self.path = path
        self.package_id = package_id
        super().__init__(f"cached crate file `{path}` doesn't exist for `{package_id}`")


class IoFailureError(VendorError):
    """Raised when copying, reading or writing a file fails."""

    kind = ErrorKind.IO_FAILURE


class SerializationError(VendorError):
    """Raised when a well-formed record cannot be serialized.

    This indicates a bug rather than bad input.
    """

    kind = ErrorKind.SERIALIZATION_FAILURE


class RepositoryInitError(VendorError):
    """Raised when the index repository cannot be initialized."""

    kind = ErrorKind.REPOSITORY_INIT_FAILURE


class RepositoryCommitError(VendorError):
    """Raised when the index snapshot cannot be committed."""

    kind = ErrorKind.REPOSITORY_COMMIT_FAILURE


class InvalidPackageError(VendorError):
    """Raised when a package descriptor cannot be placed in a registry."""

    kind = ErrorKind.INVALID_PACKAGE


class MetadataError(Exception):
    """Raised when resolved package metadata cannot be loaded."""

    pass


class ConfigError(Exception):
    """Raised when vendoring configuration is invalid."""

    pass
