# SPDX-License-Identifier: MIT
"""Vendor resolved crates into an offline, version-controlled registry.

Example:
    >>> from crate_vendor import CacheLocator, VendorSettings, load_cargo_metadata_file, vendor_registry
    >>>
    >>> settings = VendorSettings()
    >>> packages = load_cargo_metadata_file("metadata.json")
    >>> locator = CacheLocator(settings.registry_cache_path)
    >>> result = vendor_registry(packages, "vendor-registry", locator)
    >>> print(result.index_url)
"""

__version__ = "0.1.0"

from .cache import CacheLocator, copy_archive, download_path
from .checksum import compute_sha256, compute_sha256_file, verify_checksum_file
from .config import VendorSettings, default_cargo_home, make_versioned_tree
from .errors import (
    ArchiveNotFoundError,
    ConfigError,
    DirectoryAlreadyExistsError,
    ErrorKind,
    InvalidPackageError,
    IoFailureError,
    MetadataError,
    PathNotUrlRepresentableError,
    RepositoryCommitError,
    RepositoryInitError,
    SerializationError,
    VendorError,
)
from .index import append_record, index_path, index_relpath, read_records, serialize_record
from .metadata import load_cargo_metadata, load_cargo_metadata_file
from .models import DependencyDescriptor, DependencyKind, PackageDescriptor, SourceId
from .records import DependencyRecord, PackageRecord
from .repository import (
    GitVersionedTree,
    ManifestVersionedTree,
    VersionedTree,
    commit_index,
)
from .vendor import VendorResult, path_to_url, registry_config, vendor_package, vendor_registry
from .verify import VerifyResult, verify_registry

__all__ = [
    # Models
    "DependencyDescriptor",
    "DependencyKind",
    "PackageDescriptor",
    "SourceId",
    "DependencyRecord",
    "PackageRecord",
    # Config
    "VendorSettings",
    "default_cargo_home",
    "make_versioned_tree",
    # Cache
    "CacheLocator",
    "copy_archive",
    "download_path",
    # Checksum
    "compute_sha256",
    "compute_sha256_file",
    "verify_checksum_file",
    # Index
    "append_record",
    "index_path",
    "index_relpath",
    "read_records",
    "serialize_record",
    # Metadata
    "load_cargo_metadata",
    "load_cargo_metadata_file",
    # Repository
    "GitVersionedTree",
    "ManifestVersionedTree",
    "VersionedTree",
    "commit_index",
    # Vendoring
    "VendorResult",
    "path_to_url",
    "registry_config",
    "vendor_package",
    "vendor_registry",
    "VerifyResult",
    "verify_registry",
    # Errors
    "ErrorKind",
    "VendorError",
    "ArchiveNotFoundError",
    "ConfigError",
    "DirectoryAlreadyExistsError",
    "InvalidPackageError",
    "IoFailureError",
    "MetadataError",
    "PathNotUrlRepresentableError",
    "RepositoryCommitError",
    "RepositoryInitError",
    "SerializationError",
]
