# SPDX-License-Identifier: MIT
"""Input descriptors for packages handed over by a dependency resolver.

These describe an already-resolved package set. Nothing here resolves
versions; the resolver (usually ``cargo metadata``) has done that already.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from urllib.parse import urlparse


class DependencyKind(str, Enum):
    """Kind of a dependency edge."""

    NORMAL = "normal"
    BUILD = "build"
    DEV = "dev"


@dataclass(frozen=True)
class SourceId:
    """Identity of the registry a package was fetched from.

    Attributes:
        kind: Source kind, e.g. ``registry`` or ``sparse``
        url: Canonical URL of the registry index
    """

    kind: str
    url: str

    @classmethod
    def parse(cls, source: str) -> "SourceId":
        """Parse a ``<kind>+<url>`` source string.

        Args:
            source: Source string such as
                ``registry+https://github.com/rust-lang/crates.io-index``

        Returns:
            SourceId instance

        Raises:
            ValueError: If the string has no ``+`` separator or no URL
        """
        kind, sep, url = source.partition("+")
        if not sep or not url:
            raise ValueError(f"Invalid source id: {source!r}")
        return cls(kind=kind, url=url)

    @property
    def host(self) -> str:
        """Host name of the registry URL, empty for host-less URLs like ``file:///``."""
        return urlparse(self.url).hostname or ""

    @property
    def is_registry(self) -> bool:
        return self.kind in ("registry", "sparse")

    def __str__(self) -> str:
        return f"{self.kind}+{self.url}"


@dataclass
class DependencyDescriptor:
    """A dependency declared by a resolved package."""

    name: str
    req: str
    features: list[str] = field(default_factory=list)
    optional: bool = False
    default_features: bool = True
    target: str | None = None
    kind: DependencyKind = DependencyKind.NORMAL


@dataclass
class PackageDescriptor:
    """A resolved package whose archive sits in the local cache.

    Attributes:
        name: Package name
        version: Exact resolved version
        source: Registry the package came from, used to find its archive
        dependencies: Declared dependencies, in manifest order
        features: Feature name to list of features/dependencies it enables
    """

    name: str
    version: str
    source: SourceId
    dependencies: list[DependencyDescriptor] = field(default_factory=list)
    features: dict[str, list[str]] = field(default_factory=dict)

    @property
    def package_id(self) -> str:
        return f"{self.name} v{self.version}"
