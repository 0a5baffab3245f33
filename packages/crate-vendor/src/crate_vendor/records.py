# SPDX-License-Identifier: MIT
"""Pydantic models for registry index records.

Field names follow the registry index format consumed by cargo, so they are
written exactly as declared here (``vers``, ``cksum``, ...).
"""

from pydantic import BaseModel, ConfigDict, Field

from .models import DependencyDescriptor, DependencyKind, PackageDescriptor


class DependencyRecord(BaseModel):
    """One dependency entry inside an index record."""

    model_config = ConfigDict(use_enum_values=True)

    name: str
    req: str
    features: list[str] = Field(default_factory=list)
    optional: bool = False
    default_features: bool = True
    target: str | None = None
    kind: DependencyKind = DependencyKind.NORMAL

    @classmethod
    def from_descriptor(cls, dep: DependencyDescriptor) -> "DependencyRecord":
        return cls(
            name=dep.name,
            req=dep.req,
            features=list(dep.features),
            optional=dep.optional,
            default_features=dep.default_features,
            target=dep.target,
            kind=dep.kind,
        )


class PackageRecord(BaseModel):
    """One line of a registry index file, describing a single version."""

    name: str
    vers: str
    deps: list[DependencyRecord] = Field(default_factory=list)
    cksum: str = Field(description="Lowercase hex SHA256 of the .crate archive")
    features: dict[str, list[str]] = Field(default_factory=dict)
    yanked: bool = False

    @classmethod
    def from_descriptor(cls, package: PackageDescriptor, cksum: str) -> "PackageRecord":
        """Build a record for a package whose archive hashed to ``cksum``."""
        return cls(
            name=package.name,
            vers=package.version,
            deps=[DependencyRecord.from_descriptor(d) for d in package.dependencies],
            cksum=cksum,
            features={k: list(v) for k, v in package.features.items()},
            yanked=False,
        )
