# SPDX-License-Identifier: MIT
"""Vendor cached crates into a local registry."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from crate_vendor import (
    ArchiveNotFoundError,
    CacheLocator,
    ConfigError,
    MetadataError,
    VendorError,
    load_cargo_metadata_file,
    make_versioned_tree,
    vendor_registry,
)

from ..output import Context, echo_error, echo_info, echo_success, echo_warning, pass_context

SOURCE_NAME = "vendored-registry"


def cargo_config_snippet(index_url: str) -> str:
    """Cargo configuration that replaces crates.io with the vendored index."""
    return (
        "[source.crates-io]\n"
        f'replace-with = "{SOURCE_NAME}"\n'
        "\n"
        f"[source.{SOURCE_NAME}]\n"
        f'registry = "{index_url}"\n'
    )


@click.command()
@click.argument(
    "metadata",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.argument("dest", type=click.Path(file_okay=False, path_type=Path))
@click.option(
    "--cargo-home",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="CARGO_HOME",
    help="Cargo home holding the download cache (default: $CARGO_HOME or ~/.cargo).",
)
@click.option(
    "--backend",
    type=click.Choice(["git", "manifest"]),
    default=None,
    help="How the index snapshot is recorded.",
)
@click.option(
    "--replace-existing",
    is_flag=True,
    default=None,
    help="Remove an existing index and cache in DEST first.",
)
@click.option(
    "--commit-message",
    "-m",
    default=None,
    help="Message of the index snapshot commit.",
)
@pass_context
def vendor(
    ctx: Context,
    metadata: Path,
    dest: Path,
    cargo_home: Optional[Path],
    backend: Optional[str],
    replace_existing: Optional[bool],
    commit_message: Optional[str],
) -> None:
    """Vendor every registry crate in METADATA into DEST.

    METADATA is the output of `cargo metadata --format-version 1`. Every
    crate must already be in the local cargo cache (run `cargo fetch`).

    \b
    Examples:
        crate-vendor vendor metadata.json ./registry
        crate-vendor vendor metadata.json ./registry --backend manifest
        crate-vendor vendor metadata.json ./registry --replace-existing
    """
    try:
        settings = ctx.load_settings(
            cargo_home=cargo_home,
            backend=backend,
            replace_existing=replace_existing,
            commit_message=commit_message,
        )
        packages = load_cargo_metadata_file(metadata)
    except (ConfigError, MetadataError) as e:
        echo_error(str(e))
        raise SystemExit(1)

    if not packages:
        echo_warning("No registry crates found in metadata; creating an empty registry.")

    if ctx.verbose:
        echo_info(f"Cache: {settings.registry_cache_path}")
        echo_info(f"Crates: {len(packages)}")

    locator = CacheLocator(
        settings.registry_cache_path,
        archive_ext=settings.archive_ext,
        source_dirs=settings.source_dirs,
    )

    try:
        result = vendor_registry(
            packages,
            dest,
            locator,
            versioned_tree=lambda path: make_versioned_tree(settings, path),
            commit_message=settings.commit_message,
            replace_existing=settings.replace_existing,
        )
    except ArchiveNotFoundError as e:
        echo_error(str(e))
        echo_info("Run `cargo fetch` to populate the cache, then try again.")
        raise SystemExit(1)
    except VendorError as e:
        echo_error(str(e))
        raise SystemExit(1)

    if ctx.verbose:
        for record in result.records:
            echo_info(f"  {record.name} {record.vers} {record.cksum}")

    echo_success(f"Vendored {len(result.records)} crate(s) into {dest}")
    echo_info("\nAdd this to `.cargo/config.toml` to use the vendored registry:\n")
    echo_info(cargo_config_snippet(result.index_url))
