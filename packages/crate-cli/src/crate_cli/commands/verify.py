# SPDX-License-Identifier: MIT
"""Verify a vendored registry against its index checksums."""

from __future__ import annotations

from pathlib import Path

import click

from crate_vendor import VendorError, verify_registry

from ..output import Context, echo_error, echo_info, echo_success, pass_context


@click.command()
@click.argument("dest", type=click.Path(exists=True, file_okay=False, path_type=Path))
@pass_context
def verify(ctx: Context, dest: Path) -> None:
    """Re-hash every archive in the registry at DEST."""
    try:
        result = verify_registry(dest)
    except VendorError as e:
        echo_error(str(e))
        raise SystemExit(1)

    for package_id in result.missing:
        echo_error(f"missing archive for `{package_id}`")
    for package_id in result.mismatched:
        echo_error(f"checksum mismatch for `{package_id}`")

    if not result.success:
        raise SystemExit(1)

    if ctx.verbose:
        echo_info(f"Index: {dest / 'index'}")
    echo_success(f"Verified {result.checked} archive(s)")
