# SPDX-License-Identifier: MIT
"""CLI entry point for the crate-vendor command."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from crate_vendor import ConfigError, MetadataError, VendorError

from . import __version__
from .commands import index_path, vendor, verify
from .output import Context, echo_error, pass_context


@click.group()
@click.version_option(version=__version__, prog_name="crate-vendor")
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose output.",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="pyproject.toml with a [tool.crate-vendor] table.",
)
@pass_context
def cli(ctx: Context, verbose: bool, config_path: Optional[Path]) -> None:
    """Vendor crates into an offline, version-controlled registry.

    \b
    Examples:
        cargo metadata --format-version 1 > metadata.json
        crate-vendor vendor metadata.json ./registry
        crate-vendor verify ./registry
        crate-vendor index-path serde
    """
    ctx.verbose = verbose
    ctx.config_path = config_path
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )


cli.add_command(vendor.vendor)
cli.add_command(verify.verify)
cli.add_command(index_path.index_path)


def main() -> None:
    """Main entry point for the CLI."""
    try:
        cli()
    except (ConfigError, MetadataError, VendorError) as e:
        echo_error(str(e))
        sys.exit(1)
    except FileNotFoundError as e:
        echo_error(str(e))
        sys.exit(1)
    except Exception as e:
        echo_error(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
