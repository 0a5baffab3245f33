# SPDX-License-Identifier: MIT
"""Print where a crate's records live in the index."""

from __future__ import annotations

import click

from crate_vendor import index_path as resolve_index_path


@click.command("index-path")
@click.argument("name")
def index_path(name: str) -> None:
    """Print the sharded index path for crate NAME."""
    try:
        path = resolve_index_path(name)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="NAME")
    click.echo(path.as_posix())
