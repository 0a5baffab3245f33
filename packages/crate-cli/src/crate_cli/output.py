# SPDX-License-Identifier: MIT
"""Shared CLI context and console output helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from crate_vendor import VendorSettings


class Context:
    """CLI context object passed to commands."""

    def __init__(self) -> None:
        self.verbose: bool = False
        self.config_path: Optional[Path] = None

    def load_settings(self, **overrides: object) -> VendorSettings:
        """Load settings from the --config file, if any, applying overrides."""
        if self.config_path is not None:
            return VendorSettings.from_pyproject(self.config_path, **overrides)
        return VendorSettings(**{k: v for k, v in overrides.items() if v is not None})


pass_context = click.make_pass_decorator(Context, ensure=True)


def echo_error(message: str) -> None:
    """Print an error message to stderr."""
    click.secho(f"Error: {message}", fg="red", err=True)


def echo_success(message: str) -> None:
    """Print a success message."""
    click.secho(message, fg="green")


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.secho(f"Warning: {message}", fg="yellow", err=True)
