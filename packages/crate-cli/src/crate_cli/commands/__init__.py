# SPDX-License-Identifier: MIT
"""CLI command implementations."""

from . import index_path, vendor, verify

__all__ = ["index_path", "vendor", "verify"]
