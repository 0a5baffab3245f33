# SPDX-License-Identifier: MIT
"""Command-line front end for crate-vendor."""

__version__ = "0.1.0"
