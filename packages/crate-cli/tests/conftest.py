# SPDX-License-Identifier: MIT
"""Pytest configuration and fixtures for CLI tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

CRATES_IO = "registry+https://github.com/rust-lang/crates.io-index"


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def cargo_home(tmp_path: Path) -> Path:
    """Cargo home with two crates in its crates.io download cache."""
    home = tmp_path / "cargo_home"
    cache = home / "registry" / "cache" / "github.com-1ecc6299db9ec823"
    cache.mkdir(parents=True)
    (cache / "serde-1.0.130.crate").write_bytes(b"serde archive")
    (cache / "log-0.4.14.crate").write_bytes(b"log archive")
    return home


@pytest.fixture
def metadata_file(tmp_path: Path) -> Path:
    """Saved `cargo metadata` output for a small project."""
    metadata = {
        "packages": [
            {
                "name": "my-app",
                "version": "0.1.0",
                "source": None,
                "dependencies": [],
                "features": {},
            },
            {
                "name": "serde",
                "version": "1.0.130",
                "source": CRATES_IO,
                "dependencies": [],
                "features": {"default": ["std"], "std": []},
            },
            {
                "name": "log",
                "version": "0.4.14",
                "source": CRATES_IO,
                "dependencies": [
                    {
                        "name": "serde",
                        "req": "^1.0",
                        "kind": None,
                        "optional": True,
                        "uses_default_features": False,
                        "features": [],
                        "target": None,
                    }
                ],
                "features": {},
            },
        ],
        "version": 1,
    }
    path = tmp_path / "metadata.json"
    path.write_text(json.dumps(metadata))
    return path
