# SPDX-License-Identifier: MIT
"""Tests that each command module imports on its own."""

import importlib
import sys

import click
import pytest


def _forget_crate_cli(monkeypatch):
    for name in list(sys.modules):
        if name == "crate_cli" or name.startswith("crate_cli."):
            monkeypatch.delitem(sys.modules, name)


class TestCommandImports:
    """Command modules do not depend on the CLI entry point being loaded first."""

    @pytest.mark.parametrize(
        ("module_name", "attr"),
        [
            ("crate_cli.commands.vendor", "vendor"),
            ("crate_cli.commands.verify", "verify"),
            ("crate_cli.commands.index_path", "index_path"),
            ("crate_cli.commands", "vendor"),
        ],
    )
    def test_fresh_import(self, monkeypatch, module_name, attr):
        """Importing a command module first in a fresh interpreter state works."""
        _forget_crate_cli(monkeypatch)
        module = importlib.import_module(module_name)
        assert getattr(module, attr) is not None

    def test_fresh_import_then_main(self, monkeypatch):
        """Main still registers every command after a command module was imported first."""
        _forget_crate_cli(monkeypatch)
        importlib.import_module("crate_cli.commands.vendor")
        main = importlib.import_module("crate_cli.main")
        assert isinstance(main.cli, click.Group)
        assert {"vendor", "verify", "index-path"} <= set(main.cli.commands)

    def test_vendor_command_is_click_command(self, monkeypatch):
        _forget_crate_cli(monkeypatch)
        vendor = importlib.import_module("crate_cli.commands.vendor")
        assert isinstance(vendor.vendor, click.Command)
