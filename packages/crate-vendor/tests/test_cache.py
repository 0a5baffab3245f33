# SPDX-License-Identifier: MIT
"""Tests for locating and copying cached archives."""

from __future__ import annotations

from pathlib import Path

import pytest

from crate_vendor.cache import CRATES_IO_SPARSE_INDEX, CacheLocator, copy_archive, download_path
from crate_vendor.errors import ArchiveNotFoundError, IoFailureError, VendorError
from crate_vendor.models import SourceId


class TestCacheLocator:
    """Tests for CacheLocator.locate."""

    def test_finds_crates_io_archive(self, locator, make_package, add_cached_crate) -> None:
        expected = add_cached_crate("serde", "1.0.130")
        assert locator.locate(make_package("serde", "1.0.130")) == expected

    def test_finds_sparse_crates_io_archive(self, cache_root: Path, make_package) -> None:
        directory = cache_root / "index.crates.io-6f17d22bba15001f"
        directory.mkdir()
        (directory / "log-0.4.14.crate").write_bytes(b"log")

        package = make_package(
            "log", "0.4.14", source=SourceId(kind="sparse", url=CRATES_IO_SPARSE_INDEX)
        )
        assert CacheLocator(cache_root).locate(package) == directory / "log-0.4.14.crate"

    def test_falls_back_to_host_directories(self, cache_root: Path, make_package) -> None:
        source = SourceId(kind="registry", url="https://git.example.com/index")
        directory = cache_root / "git.example.com-0123456789abcdef"
        directory.mkdir()
        (directory / "internal-2.0.0.crate").write_bytes(b"internal")

        package = make_package("internal", "2.0.0", source=source)
        assert CacheLocator(cache_root).locate(package) == directory / "internal-2.0.0.crate"

    def test_configured_source_dir(self, cache_root: Path, make_package) -> None:
        source = SourceId(kind="sparse", url="https://crates.example.com/api/")
        directory = cache_root / "mirror"
        directory.mkdir()
        (directory / "foo-0.1.0.crate").write_bytes(b"foo")

        locator = CacheLocator(
            cache_root, source_dirs={"https://crates.example.com/api": "mirror"}
        )
        assert locator.locate(make_package("foo", "0.1.0", source=source)) == (
            directory / "foo-0.1.0.crate"
        )

    def test_custom_archive_extension(self, cache_root: Path, make_package) -> None:
        directory = cache_root / "github.com-1ecc6299db9ec823"
        directory.mkdir()
        (directory / "rand-0.8.5.tar.gz").write_bytes(b"rand")

        locator = CacheLocator(cache_root, archive_ext="tar.gz")
        assert locator.locate(make_package("rand", "0.8.5")).name == "rand-0.8.5.tar.gz"

    def test_missing_archive(self, locator, make_package) -> None:
        with pytest.raises(ArchiveNotFoundError) as exc_info:
            locator.locate(make_package("serde", "1.0.130"))

        error = exc_info.value
        assert not isinstance(error, IoFailureError)
        assert error.package_id == "serde v1.0.130"
        assert error.path.name == "serde-1.0.130.crate"
        assert error.path.parent.name == "github.com-1ecc6299db9ec823"
        assert "serde v1.0.130" in str(error)

    def test_missing_cache_root(self, tmp_path: Path, make_package) -> None:
        source = SourceId(kind="registry", url="https://git.example.com/index")
        locator = CacheLocator(tmp_path / "nope")
        with pytest.raises(ArchiveNotFoundError):
            locator.locate(make_package("x", "1.0.0", source=source))

    def test_other_version_does_not_match(self, locator, make_package, add_cached_crate) -> None:
        add_cached_crate("serde", "1.0.129")
        with pytest.raises(ArchiveNotFoundError):
            locator.locate(make_package("serde", "1.0.130"))


class TestCopyArchive:
    """Tests for copy_archive."""

    def test_copies_to_download_layout(self, tmp_path: Path) -> None:
        src = tmp_path / "serde-1.0.130.crate"
        src.write_bytes(b"crate bytes")

        dst = copy_archive(src, tmp_path / "cache", "serde", "1.0.130")

        assert dst == tmp_path / "cache" / "serde" / "1.0.130" / "download"
        assert dst == download_path(tmp_path / "cache", "serde", "1.0.130")
        assert dst.read_bytes() == b"crate bytes"

    def test_missing_source_is_io_failure(self, tmp_path: Path) -> None:
        with pytest.raises(IoFailureError) as exc_info:
            copy_archive(tmp_path / "gone.crate", tmp_path / "cache", "gone", "1.0.0")
        assert isinstance(exc_info.value, VendorError)
        assert not isinstance(exc_info.value, ArchiveNotFoundError)
