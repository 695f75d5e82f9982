"""Unit tests for metadata resolution and OS error classification."""

from __future__ import annotations

import errno
import logging
import os
from pathlib import Path

import pytest

from dirsize.core.metadata import MetadataResolver, classify_os_error
from dirsize.types.models import ErrorKind, ErrorRecord, FileStat


class TestMetadataResolver:
    """Test MetadataResolver.resolve."""

    def test_regular_file(self, tmp_path: Path) -> None:
        """A plain file resolves to its length and a link count of one."""
        target = tmp_path / "file.bin"
        _ = target.write_bytes(b"A" * 123)

        result = MetadataResolver().resolve(target)

        assert result == FileStat(length=123, nlink=1)
        assert isinstance(result, FileStat)
        assert result.adjusted_size == 123

    def test_hard_linked_file(self, tmp_path: Path) -> None:
        """Hard-linked files report every link and split their size."""
        original = tmp_path / "original.bin"
        _ = original.write_bytes(b"A" * 100)
        os.link(original, tmp_path / "second.bin")

        result = MetadataResolver().resolve(original)

        assert isinstance(result, FileStat)
        assert result.nlink == 2
        assert result.adjusted_size == 50

    def test_symlink_is_not_dereferenced(self, tmp_path: Path) -> None:
        """Resolving a symlink stats the link itself, not its target."""
        target = tmp_path / "big.bin"
        _ = target.write_bytes(b"A" * 5000)
        link = tmp_path / "link"
        link.symlink_to(target)

        result = MetadataResolver().resolve(link)

        assert isinstance(result, FileStat)
        assert result.length == len(os.readlink(link))

    def test_missing_file_is_metadata_failure(self, tmp_path: Path) -> None:
        """A file removed before it is resolved yields a MetadataFailure."""
        missing = tmp_path / "gone.bin"

        result = MetadataResolver().resolve(missing)

        assert isinstance(result, ErrorRecord)
        assert result.kind is ErrorKind.METADATA
        assert result.path == missing

    def test_stat_permission_error_is_metadata_failure(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Any stat failure, including EACCES, is reported as MetadataFailure."""
        target = tmp_path / "secret.bin"
        _ = target.write_bytes(b"A")

        def deny(path: object, *args: object, **kwargs: object) -> os.stat_result:
            raise PermissionError(errno.EACCES, "Permission denied", str(path))

        monkeypatch.setattr("dirsize.core.metadata.os.stat", deny)

        result = MetadataResolver().resolve(target)

        assert result == ErrorRecord.metadata_failure(target, detail="Permission denied")

    def test_verbose_logs_each_file(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        """Verbose resolution logs the padded adjusted size and path."""
        target = tmp_path / "file.bin"
        _ = target.write_bytes(b"A" * 100)

        with caplog.at_level(logging.INFO, logger="dirsize.verbose"):
            _ = MetadataResolver(verbose=True).resolve(target)

        messages = [r.getMessage() for r in caplog.records if r.name == "dirsize.verbose"]
        assert len(messages) == 1
        assert messages[0].startswith("100 B")
        assert messages[0].endswith(str(target))

    def test_quiet_resolver_logs_nothing(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        """Without verbose no per-file lines are produced."""
        target = tmp_path / "file.bin"
        _ = target.write_bytes(b"A" * 100)

        with caplog.at_level(logging.INFO, logger="dirsize.verbose"):
            _ = MetadataResolver().resolve(target)

        assert not [r for r in caplog.records if r.name == "dirsize.verbose"]


class TestFileStat:
    """Test the hard-link adjustment."""

    def test_single_link_contributes_full_length(self) -> None:
        assert FileStat(length=4096, nlink=1).adjusted_size == 4096

    def test_floor_division(self) -> None:
        """Adjusted size uses floor division."""
        assert FileStat(length=100, nlink=3).adjusted_size == 33

    def test_zero_link_count_is_clamped(self) -> None:
        """A reported link count of zero is treated as one."""
        file_stat = FileStat(length=10, nlink=0)

        assert file_stat.nlink == 1
        assert file_stat.adjusted_size == 10


class TestClassifyOsError:
    """Test mapping of traversal failures onto error kinds."""

    def test_permission_error_with_path(self) -> None:
        path = Path("/data/locked")
        error = PermissionError(errno.EACCES, "Permission denied", str(path))

        record = classify_os_error(error, path)

        assert record.kind is ErrorKind.PERMISSION_DENIED
        assert record.path == path

    def test_eperm_oserror_is_permission_denied(self) -> None:
        """Plain OSError carrying EPERM is still a permission failure."""
        path = Path("/data/locked")
        error = OSError(errno.EPERM, "Operation not permitted")

        record = classify_os_error(error, path)

        assert record.kind is ErrorKind.PERMISSION_DENIED

    def test_other_oserror_is_unknown(self) -> None:
        path = Path("/data/vanished")
        error = FileNotFoundError(errno.ENOENT, "No such file or directory", str(path))

        record = classify_os_error(error, path)

        assert record == ErrorRecord.unknown(path, detail="No such file or directory")

    def test_permission_error_without_path_is_unknown(self) -> None:
        """Permission failures are only path-qualified when the path is known."""
        record = classify_os_error(PermissionError(errno.EACCES, "Permission denied"), None)

        assert record.kind is ErrorKind.UNKNOWN
        assert record.path is None

    def test_non_os_error_is_unknown(self) -> None:
        record = classify_os_error(RuntimeError("boom"), Path("/data"))

        assert record.kind is ErrorKind.UNKNOWN
        assert record.detail == "boom"


class TestErrorRecordMessages:
    """Test the human-readable rendering of error records."""

    def test_permission_denied_message(self) -> None:
        record = ErrorRecord.permission_denied(Path("/srv/private"))

        assert str(record) == "PermissionDenied: Cannot access `/srv/private`"

    def test_metadata_message(self) -> None:
        record = ErrorRecord.metadata_failure(Path("/srv/file"))

        assert str(record) == "MetadataError: Unable to retrieve metadata for `/srv/file`"

    def test_unknown_without_path_message(self) -> None:
        assert str(ErrorRecord.unknown()) == "UnknownError: Cannot record path"

    def test_unknown_with_path_message(self) -> None:
        assert str(ErrorRecord.unknown(Path("/srv/x"))) == "UnknownError: Unable to process `/srv/x`"
