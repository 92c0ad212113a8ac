from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from depmirror.exceptions import FileOperationError
from depmirror.utils.filesystem import (
    create_timestamped_backup,
    safe_read_file,
    safe_write_file,
)


@pytest.fixture
def listing(tmp_path: Path) -> Path:
    path = tmp_path / "registry.txt"
    path.write_text("serde-1.0.195\n", encoding="utf-8")
    return path


@pytest.mark.unit
class TestSafeReadFile:
    """Tests for safe_read_file."""

    def test_reads_content(self, listing: Path) -> None:
        assert safe_read_file(listing) == "serde-1.0.195\n"

    def test_accepts_string_path(self, listing: Path) -> None:
        assert safe_read_file(str(listing)) == "serde-1.0.195\n"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileOperationError) as exc_info:
            safe_read_file(tmp_path / "missing.txt")

        assert exc_info.value.operation == "read"

    def test_directory_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(FileOperationError, match="Not a file"):
            safe_read_file(tmp_path)

    def test_size_limit(self, listing: Path) -> None:
        with pytest.raises(FileOperationError, match="too large"):
            safe_read_file(listing, max_size=4)

    def test_size_limit_disabled(self, listing: Path) -> None:
        assert safe_read_file(listing, max_size=None)

    def test_decode_error(self, tmp_path: Path) -> None:
        path = tmp_path / "binary.txt"
        path.write_bytes(b"\xff\xfe\xfa")

        with pytest.raises(FileOperationError, match="Failed to read"):
            safe_read_file(path)


@pytest.mark.unit
class TestSafeWriteFile:
    """Tests for safe_write_file."""

    def test_replaces_content(self, listing: Path) -> None:
        backup = safe_write_file(listing, "log-0.4.22\n")

        assert backup is None
        assert listing.read_text(encoding="utf-8") == "log-0.4.22\n"

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        target = tmp_path / "mirror" / "index" / "registry.txt"

        safe_write_file(target, "log-0.4.22\n")

        assert target.read_text(encoding="utf-8") == "log-0.4.22\n"

    def test_backup(self, listing: Path) -> None:
        backup = safe_write_file(listing, "new\n", create_backup=True)

        assert backup is not None
        assert backup.read_text(encoding="utf-8") == "serde-1.0.195\n"
        assert backup.name.startswith("registry.")
        assert backup.name.endswith(".backup.txt")

    def test_backup_skipped_for_new_file(self, tmp_path: Path) -> None:
        assert safe_write_file(tmp_path / "new.txt", "x\n", create_backup=True) is None

    def test_no_temp_files_left(self, listing: Path) -> None:
        safe_write_file(listing, "log-0.4.22\n")

        assert [p.name for p in listing.parent.iterdir()] == ["registry.txt"]

    def test_replace_failure_cleans_up(self, listing: Path) -> None:
        """Test a failed replace raises and leaves the original intact."""
        with patch.object(Path, "replace", side_effect=OSError("disk full")):
            with pytest.raises(FileOperationError, match="Atomic write failed"):
                safe_write_file(listing, "log-0.4.22\n")

        assert listing.read_text(encoding="utf-8") == "serde-1.0.195\n"
        assert [p.name for p in listing.parent.iterdir()] == ["registry.txt"]


@pytest.mark.unit
class TestCreateTimestampedBackup:
    """Tests for create_timestamped_backup."""

    def test_copies_file(self, listing: Path) -> None:
        backup = create_timestamped_backup(listing)

        assert backup.parent == listing.parent
        assert backup.read_text(encoding="utf-8") == listing.read_text(encoding="utf-8")

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileOperationError) as exc_info:
            create_timestamped_backup(tmp_path / "missing.txt")

        assert exc_info.value.operation == "backup"
