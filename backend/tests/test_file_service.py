"""
SocialNet Backend — File Service Unit Tests
=============================================

What:  Tests for FileService validation, storage, cleanup and lookup.
How:   Tests use a temporary storage root per test.

Test Strategy:
    ✅ Allowed extensions (.jpg, .jpeg, .png), case-insensitive
    ✅ Rejected extensions (.gif, .pdf, .exe, none)
    ✅ Size limits (empty, reported and actual size)
    ✅ MIME type from magic bytes
    ✅ Date-organized UUID storage paths
    ✅ resolve() refuses paths outside the storage root
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from socialnet.exceptions import FileStorageError, NotFoundError, ValidationError
from socialnet.services.file_service import FileService


class TestFileValidation:
    """Tests for file validation logic in FileService."""

    @pytest.fixture(autouse=True)
    def _service(self, temp_storage):
        self.service = FileService(storage_root=temp_storage, max_file_size=1_048_576)

    # ── Extension Validation ──────────────────────────────────────────────

    @pytest.mark.parametrize("filename", ["photo.jpg", "photo.jpeg", "photo.png"])
    def test_validate_extension_allowed(self, filename):
        assert self.service.validate_extension(filename) == Path(filename).suffix

    def test_validate_extension_uppercase(self):
        """Extension check should be case-insensitive."""
        assert self.service.validate_extension("photo.JPG") == ".jpg"
        assert self.service.validate_extension("photo.Jpeg") == ".jpeg"

    @pytest.mark.parametrize("filename", ["animation.gif", "document.pdf", "malware.exe", "noextension"])
    def test_validate_extension_rejected(self, filename):
        with pytest.raises(ValidationError, match="not supported") as exc_info:
            self.service.validate_extension(filename)
        assert exc_info.value.field == "picture"

    # ── Size Validation ───────────────────────────────────────────────────

    def test_validate_size_within_limit(self):
        self.service.validate_size(None, 1000)

    def test_validate_size_at_limit(self):
        self.service.validate_size(1_048_576, 1_048_576)

    def test_validate_size_over_limit(self):
        with pytest.raises(ValidationError, match="too large"):
            self.service.validate_size(None, 1_048_577)

    def test_validate_size_reported_over_limit(self):
        """A Content-Length above the limit is rejected before reading further."""
        with pytest.raises(ValidationError, match="too large"):
            self.service.validate_size(5_000_000, 10)

    def test_validate_size_empty_file(self):
        with pytest.raises(ValidationError, match="empty"):
            self.service.validate_size(0, 0)

    # ── MIME Validation ───────────────────────────────────────────────────

    def test_validate_mime_type_png(self, sample_image_bytes):
        assert self.service.validate_mime_type(sample_image_bytes, "pixel.png") == "image/png"

    def test_validate_mime_type_rejects_disguised_file(self):
        """Text renamed to .png is caught by the content check."""
        pytest.importorskip("magic")
        with patch("magic.from_buffer", return_value="text/plain"):
            with pytest.raises(ValidationError, match="not supported"):
                self.service.validate_mime_type(b"just some text", "fake.png")

    def test_validate_mime_type_detection_failure(self):
        pytest.importorskip("magic")
        with patch("magic.from_buffer", side_effect=RuntimeError("libmagic exploded")):
            with pytest.raises(FileStorageError):
                self.service.validate_mime_type(b"\x89PNG", "pixel.png")


class TestFileStorage:
    """Tests for writing, cleaning up and resolving stored files."""

    @pytest.fixture(autouse=True)
    def _service(self, temp_storage):
        self.root = Path(temp_storage)
        self.service = FileService(storage_root=temp_storage)

    @pytest.mark.asyncio
    async def test_validate_and_store_creates_date_directory(self, sample_image_bytes):
        abs_path, rel_path = await self.service.validate_and_store(
            filename="avatar.PNG",
            content=sample_image_bytes,
            content_length=len(sample_image_bytes),
        )

        year, month, day, name = rel_path.split("/")
        assert len(year) == 4 and len(month) == 2 and len(day) == 2
        assert name.endswith(".png")
        assert "avatar" not in name
        assert Path(abs_path).read_bytes() == sample_image_bytes

    @pytest.mark.asyncio
    async def test_validate_and_store_rejects_before_writing(self):
        with pytest.raises(ValidationError):
            await self.service.validate_and_store(filename="notes.txt", content=b"hello")
        assert list(self.root.rglob("*.*")) == []

    @pytest.mark.asyncio
    async def test_store_file_os_error(self):
        with patch("aiofiles.open", side_effect=OSError("disk full")):
            with pytest.raises(FileStorageError, match="Failed to save"):
                await self.service.store_file(b"data", ".png")

    @pytest.mark.asyncio
    async def test_cleanup_file_removes_file(self, tmp_path):
        test_file = tmp_path / "test.jpg"
        test_file.write_bytes(b"test content")

        await self.service.cleanup_file(str(test_file))
        assert not test_file.exists()

    @pytest.mark.asyncio
    async def test_cleanup_file_nonexistent(self, tmp_path):
        """cleanup_file should not raise for non-existent files."""
        await self.service.cleanup_file(str(tmp_path / "nonexistent.jpg"))

    @pytest.mark.asyncio
    async def test_resolve_stored_file(self, sample_image_bytes):
        abs_path, rel_path = await self.service.validate_and_store("a.png", sample_image_bytes)
        assert self.service.resolve(rel_path) == Path(abs_path).resolve()

    def test_resolve_missing_file(self):
        with pytest.raises(NotFoundError):
            self.service.resolve("2026/01/01/missing.png")

    def test_resolve_rejects_traversal(self):
        with pytest.raises(ValidationError, match="Invalid file path"):
            self.service.resolve("../../etc/passwd")
