"""
==============================================================================
Upload Service Tests
==============================================================================

Tests for upload naming, storage and best-effort deletion.

==============================================================================
"""

import asyncio
import io
import logging
from pathlib import Path

import pytest
from starlette.datastructures import UploadFile

from pizzaria.services.upload_service import UploadSink


@pytest.fixture
def sink(tmp_path: Path) -> UploadSink:
    return UploadSink(tmp_path / "uploads", url_prefix="/uploads", chunk_size=4)


class TestNaming:
    """Tests for UploadSink.build_filename."""

    @pytest.mark.parametrize("original,expected", [
        ("pizza.png", "1700000000000-pizza.png"),
        ("foto da  pizza.png", "1700000000000-foto-da-pizza.png"),
        ("tab\tname.jpg", "1700000000000-tab-name.jpg"),
        ("../../etc/passwd", "1700000000000-passwd"),
        ("C:\\fotos\\suco laranja.png", "1700000000000-suco-laranja.png"),
    ])
    def test_build_filename(self, original, expected):
        assert UploadSink.build_filename(original, 1700000000000) == expected

    def test_timestamp_prefix(self):
        prefix, _, rest = UploadSink.build_filename("a.png").partition("-")
        assert prefix.isdigit()
        assert rest == "a.png"


class TestStore:
    """Tests for UploadSink.store."""

    def test_store_writes_file(self, sink: UploadSink):
        upload = UploadFile(file=io.BytesIO(b"0123456789"), filename="minha pizza.png")

        reference = asyncio.run(sink.store(upload))

        assert reference.startswith("/uploads/")
        assert reference.endswith("-minha-pizza.png")
        stored = sink.directory / reference.rsplit("/", 1)[-1]
        assert stored.read_bytes() == b"0123456789"
        assert sink.exists(reference)

    def test_creates_directory(self, tmp_path: Path):
        sink = UploadSink(tmp_path / "a" / "b" / "uploads")
        assert sink.directory.is_dir()


class TestDelete:
    """Tests for UploadSink.is_deletable and UploadSink.delete."""

    @pytest.mark.parametrize("reference,expected", [
        ("/uploads/1-a.png", True),
        ("/uploads/placeholder-pizza.png", False),
        ("/uploads/1-placeholder.png", False),
        ("https://cdn.example.com/a.png", False),
        ("/static/1-a.png", False),
        ("/uploadsX/1-a.png", False),
        ("", False),
        (None, False),
    ])
    def test_is_deletable(self, sink: UploadSink, reference, expected):
        assert sink.is_deletable(reference) is expected

    def test_delete_removes_file(self, sink: UploadSink):
        (sink.directory / "1-a.png").write_bytes(b"x")
        assert sink.delete("/uploads/1-a.png") is True
        assert not (sink.directory / "1-a.png").exists()

    def test_delete_skips_placeholder(self, sink: UploadSink):
        (sink.directory / "placeholder-pizza.png").write_bytes(b"x")
        assert sink.delete("/uploads/placeholder-pizza.png") is False
        assert (sink.directory / "placeholder-pizza.png").exists()

    def test_delete_missing_file_is_logged(self, sink: UploadSink, caplog):
        with caplog.at_level(logging.WARNING):
            assert sink.delete("/uploads/1-gone.png") is False
        assert "1-gone.png" in caplog.text

    def test_delete_refuses_traversal(self, sink: UploadSink, tmp_path: Path):
        outside = tmp_path / "secret.txt"
        outside.write_text("keep")
        assert sink.delete("/uploads/../secret.txt") is False
        assert outside.exists()

    def test_delete_swallows_os_errors(self, sink: UploadSink):
        (sink.directory / "1-dir.png").mkdir()
        assert sink.delete("/uploads/1-dir.png") is False
