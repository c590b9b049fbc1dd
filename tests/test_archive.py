"""
Tests for the archive installer.
"""

import io
import struct
import zipfile
from pathlib import Path

import pytest

from ux4tools.core.errors import ArchiveWriteError, CorruptArchive
from ux4tools.core.services.archive import extract, iter_entries


class TestExtract:
    def test_extracts_files_and_directories(self, tmp_path: Path, zip_bytes):
        data = zip_bytes({
            "ux4/": None,
            "ux4/install": b"#!/usr/bin/env node\n",
            "ux4/lib/core.js": b"export const x = 1;\n",
        })
        dest = tmp_path / "out"

        count = extract(data, dest)

        assert count == 3
        assert (dest / "ux4").is_dir()
        assert (dest / "ux4" / "install").read_bytes() == b"#!/usr/bin/env node\n"
        assert (dest / "ux4" / "lib" / "core.js").read_bytes() == b"export const x = 1;\n"

    def test_progress_called_once_per_entry(self, tmp_path: Path, zip_bytes):
        data = zip_bytes({f"f{i}.txt": str(i).encode() for i in range(5)})
        calls = []

        extract(data, tmp_path, lambda done, total: calls.append((done, total)))

        assert calls == [(1, 5), (2, 5), (3, 5), (4, 5), (5, 5)]

    def test_overwrites_existing_files(self, tmp_path: Path, zip_bytes):
        (tmp_path / "a.txt").write_text("old")
        extract(zip_bytes({"a.txt": b"new"}), tmp_path)
        assert (tmp_path / "a.txt").read_text() == "new"

    def test_empty_archive(self, tmp_path: Path, zip_bytes):
        calls = []
        assert extract(zip_bytes({}), tmp_path / "x", lambda d, t: calls.append(d)) == 0
        assert calls == []

    def test_corrupt_buffer(self, tmp_path: Path):
        with pytest.raises(CorruptArchive):
            extract(b"definitely not a zip", tmp_path)

    def test_corrupt_compressed_entry(self, tmp_path: Path):
        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
            zf.writestr("ux4/core.js", b"export const answer = 42;\n" * 200)
        data = bytearray(buf.getvalue())

        info = zipfile.ZipFile(io.BytesIO(bytes(data))).infolist()[0]
        offset = info.header_offset
        name_len, extra_len = struct.unpack("<HH", data[offset + 26:offset + 30])
        start = offset + 30 + name_len + extra_len
        data[start:start + info.compress_size] = b"\xff" * info.compress_size

        with pytest.raises(CorruptArchive):
            extract(bytes(data), tmp_path / "out")

    def test_rejects_escaping_entries(self, tmp_path: Path, zip_bytes):
        dest = tmp_path / "out"
        with pytest.raises(ArchiveWriteError):
            extract(zip_bytes({"../evil.txt": b"x"}), dest)
        assert not (tmp_path / "evil.txt").exists()

    def test_unwritable_destination(self, tmp_path: Path, zip_bytes):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        with pytest.raises(ArchiveWriteError):
            extract(zip_bytes({"a.txt": b"x"}), blocker)

    def test_stops_on_first_failure(self, tmp_path: Path, zip_bytes):
        (tmp_path / "blocked").write_text("a file where a folder is needed")
        data = zip_bytes({"first.txt": b"1", "blocked/second.txt": b"2", "third.txt": b"3"})
        calls = []

        with pytest.raises(ArchiveWriteError):
            extract(data, tmp_path, lambda d, t: calls.append(d))

        assert (tmp_path / "first.txt").exists()
        assert not (tmp_path / "third.txt").exists()
        assert calls == [1]


class TestIterEntries:
    def test_lazy_entries(self, zip_bytes):
        total, entries = iter_entries(zip_bytes({"d/": None, "d/a.txt": b"abc"}))
        assert total == 2
        items = list(entries)
        assert [e.name for e in items] == ["d/", "d/a.txt"]
        assert items[0].is_dir
        assert not items[1].is_dir
