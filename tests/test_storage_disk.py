"""Unit tests for DiskStorage."""

from pathlib import Path

from chatterbook.storage.disk import DiskStorage


class TestDiskStorage:
    def test_creates_base_dir(self, tmp_path: Path):
        DiskStorage(str(tmp_path / "a" / "b"))
        assert (tmp_path / "a" / "b").is_dir()

    def test_write_creates_parents(self, tmp_path: Path):
        s = DiskStorage(str(tmp_path / "store"))
        s.write("a/b.md", b"hello")
        assert (tmp_path / "store" / "a" / "b.md").read_bytes() == b"hello"

    def test_write_overwrites(self, tmp_path: Path):
        s = DiskStorage(str(tmp_path / "store"))
        s.write("same.md", b"first")
        s.write("same.md", b"second")
        assert (tmp_path / "store" / "same.md").read_bytes() == b"second"

    def test_open_stream(self, tmp_path: Path):
        s = DiskStorage(str(tmp_path / "store"))
        s.write("stream.json", b"[]")
        with s.open_stream("stream.json") as f:
            assert f.read() == b"[]"

    def test_copy_file_keeps_source(self, tmp_path: Path):
        source = tmp_path / "src.png"
        source.write_bytes(b"png")
        s = DiskStorage(str(tmp_path / "store"))
        s.copy_file(source, "copy.png")
        assert (tmp_path / "store" / "copy.png").read_bytes() == b"png"
        assert source.read_bytes() == b"png"
