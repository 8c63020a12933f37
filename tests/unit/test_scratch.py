import os
import time
from pathlib import Path

import pytest

from docextract.pdf.scratch import ScratchSpace


def _age(path: Path, seconds: int) -> None:
    old = time.time() - seconds
    os.utime(path, (old, old))


class TestScratchSpace:
    def test_creates_directory_under_root(self, tmp_path: Path) -> None:
        with ScratchSpace(tmp_path) as workdir:
            assert workdir.is_dir()
            assert workdir.parent == tmp_path
            assert workdir.name.startswith(ScratchSpace.PREFIX)

    def test_removes_directory_on_exit(self, tmp_path: Path) -> None:
        with ScratchSpace(tmp_path) as workdir:
            (workdir / "page-1.png").write_bytes(b"png")
        assert not workdir.exists()

    def test_removes_directory_on_exception(self, tmp_path: Path) -> None:
        with pytest.raises(RuntimeError):
            with ScratchSpace(tmp_path) as workdir:
                (workdir / "source.pdf").write_bytes(b"%PDF")
                raise RuntimeError("boom")
        assert not workdir.exists()

    def test_concurrent_spaces_do_not_collide(self, tmp_path: Path) -> None:
        with ScratchSpace(tmp_path) as first, ScratchSpace(tmp_path) as second:
            assert first != second

    def test_creates_missing_root(self, tmp_path: Path) -> None:
        root = tmp_path / "nested" / "scratch"
        with ScratchSpace(root) as workdir:
            assert workdir.parent == root


class TestOrphanSweep:
    def test_removes_stale_directories(self, tmp_path: Path) -> None:
        orphan = tmp_path / "request-old"
        orphan.mkdir()
        _age(orphan, 7200)
        with ScratchSpace(tmp_path, stale_after_seconds=3600):
            pass
        assert not orphan.exists()

    def test_removes_stale_files(self, tmp_path: Path) -> None:
        orphan = tmp_path / "request-old.png"
        orphan.write_bytes(b"png")
        _age(orphan, 7200)
        with ScratchSpace(tmp_path, stale_after_seconds=3600):
            pass
        assert not orphan.exists()

    def test_keeps_fresh_directories(self, tmp_path: Path) -> None:
        in_flight = tmp_path / "request-in-flight"
        in_flight.mkdir()
        with ScratchSpace(tmp_path, stale_after_seconds=3600):
            pass
        assert in_flight.exists()

    def test_ignores_foreign_entries(self, tmp_path: Path) -> None:
        foreign = tmp_path / "keep-me.txt"
        foreign.write_text("x")
        _age(foreign, 7200)
        with ScratchSpace(tmp_path, stale_after_seconds=3600):
            pass
        assert foreign.exists()
