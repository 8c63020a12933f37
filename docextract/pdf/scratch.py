"""Per-request scratch directories for PDF rasterization.

Each rasterization gets its own uniquely named directory under a shared root.
The directory is removed when the ``with`` block exits, whatever the outcome.
Directories left behind by crashed runs are swept once they are older than
``stale_after_seconds``; younger ones may belong to concurrent requests.
"""

import shutil
import tempfile
import time
from pathlib import Path
from types import TracebackType

from docextract.logging.logger import Log

DEFAULT_SCRATCH_ROOT = Path(tempfile.gettempdir()) / "docextract-pdf"


class ScratchSpace:
    """Context manager yielding a fresh scratch directory."""

    PREFIX = "request-"

    def __init__(
        self,
        root: Path | None = None,
        stale_after_seconds: int = 3600,
    ) -> None:
        self._root = root if root is not None else DEFAULT_SCRATCH_ROOT
        self._stale_after_seconds = stale_after_seconds
        self._path: Path | None = None

    @property
    def root(self) -> Path:
        return self._root

    def __enter__(self) -> Path:
        self._root.mkdir(parents=True, exist_ok=True)
        self._sweep_orphans()
        self._path = Path(tempfile.mkdtemp(prefix=self.PREFIX, dir=self._root))
        return self._path

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._path is not None:
            self._remove(self._path)
            self._path = None

    def _sweep_orphans(self) -> None:
        cutoff = time.time() - self._stale_after_seconds
        for entry in self._root.iterdir():
            if not entry.name.startswith(self.PREFIX):
                continue
            try:
                modified = entry.stat().st_mtime
            except FileNotFoundError:
                continue
            if modified < cutoff:
                Log.info(f"Removing stale scratch entry {entry}")
                self._remove(entry)

    @staticmethod
    def _remove(path: Path) -> None:
        if path.is_dir():
            shutil.rmtree(path, ignore_errors=True)
        else:
            path.unlink(missing_ok=True)
        if path.exists():
            Log.warning(f"Scratch entry {path} could not be fully removed")
