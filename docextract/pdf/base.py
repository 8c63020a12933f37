import base64
import binascii
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import AbstractContextManager
from pathlib import Path
from typing import Any

from docextract.logging.logger import Log
from docextract.pdf.exceptions import DocumentDecodeError
from docextract.pdf.models import Page
from docextract.pdf.scratch import ScratchSpace

_PDF_FILE_TYPES = frozenset({"pdf", "application/pdf"})


class BasePdfRasterizer(ABC):
    """Contract for all PDF rasterization adapters.

    Subclasses open a PDF from disk and render single pages to image files;
    the probing loop, scratch handling and base64 encoding live here.
    """

    SOURCE_FILENAME = "source.pdf"

    def __init__(
        self,
        *,
        dpi: int = 200,
        scratch_root: Path | None = None,
        stale_after_seconds: int = 3600,
    ) -> None:
        self._dpi = dpi
        self._scratch_root = scratch_root
        self._stale_after_seconds = stale_after_seconds

    @staticmethod
    def is_document_pdf(file_type: str) -> bool:
        """True for ``pdf`` and ``application/pdf`` in any letter case."""
        return file_type.lower() in _PDF_FILE_TYPES

    def rasterize(self, base64_pdf: str, password: str | None = None) -> list[Page]:
        """Render every page of a base64-encoded PDF to a base64 PNG.

        Args:
            base64_pdf: PDF content, base64-encoded (a ``data:`` URI is accepted).
            password: Password for encrypted documents.

        Returns:
            Pages numbered from 1 in reading order.

        Raises:
            DocumentDecodeError: if the input is not a readable PDF or its
                first page cannot be rendered.
        """
        pdf_bytes = decode_base64_document(base64_pdf)
        scratch = ScratchSpace(self._scratch_root, self._stale_after_seconds)
        with scratch as workdir:
            pdf_path = workdir / self.SOURCE_FILENAME
            pdf_path.write_bytes(pdf_bytes)
            with self._open(pdf_path, password) as document:
                pages = list(self._render_pages(document, workdir))
        if not pages:
            raise DocumentDecodeError("PDF rasterization failed: no page could be rendered")
        Log.info(f"Rasterized {len(pages)} page(s) at {self._dpi} DPI")
        return pages

    def _render_pages(self, document: Any, workdir: Path) -> Iterator[Page]:
        page_number = 1
        while True:
            target = workdir / f"page-{page_number}.png"
            try:
                self._render_page(document, page_number - 1, target)
            except Exception as exc:
                Log.debug(f"Stopped probing at page {page_number}: {exc}")
                return
            if not target.exists():
                return
            encoded = base64.b64encode(target.read_bytes()).decode("ascii")
            target.unlink()
            yield Page(page_number=page_number, image_base64=encoded)
            page_number += 1

    @abstractmethod
    def _open(self, pdf_path: Path, password: str | None) -> AbstractContextManager[Any]:
        """Open the PDF at ``pdf_path``.

        Raises:
            DocumentDecodeError: if the file is not a readable PDF or the
                password is missing or wrong.
        """

    @abstractmethod
    def _render_page(self, document: Any, index: int, target: Path) -> None:
        """Render the zero-based page ``index`` to a PNG file at ``target``.

        Any exception (including an out-of-range index) ends the probe.
        """


def strip_data_uri(data: str) -> str:
    """Drop a ``data:...;base64,`` prefix, if any."""
    payload = data.strip()
    if payload.startswith("data:") and "," in payload:
        return payload.split(",", 1)[1]
    return payload


def decode_base64_document(data: str) -> bytes:
    """Decode base64 document content, tolerating a ``data:`` URI prefix."""
    payload = strip_data_uri(data)
    try:
        decoded = base64.b64decode(payload, validate=False)
    except (binascii.Error, ValueError) as exc:
        raise DocumentDecodeError(f"PDF rasterization failed: invalid base64 data: {exc}") from exc
    if not decoded:
        raise DocumentDecodeError("PDF rasterization failed: document is empty")
    return decoded
