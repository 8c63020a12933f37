from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import pymupdf

from docextract.pdf.base import BasePdfRasterizer
from docextract.pdf.exceptions import DocumentDecodeError


class PyMuPdfAdapter(BasePdfRasterizer):
    """Renders PDF pages to PNG using PyMuPDF."""

    @contextmanager
    def _open(self, pdf_path: Path, password: str | None) -> Iterator[pymupdf.Document]:
        try:
            document = pymupdf.open(pdf_path, filetype="pdf")  # type: ignore[no-untyped-call]
        except Exception as exc:
            raise DocumentDecodeError(
                f"PDF rasterization failed: pymupdf could not open document: {exc}"
            ) from exc
        try:
            if document.needs_pass and not document.authenticate(password or ""):
                raise DocumentDecodeError(
                    "PDF rasterization failed: document is encrypted and "
                    "the password is missing or wrong"
                )
            yield document
        finally:
            document.close()

    def _render_page(self, document: pymupdf.Document, index: int, target: Path) -> None:
        page = document.load_page(index)
        pixmap = page.get_pixmap(dpi=self._dpi)
        pixmap.save(str(target))
