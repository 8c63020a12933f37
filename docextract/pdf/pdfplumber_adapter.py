from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import pdfplumber
from pdfplumber.pdf import PDF

from docextract.pdf.base import BasePdfRasterizer
from docextract.pdf.exceptions import DocumentDecodeError


class PdfPlumberAdapter(BasePdfRasterizer):
    """Renders PDF pages to PNG using pdfplumber (pypdfium2 backend)."""

    @contextmanager
    def _open(self, pdf_path: Path, password: str | None) -> Iterator[PDF]:
        try:
            document = pdfplumber.open(pdf_path, password=password or "")
        except Exception as exc:
            raise DocumentDecodeError(
                f"PDF rasterization failed: pdfplumber could not open document: {exc}"
            ) from exc
        with document:
            yield document

    def _render_page(self, document: PDF, index: int, target: Path) -> None:
        page = document.pages[index]
        image = page.to_image(resolution=self._dpi)
        image.save(target, format="PNG", quantize=False)
