from pathlib import Path

from docextract.config.settings import Settings
from docextract.pdf.base import BasePdfRasterizer
from docextract.pdf.pdfplumber_adapter import PdfPlumberAdapter
from docextract.pdf.pymupdf_adapter import PyMuPdfAdapter


class PdfRasterizerFactory:
    """Creates the configured PDF rasterizer."""

    ADAPTERS: dict[str, type[BasePdfRasterizer]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfRasterizer:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        scratch_root = Path(settings.pdf_scratch_dir) if settings.pdf_scratch_dir else None
        return adapter_cls(
            dpi=settings.pdf_render_dpi,
            scratch_root=scratch_root,
            stale_after_seconds=settings.pdf_scratch_stale_seconds,
        )
