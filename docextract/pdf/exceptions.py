class RasterizationError(Exception):
    """Base exception for PDF rasterization failures."""


class DocumentDecodeError(RasterizationError):
    """Raised when the source document cannot be decoded or opened as a PDF."""
