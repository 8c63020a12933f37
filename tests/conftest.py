import base64
import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

# 1x1 transparent PNG
PNG_1X1_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


def _pdf_with_pages(*texts: str) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for text in texts:
        c.drawString(72, 720, text)
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    return _pdf_with_pages("Invoice INV-001")


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a three-page PDF with known text on each page."""
    return _pdf_with_pages("Page one content", "Page two content", "Page three content")


@pytest.fixture()
def sample_pdf_base64(sample_pdf_bytes: bytes) -> str:
    return base64.b64encode(sample_pdf_bytes).decode("ascii")


@pytest.fixture()
def multi_page_pdf_base64(multi_page_pdf_bytes: bytes) -> str:
    return base64.b64encode(multi_page_pdf_bytes).decode("ascii")


@pytest.fixture()
def encrypted_pdf_base64() -> str:
    """A single-page PDF protected with the user password 'secret'."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter, encrypt="secret")
    c.drawString(72, 720, "Confidential")
    c.showPage()
    c.save()
    return base64.b64encode(buf.getvalue()).decode("ascii")


@pytest.fixture()
def png_base64() -> str:
    return PNG_1X1_BASE64
