from dataclasses import dataclass


@dataclass(frozen=True)
class Page:
    """One rendered page of a source PDF, in document reading order."""

    page_number: int  # 1-based
    image_base64: str
