class ExtractionError(Exception):
    """Base exception for extraction failures."""


class PageParseError(ExtractionError):
    """Raised when a model reply is not a JSON object."""

    def __init__(self, message: str, raw: str = "") -> None:
        super().__init__(message)
        self.raw = raw


class RequestError(ExtractionError):
    """Raised when an extraction request is malformed or cannot be read."""
