import json
from pathlib import Path

from docextract.extraction.exceptions import RequestError
from docextract.extraction.models import ExtractionRequest


class RequestLoader:
    """Reads an extraction request from a JSON file."""

    def load(self, path: Path) -> ExtractionRequest:
        """Parse the request stored at ``path``.

        Raises:
            FileNotFoundError: if the file does not exist.
            RequestError: if the file is not valid JSON or misses required keys.
        """
        if not path.exists():
            raise FileNotFoundError(f"Request file not found: {path}")
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise RequestError(f"Request file {path} is not valid JSON: {exc}") from exc
        return ExtractionRequest.from_dict(raw)
