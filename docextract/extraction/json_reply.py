import json
import re
from typing import Any

from docextract.extraction.exceptions import PageParseError

_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


def parse_json_reply(raw: str) -> dict[str, Any]:
    """Parse a model reply into a JSON object.

    Markdown code fences are stripped; if the text still does not parse, the
    outermost ``{...}`` span is tried.

    Raises:
        PageParseError: if no JSON object can be recovered. ``raw`` is kept
            on the exception.
    """
    cleaned = _strip_code_fences(raw.strip())
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        match = _OBJECT_RE.search(cleaned)
        if match is None:
            raise PageParseError(f"Invalid JSON response: {exc}", raw=raw) from exc
        try:
            parsed = json.loads(match.group())
        except json.JSONDecodeError as inner:
            raise PageParseError(f"Invalid JSON response: {inner}", raw=raw) from inner

    if not isinstance(parsed, dict):
        raise PageParseError("JSON response must be an object", raw=raw)
    return parsed


def _strip_code_fences(text: str) -> str:
    if not text.startswith("```"):
        return text
    lines = text.splitlines()
    if lines and lines[0].startswith("```"):
        lines = lines[1:]
    if lines and lines[-1].strip() == "```":
        lines = lines[:-1]
    return "\n".join(lines)
