import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from docextract.extraction.exceptions import RequestError

STRING = "string"
NUMBER = "number"
BOOLEAN = "boolean"
ARRAY = "array"
OBJECT = "object"
NULL = "null"
DATE = "date"
DATETIME = "datetime"
TIME = "time"
URL = "url"
EMAIL = "email"
DECIMAL = "decimal"
MULTIPLE_CHOICE = "multiple_choice"
ARRAY_OF_OBJECTS = "array_of_objects"

FIELD_TYPES = frozenset({
    STRING, NUMBER, BOOLEAN, ARRAY, OBJECT, NULL, DATE, DATETIME, TIME,
    URL, EMAIL, DECIMAL, MULTIPLE_CHOICE, ARRAY_OF_OBJECTS,
})


def _pick(raw: Mapping[str, Any], *names: str, default: Any = None) -> Any:
    for name in names:
        if name in raw and raw[name] is not None:
            return raw[name]
    return default


# Wire key first, then the accepted alternative spellings.
_REQUIRED_DOCUMENT_KEYS = (
    ("filedata", "fileData", "file_data"),
    ("fileurl", "fileUrl", "file_url"),
    ("filename", "fileName", "file_name"),
    ("filetype", "fileType", "file_type"),
    ("description",),
)


@dataclass(frozen=True)
class DocumentDescriptor:
    """Immutable input document of one extraction request."""

    file_data: str
    file_url: str
    file_name: str
    file_type: str
    description: str
    remark: str | None = None
    password: str | None = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "DocumentDescriptor":
        """Build from wire keys (``filedata``), camelCase or snake_case.

        Raises:
            RequestError: if any required key is absent. Empty values are accepted.
        """
        if not isinstance(raw, Mapping):
            raise RequestError("'document' must be an object")
        missing = [
            wire_key
            for wire_key, *spellings in _REQUIRED_DOCUMENT_KEYS
            if _pick(raw, wire_key, *spellings) is None
        ]
        if missing:
            raise RequestError(f"'document' is missing required keys: {', '.join(missing)}")
        return cls(
            file_data=str(_pick(raw, "filedata", "fileData", "file_data", default="")),
            file_url=str(_pick(raw, "fileurl", "fileUrl", "file_url", default="")),
            file_name=str(_pick(raw, "filename", "fileName", "file_name", default="")),
            file_type=str(_pick(raw, "filetype", "fileType", "file_type", default="")),
            description=str(_pick(raw, "description", default="")),
            remark=_pick(raw, "remark") or None,
            password=_pick(raw, "password") or None,
        )


@dataclass(frozen=True)
class FieldMetadata:
    """Prompt-only annotations for one field path."""

    type: str | None = None
    description: str | None = None
    choices: tuple[str, ...] = ()
    decimal_places: int | None = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "FieldMetadata":
        decimal_places = _pick(raw, "decimalPlaces", "decimal_places")
        choices = raw.get("choices") or ()
        if not isinstance(choices, (list, tuple)):
            raise RequestError("'choices' must be a list of strings")
        if decimal_places is not None:
            try:
                decimal_places = int(decimal_places)
            except (TypeError, ValueError) as exc:
                raise RequestError(f"'decimalPlaces' must be an integer: {exc}") from exc
            if decimal_places < 0:
                raise RequestError("'decimalPlaces' must not be negative")
        field_type = raw.get("type")
        return cls(
            type=str(field_type).lower() if field_type else None,
            description=raw.get("description") or None,
            choices=tuple(str(c) for c in choices),
            decimal_places=decimal_places,
        )


FieldMetadataMap = dict[str, FieldMetadata]


def parse_field_metadata(raw: Any) -> FieldMetadataMap:
    """Accept metadata flat or wrapped as ``{"fields": {...}}``.

    The wrapper is recognized only when ``fields`` is the sole key and every
    value under it is an entry object; otherwise ``fields`` is an ordinary
    field path of a flat map.
    """
    if not raw:
        return {}
    if not isinstance(raw, Mapping):
        raise RequestError("'metadata' must be an object")
    fields = raw["fields"] if _is_fields_wrapper(raw) else raw
    parsed: FieldMetadataMap = {}
    for path, entry in fields.items():
        if not isinstance(entry, Mapping):
            raise RequestError(f"Metadata for field '{path}' must be an object")
        parsed[str(path)] = FieldMetadata.from_dict(entry)
    return parsed


def _is_fields_wrapper(raw: Mapping[str, Any]) -> bool:
    inner = raw.get("fields")
    if set(raw) != {"fields"} or not isinstance(inner, Mapping):
        return False
    return all(isinstance(entry, Mapping) for entry in inner.values())


@dataclass
class PageResult:
    """Outcome of extracting one page. Errored pages carry no data."""

    page: int
    data: dict[str, Any] | None = None
    error: str | None = None
    raw: Any = None

    def summary(self) -> str | None:
        """Render successful data for the next pages' prompts."""
        if self.data is None:
            return None
        return f"Page {self.page}: {json.dumps(self.data, indent=2, ensure_ascii=False)}"

    def to_dict(self) -> dict[str, Any]:
        if self.error is not None:
            return {"page": self.page, "error": self.error, "raw": self.raw}
        return {"page": self.page, "data": self.data}


@dataclass(frozen=True)
class ExtractionRequest:
    """One extraction call: document, expected schema and field metadata."""

    document: DocumentDescriptor
    expected_schema: Any
    metadata: FieldMetadataMap = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "ExtractionRequest":
        if not isinstance(raw, Mapping):
            raise RequestError("Extraction request must be a JSON object")
        if "document" not in raw:
            raise RequestError("Extraction request is missing 'document'")
        schema = _pick(raw, "expectedSchema", "expected_schema", "responseBody")
        if schema is None:
            raise RequestError("Extraction request is missing 'expectedSchema'")
        if isinstance(schema, str):
            try:
                schema = json.loads(schema)
            except json.JSONDecodeError as exc:
                raise RequestError(f"'expectedSchema' is not valid JSON: {exc}") from exc
        return cls(
            document=DocumentDescriptor.from_dict(raw["document"]),
            expected_schema=schema,
            metadata=parse_field_metadata(raw.get("metadata")),
        )
