"""Sample responses synthesized from an expected schema and its field metadata."""

from collections.abc import Mapping
from typing import Any

from docextract.extraction.models import (
    ARRAY,
    ARRAY_OF_OBJECTS,
    BOOLEAN,
    DECIMAL,
    NULL,
    NUMBER,
    OBJECT,
    FieldMetadata,
)

SAMPLE_TEXT = "Sample Value"


def build_placeholder_response(
    expected_schema: Any,
    field_metadata: Mapping[str, FieldMetadata] | None = None,
) -> Any:
    """Return a response that looks like a filled-in extraction result.

    Example values already present in the schema are kept; nulls are
    replaced using the field's metadata (first choice, typed sample value),
    and arrays of objects are rebuilt from their first element.
    """
    return _build(expected_schema, field_metadata or {}, "")


def _build(schema: Any, metadata: Mapping[str, FieldMetadata], prefix: str) -> Any:
    if isinstance(schema, list):
        if schema and isinstance(schema[0], dict):
            return [_build(schema[0], metadata, f"{prefix}[]")]
        return schema
    if not isinstance(schema, dict):
        return schema

    result: dict[str, Any] = {}
    for key, value in schema.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(value, list) and value and isinstance(value[0], dict):
            item_path = f"{path}[]"
            result[key] = [
                {
                    child_key: _sample_value(metadata.get(f"{item_path}.{child_key}"), child_value)
                    for child_key, child_value in value[0].items()
                }
            ]
        elif isinstance(value, dict):
            result[key] = _build(value, metadata, path)
        else:
            result[key] = _sample_value(metadata.get(path), value)
    return result


def _sample_value(metadata: FieldMetadata | None, schema_value: Any) -> Any:
    if isinstance(schema_value, str):
        if metadata is not None and metadata.choices:
            return metadata.choices[0]
        return schema_value or SAMPLE_TEXT
    if schema_value is not None:
        return schema_value

    if metadata is None:
        return SAMPLE_TEXT
    if metadata.choices:
        return metadata.choices[0]
    if metadata.type in (NUMBER, DECIMAL):
        if metadata.decimal_places is not None:
            return round(123.45, metadata.decimal_places)
        return 123
    if metadata.type == BOOLEAN:
        return True
    if metadata.type in (ARRAY, ARRAY_OF_OBJECTS):
        return []
    if metadata.type == OBJECT:
        return {}
    if metadata.type == NULL:
        return None
    return SAMPLE_TEXT
