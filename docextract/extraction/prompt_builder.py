"""Renders the extraction prompt for one document or one page of it."""

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from docextract.extraction.models import (
    ARRAY,
    ARRAY_OF_OBJECTS,
    BOOLEAN,
    DATE,
    DATETIME,
    DECIMAL,
    EMAIL,
    TIME,
    URL,
    DocumentDescriptor,
    FieldMetadata,
)
from docextract.extraction.prompt_loader import load_prompt_template
from docextract.extraction.schema import ExpectedSchema

_TYPE_HINTS: dict[str, str] = {
    DATE: "format: YYYY-MM-DD",
    DATETIME: "format: YYYY-MM-DDTHH:MM:SS",
    TIME: "format: HH:MM:SS (24-hour)",
    BOOLEAN: "expected: a boolean (true or false)",
    ARRAY: "expected: a JSON array",
    ARRAY_OF_OBJECTS: "expected: a JSON array of objects",
    URL: "expected: an absolute URL",
    EMAIL: "expected: an email address",
    DECIMAL: "expected: a number",
}


@dataclass(frozen=True)
class PageContext:
    """Position of a page within a multi-page document plus earlier results."""

    page_number: int
    total_pages: int
    prior_summaries: tuple[str, ...] = ()


def describe_field(path: str, metadata: FieldMetadata) -> str:
    """One-line, type-augmented description of a field for the model."""
    parts = [metadata.description or f"Value for '{_leaf_name(path)}'"]
    if metadata.type:
        parts.append(f"type: {metadata.type}")
    if metadata.choices:
        parts.append(f"must be one of: {', '.join(metadata.choices)}")
    hint = _TYPE_HINTS.get(metadata.type or "")
    if hint:
        parts.append(hint)
    if metadata.decimal_places is not None:
        parts.append(f"decimal places: {metadata.decimal_places}")
    return " | ".join(parts)


def _leaf_name(path: str) -> str:
    return path.rsplit(".", 1)[-1].replace("[]", "")


def _child_path(parent: str, key: str) -> str:
    return f"{parent}.{key}" if parent else key


class PromptBuilder:
    """Builds deterministic extraction prompts from a template file."""

    def __init__(self, template_path: Path | None = None) -> None:
        self._template = load_prompt_template(template_path)

    def build(
        self,
        document: DocumentDescriptor,
        expected_schema: ExpectedSchema,
        field_metadata: Mapping[str, FieldMetadata] | None = None,
        page_context: PageContext | None = None,
    ) -> str:
        metadata = field_metadata or {}
        annotated = self._annotate(expected_schema.value, "", metadata)
        return self._template.format(
            document_info=self._document_info(document),
            page_context=self._page_context(page_context),
            expected_schema=json.dumps(annotated, indent=2, ensure_ascii=False),
            field_metadata=self._field_metadata(metadata),
        ).rstrip()

    @staticmethod
    def _document_info(document: DocumentDescriptor) -> str:
        lines = [
            f"- Filename: {document.file_name}",
            f"- File Type: {document.file_type}",
            f"- Description: {document.description}",
        ]
        if document.remark:
            lines.append(f"- Additional Notes: {document.remark}")
        if document.file_url:
            lines.append(f"- File URL: {document.file_url}")
        return "\n".join(lines)

    @staticmethod
    def _page_context(context: PageContext | None) -> str:
        if context is None or context.total_pages <= 1:
            return ""
        section = (
            "\n\nPage Context:\n"
            f"This is page {context.page_number} of {context.total_pages} in the PDF document."
        )
        if context.prior_summaries:
            section += "\n\nContext from previous pages:\n" + "\n\n".join(context.prior_summaries)
        return section

    @staticmethod
    def _field_metadata(metadata: Mapping[str, FieldMetadata]) -> str:
        if not metadata:
            return ""
        lines = [f"- {path}: {describe_field(path, meta)}" for path, meta in metadata.items()]
        return "\n\nField Metadata (for validation and formatting):\n" + "\n".join(lines)

    def _annotate(self, value: Any, path: str, metadata: Mapping[str, FieldMetadata]) -> Any:
        if not isinstance(value, dict):
            return value
        return {
            key: self._annotate_field(item, _child_path(path, key), metadata)
            for key, item in value.items()
        }

    def _annotate_field(self, value: Any, path: str, metadata: Mapping[str, FieldMetadata]) -> Any:
        meta = metadata.get(path)
        if self._is_array_of_objects(value, meta):
            template = self._item_template(value, path, metadata)
            if template:
                return [template]
            return [describe_field(path, meta)] if meta is not None else value
        if isinstance(value, dict):
            return self._annotate(value, path, metadata)
        if meta is not None:
            return describe_field(path, meta)
        return value

    @staticmethod
    def _is_array_of_objects(value: Any, meta: FieldMetadata | None) -> bool:
        if meta is not None and meta.type == ARRAY_OF_OBJECTS:
            return True
        return isinstance(value, list) and bool(value) and isinstance(value[0], dict)

    def _item_template(
        self,
        value: Any,
        path: str,
        metadata: Mapping[str, FieldMetadata],
    ) -> dict[str, Any]:
        item_path = f"{path}[]"
        example: Sequence[Any] = value if isinstance(value, list) else []
        first = example[0] if example and isinstance(example[0], dict) else {}
        template: dict[str, Any] = self._annotate(first, item_path, metadata)
        prefix = f"{item_path}."
        for key, child_meta in metadata.items():
            if not key.startswith(prefix):
                continue
            child = key[len(prefix):]
            # direct children only; deeper paths are covered by the example element
            if child and "." not in child and "[" not in child and child not in template:
                template[child] = describe_field(key, child_meta)
        return template
