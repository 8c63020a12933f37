import copy
import json
from collections.abc import Sequence
from typing import Any

from docextract.extraction.models import PageResult
from docextract.extraction.schema import (
    ArrayShape,
    BooleanShape,
    ExpectedSchema,
    FieldShape,
    NullShape,
    NumberShape,
    ObjectShape,
    StringShape,
)

PAGE_RESULTS_KEY = "_pageResults"
TOTAL_PAGES_KEY = "_totalPages"


class ResultMerger:
    """Combines per-page results into one object shaped like the expected schema."""

    def merge(
        self,
        page_results: Sequence[PageResult],
        expected_schema: ExpectedSchema,
    ) -> Any:
        """Merge page results in page order.

        No pages yield the schema itself; a single page is passed through
        untouched. With two or more pages every top-level schema key is
        merged according to its shape and the traceability keys
        ``_pageResults`` and ``_totalPages`` are attached.
        """
        if not page_results:
            return expected_schema.copy_value()
        if len(page_results) == 1:
            only = page_results[0]
            return only.data if only.data is not None else only.to_dict()

        combined: dict[str, Any] = {}
        for key, shape in expected_schema.fields.items():
            values = self._collect(page_results, key)
            if not values:
                combined[key] = copy.deepcopy(shape.placeholder)
            else:
                combined[key] = self._merge_values(shape, values)

        combined[PAGE_RESULTS_KEY] = [result.to_dict() for result in page_results]
        combined[TOTAL_PAGES_KEY] = len(page_results)
        return combined

    @staticmethod
    def _collect(page_results: Sequence[PageResult], key: str) -> list[Any]:
        values: list[Any] = []
        for result in page_results:
            if result.data is None:
                continue
            value = result.data.get(key)
            if value is None or value == "":
                continue
            values.append(value)
        return values

    def _merge_values(self, shape: FieldShape, values: list[Any]) -> Any:
        match shape:
            case ArrayShape():
                return self._concatenate(values)
            case ObjectShape():
                merged: dict[str, Any] = {}
                for value in values:
                    if isinstance(value, dict):
                        merged.update(value)
                return merged
            case StringShape():
                return " ".join(self._as_text(value) for value in values)
            case NumberShape() | BooleanShape() | NullShape():
                return values[-1]

    @staticmethod
    def _concatenate(values: list[Any]) -> list[Any]:
        flattened: list[Any] = []
        for value in values:
            if isinstance(value, list):
                flattened.extend(value)
            else:
                flattened.append(value)
        return flattened

    @staticmethod
    def _as_text(value: Any) -> str:
        if isinstance(value, str):
            return value
        return json.dumps(value, ensure_ascii=False)
