from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from docextract.extraction.models import DocumentDescriptor, FieldMetadata, PageResult
from docextract.extraction.schema import ExpectedSchema
from docextract.pdf.models import Page


@dataclass(slots=True)
class ExtractionContext:
    document: DocumentDescriptor
    expected_schema: ExpectedSchema
    field_metadata: dict[str, FieldMetadata] = field(default_factory=dict)
    pages: list[Page] = field(default_factory=list)
    page_results: list[PageResult] = field(default_factory=list)
    prior_summaries: list[str] = field(default_factory=list)
    result: Any = None


class PipelineStep(ABC):
    # Used in log lines and error messages to name the failing phase.
    phase: str = "extraction"

    @abstractmethod
    def run(self, context: ExtractionContext) -> ExtractionContext:
        raise NotImplementedError
