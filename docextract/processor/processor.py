from collections.abc import Mapping
from typing import Any

from docextract.config.settings import Settings
from docextract.extraction.merger import ResultMerger
from docextract.extraction.models import DocumentDescriptor, ExtractionRequest, FieldMetadata
from docextract.extraction.page_processor import PageProcessor
from docextract.extraction.prompt_builder import PromptBuilder
from docextract.extraction.schema import ExpectedSchema
from docextract.llm.client_base import BaseLLMClient
from docextract.llm.factory import LLMClientFactory
from docextract.logging.logger import Log
from docextract.pdf.base import BasePdfRasterizer
from docextract.pdf.factory import PdfRasterizerFactory
from docextract.processor.pipeline import ExtractionContext, PipelineStep
from docextract.processor.steps import (
    MergeStep,
    ProcessPagesStep,
    RasterizeStep,
    SingleImageStep,
)


class ExtractionCoordinator:
    """Top-level entry point for one extraction request.

    PDF documents: rasterize -> process pages in order -> merge.
    Anything else: a single prompt with the document as the image.
    """

    def __init__(
        self,
        rasterizer: BasePdfRasterizer,
        client: BaseLLMClient,
        prompt_builder: PromptBuilder,
        merger: ResultMerger,
    ) -> None:
        self._rasterizer = rasterizer
        self._client = client
        page_processor = PageProcessor(client, prompt_builder)
        self._pdf_steps: list[PipelineStep] = [
            RasterizeStep(rasterizer),
            ProcessPagesStep(page_processor),
            MergeStep(merger),
        ]
        self._image_steps: list[PipelineStep] = [SingleImageStep(client, prompt_builder)]

    def extract(
        self,
        document: DocumentDescriptor,
        expected_schema: Any,
        field_metadata: Mapping[str, FieldMetadata] | None = None,
    ) -> Any:
        """Extract schema-shaped data from ``document``.

        Raises:
            DocumentDecodeError: if a PDF cannot be rasterized.
            LLMError: if inference fails on the first page or on an image.
        """
        schema = (
            expected_schema
            if isinstance(expected_schema, ExpectedSchema)
            else ExpectedSchema.load(expected_schema)
        )
        context = ExtractionContext(
            document=document,
            expected_schema=schema,
            field_metadata=dict(field_metadata or {}),
        )
        steps = (
            self._pdf_steps
            if self._rasterizer.is_document_pdf(document.file_type)
            else self._image_steps
        )
        for step in steps:
            try:
                context = step.run(context)
            except Exception as exc:
                Log.error(f"Extraction failed during {step.phase}: {exc}")
                raise
        return context.result

    def extract_request(self, request: ExtractionRequest) -> Any:
        return self.extract(request.document, request.expected_schema, request.metadata)

    def health_check(self) -> bool:
        return self._client.health_check()

    def list_models(self) -> list[str]:
        return self._client.list_models()


def build_coordinator(settings: Settings) -> ExtractionCoordinator:
    """Build an ExtractionCoordinator with all required adapters."""
    return ExtractionCoordinator(
        rasterizer=PdfRasterizerFactory.create(settings),
        client=LLMClientFactory.create(settings),
        prompt_builder=PromptBuilder(),
        merger=ResultMerger(),
    )
