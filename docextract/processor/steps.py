from docextract.extraction.exceptions import PageParseError
from docextract.extraction.json_reply import parse_json_reply
from docextract.extraction.merger import ResultMerger
from docextract.extraction.models import PageResult
from docextract.extraction.page_processor import PageProcessor
from docextract.extraction.prompt_builder import PromptBuilder
from docextract.llm.client_base import BaseLLMClient
from docextract.llm.exceptions import LLMError
from docextract.logging.logger import Log
from docextract.pdf.base import BasePdfRasterizer, strip_data_uri
from docextract.processor.pipeline import ExtractionContext, PipelineStep


class RasterizeStep(PipelineStep):
    phase = "rasterization"

    def __init__(self, rasterizer: BasePdfRasterizer) -> None:
        self._rasterizer = rasterizer

    def run(self, context: ExtractionContext) -> ExtractionContext:
        Log.info(f"Processing PDF: {context.document.file_name}")
        context.pages = self._rasterizer.rasterize(
            context.document.file_data,
            password=context.document.password,
        )
        Log.info(f"PDF converted to {len(context.pages)} page(s)")
        return context


class ProcessPagesStep(PipelineStep):
    """Visits pages strictly in order, threading earlier results into each prompt."""

    phase = "inference"

    def __init__(self, page_processor: PageProcessor) -> None:
        self._page_processor = page_processor

    def run(self, context: ExtractionContext) -> ExtractionContext:
        total_pages = len(context.pages)
        for index, page in enumerate(context.pages):
            try:
                result = self._page_processor.process(
                    page,
                    total_pages,
                    context.document,
                    context.expected_schema,
                    context.field_metadata,
                    context.prior_summaries,
                )
            except LLMError as exc:
                if index == 0:
                    raise
                Log.warning(f"Inference failed for page {page.page_number}, continuing: {exc}")
                result = PageResult(page=page.page_number, error=str(exc))

            context.page_results.append(result)
            summary = result.summary()
            if summary is not None:
                context.prior_summaries.append(summary)
        return context


class MergeStep(PipelineStep):
    phase = "merge"

    def __init__(self, merger: ResultMerger) -> None:
        self._merger = merger

    def run(self, context: ExtractionContext) -> ExtractionContext:
        context.result = self._merger.merge(context.page_results, context.expected_schema)
        failed = sum(1 for result in context.page_results if result.error is not None)
        Log.info(
            f"Merged {len(context.page_results)} page result(s), {failed} failed"
        )
        return context


class SingleImageStep(PipelineStep):
    """Extracts from a non-PDF document in one call.

    A reply that is not a JSON object is returned inline as
    ``{"error": ..., "raw": ...}``; callers of the image path rely on it.
    """

    phase = "inference"

    def __init__(self, client: BaseLLMClient, prompt_builder: PromptBuilder) -> None:
        self._client = client
        self._prompt_builder = prompt_builder

    def run(self, context: ExtractionContext) -> ExtractionContext:
        Log.info(f"Processing image: {context.document.file_name}")
        prompt = self._prompt_builder.build(
            context.document,
            context.expected_schema,
            context.field_metadata,
        )
        Log.debug(f"Extraction prompt:\n{prompt}")

        image = strip_data_uri(context.document.file_data)
        images = [image] if image else None
        raw_response = self._client.infer(prompt, images)
        Log.debug(f"LLM raw response:\n{raw_response}")

        try:
            context.result = parse_json_reply(raw_response)
        except PageParseError as exc:
            Log.warning(f"Failed to parse image response: {exc}")
            context.result = {
                "error": "Failed to parse LLM response as JSON",
                "raw": raw_response,
            }
        return context
