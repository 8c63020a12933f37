from collections.abc import Mapping, Sequence

from docextract.extraction.exceptions import PageParseError
from docextract.extraction.json_reply import parse_json_reply
from docextract.extraction.models import DocumentDescriptor, FieldMetadata, PageResult
from docextract.extraction.prompt_builder import PageContext, PromptBuilder
from docextract.extraction.schema import ExpectedSchema
from docextract.llm.client_base import BaseLLMClient
from docextract.logging.logger import Log
from docextract.pdf.models import Page


class PageProcessor:
    """Extracts data from a single rendered page.

    A reply that is not a JSON object is recorded on the returned
    ``PageResult``; inference errors propagate to the caller.
    """

    def __init__(self, client: BaseLLMClient, prompt_builder: PromptBuilder) -> None:
        self._client = client
        self._prompt_builder = prompt_builder

    def process(
        self,
        page: Page,
        total_pages: int,
        document: DocumentDescriptor,
        expected_schema: ExpectedSchema,
        field_metadata: Mapping[str, FieldMetadata],
        prior_summaries: Sequence[str],
    ) -> PageResult:
        Log.info(f"Processing page {page.page_number}/{total_pages}")
        context = PageContext(
            page_number=page.page_number,
            total_pages=total_pages,
            prior_summaries=tuple(prior_summaries),
        )
        prompt = self._prompt_builder.build(document, expected_schema, field_metadata, context)
        Log.debug(f"Extraction prompt for page {page.page_number}:\n{prompt}")

        raw_response = self._client.infer(prompt, [page.image_base64])
        Log.debug(f"LLM raw response for page {page.page_number}:\n{raw_response}")

        try:
            data = parse_json_reply(raw_response)
        except PageParseError as exc:
            Log.warning(f"Failed to parse response for page {page.page_number}: {exc}")
            return PageResult(
                page=page.page_number,
                error=f"Failed to parse response: {exc}",
                raw=exc.raw,
            )
        return PageResult(page=page.page_number, data=data)
