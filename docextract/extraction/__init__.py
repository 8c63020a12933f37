from docextract.extraction.merger import ResultMerger
from docextract.extraction.page_processor import PageProcessor
from docextract.extraction.prompt_builder import PageContext, PromptBuilder
from docextract.extraction.schema import ExpectedSchema

__all__ = ["ExpectedSchema", "PageContext", "PageProcessor", "PromptBuilder", "ResultMerger"]
