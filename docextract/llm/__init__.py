from docextract.llm.client_base import BaseLLMClient
from docextract.llm.factory import LLMClientFactory

__all__ = ["BaseLLMClient", "LLMClientFactory"]
