class LLMError(Exception):
    """Base exception for inference failures."""


class LLMTransportError(LLMError):
    """Raised on network errors, timeouts or non-2xx replies from the inference endpoint."""


class LLMUnavailableError(LLMError):
    """Raised when the inference endpoint answered but returned no usable text."""
