"""Error taxonomy for content generation."""

from __future__ import annotations

from ca_rewriter.domain.shared.services import DomainServiceError

REGENERATION_FAILED_MESSAGE = "Failed to regenerate question."


class ConfigurationError(DomainServiceError):
    """Raised when credentials are missing. Always raised before any network call."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "CONFIGURATION_ERROR")


class GenerationError(DomainServiceError):
    """Base class for failures of a single generation call."""


class EmptyResponseError(GenerationError):
    """The service answered without a text body."""

    def __init__(self, message: str = "Empty response from Gemini.") -> None:
        super().__init__(message, "EMPTY_RESPONSE")


class ParseError(GenerationError):
    """The response text is not valid JSON or lacks the expected shape."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "PARSE_ERROR")


class ServiceError(GenerationError):
    """Network or service-level failure. Carries the underlying message."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "SERVICE_ERROR")


class RegenerationError(GenerationError):
    """Single question regeneration failed.

    The message is fixed; the cause is only available through ``__cause__``.
    """

    def __init__(self) -> None:
        super().__init__(REGENERATION_FAILED_MESSAGE, "REGENERATION_FAILED")
