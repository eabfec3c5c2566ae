class GenerationError(Exception):
    """Raised when the AI provider returns no usable content."""


class GenerationNetworkError(GenerationError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""


class MissingCredentialError(Exception):
    """Raised when an AI operation is attempted without a configured API key."""


class ExtractionError(Exception):
    """Base exception for structured extraction failures."""


class InvalidResponseError(ExtractionError):
    """Raised when an AI response does not match the requested schema."""


class ExtractionFailedError(ExtractionError):
    """Raised when the provider call behind an extraction fails."""
