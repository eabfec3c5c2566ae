from abc import ABC, abstractmethod

from alchemist.documents.models import RawDocument


class BaseGenerationClient(ABC):
    """Contract for provider-specific generative AI clients."""

    @abstractmethod
    async def generate_content(
        self,
        *,
        model: str,
        temperature: float,
        prompt: str,
        document: RawDocument | None = None,
        json_schema: dict[str, object] | None = None,
    ) -> str:
        """Send one request and return the provider response as plain text.

        Args:
            model: Provider model name.
            temperature: Sampling temperature.
            prompt: Instruction text.
            document: Optional binary payload sent alongside the prompt.
            json_schema: When given, the response is constrained to JSON
                matching this schema.

        Raises:
            GenerationNetworkError: on transport or provider API errors.
            GenerationError: when the provider returns no content.
        """
