from alchemist.config.settings import Settings
from alchemist.extraction.client_base import BaseGenerationClient
from alchemist.extraction.example_client_adapter import ExampleClientAdapter
from alchemist.extraction.exceptions import MissingCredentialError
from alchemist.extraction.gemini_client_adapter import GeminiClientAdapter
from alchemist.extraction.openai_client_adapter import OpenAIClientAdapter

SUPPORTED_PROVIDERS = ("example", "gemini", "openai", "openai_compatible")


class ClientFactory:
    """Creates the configured generation client."""

    @classmethod
    def create(cls, settings: Settings, api_key: str | None = None) -> BaseGenerationClient:
        """Create a client for ``settings.ai_provider``.

        An explicit ``api_key`` (e.g. collected from the user for this session)
        takes precedence over the key in settings.

        Raises:
            MissingCredentialError: if a networked provider has no API key.
            ValueError: for an unknown provider.
        """
        provider = cls._provider(settings)
        if provider == "example":
            return ExampleClientAdapter()

        key = (api_key or cls._resolve_api_key(provider, settings)).strip()
        if not key:
            raise MissingCredentialError(
                f"An API key is required for ai_provider={provider}"
            )
        if provider == "gemini":
            return GeminiClientAdapter(
                api_key=key,
                timeout_seconds=settings.gemini_timeout_seconds,
            )
        return OpenAIClientAdapter(
            api_key=key,
            timeout_seconds=settings.openai_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
        )

    @classmethod
    def resolve_model_name(cls, settings: Settings) -> str:
        provider = cls._provider(settings)
        if provider == "example":
            return "example"
        if provider == "gemini":
            return settings.gemini_model_name
        return settings.openai_model_name

    @classmethod
    def _provider(cls, settings: Settings) -> str:
        provider = settings.ai_provider.lower()
        if provider not in SUPPORTED_PROVIDERS:
            raise ValueError(
                f"Unknown AI provider '{provider}'. Choose from: {list(SUPPORTED_PROVIDERS)}"
            )
        return provider

    @classmethod
    def _resolve_api_key(cls, provider: str, settings: Settings) -> str:
        if provider == "gemini":
            return settings.gemini_api_key
        return settings.openai_api_key

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        url = settings.openai_compatible_base_url.strip()
        if not url:
            raise ValueError(
                "openai_compatible_base_url is required for ai_provider=openai_compatible"
            )
        return url
