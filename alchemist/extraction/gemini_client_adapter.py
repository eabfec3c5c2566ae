import httpx
from google import genai
from google.genai import errors, types

from alchemist.documents.models import RawDocument
from alchemist.extraction.client_base import BaseGenerationClient
from alchemist.extraction.exceptions import GenerationError, GenerationNetworkError

_FALLBACK_MEDIA_TYPE = "application/octet-stream"


class GeminiClientAdapter(BaseGenerationClient):
    """Generation client built on the Google Gen AI SDK (async surface)."""

    def __init__(self, *, api_key: str, timeout_seconds: int) -> None:
        self._client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=timeout_seconds * 1000),
        )

    async def generate_content(
        self,
        *,
        model: str,
        temperature: float,
        prompt: str,
        document: RawDocument | None = None,
        json_schema: dict[str, object] | None = None,
    ) -> str:
        contents: list[types.Part | str] = []
        if document is not None:
            contents.append(
                types.Part.from_bytes(
                    data=document.content,
                    mime_type=document.media_type or _FALLBACK_MEDIA_TYPE,
                )
            )
        contents.append(prompt)

        if json_schema is not None:
            config = types.GenerateContentConfig(
                temperature=temperature,
                response_mime_type="application/json",
                response_schema=to_gemini_schema(json_schema),
            )
        else:
            config = types.GenerateContentConfig(temperature=temperature)

        try:
            response = await self._client.aio.models.generate_content(
                model=model,
                contents=contents,
                config=config,
            )
        except httpx.TransportError as exc:
            raise GenerationNetworkError(f"AI provider network error: {exc}") from exc
        except errors.APIError as exc:
            raise GenerationNetworkError(f"AI provider API error: {exc}") from exc

        text = response.text
        if not text:
            raise GenerationError("AI returned empty response")
        return text


def to_gemini_schema(schema: dict[str, object]) -> dict[str, object]:
    """Convert a JSON schema to the OpenAPI subset Gemini accepts.

    Type names are upper-cased and ``additionalProperties`` is dropped.
    """
    converted: dict[str, object] = {}
    for key, value in schema.items():
        if key == "additionalProperties":
            continue
        if key == "type" and isinstance(value, str):
            converted[key] = value.upper()
        elif key == "properties" and isinstance(value, dict):
            converted[key] = {name: to_gemini_schema(sub) for name, sub in value.items()}
        elif key == "items" and isinstance(value, dict):
            converted[key] = to_gemini_schema(value)
        else:
            converted[key] = value
    return converted
