import base64

import httpx
import openai

from alchemist.documents.models import RawDocument
from alchemist.extraction.client_base import BaseGenerationClient
from alchemist.extraction.exceptions import GenerationError, GenerationNetworkError


class OpenAIClientAdapter(BaseGenerationClient):
    """Generation client built on the OpenAI-compatible chat completions API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
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
        request: dict[str, object] = {
            "model": model,
            "temperature": temperature,
            "messages": [{"role": "user", "content": self._build_content(prompt, document)}],
        }
        if json_schema is not None:
            request["response_format"] = {
                "type": "json_schema",
                "json_schema": {
                    "name": "structured_result",
                    "strict": True,
                    "schema": json_schema,
                },
            }
        try:
            response = await self._client.chat.completions.create(**request)
        except (openai.APIConnectionError, httpx.TransportError) as exc:
            raise GenerationNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise GenerationNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise GenerationError("AI returned no choices")
        content = response.choices[0].message.content
        if not content:
            raise GenerationError("AI returned empty response")
        return content

    @staticmethod
    def _build_content(prompt: str, document: RawDocument | None) -> list[dict[str, object]]:
        parts: list[dict[str, object]] = []
        if document is not None:
            encoded = base64.b64encode(document.content).decode("ascii")
            data_url = f"data:{document.media_type};base64,{encoded}"
            if document.media_type.startswith("image/"):
                parts.append({"type": "image_url", "image_url": {"url": data_url}})
            else:
                parts.append({
                    "type": "file",
                    "file": {"filename": document.filename, "file_data": data_url},
                })
        parts.append({"type": "text", "text": prompt})
        return parts
