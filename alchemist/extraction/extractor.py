"""AI-powered structured extraction of uploaded documents."""

from pathlib import Path

from alchemist.documents.models import RawDocument
from alchemist.extraction.client_base import BaseGenerationClient
from alchemist.extraction.exceptions import ExtractionFailedError, GenerationError
from alchemist.extraction.prompt_loader import load_json_schema, load_prompt_template
from alchemist.extraction.validator import build_matrix, parse_json_object
from alchemist.logging.logger import Log
from alchemist.results.models import EXTRACTED_UNIT_NAME, TabularResult, TextResult

TABULAR_FIELD = "data"


class StructuredExtractor:
    """Extracts a document's content in one model round trip.

    When a translation target is given, the translation instruction is folded
    into the same request as the extraction.
    """

    def __init__(
        self,
        *,
        client: BaseGenerationClient,
        model: str,
        temperature: float = 0.0,
        prompt_dir: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = temperature
        self._tabular_prompt = load_prompt_template("tabular_prompt.txt", prompt_dir)
        self._tabular_suffix = load_prompt_template("tabular_translate_suffix.txt", prompt_dir)
        self._text_prompt = load_prompt_template("text_prompt.txt", prompt_dir)
        self._text_suffix = load_prompt_template("text_translate_suffix.txt", prompt_dir)
        self._tabular_schema = load_json_schema("tabular_schema.json", prompt_dir)

    async def extract_tabular(
        self, document: RawDocument, target: str | None = None
    ) -> TabularResult:
        """Extract rows and columns as a single "Extracted Data" unit.

        Raises:
            InvalidResponseError: if the response is not ``{"data": [[...]]}``.
            ExtractionFailedError: if the provider call fails.
        """
        prompt = self._with_translation(self._tabular_prompt, self._tabular_suffix, target)
        Log.debug(f"Tabular extraction prompt for {document.filename}:\n{prompt}")

        raw_response = await self._call_ai(prompt, document, self._tabular_schema)
        Log.debug(f"AI raw response:\n{raw_response}")

        matrix = build_matrix(parse_json_object(raw_response), TABULAR_FIELD)
        Log.info(f"Tabular extraction complete: {len(matrix)} rows from {document.filename}")
        return TabularResult(units={EXTRACTED_UNIT_NAME: matrix})

    async def extract_text(
        self, document: RawDocument, target: str | None = None
    ) -> TextResult:
        """Extract all content as one layout-preserving block of text.

        Raises:
            ExtractionFailedError: if the provider call fails or returns nothing.
        """
        prompt = self._with_translation(self._text_prompt, self._text_suffix, target)
        Log.debug(f"Text extraction prompt for {document.filename}:\n{prompt}")

        text = await self._call_ai(prompt, document, None)
        Log.info(f"Text extraction complete: {len(text)} chars from {document.filename}")
        return TextResult(text=text)

    async def _call_ai(
        self,
        prompt: str,
        document: RawDocument,
        json_schema: dict[str, object] | None,
    ) -> str:
        try:
            return await self._client.generate_content(
                model=self._model,
                temperature=self._temperature,
                prompt=prompt,
                document=document,
                json_schema=json_schema,
            )
        except GenerationError as exc:
            raise ExtractionFailedError(str(exc)) from exc

    @staticmethod
    def _with_translation(prompt: str, suffix: str, target: str | None) -> str:
        if target is None:
            return prompt
        return f"{prompt} {suffix.format(target_language=target)}"
