"""Concurrent per-unit translation of spreadsheet sheets."""

import asyncio
import json
from collections.abc import Mapping
from pathlib import Path

from alchemist.extraction.client_base import BaseGenerationClient
from alchemist.extraction.exceptions import GenerationError
from alchemist.extraction.prompt_loader import load_json_schema, load_prompt_template
from alchemist.extraction.validator import build_matrix, parse_json_object
from alchemist.logging.logger import Log
from alchemist.results.models import Matrix
from alchemist.translation.exceptions import TranslationFailedError
from alchemist.translation.models import UnitFailure, UnitOutcome, UnitSuccess

TRANSLATED_FIELD = "translatedData"


class TranslationEngine:
    """Translates every non-empty unit with its own request, all at once.

    The batch waits for every request to settle. A failed or malformed unit
    is logged and dropped; it never cancels or fails its siblings. Surviving
    units are renamed "unit 1", "unit 2", ... in submission order.
    """

    UNIT_NAME_TEMPLATE = "unit {index}"

    def __init__(
        self,
        *,
        client: BaseGenerationClient,
        model: str,
        temperature: float = 0.0,
        max_concurrency: int = 0,
        prompt_dir: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = temperature
        self._max_concurrency = max(0, max_concurrency)
        self._prompt_template = load_prompt_template("unit_translation_prompt.txt", prompt_dir)
        self._json_schema = load_json_schema("unit_translation_schema.json", prompt_dir)

    async def translate_units(
        self, units: Mapping[str, Matrix], target: str
    ) -> dict[str, Matrix]:
        """Translate all units and return the renamed successful ones.

        An empty mapping is a valid outcome (every unit empty or failed).
        """
        outcomes = await self.collect_outcomes(units, target)
        translated: dict[str, Matrix] = {}
        for outcome in outcomes:
            if isinstance(outcome, UnitSuccess):
                name = self.UNIT_NAME_TEMPLATE.format(index=len(translated) + 1)
                translated[name] = outcome.matrix
        Log.info(
            f"Translation to {target} complete: {len(translated)} of "
            f"{len(outcomes)} submitted units succeeded"
        )
        return translated

    async def collect_outcomes(
        self, units: Mapping[str, Matrix], target: str
    ) -> list[UnitOutcome]:
        """Run the batch and return one outcome per submitted unit, in submission order.

        Units with zero rows are not submitted and produce no outcome.
        """
        if not target:
            raise ValueError("A target language is required for translation")

        submitted = [(name, matrix) for name, matrix in units.items() if matrix]
        skipped = len(units) - len(submitted)
        if skipped:
            Log.info(f"Skipping {skipped} empty unit(s)")
        if not submitted:
            return []

        semaphore = asyncio.Semaphore(self._max_concurrency) if self._max_concurrency else None
        settled = await asyncio.gather(
            *(self._translate_unit(matrix, target, semaphore) for _, matrix in submitted),
            return_exceptions=True,
        )

        outcomes: list[UnitOutcome] = []
        for (name, _), result in zip(submitted, settled):
            if isinstance(result, BaseException):
                Log.failure(f"Unit '{name}' failed to translate", result)
                outcomes.append(UnitFailure(name=name, cause=result))
            else:
                outcomes.append(UnitSuccess(name=name, matrix=result))
        return outcomes

    async def _translate_unit(
        self,
        matrix: Matrix,
        target: str,
        semaphore: asyncio.Semaphore | None,
    ) -> Matrix:
        prompt = self._prompt_template.format(
            target_language=target,
            data=json.dumps(matrix, ensure_ascii=False),
        )
        if semaphore is None:
            raw_response = await self._call_ai(prompt)
        else:
            async with semaphore:
                raw_response = await self._call_ai(prompt)
        Log.debug(f"AI raw translation response:\n{raw_response}")
        return build_matrix(parse_json_object(raw_response), TRANSLATED_FIELD)

    async def _call_ai(self, prompt: str) -> str:
        try:
            return await self._client.generate_content(
                model=self._model,
                temperature=self._temperature,
                prompt=prompt,
                json_schema=self._json_schema,
            )
        except GenerationError as exc:
            raise TranslationFailedError(str(exc)) from exc
