"""Tests for StructuredExtractor."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from alchemist.documents.models import RawDocument
from alchemist.extraction.exceptions import (
    ExtractionFailedError,
    GenerationError,
    GenerationNetworkError,
    InvalidResponseError,
)
from alchemist.extraction.extractor import StructuredExtractor
from alchemist.results.models import EXTRACTED_UNIT_NAME, TabularResult, TextResult


def _make_extractor(response: str | None = None, side_effect: object = None):  # type: ignore[no-untyped-def]
    client = MagicMock()
    client.generate_content = AsyncMock(return_value=response, side_effect=side_effect)
    return StructuredExtractor(client=client, model="test-model", temperature=0.2), client


class TestExtractTabular:
    @pytest.mark.asyncio
    async def test_returns_single_extracted_data_unit(self, image_document: RawDocument) -> None:
        rows = [["Item", "Qty"], ["Bolt", "4"]]
        extractor, _ = _make_extractor(json.dumps({"data": rows}))
        result = await extractor.extract_tabular(image_document)
        assert result == TabularResult(units={EXTRACTED_UNIT_NAME: rows})

    @pytest.mark.asyncio
    async def test_sends_document_schema_and_settings(self, pdf_document: RawDocument) -> None:
        extractor, client = _make_extractor('{"data": []}')
        await extractor.extract_tabular(pdf_document)
        kwargs = client.generate_content.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["temperature"] == 0.2
        assert kwargs["document"] is pdf_document
        assert kwargs["json_schema"]["required"] == ["data"]

    @pytest.mark.asyncio
    async def test_empty_data_gives_empty_unit(self, image_document: RawDocument) -> None:
        extractor, _ = _make_extractor('{"data": []}')
        result = await extractor.extract_tabular(image_document)
        assert result.units == {EXTRACTED_UNIT_NAME: []}

    @pytest.mark.asyncio
    async def test_translation_is_folded_into_one_request(self, image_document: RawDocument) -> None:
        extractor, client = _make_extractor('{"data": [["Hello"]]}')
        await extractor.extract_tabular(image_document, target="Vietnamese")
        client.generate_content.assert_awaited_once()
        prompt = client.generate_content.call_args.kwargs["prompt"]
        assert prompt.endswith("After extracting, translate all the text to Vietnamese.")

    @pytest.mark.asyncio
    async def test_no_translation_suffix_without_target(self, image_document: RawDocument) -> None:
        extractor, client = _make_extractor('{"data": []}')
        await extractor.extract_tabular(image_document)
        assert "translate" not in client.generate_content.call_args.kwargs["prompt"]

    @pytest.mark.asyncio
    async def test_missing_data_field_raises(self, image_document: RawDocument) -> None:
        extractor, _ = _make_extractor('{"notData": []}')
        with pytest.raises(InvalidResponseError, match="Missing required field"):
            await extractor.extract_tabular(image_document)

    @pytest.mark.asyncio
    async def test_non_json_response_raises(self, image_document: RawDocument) -> None:
        extractor, _ = _make_extractor("Sorry, I cannot help with that.")
        with pytest.raises(InvalidResponseError, match="Invalid JSON"):
            await extractor.extract_tabular(image_document)

    @pytest.mark.asyncio
    async def test_network_error_becomes_extraction_failure(self, image_document: RawDocument) -> None:
        extractor, _ = _make_extractor(side_effect=GenerationNetworkError("AI provider network error: down"))
        with pytest.raises(ExtractionFailedError, match="network error"):
            await extractor.extract_tabular(image_document)


class TestExtractText:
    @pytest.mark.asyncio
    async def test_returns_text_result(self, pdf_document: RawDocument) -> None:
        extractor, client = _make_extractor("Title\n\nBody line")
        result = await extractor.extract_text(pdf_document)
        assert result == TextResult(text="Title\n\nBody line")
        assert client.generate_content.call_args.kwargs["json_schema"] is None

    @pytest.mark.asyncio
    async def test_translation_suffix(self, pdf_document: RawDocument) -> None:
        extractor, client = _make_extractor("Xin chao")
        await extractor.extract_text(pdf_document, target="Vietnamese")
        prompt = client.generate_content.call_args.kwargs["prompt"]
        assert prompt.endswith("translate all the content to Vietnamese.")

    @pytest.mark.asyncio
    async def test_empty_response_becomes_extraction_failure(self, pdf_document: RawDocument) -> None:
        extractor, _ = _make_extractor(side_effect=GenerationError("AI returned empty response"))
        with pytest.raises(ExtractionFailedError, match="empty response"):
            await extractor.extract_text(pdf_document)
