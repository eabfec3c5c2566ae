"""Example generation client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseGenerationClient and register the provider in ClientFactory.
"""

import json
from typing import ClassVar

from alchemist.documents.models import RawDocument
from alchemist.extraction.client_base import BaseGenerationClient


class ExampleClientAdapter(BaseGenerationClient):
    """Example adapter that answers every request with fixed content.

    No network calls. Schema-constrained requests get DEFAULT_ROWS under each
    required field of the schema; free-text requests get DEFAULT_TEXT.
    """

    DEFAULT_ROWS: ClassVar[list[list[str]]] = [
        ["Column A", "Column B"],
        ["example", "value"],
    ]
    DEFAULT_TEXT: ClassVar[str] = "Example heading\n\nExample paragraph."

    async def generate_content(
        self,
        *,
        model: str,
        temperature: float,
        prompt: str,
        document: RawDocument | None = None,
        json_schema: dict[str, object] | None = None,
    ) -> str:
        _ = model, temperature, prompt, document
        if json_schema is None:
            return self.DEFAULT_TEXT
        required = json_schema.get("required", [])
        fields = required if isinstance(required, list) else []
        return json.dumps({name: self.DEFAULT_ROWS for name in fields})
