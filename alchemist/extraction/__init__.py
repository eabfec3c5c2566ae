from alchemist.extraction.client_base import BaseGenerationClient
from alchemist.extraction.extractor import StructuredExtractor
from alchemist.extraction.factory import ClientFactory

__all__ = ["BaseGenerationClient", "ClientFactory", "StructuredExtractor"]
