from dataclasses import dataclass
from enum import Enum


class DocumentKind(str, Enum):
    """Closed set of document kinds an upload can be classified as."""

    IMAGE = "image"
    SPREADSHEET = "spreadsheet"
    WORD_DOCUMENT = "word_document"
    PDF = "pdf"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class RawDocument:
    """An uploaded file: payload plus the metadata it was declared with."""

    content: bytes
    media_type: str
    filename: str

    @property
    def size_bytes(self) -> int:
        return len(self.content)
