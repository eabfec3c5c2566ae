class DocumentError(Exception):
    """Base exception for document intake errors."""


class UnsupportedDocumentError(DocumentError):
    """Raised when a document kind has no extraction path."""


class NoDocumentError(DocumentError):
    """Raised when an operation needs an uploaded document and there is none."""
