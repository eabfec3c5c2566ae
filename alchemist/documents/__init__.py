from alchemist.documents.classifier import classify
from alchemist.documents.file_loader import FileLoader
from alchemist.documents.models import DocumentKind, RawDocument

__all__ = ["DocumentKind", "FileLoader", "RawDocument", "classify"]
