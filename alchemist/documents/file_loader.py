import mimetypes
from pathlib import Path

from alchemist.documents.models import RawDocument

# Not every platform's mimetypes table knows the OOXML types.
_KNOWN_MEDIA_TYPES: dict[str, str] = {
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".xls": "application/vnd.ms-excel",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".doc": "application/msword",
    ".pdf": "application/pdf",
}


def guess_media_type(path: Path) -> str:
    """Best-effort media type for a file name; empty string when unknown."""
    suffix = path.suffix.lower()
    if suffix in _KNOWN_MEDIA_TYPES:
        return _KNOWN_MEDIA_TYPES[suffix]
    guessed, _ = mimetypes.guess_type(path.name)
    return guessed or ""


class FileLoader:
    """Reads a local file into a RawDocument."""

    def load(self, path: Path, media_type: str | None = None) -> RawDocument:
        """Read file bytes and attach the declared or guessed media type.

        Raises:
            FileNotFoundError: if the path does not point to a file.
        """
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        return RawDocument(
            content=path.read_bytes(),
            media_type=media_type if media_type is not None else guess_media_type(path),
            filename=path.name,
        )
