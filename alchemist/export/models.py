from dataclasses import dataclass


@dataclass(frozen=True)
class ExportArtifact:
    """A generated download: file name, media type and bytes."""

    filename: str
    media_type: str
    data: bytes
