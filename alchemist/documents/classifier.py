from alchemist.documents.models import DocumentKind

PDF_MEDIA_TYPE = "application/pdf"
WORD_MEDIA_TYPES = frozenset({
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
})

_SPREADSHEET_EXTENSIONS = (".xlsx", ".xls")
_WORD_EXTENSIONS = (".doc", ".docx")


def classify(media_type: str | None, filename: str | None) -> DocumentKind:
    """Map declared media type and filename to a DocumentKind.

    Rules are checked in order and the first match wins: image media type,
    spreadsheet, PDF, word-processing document. Anything else is
    UNSUPPORTED. Never raises.
    """
    media = (media_type or "").strip().lower()
    name = (filename or "").strip().lower()

    if media.startswith("image/"):
        return DocumentKind.IMAGE
    if "sheet" in media or name.endswith(_SPREADSHEET_EXTENSIONS):
        return DocumentKind.SPREADSHEET
    if media == PDF_MEDIA_TYPE or name.endswith(".pdf"):
        return DocumentKind.PDF
    if media in WORD_MEDIA_TYPES or name.endswith(_WORD_EXTENSIONS):
        return DocumentKind.WORD_DOCUMENT
    return DocumentKind.UNSUPPORTED
