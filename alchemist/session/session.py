import datetime

from alchemist.config.settings import Settings
from alchemist.documents.classifier import classify
from alchemist.documents.exceptions import NoDocumentError, UnsupportedDocumentError
from alchemist.documents.models import DocumentKind, RawDocument
from alchemist.export.models import ExportArtifact
from alchemist.export.serializer import WORD_MEDIA_TYPE, ExportSerializer, export_filename
from alchemist.extraction.exceptions import MissingCredentialError
from alchemist.extraction.extractor import StructuredExtractor
from alchemist.extraction.factory import ClientFactory
from alchemist.logging.logger import Log
from alchemist.results.models import (
    NoResult,
    ResultModel,
    TabularResult,
    TextResult,
    normalize_target,
)
from alchemist.session.exceptions import OperationSupersededError
from alchemist.tabular.base import BaseTabularCodec
from alchemist.tabular.openpyxl_adapter import OpenpyxlCodec
from alchemist.translation.engine import TranslationEngine

SPREADSHEET_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

_AI_EXTRACTABLE_KINDS = frozenset({
    DocumentKind.IMAGE,
    DocumentKind.PDF,
    DocumentKind.WORD_DOCUMENT,
})


class Session:
    """Explicit per-user context: one uploaded document and its current result.

    Flows: upload -> (extract_tabular | extract_text | view_spreadsheet)
    -> download_spreadsheet / download_word.

    Each operation gets an id when it starts. A result is written only if no
    newer operation, upload or reset has begun in the meantime; on failure
    the previous result is kept.

    Starting an operation does not clear the current result: it stays
    visible and downloadable until the new operation commits its own.
    """

    def __init__(
        self,
        *,
        codec: BaseTabularCodec,
        serializer: ExportSerializer,
        extractor: StructuredExtractor | None = None,
        translator: TranslationEngine | None = None,
    ) -> None:
        self._codec = codec
        self._serializer = serializer
        self._extractor = extractor
        self._translator = translator
        self._document: RawDocument | None = None
        self._kind: DocumentKind | None = None
        self._target: str | None = None
        self._result: ResultModel = NoResult()
        self._operation_id = 0

    @property
    def document(self) -> RawDocument | None:
        return self._document

    @property
    def kind(self) -> DocumentKind | None:
        return self._kind

    @property
    def target(self) -> str | None:
        return self._target

    @property
    def result(self) -> ResultModel:
        return self._result

    @property
    def has_credential(self) -> bool:
        return self._extractor is not None

    def upload(self, document: RawDocument) -> DocumentKind:
        """Replace the current document and drop any previous result.

        Raises:
            UnsupportedDocumentError: if the document cannot be processed; the
                session is then left without a document.
        """
        self._operation_id += 1
        self._result = NoResult()
        kind = classify(document.media_type, document.filename)
        if kind is DocumentKind.UNSUPPORTED:
            self._document = None
            self._kind = None
            raise UnsupportedDocumentError(
                "Unsupported file type. Please upload an image, Excel, Word, or PDF file."
            )
        self._document = document
        self._kind = kind
        Log.info(f"Uploaded {document.filename} ({document.size_bytes} bytes) as {kind.value}")
        return kind

    def reset(self) -> None:
        """Forget the document, the result and the translation target."""
        self._operation_id += 1
        self._document = None
        self._kind = None
        self._target = None
        self._result = NoResult()

    def set_translation_target(self, target: str | None) -> None:
        self._target = normalize_target(target)

    async def extract_tabular(self) -> TabularResult:
        """AI extraction of rows and columns (with translation when a target is set)."""
        document = self._require_document(_AI_EXTRACTABLE_KINDS)
        extractor = self._require_extractor()
        operation_id = self._begin_operation()
        try:
            result = await extractor.extract_tabular(document, self._target)
        except Exception as exc:
            Log.error(f"Tabular extraction of {document.filename} failed: {exc}")
            raise
        self._commit(operation_id, result)
        return result

    async def extract_text(self) -> TextResult:
        """AI extraction of layout-preserving text (with translation when a target is set)."""
        document = self._require_document(_AI_EXTRACTABLE_KINDS)
        extractor = self._require_extractor()
        operation_id = self._begin_operation()
        try:
            result = await extractor.extract_text(document, self._target)
        except Exception as exc:
            Log.error(f"Text extraction of {document.filename} failed: {exc}")
            raise
        self._commit(operation_id, result)
        return result

    async def view_spreadsheet(self) -> TabularResult:
        """Read every sheet natively; translate them per sheet when a target is set.

        Without a target no AI is involved and no credential is needed.
        """
        document = self._require_document(frozenset({DocumentKind.SPREADSHEET}))
        target = self._target
        translator = self._require_translator() if target is not None else None
        operation_id = self._begin_operation()
        try:
            sheets = self._codec.decode(document.content)
            Log.info(f"Decoded {len(sheets)} sheet(s) from {document.filename}")
            if translator is None or target is None:
                result = TabularResult(units=sheets)
            else:
                result = TabularResult(units=await translator.translate_units(sheets, target))
        except Exception as exc:
            Log.error(f"Spreadsheet processing of {document.filename} failed: {exc}")
            raise
        self._commit(operation_id, result)
        return result

    def download_spreadsheet(
        self, now: datetime.datetime | None = None
    ) -> ExportArtifact | None:
        """Export the tabular result as .xlsx; None when there is nothing to export."""
        if not isinstance(self._result, TabularResult):
            return None
        data = self._serializer.to_spreadsheet_bytes(self._result)
        if data is None:
            return None
        return ExportArtifact(
            filename=export_filename("xlsx", now),
            media_type=SPREADSHEET_MEDIA_TYPE,
            data=data,
        )

    def download_word(self, now: datetime.datetime | None = None) -> ExportArtifact | None:
        """Export the current result as a .doc HTML document; None when empty."""
        data = self._serializer.to_word_bytes(self._result)
        if data is None:
            return None
        return ExportArtifact(
            filename=export_filename("doc", now),
            media_type=WORD_MEDIA_TYPE,
            data=data,
        )

    def _require_document(self, kinds: frozenset[DocumentKind]) -> RawDocument:
        if self._document is None or self._kind is None:
            raise NoDocumentError("Please upload a file first.")
        if self._kind not in kinds:
            allowed = ", ".join(sorted(kind.value for kind in kinds))
            raise UnsupportedDocumentError(
                f"This operation does not apply to {self._kind.value} documents "
                f"(expected: {allowed})"
            )
        return self._document

    def _require_extractor(self) -> StructuredExtractor:
        if self._extractor is None:
            raise MissingCredentialError("Please set your API key first.")
        return self._extractor

    def _require_translator(self) -> TranslationEngine:
        if self._translator is None:
            raise MissingCredentialError(
                "Please set your API key to use the translation feature."
            )
        return self._translator

    def _begin_operation(self) -> int:
        self._operation_id += 1
        return self._operation_id

    def _commit(self, operation_id: int, result: ResultModel) -> None:
        if operation_id != self._operation_id:
            Log.warning(f"Discarding result of superseded operation {operation_id}")
            raise OperationSupersededError(
                f"Operation {operation_id} was superseded by operation {self._operation_id}"
            )
        self._result = result


def build_session(settings: Settings, api_key: str | None = None) -> Session:
    """Build a Session with all adapters wired from settings.

    Without a usable credential the session still reads spreadsheets
    natively; AI operations raise MissingCredentialError.
    """
    codec = OpenpyxlCodec()
    serializer = ExportSerializer(codec)
    try:
        client = ClientFactory.create(settings, api_key=api_key)
    except MissingCredentialError as exc:
        Log.warning(f"AI operations disabled: {exc}")
        return Session(codec=codec, serializer=serializer)

    model = ClientFactory.resolve_model_name(settings)
    extractor = StructuredExtractor(
        client=client,
        model=model,
        temperature=settings.ai_temperature,
    )
    translator = TranslationEngine(
        client=client,
        model=model,
        temperature=settings.ai_temperature,
        max_concurrency=settings.translation_max_concurrency,
    )
    return Session(
        codec=codec,
        serializer=serializer,
        extractor=extractor,
        translator=translator,
    )
