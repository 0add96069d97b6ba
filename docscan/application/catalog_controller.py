from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Iterable, Sequence

from PIL.Image import Image

from docscan.application.capture_session import CaptureSession
from docscan.domain.capture import (
    CaptureCancelled,
    CaptureCompleted,
    CaptureFailed,
    CaptureOutcome,
    CaptureState,
)
from docscan.domain.errors import DuplicateIdError, EncodingRejected, StoreWriteFailed
from docscan.domain.models import Document, ExportedDocument, export_document, utc_now
from docscan.ports.capture_surface_port import CaptureSurfacePort
from docscan.ports.document_counter_port import DocumentCounterPort
from docscan.ports.document_store_port import DocumentStorePort
from docscan.ports.pdf_codec_port import PdfCodecPort, PdfHandle
from docscan.ports.trace_log_port import TraceLogPort


ALERT_MESSAGE = 'Failed to scan document'


class CatalogState(str, Enum):
    IDLE = 'idle'
    CAPTURING = 'capturing'
    COMMITTING = 'committing'
    REJECTED = 'rejected'


@dataclass(frozen=True)
class CaptureReport:
    capture_state: CaptureState
    document: Document | None
    alert_raised: bool
    transitions: tuple[CatalogState, ...]


class DocumentCatalogController:
    """Turns capture outcomes into stored documents and serves the catalog."""

    def __init__(
        self,
        *,
        store: DocumentStorePort,
        pdf_codec: PdfCodecPort,
        counter: DocumentCounterPort,
        trace_logger: TraceLogPort | None = None,
        clock: Callable[[], datetime] = utc_now,
        preview_scale: float = 2.0,
    ) -> None:
        self._store = store
        self._pdf_codec = pdf_codec
        self._counter = counter
        self._trace_logger = trace_logger
        self._clock = clock
        self._preview_scale = preview_scale

        self._state = CatalogState.IDLE
        self._transitions: list[CatalogState] = []
        self._committed: Document | None = None
        self._alert_raised = False
        self.show_alert = False
        self.alerts_raised = 0

    @property
    def state(self) -> CatalogState:
        return self._state

    @property
    def alert_message(self) -> str | None:
        return ALERT_MESSAGE if self.show_alert else None

    def dismiss_alert(self) -> None:
        self.show_alert = False

    def request_capture(self, surface: CaptureSurfacePort) -> CaptureReport:
        if self._state is not CatalogState.IDLE:
            raise RuntimeError(f'Capture requested while catalog is {self._state.value}')

        self._transitions = []
        self._committed = None
        self._alert_raised = False
        self._set_state(CatalogState.CAPTURING)

        session = CaptureSession(surface)
        try:
            session.begin(self._on_capture_outcome)
        except Exception as exc:
            # never leave the catalog stuck mid-request
            if self._state is CatalogState.IDLE:
                self._trace('capture_surface_error', error=exc)
            else:
                self._reject('commit_failed', exc)

        return CaptureReport(
            capture_state=session.state,
            document=self._committed,
            alert_raised=self._alert_raised,
            transitions=tuple(self._transitions),
        )

    def _on_capture_outcome(self, outcome: CaptureOutcome) -> None:
        if isinstance(outcome, CaptureCompleted):
            self._commit(outcome.images)
        elif isinstance(outcome, CaptureCancelled):
            self._set_state(CatalogState.IDLE)
        elif isinstance(outcome, CaptureFailed):
            self._reject('capture_failed', outcome.error)

    def _commit(self, images: Sequence[Image]) -> None:
        self._set_state(CatalogState.COMMITTING)
        try:
            number = self._counter.current()
            content = self._pdf_codec.encode_pages(images)
            doc = Document.new(f'Document {number}', content, self._clock())
            self._store.insert(doc)
        except (EncodingRejected, StoreWriteFailed, DuplicateIdError) as exc:
            self._reject('commit_failed', exc, page_count=len(images))
            return

        try:
            self._counter.advance()
        except StoreWriteFailed as exc:
            # the document is already durable; only the next default name is affected
            self._trace('counter_advance_failed', error=exc, doc_id=doc.id)

        self._committed = doc
        self._trace('document_committed', doc_id=doc.id, name=doc.name, page_count=len(images))
        self._set_state(CatalogState.IDLE)

    def _reject(self, event: str, error: BaseException, **context: Any) -> None:
        self._set_state(CatalogState.REJECTED)
        self._trace(event, error=error, **context)
        self.show_alert = True
        self.alerts_raised += 1
        self._alert_raised = True
        self._set_state(CatalogState.IDLE)

    def _set_state(self, state: CatalogState) -> None:
        self._state = state
        self._transitions.append(state)

    def _trace(self, event: str, error: BaseException | None = None, **context: Any) -> None:
        if self._trace_logger is None:
            return
        payload: dict[str, Any] = {'event': event, **context}
        if error is not None:
            payload['error_type'] = type(error).__name__
            payload['error'] = str(error)
            if error.__cause__ is not None:
                payload['cause'] = repr(error.__cause__)
        self._trace_logger.log(payload)

    def documents(self) -> Iterable[Document]:
        return self._store.list_all()

    def rename(self, doc_id: str, name: str) -> bool:
        try:
            self._store.rename(doc_id, name)
        except StoreWriteFailed as exc:
            self._trace('rename_failed', error=exc, doc_id=doc_id)
            return False
        return True

    def delete(self, doc_id: str) -> bool:
        try:
            self._store.delete(doc_id)
        except StoreWriteFailed as exc:
            self._trace('delete_failed', error=exc, doc_id=doc_id)
            return False
        return True

    def get(self, doc_id: str) -> Document | None:
        return self._store.get(doc_id)

    def _handle(self, doc_id: str) -> PdfHandle | None:
        doc = self._store.get(doc_id)
        if doc is None:
            return None
        return self._pdf_codec.decode(doc.content)

    def page_count(self, doc_id: str) -> int | None:
        handle = self._handle(doc_id)
        return handle.page_count if handle is not None else None

    def thumbnail(self, doc_id: str) -> Image | None:
        handle = self._handle(doc_id)
        if handle is None:
            return None
        return self._pdf_codec.thumbnail(handle)

    def preview_page(self, doc_id: str, page_index: int, scale: float | None = None) -> Image | None:
        handle = self._handle(doc_id)
        if handle is None:
            return None
        return self._pdf_codec.render_page(handle, page_index, scale or self._preview_scale)

    def export_document(self, doc_id: str) -> ExportedDocument | None:
        doc = self._store.get(doc_id)
        if doc is None:
            return None
        return export_document(doc)

    def import_document(self, data: bytes) -> Document:
        doc = Document.imported(data, self._clock())
        self._store.insert(doc)
        self._trace('document_imported', doc_id=doc.id, size_bytes=doc.size_bytes)
        return doc
