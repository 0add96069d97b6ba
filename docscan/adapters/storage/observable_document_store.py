from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable

from docscan.domain.models import Document
from docscan.ports.document_store_port import DocumentStorePort


@dataclass(frozen=True)
class StoreChange:
    kind: str
    doc_id: str


StoreListener = Callable[[StoreChange], None]


class ObservableDocumentStore(DocumentStorePort):
    """Notifies listeners after a mutation has been committed by the wrapped store."""

    def __init__(self, inner: DocumentStorePort) -> None:
        self._inner = inner
        self._listeners: list[StoreListener] = []

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, change: StoreChange) -> None:
        for listener in list(self._listeners):
            listener(change)

    def insert(self, doc: Document) -> None:
        self._inner.insert(doc)
        self._notify(StoreChange(kind='insert', doc_id=doc.id))

    def rename(self, doc_id: str, new_name: str) -> None:
        if not new_name or self._inner.get(doc_id) is None:
            return
        self._inner.rename(doc_id, new_name)
        self._notify(StoreChange(kind='rename', doc_id=doc_id))

    def delete(self, doc_id: str) -> None:
        if self._inner.get(doc_id) is None:
            return
        self._inner.delete(doc_id)
        self._notify(StoreChange(kind='delete', doc_id=doc_id))

    def list_all(self) -> Iterable[Document]:
        return self._inner.list_all()

    def get(self, doc_id: str) -> Document | None:
        return self._inner.get(doc_id)
