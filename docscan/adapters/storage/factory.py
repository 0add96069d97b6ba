from __future__ import annotations

from pathlib import Path

from docscan.adapters.storage.filesystem_document_store_adapter import FilesystemDocumentStoreAdapter
from docscan.adapters.storage.observable_document_store import ObservableDocumentStore
from docscan.adapters.storage.sqlalchemy_document_store_adapter import SqlAlchemyDocumentStoreAdapter
from docscan.ports.document_store_port import DocumentStorePort


def create_document_store(
    *,
    backend: str,
    database_url: str,
    documents_dir: Path,
) -> ObservableDocumentStore:
    normalized = backend.strip().lower()
    inner: DocumentStorePort
    if normalized in {'sqlite', 'sql', 'sqlalchemy'}:
        inner = SqlAlchemyDocumentStoreAdapter(database_url)
    elif normalized == 'filesystem':
        inner = FilesystemDocumentStoreAdapter(documents_dir)
    else:
        raise ValueError(f'Unsupported document store: {backend}')
    return ObservableDocumentStore(inner)
