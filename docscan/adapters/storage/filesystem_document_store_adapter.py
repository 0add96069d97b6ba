from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Iterable

from docscan.adapters.atomic_files import atomic_write_bytes, atomic_write_json, read_json
from docscan.adapters.storage.listing import DocumentListing
from docscan.domain.errors import DuplicateIdError, StoreWriteFailed
from docscan.domain.models import Document
from docscan.ports.document_store_port import DocumentStorePort


class FilesystemDocumentStoreAdapter(DocumentStorePort):
    """Keeps metadata in catalog.json and each PDF under blobs/<id>.pdf."""

    def __init__(self, base_dir: Path) -> None:
        self._base_dir = base_dir
        self._catalog_path = base_dir / 'catalog.json'
        self._blobs_dir = base_dir / 'blobs'

    def _blob_path(self, doc_id: str) -> Path:
        return self._blobs_dir / f'{doc_id}.pdf'

    def _read_catalog(self) -> dict[str, Any]:
        try:
            catalog = read_json(self._catalog_path, {'next_seq': 1, 'documents': []})
            if not isinstance(catalog.get('documents'), list):
                raise ValueError('catalog has no documents list')
        except (OSError, ValueError, AttributeError) as exc:
            raise StoreWriteFailed(f'Could not read catalog: {self._catalog_path}') from exc
        return catalog

    def _write_catalog(self, catalog: dict[str, Any], action: str) -> None:
        try:
            atomic_write_json(self._catalog_path, catalog)
        except OSError as exc:
            raise StoreWriteFailed(f'Could not {action} document') from exc

    def insert(self, doc: Document) -> None:
        catalog = self._read_catalog()
        if any(row['id'] == doc.id for row in catalog['documents']):
            raise DuplicateIdError(doc.id)

        try:
            atomic_write_bytes(self._blob_path(doc.id), doc.content)
        except OSError as exc:
            raise StoreWriteFailed('Could not insert document') from exc

        seq = int(catalog['next_seq'])
        catalog['documents'].append({
            'id': doc.id,
            'name': doc.name,
            'date_created': doc.date_created.isoformat(),
            'seq': seq,
        })
        catalog['next_seq'] = seq + 1
        try:
            self._write_catalog(catalog, 'insert')
        except StoreWriteFailed:
            self._blob_path(doc.id).unlink(missing_ok=True)
            raise

    def rename(self, doc_id: str, new_name: str) -> None:
        if not new_name:
            return
        catalog = self._read_catalog()
        for row in catalog['documents']:
            if row['id'] == doc_id:
                row['name'] = new_name
                self._write_catalog(catalog, 'rename')
                return

    def delete(self, doc_id: str) -> None:
        catalog = self._read_catalog()
        remaining = [row for row in catalog['documents'] if row['id'] != doc_id]
        if len(remaining) == len(catalog['documents']):
            return

        catalog['documents'] = remaining
        self._write_catalog(catalog, 'delete')
        try:
            self._blob_path(doc_id).unlink(missing_ok=True)
        except OSError as exc:
            raise StoreWriteFailed(f'Could not remove blob for {doc_id}') from exc

    def list_all(self) -> Iterable[Document]:
        return DocumentListing(self._load_all)

    def get(self, doc_id: str) -> Document | None:
        for row in self._read_catalog()['documents']:
            if row['id'] == doc_id:
                return self._to_document(row)
        return None

    def _load_all(self) -> list[Document]:
        rows = sorted(self._read_catalog()['documents'], key=lambda row: row['seq'])
        docs = [self._to_document(row) for row in rows]
        # stable sort keeps insertion order among equal timestamps
        return sorted(docs, key=lambda doc: doc.date_created, reverse=True)

    def _to_document(self, row: dict[str, Any]) -> Document:
        blob_path = self._blob_path(row['id'])
        content = blob_path.read_bytes() if blob_path.exists() else b''
        return Document(
            id=row['id'],
            name=row['name'],
            date_created=datetime.fromisoformat(row['date_created']),
            content=content,
        )
