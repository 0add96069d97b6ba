from __future__ import annotations

from contextlib import contextmanager
from datetime import UTC, datetime
from pathlib import Path
from typing import Iterable, Iterator

from sqlalchemy import create_engine, delete, select, update
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from docscan.adapters.storage.listing import DocumentListing
from docscan.adapters.storage.sqlalchemy_models import Base, DocumentRow
from docscan.domain.errors import DuplicateIdError, StoreWriteFailed
from docscan.domain.models import Document
from docscan.ports.document_store_port import DocumentStorePort


def _to_storage(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def _from_storage(value: datetime) -> datetime:
    return value.replace(tzinfo=UTC)


def _to_document(row: DocumentRow) -> Document:
    return Document(
        id=row.id,
        name=row.name,
        date_created=_from_storage(row.date_created),
        content=bytes(row.content),
    )


def _ensure_sqlite_dir(database_url: str) -> None:
    url = make_url(database_url)
    if not url.drivername.startswith('sqlite'):
        return
    if url.database and url.database != ':memory:':
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)


class SqlAlchemyDocumentStoreAdapter(DocumentStorePort):
    def __init__(self, database_url: str) -> None:
        _ensure_sqlite_dir(database_url)
        self._engine = create_engine(database_url)
        Base.metadata.create_all(self._engine)
        self._sessions = sessionmaker(bind=self._engine, expire_on_commit=False)

    @contextmanager
    def _transaction(self, action: str) -> Iterator[Session]:
        try:
            with self._sessions.begin() as session:
                yield session
        except SQLAlchemyError as exc:
            raise StoreWriteFailed(f'Could not {action} document') from exc

    def insert(self, doc: Document) -> None:
        with self._transaction('insert') as session:
            existing = session.scalar(select(DocumentRow.seq).where(DocumentRow.id == doc.id))
            if existing is not None:
                raise DuplicateIdError(doc.id)
            session.add(
                DocumentRow(
                    id=doc.id,
                    name=doc.name,
                    date_created=_to_storage(doc.date_created),
                    content=doc.content,
                )
            )

    def rename(self, doc_id: str, new_name: str) -> None:
        if not new_name:
            return
        with self._transaction('rename') as session:
            session.execute(
                update(DocumentRow).where(DocumentRow.id == doc_id).values(name=new_name)
            )

    def delete(self, doc_id: str) -> None:
        with self._transaction('delete') as session:
            session.execute(delete(DocumentRow).where(DocumentRow.id == doc_id))

    def list_all(self) -> Iterable[Document]:
        return DocumentListing(self._load_all)

    def get(self, doc_id: str) -> Document | None:
        with self._sessions() as session:
            row = session.scalar(select(DocumentRow).where(DocumentRow.id == doc_id))
            return _to_document(row) if row is not None else None

    def _load_all(self) -> list[Document]:
        stmt = select(DocumentRow).order_by(
            DocumentRow.date_created.desc(),
            DocumentRow.seq.asc(),
        )
        with self._sessions() as session:
            return [_to_document(row) for row in session.scalars(stmt)]

    def dispose(self) -> None:
        self._engine.dispose()
