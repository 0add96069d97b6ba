from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from datetime import UTC, datetime


PDF_CONTENT_TYPE = 'application/pdf'


def new_document_id() -> str:
    return uuid.uuid4().hex


def utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class Document:
    id: str
    name: str
    date_created: datetime
    content: bytes

    @classmethod
    def new(cls, name: str, content: bytes, date_created: datetime | None = None) -> Document:
        return cls(
            id=new_document_id(),
            name=name,
            date_created=date_created or utc_now(),
            content=content,
        )

    @classmethod
    def imported(cls, content: bytes, date_created: datetime | None = None) -> Document:
        return cls.new(f'Imported Document {uuid.uuid4()}', content, date_created)

    def renamed(self, new_name: str) -> Document:
        return replace(self, name=new_name)

    @property
    def size_bytes(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class ExportedDocument:
    suggested_filename: str
    data: bytes
    content_type: str = PDF_CONTENT_TYPE

    @property
    def filename(self) -> str:
        if self.suggested_filename.lower().endswith('.pdf'):
            return self.suggested_filename
        return f'{self.suggested_filename}.pdf'


def export_document(doc: Document) -> ExportedDocument:
    return ExportedDocument(suggested_filename=doc.name, data=doc.content)
