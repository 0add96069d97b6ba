from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from docscan.domain.models import Document


class DocumentStorePort(ABC):
    @abstractmethod
    def insert(self, doc: Document) -> None:
        raise NotImplementedError

    @abstractmethod
    def rename(self, doc_id: str, new_name: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, doc_id: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> Iterable[Document]:
        """Newest first; iterating again re-reads the store."""
        raise NotImplementedError

    @abstractmethod
    def get(self, doc_id: str) -> Document | None:
        raise NotImplementedError
