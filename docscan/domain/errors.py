from __future__ import annotations


class DocscanError(Exception):
    pass


class DuplicateIdError(DocscanError, ValueError):
    def __init__(self, doc_id: str) -> None:
        super().__init__(f'Document id already stored: {doc_id}')
        self.doc_id = doc_id


class EncodingRejected(DocscanError):
    """Captured pages could not be turned into a PDF."""


class StoreWriteFailed(DocscanError):
    """The document store could not durably commit a mutation."""


class CaptureSessionReused(DocscanError, RuntimeError):
    pass
