from __future__ import annotations

from typing import Callable, Iterator

from docscan.domain.models import Document


class DocumentListing:
    """Re-runs its loader on every iteration so each pass sees committed writes."""

    def __init__(self, load: Callable[[], list[Document]]) -> None:
        self._load = load

    def __iter__(self) -> Iterator[Document]:
        return iter(self._load())
