from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from PIL.Image import Image


@dataclass(frozen=True)
class PdfPageBox:
    index: int
    width: float
    height: float


@dataclass(frozen=True)
class PdfHandle:
    data: bytes
    pages: tuple[PdfPageBox, ...]

    @property
    def page_count(self) -> int:
        return len(self.pages)


class PdfCodecPort(ABC):
    @abstractmethod
    def encode_pages(self, images: Sequence[Image]) -> bytes:
        raise NotImplementedError

    @abstractmethod
    def decode(self, data: bytes) -> PdfHandle | None:
        """Return None when the bytes are not a readable PDF."""
        raise NotImplementedError

    @abstractmethod
    def thumbnail(self, handle: PdfHandle) -> Image | None:
        raise NotImplementedError

    @abstractmethod
    def render_page(self, handle: PdfHandle, page_index: int, scale: float = 2.0) -> Image | None:
        raise NotImplementedError
