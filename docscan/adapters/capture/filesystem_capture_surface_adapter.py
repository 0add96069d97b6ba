from __future__ import annotations

from pathlib import Path
from typing import Sequence

from PIL import Image

from docscan.domain.capture import CaptureCancelled, CaptureCompleted, CaptureFailed, CaptureOutcome
from docscan.ports.capture_surface_port import CaptureSurfacePort


class FilesystemCaptureSurfaceAdapter(CaptureSurfacePort):
    """Treats a list of image files as one scan, in the order given."""

    def __init__(self, image_paths: Sequence[Path]) -> None:
        self._image_paths = list(image_paths)
        self.dismissed = False

    def present(self) -> CaptureOutcome:
        if not self._image_paths:
            return CaptureCancelled()

        pages: list[Image.Image] = []
        for path in self._image_paths:
            try:
                with Image.open(path) as image:
                    image.load()
                    pages.append(image.copy())
            except (OSError, ValueError) as exc:
                return CaptureFailed(error=exc)
        return CaptureCompleted(images=tuple(pages))

    def dismiss(self) -> None:
        self.dismissed = True
