from __future__ import annotations

import io
from typing import Sequence

from PIL import Image

from docscan.domain.capture import CaptureCancelled, CaptureCompleted, CaptureFailed, CaptureOutcome
from docscan.ports.capture_surface_port import CaptureSurfacePort


class UploadedImagesCaptureSurfaceAdapter(CaptureSurfacePort):
    def __init__(self, blobs: Sequence[bytes]) -> None:
        self._blobs = [blob for blob in blobs if blob]
        self.dismissed = False

    def present(self) -> CaptureOutcome:
        if not self._blobs:
            return CaptureCancelled()

        pages: list[Image.Image] = []
        for blob in self._blobs:
            try:
                image = Image.open(io.BytesIO(blob))
                image.load()
            except (OSError, ValueError) as exc:
                return CaptureFailed(error=exc)
            pages.append(image)
        return CaptureCompleted(images=tuple(pages))

    def dismiss(self) -> None:
        self.dismissed = True
