from __future__ import annotations

from docscan.domain.capture import CaptureCancelled, CaptureOutcome
from docscan.ports.capture_surface_port import CaptureSurfacePort


class NoopCaptureSurfaceAdapter(CaptureSurfacePort):
    def present(self) -> CaptureOutcome:
        return CaptureCancelled()
