from __future__ import annotations

from abc import ABC, abstractmethod

from docscan.domain.capture import CaptureOutcome


class CaptureSurfacePort(ABC):
    @abstractmethod
    def present(self) -> CaptureOutcome:
        raise NotImplementedError

    def dismiss(self) -> None:
        return None
