from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from PIL.Image import Image


class CaptureState(str, Enum):
    IDLE = 'idle'
    PRESENTED = 'presented'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'
    FAILED = 'failed'


@dataclass(frozen=True)
class CaptureCompleted:
    # scan order
    images: tuple[Image, ...] = field(default_factory=tuple)

    @property
    def state(self) -> CaptureState:
        return CaptureState.COMPLETED


@dataclass(frozen=True)
class CaptureCancelled:
    @property
    def state(self) -> CaptureState:
        return CaptureState.CANCELLED


@dataclass(frozen=True)
class CaptureFailed:
    error: BaseException

    @property
    def state(self) -> CaptureState:
        return CaptureState.FAILED

    @property
    def message(self) -> str:
        return str(self.error) or type(self.error).__name__


CaptureOutcome = CaptureCompleted | CaptureCancelled | CaptureFailed
