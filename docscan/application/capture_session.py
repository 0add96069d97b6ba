from __future__ import annotations

from typing import Callable

from docscan.domain.capture import CaptureFailed, CaptureOutcome, CaptureState
from docscan.domain.errors import CaptureSessionReused
from docscan.ports.capture_surface_port import CaptureSurfacePort


class CaptureSession:
    """One scan request against a capture surface.

    The session moves IDLE -> PRESENTED -> one terminal state, dismisses the
    surface and reports the outcome to the callback exactly once. A session
    cannot be started again after it has terminated.
    """

    def __init__(self, surface: CaptureSurfacePort) -> None:
        self._surface = surface
        self._state = CaptureState.IDLE
        self._outcome: CaptureOutcome | None = None

    @property
    def state(self) -> CaptureState:
        return self._state

    @property
    def outcome(self) -> CaptureOutcome | None:
        return self._outcome

    def begin(self, on_outcome: Callable[[CaptureOutcome], None]) -> CaptureOutcome:
        if self._state is not CaptureState.IDLE:
            raise CaptureSessionReused(f'Capture session already {self._state.value}')

        self._state = CaptureState.PRESENTED
        try:
            outcome = self._surface.present()
        except Exception as exc:
            outcome = CaptureFailed(error=exc)

        self._outcome = outcome
        self._state = outcome.state
        try:
            self._surface.dismiss()
        finally:
            on_outcome(outcome)
        return outcome
