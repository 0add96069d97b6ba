from __future__ import annotations

from abc import ABC, abstractmethod


class DocumentCounterPort(ABC):
    @abstractmethod
    def current(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def advance(self) -> int:
        """Persist and return the next value."""
        raise NotImplementedError
