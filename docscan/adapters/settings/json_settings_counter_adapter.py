from __future__ import annotations

from pathlib import Path
from typing import Any

from docscan.adapters.atomic_files import atomic_write_json, read_json
from docscan.domain.errors import StoreWriteFailed
from docscan.ports.document_counter_port import DocumentCounterPort


COUNTER_KEY = 'doc_number'


class JsonSettingsCounterAdapter(DocumentCounterPort):
    """Document-name counter kept in the app settings file, starting at 1."""

    def __init__(self, settings_file: Path, start: int = 1) -> None:
        self._settings_file = settings_file
        self._start = start

    def _read(self) -> tuple[dict[str, Any], int]:
        try:
            settings = read_json(self._settings_file, {})
            return settings, int(settings.get(COUNTER_KEY, self._start))
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            raise StoreWriteFailed(f'Could not read settings file: {self._settings_file}') from exc

    def current(self) -> int:
        _, value = self._read()
        return value

    def advance(self) -> int:
        settings, value = self._read()
        value += 1
        settings[COUNTER_KEY] = value
        try:
            atomic_write_json(self._settings_file, settings)
        except OSError as exc:
            raise StoreWriteFailed('Could not persist document counter') from exc
        return value
