from __future__ import annotations

import json
from pathlib import Path

import pytest

from docscan.adapters.settings.json_settings_counter_adapter import JsonSettingsCounterAdapter
from docscan.domain.errors import StoreWriteFailed


def test_counter_starts_at_one_on_first_run(tmp_path: Path) -> None:
    counter = JsonSettingsCounterAdapter(tmp_path / 'settings.json')

    assert counter.current() == 1
    assert not (tmp_path / 'settings.json').exists()


def test_counter_advance_survives_restart(tmp_path: Path) -> None:
    settings_file = tmp_path / 'nested' / 'settings.json'
    counter = JsonSettingsCounterAdapter(settings_file)

    assert counter.advance() == 2
    assert counter.advance() == 3

    assert JsonSettingsCounterAdapter(settings_file).current() == 3


def test_counter_preserves_other_settings(tmp_path: Path) -> None:
    settings_file = tmp_path / 'settings.json'
    settings_file.write_text(json.dumps({'theme': 'dark', 'doc_number': 4}), encoding='utf-8')

    JsonSettingsCounterAdapter(settings_file).advance()

    assert json.loads(settings_file.read_text(encoding='utf-8')) == {'theme': 'dark', 'doc_number': 5}


def test_corrupt_settings_file_raises_store_write_failed(tmp_path: Path) -> None:
    settings_file = tmp_path / 'settings.json'
    settings_file.write_text('{oops', encoding='utf-8')
    counter = JsonSettingsCounterAdapter(settings_file)

    with pytest.raises(StoreWriteFailed):
        counter.current()
    with pytest.raises(StoreWriteFailed):
        counter.advance()
