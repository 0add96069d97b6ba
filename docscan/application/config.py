from __future__ import annotations

import os
from dataclasses import dataclass


def _env(key: str, default: str) -> str:
    return os.getenv(key, default)


def _env_alias(keys: list[str], default: str) -> str:
    for key in keys:
        value = os.getenv(key)
        if value is not None and value != '':
            return value
    return default


@dataclass(frozen=True)
class AppConfig:
    app_env: str
    document_store: str
    database_url: str
    documents_dir: str
    settings_file: str
    capture_trace_file: str
    preview_scale: float


def load_config() -> AppConfig:
    return AppConfig(
        app_env=_env('APP_ENV', 'local'),
        document_store=_env('DOCUMENT_STORE', 'sqlite'),
        database_url=_env_alias(['DOCSCAN_DATABASE_URL', 'DATABASE_URL'], 'sqlite:///data/documents.db'),
        documents_dir=_env('DOCUMENTS_DIR', 'data/documents'),
        settings_file=_env('SETTINGS_FILE', 'data/settings.json'),
        capture_trace_file=_env('CAPTURE_TRACE_FILE', '.context/reports/capture_traces.jsonl'),
        preview_scale=float(_env('PREVIEW_SCALE', '2.0')),
    )
