from __future__ import annotations

from pathlib import Path

from docscan.adapters.pdf.pdf_codec_adapter import PdfCodecAdapter
from docscan.adapters.settings.json_settings_counter_adapter import JsonSettingsCounterAdapter
from docscan.adapters.storage.factory import create_document_store
from docscan.adapters.tracing.jsonl_trace_logger_adapter import JsonlTraceLoggerAdapter
from docscan.application.catalog_controller import DocumentCatalogController
from docscan.application.config import AppConfig, load_config


def build_catalog_controller(cfg: AppConfig | None = None) -> DocumentCatalogController:
    cfg = cfg or load_config()
    store = create_document_store(
        backend=cfg.document_store,
        database_url=cfg.database_url,
        documents_dir=Path(cfg.documents_dir),
    )
    return DocumentCatalogController(
        store=store,
        pdf_codec=PdfCodecAdapter(),
        counter=JsonSettingsCounterAdapter(Path(cfg.settings_file)),
        trace_logger=JsonlTraceLoggerAdapter(Path(cfg.capture_trace_file)),
        preview_scale=cfg.preview_scale,
    )
