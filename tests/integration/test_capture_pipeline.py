from __future__ import annotations

import json
from pathlib import Path

from PIL import Image

from docscan.adapters.capture.filesystem_capture_surface_adapter import FilesystemCaptureSurfaceAdapter
from docscan.adapters.pdf.pdf_codec_adapter import PdfCodecAdapter
from docscan.adapters.settings.json_settings_counter_adapter import JsonSettingsCounterAdapter
from docscan.adapters.storage.factory import create_document_store
from docscan.adapters.tracing.jsonl_trace_logger_adapter import JsonlTraceLoggerAdapter
from docscan.application.catalog_controller import DocumentCatalogController
from docscan.domain.capture import CaptureState


def _build(tmp_path: Path, backend: str = 'sqlite') -> DocumentCatalogController:
    return DocumentCatalogController(
        store=create_document_store(
            backend=backend,
            database_url=f'sqlite:///{tmp_path / "documents.db"}',
            documents_dir=tmp_path / 'documents',
        ),
        pdf_codec=PdfCodecAdapter(),
        counter=JsonSettingsCounterAdapter(tmp_path / 'settings.json'),
        trace_logger=JsonlTraceLoggerAdapter(tmp_path / 'traces' / 'capture.jsonl'),
    )


def _write_pages(tmp_path: Path) -> list[Path]:
    paths = []
    for idx, (size, color) in enumerate([((240, 320), 'white'), ((200, 100), 'black')]):
        path = tmp_path / f'scan_{idx}.png'
        Image.new('RGB', size, color).save(path)
        paths.append(path)
    return paths


def test_scan_commit_and_reload_after_restart(tmp_path: Path) -> None:
    controller = _build(tmp_path)
    surface = FilesystemCaptureSurfaceAdapter(_write_pages(tmp_path))

    report = controller.request_capture(surface)

    assert report.capture_state is CaptureState.COMPLETED
    assert report.document is not None
    assert report.document.name == 'Document 1'
    assert surface.dismissed is True
    assert controller.page_count(report.document.id) == 2

    thumb = controller.thumbnail(report.document.id)
    assert thumb is not None
    assert thumb.size == (240, 320)

    restarted = _build(tmp_path)
    docs = list(restarted.documents())
    assert [d.id for d in docs] == [report.document.id]
    assert docs[0].content == report.document.content

    second = restarted.request_capture(FilesystemCaptureSurfaceAdapter(_write_pages(tmp_path)[:1]))
    assert second.document is not None
    assert second.document.name == 'Document 2'
    assert [d.name for d in restarted.documents()] == ['Document 2', 'Document 1']


def test_failed_scan_is_traced_without_creating_documents(tmp_path: Path) -> None:
    bad = tmp_path / 'scan.png'
    bad.write_bytes(b'corrupted upload')
    controller = _build(tmp_path, backend='filesystem')

    report = controller.request_capture(FilesystemCaptureSurfaceAdapter([bad]))

    assert report.capture_state is CaptureState.FAILED
    assert controller.show_alert is True
    assert list(controller.documents()) == []
    assert JsonSettingsCounterAdapter(tmp_path / 'settings.json').current() == 1

    lines = (tmp_path / 'traces' / 'capture.jsonl').read_text(encoding='utf-8').splitlines()
    assert len(lines) == 1
    record = json.loads(lines[0])
    assert record['event'] == 'capture_failed'
    assert 'ts' in record
