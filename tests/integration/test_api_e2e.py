from __future__ import annotations

import io
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from PIL import Image

import apps.api.main as api_main


def _png(size: tuple[int, int], color: str = 'white') -> bytes:
    buffer = io.BytesIO()
    Image.new('RGB', size, color).save(buffer, format='PNG')
    return buffer.getvalue()


@pytest.fixture
def client(tmp_path: Path, monkeypatch) -> TestClient:
    monkeypatch.setenv('DOCUMENT_STORE', 'sqlite')
    monkeypatch.setenv('DOCSCAN_DATABASE_URL', f'sqlite:///{tmp_path / "documents.db"}')
    monkeypatch.setenv('SETTINGS_FILE', str(tmp_path / 'settings.json'))
    monkeypatch.setenv('CAPTURE_TRACE_FILE', str(tmp_path / 'capture.jsonl'))
    return TestClient(api_main.app)


def test_capture_browse_rename_export_delete_flow(client: TestClient) -> None:
    capture = client.post(
        '/capture',
        files=[
            ('files', ('p1.png', _png((120, 80)), 'image/png')),
            ('files', ('p2.png', _png((90, 90)), 'image/png')),
        ],
    )
    assert capture.status_code == 200
    payload = capture.json()
    assert payload['capture_state'] == 'completed'
    assert payload['alert'] is None
    doc = payload['document']
    assert doc['name'] == 'Document 1'
    assert doc['page_count'] == 2

    listing = client.get('/documents').json()
    assert listing['total'] == 1
    assert listing['documents'][0]['id'] == doc['id']

    thumb = client.get(f'/documents/{doc["id"]}/thumbnail')
    assert thumb.status_code == 200
    assert thumb.headers['content-type'] == 'image/png'
    assert Image.open(io.BytesIO(thumb.content)).size == (120, 80)

    page = client.get(f'/documents/{doc["id"]}/pages/2')
    assert page.status_code == 200
    assert client.get(f'/documents/{doc["id"]}/pages/3').status_code == 404

    renamed = client.patch(f'/documents/{doc["id"]}', json={'name': 'Lease'})
    assert renamed.status_code == 200
    assert renamed.json()['name'] == 'Lease'
    unchanged = client.patch(f'/documents/{doc["id"]}', json={'name': ''})
    assert unchanged.json()['name'] == 'Lease'

    exported = client.get(f'/documents/{doc["id"]}/export')
    assert exported.status_code == 200
    assert exported.headers['content-type'] == 'application/pdf'
    assert 'Lease.pdf' in exported.headers['content-disposition']
    assert exported.content.startswith(b'%PDF')

    deleted = client.delete(f'/documents/{doc["id"]}')
    assert deleted.json() == {'id': doc['id'], 'deleted': True}
    assert client.get('/documents').json()['total'] == 0
    assert client.get(f'/documents/{doc["id"]}/thumbnail').status_code == 404


def test_capture_without_files_is_cancelled(client: TestClient) -> None:
    response = client.post('/capture')

    assert response.status_code == 200
    assert response.json() == {'capture_state': 'cancelled', 'alert': None, 'document': None}


def test_capture_with_unreadable_image_raises_alert(client: TestClient) -> None:
    response = client.post('/capture', files=[('files', ('p1.png', b'nope', 'image/png'))])

    payload = response.json()
    assert payload['capture_state'] == 'failed'
    assert payload['alert'] == 'Failed to scan document'
    assert payload['document'] is None


def test_import_accepts_pdf_and_rejects_other_files(client: TestClient) -> None:
    captured = client.post('/capture', files=[('files', ('p1.png', _png((50, 50)), 'image/png'))])
    pdf_bytes = client.get(f'/documents/{captured.json()["document"]["id"]}/export').content

    imported = client.post('/documents/import', files={'file': ('scan.pdf', pdf_bytes, 'application/pdf')})
    assert imported.status_code == 200
    assert imported.json()['name'].startswith('Imported Document ')
    assert imported.json()['page_count'] == 1

    rejected = client.post('/documents/import', files={'file': ('notes.txt', b'hello', 'text/plain')})
    assert rejected.status_code == 400


def test_unknown_document_returns_404(client: TestClient) -> None:
    assert client.get('/documents/missing/export').status_code == 404
    assert client.patch('/documents/missing', json={'name': 'x'}).status_code == 404
    assert client.delete('/documents/missing').json() == {'id': 'missing', 'deleted': False}
