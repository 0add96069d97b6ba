from __future__ import annotations

import io
from urllib.parse import quote

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.responses import Response
from PIL.Image import Image
from pydantic import BaseModel

from apps.wiring import build_catalog_controller
from docscan.adapters.capture.uploaded_images_capture_surface_adapter import (
    UploadedImagesCaptureSurfaceAdapter,
)
from docscan.application.catalog_controller import DocumentCatalogController
from docscan.application.config import load_config
from docscan.domain.errors import StoreWriteFailed
from docscan.domain.models import PDF_CONTENT_TYPE, Document


app = FastAPI(title='Document Scanner API', version='0.1.0')


class RenameRequest(BaseModel):
    name: str


def _controller() -> DocumentCatalogController:
    return build_catalog_controller(load_config())


def _serialize_document(controller: DocumentCatalogController, doc: Document) -> dict[str, object]:
    return {
        'id': doc.id,
        'name': doc.name,
        'date_created': doc.date_created.isoformat(),
        'size_bytes': doc.size_bytes,
        'page_count': controller.page_count(doc.id),
    }


def _png_response(image: Image) -> Response:
    buffer = io.BytesIO()
    image.save(buffer, format='PNG')
    return Response(content=buffer.getvalue(), media_type='image/png')


def _require_document(controller: DocumentCatalogController, doc_id: str) -> Document:
    doc = controller.get(doc_id)
    if doc is None:
        raise HTTPException(status_code=404, detail=f'Unknown document id: {doc_id}')
    return doc


@app.get('/health')
def health() -> dict[str, object]:
    cfg = load_config()
    return {
        'status': 'ok',
        'app_env': cfg.app_env,
        'document_store': cfg.document_store,
    }


@app.get('/documents')
def list_documents() -> dict[str, object]:
    controller = _controller()
    docs = [_serialize_document(controller, doc) for doc in controller.documents()]
    return {'total': len(docs), 'documents': docs}


@app.patch('/documents/{doc_id}')
def rename_document(doc_id: str, request: RenameRequest) -> dict[str, object]:
    controller = _controller()
    _require_document(controller, doc_id)
    controller.rename(doc_id, request.name)
    return _serialize_document(controller, _require_document(controller, doc_id))


@app.delete('/documents/{doc_id}')
def delete_document(doc_id: str) -> dict[str, object]:
    controller = _controller()
    existed = controller.get(doc_id) is not None
    deleted = controller.delete(doc_id) and existed
    return {'id': doc_id, 'deleted': deleted}


@app.get('/documents/{doc_id}/thumbnail')
def document_thumbnail(doc_id: str) -> Response:
    controller = _controller()
    _require_document(controller, doc_id)
    image = controller.thumbnail(doc_id)
    if image is None:
        raise HTTPException(status_code=404, detail=f'No preview available for {doc_id}')
    return _png_response(image)


@app.get('/documents/{doc_id}/pages/{page_number}')
def document_page(doc_id: str, page_number: int) -> Response:
    controller = _controller()
    _require_document(controller, doc_id)
    image = controller.preview_page(doc_id, page_number - 1)
    if image is None:
        raise HTTPException(status_code=404, detail=f'Page {page_number} not available for {doc_id}')
    return _png_response(image)


@app.get('/documents/{doc_id}/export')
def export_document(doc_id: str) -> Response:
    controller = _controller()
    exported = controller.export_document(doc_id)
    if exported is None:
        raise HTTPException(status_code=404, detail=f'Unknown document id: {doc_id}')
    return Response(
        content=exported.data,
        media_type=exported.content_type,
        headers={
            'Content-Disposition': f"attachment; filename*=UTF-8''{quote(exported.filename)}",
        },
    )


@app.post('/documents/import')
async def import_document(file: UploadFile = File(...)) -> dict[str, object]:
    filename = file.filename or ''
    if not filename.lower().endswith('.pdf') and file.content_type != PDF_CONTENT_TYPE:
        raise HTTPException(status_code=400, detail='Only PDF files are supported')

    controller = _controller()
    try:
        doc = controller.import_document(await file.read())
    except StoreWriteFailed as exc:
        raise HTTPException(status_code=500, detail='Failed to import document') from exc
    return _serialize_document(controller, doc)


@app.post('/capture')
async def capture_document(files: list[UploadFile] = File(default=[])) -> dict[str, object]:
    blobs = [await upload.read() for upload in files]
    controller = _controller()
    report = controller.request_capture(UploadedImagesCaptureSurfaceAdapter(blobs))
    return {
        'capture_state': report.capture_state.value,
        'alert': controller.alert_message,
        'document': (
            _serialize_document(controller, report.document) if report.document is not None else None
        ),
    }
