from __future__ import annotations

import io
from pathlib import Path

from PIL import Image

from docscan.adapters.capture.filesystem_capture_surface_adapter import FilesystemCaptureSurfaceAdapter
from docscan.adapters.capture.noop_capture_surface_adapter import NoopCaptureSurfaceAdapter
from docscan.adapters.capture.uploaded_images_capture_surface_adapter import (
    UploadedImagesCaptureSurfaceAdapter,
)
from docscan.domain.capture import CaptureCancelled, CaptureCompleted, CaptureFailed


def _png_bytes(size: tuple[int, int]) -> bytes:
    buffer = io.BytesIO()
    Image.new('RGB', size, 'white').save(buffer, format='PNG')
    return buffer.getvalue()


def test_filesystem_surface_loads_images_in_given_order(tmp_path: Path) -> None:
    paths = []
    for idx, size in enumerate([(30, 20), (40, 50)]):
        path = tmp_path / f'page_{idx}.png'
        path.write_bytes(_png_bytes(size))
        paths.append(path)

    outcome = FilesystemCaptureSurfaceAdapter(paths).present()

    assert isinstance(outcome, CaptureCompleted)
    assert [image.size for image in outcome.images] == [(30, 20), (40, 50)]


def test_filesystem_surface_without_images_is_cancelled() -> None:
    assert FilesystemCaptureSurfaceAdapter([]).present() == CaptureCancelled()


def test_filesystem_surface_reports_unreadable_file(tmp_path: Path) -> None:
    bad = tmp_path / 'notes.txt'
    bad.write_text('not an image', encoding='utf-8')

    outcome = FilesystemCaptureSurfaceAdapter([bad, tmp_path / 'missing.png']).present()

    assert isinstance(outcome, CaptureFailed)


def test_uploaded_surface_decodes_blobs() -> None:
    surface = UploadedImagesCaptureSurfaceAdapter([_png_bytes((10, 12)), b'', _png_bytes((8, 8))])

    outcome = surface.present()
    surface.dismiss()

    assert isinstance(outcome, CaptureCompleted)
    assert [image.size for image in outcome.images] == [(10, 12), (8, 8)]
    assert surface.dismissed is True


def test_uploaded_surface_rejects_garbage() -> None:
    outcome = UploadedImagesCaptureSurfaceAdapter([b'garbage']).present()

    assert isinstance(outcome, CaptureFailed)


def test_noop_surface_always_cancels() -> None:
    assert NoopCaptureSurfaceAdapter().present() == CaptureCancelled()
