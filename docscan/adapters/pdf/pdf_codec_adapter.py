from __future__ import annotations

import io
import warnings
from functools import lru_cache
from typing import Sequence

import fitz  # type: ignore
from PIL import Image
from pypdf import PdfReader, PdfWriter
from pypdf.errors import PdfReadWarning

from docscan.domain.errors import EncodingRejected
from docscan.ports.pdf_codec_port import PdfCodecPort, PdfHandle, PdfPageBox


# One image pixel becomes one PDF point.
PAGE_RESOLUTION = 72.0

_PDF_MODES = {'1', 'L', 'RGB', 'CMYK'}


@lru_cache(maxsize=1)
def _empty_pdf() -> bytes:
    buffer = io.BytesIO()
    PdfWriter().write(buffer)
    return buffer.getvalue()


def _prepare(image: Image.Image) -> Image.Image:
    if image.mode in {'RGBA', 'LA', 'PA'} or 'transparency' in image.info:
        # transparent areas end up white, like an unprinted page
        rgba = image.convert('RGBA')
        page = Image.new('RGB', rgba.size, 'white')
        page.paste(rgba, mask=rgba.getchannel('A'))
        return page
    if image.mode in _PDF_MODES:
        return image
    return image.convert('RGB')


class PdfCodecAdapter(PdfCodecPort):
    """Pillow writes scanned pages, pypdf reads structure, PyMuPDF rasterizes."""

    def encode_pages(self, images: Sequence[Image.Image]) -> bytes:
        if not images:
            return _empty_pdf()

        try:
            pages = [_prepare(image) for image in images]
            buffer = io.BytesIO()
            pages[0].save(
                buffer,
                format='PDF',
                save_all=True,
                append_images=pages[1:],
                resolution=PAGE_RESOLUTION,
            )
        except (OSError, ValueError) as exc:
            raise EncodingRejected(f'Could not encode {len(images)} page(s) as PDF') from exc
        return buffer.getvalue()

    def decode(self, data: bytes) -> PdfHandle | None:
        if not data:
            return None

        try:
            with warnings.catch_warnings():
                warnings.simplefilter('ignore', PdfReadWarning)
                reader = PdfReader(io.BytesIO(data))
                pages = tuple(
                    PdfPageBox(
                        index=idx,
                        width=float(page.cropbox.width),
                        height=float(page.cropbox.height),
                    )
                    for idx, page in enumerate(reader.pages)
                )
        except Exception:
            return None

        return PdfHandle(data=data, pages=pages)

    def thumbnail(self, handle: PdfHandle) -> Image.Image | None:
        if handle.page_count == 0:
            return None
        return self._rasterize(handle, 0, 1.0)

    def render_page(self, handle: PdfHandle, page_index: int, scale: float = 2.0) -> Image.Image | None:
        if page_index < 0 or page_index >= handle.page_count:
            return None
        return self._rasterize(handle, page_index, scale)

    def _rasterize(self, handle: PdfHandle, page_index: int, scale: float) -> Image.Image | None:
        try:
            with fitz.open(stream=handle.data, filetype='pdf') as doc:
                page = doc.load_page(page_index)
                # page.rect is the crop box with a top-left origin; no alpha
                # channel means the pixmap starts out white.
                matrix = fitz.Matrix(scale, scale)
                pix = page.get_pixmap(matrix=matrix, alpha=False)
                return Image.frombytes('RGB', [pix.width, pix.height], pix.samples)
        except Exception:
            return None
