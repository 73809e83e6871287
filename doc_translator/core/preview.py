"""Thumbnails of the original document for the side-by-side view."""

from __future__ import annotations

import io

from pdf2image import convert_from_bytes
from pdf2image.exceptions import (
    PDFInfoNotInstalledError,
    PDFPageCountError,
    PDFSyntaxError,
)
from PIL import Image, UnidentifiedImageError

from doc_translator.core.encoder import decode_payload
from doc_translator.core.models import UploadedFile

PREVIEW_SIZE = (900, 1200)  # 3:4, matches the preview panel
PREVIEW_DPI = 100


def render_preview(
    uploaded: UploadedFile,
    max_size: tuple[int, int] = PREVIEW_SIZE,
) -> Image.Image | None:
    """
    Build a preview image of the uploaded document.

    Images are decoded and scaled down. For PDFs the first page is rasterized.
    When no preview can be made (poppler missing, damaged file) None is
    returned and the caller shows a placeholder instead.

    Args:
        uploaded: The encoded upload
        max_size: Bounding box of the preview in pixels

    Returns:
        An RGB PIL image, or None
    """
    content = decode_payload(uploaded.data)

    if uploaded.is_image:
        image = _open_image(content)
    elif uploaded.mime_type == "application/pdf":
        image = _first_pdf_page(content)
    else:
        return None

    if image is None:
        return None

    image = image.convert("RGB")
    image.thumbnail(max_size)
    return image


def _open_image(content: bytes) -> Image.Image | None:
    try:
        image = Image.open(io.BytesIO(content))
        image.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        print(f"Preview unavailable: {e}")
        return None
    return image


def _first_pdf_page(content: bytes) -> Image.Image | None:
    try:
        pages = convert_from_bytes(
            content,
            dpi=PREVIEW_DPI,
            first_page=1,
            last_page=1,
        )
    except (PDFInfoNotInstalledError, PDFPageCountError, PDFSyntaxError) as e:
        print(f"Preview unavailable: {e}")
        return None

    return pages[0] if pages else None
