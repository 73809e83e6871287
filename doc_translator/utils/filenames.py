"""Filename helpers for uploads and exported artifacts."""

from __future__ import annotations

import mimetypes
import re
from pathlib import Path

EXPORT_SUFFIX = "_traduzido"
FALLBACK_BASENAME = "documento"

# Not every platform's mime table knows webp
mimetypes.add_type("image/webp", ".webp")

_EXTENSION_RE = re.compile(r"\.[^/.]+$")


def clean_basename(filename: str) -> str:
    """
    Strip the last extension from a filename.

    Examples:
        >>> clean_basename("invoice.png")
        'invoice'
        >>> clean_basename("report.final.pdf")
        'report.final'
        >>> clean_basename("")
        'documento'
    """
    name = _EXTENSION_RE.sub("", filename.strip())
    return name or FALLBACK_BASENAME


def export_filename(filename: str, extension: str) -> str:
    """Name of the exported artifact, e.g. ``invoice_traduzido.txt``."""
    return f"{clean_basename(filename)}{EXPORT_SUFFIX}.{extension.lstrip('.')}"


def guess_media_type(path: str | Path) -> str:
    """Media type of a local file judged by its extension."""
    media_type, _ = mimetypes.guess_type(str(path))
    return media_type or "application/octet-stream"
