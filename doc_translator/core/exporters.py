"""Export of translated text to TXT, Word (DOC) and PDF artifacts."""

from __future__ import annotations

import html
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from doc_translator.core.pdf_renderer import PDFRenderer
from doc_translator.utils.filenames import export_filename

DOC_TEMPLATE = """<html xmlns:o='urn:schemas-microsoft-com:office:office' \
xmlns:w='urn:schemas-microsoft-com:office:word' \
xmlns='http://www.w3.org/TR/REC-html40'>
<head><meta charset='utf-8'><title>Tradução</title></head>
<body style="font-family: Arial, sans-serif; font-size: {font_size}pt; line-height: {line_height};">
{body}
</body></html>"""


@dataclass(frozen=True)
class ExportArtifact:
    """A downloadable file produced by an exporter."""

    filename: str
    data: bytes
    mime_type: str

    def save(self, directory: str | Path) -> Path:
        """Write the artifact into a directory and return its path."""
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / self.filename
        path.write_bytes(self.data)
        return path


def export_txt(
    text: str,
    filename: str,
    font_size: float = 12,
    line_height: float = 1.5,
) -> ExportArtifact:
    """
    Plain UTF-8 text, byte for byte.

    Formatting preferences are accepted for a uniform signature and ignored.
    """
    return ExportArtifact(
        filename=export_filename(filename, "txt"),
        data=text.encode("utf-8"),
        mime_type="text/plain;charset=utf-8",
    )


def export_doc(
    text: str,
    filename: str,
    font_size: float = 12,
    line_height: float = 1.5,
) -> ExportArtifact:
    """
    Word-compatible HTML with the font size and line height as inline style.

    Line breaks become <br> tags. A BOM leads the file so Word picks UTF-8.
    """
    body = html.escape(text, quote=False).replace("\r\n", "\n").replace("\n", "<br>")
    markup = DOC_TEMPLATE.format(
        font_size=font_size,
        line_height=line_height,
        body=body,
    )
    return ExportArtifact(
        filename=export_filename(filename, "doc"),
        data=("\ufeff" + markup).encode("utf-8"),
        mime_type="application/msword",
    )


def export_pdf(
    text: str,
    filename: str,
    font_size: float = 12,
    line_height: float = 1.5,
) -> ExportArtifact:
    """Paginated A4 PDF, see PDFRenderer for the layout rules."""
    renderer = PDFRenderer(font_size=font_size, line_height=line_height)
    return ExportArtifact(
        filename=export_filename(filename, "pdf"),
        data=renderer.render(text),
        mime_type="application/pdf",
    )


Exporter = Callable[..., ExportArtifact]

# Ordered as offered to the user
EXPORTERS: dict[str, Exporter] = {
    "pdf": export_pdf,
    "doc": export_doc,
    "txt": export_txt,
}

EXPORT_LABELS = {
    "pdf": "PDF",
    "doc": "Word (DOC)",
    "txt": "Texto (TXT)",
}
