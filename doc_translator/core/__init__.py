"""Core modules for document translation."""

from doc_translator.core.config import TranslationConfig
from doc_translator.core.exporters import ExportArtifact, export_doc, export_pdf, export_txt
from doc_translator.core.models import (
    QualityMode,
    TargetLanguage,
    TranslationResult,
    UploadedFile,
)
from doc_translator.core.pdf_renderer import PDFRenderer
from doc_translator.core.session import AppStatus, SessionController, SessionState
from doc_translator.core.translator import DocumentTranslator, TranslationError

__all__ = [
    "TranslationConfig",
    "DocumentTranslator",
    "TranslationError",
    "TranslationResult",
    "UploadedFile",
    "TargetLanguage",
    "QualityMode",
    "PDFRenderer",
    "ExportArtifact",
    "export_txt",
    "export_doc",
    "export_pdf",
    "AppStatus",
    "SessionState",
    "SessionController",
]
