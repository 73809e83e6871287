"""
Document Translator - Translate images and PDFs with a multimodal AI model.

Uploads are sent to Google Gemini for OCR and translation, and the result
can be exported as plain text, a Word document, or a PDF.
"""

from doc_translator.core.config import TranslationConfig
from doc_translator.core.translator import DocumentTranslator

__version__ = "0.1.0"

__all__ = [
    "DocumentTranslator",
    "TranslationConfig",
    "__version__",
]
