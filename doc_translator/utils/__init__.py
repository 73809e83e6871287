"""Utility functions for Document Translator."""

from doc_translator.utils.filenames import clean_basename, export_filename, guess_media_type
from doc_translator.utils.fonts import FontManager

__all__ = ["FontManager", "clean_basename", "export_filename", "guess_media_type"]
