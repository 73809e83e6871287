"""Pytest configuration and shared fixtures."""

import io
import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from PIL import Image

from doc_translator.core.config import TranslationConfig
from doc_translator.core.encoder import encode_bytes
from doc_translator.core.translator import DocumentTranslator


@pytest.fixture
def png_bytes():
    """A small PNG image."""
    buffer = io.BytesIO()
    Image.new("RGB", (200, 100), color="white").save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def png_payload(png_bytes):
    """The PNG image as an encoded payload."""
    return encode_bytes(png_bytes)


@pytest.fixture
def pdf_bytes():
    """A one-page PDF with a line of text."""
    import fitz

    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), "Rechnung Nr. 42")
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def sample_translation():
    """Translated text with paragraph breaks."""
    return "Fatura Nº 42\n\nTotal: R$ 1.250,00\nVencimento: 10/11/2026"


@pytest.fixture
def response_body(sample_translation):
    """A well-formed provider response body."""
    return json.dumps(
        {"detectedLanguage": "Alemão", "translatedText": sample_translation}
    )


@pytest.fixture
def fake_client(response_body):
    """A genai.Client stand-in answering with response_body."""
    response = MagicMock()
    response.text = response_body

    client = MagicMock()
    client.models.generate_content.return_value = response
    client.aio.models.generate_content = AsyncMock(return_value=response)
    return client


@pytest.fixture
def config():
    """Config with a dummy key and default models."""
    return TranslationConfig(api_key="test-key")


@pytest.fixture
def translator(config, fake_client):
    """A translator wired to the fake client."""
    return DocumentTranslator(config, client=fake_client)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove API key variables for the duration of a test."""
    for name in (
        "GEMINI_API_KEY",
        "API_KEY",
        "DOC_TRANSLATOR_FAST_MODEL",
        "DOC_TRANSLATOR_PRECISE_MODEL",
        "DOC_TRANSLATOR_THINKING_BUDGET",
    ):
        # setenv first so teardown also removes values loaded from .env files
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch
