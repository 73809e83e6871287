"""Tests for the Gemini translation client."""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from google.genai import errors

from doc_translator.core.config import TranslationConfig
from doc_translator.core.models import QualityMode, TargetLanguage
from doc_translator.core.translator import (
    FAILURE_MESSAGE,
    FAST_DIRECTIVE,
    PRECISION_DIRECTIVE,
    DocumentTranslator,
    TranslationError,
    build_prompt,
    parse_response,
)


class TestBuildPrompt:
    """Tests for the instruction text."""

    def test_embeds_target_language(self):
        """The target language label should appear in the prompt."""
        prompt = build_prompt(TargetLanguage.SPANISH, QualityMode.FAST)
        assert "Espanhol" in prompt

    def test_fast_mode_directive(self):
        """Fast mode should ask for efficient extraction only."""
        prompt = build_prompt(TargetLanguage.ENGLISH, QualityMode.FAST)
        assert FAST_DIRECTIVE in prompt
        assert PRECISION_DIRECTIVE not in prompt

    def test_precision_mode_directive(self):
        """High-precision mode should ask for exhaustive analysis."""
        prompt = build_prompt(TargetLanguage.ENGLISH, QualityMode.HIGH_PRECISION)
        assert PRECISION_DIRECTIVE in prompt
        assert FAST_DIRECTIVE not in prompt
        assert "rodapé" in prompt
        assert "carimbos" in prompt

    def test_demands_both_fields(self):
        """The prompt should require the two response fields."""
        prompt = build_prompt(TargetLanguage.PORTUGUESE, QualityMode.FAST)
        assert '"detectedLanguage"' in prompt
        assert '"translatedText"' in prompt

    def test_accepts_plain_values(self):
        """Enum values given as strings should be accepted."""
        prompt = build_prompt("Inglês", QualityMode.FAST)
        assert "Inglês" in prompt


class TestParseResponse:
    """Tests for structured response validation."""

    def test_valid_response(self):
        result = parse_response(
            json.dumps({"detectedLanguage": "Francês", "translatedText": "Hello"})
        )
        assert result.detected_language == "Francês"
        assert result.translated_text == "Hello"

    def test_preserves_paragraphs(self):
        """Translated text should come back untouched."""
        text = "Line one\n\n  Indented line\n"
        result = parse_response(
            json.dumps({"detectedLanguage": "Alemão", "translatedText": text})
        )
        assert result.translated_text == text

    def test_extra_fields_ignored(self):
        body = json.dumps(
            {"detectedLanguage": "Alemão", "translatedText": "Oi", "confidence": 90}
        )
        assert parse_response(body).translated_text == "Oi"

    @pytest.mark.parametrize("body", [None, "", "   "])
    def test_empty_body(self, body):
        """Empty bodies should raise TranslationError."""
        with pytest.raises(TranslationError, match="vazia"):
            parse_response(body)

    def test_not_json(self):
        with pytest.raises(TranslationError) as exc_info:
            parse_response("Here is your translation: hello")
        assert str(exc_info.value).startswith(FAILURE_MESSAGE)

    def test_missing_translated_text(self):
        """A missing translatedText field is a hard error."""
        with pytest.raises(TranslationError):
            parse_response(json.dumps({"detectedLanguage": "Alemão"}))

    def test_missing_detected_language(self):
        with pytest.raises(TranslationError):
            parse_response(json.dumps({"translatedText": "Oi"}))

    def test_null_field(self):
        with pytest.raises(TranslationError):
            parse_response(
                json.dumps({"detectedLanguage": "Alemão", "translatedText": None})
            )

    def test_blank_translated_text(self):
        with pytest.raises(TranslationError):
            parse_response(
                json.dumps({"detectedLanguage": "Alemão", "translatedText": "  \n"})
            )

    def test_wrong_type(self):
        with pytest.raises(TranslationError):
            parse_response(
                json.dumps({"detectedLanguage": "Alemão", "translatedText": ["a"]})
            )


class TestBuildConfig:
    """Tests for per-mode request options."""

    def test_fast_mode_has_no_thinking(self, translator):
        config = translator.build_config(QualityMode.FAST)
        assert config.thinking_config is None
        assert config.response_mime_type == "application/json"

    def test_precision_mode_enables_thinking(self, translator):
        config = translator.build_config(QualityMode.HIGH_PRECISION)
        assert config.thinking_config is not None
        assert config.thinking_config.thinking_budget == 24576

    def test_response_schema_has_two_required_fields(self, translator):
        schema = translator.build_config(QualityMode.FAST).response_schema
        assert set(schema.properties) == {"detectedLanguage", "translatedText"}
        assert set(schema.required) == {"detectedLanguage", "translatedText"}

    def test_custom_budget(self, fake_client):
        translator = DocumentTranslator(
            TranslationConfig(api_key="k", thinking_budget=1000), client=fake_client
        )
        config = translator.build_config(QualityMode.HIGH_PRECISION)
        assert config.thinking_config.thinking_budget == 1000


class TestDocumentTranslator:
    """Tests for the request/response round trip."""

    def test_translate_success(self, translator, png_payload, sample_translation):
        result = translator.translate(png_payload, "image/png", TargetLanguage.ENGLISH)

        assert result.detected_language == "Alemão"
        assert result.translated_text == sample_translation

    def test_request_contents(self, translator, fake_client, png_payload, png_bytes):
        """The document should be sent inline, followed by the instruction."""
        translator.translate(png_payload, "image/png", TargetLanguage.ENGLISH)

        kwargs = fake_client.models.generate_content.call_args.kwargs
        part, prompt = kwargs["contents"]
        assert part.inline_data.data == png_bytes
        assert part.inline_data.mime_type == "image/png"
        assert "Inglês" in prompt

    def test_model_per_mode(self, fake_client, png_payload):
        config = TranslationConfig(
            api_key="k", fast_model="model-fast", precise_model="model-precise"
        )
        translator = DocumentTranslator(config, client=fake_client)

        translator.translate(png_payload, "image/png", TargetLanguage.ENGLISH)
        assert fake_client.models.generate_content.call_args.kwargs["model"] == "model-fast"

        translator.translate(
            png_payload, "image/png", TargetLanguage.ENGLISH, QualityMode.HIGH_PRECISION
        )
        assert (
            fake_client.models.generate_content.call_args.kwargs["model"]
            == "model-precise"
        )

    def test_precision_request_enables_thinking(self, translator, fake_client, png_payload):
        translator.translate(
            png_payload, "image/png", TargetLanguage.ENGLISH, QualityMode.HIGH_PRECISION
        )

        kwargs = fake_client.models.generate_content.call_args.kwargs
        assert kwargs["config"].thinking_config.thinking_budget == 24576
        assert PRECISION_DIRECTIVE in kwargs["contents"][1]

    def test_single_attempt(self, translator, fake_client, png_payload):
        """Failures should not be retried."""
        fake_client.models.generate_content.side_effect = httpx.ConnectError("down")

        with pytest.raises(TranslationError):
            translator.translate(png_payload, "image/png", TargetLanguage.ENGLISH)

        assert fake_client.models.generate_content.call_count == 1

    def test_api_error(self, translator, fake_client, png_payload, capsys):
        """Service rejections should become TranslationError."""
        fake_client.models.generate_content.side_effect = errors.ClientError(
            400,
            {"error": {"code": 400, "message": "bad", "status": "INVALID_ARGUMENT"}},
        )

        with pytest.raises(TranslationError) as exc_info:
            translator.translate(png_payload, "image/png", TargetLanguage.ENGLISH)

        assert "400" in str(exc_info.value)
        assert "Gemini translation failed" in capsys.readouterr().out

    def test_network_error(self, translator, fake_client, png_payload):
        fake_client.models.generate_content.side_effect = httpx.ConnectError("down")

        with pytest.raises(TranslationError, match="conectar"):
            translator.translate(png_payload, "image/png", TargetLanguage.ENGLISH)

    def test_malformed_response(self, translator, fake_client, png_payload):
        fake_client.models.generate_content.return_value.text = "not json"

        with pytest.raises(TranslationError):
            translator.translate(png_payload, "image/png", TargetLanguage.ENGLISH)

    def test_unparseable_response_body(self, translator, fake_client, png_payload, capsys):
        """A body the SDK cannot decode is reported like a malformed response."""
        fake_client.models.generate_content.side_effect = errors.UnknownApiResponseError(
            "Failed to parse response as JSON"
        )

        with pytest.raises(TranslationError, match="formato esperado"):
            translator.translate(png_payload, "image/png", TargetLanguage.ENGLISH)

        assert "Gemini translation failed" in capsys.readouterr().out

    def test_missing_api_key(self, png_payload):
        """Without a key or an injected client the call should fail cleanly."""
        translator = DocumentTranslator(TranslationConfig())

        with pytest.raises(TranslationError, match="GEMINI_API_KEY"):
            translator.translate(png_payload, "image/png", TargetLanguage.ENGLISH)

    def test_default_config(self):
        translator = DocumentTranslator()
        assert translator.config.fast_model == TranslationConfig().fast_model


class TestDocumentTranslatorAsync:
    """Tests for the async entry point."""

    def test_translate_async(self, translator, fake_client, png_payload, sample_translation):
        result = asyncio.run(
            translator.translate_async(png_payload, "image/png", TargetLanguage.SPANISH)
        )

        assert result.translated_text == sample_translation
        fake_client.aio.models.generate_content.assert_awaited_once()
        fake_client.models.generate_content.assert_not_called()

    def test_translate_async_failure(self, translator, fake_client, png_payload):
        fake_client.aio.models.generate_content = AsyncMock(
            side_effect=httpx.ReadTimeout("slow")
        )

        with pytest.raises(TranslationError):
            asyncio.run(
                translator.translate_async(png_payload, "image/png", TargetLanguage.SPANISH)
            )

    def test_translate_async_empty(self, translator, fake_client, png_payload):
        response = MagicMock()
        response.text = None
        fake_client.aio.models.generate_content = AsyncMock(return_value=response)

        with pytest.raises(TranslationError):
            asyncio.run(
                translator.translate_async(png_payload, "image/png", TargetLanguage.SPANISH)
            )

    def test_translate_async_unparseable_body(self, translator, fake_client, png_payload):
        fake_client.aio.models.generate_content = AsyncMock(
            side_effect=errors.UnknownApiResponseError("Failed to parse response as JSON")
        )

        with pytest.raises(TranslationError, match="formato esperado"):
            asyncio.run(
                translator.translate_async(png_payload, "image/png", TargetLanguage.SPANISH)
            )
