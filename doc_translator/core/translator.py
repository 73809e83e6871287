"""OCR and translation through the Gemini multimodal API."""

from __future__ import annotations

import httpx
from google import genai
from google.genai import errors, types
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from doc_translator.core.config import TranslationConfig
from doc_translator.core.encoder import decode_payload
from doc_translator.core.models import QualityMode, TargetLanguage, TranslationResult

FAILURE_MESSAGE = "Falha ao processar o documento com IA."
FORMAT_MESSAGE = "A resposta da IA não está no formato esperado."

# Failures of a single generate_content call
REQUEST_ERRORS = (
    errors.APIError,
    errors.UnknownApiResponseError,
    httpx.HTTPError,
    OSError,
)

FAST_DIRECTIVE = (
    "Extraia de forma eficiente o texto principal do documento, "
    "priorizando títulos, parágrafos e tabelas."
)

PRECISION_DIRECTIVE = (
    "Faça uma análise EXAUSTIVA do documento: leia letras miúdas, notas de "
    "rodapé, carimbos, selos, assinaturas legíveis e anotações à margem. "
    "Nenhum trecho legível pode ser omitido."
)

PROMPT_TEMPLATE = """Você é um sistema avançado de OCR e tradução.
1. Analise a imagem ou documento fornecido.
2. Identifique o idioma original do texto.
3. {directive}
4. Traduza todo o texto extraído INTEGRALMENTE para o idioma: {language}.
5. Preserve parágrafos, quebras de linha e a estrutura do original o máximo possível.

Responda EXCLUSIVAMENTE em formato JSON com exatamente estes dois campos:
{{
  "detectedLanguage": "nome do idioma detectado",
  "translatedText": "o texto traduzido completo"
}}"""

RESPONSE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "detectedLanguage": types.Schema(type=types.Type.STRING),
        "translatedText": types.Schema(type=types.Type.STRING),
    },
    required=["detectedLanguage", "translatedText"],
)


class TranslationError(RuntimeError):
    """Raised when the provider call fails or returns an unusable response."""


class TranslationPayload(BaseModel):
    """The two-field object the provider is instructed to return."""

    model_config = ConfigDict(extra="ignore")

    detected_language: str = Field(alias="detectedLanguage")
    translated_text: str = Field(alias="translatedText")

    @field_validator("detected_language", "translated_text")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


def build_prompt(target_language: TargetLanguage, mode: QualityMode) -> str:
    """Compose the instruction sent alongside the document."""
    directive = (
        PRECISION_DIRECTIVE if mode is QualityMode.HIGH_PRECISION else FAST_DIRECTIVE
    )
    return PROMPT_TEMPLATE.format(
        directive=directive,
        language=TargetLanguage(target_language).value,
    )


def parse_response(text: str | None) -> TranslationResult:
    """
    Validate a raw response body against the two-field schema.

    Raises:
        TranslationError: If the body is empty, not JSON, or misses a field
    """
    if not text or not text.strip():
        raise TranslationError(f"{FAILURE_MESSAGE} A IA retornou uma resposta vazia.")

    try:
        payload = TranslationPayload.model_validate_json(text)
    except ValidationError as e:
        print(f"Invalid translation response: {e}")
        raise TranslationError(
            f"{FAILURE_MESSAGE} {FORMAT_MESSAGE}"
        ) from e

    return TranslationResult(
        detected_language=payload.detected_language.strip(),
        translated_text=payload.translated_text,
    )


class DocumentTranslator:
    """
    Sends documents to Gemini for OCR and translation.

    One call per document, no retries. The genai client is created on first
    use so a missing API key only surfaces when a translation is attempted.

    Example:
        >>> translator = DocumentTranslator(TranslationConfig.from_env())
        >>> result = translator.translate(payload, "image/png", TargetLanguage.ENGLISH)
        >>> result.detected_language
        'Alemão'
    """

    def __init__(
        self,
        config: TranslationConfig | None = None,
        client: genai.Client | None = None,
    ):
        self.config = config or TranslationConfig()
        self._client = client

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            if not self.config.has_api_key:
                raise TranslationError(
                    f"{FAILURE_MESSAGE} Nenhuma chave de API configurada (GEMINI_API_KEY)."
                )
            self._client = genai.Client(api_key=self.config.api_key)
        return self._client

    def model_for(self, mode: QualityMode) -> str:
        if mode is QualityMode.HIGH_PRECISION:
            return self.config.precise_model
        return self.config.fast_model

    def build_config(self, mode: QualityMode) -> types.GenerateContentConfig:
        """
        Request options for a quality mode.

        Only high-precision mode grants a reasoning budget.
        """
        thinking = None
        if mode is QualityMode.HIGH_PRECISION:
            thinking = types.ThinkingConfig(thinking_budget=self.config.thinking_budget)

        return types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=RESPONSE_SCHEMA,
            thinking_config=thinking,
        )

    def build_contents(
        self,
        data: str,
        mime_type: str,
        target_language: TargetLanguage,
        mode: QualityMode,
    ) -> list:
        """Inline document part followed by the text instruction."""
        return [
            types.Part.from_bytes(data=decode_payload(data), mime_type=mime_type),
            build_prompt(target_language, mode),
        ]

    def translate(
        self,
        data: str,
        mime_type: str,
        target_language: TargetLanguage,
        mode: QualityMode = QualityMode.FAST,
    ) -> TranslationResult:
        """
        Extract and translate the text of an encoded document.

        Args:
            data: Base64 payload of the document
            mime_type: Media type of the document
            target_language: Language to translate into
            mode: Quality preset

        Returns:
            Detected language and the full translated text

        Raises:
            TranslationError: On any provider, network, or parsing failure
        """
        mode = QualityMode(mode)
        try:
            response = self.client.models.generate_content(
                model=self.model_for(mode),
                contents=self.build_contents(data, mime_type, target_language, mode),
                config=self.build_config(mode),
            )
        except REQUEST_ERRORS as e:
            raise self._request_failed(e) from e

        return parse_response(response.text)

    async def translate_async(
        self,
        data: str,
        mime_type: str,
        target_language: TargetLanguage,
        mode: QualityMode = QualityMode.FAST,
    ) -> TranslationResult:
        """Async counterpart of translate()."""
        mode = QualityMode(mode)
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model_for(mode),
                contents=self.build_contents(data, mime_type, target_language, mode),
                config=self.build_config(mode),
            )
        except REQUEST_ERRORS as e:
            raise self._request_failed(e) from e

        return parse_response(response.text)

    def _request_failed(self, error: Exception) -> TranslationError:
        print(f"Gemini translation failed: {error}")
        if isinstance(error, errors.APIError):
            return TranslationError(
                f"{FAILURE_MESSAGE} O serviço recusou a solicitação ({error.code})."
            )
        if isinstance(error, errors.UnknownApiResponseError):
            return TranslationError(f"{FAILURE_MESSAGE} {FORMAT_MESSAGE}")
        return TranslationError(
            f"{FAILURE_MESSAGE} Não foi possível conectar ao serviço de IA."
        )
