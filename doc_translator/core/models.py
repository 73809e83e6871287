"""Value types shared by the translation pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

ACCEPTED_MEDIA_TYPES = (
    "image/jpeg",
    "image/png",
    "image/webp",
    "application/pdf",
)


class TargetLanguage(str, Enum):
    """Languages offered as translation targets, labelled as shown to the user."""

    PORTUGUESE = "Português"
    ENGLISH = "Inglês"
    SPANISH = "Espanhol"


class QualityMode(str, Enum):
    """
    OCR quality presets.

    FAST favours latency and extracts the primary text only. HIGH_PRECISION
    asks for exhaustive analysis and turns on the provider's reasoning budget.
    """

    FAST = "rápido"
    HIGH_PRECISION = "alta-precisão"

    @property
    def label(self) -> str:
        return self.value.replace("-", " ")


@dataclass(frozen=True)
class UploadedFile:
    """A user-selected file, already encoded for transport."""

    data: str  # base64 payload
    mime_type: str
    name: str

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")


@dataclass(frozen=True)
class TranslationResult:
    """What the provider returned for one document."""

    detected_language: str
    translated_text: str
