"""Configuration management for the document translator."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_MODEL = "gemini-3-flash-preview"

# Bounds of the export style controls
MIN_FONT_SIZE = 10
MAX_FONT_SIZE = 32
MIN_LINE_HEIGHT = 1.0
MAX_LINE_HEIGHT = 3.0
LINE_HEIGHT_STEP = 0.1


@dataclass
class TranslationConfig:
    """
    Configuration for document translation.

    Attributes:
        api_key: Gemini API key. Empty means requests will be refused
        fast_model: Model used in fast mode
        precise_model: Model used in high-precision mode
        thinking_budget: Reasoning tokens granted in high-precision mode
        default_font_size: Initial font size of the translated view and exports
        default_line_height: Initial line spacing multiplier
    """

    api_key: str = ""
    fast_model: str = DEFAULT_MODEL
    precise_model: str = DEFAULT_MODEL
    thinking_budget: int = 24576
    default_font_size: int = 14
    default_line_height: float = 1.6

    def __post_init__(self) -> None:
        """Validate the formatting defaults."""
        if not MIN_FONT_SIZE <= self.default_font_size <= MAX_FONT_SIZE:
            raise ValueError(
                f"default_font_size must be between {MIN_FONT_SIZE} and {MAX_FONT_SIZE}"
            )
        if not MIN_LINE_HEIGHT <= self.default_line_height <= MAX_LINE_HEIGHT:
            raise ValueError(
                f"default_line_height must be between {MIN_LINE_HEIGHT} and {MAX_LINE_HEIGHT}"
            )
        if self.thinking_budget < 0:
            raise ValueError("thinking_budget cannot be negative")

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key.strip())

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> TranslationConfig:
        """
        Build a config from environment variables.

        A .env file is loaded first if present. Variables already set in the
        environment win over the file.
        """
        load_dotenv(dotenv_path)

        kwargs: dict = {
            "api_key": os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY") or "",
        }

        fast_model = os.getenv("DOC_TRANSLATOR_FAST_MODEL")
        if fast_model:
            kwargs["fast_model"] = fast_model

        precise_model = os.getenv("DOC_TRANSLATOR_PRECISE_MODEL")
        if precise_model:
            kwargs["precise_model"] = precise_model

        budget = os.getenv("DOC_TRANSLATOR_THINKING_BUDGET")
        if budget:
            try:
                kwargs["thinking_budget"] = int(budget)
            except ValueError:
                raise ValueError(
                    f"DOC_TRANSLATOR_THINKING_BUDGET must be an integer, got {budget!r}"
                ) from None

        return cls(**kwargs)

    @classmethod
    def for_pro_model(cls, api_key: str = "") -> TranslationConfig:
        """Use the larger model for high-precision requests."""
        return cls(
            api_key=api_key,
            precise_model="gemini-3-pro-preview",
            thinking_budget=32768,
        )

    @classmethod
    def for_low_latency(cls, api_key: str = "") -> TranslationConfig:
        """Keep the reasoning budget small so precise mode stays responsive."""
        return cls(api_key=api_key, thinking_budget=4096)
