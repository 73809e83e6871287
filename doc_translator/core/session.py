"""Session state machine behind the translator view."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import BinaryIO, Callable, Union

from doc_translator.core.config import (
    LINE_HEIGHT_STEP,
    MAX_FONT_SIZE,
    MAX_LINE_HEIGHT,
    MIN_FONT_SIZE,
    MIN_LINE_HEIGHT,
    TranslationConfig,
)
from doc_translator.core.encoder import encode_file_async
from doc_translator.core.exporters import EXPORTERS, ExportArtifact
from doc_translator.core.models import (
    ACCEPTED_MEDIA_TYPES,
    QualityMode,
    TargetLanguage,
    TranslationResult,
    UploadedFile,
)
from doc_translator.core.translator import (
    FAILURE_MESSAGE,
    DocumentTranslator,
    TranslationError,
)
from doc_translator.utils.filenames import FALLBACK_BASENAME

INVALID_FILE_TYPE_MESSAGE = (
    "Por favor, envie uma imagem (JPG, PNG, WEBP) ou um arquivo PDF."
)
READ_ERROR_MESSAGE = "Não foi possível ler o arquivo selecionado."


class AppStatus(str, Enum):
    IDLE = "idle"
    PROCESSING = "processing"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class SessionState:
    """
    Everything the view renders, as one immutable value.

    Attributes:
        status: Where the session is in the upload/translate cycle
        file: The current upload, set once encoding succeeds
        result: Translation of the current upload
        error: User-visible message, if any
        target_language: Selected translation target
        quality_mode: Selected OCR preset
        font_size: Export and preview font size
        line_height: Export and preview line spacing
    """

    status: AppStatus = AppStatus.IDLE
    file: UploadedFile | None = None
    result: TranslationResult | None = None
    error: str | None = None
    target_language: TargetLanguage = TargetLanguage.PORTUGUESE
    quality_mode: QualityMode = QualityMode.FAST
    font_size: int = 14
    line_height: float = 1.6


Listener = Callable[[SessionState], None]
FileContent = Union[bytes, BinaryIO]


def is_accepted_media_type(media_type: str | None) -> bool:
    return (media_type or "").lower() in ACCEPTED_MEDIA_TYPES


def clamp_font_size(value: float) -> int:
    return int(min(MAX_FONT_SIZE, max(MIN_FONT_SIZE, round(value))))


def clamp_line_height(value: float) -> float:
    """Clamp to the allowed range and snap to the slider step."""
    value = min(MAX_LINE_HEIGHT, max(MIN_LINE_HEIGHT, value))
    steps = round((value - MIN_LINE_HEIGHT) / LINE_HEIGHT_STEP)
    return round(MIN_LINE_HEIGHT + steps * LINE_HEIGHT_STEP, 1)


class SessionController:
    """
    Drives one user's session through idle, processing, success and error.

    The controller is the only writer of the session state. Every transition
    replaces the state value and notifies the subscribed listeners, so a
    listener sees each status the session passes through.

    Example:
        >>> controller = SessionController(DocumentTranslator(config))
        >>> state = asyncio.run(controller.process_file("invoice.png", "image/png", data))
        >>> state.status
        <AppStatus.SUCCESS: 'success'>
    """

    def __init__(
        self,
        translator: DocumentTranslator,
        config: TranslationConfig | None = None,
    ):
        self.translator = translator
        self.config = config or translator.config
        self._state = self._initial_state()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> SessionState:
        return self._state

    def subscribe(self, listener: Listener) -> None:
        """Call listener with the new state after every transition."""
        self._listeners.append(listener)

    def select_options(
        self,
        target_language: TargetLanguage | None = None,
        quality_mode: QualityMode | None = None,
    ) -> SessionState:
        """
        Change the target language and/or quality mode.

        Raises:
            RuntimeError: If called outside the idle state
        """
        if self._state.status is not AppStatus.IDLE:
            raise RuntimeError("Options can only be changed before uploading")

        changes: dict = {}
        if target_language is not None:
            changes["target_language"] = TargetLanguage(target_language)
        if quality_mode is not None:
            changes["quality_mode"] = QualityMode(quality_mode)
        return self._transition(**changes)

    def set_formatting(
        self,
        font_size: float | None = None,
        line_height: float | None = None,
    ) -> SessionState:
        """Update the style preferences, clamped to the allowed ranges."""
        changes: dict = {}
        if font_size is not None:
            changes["font_size"] = clamp_font_size(font_size)
        if line_height is not None:
            changes["line_height"] = clamp_line_height(line_height)
        return self._transition(**changes)

    async def process_file(
        self,
        name: str,
        media_type: str | None,
        content: FileContent,
    ) -> SessionState:
        """
        Validate, encode and translate a selected file.

        Only idle sessions accept uploads; anything else is ignored. A media
        type outside the accepted set only sets the error message. Otherwise
        the session goes through processing and ends in success or error.

        Args:
            name: Original filename
            media_type: Media type reported for the file
            content: File bytes or a binary file-like object

        Returns:
            The state after the operation settles
        """
        if self._state.status is not AppStatus.IDLE:
            return self._state

        if not is_accepted_media_type(media_type):
            return self._transition(error=INVALID_FILE_TYPE_MESSAGE)

        media_type = media_type.lower()
        self._transition(
            status=AppStatus.PROCESSING, error=None, file=None, result=None
        )

        try:
            payload = await encode_file_async(content)
            uploaded = UploadedFile(data=payload, mime_type=media_type, name=name)
            self._transition(file=uploaded)

            result = await self.translator.translate_async(
                uploaded.data,
                uploaded.mime_type,
                self._state.target_language,
                self._state.quality_mode,
            )
        except TranslationError as e:
            return self._transition(status=AppStatus.ERROR, error=str(e))
        except OSError as e:
            print(f"Failed to read {name}: {e}")
            return self._transition(status=AppStatus.ERROR, error=READ_ERROR_MESSAGE)
        except Exception as e:
            # Never leave the session in processing
            print(f"Unexpected failure while translating {name}: {e!r}")
            return self._transition(status=AppStatus.ERROR, error=FAILURE_MESSAGE)

        return self._transition(status=AppStatus.SUCCESS, result=result)

    def export(self, fmt: str) -> ExportArtifact:
        """
        Build a downloadable artifact of the current translation.

        Args:
            fmt: One of 'pdf', 'doc', 'txt'

        Raises:
            ValueError: For an unknown format
            RuntimeError: If there is no translation to export
        """
        exporter = EXPORTERS.get(fmt)
        if exporter is None:
            raise ValueError(f"Unknown export format: {fmt}")

        state = self._state
        if state.status is not AppStatus.SUCCESS or state.result is None:
            raise RuntimeError("No translation to export")

        name = state.file.name if state.file else FALLBACK_BASENAME
        return exporter(
            state.result.translated_text,
            name,
            font_size=state.font_size,
            line_height=state.line_height,
        )

    def reset(self) -> SessionState:
        """Start over, keeping the language and mode selection."""
        fresh = self._initial_state()
        return self._set(
            replace(
                fresh,
                target_language=self._state.target_language,
                quality_mode=self._state.quality_mode,
            )
        )

    def _initial_state(self) -> SessionState:
        return SessionState(
            font_size=self.config.default_font_size,
            line_height=self.config.default_line_height,
        )

    def _transition(self, **changes) -> SessionState:
        return self._set(replace(self._state, **changes))

    def _set(self, state: SessionState) -> SessionState:
        self._state = state
        for listener in self._listeners:
            listener(state)
        return state
