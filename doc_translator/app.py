"""
Streamlit front end.

Run with ``doc-translator-web`` or ``streamlit run doc_translator/app.py``.
"""

from __future__ import annotations

import asyncio
import html
import sys
from pathlib import Path

import streamlit as st
from PIL import Image

from doc_translator.core.config import (
    LINE_HEIGHT_STEP,
    MAX_FONT_SIZE,
    MAX_LINE_HEIGHT,
    MIN_FONT_SIZE,
    MIN_LINE_HEIGHT,
    TranslationConfig,
)
from doc_translator.core.exporters import EXPORT_LABELS, EXPORTERS
from doc_translator.core.models import QualityMode, TargetLanguage, UploadedFile
from doc_translator.core.preview import render_preview
from doc_translator.core.session import AppStatus, SessionController
from doc_translator.core.translator import DocumentTranslator

MODE_HINTS = {
    QualityMode.FAST: "O modo Rápido é otimizado para documentos simples e velocidade.",
    QualityMode.HIGH_PRECISION: (
        "O modo Alta Precisão usa raciocínio avançado para letras miúdas, "
        "notas de rodapé e carimbos."
    ),
}


def get_controller() -> SessionController:
    """One controller per browser session."""
    if "controller" not in st.session_state:
        config = TranslationConfig.from_env()
        st.session_state.controller = SessionController(
            DocumentTranslator(config), config
        )
        st.session_state.upload_key = 0
        st.session_state.last_upload_id = None
    return st.session_state.controller


def start_over(controller: SessionController) -> None:
    controller.reset()
    # A fresh key empties the uploader widget
    st.session_state.upload_key += 1
    st.session_state.last_upload_id = None


@st.cache_data(show_spinner=False)
def cached_preview(data: str, mime_type: str, name: str) -> Image.Image | None:
    return render_preview(UploadedFile(data=data, mime_type=mime_type, name=name))


def render_header() -> None:
    st.markdown(
        "<h1 style='text-align:center;margin-bottom:0'>Tradutor AI de Documentos</h1>"
        "<p style='text-align:center;color:#64748b'>"
        "Traduza imagens e PDFs instantaneamente com precisão de IA.</p>",
        unsafe_allow_html=True,
    )


def render_idle(controller: SessionController) -> None:
    state = controller.state
    languages = list(TargetLanguage)
    modes = list(QualityMode)

    col_lang, col_mode = st.columns(2)
    with col_lang:
        language = st.radio(
            "Traduzir para:",
            languages,
            index=languages.index(state.target_language),
            format_func=lambda lang: lang.value,
            horizontal=True,
        )
    with col_mode:
        mode = st.radio(
            "Qualidade OCR:",
            modes,
            index=modes.index(state.quality_mode),
            format_func=lambda m: m.label.capitalize(),
            horizontal=True,
        )

    if language != state.target_language or mode != state.quality_mode:
        controller.select_options(target_language=language, quality_mode=mode)

    suffix = " Premium" if mode is QualityMode.HIGH_PRECISION else ""
    uploaded = st.file_uploader(
        f"Selecione seu arquivo para iniciar a tradução{suffix}",
        help="Imagens (JPG, PNG, WEBP) ou PDF",
        key=f"upload-{st.session_state.upload_key}",
    )
    st.caption(MODE_HINTS[mode])

    if uploaded is not None and uploaded.file_id != st.session_state.last_upload_id:
        st.session_state.last_upload_id = uploaded.file_id
        message = (
            f"Extraindo texto e traduzindo para o **{language.value.lower()}** "
            f"em modo **{mode.label}**..."
        )
        with st.spinner(message):
            state = asyncio.run(
                controller.process_file(uploaded.name, uploaded.type, uploaded)
            )
        # Rejected files leave the session idle with only a message
        if state.status is not AppStatus.IDLE:
            st.rerun()

    if controller.state.error:
        st.error(controller.state.error)


def render_error(controller: SessionController) -> None:
    st.error(f"**Erro no Processamento**\n\n{controller.state.error}")
    if st.button("Tentar Novamente", type="primary"):
        start_over(controller)
        st.rerun()


def render_success(controller: SessionController) -> None:
    state = controller.state
    assert state.result is not None

    head, actions = st.columns([2, 3])
    with head:
        st.subheader("Tradução Concluída")
        st.markdown(
            f"Idioma: **{state.result.detected_language}** → "
            f"**{state.target_language.value}** ({state.quality_mode.value})"
        )
    with actions:
        buttons = st.columns(len(EXPORTERS) + 1)
        if buttons[0].button("Novo", width="stretch"):
            start_over(controller)
            st.rerun()
        for column, fmt in zip(buttons[1:], EXPORTERS):
            artifact = controller.export(fmt)
            column.download_button(
                EXPORT_LABELS[fmt],
                data=artifact.data,
                file_name=artifact.filename,
                mime=artifact.mime_type,
                width="stretch",
            )

    style, original, translated = st.columns([3, 4.5, 4.5])

    with style:
        st.markdown("**Estilo de Exportação**")
        font_size = st.slider(
            "Fonte (px)", MIN_FONT_SIZE, MAX_FONT_SIZE, value=state.font_size
        )
        line_height = st.slider(
            "Linhas",
            MIN_LINE_HEIGHT,
            MAX_LINE_HEIGHT,
            value=float(state.line_height),
            step=LINE_HEIGHT_STEP,
        )
        if font_size != state.font_size or line_height != state.line_height:
            controller.set_formatting(font_size=font_size, line_height=line_height)
            st.rerun()

    with original:
        st.markdown("**Original**")
        if state.file is not None:
            preview = cached_preview(
                state.file.data, state.file.mime_type, state.file.name
            )
            if preview is not None:
                st.image(preview, width="stretch")
            else:
                st.info(f"📄 {state.file.name}")

    with translated:
        st.markdown("**Traduzido**")
        st.markdown(
            "<div style='white-space:pre-wrap;max-height:80vh;overflow-y:auto;"
            f"font-size:{state.font_size}px;line-height:{state.line_height};'>"
            f"{html.escape(state.result.translated_text)}</div>",
            unsafe_allow_html=True,
        )


def main() -> None:
    st.set_page_config(page_title="Tradutor AI de Documentos", page_icon="🌐", layout="wide")
    controller = get_controller()

    render_header()

    if not controller.translator.config.has_api_key:
        st.warning("GEMINI_API_KEY não configurada. As traduções vão falhar.")

    status = controller.state.status
    if status is AppStatus.IDLE:
        render_idle(controller)
    elif status is AppStatus.ERROR:
        render_error(controller)
    elif status is AppStatus.SUCCESS:
        render_success(controller)

    st.caption("AI Document Translator • Gemini Vision")


def run() -> None:
    """Console entry point that launches the Streamlit server on this module."""
    from streamlit.web import cli as stcli

    sys.argv = ["streamlit", "run", str(Path(__file__).resolve()), *sys.argv[1:]]
    sys.exit(stcli.main())


if __name__ == "__main__":
    main()
