"""Command-line interface for Document Translator."""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

from doc_translator import __version__
from doc_translator.core.config import TranslationConfig
from doc_translator.core.encoder import encode_file
from doc_translator.core.exporters import EXPORTERS
from doc_translator.core.models import QualityMode, TargetLanguage
from doc_translator.core.session import (
    INVALID_FILE_TYPE_MESSAGE,
    clamp_font_size,
    clamp_line_height,
    is_accepted_media_type,
)
from doc_translator.core.translator import DocumentTranslator, TranslationError
from doc_translator.utils.filenames import guess_media_type

LANGUAGES = {
    "pt": TargetLanguage.PORTUGUESE,
    "en": TargetLanguage.ENGLISH,
    "es": TargetLanguage.SPANISH,
}

MODES = {
    "fast": QualityMode.FAST,
    "precise": QualityMode.HIGH_PRECISION,
}


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="doc-translator",
        description="Extract and translate the text of an image or PDF with Gemini.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  doc-translator invoice.png -t en
  doc-translator contrato.pdf -m precise -f pdf doc
  doc-translator scan.jpg -f txt -o exports/
  doc-translator scan.webp --font-size 18 --line-height 2.0

Accepted files: JPEG, PNG, WEBP, PDF
Output files are named <name>_traduzido.<ext>
        """,
    )

    parser.add_argument(
        "file_path",
        type=str,
        help="Path to the image or PDF to translate",
    )

    parser.add_argument(
        "-t",
        "--target",
        type=str,
        choices=sorted(LANGUAGES),
        default="pt",
        help="Target language (default: pt)",
    )

    parser.add_argument(
        "-m",
        "--mode",
        type=str,
        choices=sorted(MODES),
        default="fast",
        help="OCR quality: fast, or precise for small print and stamps (default: fast)",
    )

    parser.add_argument(
        "-f",
        "--formats",
        nargs="+",
        choices=list(EXPORTERS),
        default=["txt"],
        help="Export formats (default: txt)",
    )

    parser.add_argument(
        "-o",
        "--output-dir",
        type=str,
        default=None,
        help="Directory for exported files (default: next to the input)",
    )

    parser.add_argument(
        "--font-size",
        type=int,
        default=None,
        help="Font size for DOC/PDF export, 10-32 (default: 14)",
    )

    parser.add_argument(
        "--line-height",
        type=float,
        default=None,
        help="Line spacing for DOC/PDF export, 1.0-3.0 (default: 1.6)",
    )

    parser.add_argument(
        "--model",
        type=str,
        default=None,
        help="Override the Gemini model for the chosen mode",
    )

    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    file_path = Path(args.file_path).resolve()

    if not file_path.exists():
        print(f"Error: File not found: {file_path}", file=sys.stderr)
        return 1

    media_type = guess_media_type(file_path)
    if not is_accepted_media_type(media_type):
        print(f"Error: {INVALID_FILE_TYPE_MESSAGE}", file=sys.stderr)
        return 1

    output_dir = Path(args.output_dir) if args.output_dir else file_path.parent
    target = LANGUAGES[args.target]
    mode = MODES[args.mode]

    try:
        config = TranslationConfig.from_env()
        if args.model:
            if mode is QualityMode.HIGH_PRECISION:
                config.precise_model = args.model
            else:
                config.fast_model = args.model

        font_size = clamp_font_size(
            config.default_font_size if args.font_size is None else args.font_size
        )
        line_height = clamp_line_height(
            config.default_line_height if args.line_height is None else args.line_height
        )

        _log_start(file_path, media_type, target, mode, args.formats)
        start = time.time()

        translator = DocumentTranslator(config)
        result = translator.translate(encode_file(file_path), media_type, target, mode)

        print(f"Detected language: {result.detected_language}")

        for fmt in args.formats:
            artifact = EXPORTERS[fmt](
                result.translated_text,
                file_path.name,
                font_size=font_size,
                line_height=line_height,
            )
            saved = artifact.save(output_dir)
            print(f"  Saved {saved}")

        _log_complete(start)
        return 0

    except TranslationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 130


def _log_start(
    file_path: Path,
    media_type: str,
    target: TargetLanguage,
    mode: QualityMode,
    formats: list[str],
) -> None:
    """Print startup information."""
    print("=" * 50)
    print("Document Translator")
    print("=" * 50)
    print(f"Input:   {file_path} ({media_type})")
    print(f"Target:  {target.value}")
    print(f"Mode:    {mode.label}")
    print(f"Exports: {', '.join(formats)}")
    print("=" * 50)
    print()


def _log_complete(start_time: float) -> None:
    """Print completion summary."""
    print("=" * 50)
    print(f"Complete! Total time: {time.time() - start_time:.2f}s")
    print("=" * 50)


if __name__ == "__main__":
    sys.exit(main())
