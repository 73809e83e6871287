"""Font discovery for embedding in exported PDFs."""

from __future__ import annotations

import platform
from collections.abc import Iterator
from pathlib import Path

from PIL import ImageFont


class FontManager:
    """
    Finds a Unicode TrueType font on the host to embed in PDF exports.

    Handles the messy reality of font locations on macOS, Linux, and Windows.
    Candidates are checked with Pillow so a corrupt or unsupported file is
    never handed to the PDF writer.
    """

    # Common font locations by OS
    FONT_DIRS = {
        "Darwin": [
            Path("/System/Library/Fonts"),
            Path("/Library/Fonts"),
            Path.home() / "Library/Fonts",
        ],
        "Linux": [
            Path("/usr/share/fonts"),
            Path("/usr/local/share/fonts"),
            Path.home() / ".fonts",
            Path.home() / ".local/share/fonts",
        ],
        "Windows": [
            Path("C:/Windows/Fonts"),
        ],
    }

    # Fonts with full Latin coverage (accents, typographic quotes, euro sign)
    UNICODE_FONTS = {
        "Darwin": ["Arial Unicode.ttf", "Arial.ttf", "Helvetica.ttc"],
        "Linux": [
            "DejaVuSans.ttf",
            "LiberationSans-Regular.ttf",
            "NotoSans-Regular.ttf",
            "FreeSans.ttf",
        ],
        "Windows": ["arial.ttf", "segoeui.ttf", "tahoma.ttf"],
    }

    def __init__(self) -> None:
        self._system = platform.system()
        self._cache: dict[str, Path | None] = {}

    def find_font_file(self) -> Path | None:
        """
        Path of the first usable Unicode font, or None if there is none.

        The result is cached to avoid repeated filesystem scans.
        """
        if self._system in self._cache:
            return self._cache[self._system]

        found = None
        for candidate in self._get_font_candidates():
            if self._is_loadable(candidate):
                found = candidate
                break

        self._cache[self._system] = found
        return found

    def _is_loadable(self, path: Path) -> bool:
        try:
            ImageFont.truetype(str(path), 12)
        except OSError:
            return False
        return True

    def _get_font_candidates(self) -> Iterator[Path]:
        """Generate possible font paths, in order of preference."""
        font_dirs = self.FONT_DIRS.get(self._system, [])
        names = self.UNICODE_FONTS.get(self._system, [])

        for name in names:
            for font_dir in font_dirs:
                if not font_dir.exists():
                    continue

                direct = font_dir / name
                if direct.exists():
                    yield direct

                # macOS keeps many fonts in a Supplemental folder
                supplemental = font_dir / "Supplemental" / name
                if supplemental.exists():
                    yield supplemental

                # Linux distros nest fonts a couple of levels deep
                yield from sorted(font_dir.glob(f"*/{name}"))
                yield from sorted(font_dir.glob(f"*/*/{name}"))
