"""Paginated PDF rendering of translated text using PyMuPDF."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from doc_translator.utils.fonts import FontManager

if TYPE_CHECKING:
    import fitz

POINTS_PER_MM = 72 / 25.4

Measure = Callable[[str], float]

# Shared so the font directories are scanned once per process
DEFAULT_FONT_MANAGER = FontManager()


def wrap_text(text: str, max_width: float, measure: Measure) -> list[str]:
    """
    Split text into lines no wider than max_width.

    Paragraph breaks are kept, blank paragraphs become empty lines, and a
    word wider than a whole line is broken between characters.

    Args:
        text: Text to wrap
        max_width: Available width in points
        measure: Returns the rendered width of a string in points

    Returns:
        Lines in reading order
    """
    lines: list[str] = []

    for paragraph in text.replace("\r\n", "\n").split("\n"):
        current = ""
        for word in paragraph.split():
            candidate = f"{current} {word}" if current else word
            if measure(candidate) <= max_width:
                current = candidate
                continue

            if current:
                lines.append(current)

            if measure(word) <= max_width:
                current = word
            else:
                pieces = _break_word(word, max_width, measure)
                lines.extend(pieces[:-1])
                current = pieces[-1]

        lines.append(current)

    return lines


def _break_word(word: str, max_width: float, measure: Measure) -> list[str]:
    """Break an overlong word into chunks that each fit on a line."""
    pieces = []
    chunk = ""
    for char in word:
        if chunk and measure(chunk + char) > max_width:
            pieces.append(chunk)
            chunk = char
        else:
            chunk += char
    pieces.append(chunk)
    return pieces


class PDFRenderer:
    """
    Lays translated text out on A4 pages and writes a PDF.

    The vertical cursor starts 10 mm below the top margin and advances by
    font_size * line_height points per line. A new page starts whenever the
    next line would cross the bottom margin, so no baseline ever sits lower
    than page_height - MARGIN.
    """

    PAPER = "a4"
    MARGIN = 15 * POINTS_PER_MM
    TOP_OFFSET = 10 * POINTS_PER_MM
    FALLBACK_FONT = "helv"

    def __init__(
        self,
        font_size: float = 12,
        line_height: float = 1.5,
        font_manager: FontManager | None = None,
    ):
        """
        Initialize the renderer.

        Args:
            font_size: Font size in points
            line_height: Line spacing multiplier
            font_manager: Used to find an embeddable Unicode font
        """
        if font_size <= 0 or line_height <= 0:
            raise ValueError("font_size and line_height must be positive")

        self.font_size = font_size
        self.line_height = line_height
        self._font_manager = font_manager or DEFAULT_FONT_MANAGER

    @property
    def line_advance(self) -> float:
        """Distance between consecutive baselines, in points."""
        return self.font_size * self.line_height

    def paginate(
        self, lines: list[str], page_height: float
    ) -> list[list[tuple[float, str]]]:
        """
        Assign each line a page and a baseline position.

        Args:
            lines: Wrapped lines
            page_height: Page height in points

        Returns:
            One list per page of (baseline_y, line) pairs
        """
        top = self.MARGIN + self.TOP_OFFSET
        limit = page_height - self.MARGIN

        if top + self.line_advance > limit:
            raise ValueError("Line height does not fit on a page")

        pages: list[list[tuple[float, str]]] = [[]]
        cursor = top

        for line in lines:
            if cursor + self.line_advance > limit:
                pages.append([])
                cursor = top

            pages[-1].append((cursor, line))
            cursor += self.line_advance

        return pages

    def render(self, text: str) -> bytes:
        """
        Render text into a PDF document.

        Args:
            text: Translated text, newlines marking paragraph breaks

        Returns:
            The PDF file content
        """
        import fitz

        width, height = fitz.paper_size(self.PAPER)
        font = self._load_font()

        def measure(s: str) -> float:
            return font.text_length(s, fontsize=self.font_size)

        lines = wrap_text(text, width - 2 * self.MARGIN, measure)

        doc = fitz.open()
        try:
            for page_lines in self.paginate(lines, height):
                page = doc.new_page(width=width, height=height)
                writer = fitz.TextWriter(page.rect)

                for baseline, line in page_lines:
                    if line:
                        writer.append(
                            (self.MARGIN, baseline),
                            line,
                            font=font,
                            fontsize=self.font_size,
                        )

                writer.write_text(page)

            return doc.tobytes(garbage=4, deflate=True)
        finally:
            doc.close()

    def _load_font(self) -> fitz.Font:
        """Embed a system Unicode font, falling back to built-in Helvetica."""
        import fitz

        font_path = self._font_manager.find_font_file()
        if font_path is not None:
            try:
                return fitz.Font(fontfile=str(font_path))
            except Exception as e:
                print(f"Could not load font {font_path} ({e}), using Helvetica")

        return fitz.Font(self.FALLBACK_FONT)
