import logging

from cookbook.pdf.layout import (
    DEFAULT_FONT_SIZE,
    PAGE_HEIGHT,
    PAGE_MARGIN,
    SUBTITLE_FONT_SIZE,
    TITLE_FONT_SIZE,
    show_text,
)
from cookbook.pdf.text import MAX_LINE_CHARACTERS, text_to_pdf_hex, wrap_text


logger = logging.getLogger(__name__)


def blank_page() -> str:
    """Content for a page with nothing on it, a single space at the top."""
    return show_text(
        text_to_pdf_hex(" "),
        size=DEFAULT_FONT_SIZE,
        x=PAGE_MARGIN,
        y=PAGE_HEIGHT - PAGE_MARGIN,
    )


def line_height(font_size: float) -> float:
    if font_size >= TITLE_FONT_SIZE:
        return font_size + 8
    if font_size >= SUBTITLE_FONT_SIZE:
        return font_size + 6
    if font_size <= 10:
        return font_size + 2
    return font_size + 4


class PdfContentBuilder:
    """Writes text top to bottom, opening a new page when one fills up.

    Every page is a string of text operators in the `/F1` font. Call
    `finalize` at the end to get the list of pages.
    """

    def __init__(self) -> None:
        self.pages: list[str] = []
        self.current_y: float = PAGE_HEIGHT - PAGE_MARGIN
        self.current_content = ""
        self.finalized = False

    def _ensure_page_space(self, font_size: float) -> None:
        if self.current_y - line_height(font_size) < PAGE_MARGIN:
            self._start_new_page()

    def _start_new_page(self) -> None:
        if self.current_content:
            self.pages.append(self.current_content)
        elif not self.pages:
            self.pages.append(blank_page())

        self.current_content = ""
        self.current_y = PAGE_HEIGHT - PAGE_MARGIN

    def add_heading(self, text: str, font_size: float = TITLE_FONT_SIZE) -> None:
        self.add_wrapped_text(text, font_size)
        self.add_spacer(font_size / 2)

    def add_wrapped_text(
        self,
        text: str,
        font_size: float = DEFAULT_FONT_SIZE,
        *,
        indent: float = 0,
        max_length: int | None = None,
    ) -> None:
        if not text:
            return

        if max_length is None:
            max_length = max(40, MAX_LINE_CHARACTERS - int(indent // 4))

        for line in wrap_text(text, max_length):
            self._ensure_page_space(font_size)
            self.current_content += show_text(
                text_to_pdf_hex(line),
                size=font_size,
                x=PAGE_MARGIN + indent,
                y=self.current_y,
            )
            self.current_y -= line_height(font_size)

    def add_spacer(self, size: float = DEFAULT_FONT_SIZE) -> None:
        if self.current_y - size < PAGE_MARGIN:
            self._start_new_page()
            return

        self.current_y -= size

    def finalize(self) -> list[str]:
        """Close the open page and return a copy of all pages. Safe to repeat."""
        if not self.finalized:
            self.pages.append(self.current_content or blank_page())
            self.current_content = ""
            self.finalized = True
            logger.debug("Finalized %d page(s).", len(self.pages))
        return list(self.pages)
