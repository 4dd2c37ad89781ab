"""Page geometry and type sizes shared by the PDF modules."""

PAGE_WIDTH = 612  # US Letter, 8.5in at 72dpi
PAGE_HEIGHT = 792  # 11in
PAGE_MARGIN = 50

DEFAULT_FONT_SIZE = 12
TITLE_FONT_SIZE = 20
SUBTITLE_FONT_SIZE = 14


def pdf_number(value: float) -> str:
    """`742` rather than `742.0`, `735.5` as is."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def show_text(hex_text: str, *, size: float, x: float, y: float) -> str:
    return (
        f"BT /F1 {pdf_number(size)} Tf 1 0 0 1 {pdf_number(x)} {pdf_number(y)} Tm "
        f"<{hex_text}> Tj ET\n"
    )
