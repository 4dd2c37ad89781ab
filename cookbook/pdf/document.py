from typing import Iterable

from cookbook.pdf.content import blank_page
from cookbook.pdf.layout import PAGE_HEIGHT, PAGE_WIDTH


HEADER = "%PDF-1.4\n"

FONT = "<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica /Encoding /WinAnsiEncoding >>"


class PdfObjects:
    """Numbered PDF objects, in the order they will be written."""

    def __init__(self) -> None:
        self.objects: list[str] = []

    def add(self, body: str) -> int:
        id = len(self.objects) + 1
        self.objects.append(f"{id} 0 obj\n{body}\nendobj\n")
        return id

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self):
        return iter(self.objects)


def _stream(content: str) -> str:
    length = len(content.encode("latin-1"))
    return f"<< /Length {length} >>\nstream\n{content}\nendstream"


def build_pdf_document(page_contents: Iterable[str]) -> bytes:
    """Assemble a complete PDF file around already rendered page contents.

    Objects go out font first, then a content stream and page per page, then
    the page tree and the catalog. Page objects point at the page tree
    before it exists, so its id is worked out up front.
    """
    pages = list(page_contents) or [""]
    objects = PdfObjects()
    page_ids: list[int] = []

    font_id = objects.add(FONT)
    pages_id = len(pages) * 2 + 2

    for content in pages:
        content_id = objects.add(_stream(content or blank_page()))
        page_ids.append(
            objects.add(
                f"<< /Type /Page /Parent {pages_id} 0 R "
                f"/MediaBox [0 0 {PAGE_WIDTH} {PAGE_HEIGHT}] "
                f"/Contents {content_id} 0 R "
                f"/Resources << /Font << /F1 {font_id} 0 R >> >> >>"
            )
        )

    kids = " ".join(f"{id} 0 R" for id in page_ids)
    objects.add(f"<< /Type /Pages /Count {len(page_ids)} /Kids [{kids}] >>")
    catalog_id = objects.add(f"<< /Type /Catalog /Pages {pages_id} 0 R >>")

    body = bytearray(HEADER.encode("latin-1"))
    offsets: list[int] = []
    for obj in objects:
        offsets.append(len(body))
        body.extend(obj.encode("latin-1"))

    xref_offset = len(body)
    size = len(objects) + 1
    body.extend(f"xref\n0 {size}\n0000000000 65535 f \n".encode("latin-1"))
    for offset in offsets:
        body.extend(f"{offset:010d} 00000 n \n".encode("latin-1"))

    body.extend(
        (
            f"trailer\n<< /Size {size} /Root {catalog_id} 0 R >>\n"
            f"startxref\n{xref_offset}\n%%EOF"
        ).encode("latin-1")
    )
    return bytes(body)
