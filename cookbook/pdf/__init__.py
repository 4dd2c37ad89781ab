"""Minimal PDF output written by hand: one font, US Letter pages, text only."""

from cookbook.pdf.content import PdfContentBuilder
from cookbook.pdf.document import build_pdf_document
from cookbook.pdf.recipe import build_recipe_pdf, format_ingredient, sanitize_filename
from cookbook.pdf.text import text_to_pdf_hex, wrap_text


__all__ = [
    "PdfContentBuilder",
    "build_pdf_document",
    "build_recipe_pdf",
    "format_ingredient",
    "sanitize_filename",
    "text_to_pdf_hex",
    "wrap_text",
]
