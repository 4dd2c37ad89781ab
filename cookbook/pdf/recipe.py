import logging
import math
import re
import unicodedata

from cookbook.models import RecipeIngredientView, RecipePdf, RecipeView
from cookbook.pdf.content import PdfContentBuilder
from cookbook.pdf.document import build_pdf_document
from cookbook.pdf.layout import (
    DEFAULT_FONT_SIZE,
    SUBTITLE_FONT_SIZE,
    TITLE_FONT_SIZE,
    pdf_number,
)
from cookbook.pdf.text import MAX_LINE_CHARACTERS


logger = logging.getLogger(__name__)


DEFAULT_FILENAME = "receita"

LIST_INDENT = 10
LIST_MAX_LENGTH = MAX_LINE_CHARACTERS - 6
SECTION_SPACING = 12

_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9]+")


def sanitize_filename(title: str) -> str:
    decomposed = unicodedata.normalize("NFD", title)
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    slug = _NON_ALNUM_RE.sub("-", stripped).strip("-")
    return (slug or DEFAULT_FILENAME).lower()


def format_amount(amount: float) -> str:
    if float(amount).is_integer():
        return str(int(amount))
    return f"{amount:.2f}"


def format_ingredient(ingredient: RecipeIngredientView) -> str:
    unit = ingredient.unit or ""
    if ingredient.amount is not None:
        amount = format_amount(ingredient.amount)
        if unit:
            return f"{amount} {unit} - {ingredient.name}"
        return f"{amount} {ingredient.name}"

    if unit:
        return f"{unit} - {ingredient.name}"

    return ingredient.name


def _general_info(builder: PdfContentBuilder, recipe: RecipeView) -> None:
    builder.add_heading("Informacoes gerais", SUBTITLE_FONT_SIZE)
    builder.add_wrapped_text(f"Dificuldade: {recipe.difficulty.value}")
    builder.add_wrapped_text(f"Tempo de preparo: {recipe.prep_time} min")
    builder.add_wrapped_text(f"Rendimento: {recipe.servings} porcoes")

    if recipe.calories is not None:
        builder.add_wrapped_text(f"Calorias: {pdf_number(recipe.calories)} kcal")

    macros: list[str] = []
    if recipe.protein_grams is not None:
        macros.append(f"Proteinas: {pdf_number(recipe.protein_grams)} g")
    if recipe.carb_grams is not None:
        macros.append(f"Carboidratos: {pdf_number(recipe.carb_grams)} g")
    if recipe.fat_grams is not None:
        macros.append(f"Gorduras: {pdf_number(recipe.fat_grams)} g")
    if macros:
        builder.add_wrapped_text(" | ".join(macros))

    if recipe.categories:
        names = ", ".join(category.name for category in recipe.categories)
        builder.add_wrapped_text(f"Categorias: {names}")


def _ingredients(builder: PdfContentBuilder, recipe: RecipeView) -> None:
    builder.add_heading("Ingredientes", SUBTITLE_FONT_SIZE)
    if not recipe.ingredients:
        builder.add_wrapped_text("Nenhum ingrediente cadastrado.")
        return

    for ingredient in recipe.ingredients:
        builder.add_wrapped_text(
            f"- {format_ingredient(ingredient)}",
            DEFAULT_FONT_SIZE,
            indent=LIST_INDENT,
            max_length=LIST_MAX_LENGTH,
        )


def _method(builder: PdfContentBuilder, recipe: RecipeView) -> None:
    builder.add_heading("Modo de preparo", SUBTITLE_FONT_SIZE)
    if not recipe.steps:
        builder.add_wrapped_text("Nenhum passo cadastrado.")
        return

    for step in sorted(recipe.steps, key=lambda s: s.order):
        builder.add_wrapped_text(
            f"{step.order + 1}. {step.description}",
            DEFAULT_FONT_SIZE,
            indent=LIST_INDENT,
            max_length=LIST_MAX_LENGTH,
        )
        if step.duration_sec:
            minutes = math.floor(step.duration_sec / 60 + 0.5)
            builder.add_wrapped_text(f"   Duracao: {minutes} min", 10, indent=LIST_INDENT)
        builder.add_spacer(6)


def build_recipe_pdf(recipe: RecipeView) -> RecipePdf:
    """Render a recipe to PDF bytes and a download filename.

    Sections always come out in the same order: title, author, description,
    general info, ingredients, method and source.
    """
    builder = PdfContentBuilder()

    builder.add_heading(recipe.title, TITLE_FONT_SIZE)
    author = recipe.author.name or recipe.author.email
    builder.add_wrapped_text(f"Autor: {author}", SUBTITLE_FONT_SIZE)

    if recipe.description:
        builder.add_spacer(10)
        builder.add_wrapped_text(recipe.description, DEFAULT_FONT_SIZE)

    builder.add_spacer(SECTION_SPACING)
    _general_info(builder, recipe)

    builder.add_spacer(SECTION_SPACING)
    _ingredients(builder, recipe)

    builder.add_spacer(SECTION_SPACING)
    _method(builder, recipe)

    if recipe.source:
        builder.add_spacer(SECTION_SPACING)
        builder.add_heading("Fonte", SUBTITLE_FONT_SIZE)
        builder.add_wrapped_text(recipe.source)

    filename = f"{sanitize_filename(recipe.title)}.pdf"
    buffer = build_pdf_document(builder.finalize())
    logger.debug("Built %s (%d bytes).", filename, len(buffer))
    return RecipePdf(buffer=buffer, filename=filename)
