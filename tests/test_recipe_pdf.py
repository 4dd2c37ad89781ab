import re
from typing import Callable

from pydantic import ValidationError
import pytest

from cookbook.models import RecipeIngredientView, RecipeView
from cookbook.pdf.recipe import build_recipe_pdf, format_ingredient, sanitize_filename
from tests.fakes import recipe_data


TEXT_RE = re.compile(rb"<([0-9A-F]*)> Tj")


def shown_text(pdf: bytes) -> list[str]:
    return [bytes.fromhex(h.decode()).decode("latin-1") for h in TEXT_RE.findall(pdf)]


def section(text: list[str], heading: str, next_heading: str | None) -> list[str]:
    start = text.index(heading) + 1
    end = text.index(next_heading) if next_heading else len(text)
    return text[start:end]


def test_golden_recipe(recipe: RecipeView) -> None:
    pdf = build_recipe_pdf(recipe)
    text = shown_text(pdf.buffer)

    assert pdf.filename == "pao-de-acucar-tradicional.pdf"
    assert text == [
        "Pão de Açúcar Tradicional",
        "Autor: Ana",
        "Um pão doce de padaria.",
        "Informacoes gerais",
        "Dificuldade: MEDIUM",
        "Tempo de preparo: 90 min",
        "Rendimento: 8 porcoes",
        "Categorias: Pães",
        "Ingredientes",
        "- 500 g - Farinha de trigo",
        "Modo de preparo",
        "1. Asse por 25 minutos.",
    ]


def test_deterministic(recipe: RecipeView) -> None:
    assert build_recipe_pdf(recipe).buffer == build_recipe_pdf(recipe).buffer


def test_author_falls_back_to_email(make_recipe: Callable[..., RecipeView]) -> None:
    recipe = make_recipe(author={"id": "u", "email": "chef@example.com"})
    assert "Autor: chef@example.com" in shown_text(build_recipe_pdf(recipe).buffer)


def test_nutrition_lines(make_recipe: Callable[..., RecipeView]) -> None:
    recipe = make_recipe(calories=320.0, protein_grams=12.5, fat_grams=4)
    text = shown_text(build_recipe_pdf(recipe).buffer)
    assert "Calorias: 320 kcal" in text
    assert "Proteinas: 12.5 g | Gorduras: 4 g" in text


def test_no_macros_line_without_values(recipe: RecipeView) -> None:
    text = shown_text(build_recipe_pdf(recipe).buffer)
    assert not any(t.startswith(("Calorias", "Proteinas", "Carboidratos")) for t in text)


def test_empty_ingredients_placeholder(make_recipe: Callable[..., RecipeView]) -> None:
    text = shown_text(build_recipe_pdf(make_recipe(ingredients=[])).buffer)
    got = section(text, "Ingredientes", "Modo de preparo")
    assert got == ["Nenhum ingrediente cadastrado."]


def test_empty_steps_placeholder(make_recipe: Callable[..., RecipeView]) -> None:
    text = shown_text(build_recipe_pdf(make_recipe(steps=[])).buffer)
    assert section(text, "Modo de preparo", None) == ["Nenhum passo cadastrado."]


def test_steps_sorted_with_durations(make_recipe: Callable[..., RecipeView]) -> None:
    recipe = make_recipe(
        steps=[
            {"id": "b", "order": 1, "description": "Asse.", "duration_sec": 1500},
            {"id": "a", "order": 0, "description": "Misture.", "duration_sec": 90},
            {"id": "c", "order": 2, "description": "Sirva.", "duration_sec": 0},
        ]
    )
    text = shown_text(build_recipe_pdf(recipe).buffer)
    assert section(text, "Modo de preparo", None) == [
        "1. Misture.",
        "Duracao: 2 min",
        "2. Asse.",
        "Duracao: 25 min",
        "3. Sirva.",
    ]
    assert [s.id for s in recipe.steps] == ["b", "a", "c"]


def test_long_step_wraps_over_three_lines(
    make_recipe: Callable[..., RecipeView],
) -> None:
    description = " ".join(["farinha"] * 30)
    recipe = make_recipe(steps=[{"id": "s", "order": 0, "description": description}])
    text = shown_text(build_recipe_pdf(recipe).buffer)

    got = section(text, "Modo de preparo", None)
    assert len(got) == 3
    assert all(len(line) <= 84 for line in got)
    assert " ".join(got) == f"1. {description}"


def test_source_section(make_recipe: Callable[..., RecipeView]) -> None:
    recipe = make_recipe(source="Caderno da vó")
    text = shown_text(build_recipe_pdf(recipe).buffer)
    assert text[-2:] == ["Fonte", "Caderno da vó"]


def test_long_recipe_spans_pages(make_recipe: Callable[..., RecipeView]) -> None:
    ingredients = [
        {"id": f"i{n}", "name": f"Ingrediente {n}", "amount": n, "unit": "g"}
        for n in range(120)
    ]
    pdf = build_recipe_pdf(make_recipe(ingredients=ingredients)).buffer
    assert int(re.search(rb"/Count (\d+)", pdf).group(1)) >= 3
    assert "- 119 g - Ingrediente 119" in shown_text(pdf)


@pytest.mark.parametrize(
    "ingredient,expected",
    (
        ({"amount": 500, "unit": "g"}, "500 g - Farinha"),
        ({"amount": 1.5, "unit": "xícara"}, "1.50 xícara - Farinha"),
        ({"amount": 2.0}, "2 Farinha"),
        ({"unit": "a gosto"}, "a gosto - Farinha"),
        ({"amount": 0, "unit": "g"}, "0 g - Farinha"),
        ({}, "Farinha"),
    ),
)
def test_format_ingredient(ingredient: dict[str, object], expected: str) -> None:
    got = format_ingredient(RecipeIngredientView(id="i", name="Farinha", **ingredient))
    assert got == expected


@pytest.mark.parametrize(
    "title,expected",
    (
        ("Pão de Açúcar Tradicional", "pao-de-acucar-tradicional"),
        ("  Bolo!!! de -- Cenoura  ", "bolo-de-cenoura"),
        ("Crème brûlée", "creme-brulee"),
        ("日本", "receita"),
        ("", "receita"),
    ),
)
def test_sanitize_filename(title: str, expected: str) -> None:
    assert sanitize_filename(title) == expected


@pytest.mark.parametrize("field", ("difficulty", "prep_time", "servings"))
def test_required_metadata(field: str) -> None:
    data = recipe_data()
    del data[field]
    with pytest.raises(ValidationError):
        RecipeView.model_validate(data)
