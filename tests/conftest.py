from typing import Any, Callable

import pytest

from cookbook.models import RecipeView
from tests.fakes import recipe_data


@pytest.fixture
def make_recipe() -> Callable[..., RecipeView]:
    def factory(**overrides: Any) -> RecipeView:
        return RecipeView.model_validate(recipe_data(**overrides))

    return factory


@pytest.fixture
def recipe(make_recipe: Callable[..., RecipeView]) -> RecipeView:
    return make_recipe()
