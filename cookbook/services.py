import logging

from cookbook.errors import NotAllowed, RecipeNotFound
from cookbook.models import RecipePdf, RecipeView, Requester
from cookbook.pdf import build_recipe_pdf
from cookbook.repository import RecipeRepository


logger = logging.getLogger(__name__)


def can_view(recipe: RecipeView, requester: Requester | None) -> bool:
    """Drafts are only visible to their author and to admins."""
    if not recipe.is_draft:
        return True
    if requester is None:
        return False
    return requester.id == recipe.author.id or requester.is_admin


async def get_recipe(
    id: str,
    *,
    repository: RecipeRepository,
    requester: Requester | None = None,
) -> RecipeView:
    recipe = await repository.get_with_relations(id)
    if recipe is None:
        raise RecipeNotFound(id)

    if not can_view(recipe, requester):
        logger.info("Denied draft recipe %s to %s.", id, requester)
        raise NotAllowed(f"Recipe {id} is private.")

    return recipe


async def generate_recipe_pdf(
    id: str,
    *,
    repository: RecipeRepository,
    requester: Requester | None = None,
) -> RecipePdf:
    recipe = await get_recipe(id, repository=repository, requester=requester)
    return build_recipe_pdf(recipe)
