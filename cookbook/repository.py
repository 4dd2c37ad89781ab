from typing import Protocol

from databases import Database
from databases.interfaces import Record

from cookbook.models import (
    CategoryView,
    RecipeIngredientView,
    RecipeStepView,
    RecipeView,
    UserView,
)


CREATE_TABLES = (
    """
    CREATE TABLE IF NOT EXISTS Users (
        id VARCHAR(64) PRIMARY KEY,
        email VARCHAR(256) NOT NULL,
        name VARCHAR(256),
        role VARCHAR(16) NOT NULL DEFAULT 'USER'
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS Recipes (
        id VARCHAR(64) PRIMARY KEY,
        title VARCHAR(256) NOT NULL,
        description VARCHAR(3000),
        author_id VARCHAR(64) NOT NULL REFERENCES Users(id),
        difficulty VARCHAR(16) NOT NULL,
        prep_time INTEGER NOT NULL,
        servings INTEGER NOT NULL,
        source VARCHAR(1000),
        calories REAL,
        protein_grams REAL,
        carb_grams REAL,
        fat_grams REAL,
        status VARCHAR(16) NOT NULL DEFAULT 'PUBLISHED'
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS Categories (
        id VARCHAR(64) PRIMARY KEY,
        name VARCHAR(256) NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS RecipeCategories (
        recipe_id VARCHAR(64) NOT NULL REFERENCES Recipes(id),
        category_id VARCHAR(64) NOT NULL REFERENCES Categories(id),
        PRIMARY KEY (recipe_id, category_id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS Ingredients (
        id VARCHAR(64) PRIMARY KEY,
        name VARCHAR(256) NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS RecipeIngredients (
        recipe_id VARCHAR(64) NOT NULL REFERENCES Recipes(id),
        ingredient_id VARCHAR(64) NOT NULL REFERENCES Ingredients(id),
        position INTEGER NOT NULL,
        amount REAL,
        unit VARCHAR(32),
        PRIMARY KEY (recipe_id, ingredient_id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS RecipeSteps (
        id VARCHAR(64) PRIMARY KEY,
        recipe_id VARCHAR(64) NOT NULL REFERENCES Recipes(id),
        step_order INTEGER NOT NULL,
        description VARCHAR(3000) NOT NULL,
        duration_sec INTEGER
    )
    """,
)


GET_RECIPE = """
SELECT r.*, u.email AS author_email, u.name AS author_name, u.role AS author_role
FROM Recipes r JOIN Users u ON u.id = r.author_id
WHERE r.id = :id
"""


LIST_CATEGORIES = """
SELECT c.id, c.name
FROM Categories c JOIN RecipeCategories rc ON rc.category_id = c.id
WHERE rc.recipe_id = :id
ORDER BY c.name
"""


LIST_INGREDIENTS = """
SELECT i.id, i.name, ri.amount, ri.unit
FROM Ingredients i JOIN RecipeIngredients ri ON ri.ingredient_id = i.id
WHERE ri.recipe_id = :id
ORDER BY ri.position
"""


LIST_STEPS = """
SELECT id, step_order, description, duration_sec
FROM RecipeSteps WHERE recipe_id = :id
ORDER BY step_order
"""


UPSERT_USER = """
INSERT OR REPLACE INTO Users(id, email, name, role) VALUES (:id, :email, :name, :role)
"""


CREATE_RECIPE = """
INSERT INTO Recipes(
    id, title, description, author_id, difficulty, prep_time, servings, source,
    calories, protein_grams, carb_grams, fat_grams, status
) VALUES (
    :id, :title, :description, :author_id, :difficulty, :prep_time, :servings, :source,
    :calories, :protein_grams, :carb_grams, :fat_grams, :status
)
"""


UPSERT_CATEGORY = "INSERT OR REPLACE INTO Categories(id, name) VALUES (:id, :name)"


LINK_CATEGORY = """
INSERT INTO RecipeCategories(recipe_id, category_id) VALUES (:recipe_id, :category_id)
"""


UPSERT_INGREDIENT = "INSERT OR REPLACE INTO Ingredients(id, name) VALUES (:id, :name)"


LINK_INGREDIENT = """
INSERT INTO RecipeIngredients(recipe_id, ingredient_id, position, amount, unit)
VALUES (:recipe_id, :ingredient_id, :position, :amount, :unit)
"""


CREATE_STEP = """
INSERT INTO RecipeSteps(id, recipe_id, step_order, description, duration_sec)
VALUES (:id, :recipe_id, :step_order, :description, :duration_sec)
"""


async def create_db(db: Database) -> None:
    for statement in CREATE_TABLES:
        await db.execute(query=statement)  # pyright: ignore[reportUnknownMemberType]


class RecipeRepository(Protocol):
    async def get_with_relations(self, id: str) -> RecipeView | None: ...


def _recipe_from_records(
    recipe: Record,
    *,
    categories: list[Record],
    ingredients: list[Record],
    steps: list[Record],
) -> RecipeView:
    author = UserView(
        id=recipe["author_id"],
        email=recipe["author_email"],
        name=recipe["author_name"],
        role=recipe["author_role"],
    )
    return RecipeView(
        id=recipe["id"],
        title=recipe["title"],
        description=recipe["description"],
        author=author,
        difficulty=recipe["difficulty"],
        prep_time=recipe["prep_time"],
        servings=recipe["servings"],
        source=recipe["source"],
        calories=recipe["calories"],
        protein_grams=recipe["protein_grams"],
        carb_grams=recipe["carb_grams"],
        fat_grams=recipe["fat_grams"],
        status=recipe["status"],
        categories=[CategoryView(id=c["id"], name=c["name"]) for c in categories],
        ingredients=[
            RecipeIngredientView(
                id=i["id"], name=i["name"], amount=i["amount"], unit=i["unit"]
            )
            for i in ingredients
        ],
        steps=[
            RecipeStepView(
                id=s["id"],
                order=s["step_order"],
                description=s["description"],
                duration_sec=s["duration_sec"],
            )
            for s in steps
        ],
    )


class RecipesRepository:
    """Recipes repository backed by SQL through `databases`."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def get_with_relations(self, id: str) -> RecipeView | None:
        values = {"id": id}
        recipe = await self.db.fetch_one(  # pyright: ignore[reportUnknownMemberType]
            GET_RECIPE, values=values
        )
        if recipe is None:
            return None

        categories = await self.db.fetch_all(  # pyright: ignore[reportUnknownMemberType]
            LIST_CATEGORIES, values=values
        )
        ingredients = await self.db.fetch_all(  # pyright: ignore[reportUnknownMemberType]
            LIST_INGREDIENTS, values=values
        )
        steps = await self.db.fetch_all(  # pyright: ignore[reportUnknownMemberType]
            LIST_STEPS, values=values
        )
        return _recipe_from_records(
            recipe, categories=categories, ingredients=ingredients, steps=steps
        )

    async def add(self, recipe: RecipeView) -> None:
        async with self.db.transaction():
            await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
                UPSERT_USER,
                values={
                    "id": recipe.author.id,
                    "email": recipe.author.email,
                    "name": recipe.author.name,
                    "role": recipe.author.role.value,
                },
            )
            await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
                CREATE_RECIPE,
                values={
                    "id": recipe.id,
                    "title": recipe.title,
                    "description": recipe.description,
                    "author_id": recipe.author.id,
                    "difficulty": recipe.difficulty.value,
                    "prep_time": recipe.prep_time,
                    "servings": recipe.servings,
                    "source": recipe.source,
                    "calories": recipe.calories,
                    "protein_grams": recipe.protein_grams,
                    "carb_grams": recipe.carb_grams,
                    "fat_grams": recipe.fat_grams,
                    "status": recipe.status.value,
                },
            )
            for category in recipe.categories:
                await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
                    UPSERT_CATEGORY, values={"id": category.id, "name": category.name}
                )
                await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
                    LINK_CATEGORY,
                    values={"recipe_id": recipe.id, "category_id": category.id},
                )
            for position, ingredient in enumerate(recipe.ingredients):
                await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
                    UPSERT_INGREDIENT,
                    values={"id": ingredient.id, "name": ingredient.name},
                )
                await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
                    LINK_INGREDIENT,
                    values={
                        "recipe_id": recipe.id,
                        "ingredient_id": ingredient.id,
                        "position": position,
                        "amount": ingredient.amount,
                        "unit": ingredient.unit,
                    },
                )
            for step in recipe.steps:
                await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
                    CREATE_STEP,
                    values={
                        "id": step.id,
                        "recipe_id": recipe.id,
                        "step_order": step.order,
                        "description": step.description,
                        "duration_sec": step.duration_sec,
                    },
                )
