from enum import Enum

from pydantic import BaseModel, Field


class Role(Enum):
    user = "USER"
    admin = "ADMIN"


class Difficulty(Enum):
    easy = "EASY"
    medium = "MEDIUM"
    hard = "HARD"


class RecipeStatus(Enum):
    draft = "DRAFT"
    published = "PUBLISHED"


class UserView(BaseModel):
    id: str
    email: str
    name: str | None = None
    role: Role = Role.user


class CategoryView(BaseModel):
    id: str
    name: str


class RecipeIngredientView(BaseModel):
    id: str
    name: str
    amount: float | None = None
    unit: str | None = None


class RecipeStepView(BaseModel):
    id: str
    order: int = Field(ge=0)
    description: str
    duration_sec: int | None = None


class RecipeView(BaseModel):
    """A recipe with its author and children already loaded.

    Nutrition values are plain numbers or `None`, never placeholder strings.
    """

    id: str
    title: str
    description: str | None = None
    author: UserView
    difficulty: Difficulty
    prep_time: int
    servings: int
    source: str | None = None
    calories: float | None = None
    protein_grams: float | None = None
    carb_grams: float | None = None
    fat_grams: float | None = None
    status: RecipeStatus = RecipeStatus.published
    categories: list[CategoryView] = []
    ingredients: list[RecipeIngredientView] = []
    steps: list[RecipeStepView] = []

    @property
    def is_draft(self) -> bool:
        return self.status is RecipeStatus.draft


class Requester(BaseModel):
    id: str
    role: Role = Role.user

    @property
    def is_admin(self) -> bool:
        return self.role is Role.admin


class RecipePdf:
    def __init__(self, *, buffer: bytes, filename: str) -> None:
        self.buffer = buffer
        self.filename = filename

    def __repr__(self) -> str:
        return f"<RecipePdf(filename={self.filename}, size={len(self.buffer)})>"
