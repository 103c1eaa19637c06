"""
Recipe data models for the Recipe Importer integration.

This module defines the Pydantic models produced by the free-text recipe
parser and consumed by the display and todo-list services.
"""
from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Category(StrEnum):
    """The four recipe buckets a parsed recipe can land in."""

    SOUP = "soup"
    SIDE = "side"
    MAIN = "main"
    DESSERT = "dessert"


class ParsedIngredient(BaseModel):
    """A single ingredient line split into amount, unit and name.

    Attributes:
        name: The ingredient name (e.g., 'Salted Butter')
        amount: Numeric amount, 0 when the line had no parseable quantity
        unit: Unit as written in the recipe (e.g., 'oz', 'fl oz'), may be empty
        order_index: Position of the ingredient in the recipe, starting at 0
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        description="The name of the ingredient, e.g., 'Whole Milk'"
    )
    amount: float = Field(
        default=0.0,
        ge=0,
        description="The numeric amount, 0 if unparsed or count-only"
    )
    unit: str = Field(
        default="",
        description="The unit of measurement as written, e.g., 'cups', 'g'"
    )
    order_index: int = Field(
        default=0,
        ge=0,
        description="Zero-based display position within the recipe"
    )


class ParsedStep(BaseModel):
    """A single numbered cooking instruction."""

    model_config = ConfigDict(frozen=True)

    instruction: str
    step_number: int = Field(ge=1)


class ParsedRecipe(BaseModel):
    """The structured result of parsing one recipe chunk.

    Attributes:
        title: The recipe title, empty if none could be found
        category: One of soup, side, main or dessert
        servings: Number of servings the amounts are written for
        rating: Star rating between 0 and 5
        cooked: Whether the recipe has been cooked before
        notes: Free-text notes collected from the Notes section
        image_url: Optional image URL
        cooking_time: Optional cooking time as written (e.g., '45 mins')
        ingredients: Ingredients in display order
        steps: Cooking steps in order
    """

    model_config = ConfigDict(frozen=True)

    title: str = ""
    category: Category = Category.MAIN
    servings: int = Field(default=4, ge=1)
    rating: int = Field(default=0, ge=0, le=5)
    cooked: bool = False
    notes: str = ""
    image_url: str | None = None
    cooking_time: str | None = None
    ingredients: list[ParsedIngredient] = Field(default_factory=list)
    steps: list[ParsedStep] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_ordering(self) -> ParsedRecipe:
        """Ingredient and step positions must match their list positions."""
        for index, ingredient in enumerate(self.ingredients):
            if ingredient.order_index != index:
                raise ValueError(
                    f"Ingredient '{ingredient.name}' has order_index "
                    f"{ingredient.order_index}, expected {index}")
        for index, step in enumerate(self.steps):
            if step.step_number != index + 1:
                raise ValueError(
                    f"Step has step_number {step.step_number}, expected {index + 1}")
        return self


class MetricQuantity(BaseModel):
    """An amount converted to grams or milliliters.

    The unit is 'g' or 'ml' when a conversion applied, otherwise the
    original unit is passed through unchanged.
    """

    model_config = ConfigDict(frozen=True)

    amount: float
    unit: str
