"""
Free-text Recipe Parser.

This module turns loosely structured, human-written recipe text into
ParsedRecipe objects. A recipe is scanned line by line, top to bottom, in
one of four sections: metadata at the top, then ingredients, steps and
notes, each introduced by a header line such as "Ingredients:",
"Method:" or "Notes:".
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum

from ..models.recipe import Category, ParsedIngredient, ParsedRecipe, ParsedStep
from .base_parser import BaseRecipeParser
from .ingredient_line import clean_ingredient_line, parse_ingredient_line
from .splitter import split_recipes

_LOGGER = logging.getLogger(__name__)


class Section(Enum):
    """Which part of the recipe the scanner is in."""

    META = "meta"
    INGREDIENTS = "ingredients"
    STEPS = "steps"
    NOTES = "notes"


SECTION_HEADERS = (
    (re.compile(r"^(?:#{3,4}\s*)?ingredients\b:?", re.IGNORECASE), Section.INGREDIENTS),
    (re.compile(r"^(?:####\s*)?(?:steps|method)\b:?", re.IGNORECASE), Section.STEPS),
    (re.compile(r"^notes\b:?", re.IGNORECASE), Section.NOTES),
)

TITLE_PATTERN = re.compile(r"^(?:title:|# recipe:)\s*", re.IGNORECASE)
CATEGORY_PATTERN = re.compile(r"^category:\s*", re.IGNORECASE)
SERVINGS_PATTERN = re.compile(r"^servings:\s*", re.IGNORECASE)
RATING_PATTERN = re.compile(r"^rating:\s*", re.IGNORECASE)
COOKED_PATTERN = re.compile(r"^cooked:\s*", re.IGNORECASE)
TIME_PATTERN = re.compile(
    r"^(?:###\s*)?(?:cooking time|prep time|total time|ready in|time):\s*",
    re.IGNORECASE,
)
IMAGE_PATTERN = re.compile(r"^(?:image|photo):\s*", re.IGNORECASE)
LEADING_HASH_PATTERN = re.compile(r"^#\s*")
STEP_NUMBER_PATTERN = re.compile(r"^\d+\.\s*")
DIGITS_PATTERN = re.compile(r"\d+")

NOT_SPECIFIED = ("not specified", "n/a")

DEFAULT_SERVINGS = 4
# Longer digit runs are treated as unparseable
MAX_NUMBER_DIGITS = 6
MAX_RATING = 5

# Checked in order against the category text and the title
CATEGORY_KEYWORDS = (
    (("soup", "curry"), Category.SOUP),
    (("salad", "side"), Category.SIDE),
    (("dessert", "cake"), Category.DESSERT),
)


@dataclass
class _MetaFields:
    """Metadata collected while scanning the top of a recipe."""

    title: str = ""
    category: Category = Category.MAIN
    category_hint: str = ""
    servings: int = DEFAULT_SERVINGS
    rating: int = 0
    cooked: bool = False
    image_url: str | None = None
    cooking_time: str | None = None


def _first_number(value: str) -> int | None:
    match = DIGITS_PATTERN.search(value)
    if not match or len(match.group()) > MAX_NUMBER_DIGITS:
        return None
    return int(match.group())


def _is_not_specified(value: str) -> bool:
    return value.strip().lower() in NOT_SPECIFIED


def _strip_title(value: str) -> str:
    return LEADING_HASH_PATTERN.sub("", value.strip()).strip()


def resolve_category(category: Category, category_hint: str, title: str) -> Category:
    """Pick a category bucket from free-form category text and the title.

    An explicit soup, side or dessert category is kept. Otherwise keywords
    in the raw category text or the title decide, defaulting to main.

    Examples:
        >>> resolve_category(Category.MAIN, "yummy soup thing", "Grandma's Pot")
        <Category.SOUP: 'soup'>
        >>> resolve_category(Category.MAIN, "", "Lemon Cake")
        <Category.DESSERT: 'dessert'>
    """
    if category is not Category.MAIN:
        return category

    hint = category_hint.lower()
    lowered_title = title.lower()
    for keywords, bucket in CATEGORY_KEYWORDS:
        if any(word in hint or word in lowered_title for word in keywords):
            return bucket
    return Category.MAIN


def _set_title(meta: _MetaFields, value: str) -> None:
    meta.title = _strip_title(value)


def _set_category(meta: _MetaFields, value: str) -> None:
    value = value.strip().lower()
    meta.category_hint = value
    if value in {category.value for category in Category}:
        meta.category = Category(value)


def _set_servings(meta: _MetaFields, value: str) -> None:
    if _is_not_specified(value):
        meta.servings = DEFAULT_SERVINGS
        return
    servings = _first_number(value)
    if servings:
        meta.servings = servings


def _set_rating(meta: _MetaFields, value: str) -> None:
    if _is_not_specified(value):
        meta.rating = 0
        return
    rating = _first_number(value)
    if rating is not None:
        meta.rating = min(rating, MAX_RATING)


def _set_cooked(meta: _MetaFields, value: str) -> None:
    value = value.strip().lower()
    if _is_not_specified(value):
        meta.cooked = False
    else:
        meta.cooked = value in ("yes", "true")


def _set_cooking_time(meta: _MetaFields, value: str) -> None:
    meta.cooking_time = value.strip()


def _set_image_url(meta: _MetaFields, value: str) -> None:
    meta.image_url = value.strip()


# Prefixed metadata lines, first match wins
META_RULES = (
    (TITLE_PATTERN, _set_title),
    (CATEGORY_PATTERN, _set_category),
    (SERVINGS_PATTERN, _set_servings),
    (RATING_PATTERN, _set_rating),
    (COOKED_PATTERN, _set_cooked),
    (TIME_PATTERN, _set_cooking_time),
    (IMAGE_PATTERN, _set_image_url),
)


def _parse_meta_line(line: str, meta: _MetaFields) -> None:
    """Apply the first metadata rule that matches the line."""
    for pattern, apply_rule in META_RULES:
        match = pattern.match(line)
        if match:
            apply_rule(meta, line[match.end():])
            return

    if line.lower().startswith(("http://", "https://")) and not meta.image_url:
        meta.image_url = line
    elif not meta.title and ":" not in line and not line.startswith("-"):
        # Recipes without a Title: tag use their first plain line
        meta.title = _strip_title(line)
    else:
        _LOGGER.debug("Ignoring metadata line: %s", line)


def _match_section_header(line: str) -> tuple[Section, str] | None:
    """Return the section a header line opens and any text after its colon."""
    for pattern, section in SECTION_HEADERS:
        match = pattern.match(line)
        if match:
            remainder = line[match.end():].strip()
            if remainder and not match.group().endswith(":"):
                _LOGGER.debug("Ignoring text after %s header: %s",
                              section.value, remainder)
                remainder = ""
            return section, remainder
    return None


class TextRecipeParser(BaseRecipeParser):
    """Parses recipes from pasted or uploaded plain text.

    The parser is stateless; all accumulation happens inside a single
    parse_recipe call so one instance can be shared freely.
    """

    def parse_recipe(self, text: str) -> ParsedRecipe:
        """Parse a single recipe chunk.

        Args:
            text: The text of one recipe, as produced by split_recipes

        Returns:
            The parsed recipe. The title is empty if none was found.
        """
        meta = _MetaFields()
        ingredients: list[ParsedIngredient] = []
        steps: list[ParsedStep] = []
        notes: list[str] = []
        section = Section.META

        for raw_line in text.split("\n"):
            line = raw_line.strip()
            if not line:
                continue

            header = _match_section_header(line)
            if header:
                # "Ingredients: 2 cups flour" keeps its first entry
                section, line = header
                _LOGGER.debug("Entering %s section", section.value)
                if not line:
                    continue

            if section is Section.META:
                _parse_meta_line(line, meta)

            elif section is Section.INGREDIENTS:
                # Sub-headers like "#### For the sauce:"
                if line.startswith("#"):
                    continue
                if not clean_ingredient_line(line):
                    continue
                ingredients.append(
                    parse_ingredient_line(line, order_index=len(ingredients)))

            elif section is Section.STEPS:
                instruction = STEP_NUMBER_PATTERN.sub("", line, count=1).strip()
                if instruction:
                    steps.append(ParsedStep(
                        instruction=instruction,
                        step_number=len(steps) + 1,
                    ))

            else:
                notes.append(line)

        category = resolve_category(meta.category, meta.category_hint, meta.title)

        recipe = ParsedRecipe(
            title=meta.title,
            category=category,
            servings=meta.servings,
            rating=meta.rating,
            cooked=meta.cooked,
            notes="".join(f"{note}\n" for note in notes),
            image_url=meta.image_url or None,
            cooking_time=meta.cooking_time or None,
            ingredients=ingredients,
            steps=steps,
        )

        _LOGGER.debug(
            "Parsed recipe '%s' (%s): %d ingredients, %d steps",
            recipe.title, recipe.category.value,
            len(recipe.ingredients), len(recipe.steps))
        return recipe

    def parse_recipes(self, raw: str) -> list[ParsedRecipe]:
        """Split raw text into recipes and parse each one.

        Chunks that yield no title are dropped.

        Args:
            raw: Raw text that may hold several recipes

        Returns:
            The parsed recipes in input order
        """
        recipes = []
        for chunk in split_recipes(raw):
            recipe = self.parse_recipe(chunk)
            if not recipe.title:
                _LOGGER.debug("Dropping chunk without a title (%d characters)",
                              len(chunk))
                continue
            recipes.append(recipe)
        return recipes


_PARSER = TextRecipeParser()


def parse_recipe_chunk(text: str) -> ParsedRecipe:
    """Parse one recipe chunk with a shared parser."""
    return _PARSER.parse_recipe(text)


def parse_recipes(raw: str) -> list[ParsedRecipe]:
    """Split and parse raw text with a shared parser."""
    return _PARSER.parse_recipes(raw)
