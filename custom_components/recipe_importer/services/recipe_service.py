"""
Recipe Import Service.

This module orchestrates the import of recipe text: reading uploaded files,
splitting the text into recipes, parsing each one and preparing the result
for whatever stores it.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from ..models.recipe import ParsedRecipe
from ..parsers.text_parser import TextRecipeParser

_LOGGER = logging.getLogger(__name__)

IMAGE_URL_MARKER = "[IMAGE_URL: {}]"
COOKING_TIME_MARKER = "[COOKING_TIME: {}]"


def read_recipe_file(path: str | Path) -> str:
    """Read an uploaded recipe file.

    Undecodable bytes are replaced rather than rejected, so any file can be
    handed to the parser.

    Args:
        path: Path of the text file

    Returns:
        The decoded file content

    Raises:
        OSError: If the file cannot be read
    """
    file_path = Path(path)
    _LOGGER.debug("Reading recipe text from %s", file_path)
    return file_path.read_bytes().decode("utf-8", errors="replace")


def fold_extras_into_notes(recipe: ParsedRecipe) -> str:
    """Append image URL and cooking time markers to the recipe notes.

    For stores without dedicated image or time columns. The markers have
    the form '[IMAGE_URL: ...]' and '[COOKING_TIME: ...]', one per line.

    Args:
        recipe: The parsed recipe

    Returns:
        The notes with markers appended
    """
    notes = recipe.notes
    if recipe.image_url:
        notes += "\n" + IMAGE_URL_MARKER.format(recipe.image_url)
    if recipe.cooking_time:
        notes += "\n" + COOKING_TIME_MARKER.format(recipe.cooking_time)
    return notes


def recipe_to_dict(recipe: ParsedRecipe, fold_extras: bool = False) -> dict[str, Any]:
    """Serialize a recipe into JSON-compatible data.

    Args:
        recipe: The parsed recipe
        fold_extras: Move image URL and cooking time into the notes

    Returns:
        Dictionary with recipe data
    """
    result = recipe.model_dump(mode="json")
    if fold_extras:
        result["notes"] = fold_extras_into_notes(recipe)
        result["image_url"] = None
        result["cooking_time"] = None
    return result


def parse_recipe_text(text: str, fold_extras: bool = False) -> list[dict[str, Any]]:
    """Parse raw recipe text into serialized recipes.

    Args:
        text: Raw text holding one or more recipes
        fold_extras: Move image URL and cooking time into the notes

    Returns:
        List of recipe dictionaries, empty if no recipe had a title
    """
    _LOGGER.debug("Parsing %d characters of recipe text",
                  len(text) if text else 0)

    recipes = TextRecipeParser().parse_recipes(text or "")

    if not recipes:
        _LOGGER.warning("No recipes found in %d characters of text",
                        len(text) if text else 0)
        return []

    _LOGGER.info(
        "Parsed %d recipes: %s",
        len(recipes),
        ", ".join(f"'{recipe.title}'" for recipe in recipes)
    )
    return [recipe_to_dict(recipe, fold_extras) for recipe in recipes]
