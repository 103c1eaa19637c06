"""Parsers package."""
from .ingredient_line import parse_ingredient_line
from .splitter import split_recipes
from .text_parser import TextRecipeParser, parse_recipe_chunk, parse_recipes

__all__ = [
    "TextRecipeParser",
    "parse_ingredient_line",
    "parse_recipe_chunk",
    "parse_recipes",
    "split_recipes",
]
