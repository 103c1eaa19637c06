#!/usr/bin/env python3
"""
Recipe Converter - Import free-text recipes

Reads recipe text files (or stdin), splits them into individual recipes
and writes structured JSON, optionally printing ingredient lists with
metric amounts.
"""
import argparse
import json
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from custom_components.recipe_importer.models.recipe import ParsedRecipe
from custom_components.recipe_importer.parsers.text_parser import TextRecipeParser
from custom_components.recipe_importer.services.ingredient_formatter import format_ingredient
from custom_components.recipe_importer.services.recipe_service import (
    read_recipe_file,
    recipe_to_dict,
)

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("RECIPE_CONVERTER_LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def read_input(source: str) -> str:
    """Read recipe text from a file path, or stdin for '-'."""
    if source == "-":
        return sys.stdin.read()
    return read_recipe_file(source)


def safe_filename(title: str) -> str:
    """Turn a recipe title into a file name."""
    safe_title = "".join(c for c in title if c.isalnum() or c in (' ', '-', '_')).rstrip()
    safe_title = safe_title.replace(' ', '_').lower()
    return safe_title or "recipe"


def print_summary(recipe: ParsedRecipe) -> None:
    """Print a readable summary with metric ingredient amounts."""
    print(f"\n📝 {recipe.title} ({recipe.category.value}, serves {recipe.servings})")
    if recipe.cooking_time:
        print(f"⏱  {recipe.cooking_time}")
    for ingredient in recipe.ingredients:
        print(f"   - {format_ingredient(ingredient, convert_units=True)}")
    for step in recipe.steps:
        print(f"   {step.step_number}. {step.instruction}")


def save_recipes(recipes: list[ParsedRecipe], output_dir: Path, fold_extras: bool) -> None:
    """Write one JSON file per recipe.

    Titles that map to the same file name get a numeric suffix.
    """
    output_dir.mkdir(parents=True, exist_ok=True)

    used_names: set[str] = set()
    for recipe in recipes:
        name = safe_filename(recipe.title)
        candidate = name
        counter = 2
        while candidate in used_names:
            candidate = f"{name}_{counter}"
            counter += 1
        used_names.add(candidate)

        json_file = output_dir / f"{candidate}.json"
        logger.info("Saving structured recipe to: %s", json_file)
        with open(json_file, 'w', encoding='utf-8') as f:
            json.dump(recipe_to_dict(recipe, fold_extras), f, indent=2, ensure_ascii=False)


def convert(sources: list[str], output_dir: Path | None, fold_extras: bool, metric: bool) -> int:
    """Parse all sources and emit the recipes.

    Returns:
        Number of recipes found
    """
    parser = TextRecipeParser()
    recipes: list[ParsedRecipe] = []

    for source in sources:
        try:
            text = read_input(source)
        except OSError as e:
            logger.error("Cannot read %s: %s", source, e)
            continue

        found = parser.parse_recipes(text)
        logger.info("Found %d recipes in %s", len(found), source)
        recipes.extend(found)

    if not recipes:
        logger.error("No recipes found")
        return 0

    if output_dir:
        save_recipes(recipes, output_dir, fold_extras)
    elif not metric:
        json.dump([recipe_to_dict(recipe, fold_extras) for recipe in recipes],
                  sys.stdout, indent=2, ensure_ascii=False)
        print()

    if metric:
        for recipe in recipes:
            print_summary(recipe)

    return len(recipes)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the recipe converter."""
    parser = argparse.ArgumentParser(
        description="Convert free-text recipes into structured JSON format"
    )
    parser.add_argument(
        "sources",
        nargs="+",
        help="Recipe text files, or - to read from stdin"
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=os.getenv("RECIPE_CONVERTER_OUTPUT_DIR"),
        help="Directory to write one JSON file per recipe "
             "(default: print to stdout, or RECIPE_CONVERTER_OUTPUT_DIR)"
    )
    parser.add_argument(
        "--fold-extras",
        action="store_true",
        help="Move image URL and cooking time into the notes"
    )
    parser.add_argument(
        "--metric",
        action="store_true",
        help="Print ingredient lists with metric amounts"
    )

    args = parser.parse_args(argv)

    output_dir = Path(args.output_dir) if args.output_dir else None
    count = convert(args.sources, output_dir, args.fold_extras, args.metric)
    return 0 if count else 1


if __name__ == "__main__":
    sys.exit(main())
