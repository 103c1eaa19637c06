"""
Ingredient Formatter.

This module handles scaling and formatting of parsed ingredients for
display in todo lists, with optional conversion of imperial and ad-hoc
units to metric.
"""
from __future__ import annotations

import logging

from ..models.recipe import ParsedIngredient
from ..unit_converter import format_metric, format_quantity, is_converted, to_metric

_LOGGER = logging.getLogger(__name__)


def scale_ingredients(
    ingredients: list[ParsedIngredient],
    original_servings: int | float | None,
    target_servings: int | float
) -> list[ParsedIngredient]:
    """Scale ingredient amounts based on servings.

    Args:
        ingredients: Parsed ingredients in display order
        original_servings: Number of servings the recipe is written for
        target_servings: Target number of servings to scale to (can be fractional)

    Returns:
        List of scaled ingredients, order unchanged
    """
    if original_servings is None or original_servings <= 0:
        _LOGGER.warning(
            "Cannot scale recipe: original servings not available or invalid")
        return ingredients

    if target_servings <= 0:
        _LOGGER.warning(
            "Cannot scale recipe: target servings must be positive")
        return ingredients

    scaling_factor = target_servings / original_servings
    _LOGGER.info("Scaling ingredients from %s to %s servings (factor: %.2f)",
                 original_servings, target_servings, scaling_factor)

    scaled_ingredients = []
    for ingredient in ingredients:
        scaled_amount = ingredient.amount * scaling_factor
        _LOGGER.debug("Scaled %s: %.2f -> %.2f",
                      ingredient.name, ingredient.amount, scaled_amount)
        scaled_ingredients.append(
            ingredient.model_copy(update={"amount": scaled_amount}))

    return scaled_ingredients


def format_ingredient(ingredient: ParsedIngredient, convert_units: bool) -> str:
    """Format one ingredient as a display line.

    Count-only ingredients (amount 0) show just the name. When converting,
    the metric amount replaces the original only if the unit changed.

    Args:
        ingredient: The ingredient to format
        convert_units: Whether to convert imperial units to metric

    Returns:
        The display line, e.g. 'Whole Milk 414 ml' or 'Cauliflower 1'
    """
    name = ingredient.name
    if ingredient.amount <= 0:
        return name

    if convert_units and ingredient.unit:
        metric = to_metric(ingredient.amount, ingredient.unit)
        if is_converted(ingredient.unit, metric):
            _LOGGER.debug("Converted units for %s: %s %s -> %s %s",
                          name, ingredient.amount, ingredient.unit,
                          metric.amount, metric.unit)
            return f"{name} {format_metric(metric.amount, metric.unit)}"

    parts = [name, format_quantity(ingredient.amount)]
    if ingredient.unit:
        parts.append(ingredient.unit)
    return ' '.join(parts)


def format_ingredients_for_todo(
    ingredients: list[ParsedIngredient],
    convert_units: bool
) -> list[str]:
    """Format ingredients as strings for todo list.

    Args:
        ingredients: Parsed ingredients in display order
        convert_units: Whether to convert imperial units to metric

    Returns:
        List of formatted ingredient strings
    """
    todo_items = []

    for ingredient in ingredients:
        if not ingredient.name.strip():
            _LOGGER.debug(
                "Skipping ingredient %d: missing name", ingredient.order_index)
            continue

        formatted_item = format_ingredient(ingredient, convert_units)
        _LOGGER.debug("Formatted ingredient %d as: '%s'",
                      ingredient.order_index, formatted_item)
        todo_items.append(formatted_item)

    return todo_items
