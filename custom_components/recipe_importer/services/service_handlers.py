"""
Service Handlers.

This module contains the Home Assistant service handler functions for
parsing recipe text, adding recipes to todo lists, combined operations and
metric conversion.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any

from pydantic import ValidationError

from homeassistant.core import HomeAssistant, ServiceCall
from homeassistant.exceptions import ServiceValidationError

from ..const import (
    DOMAIN,
    DEFAULT_CONVERT_UNITS,
    EVENT_RECIPES_PARSED,
    EVENT_PARSE_FAILED,
    DATA_TEXT,
    DATA_FILE_PATH,
    DATA_FOLD_EXTRAS,
    DATA_RECIPE,
    DATA_RECIPES,
    DATA_COUNT,
    DATA_ERROR,
    DATA_TODO_ENTITY,
    DATA_TARGET_SERVINGS,
    DATA_AMOUNT,
    DATA_UNIT,
)
from ..models.recipe import ParsedRecipe
from ..unit_converter import format_metric, format_quantity, is_converted, to_metric
from .recipe_service import parse_recipe_text, read_recipe_file
from .ingredient_formatter import scale_ingredients, format_ingredients_for_todo

_LOGGER = logging.getLogger(__name__)

NO_RECIPES_ERROR = "No recipes found - every chunk of the text was missing a title"


def get_entry_config(hass: HomeAssistant) -> dict[str, Any] | None:
    """Get configuration from the first available config entry.

    Returns:
        Configuration dict or None if no entries exist
    """
    if not hass.data.get(DOMAIN):
        return None

    # Get first entry's config (services are shared across all entries)
    entry_id = next(iter(hass.data[DOMAIN]))
    return hass.data[DOMAIN][entry_id]


def _resolve_todo_entity(config: dict[str, Any] | None, todo_entity: str | None) -> str:
    """Pick the requested todo entity or fall back to the configured default."""
    if not todo_entity and config:
        todo_entity = config.get("default_todo_entity")

    if not todo_entity:
        error_msg = "No todo entity specified and no default configured"
        _LOGGER.error(error_msg)
        raise ServiceValidationError(error_msg)

    return todo_entity


def _fire_parse_failed(hass: HomeAssistant, error_msg: str) -> dict[str, Any]:
    hass.bus.async_fire(EVENT_PARSE_FAILED, {DATA_ERROR: error_msg})
    return {DATA_ERROR: error_msg}


async def _add_recipe_to_list(
    hass: HomeAssistant,
    recipe: ParsedRecipe,
    todo_entity: str,
    target_servings: int | None,
    convert_units: bool,
) -> int:
    """Add the ingredients of one recipe to a todo list.

    Returns:
        Number of items added
    """
    _LOGGER.info("Adding recipe '%s' ingredients to %s",
                 recipe.title, todo_entity)

    ingredients = recipe.ingredients
    if target_servings:
        ingredients = scale_ingredients(
            ingredients, recipe.servings, target_servings)

    todo_items = format_ingredients_for_todo(ingredients, convert_units)
    _LOGGER.debug("Formatted %d todo items from ingredients", len(todo_items))

    if not todo_items:
        _LOGGER.warning("No ingredients to add - todo_items list is empty")
        return 0

    # Add all ingredients concurrently for better performance
    tasks = [
        hass.services.async_call(
            'todo',
            'add_item',
            {
                'entity_id': todo_entity,
                'item': item_text,
            },
            blocking=False,
        )
        for item_text in todo_items
    ]
    results = await asyncio.gather(*tasks, return_exceptions=True)

    failures = [result for result in results if isinstance(result, Exception)]
    for failure in failures:
        _LOGGER.warning("Failed to add ingredient to %s: %s",
                        todo_entity, failure)

    items_added = len(todo_items) - len(failures)
    _LOGGER.info("Successfully added %d ingredients to %s",
                 items_added, todo_entity)
    return items_added


async def handle_parse(hass: HomeAssistant, call: ServiceCall) -> dict[str, Any]:
    """Handle the parse service call.

    Args:
        hass: Home Assistant instance
        call: Service call with text or file_path and optional fold_extras

    Returns:
        Dictionary with the parsed recipes or an error
    """
    text = call.data.get(DATA_TEXT)
    file_path = call.data.get(DATA_FILE_PATH)
    fold_extras = call.data.get(DATA_FOLD_EXTRAS, False)

    if file_path and not hass.config.is_allowed_path(file_path):
        raise ServiceValidationError(
            f"Access to {file_path} is not allowed, add it to allowlist_external_dirs")

    try:
        if file_path:
            _LOGGER.info("Importing recipes from file %s", file_path)
            text = await hass.async_add_executor_job(read_recipe_file, file_path)
    except OSError as e:
        error_msg = f"Error reading recipe file: {str(e)}"
        _LOGGER.error("Recipe import failed for %s: %s",
                      file_path, error_msg, exc_info=True)
        return _fire_parse_failed(hass, error_msg)

    recipes = await hass.async_add_executor_job(
        parse_recipe_text, text or "", fold_extras
    )

    if not recipes:
        _LOGGER.warning(NO_RECIPES_ERROR)
        return _fire_parse_failed(hass, NO_RECIPES_ERROR)

    hass.bus.async_fire(
        EVENT_RECIPES_PARSED,
        {
            DATA_COUNT: len(recipes),
            "titles": [recipe["title"] for recipe in recipes],
        }
    )
    return {DATA_RECIPES: recipes, DATA_COUNT: len(recipes)}


async def handle_add_to_list(hass: HomeAssistant, call: ServiceCall) -> dict[str, Any]:
    """Handle the add to list service call.

    Args:
        hass: Home Assistant instance
        call: Service call with recipe data, optional todo_entity and target_servings

    Returns:
        Dictionary with result
    """
    recipe_data = call.data[DATA_RECIPE]
    target_servings = call.data.get(DATA_TARGET_SERVINGS)

    config = get_entry_config(hass)
    if not config:
        _LOGGER.error("No configuration found for Recipe Importer")
        raise ServiceValidationError("Recipe Importer is not configured")

    todo_entity = _resolve_todo_entity(config, call.data.get(DATA_TODO_ENTITY))
    convert_units = config.get("convert_units", DEFAULT_CONVERT_UNITS)

    try:
        recipe = ParsedRecipe.model_validate(recipe_data)
    except ValidationError as e:
        _LOGGER.error("Invalid recipe data: %s", e)
        raise ServiceValidationError(f"Invalid recipe data: {e}") from e

    items_added = await _add_recipe_to_list(
        hass, recipe, todo_entity, target_servings, convert_units)

    return {
        DATA_RECIPE: recipe.model_dump(mode="json"),
        DATA_TODO_ENTITY: todo_entity,
        "items_added": items_added,
    }


async def handle_parse_to_list(hass: HomeAssistant, call: ServiceCall) -> dict[str, Any]:
    """Handle the parse to list service call.

    This is a convenience service that combines parse and add_to_list for
    every recipe found in the text.

    Args:
        hass: Home Assistant instance
        call: Service call with text, optional todo_entity and target_servings

    Returns:
        Dictionary with result or error
    """
    text = call.data[DATA_TEXT]
    target_servings = call.data.get(DATA_TARGET_SERVINGS)

    config = get_entry_config(hass)
    if not config:
        _LOGGER.error("No configuration found for Recipe Importer")
        raise ServiceValidationError("Recipe Importer is not configured")

    todo_entity = _resolve_todo_entity(config, call.data.get(DATA_TODO_ENTITY))
    convert_units = config.get("convert_units", DEFAULT_CONVERT_UNITS)

    recipes = await hass.async_add_executor_job(parse_recipe_text, text)

    if not recipes:
        _LOGGER.warning(NO_RECIPES_ERROR)
        return _fire_parse_failed(hass, NO_RECIPES_ERROR)

    items_added = 0
    for recipe_data in recipes:
        items_added += await _add_recipe_to_list(
            hass,
            ParsedRecipe.model_validate(recipe_data),
            todo_entity,
            target_servings,
            convert_units,
        )

    hass.bus.async_fire(
        EVENT_RECIPES_PARSED,
        {
            DATA_COUNT: len(recipes),
            "titles": [recipe["title"] for recipe in recipes],
            DATA_TODO_ENTITY: todo_entity,
        }
    )

    return {
        DATA_RECIPES: recipes,
        DATA_TODO_ENTITY: todo_entity,
        "items_added": items_added,
    }


async def handle_convert(hass: HomeAssistant, call: ServiceCall) -> dict[str, Any]:
    """Handle the convert service call.

    Args:
        hass: Home Assistant instance
        call: Service call with amount and unit

    Returns:
        Dictionary with the metric amount, unit and a display string
    """
    amount = call.data[DATA_AMOUNT]
    unit = call.data.get(DATA_UNIT, "")

    metric = to_metric(amount, unit)
    converted = is_converted(unit, metric)
    if converted:
        display = format_metric(metric.amount, metric.unit)
    else:
        display = f"{format_quantity(amount)} {unit}".strip()

    _LOGGER.debug("Converted %s %s -> %s", amount, unit, display)
    return {
        DATA_AMOUNT: metric.amount,
        DATA_UNIT: metric.unit,
        "display": display,
        "converted": converted,
    }
