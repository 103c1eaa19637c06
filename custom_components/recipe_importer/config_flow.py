"""Config flow for Recipe Importer integration."""
from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol

from homeassistant import config_entries
from homeassistant.config_entries import ConfigFlowResult
from homeassistant.core import callback
from homeassistant.helpers import selector

from .const import (
    DOMAIN,
    CONF_TODO_ENTITY,
    CONF_CONVERT_UNITS,
    DEFAULT_CONVERT_UNITS,
)

_LOGGER = logging.getLogger(__name__)


def _clean_user_input(user_input: dict[str, Any]) -> dict[str, Any]:
    """Clean up empty todo entity strings to None."""
    if CONF_TODO_ENTITY in user_input:
        if not (user_input[CONF_TODO_ENTITY] or "").strip():
            user_input[CONF_TODO_ENTITY] = None
    return user_input


def _build_schema(
    todo_entity: str | None, convert_units: bool
) -> vol.Schema:
    """Build the form schema with the given defaults."""
    todo_selector = selector.EntitySelector(
        selector.EntitySelectorConfig(
            domain="todo",
        ),
    )

    # Only add default for todo_entity if it has a value
    if todo_entity:
        todo_key = vol.Optional(CONF_TODO_ENTITY, default=todo_entity)
    else:
        todo_key = vol.Optional(CONF_TODO_ENTITY)

    return vol.Schema(
        {
            todo_key: todo_selector,
            vol.Optional(
                CONF_CONVERT_UNITS,
                default=convert_units,
            ): selector.BooleanSelector(),
        }
    )


class RecipeImporterConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    """Handle a config flow for Recipe Importer."""

    VERSION = 1

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Handle the initial step."""
        # Check if already configured
        await self.async_set_unique_id(DOMAIN)
        self._abort_if_unique_id_configured()

        if user_input is not None:
            _LOGGER.info("Creating Recipe Importer config entry")
            # Create the config entry with options
            return self.async_create_entry(
                title="Recipe Importer",
                data={},
                options=_clean_user_input(user_input),
            )

        # Show the configuration form with all options
        return self.async_show_form(
            step_id="user",
            data_schema=_build_schema(None, DEFAULT_CONVERT_UNITS),
        )

    @staticmethod
    @callback
    def async_get_options_flow(
        config_entry: config_entries.ConfigEntry,
    ) -> RecipeImporterOptionsFlow:
        """Get the options flow for this handler."""
        return RecipeImporterOptionsFlow()


class RecipeImporterOptionsFlow(config_entries.OptionsFlow):
    """Handle options flow for Recipe Importer."""

    async def async_step_init(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Manage the options."""
        if user_input is not None:
            _LOGGER.info("Updating Recipe Importer options")
            return self.async_create_entry(
                title="", data=_clean_user_input(user_input))

        # Get current options with proper defaults
        current_todo_entity = self.config_entry.options.get(CONF_TODO_ENTITY)
        current_convert = self.config_entry.options.get(
            CONF_CONVERT_UNITS, DEFAULT_CONVERT_UNITS)

        return self.async_show_form(
            step_id="init",
            data_schema=_build_schema(current_todo_entity, current_convert),
        )
