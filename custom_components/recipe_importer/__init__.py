"""
Recipe Importer Integration for Home Assistant.

This integration provides services to turn pasted or uploaded free-text
recipes into structured recipe data, convert ingredient quantities to
metric and add ingredients to todo lists.
"""
from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant, ServiceCall, ServiceResponse, SupportsResponse
from homeassistant.helpers import config_validation as cv
from homeassistant.helpers.typing import ConfigType

from .const import (
    DOMAIN,
    CONF_TODO_ENTITY,
    CONF_CONVERT_UNITS,
    DEFAULT_CONVERT_UNITS,
    SERVICE_PARSE,
    SERVICE_ADD_TO_LIST,
    SERVICE_PARSE_TO_LIST,
    SERVICE_CONVERT,
    DATA_TEXT,
    DATA_FILE_PATH,
    DATA_FOLD_EXTRAS,
    DATA_RECIPE,
    DATA_TODO_ENTITY,
    DATA_TARGET_SERVINGS,
    DATA_AMOUNT,
    DATA_UNIT,
)
from .services.service_handlers import (
    handle_parse,
    handle_add_to_list,
    handle_parse_to_list,
    handle_convert,
)

_LOGGER = logging.getLogger(__name__)

# Config flow only - no YAML support
CONFIG_SCHEMA = cv.empty_config_schema(DOMAIN)

# Service schemas
SERVICE_PARSE_SCHEMA = vol.All(
    vol.Schema(
        {
            vol.Exclusive(DATA_TEXT, "source"): cv.string,
            vol.Exclusive(DATA_FILE_PATH, "source"): cv.string,
            vol.Optional(DATA_FOLD_EXTRAS, default=False): cv.boolean,
        }
    ),
    cv.has_at_least_one_key(DATA_TEXT, DATA_FILE_PATH),
)

SERVICE_ADD_TO_LIST_SCHEMA = vol.Schema(
    {
        vol.Required(DATA_RECIPE): dict,
        vol.Optional(DATA_TODO_ENTITY): cv.entity_id,
        vol.Optional(DATA_TARGET_SERVINGS): cv.positive_int,
    }
)

SERVICE_PARSE_TO_LIST_SCHEMA = vol.Schema(
    {
        vol.Required(DATA_TEXT): cv.string,
        vol.Optional(DATA_TODO_ENTITY): cv.entity_id,
        vol.Optional(DATA_TARGET_SERVINGS): cv.positive_int,
    }
)

SERVICE_CONVERT_SCHEMA = vol.Schema(
    {
        vol.Required(DATA_AMOUNT): vol.All(vol.Coerce(float), vol.Range(min=0)),
        vol.Optional(DATA_UNIT, default=""): cv.string,
    }
)


async def async_setup(hass: HomeAssistant, config: ConfigType) -> bool:
    """Set up the Recipe Importer integration."""
    # Initialize integration data storage
    hass.data.setdefault(DOMAIN, {})
    _LOGGER.debug("Recipe Importer integration setup complete")
    return True


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up Recipe Importer from a config entry."""
    _LOGGER.info("Setting up Recipe Importer config entry")

    hass.data.setdefault(DOMAIN, {})

    # Store entry configuration in hass.data
    hass.data[DOMAIN][entry.entry_id] = {
        "default_todo_entity": entry.options.get(CONF_TODO_ENTITY),
        "convert_units": entry.options.get(CONF_CONVERT_UNITS, DEFAULT_CONVERT_UNITS),
    }

    # Set up services only once (for the first entry)
    if len(hass.data[DOMAIN]) == 1:
        await _setup_services(hass)
        _LOGGER.info("Recipe Importer services registered")

    # Listen for options updates
    entry.async_on_unload(entry.add_update_listener(async_reload_entry))

    _LOGGER.debug("Recipe Importer config entry setup complete")
    return True


async def async_reload_entry(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Reload the config entry when options change."""
    await hass.config_entries.async_reload(entry.entry_id)


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    _LOGGER.info("Unloading Recipe Importer config entry")

    # Remove entry data
    hass.data[DOMAIN].pop(entry.entry_id, None)

    # Remove services only if this is the last entry
    if not hass.data[DOMAIN]:
        for service in (SERVICE_PARSE, SERVICE_ADD_TO_LIST,
                        SERVICE_PARSE_TO_LIST, SERVICE_CONVERT):
            hass.services.async_remove(DOMAIN, service)
        _LOGGER.info("Recipe Importer services unregistered")

    return True


async def _setup_services(hass: HomeAssistant) -> None:
    """Set up the integration services."""

    async def _handle_parse(call: ServiceCall) -> ServiceResponse:
        """Wrapper for handle_parse that injects hass."""
        return await handle_parse(hass, call)

    async def _handle_add_to_list(call: ServiceCall) -> ServiceResponse:
        """Wrapper for handle_add_to_list that injects hass."""
        return await handle_add_to_list(hass, call)

    async def _handle_parse_to_list(call: ServiceCall) -> ServiceResponse:
        """Wrapper for handle_parse_to_list that injects hass."""
        return await handle_parse_to_list(hass, call)

    async def _handle_convert(call: ServiceCall) -> ServiceResponse:
        """Wrapper for handle_convert that injects hass."""
        return await handle_convert(hass, call)

    services: list[tuple[str, Any, Any, SupportsResponse]] = [
        (SERVICE_PARSE, _handle_parse, SERVICE_PARSE_SCHEMA, SupportsResponse.ONLY),
        (SERVICE_ADD_TO_LIST, _handle_add_to_list,
         SERVICE_ADD_TO_LIST_SCHEMA, SupportsResponse.OPTIONAL),
        (SERVICE_PARSE_TO_LIST, _handle_parse_to_list,
         SERVICE_PARSE_TO_LIST_SCHEMA, SupportsResponse.OPTIONAL),
        (SERVICE_CONVERT, _handle_convert, SERVICE_CONVERT_SCHEMA, SupportsResponse.ONLY),
    ]

    # Register the services with response support
    for service, handler, schema, supports_response in services:
        hass.services.async_register(
            DOMAIN,
            service,
            handler,
            schema=schema,
            supports_response=supports_response,
        )
