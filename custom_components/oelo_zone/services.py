"""Services for the Oelo Lights Zone integration.

Services: capture_effect, apply_effect, rename_effect, delete_effect,
list_effects, load_predefined_effects, start_discovery, stop_discovery.

Workflow: Create pattern in Oelo app → capture_effect (zone must be ON) →
rename_effect (optional) → apply_effect.

Every service targets one zone through its light entity. Patterns are
stored per zone.
"""

from __future__ import annotations
import logging
from typing import Any

import voluptuous as vol

from homeassistant.components.network import async_get_source_ip
from homeassistant.core import HomeAssistant, ServiceCall, ServiceResponse, SupportsResponse
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers import entity_registry as er
import homeassistant.helpers.config_validation as cv

from .const import (
    DOMAIN,
    EVENT_PATTERN_UPDATED,
    SERVICE_APPLY_EFFECT,
    SERVICE_CAPTURE_EFFECT,
    SERVICE_DELETE_EFFECT,
    SERVICE_LIST_EFFECTS,
    SERVICE_LOAD_PREDEFINED_EFFECTS,
    SERVICE_RENAME_EFFECT,
    SERVICE_START_DISCOVERY,
    SERVICE_STOP_DISCOVERY,
)
from .models import Outcome
from .zone import ZoneController

_LOGGER = logging.getLogger(__name__)

ATTR_ENTITY_ID = "entity_id"
ATTR_EFFECT_NAME = "effect_name"
ATTR_NEW_NAME = "new_name"
ATTR_FORCE = "force"
ATTR_SUBNET = "subnet"
ATTR_SUBNETS = "subnets"

ENTITY_SCHEMA = vol.Schema({
    vol.Required(ATTR_ENTITY_ID): cv.entity_id,
})

CAPTURE_SCHEMA = ENTITY_SCHEMA.extend({
    vol.Optional(ATTR_EFFECT_NAME): cv.string,
})

EFFECT_SCHEMA = ENTITY_SCHEMA.extend({
    vol.Required(ATTR_EFFECT_NAME): cv.string,
})

RENAME_SCHEMA = EFFECT_SCHEMA.extend({
    vol.Required(ATTR_NEW_NAME): cv.string,
})

LOAD_PREDEFINED_SCHEMA = ENTITY_SCHEMA.extend({
    vol.Optional(ATTR_FORCE, default=False): cv.boolean,
})

START_DISCOVERY_SCHEMA = ENTITY_SCHEMA.extend({
    vol.Optional(ATTR_SUBNET): cv.string,
    vol.Optional(ATTR_SUBNETS): vol.All(cv.ensure_list, [cv.string]),
})


def get_zone_from_unique_id(unique_id: str | None) -> int | None:
    """Extract the zone number from a "<entry_id>_zone_<n>" unique id."""
    if not unique_id:
        return None
    prefix, _, zone = unique_id.rpartition("_zone_")
    if not prefix or not zone.isdigit():
        return None
    return int(zone)


def get_controller(hass: HomeAssistant, entity_id: str) -> ZoneController:
    """Find the zone controller behind a light entity."""
    registry = er.async_get(hass)
    entity = registry.async_get(entity_id)
    if entity is None or entity.platform != DOMAIN or not entity.config_entry_id:
        raise HomeAssistantError(f"Could not find config entry for entity {entity_id}")

    zone = get_zone_from_unique_id(entity.unique_id)
    if zone is None:
        raise HomeAssistantError(f"Could not extract zone from entity_id {entity_id}")

    controllers = hass.data.get(DOMAIN, {}).get(entity.config_entry_id)
    if not controllers or zone not in controllers:
        raise HomeAssistantError(f"Zone {zone} of {entity_id} is not loaded")
    return controllers[zone]


def raise_on_failure(result: Outcome, action: str) -> Any:
    """Return the outcome value or raise HomeAssistantError."""
    if not result.ok:
        raise HomeAssistantError(f"Failed to {action}: {result.error}") from result.error
    return result.value


def _fire_pattern_updated(hass: HomeAssistant, controller: ZoneController) -> None:
    hass.bus.async_fire(EVENT_PATTERN_UPDATED, {"zone": controller.zone, "patterns": controller.list_patterns()})


async def async_capture_pattern(hass: HomeAssistant, call: ServiceCall) -> None:
    """Capture the zone's current effect from the controller."""
    controller = get_controller(hass, call.data[ATTR_ENTITY_ID])
    name = (call.data.get(ATTR_EFFECT_NAME) or "").strip() or None
    pattern = raise_on_failure(await controller.async_capture_pattern(name), "capture pattern")
    _LOGGER.info("Captured pattern '%s' (ID: %s) from zone %d", pattern["name"], pattern["id"], controller.zone)
    _fire_pattern_updated(hass, controller)


async def async_apply_pattern(hass: HomeAssistant, call: ServiceCall) -> None:
    """Apply a saved effect to the zone."""
    controller = get_controller(hass, call.data[ATTR_ENTITY_ID])
    raise_on_failure(await controller.async_apply_pattern(call.data[ATTR_EFFECT_NAME]), "apply pattern")


async def async_rename_pattern(hass: HomeAssistant, call: ServiceCall) -> None:
    """Rename a saved effect."""
    controller = get_controller(hass, call.data[ATTR_ENTITY_ID])
    old_name = call.data[ATTR_EFFECT_NAME]
    new_name = call.data[ATTR_NEW_NAME].strip()
    if not new_name:
        raise HomeAssistantError("new_name is required")

    pattern = raise_on_failure(await controller.async_rename_pattern(old_name, new_name), "rename pattern")
    if pattern is None:
        _LOGGER.warning("Zone %d: Pattern '%s' not found, nothing renamed", controller.zone, old_name)
        return
    _LOGGER.info("Renamed pattern '%s' to '%s'", old_name, new_name)
    _fire_pattern_updated(hass, controller)


async def async_delete_pattern(hass: HomeAssistant, call: ServiceCall) -> None:
    """Delete a saved effect."""
    controller = get_controller(hass, call.data[ATTR_ENTITY_ID])
    name = call.data[ATTR_EFFECT_NAME]
    raise_on_failure(await controller.async_delete_pattern(name), "delete pattern")
    _LOGGER.info("Deleted pattern '%s' from zone %d", name, controller.zone)
    _fire_pattern_updated(hass, controller)


async def async_list_patterns(hass: HomeAssistant, call: ServiceCall) -> ServiceResponse:
    """List all saved effects of the zone."""
    controller = get_controller(hass, call.data[ATTR_ENTITY_ID])
    patterns = controller.patterns.list_patterns()
    _LOGGER.debug("Listed %d patterns for zone %d", len(patterns), controller.zone)
    return {"patterns": patterns}


async def async_load_predefined_patterns(hass: HomeAssistant, call: ServiceCall) -> None:
    """Load the predefined holiday patterns into the zone's empty slots."""
    controller = get_controller(hass, call.data[ATTR_ENTITY_ID])
    loaded = raise_on_failure(
        await controller.async_load_predefined(force=call.data[ATTR_FORCE]), "load predefined patterns"
    )
    _LOGGER.info("Loaded %d predefined patterns into zone %d", loaded, controller.zone)
    if loaded:
        _fire_pattern_updated(hass, controller)


async def async_start_discovery(hass: HomeAssistant, call: ServiceCall) -> None:
    """Scan the local subnets for the controller."""
    controller = get_controller(hass, call.data[ATTR_ENTITY_ID])
    try:
        hub_ip = await async_get_source_ip(hass)
    except (HomeAssistantError, OSError) as err:
        _LOGGER.debug("Could not determine the Home Assistant address: %s", err)
        hub_ip = None

    raise_on_failure(
        await controller.async_start_discovery(
            hub_ip=hub_ip,
            subnet=call.data.get(ATTR_SUBNET),
            subnets=call.data.get(ATTR_SUBNETS),
        ),
        "start discovery",
    )


async def async_stop_discovery(hass: HomeAssistant, call: ServiceCall) -> None:
    """Stop a running controller scan."""
    controller = get_controller(hass, call.data[ATTR_ENTITY_ID])
    await controller.async_stop_discovery()


def async_register_services(hass: HomeAssistant) -> None:
    """Register Oelo Lights Zone services."""

    def _bind(handler):
        async def _service(call: ServiceCall):
            return await handler(hass, call)
        return _service

    hass.services.async_register(
        DOMAIN, SERVICE_CAPTURE_EFFECT, _bind(async_capture_pattern), schema=CAPTURE_SCHEMA
    )
    hass.services.async_register(
        DOMAIN, SERVICE_APPLY_EFFECT, _bind(async_apply_pattern), schema=EFFECT_SCHEMA
    )
    hass.services.async_register(
        DOMAIN, SERVICE_RENAME_EFFECT, _bind(async_rename_pattern), schema=RENAME_SCHEMA
    )
    hass.services.async_register(
        DOMAIN, SERVICE_DELETE_EFFECT, _bind(async_delete_pattern), schema=EFFECT_SCHEMA
    )
    hass.services.async_register(
        DOMAIN,
        SERVICE_LIST_EFFECTS,
        _bind(async_list_patterns),
        schema=ENTITY_SCHEMA,
        supports_response=SupportsResponse.ONLY,
    )
    hass.services.async_register(
        DOMAIN, SERVICE_LOAD_PREDEFINED_EFFECTS, _bind(async_load_predefined_patterns), schema=LOAD_PREDEFINED_SCHEMA
    )
    hass.services.async_register(
        DOMAIN, SERVICE_START_DISCOVERY, _bind(async_start_discovery), schema=START_DISCOVERY_SCHEMA
    )
    hass.services.async_register(
        DOMAIN, SERVICE_STOP_DISCOVERY, _bind(async_stop_discovery), schema=ENTITY_SCHEMA
    )

    _LOGGER.info("Registered Oelo Lights Zone services")
