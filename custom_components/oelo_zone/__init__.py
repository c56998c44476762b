"""Oelo Lights Zone Home Assistant integration.

Controls Oelo Lights controllers via their HTTP API, one light entity per
zone. Each zone owns its own pattern storage, command debounce, verification
and discovery state, persisted across restarts.

Protocol:
    GET http://{IP}/getController - Returns zone statuses (JSON array)
    GET http://{IP}/setPattern?patternType={type}&zones={zone}&... - Sets pattern

Workflow:
    1. Create/set pattern in Oelo app
    2. Capture in HA (stores it for the zone it was captured from)
    3. Rename (optional)
    4. Apply via the effect list or the apply_effect service

Storage: {DOMAIN}_zone_{entry_id}_{zone}.json (up to 200 patterns per zone)
"""

from __future__ import annotations
import logging

from homeassistant.config_entries import ConfigEntry
from homeassistant.const import CONF_IP_ADDRESS
from homeassistant.core import HomeAssistant
from homeassistant.helpers.aiohttp_client import async_get_clientsession
from homeassistant.helpers.storage import Store

from .const import (
    CONF_DEBUG_LOGGING,
    CONF_ZONES,
    DEFAULT_DEBUG_LOGGING,
    DEFAULT_ZONES,
    DOMAIN,
    MAX_ZONE,
    MIN_ZONE,
    PLATFORMS,
    STORAGE_KEY_ZONE,
    STORAGE_VERSION,
)
from .models import ZoneSettings
from .services import async_register_services
from .zone import ZoneController

_LOGGER = logging.getLogger(__name__)


def configured_zones(entry: ConfigEntry) -> list[int]:
    """Zones selected in the options, restricted to 1-6."""
    zones = entry.options.get(CONF_ZONES, DEFAULT_ZONES)
    if not isinstance(zones, list):
        zones = DEFAULT_ZONES
    result = []
    for zone in zones:
        if str(zone).isdigit() and MIN_ZONE <= int(zone) <= MAX_ZONE and int(zone) not in result:
            result.append(int(zone))
    return sorted(result)


async def async_setup(hass: HomeAssistant, config: dict) -> bool:
    """Set up the Oelo Lights Zone integration."""
    async_register_services(hass)
    return True


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up one controller: a ZoneController per configured zone."""
    if entry.options.get(CONF_DEBUG_LOGGING, DEFAULT_DEBUG_LOGGING):
        logging.getLogger(__package__).setLevel(logging.DEBUG)
        _LOGGER.debug("Debug logging enabled for %s", entry.title)

    session = async_get_clientsession(hass)

    async def _async_controller_found(address: str) -> None:
        if entry.data.get(CONF_IP_ADDRESS) == address:
            return
        _LOGGER.info("Updating controller address of %s to %s", entry.title, address)
        # The update listener reloads the entry with the new address
        hass.config_entries.async_update_entry(entry, data={**entry.data, CONF_IP_ADDRESS: address})

    controllers: dict[int, ZoneController] = {}
    for zone in configured_zones(entry):
        settings = ZoneSettings.from_entry(entry.data, entry.options, zone)
        store = Store(hass, STORAGE_VERSION, f"{STORAGE_KEY_ZONE}_{entry.entry_id}_{zone}")
        controller = ZoneController.create(settings, session, store, hass.loop, on_found=_async_controller_found)
        await controller.async_initialize()
        controllers[zone] = controller

    hass.data.setdefault(DOMAIN, {})[entry.entry_id] = controllers

    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    entry.async_on_unload(entry.add_update_listener(_async_update_listener))
    return True


async def _async_update_listener(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Reload when options or the controller address change."""
    await hass.config_entries.async_reload(entry.entry_id)


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry and stop every zone's timers."""
    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if unload_ok:
        controllers = hass.data.get(DOMAIN, {}).pop(entry.entry_id, {})
        for controller in controllers.values():
            await controller.async_shutdown()
    return unload_ok
