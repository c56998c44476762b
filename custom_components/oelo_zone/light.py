"""Light platform for the Oelo Lights Zone integration.

One light entity per configured zone. The entity is a thin view over its
ZoneController: state and attributes come from the zone's published
attributes, and every command goes through the controller.

**Effects:**
- The effect list shows the zone's stored patterns (captured and predefined)
- Selecting an effect applies that pattern; turning on without an effect
  re-applies the last used pattern

**Refresh:**
- Use standard `homeassistant.update_entity` service
- Auto polling is handled by the zone's own poller
"""

from __future__ import annotations
import logging
from typing import Any

from homeassistant.components.light import ATTR_EFFECT, ColorMode, LightEntity, LightEntityFeature
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .const import (
    ATTR_AVAILABLE,
    ATTR_AVAILABLE_PATTERNS,
    ATTR_CONTROLLER_IP,
    ATTR_CURRENT_PATTERN,
    ATTR_DISCOVERED_ADDRESS,
    ATTR_DISCOVERY_STATUS,
    ATTR_DRIVER_VERSION,
    ATTR_EFFECT_NAME,
    ATTR_LAST_COMMAND,
    ATTR_SWITCH,
    ATTR_VERIFICATION_STATUS,
    ATTR_ZONE,
    DOMAIN,
)
from .zone import ZoneController

_LOGGER = logging.getLogger(__name__)

EXTRA_ATTRIBUTES = (
    ATTR_ZONE,
    ATTR_CONTROLLER_IP,
    ATTR_CURRENT_PATTERN,
    ATTR_LAST_COMMAND,
    ATTR_VERIFICATION_STATUS,
    ATTR_DISCOVERY_STATUS,
    ATTR_DISCOVERED_ADDRESS,
    ATTR_AVAILABLE_PATTERNS,
    ATTR_DRIVER_VERSION,
)


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback,
) -> None:
    controllers: dict[int, ZoneController] = hass.data[DOMAIN][entry.entry_id]
    async_add_entities([OeloZoneLight(controller, entry) for controller in controllers.values()])


class OeloZoneLight(LightEntity):
    _attr_has_entity_name = True
    _attr_should_poll = False
    _attr_supported_color_modes = {ColorMode.ONOFF}
    _attr_color_mode = ColorMode.ONOFF
    _attr_supported_features = LightEntityFeature.EFFECT

    def __init__(self, controller: ZoneController, entry: ConfigEntry) -> None:
        self._controller = controller
        self._entry = entry
        self._attr_unique_id = f"{entry.entry_id}_zone_{controller.zone}"
        self._attr_name = f"Zone {controller.zone}"

    @property
    def controller(self) -> ZoneController:
        return self._controller

    @property
    def device_info(self) -> DeviceInfo:
        return DeviceInfo(
            identifiers={(DOMAIN, self._entry.entry_id)},
            name=self._entry.title,
            manufacturer="Oelo",
            model="Light Controller",
            configuration_url=f"http://{self._controller.attributes.get(ATTR_CONTROLLER_IP)}/",
        )

    @property
    def available(self) -> bool:
        return bool(self._controller.attributes.get(ATTR_AVAILABLE))

    @property
    def is_on(self) -> bool | None:
        if not self.available:
            return None
        return self._controller.attributes.get(ATTR_SWITCH) == "on"

    @property
    def effect(self) -> str | None:
        if not self.available or not self.is_on:
            return None
        return self._controller.attributes.get(ATTR_EFFECT_NAME)

    @property
    def effect_list(self) -> list[str] | None:
        """Stored pattern names of this zone."""
        return self._controller.list_patterns()

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        attributes = self._controller.attributes
        return {key: attributes.get(key) for key in EXTRA_ATTRIBUTES if key in attributes}

    async def async_added_to_hass(self) -> None:
        await super().async_added_to_hass()
        self.async_on_remove(self._controller.async_add_listener(self._handle_zone_update))

    @callback
    def _handle_zone_update(self) -> None:
        self.async_write_ha_state()

    async def async_turn_on(self, **kwargs: Any) -> None:
        log_prefix = self.entity_id or self._attr_name
        effect = kwargs.get(ATTR_EFFECT)
        if effect:
            result = await self._controller.async_apply_pattern(effect)
        else:
            result = await self._controller.async_turn_on()
        if not result.ok:
            _LOGGER.warning("%s: Turn on failed: %s", log_prefix, result.error)

    async def async_turn_off(self, **kwargs: Any) -> None:
        result = await self._controller.async_turn_off()
        if not result.ok:
            _LOGGER.warning("%s: Turn off failed: %s", self.entity_id or self._attr_name, result.error)

    async def async_update(self) -> None:
        await self._controller.async_refresh()
