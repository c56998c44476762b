"""Config flow for the Oelo Lights Zone integration.

Handles initial setup (IP validation against the controller's status
structure), reconfiguration, and the options flow (zones, polling, spotlight,
verification, discovery, advanced settings).
"""

from __future__ import annotations
import ipaddress
import logging
from typing import Any

import voluptuous as vol

from homeassistant import data_entry_flow
from homeassistant.config_entries import ConfigEntry, ConfigFlow, ConfigFlowResult, OptionsFlow
from homeassistant.const import CONF_IP_ADDRESS
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.aiohttp_client import async_get_clientsession
import homeassistant.helpers.config_validation as cv

from .const import (
    CONF_AUTO_POLL,
    CONF_COMMAND_TIMEOUT,
    CONF_DEBUG_LOGGING,
    CONF_DISCOVERY_PROBE_TIMEOUT,
    CONF_DISCOVERY_SUBNET,
    CONF_MAX_LEDS,
    CONF_POLL_INTERVAL,
    CONF_SPOTLIGHT_PLAN_LIGHTS,
    CONF_VERIFICATION_DELAY,
    CONF_VERIFICATION_RETRIES,
    CONF_VERIFICATION_TIMEOUT,
    CONF_VERIFY_COMMANDS,
    CONF_ZONES,
    DEFAULT_AUTO_POLL,
    DEFAULT_COMMAND_TIMEOUT,
    DEFAULT_DEBUG_LOGGING,
    DEFAULT_DISCOVERY_PROBE_TIMEOUT,
    DEFAULT_DISCOVERY_SUBNET,
    DEFAULT_MAX_LEDS,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_SPOTLIGHT_PLAN_LIGHTS,
    DEFAULT_VERIFICATION_DELAY,
    DEFAULT_VERIFICATION_RETRIES,
    DEFAULT_VERIFICATION_TIMEOUT,
    DEFAULT_VERIFY_COMMANDS,
    DEFAULT_ZONES,
    DOMAIN,
    MAX_ZONE,
    MIN_ZONE,
)
from .discovery import is_controller_response, subnet_prefix
from .pattern_utils import normalize_led_indices
from .transport import ZoneTransport

_LOGGER = logging.getLogger(__name__)

VALIDATION_TIMEOUT = 10


class CannotConnect(Exception):
    """Exception raised when a connection to the device cannot be established."""


class InvalidIP(Exception):
    """Exception raised for invalid IP format."""


async def validate_input(hass: HomeAssistant, data: dict[str, Any]) -> dict[str, str]:
    """Validate the IP and that the device answers like an Oelo controller."""
    ip = data.get(CONF_IP_ADDRESS)
    if not ip:
        raise InvalidIP("No IP address provided.")

    try:
        ipaddress.ip_address(ip)
    except ValueError as err:
        _LOGGER.debug("Invalid IP address format: %s", ip)
        raise InvalidIP("Invalid IP address format.") from err

    transport = ZoneTransport(async_get_clientsession(hass), ip, VALIDATION_TIMEOUT, name="Config flow")
    result = await transport.async_fetch_status()
    if not result.ok:
        raise CannotConnect(f"Could not connect to the controller at {ip}: {result.error}")
    if not is_controller_response(result.value):
        _LOGGER.warning("Unexpected response format from %s", ip)
        raise CannotConnect("Device responded but doesn't appear to be an Oelo controller")

    _LOGGER.debug("Successfully connected to Oelo controller at %s", ip)
    return {"title": f"Oelo Controller {ip}"}


def default_options() -> dict[str, Any]:
    return {
        CONF_ZONES: DEFAULT_ZONES,
        CONF_POLL_INTERVAL: DEFAULT_POLL_INTERVAL,
        CONF_AUTO_POLL: DEFAULT_AUTO_POLL,
        CONF_COMMAND_TIMEOUT: DEFAULT_COMMAND_TIMEOUT,
        CONF_DEBUG_LOGGING: DEFAULT_DEBUG_LOGGING,
        CONF_MAX_LEDS: DEFAULT_MAX_LEDS,
        CONF_SPOTLIGHT_PLAN_LIGHTS: DEFAULT_SPOTLIGHT_PLAN_LIGHTS,
        CONF_VERIFY_COMMANDS: DEFAULT_VERIFY_COMMANDS,
        CONF_VERIFICATION_RETRIES: DEFAULT_VERIFICATION_RETRIES,
        CONF_VERIFICATION_DELAY: DEFAULT_VERIFICATION_DELAY,
        CONF_VERIFICATION_TIMEOUT: DEFAULT_VERIFICATION_TIMEOUT,
        CONF_DISCOVERY_SUBNET: DEFAULT_DISCOVERY_SUBNET,
        CONF_DISCOVERY_PROBE_TIMEOUT: DEFAULT_DISCOVERY_PROBE_TIMEOUT,
    }


STEP_USER_DATA_SCHEMA = vol.Schema({
    vol.Required(CONF_IP_ADDRESS): str,
})


class OeloZoneConfigFlow(ConfigFlow, domain=DOMAIN):
    """Handle a config flow for Oelo Lights Zone."""

    VERSION = 1

    @staticmethod
    @callback
    def async_get_options_flow(config_entry: ConfigEntry) -> OptionsFlow:
        """Get the options flow for this handler."""
        return OeloZoneOptionsFlowHandler(config_entry)

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Handle the initial step."""
        errors: dict[str, str] = {}

        if user_input is not None:
            try:
                info = await validate_input(self.hass, user_input)
                await self.async_set_unique_id(user_input[CONF_IP_ADDRESS], raise_on_progress=False)
                self._abort_if_unique_id_configured()
                return self.async_create_entry(title=info["title"], data=user_input, options=default_options())
            except InvalidIP:
                errors["base"] = "invalid_ip"
            except CannotConnect:
                errors["base"] = "cannot_connect"
            except data_entry_flow.AbortFlow:
                raise
            except Exception:
                _LOGGER.exception("Unexpected exception during user step")
                errors["base"] = "unknown"

        return self.async_show_form(step_id="user", data_schema=STEP_USER_DATA_SCHEMA, errors=errors)

    async def async_step_reconfigure(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Allow changing the controller IP of an existing entry."""
        errors: dict[str, str] = {}
        config_entry = self.hass.config_entries.async_get_entry(self.context["entry_id"])
        if config_entry is None:
            _LOGGER.error("Config entry not found for reconfiguration")
            return self.async_abort(reason="entry_not_found")

        if user_input is not None:
            new_ip = user_input.get(CONF_IP_ADDRESS)
            try:
                await validate_input(self.hass, user_input)
                if config_entry.data.get(CONF_IP_ADDRESS) == new_ip:
                    _LOGGER.debug("Oelo controller IP address unchanged during reconfigure.")
                    return self.async_abort(reason="reconfigure_successful")

                _LOGGER.debug(
                    "Oelo controller IP changed from %s to %s", config_entry.data.get(CONF_IP_ADDRESS), new_ip
                )
                for entry in self._async_current_entries():
                    if entry.unique_id == new_ip and entry.entry_id != config_entry.entry_id:
                        errors["base"] = "reconfigure_failed_duplicate_ip"
                        break
                else:
                    return self.async_update_reload_and_abort(
                        config_entry,
                        unique_id=new_ip,
                        data={**config_entry.data, **user_input},
                        reason="reconfigure_successful",
                    )
            except InvalidIP:
                errors["base"] = "invalid_ip"
            except CannotConnect:
                errors["base"] = "cannot_connect"
            except Exception:
                _LOGGER.exception("Unexpected exception during reconfigure step")
                errors["base"] = "unknown"

        return self.async_show_form(
            step_id="reconfigure",
            data_schema=vol.Schema({
                vol.Required(CONF_IP_ADDRESS, default=config_entry.data.get(CONF_IP_ADDRESS)): str,
            }),
            errors=errors,
        )


class OeloZoneOptionsFlowHandler(OptionsFlow):
    """Handle options flow for Oelo Lights Zone."""

    def __init__(self, config_entry: ConfigEntry) -> None:
        super().__init__()
        self._config_entry = config_entry

    @property
    def config_entry(self) -> ConfigEntry:
        return self._config_entry

    async def async_step_init(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Manage the options."""
        options = self.config_entry.options
        errors: dict[str, str] = {}

        if user_input is not None:
            # Convert zone strings to integers
            zones = user_input.get(CONF_ZONES, [])
            if isinstance(zones, str):
                zones = [zones]
            user_input[CONF_ZONES] = [int(z) for z in zones if str(z).isdigit()]

            max_leds = user_input.get(CONF_MAX_LEDS, options.get(CONF_MAX_LEDS, DEFAULT_MAX_LEDS))
            if CONF_SPOTLIGHT_PLAN_LIGHTS in user_input:
                spotlight_lights = normalize_led_indices(user_input[CONF_SPOTLIGHT_PLAN_LIGHTS], max_leds)
                if spotlight_lights:
                    user_input[CONF_SPOTLIGHT_PLAN_LIGHTS] = spotlight_lights
                else:
                    errors[CONF_SPOTLIGHT_PLAN_LIGHTS] = "invalid_led_indices"

            subnet = (user_input.get(CONF_DISCOVERY_SUBNET) or "").strip()
            if subnet and subnet_prefix(subnet) is None:
                errors[CONF_DISCOVERY_SUBNET] = "invalid_subnet"
            else:
                user_input[CONF_DISCOVERY_SUBNET] = subnet_prefix(subnet) or ""

            if not errors:
                return self.async_create_entry(title="", data=user_input)

        # Convert zones to strings for multi_select
        current_zones = options.get(CONF_ZONES, DEFAULT_ZONES)
        if isinstance(current_zones, list):
            zone_defaults = [str(z) for z in current_zones if MIN_ZONE <= int(z) <= MAX_ZONE]
        else:
            zone_defaults = [str(z) for z in DEFAULT_ZONES]

        data_schema = vol.Schema({
            vol.Optional(
                CONF_ZONES,
                default=zone_defaults,
            ): cv.multi_select({str(i): f"Zone {i}" for i in range(MIN_ZONE, MAX_ZONE + 1)}),
            vol.Optional(
                CONF_POLL_INTERVAL,
                default=options.get(CONF_POLL_INTERVAL, DEFAULT_POLL_INTERVAL),
            ): vol.All(vol.Coerce(int), vol.Range(min=10, max=300)),
            vol.Optional(
                CONF_AUTO_POLL,
                default=options.get(CONF_AUTO_POLL, DEFAULT_AUTO_POLL),
            ): bool,
            vol.Optional(
                CONF_COMMAND_TIMEOUT,
                default=options.get(CONF_COMMAND_TIMEOUT, DEFAULT_COMMAND_TIMEOUT),
            ): vol.All(vol.Coerce(int), vol.Range(min=5, max=30)),
            vol.Optional(
                CONF_DEBUG_LOGGING,
                default=options.get(CONF_DEBUG_LOGGING, DEFAULT_DEBUG_LOGGING),
            ): bool,
            vol.Optional(
                CONF_MAX_LEDS,
                default=options.get(CONF_MAX_LEDS, DEFAULT_MAX_LEDS),
            ): vol.All(vol.Coerce(int), vol.Range(min=1, max=500)),
            vol.Optional(
                CONF_SPOTLIGHT_PLAN_LIGHTS,
                default=options.get(CONF_SPOTLIGHT_PLAN_LIGHTS, DEFAULT_SPOTLIGHT_PLAN_LIGHTS),
            ): str,
            vol.Optional(
                CONF_VERIFY_COMMANDS,
                default=options.get(CONF_VERIFY_COMMANDS, DEFAULT_VERIFY_COMMANDS),
            ): bool,
            vol.Optional(
                CONF_VERIFICATION_RETRIES,
                default=options.get(CONF_VERIFICATION_RETRIES, DEFAULT_VERIFICATION_RETRIES),
            ): vol.All(vol.Coerce(int), vol.Range(min=1, max=10)),
            vol.Optional(
                CONF_VERIFICATION_DELAY,
                default=options.get(CONF_VERIFICATION_DELAY, DEFAULT_VERIFICATION_DELAY),
            ): vol.All(vol.Coerce(int), vol.Range(min=1, max=10)),
            vol.Optional(
                CONF_VERIFICATION_TIMEOUT,
                default=options.get(CONF_VERIFICATION_TIMEOUT, DEFAULT_VERIFICATION_TIMEOUT),
            ): vol.All(vol.Coerce(int), vol.Range(min=5, max=60)),
            vol.Optional(
                CONF_DISCOVERY_SUBNET,
                default=options.get(CONF_DISCOVERY_SUBNET, DEFAULT_DISCOVERY_SUBNET),
            ): str,
            vol.Optional(
                CONF_DISCOVERY_PROBE_TIMEOUT,
                default=options.get(CONF_DISCOVERY_PROBE_TIMEOUT, DEFAULT_DISCOVERY_PROBE_TIMEOUT),
            ): vol.All(vol.Coerce(int), vol.Range(min=1, max=10)),
        })

        return self.async_show_form(step_id="init", data_schema=data_schema, errors=errors)
