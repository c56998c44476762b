"""Value types shared by the zone components."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Generic, Mapping, TypeVar

from .const import (
    CONF_AUTO_POLL,
    CONF_COMMAND_TIMEOUT,
    CONF_DEBUG_LOGGING,
    CONF_DISCOVERY_PROBE_TIMEOUT,
    CONF_DISCOVERY_SUBNET,
    CONF_IP_ADDRESS,
    CONF_MAX_LEDS,
    CONF_POLL_INTERVAL,
    CONF_SPOTLIGHT_PLAN_LIGHTS,
    CONF_VERIFICATION_DELAY,
    CONF_VERIFICATION_RETRIES,
    CONF_VERIFICATION_TIMEOUT,
    CONF_VERIFY_COMMANDS,
    DEFAULT_AUTO_POLL,
    DEFAULT_COMMAND_TIMEOUT,
    DEFAULT_DEBOUNCE_INTERVAL,
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
    PATTERN_OFF,
)
from .exceptions import OeloError

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of a zone operation: a value on success, an error otherwise."""

    value: T | None = None
    error: OeloError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T | None = None) -> Outcome[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: OeloError) -> Outcome[T]:
        return cls(error=error)


@dataclass(frozen=True)
class ZoneObservation:
    """Zone state as reported by a status fetch."""

    pattern_name: str
    is_on: bool

    @classmethod
    def from_zone_data(cls, zone_data: Mapping[str, Any]) -> ZoneObservation:
        """Derive the observation; an "off" pattern forces is_on False."""
        pattern = zone_data.get("pattern") or zone_data.get("patternType") or PATTERN_OFF
        pattern = str(pattern).strip() or PATTERN_OFF
        if pattern == PATTERN_OFF:
            return cls(pattern_name=PATTERN_OFF, is_on=False)
        is_on = zone_data.get("isOn")
        return cls(pattern_name=pattern, is_on=True if is_on is None else bool(is_on))


@dataclass(frozen=True)
class ZoneSettings:
    """Per-zone configuration, built from a config entry."""

    controller_ip: str | None
    zone: int
    poll_interval: int = DEFAULT_POLL_INTERVAL
    auto_poll: bool = DEFAULT_AUTO_POLL
    command_timeout: int = DEFAULT_COMMAND_TIMEOUT
    debug_logging: bool = DEFAULT_DEBUG_LOGGING
    max_leds: int = DEFAULT_MAX_LEDS
    spotlight_plan_lights: str = DEFAULT_SPOTLIGHT_PLAN_LIGHTS
    verify_commands: bool = DEFAULT_VERIFY_COMMANDS
    verification_retries: int = DEFAULT_VERIFICATION_RETRIES
    verification_delay: float = DEFAULT_VERIFICATION_DELAY
    verification_timeout: float = DEFAULT_VERIFICATION_TIMEOUT
    discovery_subnet: str = DEFAULT_DISCOVERY_SUBNET
    discovery_probe_timeout: float = DEFAULT_DISCOVERY_PROBE_TIMEOUT
    debounce_interval: float = DEFAULT_DEBOUNCE_INTERVAL

    @classmethod
    def from_entry(cls, data: Mapping[str, Any], options: Mapping[str, Any], zone: int) -> ZoneSettings:
        return cls(
            controller_ip=data.get(CONF_IP_ADDRESS),
            zone=int(zone),
            poll_interval=int(options.get(CONF_POLL_INTERVAL, DEFAULT_POLL_INTERVAL)),
            auto_poll=bool(options.get(CONF_AUTO_POLL, DEFAULT_AUTO_POLL)),
            command_timeout=int(options.get(CONF_COMMAND_TIMEOUT, DEFAULT_COMMAND_TIMEOUT)),
            debug_logging=bool(options.get(CONF_DEBUG_LOGGING, DEFAULT_DEBUG_LOGGING)),
            max_leds=int(options.get(CONF_MAX_LEDS, DEFAULT_MAX_LEDS)),
            spotlight_plan_lights=options.get(CONF_SPOTLIGHT_PLAN_LIGHTS) or DEFAULT_SPOTLIGHT_PLAN_LIGHTS,
            verify_commands=bool(options.get(CONF_VERIFY_COMMANDS, DEFAULT_VERIFY_COMMANDS)),
            verification_retries=int(options.get(CONF_VERIFICATION_RETRIES, DEFAULT_VERIFICATION_RETRIES)),
            verification_delay=float(options.get(CONF_VERIFICATION_DELAY, DEFAULT_VERIFICATION_DELAY)),
            verification_timeout=float(options.get(CONF_VERIFICATION_TIMEOUT, DEFAULT_VERIFICATION_TIMEOUT)),
            discovery_subnet=options.get(CONF_DISCOVERY_SUBNET) or DEFAULT_DISCOVERY_SUBNET,
            discovery_probe_timeout=float(
                options.get(CONF_DISCOVERY_PROBE_TIMEOUT, DEFAULT_DISCOVERY_PROBE_TIMEOUT)
            ),
        )
