"""Zone controller: the commands of one Oelo zone.

Wires the pattern storage, dispatcher, verifier, discovery scanner and
poller around a single ZoneContext. Every command returns an Outcome; the
Home Assistant glue decides how failures reach the user.

Workflow:
    1. Create/set pattern in Oelo app
    2. capture_pattern stores it (zone must be on)
    3. rename_pattern (optional)
    4. apply_pattern / turn_on re-sends it
"""

from __future__ import annotations
import asyncio
import functools
import logging
import time
from typing import Any, Callable

import aiohttp

from .const import (
    ATTR_AVAILABLE_PATTERNS,
    ATTR_DRIVER_VERSION,
    ATTR_EFFECT_NAME,
    ATTR_SWITCH,
    DRIVER_VERSION,
)
from .context import StateStore, ZoneContext
from .discovery import DiscoveryScanner
from .dispatcher import CommandDispatcher
from .exceptions import TransportError, ValidationError
from .models import Outcome, ZoneObservation, ZoneSettings
from .pattern_storage import PatternStorage
from .pattern_utils import build_command_url, build_off_params
from .poller import ZonePoller
from .scheduler import Scheduler
from .transport import ZoneTransport
from .verification import CommandVerifier

_LOGGER = logging.getLogger(__name__)


class ZoneController:
    """One controller zone and its persisted state."""

    def __init__(self, ctx: ZoneContext, on_found: Callable[[str], Any] | None = None) -> None:
        self.ctx = ctx
        self.patterns = PatternStorage(ctx)
        self.verifier = CommandVerifier(ctx, self.patterns)
        self.dispatcher = CommandDispatcher(ctx, self.verifier)
        self.discovery = DiscoveryScanner(ctx, on_found)
        self.poller = ZonePoller(ctx, self.patterns)

    @classmethod
    def create(
        cls,
        settings: ZoneSettings,
        session: aiohttp.ClientSession,
        store: StateStore,
        loop: asyncio.AbstractEventLoop,
        on_found: Callable[[str], Any] | None = None,
        clock: Callable[[], float] = time.time,
    ) -> ZoneController:
        name = f"Zone {settings.zone}"
        transport = ZoneTransport(session, settings.controller_ip, settings.command_timeout, name)
        ctx = ZoneContext(settings, transport, Scheduler(loop, name), store, clock)
        return cls(ctx, on_found)

    @property
    def zone(self) -> int:
        return self.ctx.zone

    @property
    def attributes(self) -> dict[str, Any]:
        return self.ctx.attributes

    def async_add_listener(self, listener: Callable[[], None]) -> Callable[[], None]:
        return self.ctx.async_add_listener(listener)

    async def async_initialize(self) -> None:
        """Load state, seed predefined patterns once, resume sessions, refresh and start polling."""
        ctx = self.ctx
        await ctx.async_load()

        previous_version = ctx.state.get("driver_version")
        if previous_version != DRIVER_VERSION:
            _LOGGER.info(
                "%s: Driver version changed: %s -> %s", ctx.log_prefix, previous_version or "none", DRIVER_VERSION
            )
            ctx.state["driver_version"] = DRIVER_VERSION

        await self.patterns.async_load_predefined()
        ctx.publish(**{
            ATTR_DRIVER_VERSION: DRIVER_VERSION,
            ATTR_AVAILABLE_PATTERNS: self.patterns.available_patterns(),
        })
        if ctx.state.get("last_used_pattern"):
            ctx.publish(**{ATTR_EFFECT_NAME: ctx.state["last_used_pattern"]})

        await self.dispatcher.async_resume()
        await self.verifier.async_resume()
        await self.discovery.async_resume()
        await ctx.async_save()
        if ctx.transport.host:
            await self.poller.async_poll_now()
        self.poller.start()
        _LOGGER.debug("%s: Initialized (controller %s)", ctx.log_prefix, ctx.transport.host)

    def _command_url(self, params: dict[str, str]) -> Outcome[str]:
        host = self.ctx.transport.host
        if not host:
            _LOGGER.error("%s: Controller IP not configured", self.ctx.log_prefix)
            return Outcome.failure(TransportError("Controller IP not configured"))
        return Outcome.success(build_command_url(params, host))

    async def async_turn_on(self) -> Outcome[str]:
        """Re-apply the last used pattern, else the first stored one."""
        name = self.ctx.state.get("last_used_pattern")
        if not name or self.patterns.get_pattern(name) is None:
            name = self.patterns.first_pattern_name()
        if not name:
            _LOGGER.warning("%s: No patterns available to turn on", self.ctx.log_prefix)
            return Outcome.failure(ValidationError("No patterns available, capture one first"))
        _LOGGER.debug("%s: Turning on with pattern '%s'", self.ctx.log_prefix, name)
        return await self.async_apply_pattern(name)

    async def async_turn_off(self) -> Outcome[str]:
        url = self._command_url(build_off_params(self.zone))
        if not url.ok:
            return url
        result = await self.dispatcher.async_submit(url.value)
        if result.ok:
            self.ctx.publish(**{ATTR_EFFECT_NAME: None})
            _LOGGER.info("%s: Turned off", self.ctx.log_prefix)
        return result

    async def async_apply_pattern(self, name: str) -> Outcome[str]:
        resolved = await self.patterns.async_resolve(name, self.zone)
        if not resolved.ok:
            return Outcome.failure(resolved.error)

        url = self._command_url(resolved.value)
        if not url.ok:
            return url

        return await self.dispatcher.async_submit(url.value, on_sent=functools.partial(self._async_pattern_sent, name))

    async def _async_pattern_sent(self, name: str, url: str) -> None:
        """Record the applied pattern once the controller accepted it."""
        self.ctx.state["last_used_pattern"] = name
        self.ctx.publish(**{ATTR_EFFECT_NAME: name})
        if self.ctx.settings.verify_commands:
            await self.verifier.async_start(url)
        else:
            self.ctx.publish(**{ATTR_SWITCH: "on"})
        _LOGGER.info("%s: Applied pattern '%s'", self.ctx.log_prefix, name)

    async def async_capture_pattern(self, name: str | None = None) -> Outcome[dict]:
        """Store the zone's current pattern, optionally under the given name."""
        fetched = await self.ctx.transport.async_fetch_zone(self.zone)
        if not fetched.ok:
            return Outcome.failure(fetched.error)

        return await self.patterns.async_capture(fetched.value, name)

    async def async_refresh(self) -> Outcome[ZoneObservation]:
        return await self.poller.async_poll_now()

    async def async_start_discovery(
        self,
        hub_ip: str | None = None,
        subnet: str | None = None,
        subnets: list[str] | None = None,
    ) -> Outcome[list[str]]:
        return await self.discovery.async_start(hub_ip=hub_ip, subnet=subnet, subnets=subnets)

    async def async_stop_discovery(self) -> None:
        await self.discovery.async_stop()

    async def async_rename_pattern(self, old_name: str, new_name: str) -> Outcome[dict | None]:
        result = await self.patterns.async_rename(old_name, new_name)
        if result.ok and self.ctx.attributes.get(ATTR_EFFECT_NAME) == old_name:
            self.ctx.publish(**{ATTR_EFFECT_NAME: new_name.strip()})
        return result

    async def async_delete_pattern(self, name: str) -> Outcome[dict]:
        return await self.patterns.async_delete(name)

    def list_patterns(self) -> list[str]:
        return self.patterns.list_names()

    async def async_load_predefined(self, force: bool = False) -> Outcome[int]:
        return await self.patterns.async_load_predefined(force=force)

    async def async_shutdown(self) -> None:
        """Stop timers and tasks; persisted sessions resume on the next start."""
        self.poller.stop()
        await self.dispatcher.async_shutdown()
        await self.ctx.scheduler.async_shutdown()
        await self.ctx.async_save()
