"""Periodic zone status refresh."""

from __future__ import annotations
import logging

from .const import (
    ATTR_AVAILABLE,
    ATTR_CURRENT_PATTERN,
    ATTR_EFFECT_NAME,
    ATTR_SWITCH,
    JOB_POLL,
    PATTERN_CUSTOM,
    PATTERN_OFF,
)
from .context import ZoneContext
from .models import Outcome, ZoneObservation
from .pattern_storage import PatternStorage

_LOGGER = logging.getLogger(__name__)


class ZonePoller:
    """Fetch-and-publish loop; manual refreshes use the same path."""

    def __init__(self, ctx: ZoneContext, patterns: PatternStorage) -> None:
        self._ctx = ctx
        self._patterns = patterns

    def start(self) -> None:
        if not self._ctx.settings.auto_poll:
            _LOGGER.debug("%s: Auto polling disabled", self._ctx.log_prefix)
            return
        self._ctx.scheduler.schedule(JOB_POLL, self._ctx.settings.poll_interval, self._async_scheduled_poll)

    def stop(self) -> None:
        self._ctx.scheduler.cancel(JOB_POLL)

    async def _async_scheduled_poll(self) -> None:
        await self.async_poll_now()
        self.start()

    async def async_poll_now(self) -> Outcome[ZoneObservation]:
        log_prefix = self._ctx.log_prefix
        result = await self._ctx.transport.async_fetch_zone(self._ctx.zone)
        if not result.ok:
            if self._ctx.attributes.get(ATTR_AVAILABLE):
                _LOGGER.warning("%s: Status update failed, marking unavailable: %s", log_prefix, result.error)
            self._ctx.publish(**{ATTR_AVAILABLE: False})
            return Outcome.failure(result.error)

        observation = ZoneObservation.from_zone_data(result.value)
        was_on = self._ctx.attributes.get(ATTR_SWITCH) == "on"
        if was_on != observation.is_on:
            _LOGGER.info(
                "%s: State change via poll: %s -> %s (Pattern: '%s')", log_prefix,
                "On" if was_on else "Off", "On" if observation.is_on else "Off", observation.pattern_name,
            )

        changes = {
            ATTR_AVAILABLE: True,
            ATTR_SWITCH: "on" if observation.is_on else "off",
            ATTR_CURRENT_PATTERN: observation.pattern_name,
        }
        effect_name = None
        if observation.pattern_name not in (PATTERN_OFF, PATTERN_CUSTOM):
            effect_name = self._patterns.find_name_for_pattern_type(observation.pattern_name)
        changes[ATTR_EFFECT_NAME] = effect_name
        self._ctx.publish(**changes)
        return Outcome.success(observation)
