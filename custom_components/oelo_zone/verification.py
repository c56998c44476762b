"""Command verification for the Oelo Lights Zone integration.

After a command is accepted the zone status is polled until it matches what
the command asked for, the attempts run out, or the wall-clock deadline
passes. Status: idle -> pending -> verified | failed | timeout | error;
commands for another zone are skipped.

The controller does not report enough to compare exact parameters, so an
"off" command matches any off report and any other command matches any
non-off report.
"""

from __future__ import annotations
import logging
from typing import Any

from .const import (
    ATTR_CURRENT_PATTERN,
    ATTR_EFFECT_NAME,
    ATTR_SWITCH,
    ATTR_VERIFICATION_STATUS,
    JOB_VERIFICATION,
    PATTERN_OFF,
    VERIFICATION_ERROR,
    VERIFICATION_FAILED,
    VERIFICATION_PENDING,
    VERIFICATION_SKIPPED,
    VERIFICATION_TIMEOUT,
    VERIFICATION_VERIFIED,
)
from .context import ZoneContext
from .models import ZoneObservation
from .pattern_storage import PatternStorage
from .pattern_utils import parse_url_params

_LOGGER = logging.getLogger(__name__)


def parse_command_expectation(url: str, zone: int) -> dict[str, Any] | None:
    """Expected state for a command URL, or None when it targets another zone."""
    params = parse_url_params(url)
    zones = params.get("zones")
    if zones and str(zones) != str(zone):
        return None
    pattern_type = params.get("patternType")
    return {"pattern_type": pattern_type, "is_off": pattern_type == PATTERN_OFF}


def matches_expectation(expected: dict[str, Any], observation: ZoneObservation) -> bool:
    observed_off = not observation.is_on
    if expected.get("is_off"):
        return observed_off
    return not observed_off


class CommandVerifier:
    """Verification session of one zone, persisted in the zone context."""

    def __init__(self, ctx: ZoneContext, patterns: PatternStorage) -> None:
        self._ctx = ctx
        self._patterns = patterns

    @property
    def session(self) -> dict[str, Any] | None:
        return self._ctx.state.get("verification")

    def cancel(self) -> None:
        """Drop the current session without reporting a result."""
        self._ctx.scheduler.cancel(JOB_VERIFICATION)
        self._ctx.state["verification"] = None

    async def async_start(self, command_url: str) -> None:
        """Start verifying a command that the controller accepted."""
        log_prefix = self._ctx.log_prefix
        self.cancel()

        expected = parse_command_expectation(command_url, self._ctx.zone)
        if expected is None:
            _LOGGER.debug("%s: Command is for another zone, skipping verification", log_prefix)
            self._ctx.publish(**{ATTR_VERIFICATION_STATUS: VERIFICATION_SKIPPED})
            await self._ctx.async_save()
            return

        self._ctx.state["verification"] = {
            "command_url": command_url,
            "expected": expected,
            "attempt": 0,
            "started_at": self._ctx.clock(),
        }
        self._ctx.publish(**{ATTR_VERIFICATION_STATUS: VERIFICATION_PENDING})
        await self._ctx.async_save()
        _LOGGER.debug("%s: Starting verification for command: %s", log_prefix, command_url)
        self._ctx.scheduler.schedule(JOB_VERIFICATION, 0, self.async_check)

    async def async_resume(self) -> None:
        """Continue a session persisted before a restart."""
        if self.session:
            _LOGGER.debug("%s: Resuming verification session", self._ctx.log_prefix)
            self._ctx.scheduler.schedule(JOB_VERIFICATION, 0, self.async_check)

    async def async_check(self) -> None:
        """One verification probe; reschedules itself while attempts remain."""
        settings = self._ctx.settings
        log_prefix = self._ctx.log_prefix
        session = self.session
        if not session:
            return

        if self._elapsed(session) > settings.verification_timeout:
            _LOGGER.warning("%s: Verification timeout after %s seconds", log_prefix, settings.verification_timeout)
            await self._async_finish(VERIFICATION_TIMEOUT)
            return

        if not self._ctx.transport.host:
            _LOGGER.error("%s: Cannot verify: Controller IP not configured", log_prefix)
            await self._async_finish(VERIFICATION_ERROR)
            return

        session["attempt"] += 1
        attempt = session["attempt"]
        _LOGGER.debug("%s: Verification attempt %d/%d", log_prefix, attempt, settings.verification_retries)
        result = await self._ctx.transport.async_fetch_zone(self._ctx.zone)

        if self.session is not session:
            _LOGGER.debug("%s: Verification session replaced during probe, ignoring result", log_prefix)
            return

        if result.ok:
            observation = ZoneObservation.from_zone_data(result.value)
            if matches_expectation(session["expected"], observation):
                _LOGGER.debug("%s: Command verified on attempt %d", log_prefix, attempt)
                self._publish_observation(observation)
                await self._async_finish(VERIFICATION_VERIFIED)
                return
            _LOGGER.debug(
                "%s: Verification attempt %d failed. Expected: %s, Got: %s",
                log_prefix, attempt, session["expected"], observation,
            )

        if attempt >= settings.verification_retries:
            _LOGGER.warning("%s: Command verification failed after %d attempts", log_prefix, attempt)
            await self._async_finish(VERIFICATION_FAILED)
            return

        if self._elapsed(session) > settings.verification_timeout:
            _LOGGER.warning("%s: Verification timeout after %s seconds", log_prefix, settings.verification_timeout)
            await self._async_finish(VERIFICATION_TIMEOUT)
            return

        await self._ctx.async_save()
        self._ctx.scheduler.schedule(JOB_VERIFICATION, settings.verification_delay, self.async_check)

    def _elapsed(self, session: dict[str, Any]) -> float:
        return self._ctx.clock() - session["started_at"]

    def _publish_observation(self, observation: ZoneObservation) -> None:
        changes: dict[str, Any] = {
            ATTR_SWITCH: "on" if observation.is_on else "off",
            ATTR_CURRENT_PATTERN: observation.pattern_name,
        }
        if observation.is_on:
            effect_name = self._patterns.find_name_for_pattern_type(observation.pattern_name)
            if effect_name:
                changes[ATTR_EFFECT_NAME] = effect_name
        self._ctx.publish(**changes)

    async def _async_finish(self, status: str) -> None:
        self._ctx.scheduler.cancel(JOB_VERIFICATION)
        self._ctx.state["verification"] = None
        self._ctx.publish(**{ATTR_VERIFICATION_STATUS: status})
        await self._ctx.async_save()
