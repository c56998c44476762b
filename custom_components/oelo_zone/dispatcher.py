"""Debounced command dispatch for one zone.

Commands submitted within the debounce window collapse into a single send
of the most recent URL. Every caller awaits an Outcome: the caller whose
command was sent gets the send result, superseded callers get a
CommandSupersededError.
"""

from __future__ import annotations
import asyncio
import inspect
import logging
from typing import Any, Callable

from .const import (
    ATTR_AVAILABLE,
    ATTR_LAST_COMMAND,
    ATTR_SWITCH,
    ATTR_VERIFICATION_STATUS,
    JOB_DISPATCH,
    PATTERN_OFF,
    VERIFICATION_ERROR,
)
from .context import ZoneContext
from .exceptions import CommandSupersededError, TransportError
from .models import Outcome
from .pattern_utils import parse_url_params
from .verification import CommandVerifier

_LOGGER = logging.getLogger(__name__)

OnSent = Callable[[str], Any]


class CommandDispatcher:
    """Single pending command per zone, sent after a quiet period."""

    def __init__(self, ctx: ZoneContext, verifier: CommandVerifier) -> None:
        self._ctx = ctx
        self._verifier = verifier
        self._pending_future: asyncio.Future | None = None
        self._pending_on_sent: OnSent | None = None
        self._inflight_future: asyncio.Future | None = None

    @property
    def pending_url(self) -> str | None:
        buffer = self._ctx.state.get("debounce")
        return buffer.get("pending_url") if buffer else None

    async def async_submit(self, url: str, on_sent: OnSent | None = None) -> Outcome[str]:
        """Queue a command URL; resolves once it is sent or superseded.

        Args:
            url: Complete setPattern URL
            on_sent: Called with the URL after the controller accepted it,
                instead of the generic verification / optimistic update
        """
        log_prefix = self._ctx.log_prefix
        loop = asyncio.get_running_loop()

        if self._pending_future and not self._pending_future.done():
            _LOGGER.debug("%s: Superseding pending command: %s", log_prefix, self.pending_url)
            self._pending_future.set_result(
                Outcome.failure(CommandSupersededError("Superseded by a newer command"))
            )

        current_call_future = loop.create_future()
        self._pending_future = current_call_future
        self._pending_on_sent = on_sent
        self._ctx.state["debounce"] = {"pending_url": url, "scheduled_at": self._ctx.clock()}
        self._ctx.scheduler.schedule(JOB_DISPATCH, self._ctx.settings.debounce_interval, self._async_fire, url)
        await self._ctx.async_save()

        return await current_call_future

    async def async_resume(self) -> None:
        """Reschedule a command that was still buffered at shutdown."""
        url = self.pending_url
        if url:
            _LOGGER.debug("%s: Resuming buffered command: %s", self._ctx.log_prefix, url)
            self._ctx.scheduler.schedule(JOB_DISPATCH, self._ctx.settings.debounce_interval, self._async_fire, url)

    async def _async_fire(self, url: str) -> None:
        log_prefix = self._ctx.log_prefix
        if self.pending_url != url:
            _LOGGER.debug("%s: Debounce woke up for a replaced command, dropping: %s", log_prefix, url)
            return

        future_to_resolve_now = self._pending_future
        on_sent = self._pending_on_sent
        self._pending_future = None
        self._pending_on_sent = None
        self._inflight_future = future_to_resolve_now
        self._ctx.state["debounce"] = None

        # A new command replaces whatever verification was running
        self._verifier.cancel()

        _LOGGER.debug("%s: Debounce finished. Sending actual URL: %s", log_prefix, url)
        result: Outcome[str] = Outcome.failure(TransportError("Command was not sent"))
        try:
            result = await self._ctx.transport.async_send_command(url)

            if result.ok:
                _LOGGER.info("%s: Command sent successfully", log_prefix)
                self._ctx.publish(**{ATTR_LAST_COMMAND: url, ATTR_AVAILABLE: True})
                if on_sent is not None:
                    callback_result = on_sent(url)
                    if inspect.isawaitable(callback_result):
                        await callback_result
                elif self._ctx.settings.verify_commands:
                    await self._verifier.async_start(url)
                else:
                    is_off = parse_url_params(url).get("patternType") == PATTERN_OFF
                    self._ctx.publish(**{ATTR_SWITCH: "off" if is_off else "on"})
            else:
                _LOGGER.error("%s: Command failed: %s", log_prefix, result.error)
                self._ctx.publish(**{ATTR_VERIFICATION_STATUS: VERIFICATION_ERROR})

            await self._ctx.async_save()
        finally:
            self._inflight_future = None
            if future_to_resolve_now and not future_to_resolve_now.done():
                future_to_resolve_now.set_result(result)

    async def async_shutdown(self) -> None:
        """Release any caller still waiting for a command."""
        self._ctx.scheduler.cancel(JOB_DISPATCH)
        for future in (self._pending_future, self._inflight_future):
            if future and not future.done():
                future.set_result(Outcome.failure(CommandSupersededError("Zone is shutting down")))
        self._pending_future = None
        self._inflight_future = None
