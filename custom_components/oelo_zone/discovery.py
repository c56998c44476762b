"""Controller discovery for the Oelo Lights Zone integration.

Scans candidate /24 subnets host by host (1-254) with short status probes.
An address is the controller when its status body has the controller's
structure: a list whose first element carries a zone number plus a pattern
or enabled field.

The scan is a state machine driven by one scheduled "step" per probe. Each
probe gets a sequence number; the probe response and the per-probe safety
timer race, and whichever arrives second finds its sequence number consumed
and does nothing. Stop requests are checked at every step and again when a
probe completes, because an in-flight request cannot be recalled.
"""

from __future__ import annotations
import inspect
import ipaddress
import logging
from typing import Any, Callable, Iterable

from .const import (
    ATTR_CONTROLLER_IP,
    ATTR_DISCOVERED_ADDRESS,
    ATTR_DISCOVERY_STATUS,
    DISCOVERY_FALLBACK_SUBNETS,
    DISCOVERY_FIRST_HOST,
    DISCOVERY_FOUND,
    DISCOVERY_LAST_HOST,
    DISCOVERY_NOT_FOUND,
    DISCOVERY_SAFETY_MARGIN,
    DISCOVERY_SCANNING,
    DISCOVERY_STEP_DELAY,
    DISCOVERY_STOPPED,
    JOB_DISCOVERY_SAFETY,
    JOB_DISCOVERY_STEP,
)
from .context import ZoneContext
from .exceptions import ValidationError
from .models import Outcome

_LOGGER = logging.getLogger(__name__)


def is_controller_response(body: Any) -> bool:
    """Structural check of a getController body."""
    if not isinstance(body, list) or not body:
        return False
    first = body[0]
    return isinstance(first, dict) and "num" in first and ("pattern" in first or "enabled" in first)


def subnet_prefix(value: str | None) -> str | None:
    """Three-octet prefix from "a.b.c", "a.b.c.", "a.b.c.0/24" or a host address."""
    if not value or not str(value).strip():
        return None
    text = str(value).strip()
    if "/" in text:
        text = text.split("/", 1)[0]
    text = text.rstrip(".")
    octets = text.split(".")
    if len(octets) == 3:
        octets.append("0")
    if len(octets) != 4:
        return None
    try:
        address = ipaddress.IPv4Address(".".join(octets))
    except ValueError:
        return None
    return ".".join(str(address).split(".")[:3])


def build_subnet_candidates(
    hub_ip: str | None,
    user_subnet: str | None,
    fallback: Iterable[str] = DISCOVERY_FALLBACK_SUBNETS,
) -> list[str]:
    """Ordered, de-duplicated subnets: hub subnet, user subnet, then fallbacks."""
    candidates: list[str] = []
    for value in (hub_ip, user_subnet, *fallback):
        prefix = subnet_prefix(value)
        if prefix and prefix not in candidates:
            candidates.append(prefix)
    return candidates


class DiscoveryScanner:
    """Sequential subnet scanner of one zone."""

    def __init__(self, ctx: ZoneContext, on_found: Callable[[str], Any] | None = None) -> None:
        self._ctx = ctx
        self.on_found = on_found
        self._seq = 0

    @property
    def session(self) -> dict[str, Any] | None:
        return self._ctx.state.get("discovery")

    @property
    def scanning(self) -> bool:
        session = self.session
        return bool(session) and not session.get("stopped")

    async def async_start(
        self,
        hub_ip: str | None = None,
        subnet: str | None = None,
        subnets: list[str] | None = None,
    ) -> Outcome[list[str]]:
        """Start (or restart) a scan.

        Args:
            hub_ip: Address of the host running the integration, its /24 goes first
            subnet: User subnet, defaults to the Discovery Subnet option
            subnets: Explicit subnet list, replaces the candidate building
        """
        log_prefix = self._ctx.log_prefix
        if subnets:
            candidates = [p for p in (subnet_prefix(s) for s in subnets) if p]
        else:
            candidates = build_subnet_candidates(hub_ip, subnet or self._ctx.settings.discovery_subnet)
        if not candidates:
            return Outcome.failure(ValidationError("No subnets to scan"))

        self._cancel_jobs()
        self._ctx.state["discovery"] = {
            "subnets": candidates,
            "subnet_index": 0,
            "host_index": DISCOVERY_FIRST_HOST,
            "found": False,
            "stopped": False,
            "last_probe": None,
        }
        self._ctx.publish(**{ATTR_DISCOVERY_STATUS: DISCOVERY_SCANNING})
        await self._ctx.async_save()
        _LOGGER.info("%s: Starting controller discovery on subnets %s", log_prefix, ", ".join(candidates))
        self._ctx.scheduler.schedule(JOB_DISCOVERY_STEP, 0, self._step)
        return Outcome.success(candidates)

    async def async_resume(self) -> None:
        """Continue a scan persisted before a restart, from its current host."""
        session = self.session
        if not session:
            return
        if session.get("stopped") or session.get("found"):
            self._ctx.state["discovery"] = None
            return
        session["last_probe"] = None
        self._ctx.publish(**{ATTR_DISCOVERY_STATUS: DISCOVERY_SCANNING})
        _LOGGER.debug("%s: Resuming controller discovery", self._ctx.log_prefix)
        self._ctx.scheduler.schedule(JOB_DISCOVERY_STEP, 0, self._step)

    async def async_stop(self) -> None:
        """Stop the scan; a probe still in flight is ignored when it returns."""
        session = self.session
        if session:
            session["stopped"] = True
        self._cancel_jobs()
        self._ctx.state["discovery"] = None
        self._ctx.publish(**{ATTR_DISCOVERY_STATUS: DISCOVERY_STOPPED})
        await self._ctx.async_save()
        _LOGGER.info("%s: Controller discovery stopped", self._ctx.log_prefix)

    def _cancel_jobs(self) -> None:
        self._ctx.scheduler.cancel(JOB_DISCOVERY_STEP)
        self._ctx.scheduler.cancel(JOB_DISCOVERY_SAFETY)

    def _step(self) -> None:
        session = self.session
        if not session or session.get("stopped"):
            return

        if session["subnet_index"] >= len(session["subnets"]):
            self._ctx.scheduler.spawn(self._async_finish_not_found())
            return

        address = f"{session['subnets'][session['subnet_index']]}.{session['host_index']}"
        self._seq += 1
        seq = self._seq
        session["last_probe"] = {"address": address, "started_at": self._ctx.clock(), "seq": seq}

        probe_timeout = self._ctx.settings.discovery_probe_timeout
        self._ctx.scheduler.schedule(
            JOB_DISCOVERY_SAFETY, probe_timeout + DISCOVERY_SAFETY_MARGIN, self._on_safety_net, seq
        )
        self._ctx.scheduler.spawn(self._async_probe(address, seq))

    def _claim(self, seq: int) -> dict[str, Any] | None:
        """Consume the probe slot for seq; None if stopped or already consumed."""
        session = self.session
        if not session or session.get("stopped"):
            return None
        last_probe = session.get("last_probe")
        if not last_probe or last_probe.get("seq") != seq:
            return None
        session["last_probe"] = None
        return session

    async def _async_probe(self, address: str, seq: int) -> None:
        result = await self._ctx.transport.async_fetch_status(
            host=address, timeout=self._ctx.settings.discovery_probe_timeout
        )
        session = self._claim(seq)
        if session is None:
            _LOGGER.debug("%s: Ignoring late probe response from %s", self._ctx.log_prefix, address)
            return
        self._ctx.scheduler.cancel(JOB_DISCOVERY_SAFETY)

        if result.ok and is_controller_response(result.value):
            await self._async_finish_found(address)
            return
        self._advance(session)

    def _on_safety_net(self, seq: int) -> None:
        session = self._claim(seq)
        if session is None:
            return
        _LOGGER.debug("%s: Probe %d got no answer in time, moving on", self._ctx.log_prefix, seq)
        self._advance(session)

    def _advance(self, session: dict[str, Any]) -> None:
        session["host_index"] += 1
        if session["host_index"] > DISCOVERY_LAST_HOST:
            session["host_index"] = DISCOVERY_FIRST_HOST
            session["subnet_index"] += 1
            if session["subnet_index"] < len(session["subnets"]):
                _LOGGER.debug(
                    "%s: Subnet exhausted, scanning %s", self._ctx.log_prefix,
                    session["subnets"][session["subnet_index"]],
                )
        self._ctx.scheduler.schedule(JOB_DISCOVERY_STEP, DISCOVERY_STEP_DELAY, self._step)

    async def _async_finish_found(self, address: str) -> None:
        self._cancel_jobs()
        self._ctx.state["discovery"] = None
        self._ctx.transport.host = address
        self._ctx.publish(**{
            ATTR_DISCOVERY_STATUS: DISCOVERY_FOUND,
            ATTR_DISCOVERED_ADDRESS: address,
            ATTR_CONTROLLER_IP: address,
        })
        await self._ctx.async_save()
        _LOGGER.info("%s: Found Oelo controller at %s", self._ctx.log_prefix, address)
        if self.on_found is not None:
            result = self.on_found(address)
            if inspect.isawaitable(result):
                await result

    async def _async_finish_not_found(self) -> None:
        self._cancel_jobs()
        self._ctx.state["discovery"] = None
        self._ctx.publish(**{ATTR_DISCOVERY_STATUS: DISCOVERY_NOT_FOUND})
        await self._ctx.async_save()
        _LOGGER.warning("%s: No Oelo controller found on any candidate subnet", self._ctx.log_prefix)
