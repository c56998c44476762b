"""Per-zone context shared by the zone components.

One ZoneContext belongs to exactly one zone. It holds the settings, the
transport, the scheduler, the persisted state and the published attributes.
Components keep no state of their own beyond a reference to the context.
"""

from __future__ import annotations
import copy
import logging
import time
from typing import Any, Callable, Protocol

from .const import (
    ATTR_AVAILABLE,
    ATTR_CONTROLLER_IP,
    ATTR_DISCOVERY_STATUS,
    ATTR_SWITCH,
    ATTR_VERIFICATION_STATUS,
    ATTR_ZONE,
    DISCOVERY_IDLE,
    VERIFICATION_IDLE,
)
from .models import ZoneSettings
from .scheduler import Scheduler
from .transport import ZoneTransport

_LOGGER = logging.getLogger(__name__)


class StateStore(Protocol):
    """The subset of homeassistant.helpers.storage.Store used here."""

    async def async_load(self) -> Any: ...

    async def async_save(self, data: Any) -> None: ...


def default_state() -> dict[str, Any]:
    """Persisted layout of one zone."""
    return {
        "patterns": [],
        "last_used_pattern": None,
        "last_captured_pattern": None,
        "debounce": None,
        "verification": None,
        "discovery": None,
        "driver_version": None,
        "predefined_loaded": False,
    }


class ZoneContext:
    """Everything one zone instance owns."""

    def __init__(
        self,
        settings: ZoneSettings,
        transport: ZoneTransport,
        scheduler: Scheduler,
        store: StateStore,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.settings = settings
        self.transport = transport
        self.scheduler = scheduler
        self.store = store
        self.clock = clock
        self.state: dict[str, Any] = default_state()
        self.attributes: dict[str, Any] = {
            ATTR_ZONE: settings.zone,
            ATTR_CONTROLLER_IP: settings.controller_ip,
            ATTR_AVAILABLE: True,
            ATTR_SWITCH: "off",
            ATTR_VERIFICATION_STATUS: VERIFICATION_IDLE,
            ATTR_DISCOVERY_STATUS: DISCOVERY_IDLE,
        }
        self._listeners: list[Callable[[], None]] = []

    @property
    def zone(self) -> int:
        return self.settings.zone

    @property
    def log_prefix(self) -> str:
        return f"Zone {self.settings.zone}"

    async def async_load(self) -> None:
        """Load persisted state, keeping defaults for missing keys."""
        data = await self.store.async_load()
        if data and isinstance(data, dict):
            for key, value in data.items():
                if key in self.state:
                    self.state[key] = value
        if not isinstance(self.state.get("patterns"), list):
            _LOGGER.warning("%s: Stored pattern list is invalid, starting empty", self.log_prefix)
            self.state["patterns"] = []

    async def async_save(self) -> None:
        await self.store.async_save(copy.deepcopy(self.state))

    def publish(self, **changes: Any) -> None:
        """Update published attributes and notify listeners when something changed."""
        changed = {key: value for key, value in changes.items() if self.attributes.get(key) != value}
        if not changed:
            return
        self.attributes.update(changed)
        _LOGGER.debug("%s: Published %s", self.log_prefix, changed)
        for listener in list(self._listeners):
            listener()

    def async_add_listener(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Register an attribute listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _remove
