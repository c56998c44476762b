"""Pytest configuration and fixtures for Oelo Lights Zone tests.

Zone components are tested against in-memory fakes; the Home Assistant parts
use pytest-homeassistant-custom-component.

Fixtures:
    clock: Manually advanced wall clock
    store: In-memory replacement for homeassistant.helpers.storage.Store
    transport: Scripted controller (status bodies per host, command log)
    scheduler: Scheduler whose timers only fire when a test says so
    make_context: Factory for a ZoneContext wired to the fakes
    mock_config_entry: Mock configuration entry with default options
    zone_status: Builder for getController zone entries
"""

from __future__ import annotations
import asyncio
import copy
from typing import Any, Callable

import pytest
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.oelo_zone.const import COMMAND_RECEIVED, DOMAIN
from custom_components.oelo_zone.context import ZoneContext
from custom_components.oelo_zone.exceptions import TransportError
from custom_components.oelo_zone.models import Outcome, ZoneSettings

CONTROLLER_IP = "10.0.0.5"


def make_zone_status(zone: int = 1, pattern: str = "march", is_on: bool = True, **extra: Any) -> dict[str, Any]:
    """One entry of a getController body."""
    data = {
        "num": zone,
        "pattern": pattern,
        "isOn": is_on,
        "colorStr": "255&0&0&0&0&255",
        "direction": "R",
        "speed": 3,
        "gap": 0,
        "other": 0,
        "ledCnt": 150,
    }
    data.update(extra)
    return data


class FakeClock:
    def __init__(self, now: float = 1_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeStore:
    def __init__(self, data: Any = None) -> None:
        self.data = copy.deepcopy(data)
        self.saves = 0

    async def async_load(self) -> Any:
        return copy.deepcopy(self.data)

    async def async_save(self, data: Any) -> None:
        self.data = copy.deepcopy(data)
        self.saves += 1


class FakeTransport:
    """Controller double: status bodies per host, every command recorded."""

    def __init__(self, host: str | None = CONTROLLER_IP) -> None:
        self.host = host
        self.bodies: dict[str, Any] = {}
        self.zone_results: list[Outcome] = []
        self.send_results: list[Outcome] = []
        self.sent: list[str] = []
        self.probed: list[str] = []
        self.hang: dict[str, asyncio.Event] = {}

    def set_zone(self, zone_data: dict[str, Any] | None) -> None:
        """Status body of the configured host with a single zone entry."""
        if zone_data is None:
            self.bodies.pop(self.host, None)
        else:
            self.bodies[self.host] = [zone_data]

    async def async_fetch_status(self, host: str | None = None, timeout: float | None = None) -> Outcome[list]:
        target = host or self.host
        if host is not None:
            self.probed.append(host)
        if target in self.hang:
            await self.hang[target].wait()
        body = self.bodies.get(target)
        if body is None:
            return Outcome.failure(TransportError(f"No answer from {target}"))
        return Outcome.success(body)

    async def async_fetch_zone(self, zone: int) -> Outcome[dict]:
        if self.zone_results:
            return self.zone_results.pop(0)
        result = await self.async_fetch_status()
        if not result.ok:
            return Outcome.failure(result.error)
        for item in result.value:
            if isinstance(item, dict) and str(item.get("num")) == str(zone):
                return Outcome.success(item)
        return Outcome.failure(TransportError(f"Zone {zone} data not found"))

    async def async_send_command(self, url: str) -> Outcome[str]:
        self.sent.append(url)
        if self.send_results:
            return self.send_results.pop(0)
        return Outcome.success(COMMAND_RECEIVED)


class ManualScheduler:
    """Scheduler double; jobs run only via async_fire."""

    def __init__(self) -> None:
        self.jobs: dict[str, tuple[int, float, Callable[..., Any], tuple]] = {}
        self.tasks: set[asyncio.Task] = set()
        self._token = 0

    def schedule(self, key: str, delay: float, target: Callable[..., Any], *args: Any) -> int:
        self._token += 1
        self.jobs[key] = (self._token, delay, target, args)
        return self._token

    def cancel(self, key: str) -> bool:
        return self.jobs.pop(key, None) is not None

    def cancel_all(self) -> None:
        self.jobs.clear()

    def is_scheduled(self, key: str) -> bool:
        return key in self.jobs

    def delay(self, key: str) -> float:
        return self.jobs[key][1]

    def spawn(self, coro) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self.tasks.add(task)
        task.add_done_callback(self.tasks.discard)
        return task

    async def async_fire(self, key: str) -> None:
        """Run the job under key now, awaiting it if it is a coroutine."""
        _, _, target, args = self.jobs.pop(key)
        result = target(*args)
        if asyncio.iscoroutine(result):
            await result

    async def async_drain(self) -> None:
        while self.tasks:
            await asyncio.gather(*list(self.tasks))

    async def async_shutdown(self) -> None:
        self.cancel_all()
        for task in list(self.tasks):
            task.cancel()
        if self.tasks:
            await asyncio.gather(*list(self.tasks), return_exceptions=True)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def make_context(transport, scheduler, store, clock):
    """Build a ZoneContext for zone 1 on the fakes; keyword args override settings."""

    def _make(**overrides: Any) -> ZoneContext:
        values = {"controller_ip": CONTROLLER_IP, "zone": 1}
        values.update(overrides)
        return ZoneContext(ZoneSettings(**values), transport, scheduler, store, clock)

    return _make


@pytest.fixture
def mock_config_entry() -> MockConfigEntry:
    """Create a mock configuration entry for testing."""
    return MockConfigEntry(
        domain=DOMAIN,
        data={"ip_address": CONTROLLER_IP},
        options={
            "zones": [1, 2],
            "poll_interval": 30,
            "auto_poll": False,
            "max_leds": 500,
            "spotlight_plan_lights": "1,2,3,4,8,9,10,11",
            "verify_commands": False,
            "verification_retries": 3,
            "verification_delay": 2,
            "verification_timeout": 30,
            "command_timeout": 10,
            "debug_logging": False,
        },
        title="Oelo Controller 10.0.0.5",
        entry_id="test_oelo_entry_1",
    )


@pytest.fixture
def zone_status() -> Callable[..., dict[str, Any]]:
    """Builder for getController zone entries."""
    return make_zone_status
