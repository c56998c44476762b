"""HTTP transport for one Oelo controller zone.

Protocol:
    GET http://{IP}/getController - Returns zone statuses (JSON array)
    GET http://{IP}/setPattern?patternType={type}&zones={zone}&... - Sets pattern

Every call returns an Outcome. Network failures, timeouts and bodies that do
not look like the controller's are logged here once and returned as
TransportError values; nothing is raised to the caller.
"""

from __future__ import annotations
import asyncio
import json
import logging
from typing import Any

import aiohttp
import async_timeout

from .const import COMMAND_RECEIVED, DEFAULT_COMMAND_TIMEOUT, STATUS_PATH
from .exceptions import TransportError
from .models import Outcome

_LOGGER = logging.getLogger(__name__)


def decode_status_body(body: Any) -> list[Any]:
    """Normalize a status body (parsed list, JSON text or raw bytes) to a list.

    Raises:
        TransportError: body is not a JSON array
    """
    if isinstance(body, (bytes, bytearray)):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError as err:
            raise TransportError(f"Status body is not UTF-8: {err}") from err

    if isinstance(body, str):
        text = body.strip()
        if not text:
            raise TransportError("Empty status body")
        try:
            body = json.loads(text)
        except ValueError as err:
            raise TransportError(f"Status body is not JSON: {text[:50]!r}") from err

    if not isinstance(body, list):
        raise TransportError(f"Controller did not return a list (got {type(body).__name__})")
    return body


def select_zone(data: list[Any], zone: int) -> dict[str, Any] | None:
    for item in data:
        if isinstance(item, dict) and str(item.get("num")) == str(zone):
            return item
    return None


class ZoneTransport:
    """Wraps the status and set-pattern endpoints of a controller."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        host: str | None,
        timeout: float = DEFAULT_COMMAND_TIMEOUT,
        name: str = "oelo",
    ) -> None:
        self.session = session
        # Read at call time, so a discovered address applies on the next request
        self.host = host
        self.timeout = timeout
        self._name = name

    async def _async_get(self, url: str, timeout: float) -> tuple[int, bytes]:
        if self.session is None or self.session.closed:
            raise TransportError("HTTP session closed/invalid")
        async with async_timeout.timeout(timeout):
            async with self.session.get(url) as response:
                body = await response.read()
                response.raise_for_status()
                return response.status, body

    async def async_fetch_status(self, host: str | None = None, timeout: float | None = None) -> Outcome[list]:
        """Fetch all zone statuses.

        An explicit host is a probe of some other address (discovery); its
        failures are only logged at debug level.
        """
        probing = host is not None
        target = host or self.host
        if not target:
            return self._fail(TransportError("Controller IP not configured"), probing)

        url = f"http://{target}/{STATUS_PATH}"
        try:
            _, body = await self._async_get(url, timeout or self.timeout)
            return Outcome.success(decode_status_body(body))
        except TransportError as err:
            return self._fail(err, probing, url)
        except asyncio.TimeoutError:
            return self._fail(TransportError(f"Request timed out: {url}"), probing)
        except aiohttp.ClientResponseError as err:
            return self._fail(TransportError(f"HTTP request failed: {err.status} {err.message}"), probing, url)
        except aiohttp.ClientError as err:
            return self._fail(TransportError(f"HTTP connection failed: {err}"), probing, url)

    async def async_fetch_zone(self, zone: int) -> Outcome[dict]:
        """Fetch the status entry of a single zone."""
        result = await self.async_fetch_status()
        if not result.ok:
            return Outcome.failure(result.error)

        zone_data = select_zone(result.value, zone)
        if zone_data is None:
            return self._fail(TransportError(f"Zone {zone} data not found in controller response"), False)
        return Outcome.success(zone_data)

    async def async_send_command(self, url: str) -> Outcome[str]:
        """Send a set-pattern URL; success needs HTTP 200 and "Command Received"."""
        _LOGGER.debug("%s: Sending request: %s", self._name, url)
        try:
            status, body = await self._async_get(url, self.timeout)
        except TransportError as err:
            return self._fail(err, False, url)
        except asyncio.TimeoutError:
            return self._fail(TransportError(f"Request timed out: {url}"), False)
        except aiohttp.ClientResponseError as err:
            return self._fail(TransportError(f"HTTP request failed: {err.status} {err.message}"), False, url)
        except aiohttp.ClientError as err:
            return self._fail(TransportError(f"HTTP connection failed: {err}"), False, url)

        text = body.decode("utf-8", errors="replace")
        if status != 200 or COMMAND_RECEIVED not in text:
            return self._fail(
                TransportError(f"Unexpected response (Status: {status}, Resp: '{text.strip()[:50]}')"), False, url
            )

        _LOGGER.debug("%s: Request OK (Status: %d, Resp: '%s')", self._name, status, text.strip()[:50])
        return Outcome.success(text)

    def _fail(self, err: TransportError, probing: bool, url: str | None = None) -> Outcome:
        suffix = f" ({url})" if url else ""
        if probing:
            _LOGGER.debug("%s: Probe failed: %s%s", self._name, err, suffix)
        else:
            _LOGGER.warning("%s: %s%s", self._name, err, suffix)
        return Outcome.failure(err)
