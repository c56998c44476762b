"""Tests for debounced command dispatch.

Tests:
    - Commands inside the debounce window collapse to the latest one
    - Superseded callers get a CommandSupersededError outcome
    - Post-send handling (callback, verification, optimistic state)
    - Send failures and resume after restart

Usage:
    pytest test/test_dispatcher.py -v
"""

import asyncio

import pytest

from custom_components.oelo_zone.const import (
    ATTR_LAST_COMMAND,
    ATTR_SWITCH,
    ATTR_VERIFICATION_STATUS,
    JOB_DISPATCH,
    JOB_VERIFICATION,
)
from custom_components.oelo_zone.dispatcher import CommandDispatcher
from custom_components.oelo_zone.exceptions import CommandSupersededError, TransportError
from custom_components.oelo_zone.models import Outcome
from custom_components.oelo_zone.pattern_storage import PatternStorage
from custom_components.oelo_zone.pattern_utils import build_command_url, build_off_params
from custom_components.oelo_zone.verification import CommandVerifier

OFF_URL = build_command_url(build_off_params(1), "10.0.0.5")
ON_URL = (
    "http://10.0.0.5/setPattern?patternType=march&zones=1&num_zones=1&num_colors=1"
    "&colors=255,0,0&direction=R&speed=3&gap=0&other=0&pause=0"
)


async def settle():
    for _ in range(5):
        await asyncio.sleep(0)


def make_dispatcher(ctx):
    verifier = CommandVerifier(ctx, PatternStorage(ctx))
    return CommandDispatcher(ctx, verifier)


@pytest.mark.asyncio
async def test_commands_collapse_to_latest(make_context, scheduler, transport, store):
    ctx = make_context()
    dispatcher = make_dispatcher(ctx)

    first = asyncio.ensure_future(dispatcher.async_submit(ON_URL))
    await settle()
    second = asyncio.ensure_future(dispatcher.async_submit(OFF_URL))
    await settle()

    assert first.done()
    assert isinstance(first.result().error, CommandSupersededError)
    assert not second.done()
    assert store.data["debounce"]["pending_url"] == OFF_URL
    assert scheduler.delay(JOB_DISPATCH) == ctx.settings.debounce_interval

    await scheduler.async_fire(JOB_DISPATCH)

    assert (await second).ok
    assert transport.sent == [OFF_URL]
    assert ctx.attributes[ATTR_LAST_COMMAND] == OFF_URL
    assert ctx.attributes[ATTR_SWITCH] == "off"
    assert store.data["debounce"] is None


@pytest.mark.asyncio
async def test_replaced_command_wakeup_is_dropped(make_context, transport):
    ctx = make_context()
    dispatcher = make_dispatcher(ctx)
    pending = asyncio.ensure_future(dispatcher.async_submit(OFF_URL))
    await settle()

    await dispatcher._async_fire(ON_URL)

    assert transport.sent == []
    assert not pending.done()
    await dispatcher.async_shutdown()
    assert isinstance((await pending).error, CommandSupersededError)


@pytest.mark.asyncio
async def test_optimistic_switch_on(make_context, scheduler):
    ctx = make_context()
    dispatcher = make_dispatcher(ctx)
    pending = asyncio.ensure_future(dispatcher.async_submit(ON_URL))
    await settle()

    await scheduler.async_fire(JOB_DISPATCH)

    assert (await pending).ok
    assert ctx.attributes[ATTR_SWITCH] == "on"
    assert not scheduler.is_scheduled(JOB_VERIFICATION)


@pytest.mark.asyncio
async def test_on_sent_replaces_default_handling(make_context, scheduler):
    ctx = make_context(verify_commands=True)
    dispatcher = make_dispatcher(ctx)
    seen = []

    async def on_sent(url):
        seen.append(url)

    pending = asyncio.ensure_future(dispatcher.async_submit(ON_URL, on_sent=on_sent))
    await settle()
    await scheduler.async_fire(JOB_DISPATCH)

    assert (await pending).ok
    assert seen == [ON_URL]
    assert not scheduler.is_scheduled(JOB_VERIFICATION)
    assert ctx.attributes[ATTR_SWITCH] == "off"


@pytest.mark.asyncio
async def test_verification_starts_when_enabled(make_context, scheduler):
    ctx = make_context(verify_commands=True)
    dispatcher = make_dispatcher(ctx)
    pending = asyncio.ensure_future(dispatcher.async_submit(ON_URL))
    await settle()

    await scheduler.async_fire(JOB_DISPATCH)

    assert (await pending).ok
    assert ctx.attributes[ATTR_VERIFICATION_STATUS] == "pending"
    assert scheduler.is_scheduled(JOB_VERIFICATION)


@pytest.mark.asyncio
async def test_send_failure(make_context, scheduler, transport):
    transport.send_results.append(Outcome.failure(TransportError("refused")))
    ctx = make_context(verify_commands=True)
    dispatcher = make_dispatcher(ctx)
    pending = asyncio.ensure_future(dispatcher.async_submit(ON_URL))
    await settle()

    await scheduler.async_fire(JOB_DISPATCH)

    result = await pending
    assert isinstance(result.error, TransportError)
    assert ctx.attributes[ATTR_VERIFICATION_STATUS] == "error"
    assert ctx.attributes.get(ATTR_LAST_COMMAND) is None
    assert not scheduler.is_scheduled(JOB_VERIFICATION)


@pytest.mark.asyncio
async def test_resume_buffered_command(make_context, scheduler, transport, store):
    store.data = {"debounce": {"pending_url": OFF_URL, "scheduled_at": 1.0}}
    ctx = make_context()
    await ctx.async_load()
    dispatcher = make_dispatcher(ctx)

    await dispatcher.async_resume()
    await scheduler.async_fire(JOB_DISPATCH)

    assert transport.sent == [OFF_URL]
    assert ctx.state["debounce"] is None
