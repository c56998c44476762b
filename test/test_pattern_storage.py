"""Tests for the per-zone pattern store.

Tests:
    - Capture (new slot, idempotent update, off zone, capacity, hole reuse)
    - Resolve (zone substitution, spotlight remap, lazy plan_type)
    - Rename, delete, listing
    - Predefined pattern loading

Usage:
    pytest test/test_pattern_storage.py -v
"""

import pytest

from custom_components.oelo_zone.const import ATTR_AVAILABLE_PATTERNS, MAX_PATTERNS
from custom_components.oelo_zone.exceptions import CapacityError, PatternNotFoundError, ValidationError
from custom_components.oelo_zone.pattern_storage import PatternStorage
from custom_components.oelo_zone.predefined import PREDEFINED_PATTERNS

MARCH_ID = "march_dirR_spd3_2colors_rgb255-0-0"


def stored(name, pattern_type="march", **params):
    url_params = {
        "patternType": pattern_type,
        "zones": "1",
        "num_zones": "1",
        "num_colors": "1",
        "colors": "1,2,3",
        "direction": "F",
        "speed": "0",
        "gap": "0",
        "other": "0",
        "pause": "0",
    }
    url_params.update(params)
    return {
        "id": name.lower(),
        "name": name,
        "url_params": url_params,
        "plan_type": "non-spotlight",
        "original_colors": None,
    }


@pytest.fixture
def ctx(make_context):
    return make_context()


@pytest.fixture
def storage(ctx):
    return PatternStorage(ctx)


@pytest.mark.asyncio
async def test_capture_new_pattern(ctx, storage, store, zone_status):
    result = await storage.async_capture(zone_status())

    assert result.ok
    assert result.value["id"] == MARCH_ID
    assert result.value["name"] == MARCH_ID
    assert result.value["plan_type"] == "non-spotlight"
    assert result.value["original_colors"] is None
    assert ctx.state["patterns"][0]["id"] == MARCH_ID
    assert ctx.state["last_captured_pattern"] == MARCH_ID
    assert ctx.attributes[ATTR_AVAILABLE_PATTERNS] == [f"{MARCH_ID} [non-spotlight]"]
    assert store.data["patterns"][0]["id"] == MARCH_ID


@pytest.mark.asyncio
async def test_capture_same_pattern_keeps_name(ctx, storage, zone_status):
    await storage.async_capture(zone_status())
    await storage.async_rename(MARCH_ID, "Parade")

    result = await storage.async_capture(zone_status(gap=2))

    assert result.ok
    assert result.value["name"] == "Parade"
    assert result.value["url_params"]["gap"] == "2"
    assert len([p for p in ctx.state["patterns"] if p]) == 1


@pytest.mark.asyncio
async def test_capture_with_name(ctx, storage, zone_status):
    result = await storage.async_capture(zone_status(), "Parade")

    assert result.value["id"] == MARCH_ID
    assert result.value["name"] == "Parade"
    assert ctx.state["last_captured_pattern"] == "Parade"


@pytest.mark.asyncio
async def test_capture_same_pattern_with_its_own_name(storage, zone_status):
    await storage.async_capture(zone_status(), "Parade")

    result = await storage.async_capture(zone_status(gap=2), "Parade")

    assert result.ok
    assert result.value["url_params"]["gap"] == "2"
    assert storage.list_names() == ["Parade"]


@pytest.mark.asyncio
async def test_capture_with_taken_name_stores_nothing(ctx, storage, store, zone_status):
    await storage.async_capture(zone_status(), "Taken")
    saves = store.saves

    result = await storage.async_capture(zone_status(pattern="twinkle"), "Taken")

    assert isinstance(result.error, ValidationError)
    assert storage.list_names() == ["Taken"]
    assert len([p for p in ctx.state["patterns"] if p]) == 1
    assert store.saves == saves


@pytest.mark.asyncio
async def test_capture_uses_reported_palette_size(storage, zone_status):
    result = await storage.async_capture(zone_status(numberOfColors=5))
    assert result.value["id"] == "march_dirR_spd3_5colors_rgb255-0-0"


@pytest.mark.asyncio
async def test_capture_off_zone_fails(ctx, storage, zone_status):
    result = await storage.async_capture(zone_status(pattern="off", is_on=False))

    assert not result.ok
    assert isinstance(result.error, ValidationError)
    assert ctx.state["patterns"] == []


@pytest.mark.asyncio
async def test_capture_when_full(ctx, storage, zone_status):
    ctx.state["patterns"] = [stored(f"P{i}") for i in range(MAX_PATTERNS)]

    result = await storage.async_capture(zone_status())

    assert isinstance(result.error, CapacityError)
    assert len(ctx.state["patterns"]) == MAX_PATTERNS


@pytest.mark.asyncio
async def test_capture_reuses_first_hole(ctx, storage, zone_status):
    ctx.state["patterns"] = [stored("A"), None, stored("B")]

    await storage.async_capture(zone_status())

    assert ctx.state["patterns"][1]["id"] == MARCH_ID
    assert ctx.state["patterns"][2]["name"] == "B"


@pytest.mark.asyncio
async def test_spotlight_capture_keeps_original_colors(storage, zone_status):
    result = await storage.async_capture(zone_status(pattern="spotlight", colorStr="10&20&30&40&50&60"))

    assert result.value["plan_type"] == "spotlight"
    assert result.value["original_colors"] == "10,20,30,40,50,60"


@pytest.mark.asyncio
async def test_resolve_substitutes_zone(ctx, storage):
    ctx.state["patterns"] = [stored("Warm", zones="4")]

    result = await storage.async_resolve("Warm", zone=2)

    assert result.ok
    assert result.value["zones"] == "2"
    assert ctx.state["patterns"][0]["url_params"]["zones"] == "4"


@pytest.mark.asyncio
async def test_resolve_unknown_name(storage):
    result = await storage.async_resolve("Nope")
    assert isinstance(result.error, PatternNotFoundError)


@pytest.mark.asyncio
async def test_resolve_spotlight_remaps_onto_plan_lights(make_context, zone_status):
    ctx = make_context(spotlight_plan_lights="3,1", max_leds=4)
    storage = PatternStorage(ctx)
    captured = await storage.async_capture(zone_status(pattern="spotlight", colorStr="10&20&30&40&50&60"))

    result = await storage.async_resolve(captured.value["name"])

    assert result.ok
    assert result.value["colors"] == "10,20,30,0,0,0,10,20,30,0,0,0"
    assert result.value["num_colors"] == "4"


@pytest.mark.asyncio
async def test_resolve_fills_missing_plan_type(ctx, storage, store):
    pattern = stored("Legacy", pattern_type="spotlight")
    del pattern["plan_type"]
    ctx.state["patterns"] = [pattern]

    await storage.async_resolve("Legacy")

    assert ctx.state["patterns"][0]["plan_type"] == "spotlight"
    assert store.data["patterns"][0]["plan_type"] == "spotlight"


@pytest.mark.asyncio
async def test_resolve_invalid_stored_pattern(ctx, storage):
    ctx.state["patterns"] = [stored("Broken", speed="900")]

    result = await storage.async_resolve("Broken")

    assert isinstance(result.error, ValidationError)


@pytest.mark.asyncio
async def test_rename(ctx, storage):
    ctx.state["patterns"] = [stored("A"), stored("B")]
    ctx.state["last_used_pattern"] = "A"

    result = await storage.async_rename("A", "  Sunset ")

    assert result.value["name"] == "Sunset"
    assert ctx.state["last_used_pattern"] == "Sunset"
    assert storage.list_names() == ["B", "Sunset"]


@pytest.mark.asyncio
async def test_rename_conflict(ctx, storage):
    ctx.state["patterns"] = [stored("A"), stored("B")]

    result = await storage.async_rename("A", "B")

    assert isinstance(result.error, ValidationError)
    assert storage.list_names() == ["A", "B"]


@pytest.mark.asyncio
async def test_rename_missing_is_noop(ctx, storage, store):
    ctx.state["patterns"] = [stored("A")]

    result = await storage.async_rename("Missing", "C")

    assert result.ok
    assert result.value is None
    assert store.saves == 0


@pytest.mark.asyncio
async def test_delete_keeps_interior_holes(ctx, storage):
    ctx.state["patterns"] = [stored("A"), stored("B"), stored("C")]

    await storage.async_delete("B")
    assert [p and p["name"] for p in ctx.state["patterns"]] == ["A", None, "C"]

    await storage.async_delete("C")
    assert [p and p["name"] for p in ctx.state["patterns"]] == ["A"]


@pytest.mark.asyncio
async def test_delete_missing(storage):
    result = await storage.async_delete("Ghost")
    assert isinstance(result.error, PatternNotFoundError)


def test_find_name_for_pattern_type(ctx, storage):
    ctx.state["patterns"] = [None, stored("Twinkly", pattern_type="twinkle")]

    assert storage.find_name_for_pattern_type("twinkle") == "Twinkly"
    assert storage.find_name_for_pattern_type("march") is None
    assert storage.find_name_for_pattern_type("custom") is None
    assert storage.first_pattern_name() == "Twinkly"


@pytest.mark.asyncio
async def test_load_predefined_once(ctx, storage):
    first = await storage.async_load_predefined()
    second = await storage.async_load_predefined()

    assert first.value == len(PREDEFINED_PATTERNS)
    assert second.value == 0
    assert ctx.state["predefined_loaded"] is True
    chase = storage.get_pattern("Christmas: Icicle Chase")
    assert chase["id"] == "christmas__icicle_chase_dirR_spd5_3colors"
    assert chase["url_params"]["zones"] == "1"
    assert chase["url_params"]["colors"] == "255,255,255,0,183,245,0,73,245"


@pytest.mark.asyncio
async def test_load_predefined_skips_existing_names(ctx, storage):
    ctx.state["patterns"] = [stored("Christmas: Icicle Chase")]

    result = await storage.async_load_predefined(force=True)

    assert result.value == len(PREDEFINED_PATTERNS) - 1
    assert storage.get_pattern("Christmas: Icicle Chase")["id"] == "christmas: icicle chase"


@pytest.mark.asyncio
async def test_predefined_patterns_resolve(storage):
    await storage.async_load_predefined()

    for name in PREDEFINED_PATTERNS:
        result = await storage.async_resolve(name)
        assert result.ok, f"{name}: {result.error}"
