"""Pattern storage for the Oelo Lights Zone integration.

Patterns live in a fixed-capacity slot list (max 200) persisted in the zone
context. A slot holds a pattern dict or None.
Pattern structure: id, name, url_params, plan_type, original_colors.

Deleting a pattern empties its slot and strips trailing empty slots only, so
the slot index of every remaining pattern stays stable. New patterns reuse
the first empty slot.
"""

from __future__ import annotations
import copy
import logging
from typing import Any, Mapping

from .const import (
    ATTR_AVAILABLE_PATTERNS,
    MAX_PATTERNS,
    PATTERN_CUSTOM,
    PATTERN_OFF,
    PLAN_SPOTLIGHT,
)
from .context import ZoneContext
from .exceptions import CapacityError, PatternNotFoundError, ValidationError
from .models import Outcome, ZoneObservation
from .pattern_utils import (
    build_params_from_zone_data,
    generate_pattern_id,
    generate_predefined_pattern_id,
    identify_plan_type,
    modify_spotlight_plan_colors,
    normalize_led_indices,
    parse_url_params,
    validate_parameter_set,
)
from .predefined import PREDEFINED_PATTERNS

_LOGGER = logging.getLogger(__name__)


class PatternStorage:
    """Manages the pattern slots of one zone."""

    def __init__(self, ctx: ZoneContext) -> None:
        self._ctx = ctx

    @property
    def patterns(self) -> list[dict[str, Any] | None]:
        return self._ctx.state["patterns"]

    def _find(self, name: str) -> tuple[int, dict[str, Any]] | tuple[None, None]:
        for index, pattern in enumerate(self.patterns):
            if pattern and pattern.get("name") == name:
                return index, pattern
        return None, None

    def get_pattern(self, name: str) -> dict[str, Any] | None:
        return self._find(name)[1]

    def _next_empty_slot(self) -> int | None:
        """Index of the first empty slot (holes first, then the end), or None when full."""
        for index in range(MAX_PATTERNS):
            if index >= len(self.patterns) or self.patterns[index] is None:
                return index
        return None

    def _ensure_plan_type(self, pattern: dict[str, Any]) -> bool:
        """Fill in plan_type if missing; returns True when the pattern changed."""
        if pattern.get("plan_type"):
            return False
        pattern_type = (pattern.get("url_params") or {}).get("patternType")
        pattern["plan_type"] = identify_plan_type(pattern_type)
        _LOGGER.debug(
            "%s: Populated plan_type='%s' for pattern '%s'",
            self._ctx.log_prefix, pattern["plan_type"], pattern.get("name"),
        )
        return True

    async def _async_commit(self) -> None:
        await self._ctx.async_save()
        self._ctx.publish(**{ATTR_AVAILABLE_PATTERNS: self.available_patterns()})

    def _set_name(self, pattern: dict[str, Any], new_name: str) -> None:
        old_name = pattern["name"]
        pattern["name"] = new_name
        for key in ("last_used_pattern", "last_captured_pattern"):
            if self._ctx.state.get(key) == old_name:
                self._ctx.state[key] = new_name

    async def async_capture(self, zone_data: Mapping[str, Any], name: str | None = None) -> Outcome[dict]:
        """Store the pattern currently running on the zone.

        Capturing the same effective pattern twice updates the stored
        parameters and keeps the user-assigned name unless a new name is
        given. A name already used by another pattern rejects the capture
        before anything is stored.
        """
        log_prefix = self._ctx.log_prefix
        observation = ZoneObservation.from_zone_data(zone_data)
        if observation.pattern_name == PATTERN_OFF or not observation.is_on:
            return Outcome.failure(ValidationError(f"Zone {self._ctx.zone} is off, no pattern to capture"))

        url_params = build_params_from_zone_data(zone_data, self._ctx.zone)
        if url_params is None:
            return Outcome.failure(ValidationError("Could not build pattern parameters from zone data"))

        try:
            validate_parameter_set(url_params)
        except ValidationError as err:
            _LOGGER.error("%s: Captured pattern is invalid: %s", log_prefix, err)
            return Outcome.failure(err)

        plan_type = identify_plan_type(url_params["patternType"])
        id_params = dict(url_params)
        if zone_data.get("numberOfColors"):
            # Palette size as reported; colorStr may cover every LED
            id_params["num_colors"] = str(zone_data["numberOfColors"])
        pattern_id = generate_pattern_id(id_params, plan_type)
        original_colors = url_params["colors"] if plan_type == PLAN_SPOTLIGHT else None

        name = (name or "").strip() or None
        if name:
            _, owner = self._find(name)
            if owner is not None and owner.get("id") != pattern_id:
                _LOGGER.warning("%s: Pattern name '%s' already exists", log_prefix, name)
                return Outcome.failure(ValidationError(f"Pattern name '{name}' already exists"))

        existing = next((p for p in self.patterns if p and p.get("id") == pattern_id), None)
        if existing is not None:
            existing["url_params"] = url_params
            existing["plan_type"] = plan_type
            existing["original_colors"] = original_colors
            if name and existing["name"] != name:
                self._set_name(existing, name)
            self._ctx.state["last_captured_pattern"] = existing["name"]
            await self._async_commit()
            _LOGGER.info(
                "%s: Updated existing pattern '%s' (ID: %s) with new parameters",
                log_prefix, existing["name"], pattern_id,
            )
            return Outcome.success(existing)

        slot = self._next_empty_slot()
        if slot is None:
            _LOGGER.error("%s: No empty slots available (maximum %d patterns)", log_prefix, MAX_PATTERNS)
            return Outcome.failure(CapacityError(f"Pattern limit reached ({MAX_PATTERNS})"))

        pattern = {
            "id": pattern_id,
            "name": name or pattern_id,  # Defaults to the ID, user can rename
            "url_params": url_params,
            "plan_type": plan_type,
            "original_colors": original_colors,
        }
        while len(self.patterns) <= slot:
            self.patterns.append(None)
        self.patterns[slot] = pattern
        self._ctx.state["last_captured_pattern"] = pattern["name"]
        await self._async_commit()
        _LOGGER.info("%s: Stored new pattern '%s' in slot %d", log_prefix, pattern["name"], slot + 1)
        return Outcome.success(pattern)

    async def async_resolve(self, name: str, zone: int | None = None) -> Outcome[dict]:
        """Turn a stored pattern into a parameter set for a zone.

        Spotlight patterns are remapped from their original colors onto the
        configured plan lights at this point, so a changed plan applies to
        patterns captured earlier.
        """
        settings = self._ctx.settings
        _, pattern = self._find(name)
        if pattern is None or not pattern.get("url_params"):
            return Outcome.failure(PatternNotFoundError(f"Pattern '{name}' not found"))

        if self._ensure_plan_type(pattern):
            await self._ctx.async_save()

        params = {key: str(value) for key, value in pattern["url_params"].items()}
        params["zones"] = str(zone or self._ctx.zone)

        if pattern["plan_type"] == PLAN_SPOTLIGHT:
            plan_lights = normalize_led_indices(settings.spotlight_plan_lights, settings.max_leds)
            if plan_lights:
                colors = pattern.get("original_colors") or params.get("colors", "")
                try:
                    num_colors = int(params.get("num_colors", 1))
                except ValueError:
                    num_colors = 1
                remapped = modify_spotlight_plan_colors(colors, plan_lights, num_colors, settings.max_leds)
                params["colors"] = remapped
                params["num_colors"] = str(len(remapped.rstrip(",").split(",")) // 3)
                _LOGGER.debug(
                    "%s: Spotlight plan applied to '%s' (%s RGB triplets)",
                    self._ctx.log_prefix, name, params["num_colors"],
                )

        try:
            validate_parameter_set(params)
        except ValidationError as err:
            _LOGGER.error("%s: Pattern '%s' is invalid: %s", self._ctx.log_prefix, name, err)
            return Outcome.failure(err)
        return Outcome.success(params)

    async def async_rename(self, old_name: str, new_name: str) -> Outcome[dict | None]:
        """Rename a pattern; a missing or unchanged old name is a no-op."""
        new_name = (new_name or "").strip()
        if not new_name:
            return Outcome.failure(ValidationError("New pattern name is empty"))

        _, pattern = self._find(old_name)
        if pattern is None:
            _LOGGER.debug("%s: Pattern '%s' not found, skipping rename", self._ctx.log_prefix, old_name)
            return Outcome.success(None)
        if old_name == new_name:
            return Outcome.success(pattern)

        _, conflict = self._find(new_name)
        if conflict is not None and conflict is not pattern:
            _LOGGER.warning("%s: Pattern name '%s' already exists", self._ctx.log_prefix, new_name)
            return Outcome.failure(ValidationError(f"Pattern name '{new_name}' already exists"))

        self._set_name(pattern, new_name)
        await self._async_commit()
        _LOGGER.info("%s: Renamed pattern '%s' to '%s'", self._ctx.log_prefix, old_name, new_name)
        return Outcome.success(pattern)

    async def async_delete(self, name: str) -> Outcome[dict]:
        index, pattern = self._find(name)
        if pattern is None:
            _LOGGER.warning("%s: Pattern '%s' not found for deletion", self._ctx.log_prefix, name)
            return Outcome.failure(PatternNotFoundError(f"Pattern '{name}' not found"))

        self.patterns[index] = None
        while self.patterns and self.patterns[-1] is None:
            self.patterns.pop()

        for key in ("last_used_pattern", "last_captured_pattern"):
            if self._ctx.state.get(key) == name:
                self._ctx.state[key] = None
        await self._async_commit()
        _LOGGER.info("%s: Deleted pattern '%s'", self._ctx.log_prefix, name)
        return Outcome.success(pattern)

    def list_names(self) -> list[str]:
        return sorted(p["name"] for p in self.patterns if p and p.get("name"))

    def list_patterns(self) -> list[dict[str, Any]]:
        return [copy.deepcopy(p) for p in self.patterns if p]

    def first_pattern_name(self) -> str | None:
        """Name of the pattern in the lowest occupied slot."""
        for pattern in self.patterns:
            if pattern and pattern.get("name"):
                return pattern["name"]
        return None

    def find_name_for_pattern_type(self, pattern_type: str | None) -> str | None:
        """Name of the first stored pattern with this controller pattern type."""
        if not pattern_type or pattern_type in (PATTERN_OFF, PATTERN_CUSTOM):
            return None
        for pattern in self.patterns:
            if pattern and (pattern.get("url_params") or {}).get("patternType") == pattern_type:
                return pattern.get("name")
        return None

    def available_patterns(self) -> list[str]:
        """Sorted display list, "name [plan_type]"."""
        display = []
        for pattern in self.patterns:
            if pattern and pattern.get("name"):
                self._ensure_plan_type(pattern)
                display.append(f"{pattern['name']} [{pattern['plan_type']}]")
        return sorted(display)

    async def async_load_predefined(self, force: bool = False) -> Outcome[int]:
        """Load the predefined patterns into empty slots once.

        Names already in use are skipped. With force=True the load runs even
        if it happened before.
        """
        state = self._ctx.state
        if state.get("predefined_loaded") and not force:
            _LOGGER.debug("%s: Predefined patterns already loaded, skipping", self._ctx.log_prefix)
            return Outcome.success(0)

        loaded = 0
        for name, template in PREDEFINED_PATTERNS.items():
            if self._find(name)[1] is not None:
                continue

            url_params = parse_url_params(template.replace("{zone}", str(self._ctx.zone)))
            if not url_params:
                _LOGGER.warning("%s: Could not parse predefined pattern '%s'", self._ctx.log_prefix, name)
                continue
            url_params["colors"] = url_params.get("colors", "").rstrip(",")

            slot = self._next_empty_slot()
            if slot is None:
                _LOGGER.warning(
                    "%s: No empty slots for predefined pattern '%s' (max %d)",
                    self._ctx.log_prefix, name, MAX_PATTERNS,
                )
                break

            while len(self.patterns) <= slot:
                self.patterns.append(None)
            self.patterns[slot] = {
                "id": generate_predefined_pattern_id(name, url_params),
                "name": name,
                "url_params": url_params,
                "plan_type": identify_plan_type(url_params.get("patternType")),
                "original_colors": None,
            }
            loaded += 1

        state["predefined_loaded"] = True
        await self._async_commit()
        if loaded:
            _LOGGER.info("%s: Loaded %d predefined patterns", self._ctx.log_prefix, loaded)
        return Outcome.success(loaded)
