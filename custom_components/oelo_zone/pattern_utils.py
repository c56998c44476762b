"""Pattern utility functions for the Oelo Lights Zone integration.

Utilities: stable pattern ID generation, LED index normalization, spotlight
plan color remapping, parameter set validation, controller URL building and
parameter extraction from zone data.

Spotlight Plan: the controller reports a short color palette for a spotlight
pattern while the zone may have up to 500 LEDs. The captured palette is kept
as original_colors and redistributed at apply time onto the LED indices
listed in the Spotlight Plan Lights option; every other LED is forced off.
"""

from __future__ import annotations
import logging
import re
import urllib.parse
from typing import Any, Mapping

from .const import (
    COMMAND_PARAM_KEYS,
    COMMAND_PATH,
    DEFAULT_MAX_LEDS,
    MAX_ZONE,
    MIN_ZONE,
    PATTERN_OFF,
    PATTERN_SPOTLIGHT,
    PLAN_NON_SPOTLIGHT,
    PLAN_SPOTLIGHT,
)
from .exceptions import ValidationError

_LOGGER = logging.getLogger(__name__)

VALID_DIRECTIONS = ("F", "R")


def identify_plan_type(pattern_type: str | None) -> str:
    """Classify a controller pattern type as spotlight or non-spotlight."""
    return PLAN_SPOTLIGHT if pattern_type == PATTERN_SPOTLIGHT else PLAN_NON_SPOTLIGHT


def _id_suffix_parts(url_params: Mapping[str, Any], include_color_count: bool) -> list[str]:
    direction = str(url_params.get("direction", "F"))
    speed = url_params.get("speed", "0")
    num_colors = url_params.get("num_colors", "1")

    suffix_parts = []

    # Add direction if not default
    if direction and direction not in ("0", "F"):
        suffix_parts.append(f"dir{direction}")

    # Add speed if not zero
    try:
        speed_int = int(speed)
        if speed_int != 0:
            suffix_parts.append(f"spd{speed_int}")
    except (ValueError, TypeError):
        pass

    if include_color_count:
        try:
            num_colors_int = int(num_colors)
            if num_colors_int > 1:
                suffix_parts.append(f"{num_colors_int}colors")
        except (ValueError, TypeError):
            pass

    return suffix_parts


def generate_pattern_id(url_params: Mapping[str, Any], plan_type: str = PLAN_NON_SPOTLIGHT) -> str:
    """Generate a stable pattern ID from URL parameters.

    Format: {patternType}_dir{direction}_spd{speed}_{num_colors}colors_rgb{r}-{g}-{b}

    The same effective pattern always yields the same ID, which is what makes
    capture idempotent.

    Args:
        url_params: Pattern URL parameters
        plan_type: "spotlight" or "non-spotlight"; spotlight IDs leave out the
            color count because the remap changes it

    Returns:
        Stable pattern identifier string
    """
    pattern_type = url_params.get("patternType", "unknown")
    suffix_parts = _id_suffix_parts(url_params, include_color_count=plan_type != PLAN_SPOTLIGHT)

    # Extract first non-zero RGB color for ID
    rgb_part = ""
    for r, g, b in parse_color_triplets(str(url_params.get("colors", "")), strict=False):
        if r != 0 or g != 0 or b != 0:
            rgb_part = f"_rgb{r}-{g}-{b}"
            break

    suffix = "_" + "_".join(suffix_parts) if suffix_parts else ""
    return f"{pattern_type}{suffix}{rgb_part}"


def generate_predefined_pattern_id(pattern_name: str, url_params: Mapping[str, Any]) -> str:
    """Generate an ID for a predefined pattern from its display name.

    Several predefined patterns share identical parameters, so the name is
    the base rather than the pattern type.
    """
    base_id = re.sub(r"[^a-zA-Z0-9]", "_", pattern_name).lower()
    suffix_parts = _id_suffix_parts(url_params, include_color_count=True)
    if not suffix_parts:
        return base_id
    return f"{base_id}_{'_'.join(suffix_parts)}"


def parse_led_indices(led_indices_str: str | None, max_leds: int = DEFAULT_MAX_LEDS) -> list[int]:
    """Parse LED indices, skipping invalid or out-of-range entries; sorted and unique."""
    if not led_indices_str or not led_indices_str.strip():
        return []

    indices: set[int] = set()
    for part in led_indices_str.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            idx = int(part)
        except ValueError:
            _LOGGER.warning("Skipping invalid LED index format: '%s'", part)
            continue
        if 1 <= idx <= max_leds:
            indices.add(idx)
        else:
            _LOGGER.debug("Skipping LED index %d (must be between 1 and %d)", idx, max_leds)

    return sorted(indices)


def normalize_led_indices(led_indices_str: str | None, max_leds: int = DEFAULT_MAX_LEDS) -> str:
    """Normalize LED indices string (remove duplicates, sort, validate)."""
    return ",".join(str(i) for i in parse_led_indices(led_indices_str, max_leds))


def parse_color_triplets(colors: str, strict: bool = True) -> list[tuple[int, int, int]]:
    """Split "R,G,B,R,G,B,..." into triplets.

    A trailing comma is tolerated. With strict=True an unparseable value
    raises ValueError; otherwise that triplet is skipped. Incomplete trailing
    triplets are dropped.
    """
    parts = [p.strip() for p in colors.split(",")]
    if parts and parts[-1] == "":
        parts.pop()

    triplets = []
    for i in range(0, len(parts) - 2, 3):
        try:
            triplets.append((int(parts[i]), int(parts[i + 1]), int(parts[i + 2])))
        except ValueError:
            if strict:
                raise
    return triplets


def validate_colors_string(colors: str, expected_triplets: int) -> bool:
    """Check triplet count and that every value is within 0-255."""
    if not colors or not colors.strip():
        return False

    values = [p.strip() for p in colors.split(",")]
    if values and values[-1] == "":
        values.pop()

    if len(values) != expected_triplets * 3:
        _LOGGER.debug(
            "Colors string validation failed: expected %d triplets, got %d values",
            expected_triplets, len(values),
        )
        return False

    for value in values:
        try:
            number = int(value)
        except ValueError:
            _LOGGER.debug("Colors string validation failed: invalid number '%s'", value)
            return False
        if not 0 <= number <= 255:
            _LOGGER.debug("Colors string validation failed: value %d out of range", number)
            return False

    return True


def modify_spotlight_plan_colors(
    original_colors: str,
    led_indices_str: str,
    num_colors: int,
    max_leds: int = DEFAULT_MAX_LEDS
) -> str:
    """Remap spotlight plan colors onto a full LED run.

    Process:
    1. Parse the original RGB triplets (num_colors of them)
    2. Normalize the LED indices against max_leds
    3. Build max_leds triplets, all (0,0,0), then light each listed index:
       - with the original triplet at the same index if there is one
       - otherwise with the first original triplet
       - otherwise it stays off

    Args:
        original_colors: Captured color string, "R,G,B,R,G,B,..."
        led_indices_str: Comma-delimited 1-based LED indices to light (e.g. "1,2,3,4")
        num_colors: Number of color triplets in original colors
        max_leds: Physical LED count of the zone

    Returns:
        Color string with exactly max_leds triplets, or original_colors
        unchanged if the input cannot be parsed or the result fails validation
    """
    if not original_colors or not original_colors.strip():
        return original_colors

    try:
        original_rgb = parse_color_triplets(original_colors)
    except ValueError:
        _LOGGER.error("Cannot remap spotlight plan, invalid colors: %s", original_colors)
        return original_colors

    if num_colors and len(original_rgb) != num_colors:
        _LOGGER.debug(
            "Spotlight colors hold %d triplets but num_colors=%d", len(original_rgb), num_colors
        )

    led_colors = [(0, 0, 0)] * max_leds
    for led_num in parse_led_indices(led_indices_str, max_leds):
        index = led_num - 1
        if index < len(original_rgb):
            led_colors[index] = original_rgb[index]
        elif original_rgb:
            led_colors[index] = original_rgb[0]

    result = ",".join(f"{r},{g},{b}" for r, g, b in led_colors)

    if not validate_colors_string(result, max_leds):
        _LOGGER.error(
            "Invalid spotlight colors generated (expected %d RGB triplets), keeping original", max_leds
        )
        return original_colors

    return result


def validate_parameter_set(params: Mapping[str, Any]) -> None:
    """Validate a parameter set before it is sent.

    Raises:
        ValidationError: missing parameter, zone outside 1-6, speed outside
            0-255, unknown direction, or colors not matching num_colors
    """
    for key in COMMAND_PARAM_KEYS:
        if key not in params or params[key] is None or str(params[key]) == "":
            raise ValidationError(f"Missing required parameter '{key}'")

    try:
        zone = int(params["zones"])
        speed = int(params["speed"])
        num_colors = int(params["num_colors"])
    except (TypeError, ValueError) as err:
        raise ValidationError(f"Non-numeric parameter: {err}") from err

    if not MIN_ZONE <= zone <= MAX_ZONE:
        raise ValidationError(f"Invalid zone {zone}, must be {MIN_ZONE}-{MAX_ZONE}")

    if not 0 <= speed <= 255:
        raise ValidationError(f"Invalid speed {speed}, must be 0-255")

    if str(params["direction"]) not in VALID_DIRECTIONS:
        raise ValidationError(f"Invalid direction '{params['direction']}', must be F or R")

    if num_colors < 1 or not validate_colors_string(str(params["colors"]), num_colors):
        raise ValidationError(
            f"Colors do not match num_colors={num_colors} or contain values outside 0-255"
        )


def parse_color_str(color_str: str | None) -> str:
    """Convert controller colorStr "R&G&B&R&G&B&..." to "R,G,B,R,G,B,..."."""
    if not color_str or not color_str.strip():
        return "255,255,255"

    parts = [p.strip() for p in color_str.split("&") if p.strip() != ""]
    if len(parts) % 3:
        _LOGGER.debug("colorStr has an incomplete RGB triplet, dropping %d value(s)", len(parts) % 3)
    usable = len(parts) - len(parts) % 3
    if not usable:
        return "255,255,255"
    return ",".join(parts[:usable])


def build_params_from_zone_data(zone_data: Mapping[str, Any], zone: int) -> dict[str, str] | None:
    """Build a parameter set from zone data returned by the controller."""
    pattern_type = zone_data.get("pattern") or zone_data.get("patternType") or PATTERN_OFF
    if pattern_type == PATTERN_OFF:
        return None

    colors = parse_color_str(zone_data.get("colorStr"))
    num_colors = len(colors.split(",")) // 3

    led_count = zone_data.get("ledCnt")
    if isinstance(led_count, int) and num_colors < led_count:
        _LOGGER.debug("Parsed %d RGB triplets but ledCnt=%d", num_colors, led_count)

    return {
        "patternType": str(pattern_type),
        "zones": str(zone),
        "num_zones": "1",
        "num_colors": str(num_colors),
        "colors": colors,
        "direction": str(zone_data.get("direction") or "F"),
        "speed": str(zone_data.get("speed") or 0),
        "gap": str(zone_data.get("gap") or 0),
        "other": str(zone_data.get("other") or 0),
        "pause": "0",
    }


def build_off_params(zone: int) -> dict[str, str]:
    """Parameter set that switches a zone off."""
    return {
        "patternType": PATTERN_OFF,
        "zones": str(zone),
        "num_zones": "1",
        "num_colors": "1",
        "colors": "0,0,0",
        "direction": "F",
        "speed": "0",
        "gap": "0",
        "other": "0",
        "pause": "0",
    }


def build_command_url(params: Mapping[str, Any], ip_address: str) -> str:
    """Build the setPattern URL, keys in controller order."""
    ordered = [(key, str(params[key])) for key in COMMAND_PARAM_KEYS if key in params]
    ordered.extend((key, str(value)) for key, value in params.items() if key not in COMMAND_PARAM_KEYS)
    return f"http://{ip_address}/{COMMAND_PATH}?{urllib.parse.urlencode(ordered)}"


def parse_url_params(url: str) -> dict[str, str]:
    """Parse the query parameters of a setPattern URL (or bare query string)."""
    query = url.split("?", 1)[1] if "?" in url else url
    return dict(urllib.parse.parse_qsl(query, keep_blank_values=True))
