"""Tests for pattern utility functions.

Tests:
    - Stable pattern ID generation (captured and predefined)
    - LED index normalization
    - Spotlight plan color remapping
    - Parameter set validation
    - Zone data to parameter set conversion and URL building

Usage:
    pytest test/test_pattern_utils.py -v
"""

import pytest

from custom_components.oelo_zone.exceptions import ValidationError
from custom_components.oelo_zone.pattern_utils import (
    build_command_url,
    build_off_params,
    build_params_from_zone_data,
    generate_pattern_id,
    generate_predefined_pattern_id,
    identify_plan_type,
    modify_spotlight_plan_colors,
    normalize_led_indices,
    parse_color_str,
    parse_url_params,
    validate_parameter_set,
)


def valid_params(**overrides):
    params = {
        "patternType": "march",
        "zones": "1",
        "num_zones": "1",
        "num_colors": "2",
        "colors": "255,0,0,0,0,255",
        "direction": "R",
        "speed": "3",
        "gap": "0",
        "other": "0",
        "pause": "0",
    }
    params.update(overrides)
    return params


def test_generate_pattern_id_includes_non_default_parts():
    assert generate_pattern_id(valid_params()) == "march_dirR_spd3_2colors_rgb255-0-0"


def test_generate_pattern_id_defaults_and_first_lit_color():
    params = valid_params(
        patternType="stationary", direction="F", speed="0", num_colors="1", colors="0,0,0,10,20,30"
    )
    assert generate_pattern_id(params) == "stationary_rgb10-20-30"


def test_spotlight_pattern_id_leaves_out_color_count():
    params = valid_params(patternType="spotlight")
    assert generate_pattern_id(params, identify_plan_type("spotlight")) == "spotlight_dirR_spd3_rgb255-0-0"


def test_pattern_id_is_stable():
    assert generate_pattern_id(valid_params()) == generate_pattern_id(dict(valid_params()))


def test_predefined_pattern_id_uses_name():
    params = {"direction": "R", "speed": "5", "num_colors": "3"}
    assert generate_predefined_pattern_id("Christmas: Icicle Chase", params) == "christmas__icicle_chase_dirR_spd5_3colors"


def test_identify_plan_type():
    assert identify_plan_type("spotlight") == "spotlight"
    assert identify_plan_type("march") == "non-spotlight"
    assert identify_plan_type(None) == "non-spotlight"


def test_normalize_led_indices():
    assert normalize_led_indices("5, 3,3, x, 0, 600, 1", 500) == "1,3,5"
    assert normalize_led_indices("", 500) == ""
    assert normalize_led_indices(None, 500) == ""


def test_spotlight_remap_lights_listed_leds_only():
    result = modify_spotlight_plan_colors("10,20,30,40,50,60", "1,3", 2, max_leds=4)
    assert result == "10,20,30,0,0,0,10,20,30,0,0,0"


def test_spotlight_remap_keeps_matching_index_color():
    result = modify_spotlight_plan_colors("10,20,30,40,50,60", "2", 2, max_leds=3)
    assert result == "0,0,0,40,50,60,0,0,0"


def test_spotlight_remap_invalid_colors_unchanged():
    assert modify_spotlight_plan_colors("a,b,c", "1,2", 1, max_leds=4) == "a,b,c"
    assert modify_spotlight_plan_colors("", "1,2", 1, max_leds=4) == ""


def test_validate_parameter_set_accepts_valid():
    validate_parameter_set(valid_params())


@pytest.mark.parametrize(
    "overrides",
    [
        {"zones": "7"},
        {"zones": "0"},
        {"speed": "256"},
        {"direction": "X"},
        {"num_colors": "3"},
        {"colors": "255,0,0,0,0,300"},
        {"gap": ""},
    ],
)
def test_validate_parameter_set_rejects(overrides):
    with pytest.raises(ValidationError):
        validate_parameter_set(valid_params(**overrides))


def test_validate_parameter_set_missing_key():
    params = valid_params()
    del params["pause"]
    with pytest.raises(ValidationError):
        validate_parameter_set(params)


def test_parse_color_str():
    assert parse_color_str("255&0&0&0&0&255&") == "255,0,0,0,0,255"
    assert parse_color_str(None) == "255,255,255"
    assert parse_color_str("1&2&3&4") == "1,2,3"


def test_build_params_from_zone_data(zone_status):
    params = build_params_from_zone_data(zone_status(zone=1), 1)
    assert params == valid_params()


def test_build_params_from_off_zone(zone_status):
    assert build_params_from_zone_data(zone_status(pattern="off", is_on=False), 1) is None


def test_off_command_url():
    url = build_command_url(build_off_params(2), "10.0.0.5")
    assert url.startswith("http://10.0.0.5/setPattern?patternType=off&zones=2&")
    params = parse_url_params(url)
    assert params["colors"] == "0,0,0"
    assert list(params) == [
        "patternType", "zones", "num_zones", "num_colors", "colors",
        "direction", "speed", "gap", "other", "pause",
    ]
