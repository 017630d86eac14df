from worklog_app.core.config import CHART_COLORS
from worklog_app.visual.colors import (
    get_color,
    get_project_color,
    get_project_color_map,
    hash_string,
    register_projects,
)


def test_hash_string_matches_31_multiplier():
    assert hash_string("") == 0
    assert hash_string("a") == 97
    assert hash_string("ab") == 97 * 31 + 98


def test_hash_string_wraps_to_positive_32_bit():
    value = hash_string("a fairly long project key that overflows")
    assert 0 <= value <= 2**31


def test_get_color_cycles():
    assert get_color(0) == CHART_COLORS[0]
    assert get_color(len(CHART_COLORS)) == CHART_COLORS[0]


def test_project_color_is_stable_and_registered():
    first = get_project_color("a")
    assert first == CHART_COLORS[97 % len(CHART_COLORS)]
    assert get_project_color("a") == first
    register_projects(["a", "BETA"])
    mapping = get_project_color_map()
    assert mapping["a"] == first
    assert set(mapping) == {"a", "BETA"}
