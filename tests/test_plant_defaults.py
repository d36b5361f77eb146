from types import SimpleNamespace

import pytest

from app.services.plant_defaults import find_plant_default, get_category, get_default_timing


@pytest.mark.parametrize(
    "name, expected",
    [
        ("tomato", "tomato"),
        ("  Tomato ", "tomato"),
        ("Cherokee Purple Tomato", "tomato"),
        ("bell pep", "bell pepper"),
        ("Sweet Basil", "basil"),
    ],
)
def test_find_plant_default_matching(name, expected):
    plant = find_plant_default(name)
    assert plant is not None
    assert expected in plant.names


@pytest.mark.parametrize("name", [None, "", "   ", "dragonfruit"])
def test_find_plant_default_no_match(name):
    assert find_plant_default(name) is None


def test_exact_match_beats_partial():
    # "sweet pea" is its own flower entry, not a partial "pea" vegetable match
    plant = find_plant_default("Sweet Pea")
    assert plant.category == "flower"


def test_default_timing_for_start_indoors_plant():
    assert get_default_timing("Tomato") == {
        "planting_method": "start_indoors",
        "weeks_before_last_frost": 6,
        "weeks_after_last_frost": None,
        "weeks_before_last_frost_outdoor": None,
        "cold_hardy": False,
    }


def test_default_timing_zero_weeks_preserved():
    timing = get_default_timing("marigold")
    assert timing["planting_method"] == "direct_sow"
    assert timing["weeks_after_last_frost"] == 0


def test_default_timing_unknown():
    assert get_default_timing("Unobtainium") is None


@pytest.mark.parametrize(
    "common_name, category",
    [
        ("Basil", "herb"),
        ("Zinnia", "flower"),
        ("Carrot", "vegetable"),
        ("Watermelon", "vegetable"),  # fruit groups with vegetables
        ("Something Unknown", "vegetable"),
        (None, "vegetable"),
    ],
)
def test_get_category(common_name, category):
    assert get_category(SimpleNamespace(common_name=common_name)) == category
