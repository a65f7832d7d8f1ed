from __future__ import annotations

import json
from pathlib import Path

import pytest

from costpredict.rates import (
    DEFAULT_RATE_TABLE,
    load_rate_table,
    location_choices,
    location_multiplier,
    normalize_location,
)


def test_known_locations_use_table_multiplier():
    assert location_multiplier("Mumbai") == 1.3
    assert location_multiplier("Bangalore") == 1.25
    assert location_multiplier("Other") == 1.0


@pytest.mark.parametrize("location", ["Atlantis", "", None, "mumbai"])
def test_unknown_locations_fall_back_to_neutral_multiplier(location):
    assert location_multiplier(location) == 1.0


def test_location_choices_preserve_display_order():
    assert location_choices() == [
        "Mumbai",
        "Delhi",
        "Bangalore",
        "Chennai",
        "Hyderabad",
        "Pune",
        "Kolkata",
        "Other",
    ]


def test_normalize_location_ignores_case_and_whitespace():
    assert normalize_location("  mumbai ") == "Mumbai"
    assert normalize_location("KOLKATA") == "Kolkata"
    assert normalize_location("Atlantis") is None
    assert normalize_location("   ") is None


def test_default_rate_table_is_read_only():
    with pytest.raises(TypeError):
        DEFAULT_RATE_TABLE.location_multipliers["Mumbai"] = 2.0  # type: ignore[index]


def test_load_rate_table_overrides_only_listed_values(tmp_path: Path):
    path = tmp_path / "rates.json"
    path.write_text(
        json.dumps(
            {
                "base_rates": {"material_cost_per_sqft": 2500},
                "location_multipliers": {"Jaipur": 0.95, "Other": 1.0},
            }
        ),
        encoding="utf-8",
    )

    table = load_rate_table(path)

    assert table.material_cost_per_sqft == 2500
    assert table.labour_cost_per_sqft == DEFAULT_RATE_TABLE.labour_cost_per_sqft
    assert location_choices(table) == ["Jaipur", "Other"]
    assert location_multiplier("Jaipur", table) == 0.95
    assert location_multiplier("Mumbai", table) == 1.0


@pytest.mark.parametrize(
    "payload",
    [
        {"base_rates": {"overhead_per_sqft": 0}},
        {"base_rates": {"profit_per_sqft": 10}},
        {"location_multipliers": {"Mumbai": -1.3}},
        {"location_multipliers": {"Mumbai": "lots"}},
        {"base_rates": [1, 2]},
        {"base_rates": 3000},
        {"location_multipliers": ["Mumbai"]},
        {"location_multipliers": 1.3},
    ],
)
def test_load_rate_table_rejects_invalid_values(tmp_path: Path, payload):
    path = tmp_path / "rates.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    with pytest.raises(ValueError):
        load_rate_table(path)
