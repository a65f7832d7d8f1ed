"""
Base rates and regional multipliers used by the estimator.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_LOCATION_MULTIPLIER = 1.0

# Keep tuple structure to preserve order for UI display
LOCATION_CHOICES: Tuple[Tuple[str, float], ...] = (
    ("Mumbai", 1.3),
    ("Delhi", 1.2),
    ("Bangalore", 1.25),
    ("Chennai", 1.15),
    ("Hyderabad", 1.1),
    ("Pune", 1.2),
    ("Kolkata", 1.05),
    ("Other", 1.0),
)

_RATE_FIELDS = (
    "material_cost_per_sqft",
    "labour_cost_per_sqft",
    "transportation_cost_per_sqft",
    "overhead_per_sqft",
)


def _frozen_mapping(pairs) -> Mapping[str, float]:
    return MappingProxyType(dict(pairs))


@dataclass(frozen=True)
class RateTable:
    """Currency per square foot for each cost category plus location multipliers."""

    material_cost_per_sqft: float = 3000
    labour_cost_per_sqft: float = 1500
    transportation_cost_per_sqft: float = 300
    overhead_per_sqft: float = 200
    location_multipliers: Mapping[str, float] = field(
        default_factory=lambda: _frozen_mapping(LOCATION_CHOICES)
    )


DEFAULT_RATE_TABLE = RateTable()


def location_multiplier(location: Optional[str], rates: RateTable = DEFAULT_RATE_TABLE) -> float:
    """
    Return the multiplier for ``location``.

    Locations missing from the table are not an error: they price at the
    neutral multiplier of 1.0.
    """

    if location and location in rates.location_multipliers:
        return float(rates.location_multipliers[location])
    logger.debug("No multiplier for location %r; using %.2f", location, DEFAULT_LOCATION_MULTIPLIER)
    return DEFAULT_LOCATION_MULTIPLIER


def location_choices(rates: RateTable = DEFAULT_RATE_TABLE) -> List[str]:
    """Return location names in display order for selection controls."""

    return list(rates.location_multipliers)


def normalize_location(value: Optional[str], rates: RateTable = DEFAULT_RATE_TABLE) -> Optional[str]:
    """
    Map free-form user input onto a known location key.

    Matching ignores case and surrounding whitespace.  Returns ``None`` if the
    value cannot be mapped.
    """

    if not value:
        return None
    candidate = value.strip()
    if not candidate:
        return None
    if candidate in rates.location_multipliers:
        return candidate
    folded = candidate.casefold()
    for name in rates.location_multipliers:
        if name.casefold() == folded:
            return name
    return None


def _positive(value: object, label: str) -> float:
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ValueError(f"{label} must be numeric, got {value!r}") from None
    if not math.isfinite(number) or number <= 0:
        raise ValueError(f"{label} must be a positive number, got {value!r}")
    return number


def load_rate_table(path: Path, base: RateTable = DEFAULT_RATE_TABLE) -> RateTable:
    """Build a :class:`RateTable` from a JSON override file.

    The payload may contain ``base_rates`` (keyed by the RateTable field
    names) and ``location_multipliers``.  Keys that are absent keep the values
    from ``base``; listed locations replace the whole multiplier table.
    """

    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError(f"Rate table file {path} must contain a JSON object")

    overrides = {}
    base_rates = payload.get("base_rates") or {}
    if not isinstance(base_rates, dict):
        raise ValueError(f"base_rates in {path} must be a JSON object")
    for key, value in base_rates.items():
        if key not in _RATE_FIELDS:
            raise ValueError(f"Unknown base rate {key!r} in {path}")
        overrides[key] = _positive(value, key)

    multipliers = payload.get("location_multipliers")
    if multipliers is not None and not isinstance(multipliers, dict):
        raise ValueError(f"location_multipliers in {path} must be a JSON object")
    if multipliers:
        overrides["location_multipliers"] = _frozen_mapping(
            (str(name), _positive(value, f"multiplier for {name}")) for name, value in multipliers.items()
        )

    table = replace(base, **overrides)
    logger.debug("Loaded rate table from %s (%d locations)", path, len(table.location_multipliers))
    return table
