from __future__ import annotations

import logging
import math
from typing import Optional

from .models import CostBreakdown, EstimateResult, RiskItem, Severity
from .rates import DEFAULT_RATE_TABLE, RateTable, location_multiplier

logger = logging.getLogger(__name__)

SQFT_PER_CONSTRUCTION_MONTH = 500
SQFT_PER_WORKER = 250

# Not derived from inputs; every estimate carries the same four entries.
RISK_ANALYSIS = (
    RiskItem(
        "Material Price Volatility",
        Severity.MEDIUM,
        "Potential fluctuations in material costs could impact budget",
    ),
    RiskItem(
        "Labour Availability",
        Severity.LOW,
        "Skilled labour might be challenging to source consistently",
    ),
    RiskItem(
        "Regulatory Compliance",
        Severity.HIGH,
        "Local building codes and permits may cause delays",
    ),
    RiskItem(
        "Weather Disruptions",
        Severity.MEDIUM,
        "Seasonal changes could potentially extend project timeline",
    ),
)


class InvalidArea(ValueError):
    """Raised when the project area is missing, non-numeric or not positive."""


def _check_area(area: object) -> float:
    if area is None:
        raise InvalidArea("Project area has not been entered.")
    if isinstance(area, bool) or not isinstance(area, (int, float)):
        raise InvalidArea(f"Project area must be a number, got {area!r}.")
    value = float(area)
    if not math.isfinite(value) or value <= 0:
        raise InvalidArea(f"Project area must be a positive number of square feet, got {area!r}.")
    return value


def parse_area(value: object) -> float:
    """
    Parse user input into a square-foot area.

    Accepts numbers or text such as ``"1,250"`` or ``" 800.5 "``.  Raises
    :class:`InvalidArea` if the value is blank, non-numeric, non-finite or not
    positive.
    """

    if isinstance(value, str):
        text = value.replace(",", "").strip()
        if not text:
            raise InvalidArea("Project area has not been entered.")
        try:
            value = float(text)
        except ValueError:
            raise InvalidArea(f"Project area must be a number, got {text!r}.") from None
    return _check_area(value)


def _category_cost(area: float, rate: float, multiplier: float) -> int:
    return int(math.floor(area * rate * multiplier))


def estimate(area: float, location: Optional[str], rates: RateTable = DEFAULT_RATE_TABLE) -> EstimateResult:
    """Estimate cost, duration and labour for ``area`` square feet in ``location``.

    Each category is floored on its own and the total is the sum of the
    floored categories, so the breakdown always adds up to ``total_cost``.
    """

    area_value = _check_area(area)
    multiplier = location_multiplier(location, rates)

    breakdown = CostBreakdown(
        material_cost=_category_cost(area_value, rates.material_cost_per_sqft, multiplier),
        labour_cost=_category_cost(area_value, rates.labour_cost_per_sqft, multiplier),
        transportation_cost=_category_cost(area_value, rates.transportation_cost_per_sqft, multiplier),
        overhead_cost=_category_cost(area_value, rates.overhead_per_sqft, multiplier),
    )

    result = EstimateResult(
        total_cost=breakdown.total,
        cost_breakdown=breakdown,
        construction_time=math.ceil(area_value / SQFT_PER_CONSTRUCTION_MONTH),
        labour_required=math.ceil(area_value / SQFT_PER_WORKER),
        risk_analysis=RISK_ANALYSIS,
        area=area_value,
        location=location or "",
        location_multiplier=multiplier,
    )
    logger.debug(
        "estimate area=%s location=%r multiplier=%.2f total=%s",
        area_value,
        location,
        multiplier,
        result.total_cost,
    )
    return result
