"""Construction cost predictor: rate table, estimator and input wizard."""

from .estimator import InvalidArea, estimate, parse_area
from .models import CostBreakdown, EstimateResult, ProjectDetails, RiskItem, Severity
from .rates import DEFAULT_RATE_TABLE, RateTable, location_choices, location_multiplier
from .wizard import InvalidFloorPlan, Stage, WizardController, WizardStateError

__all__ = [
    "CostBreakdown",
    "DEFAULT_RATE_TABLE",
    "EstimateResult",
    "InvalidArea",
    "InvalidFloorPlan",
    "ProjectDetails",
    "RateTable",
    "RiskItem",
    "Severity",
    "Stage",
    "WizardController",
    "WizardStateError",
    "estimate",
    "location_choices",
    "location_multiplier",
    "parse_area",
]
