from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple


class Severity(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


@dataclass(frozen=True)
class RiskItem:
    """Single entry of the risk analysis shown with every estimate."""

    title: str
    severity: Severity
    description: str


@dataclass(frozen=True)
class CostBreakdown:
    """Per-category costs, each already floored to whole currency units."""

    material_cost: int
    labour_cost: int
    transportation_cost: int
    overhead_cost: int

    @property
    def total(self) -> int:
        return self.material_cost + self.labour_cost + self.transportation_cost + self.overhead_cost

    def items(self) -> Tuple[Tuple[str, int], ...]:
        """Return ``(label, cost)`` pairs in display order."""

        return (
            ("Material Cost", self.material_cost),
            ("Labour Cost", self.labour_cost),
            ("Transportation", self.transportation_cost),
            ("Overhead", self.overhead_cost),
        )


@dataclass(frozen=True)
class EstimateResult:
    """Normalized output of one estimation call."""

    total_cost: int
    cost_breakdown: CostBreakdown
    construction_time: int
    labour_required: int
    risk_analysis: Tuple[RiskItem, ...]
    area: float = 0.0
    location: str = ""
    location_multiplier: float = 1.0


@dataclass
class ProjectDetails:
    """Inputs accumulated by the wizard plus the estimate once computed."""

    floor_plan: Optional[Path] = None
    area: Optional[float] = None
    location: Optional[str] = None
    estimate: Optional[EstimateResult] = None
