"""Forward-only wizard that gathers project inputs and produces an estimate.

The flow is strictly linear::

    upload -> area -> location -> results

Each user action is accepted only in its own stage.  Input is validated
before anything is computed and the stage only advances once validation
passes, so the results stage is never reached with a missing area.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from .estimator import InvalidArea, estimate, parse_area
from .models import EstimateResult, ProjectDetails
from .rates import DEFAULT_RATE_TABLE, RateTable

logger = logging.getLogger(__name__)

FLOOR_PLAN_SUFFIXES = (".jpg", ".jpeg", ".png", ".pdf")


class Stage(str, Enum):
    UPLOAD = "upload"
    AREA = "area"
    LOCATION = "location"
    RESULTS = "results"


class WizardStateError(RuntimeError):
    """Raised when an action is attempted in a stage that does not accept it."""


class InvalidFloorPlan(ValueError):
    """Raised when the selected floor plan is not an image or PDF."""


class WizardController:
    """Owns one session's :class:`ProjectDetails` and its current stage."""

    def __init__(self, rates: RateTable = DEFAULT_RATE_TABLE) -> None:
        self.rates = rates
        self.details = ProjectDetails()
        self._stage = Stage.UPLOAD
        self._area_error: Optional[InvalidArea] = None

    @property
    def stage(self) -> Stage:
        return self._stage

    @property
    def result(self) -> Optional[EstimateResult]:
        return self.details.estimate

    def _require(self, stage: Stage, action: str) -> None:
        if self._stage is not stage:
            raise WizardStateError(
                f"Cannot {action} while in the {self._stage.value!r} stage (expected {stage.value!r})."
            )

    def _transition(self, stage: Stage) -> None:
        logger.info("[wizard] %s -> %s", self._stage.value, stage.value)
        self._stage = stage

    def select_file(self, path: Union[str, Path]) -> None:
        self._require(Stage.UPLOAD, "select a floor plan")
        floor_plan = Path(path)
        if floor_plan.suffix.lower() not in FLOOR_PLAN_SUFFIXES:
            raise InvalidFloorPlan(
                f"Unsupported floor plan {floor_plan.name!r}; choose one of: {', '.join(FLOOR_PLAN_SUFFIXES)}."
            )
        self.details.floor_plan = floor_plan
        logger.info("        floor_plan => %s", floor_plan)
        self._transition(Stage.AREA)

    def enter_area(self, value: object) -> Optional[float]:
        """Record the typed area; unparsable input clears it instead of raising."""

        self._require(Stage.AREA, "enter the project area")
        try:
            area: Optional[float] = parse_area(value)
        except InvalidArea as exc:
            area = None
            self._area_error = exc
        else:
            self._area_error = None
        self.details.area = area
        return area

    def advance(self) -> None:
        self._require(Stage.AREA, "advance to location selection")
        if self.details.area is None and self._area_error is not None:
            raise InvalidArea(str(self._area_error))
        parse_area(self.details.area)
        logger.info("        area => %s sq ft", f"{self.details.area:,.2f}")
        self._transition(Stage.LOCATION)

    def select_location(self, location: str) -> Optional[EstimateResult]:
        """Estimate for ``location`` and move to the results stage.

        An empty selection is the placeholder entry and is ignored.
        """

        self._require(Stage.LOCATION, "select a location")
        if not location:
            return None
        result = estimate(parse_area(self.details.area), location, self.rates)
        self.details.location = location
        self.details.estimate = result
        logger.info("        location => %s (x%.2f)", location, result.location_multiplier)
        self._transition(Stage.RESULTS)
        return result
