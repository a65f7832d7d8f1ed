from __future__ import annotations

from pathlib import Path

import pytest

from costpredict.estimator import InvalidArea
from costpredict.wizard import InvalidFloorPlan, Stage, WizardController, WizardStateError


@pytest.fixture
def floor_plan(tmp_path: Path) -> Path:
    path = tmp_path / "ground_floor.png"
    path.write_bytes(b"\x89PNG\r\n\x1a\n")
    return path


@pytest.fixture
def wizard_at_location(floor_plan: Path) -> WizardController:
    wizard = WizardController()
    wizard.select_file(floor_plan)
    wizard.enter_area("1000")
    wizard.advance()
    return wizard


def test_full_flow_reaches_results(floor_plan: Path):
    wizard = WizardController()
    assert wizard.stage is Stage.UPLOAD

    wizard.select_file(floor_plan)
    assert wizard.stage is Stage.AREA
    assert wizard.details.floor_plan == floor_plan

    assert wizard.enter_area("1000") == 1000.0
    assert wizard.stage is Stage.AREA

    wizard.advance()
    assert wizard.stage is Stage.LOCATION

    result = wizard.select_location("Mumbai")
    assert wizard.stage is Stage.RESULTS
    assert result is not None
    assert result.total_cost == 6_500_000
    assert wizard.details.location == "Mumbai"
    assert wizard.details.estimate is result
    assert wizard.result is result


@pytest.mark.parametrize("name", ["plan.jpg", "plan.JPEG", "plan.pdf", "plan.Png"])
def test_floor_plan_suffixes_accepted(tmp_path: Path, name: str):
    wizard = WizardController()
    wizard.select_file(tmp_path / name)
    assert wizard.stage is Stage.AREA


def test_unsupported_floor_plan_stays_in_upload(tmp_path: Path):
    wizard = WizardController()
    with pytest.raises(InvalidFloorPlan):
        wizard.select_file(tmp_path / "plan.docx")
    assert wizard.stage is Stage.UPLOAD
    assert wizard.details.floor_plan is None


def test_unparsable_area_is_cleared_not_raised(floor_plan: Path):
    wizard = WizardController()
    wizard.select_file(floor_plan)
    wizard.enter_area("1200")
    assert wizard.enter_area("12x") is None
    assert wizard.details.area is None
    assert wizard.stage is Stage.AREA


def test_advance_without_area_raises_and_stays(floor_plan: Path):
    wizard = WizardController()
    wizard.select_file(floor_plan)
    with pytest.raises(InvalidArea):
        wizard.advance()
    assert wizard.stage is Stage.AREA

    wizard.enter_area("-20")
    with pytest.raises(InvalidArea):
        wizard.advance()
    assert wizard.stage is Stage.AREA


def test_results_never_reached_without_area(wizard_at_location: WizardController):
    wizard_at_location.details.area = None
    with pytest.raises(InvalidArea):
        wizard_at_location.select_location("Delhi")
    assert wizard_at_location.stage is Stage.LOCATION
    assert wizard_at_location.details.estimate is None
    assert wizard_at_location.details.location is None


def test_placeholder_location_is_ignored(wizard_at_location: WizardController):
    assert wizard_at_location.select_location("") is None
    assert wizard_at_location.stage is Stage.LOCATION


def test_unknown_location_still_produces_results(wizard_at_location: WizardController):
    result = wizard_at_location.select_location("Atlantis")
    assert result is not None
    assert result.location_multiplier == 1.0
    assert wizard_at_location.stage is Stage.RESULTS


def test_actions_out_of_order_are_rejected(floor_plan: Path):
    wizard = WizardController()
    with pytest.raises(WizardStateError):
        wizard.enter_area("100")
    with pytest.raises(WizardStateError):
        wizard.select_location("Mumbai")

    wizard.select_file(floor_plan)
    with pytest.raises(WizardStateError):
        wizard.select_file(floor_plan)


def test_results_stage_is_terminal(wizard_at_location: WizardController, floor_plan: Path):
    wizard_at_location.select_location("Pune")
    for action, arg in (
        (wizard_at_location.select_file, floor_plan),
        (wizard_at_location.enter_area, "10"),
        (wizard_at_location.select_location, "Delhi"),
    ):
        with pytest.raises(WizardStateError):
            action(arg)
    with pytest.raises(WizardStateError):
        wizard_at_location.advance()
    assert wizard_at_location.details.location == "Pune"


def test_sessions_do_not_share_state(floor_plan: Path):
    first = WizardController()
    second = WizardController()
    first.select_file(floor_plan)
    assert second.stage is Stage.UPLOAD
    assert second.details.floor_plan is None


def test_advance_reports_why_typed_area_was_rejected(floor_plan: Path):
    wizard = WizardController()
    wizard.select_file(floor_plan)
    wizard.enter_area("lots")
    with pytest.raises(InvalidArea, match="must be a number, got 'lots'"):
        wizard.advance()

    wizard.enter_area("-20")
    with pytest.raises(InvalidArea, match="positive"):
        wizard.advance()

    wizard.enter_area("250")
    wizard.advance()
    assert wizard.stage is Stage.LOCATION
