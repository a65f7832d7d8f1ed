from __future__ import annotations

from pathlib import Path

import pytest

from costpredict.api import EstimateOptions, estimate_project
from costpredict.estimator import InvalidArea


def test_estimate_project_without_export(tmp_path: Path, monkeypatch):
    monkeypatch.delenv("COSTPREDICT_EXPORT", raising=False)
    outcome = estimate_project(
        EstimateOptions(floor_plan=tmp_path / "plan.jpg", area=800, location="Other", output_dir=tmp_path)
    )

    details = outcome["details"]
    assert details.estimate.total_cost == 4_000_000
    assert set(outcome) == {"details"}
    assert not list(tmp_path.iterdir())


def test_estimate_project_with_export(tmp_path: Path):
    outcome = estimate_project(
        EstimateOptions(
            floor_plan=tmp_path / "plan.jpg",
            area=1000,
            location="Mumbai",
            output_dir=tmp_path / "out",
            export=True,
        )
    )
    assert outcome["xlsx"].exists()
    assert outcome["pdf"].exists()


def test_estimate_project_rejects_missing_area(tmp_path: Path):
    with pytest.raises(InvalidArea):
        estimate_project(EstimateOptions(floor_plan=tmp_path / "plan.png", area=0, location="Pune"))
