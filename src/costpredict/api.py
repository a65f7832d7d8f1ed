from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from .config import load_config
from .estimate_writer import write_outputs
from .wizard import WizardController


@dataclass
class EstimateOptions:
    floor_plan: Path
    area: float
    location: str
    output_dir: Optional[Path] = None
    rates_json: Optional[Path] = None
    export: bool = False


def estimate_project(options: EstimateOptions) -> Dict[str, object]:
    """Programmatic interface that walks the wizard with the given inputs.

    Returns a dict with keys: details, and xlsx/pdf when ``export`` is set.
    """
    import os

    env = dict(os.environ)
    if options.output_dir:
        env["COSTPREDICT_OUTPUT_DIR"] = str(options.output_dir)
    if options.rates_json:
        env["COSTPREDICT_RATES_JSON"] = str(options.rates_json)
    if options.export:
        env["COSTPREDICT_EXPORT"] = "1"

    cfg = load_config(env, None)
    wizard = WizardController(cfg.rate_table())
    wizard.select_file(options.floor_plan)
    wizard.enter_area(options.area)
    wizard.advance()
    wizard.select_location(options.location)

    outcome: Dict[str, object] = {"details": wizard.details}
    if cfg.export:
        outcome.update(write_outputs(wizard.details, cfg.output_xlsx, cfg.output_pdf, cfg.currency_symbol))
    return outcome
