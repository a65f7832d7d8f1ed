import argparse
import logging
import os
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv

from .config import Config
from .config import load_config as load_runtime_config
from .estimate_writer import write_outputs
from .estimator import InvalidArea
from .rates import DEFAULT_LOCATION_MULTIPLIER, location_choices, normalize_location
from .reporting import make_summary_text
from .wizard import InvalidFloorPlan, WizardController

BASE_DIR = Path(__file__).resolve().parents[2]

EXIT_OK = 0
EXIT_INVALID_INPUT = 2

logger = logging.getLogger(__name__)


def run(args: argparse.Namespace, runtime_config: Config) -> int:
    try:
        rates = runtime_config.rate_table()
    except (ValueError, OSError) as exc:
        logger.error("Invalid rate table: %s", exc)
        return EXIT_INVALID_INPUT

    if args.list_locations:
        for name in location_choices(rates):
            logger.info("%-12s x%.2f", name, rates.location_multipliers[name])
        return EXIT_OK

    missing = [flag for flag, value in (("--floor-plan", args.floor_plan), ("--area", args.area), ("--location", args.location)) if value is None]
    if missing:
        logger.error("Missing required input: %s", ", ".join(missing))
        return EXIT_INVALID_INPUT

    location = normalize_location(args.location, rates)
    if location is None:
        logger.warning(
            "Location %r is not in the rate table; pricing with multiplier x%.2f.",
            args.location,
            DEFAULT_LOCATION_MULTIPLIER,
        )
        location = args.location.strip()

    wizard = WizardController(rates)
    try:
        wizard.select_file(args.floor_plan)
        wizard.enter_area(args.area)
        wizard.advance()
        result = wizard.select_location(location)
    except (InvalidArea, InvalidFloorPlan) as exc:
        logger.error("Invalid input: %s", exc)
        return EXIT_INVALID_INPUT

    if result is None:
        logger.error("Invalid input: no location selected.")
        return EXIT_INVALID_INPUT

    logger.info("\n=== ESTIMATE ===\n")
    logger.info("%s", make_summary_text(result, runtime_config.currency_symbol))

    if runtime_config.export:
        written = write_outputs(
            wizard.details,
            runtime_config.output_xlsx,
            runtime_config.output_pdf,
            runtime_config.currency_symbol,
        )
        logger.info("Outputs written:")
        for path in written.values():
            logger.info(" - %s", path)
    return EXIT_OK


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Estimate construction cost from floor area and location")
    parser.add_argument("--floor-plan", help="Floor plan image or PDF (.jpg, .jpeg, .png, .pdf)")
    parser.add_argument("--area", help="Project area in square feet")
    parser.add_argument("--location", help="Project location (see --list-locations)")
    parser.add_argument("--list-locations", action="store_true", help="List known locations and multipliers")
    parser.add_argument("--rates-json", help="Optional JSON file overriding base rates and multipliers")
    parser.add_argument("--output-dir", help="Directory for exported workbook and PDF")
    parser.add_argument("--export", action="store_true", help="Write the estimate to Excel and PDF")
    parser.add_argument("-v", "--verbose", action="store_true", help="Increase logging verbosity")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv(BASE_DIR / ".env")
    args = parse_args(argv)
    runtime_cfg = load_runtime_config(os.environ, args)
    log_level = logging.DEBUG if runtime_cfg.verbose else logging.INFO
    logging.basicConfig(level=log_level, format="%(message)s")
    try:
        return run(args, runtime_cfg)
    except Exception:  # pragma: no cover - defensive
        logger.exception("Fatal error during estimate generation")
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
