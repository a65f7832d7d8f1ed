from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from types import SimpleNamespace
from typing import Mapping, Optional

from .rates import DEFAULT_RATE_TABLE, RateTable, load_rate_table


_BOOLEAN_TRUE = {"1", "true", "yes", "on"}
DEFAULT_CURRENCY_SYMBOL = "₹"


@dataclass(frozen=True)
class Config:
    """Runtime configuration assembled from environment variables and CLI options."""

    base_dir: Path
    output_dir: Path
    output_xlsx: Path
    output_pdf: Path
    rates_path: Optional[Path]
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL
    export: bool = False
    verbose: bool = False

    def rate_table(self) -> RateTable:
        if self.rates_path is None:
            return DEFAULT_RATE_TABLE
        return load_rate_table(self.rates_path)


def _to_path(value: object | None) -> Optional[Path]:
    if value is None:
        return None
    if isinstance(value, Path):
        return value.expanduser().resolve()
    text = str(value).strip()
    if not text:
        return None
    return Path(text).expanduser().resolve()


def _flag(value: object | None) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _BOOLEAN_TRUE


def _namespace(cli_args: object | None) -> SimpleNamespace:
    if cli_args is None:
        return SimpleNamespace()
    if isinstance(cli_args, SimpleNamespace):
        return cli_args
    if hasattr(cli_args, "__dict__"):
        return SimpleNamespace(**{k: v for k, v in vars(cli_args).items()})
    return SimpleNamespace()


def load_config(env: Mapping[str, str], cli_args: object | None = None) -> Config:
    """Build a runtime :class:`Config` from environment variables and CLI options."""

    base_dir = Path(__file__).resolve().parents[2]
    default_output_dir = (base_dir / "outputs").resolve()

    output_dir = _to_path(env.get("COSTPREDICT_OUTPUT_DIR")) or default_output_dir
    rates_path = _to_path(env.get("COSTPREDICT_RATES_JSON"))
    currency_symbol = (env.get("COSTPREDICT_CURRENCY_SYMBOL") or "").strip() or DEFAULT_CURRENCY_SYMBOL
    export = _flag(env.get("COSTPREDICT_EXPORT"))
    verbose = _flag(env.get("COSTPREDICT_VERBOSE"))

    cli_ns = _namespace(cli_args)
    if getattr(cli_ns, "output_dir", None):
        output_dir = _to_path(cli_ns.output_dir) or output_dir
    if getattr(cli_ns, "rates_json", None):
        rates_path = _to_path(cli_ns.rates_json)
    if getattr(cli_ns, "export", False):
        export = True
    if getattr(cli_ns, "verbose", False):
        verbose = bool(cli_ns.verbose)

    return Config(
        base_dir=base_dir,
        output_dir=output_dir,
        output_xlsx=(output_dir / "Cost_Estimate.xlsx").resolve(),
        output_pdf=(output_dir / "Cost_Estimate.pdf").resolve(),
        rates_path=rates_path,
        currency_symbol=currency_symbol,
        export=export,
        verbose=verbose,
    )


__all__ = ["Config", "DEFAULT_CURRENCY_SYMBOL", "load_config"]
