from __future__ import annotations

import pandas as pd

from .config import DEFAULT_CURRENCY_SYMBOL
from .models import EstimateResult


def format_currency(amount: float, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    return f"{symbol}{amount:,.0f}"


def format_area(area: float) -> str:
    """Group thousands and keep up to two decimals, dropping trailing zeros."""

    text = f"{area:,.2f}"
    return text.rstrip("0").rstrip(".")


def breakdown_frame(result: EstimateResult) -> pd.DataFrame:
    rows = list(result.cost_breakdown.items())
    frame = pd.DataFrame(rows, columns=["CATEGORY", "COST"])
    total = result.total_cost
    frame["SHARE"] = frame["COST"] / total if total else 0.0
    return frame


def risk_frame(result: EstimateResult) -> pd.DataFrame:
    return pd.DataFrame(
        [(risk.title, risk.severity.value, risk.description) for risk in result.risk_analysis],
        columns=["TITLE", "SEVERITY", "DESCRIPTION"],
    )


def make_summary_text(result: EstimateResult, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    table = breakdown_frame(result).assign(
        COST=lambda df: df["COST"].map(lambda value: format_currency(value, symbol)),
        SHARE=lambda df: df["SHARE"].map(lambda value: f"{value:.1%}"),
    )
    risks = "\n".join(
        f" - {risk.title} [{risk.severity.value}]: {risk.description}" for risk in result.risk_analysis
    )
    location = result.location or "(unspecified)"
    return (
        f"Total project cost: {format_currency(result.total_cost, symbol)} "
        f"for {format_area(result.area)} sq ft in {location} (multiplier x{result.location_multiplier:.2f}).\n"
        f"Cost breakdown:\n{table.to_string(index=False)}\n"
        f"Construction time: {result.construction_time} months | "
        f"Labour required: {result.labour_required} workers\n"
        f"Risk analysis:\n{risks}\n"
    )
