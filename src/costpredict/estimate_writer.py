"""Write the current session's estimate to an Excel workbook and a PDF summary."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

import pandas as pd
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from .config import DEFAULT_CURRENCY_SYMBOL
from .models import EstimateResult, ProjectDetails
from .reporting import breakdown_frame, format_area, format_currency, risk_frame

logger = logging.getLogger(__name__)

# The standard PDF fonts only cover Latin-1.
_PDF_FALLBACK_SYMBOL = "Rs. "


def _pdf_symbol(symbol: str) -> str:
    try:
        symbol.encode("latin-1")
    except UnicodeEncodeError:
        return _PDF_FALLBACK_SYMBOL
    return symbol


def _summary_frame(details: ProjectDetails, result: EstimateResult) -> pd.DataFrame:
    rows = [
        ("FLOOR_PLAN", str(details.floor_plan) if details.floor_plan else ""),
        ("AREA_SQFT", result.area),
        ("LOCATION", result.location),
        ("LOCATION_MULTIPLIER", result.location_multiplier),
        ("TOTAL_COST", result.total_cost),
        ("CONSTRUCTION_TIME_MONTHS", result.construction_time),
        ("LABOUR_REQUIRED", result.labour_required),
    ]
    return pd.DataFrame(rows, columns=["FIELD", "VALUE"])


def write_workbook(details: ProjectDetails, path: Path) -> Path:
    if details.estimate is None:
        raise ValueError("No estimate to write; complete the wizard first.")
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        _summary_frame(details, details.estimate).to_excel(writer, sheet_name="SUMMARY", index=False)
        breakdown_frame(details.estimate).to_excel(writer, sheet_name="BREAKDOWN", index=False)
        risk_frame(details.estimate).to_excel(writer, sheet_name="RISKS", index=False)
    return path


def write_pdf(details: ProjectDetails, path: Path, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> Path:
    result = details.estimate
    if result is None:
        raise ValueError("No estimate to write; complete the wizard first.")
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    symbol = _pdf_symbol(symbol)

    canv = canvas.Canvas(str(path), pagesize=A4)
    _, height = A4
    y = height - 72

    def line(text: str, size: int = 11, gap: int = 18) -> None:
        nonlocal y
        canv.setFont("Helvetica", size)
        canv.drawString(72, y, text)
        y -= gap

    line("Construction Cost Estimate", size=18, gap=30)
    if details.floor_plan is not None:
        line(f"Floor plan: {details.floor_plan.name}")
    line(f"Area: {format_area(result.area)} sq ft | Location: {result.location} (x{result.location_multiplier:.2f})")
    line(f"Total project cost: {format_currency(result.total_cost, symbol)}", size=14, gap=26)
    for label, cost in result.cost_breakdown.items():
        line(f"    {label}: {format_currency(cost, symbol)}")
    y -= 8
    line(f"Construction time: {result.construction_time} months")
    line(f"Labour required: {result.labour_required} workers", gap=26)
    line("Risk analysis", size=14, gap=22)
    for risk in result.risk_analysis:
        line(f"{risk.title} [{risk.severity.value}]")
        line(f"    {risk.description}", size=9, gap=16)
    canv.showPage()
    canv.save()
    return path


def write_outputs(
    details: ProjectDetails,
    xlsx_path: Optional[Path],
    pdf_path: Optional[Path],
    symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> Dict[str, Path]:
    """Write the requested artifacts and return their paths keyed by kind."""

    if details.estimate is None:
        raise ValueError("No estimate to write; complete the wizard first.")
    written: Dict[str, Path] = {}
    if xlsx_path is not None:
        written["xlsx"] = write_workbook(details, xlsx_path)
    if pdf_path is not None:
        written["pdf"] = write_pdf(details, pdf_path, symbol)
    for kind, path in written.items():
        logger.info("        %s_written => %s", kind, path)
    return written
