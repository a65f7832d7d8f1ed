"""Desktop wizard for the construction cost predictor.

The window walks through four panels, one per wizard stage: pick a floor plan
image or PDF, type the project area, choose a location, then review the
estimate.  All state lives in a :class:`costpredict.wizard.WizardController`;
this module only renders the current stage and forwards user actions to it.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

import tkinter as tk
from tkinter import filedialog, messagebox, ttk

from .config import Config
from .config import load_config as load_runtime_config
from .estimate_writer import write_outputs
from .estimator import InvalidArea
from .models import EstimateResult, Severity
from .rates import location_choices
from .reporting import format_area, format_currency
from .wizard import FLOOR_PLAN_SUFFIXES, InvalidFloorPlan, Stage, WizardController

logger = logging.getLogger(__name__)

LOCATION_PLACEHOLDER = "Select Location"

_SEVERITY_COLORS: Dict[Severity, Tuple[str, str]] = {
    Severity.HIGH: ("#fecaca", "#991b1b"),
    Severity.MEDIUM: ("#fef08a", "#854d0e"),
    Severity.LOW: ("#bbf7d0", "#166534"),
}

_STAGE_TITLES: Dict[Stage, str] = {
    Stage.UPLOAD: "Upload Floor Plan",
    Stage.AREA: "Enter Project Details",
    Stage.LOCATION: "Select Location",
    Stage.RESULTS: "Total Cost Breakdown",
}


class CostPredictorApp:
    """Tk-based interface that drives one wizard session."""

    def __init__(self, runtime_config: Optional[Config] = None) -> None:
        self._config = runtime_config or load_runtime_config(os.environ, None)
        self._currency_symbol = self._config.currency_symbol
        self.wizard = WizardController(self._config.rate_table())

        self.root = tk.Tk()
        self._palette: dict[str, str] = {}
        self._configure_theme()
        self.root.title("Construction Cost Predictor")
        self.root.geometry("760x720")
        self.root.minsize(560, 520)

        self.area_var = tk.StringVar()
        self.location_var = tk.StringVar(value=LOCATION_PLACEHOLDER)
        self.status_title_var = tk.StringVar(value="Ready to Start")
        self.status_detail_var = tk.StringVar(value="Upload a floor plan to begin.")
        self.area_var.trace_add("write", self._on_area_changed)

        self._renderers: Dict[Stage, Callable[[ttk.Frame], None]] = {
            Stage.UPLOAD: self._render_upload,
            Stage.AREA: self._render_area,
            Stage.LOCATION: self._render_location,
            Stage.RESULTS: self._render_results,
        }
        self._stage_frame: Optional[ttk.Frame] = None
        self._build_ui()
        self._show_stage()

    # ---------------------------------------------------------------- Theme --
    def _configure_theme(self) -> None:
        palette = {
            "base": "#f9fafb",
            "card": "#ffffff",
            "tile": "#f3f4f6",
            "accent": "#3b82f6",
            "heading": "#1e40af",
            "total_bg": "#dbeafe",
            "total_fg": "#15803d",
            "text": "#111827",
            "muted": "#4b5563",
            "success": "#16a34a",
            "error": "#dc2626",
        }
        self._palette = palette

        self.root.configure(bg=palette["base"])
        self.root.option_add("*Font", "{Segoe UI} 11")

        style = ttk.Style(self.root)
        try:
            style.theme_use("clam")
        except tk.TclError:
            pass

        style.configure("Background.TFrame", background=palette["base"])
        style.configure("Card.TFrame", background=palette["card"])
        style.configure("Tile.TFrame", background=palette["tile"])
        style.configure("Total.TFrame", background=palette["total_bg"])
        style.configure("TLabel", background=palette["card"], foreground=palette["text"])
        style.configure(
            "Title.TLabel",
            background=palette["base"],
            foreground=palette["heading"],
            font=("Segoe UI Semibold", 24),
        )
        style.configure("Subtitle.TLabel", background=palette["base"], foreground=palette["muted"])
        style.configure(
            "Heading.TLabel",
            background=palette["card"],
            foreground=palette["text"],
            font=("Segoe UI Semibold", 16),
        )
        style.configure("Status.TLabel", background=palette["card"], foreground=palette["muted"])
        style.configure("TileLabel.TLabel", background=palette["tile"], font=("Segoe UI Semibold", 11))
        style.configure("TileValue.TLabel", background=palette["tile"])
        style.configure("TileBody.TLabel", background=palette["tile"], foreground=palette["muted"], font=("Segoe UI", 9))
        style.configure("TotalLabel.TLabel", background=palette["total_bg"], foreground=palette["heading"], font=("Segoe UI Semibold", 13))
        style.configure("TotalValue.TLabel", background=palette["total_bg"], foreground=palette["total_fg"], font=("Segoe UI Black", 22))
        style.configure("Accent.TButton", background=palette["accent"], foreground="#ffffff")

    # ------------------------------------------------------------------- UI --
    def _build_ui(self) -> None:
        container = ttk.Frame(self.root, style="Background.TFrame", padding=(24, 20))
        container.pack(fill=tk.BOTH, expand=True)
        container.columnconfigure(0, weight=1)
        container.rowconfigure(2, weight=1)

        ttk.Label(container, text="Construction Cost Predictor", style="Title.TLabel").grid(row=0, column=0)
        ttk.Label(container, text="Comprehensive Project Estimation", style="Subtitle.TLabel").grid(
            row=1, column=0, pady=(0, 16)
        )

        card = ttk.Frame(container, style="Card.TFrame", padding=(28, 24))
        card.grid(row=2, column=0, sticky="nsew")
        card.columnconfigure(0, weight=1)
        card.rowconfigure(0, weight=1)
        self._card = card

        status_bar = ttk.Frame(container, style="Card.TFrame", padding=(16, 10))
        status_bar.grid(row=3, column=0, sticky="ew", pady=(12, 0))
        ttk.Label(status_bar, textvariable=self.status_title_var, style="Heading.TLabel").pack(anchor=tk.W)
        ttk.Label(status_bar, textvariable=self.status_detail_var, style="Status.TLabel").pack(anchor=tk.W)

    def _show_stage(self) -> None:
        if self._stage_frame is not None:
            self._stage_frame.destroy()
        frame = ttk.Frame(self._card, style="Card.TFrame")
        frame.grid(row=0, column=0, sticky="nsew")
        frame.columnconfigure(0, weight=1)
        self._stage_frame = frame

        stage = self.wizard.stage
        ttk.Label(frame, text=_STAGE_TITLES[stage], style="Heading.TLabel").grid(
            row=0, column=0, sticky="w", pady=(0, 12)
        )
        self._renderers[stage](frame)

    def _render_upload(self, frame: ttk.Frame) -> None:
        ttk.Label(frame, text="Accepted formats: " + ", ".join(FLOOR_PLAN_SUFFIXES), style="Status.TLabel").grid(
            row=1, column=0, sticky="w"
        )
        ttk.Button(frame, text="Browse…", style="Accent.TButton", command=self._browse_file).grid(
            row=2, column=0, sticky="w", pady=(12, 0)
        )

    def _render_area(self, frame: ttk.Frame) -> None:
        ttk.Label(frame, text="Enter Project Area (sq ft)").grid(row=1, column=0, sticky="w")
        entry = ttk.Entry(frame, textvariable=self.area_var)
        entry.grid(row=2, column=0, sticky="ew", pady=(6, 0))
        entry.focus_set()
        ttk.Button(frame, text="Next", style="Accent.TButton", command=self._advance).grid(
            row=3, column=0, sticky="w", pady=(16, 0)
        )

    def _render_location(self, frame: ttk.Frame) -> None:
        values = [LOCATION_PLACEHOLDER, *location_choices(self.wizard.rates)]
        combo = ttk.Combobox(frame, textvariable=self.location_var, values=values, state="readonly")
        combo.grid(row=1, column=0, sticky="ew")
        combo.bind("<<ComboboxSelected>>", self._on_location_selected)

    def _render_results(self, frame: ttk.Frame) -> None:
        result = self.wizard.result
        if result is None:
            return

        total = ttk.Frame(frame, style="Total.TFrame", padding=(16, 12))
        total.grid(row=1, column=0, sticky="ew")
        ttk.Label(total, text="Total Project Cost", style="TotalLabel.TLabel").pack(anchor=tk.W)
        ttk.Label(total, text=self._format_currency(result.total_cost), style="TotalValue.TLabel").pack(anchor=tk.W)

        tiles = ttk.Frame(frame, style="Card.TFrame")
        tiles.grid(row=2, column=0, sticky="ew", pady=(12, 0))
        tiles.columnconfigure((0, 1), weight=1)
        for index, (label, value) in enumerate(self._result_tiles(result)):
            tile = ttk.Frame(tiles, style="Tile.TFrame", padding=(12, 8))
            tile.grid(row=index // 2, column=index % 2, sticky="nsew", padx=4, pady=4)
            ttk.Label(tile, text=label, style="TileLabel.TLabel").pack(anchor=tk.W)
            ttk.Label(tile, text=value, style="TileValue.TLabel").pack(anchor=tk.W)

        ttk.Label(frame, text="Risk Analysis", style="Heading.TLabel").grid(row=3, column=0, sticky="w", pady=(16, 6))
        risks = ttk.Frame(frame, style="Card.TFrame")
        risks.grid(row=4, column=0, sticky="ew")
        risks.columnconfigure(0, weight=1)
        for index, risk in enumerate(result.risk_analysis):
            row = ttk.Frame(risks, style="Tile.TFrame", padding=(12, 8))
            row.grid(row=index, column=0, sticky="ew", pady=3)
            row.columnconfigure(0, weight=1)
            ttk.Label(row, text=risk.title, style="TileLabel.TLabel").grid(row=0, column=0, sticky="w")
            bg, fg = self._severity_colors(risk.severity)
            tk.Label(row, text=risk.severity.value, bg=bg, fg=fg, padx=8, font=("Segoe UI", 9)).grid(
                row=0, column=1, sticky="e"
            )
            ttk.Label(row, text=risk.description, style="TileBody.TLabel").grid(row=1, column=0, columnspan=2, sticky="w")

        ttk.Button(frame, text="Export…", command=self._export).grid(row=5, column=0, sticky="e", pady=(16, 0))

    # -------------------------------------------------------------- Helpers --
    def _format_currency(self, amount: float) -> str:
        return format_currency(amount, self._currency_symbol)

    def _result_tiles(self, result: EstimateResult) -> List[Tuple[str, str]]:
        """Label/value pairs for the breakdown and insight tiles, in display order."""

        tiles = [(label, self._format_currency(cost)) for label, cost in result.cost_breakdown.items()]
        tiles.append(("Construction Time", f"{result.construction_time} months"))
        tiles.append(("Labour Required", f"{result.labour_required} workers"))
        return tiles

    @staticmethod
    def _severity_colors(severity: Severity) -> Tuple[str, str]:
        return _SEVERITY_COLORS[severity]

    @staticmethod
    def _format_path_for_display(path: Path, max_name: int = 42) -> str:
        name = path.name
        if len(name) > max_name:
            name = name[: max_name - 1] + "…"
        return name

    def _set_status(self, title: str, detail: Optional[str] = None) -> None:
        self.status_title_var.set(title)
        if detail is not None:
            self.status_detail_var.set(detail)

    # --------------------------------------------------------------- Events --
    def _browse_file(self) -> None:  # pragma: no cover - UI event
        path = filedialog.askopenfilename(
            parent=self.root,
            title="Select floor plan",
            initialdir=os.getcwd(),
            filetypes=[["Floor plans", " ".join(f"*{suffix}" for suffix in FLOOR_PLAN_SUFFIXES)], ["All files", "*.*"]],
        )
        if path:
            self._select_floor_plan(Path(path))

    def _select_floor_plan(self, path: Path) -> None:  # pragma: no cover - UI event
        try:
            self.wizard.select_file(path)
        except InvalidFloorPlan as exc:
            messagebox.showerror("Invalid file", str(exc))
            return
        self._set_status("Floor plan selected", self._format_path_for_display(path))
        self._show_stage()

    def _on_area_changed(self, *_: object) -> None:  # pragma: no cover - UI event
        if self.wizard.stage is Stage.AREA:
            self.wizard.enter_area(self.area_var.get())

    def _advance(self) -> None:  # pragma: no cover - UI event
        try:
            self.wizard.advance()
        except InvalidArea as exc:
            messagebox.showerror("Invalid area", str(exc))
            return
        self._set_status("Area captured", f"{format_area(self.wizard.details.area)} sq ft")
        self._show_stage()

    def _on_location_selected(self, _event: Optional[tk.Event] = None) -> None:  # pragma: no cover - UI event
        location = self.location_var.get()
        if location == LOCATION_PLACEHOLDER:
            return
        try:
            result = self.wizard.select_location(location)
        except InvalidArea as exc:
            messagebox.showerror("Invalid area", str(exc))
            return
        if result is None:
            return
        self._set_status("Estimate ready", f"{location}: {self._format_currency(result.total_cost)}")
        self._show_stage()

    def _export(self) -> None:  # pragma: no cover - UI event
        try:
            written = write_outputs(
                self.wizard.details,
                self._config.output_xlsx,
                self._config.output_pdf,
                self._currency_symbol,
            )
        except (OSError, ValueError) as exc:
            logger.exception("Export failed")
            messagebox.showerror("Export failed", str(exc))
            return
        self._set_status("Estimate exported", ", ".join(str(path) for path in written.values()))

    # ---------------------------------------------------------------- Main --
    def run(self) -> None:  # pragma: no cover - UI loop
        self.root.mainloop()


def main() -> None:  # pragma: no cover - entry point
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    runtime_cfg = load_runtime_config(os.environ, None)
    try:
        runtime_cfg.rate_table()
    except (ValueError, OSError) as exc:
        logger.error("Invalid rate table: %s", exc)
        root = tk.Tk()
        root.withdraw()
        messagebox.showerror("Invalid rate table", str(exc), parent=root)
        root.destroy()
        raise SystemExit(2)
    app = CostPredictorApp(runtime_cfg)
    app.run()


if __name__ == "__main__":  # pragma: no cover - script mode
    main()
