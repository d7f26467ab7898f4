"""
Excel export utility for backtest results.

Builds a workbook from a run directory (manifest.json, summary.json, timeseries.csv).
"""

import json
import logging
from pathlib import Path
from typing import Optional

import pandas as pd

logger = logging.getLogger(__name__)

SUMMARY_LABELS = [
    ("netPL", "Net P/L ($)", "{:,.2f}"),
    ("maxDrawdown", "Max Drawdown ($)", "{:,.2f}"),
    ("win", "Win", "{}"),
    ("initialCost", "Initial Cost ($)", "{:,.2f}"),
    ("returnOnRisk", "Return on Risk (%)", "{:.2f}"),
    ("totalDays", "Total Days", "{}"),
    ("winningDays", "Winning Days", "{}"),
    ("losingDays", "Losing Days", "{}"),
    ("winRate", "Win Rate (%)", "{:.2f}"),
    ("maxGain", "Max Gain ($)", "{:,.2f}"),
    ("maxLoss", "Max Loss ($)", "{:,.2f}"),
]


def format_excel_sheet(writer, sheet_name: str, df: pd.DataFrame, freeze_panes: tuple = (1, 0)):
    """
    Format Excel sheet with header styling and column widths using openpyxl.

    Args:
        writer: ExcelWriter object
        sheet_name: Name of the sheet
        df: DataFrame written to the sheet
        freeze_panes: Tuple of (row, col) to freeze panes
    """
    from openpyxl.styles import Font, PatternFill, Alignment, Border, Side

    worksheet = writer.sheets[sheet_name]

    header_fill = PatternFill(start_color="D7E4BD", end_color="D7E4BD", fill_type="solid")
    header_font = Font(bold=True)
    header_alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)
    thin = Side(style="thin")
    thin_border = Border(left=thin, right=thin, top=thin, bottom=thin)

    for col_num in range(1, len(df.columns) + 1):
        cell = worksheet.cell(row=1, column=col_num)
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = header_alignment
        cell.border = thin_border

    for i, col in enumerate(df.columns, start=1):
        max_len = max(
            df[col].astype(str).str.len().max() if len(df) > 0 else 0,
            len(str(col)),
        ) + 2
        column_letter = worksheet.cell(row=1, column=i).column_letter
        worksheet.column_dimensions[column_letter].width = min(max_len, 50)

    if freeze_panes:
        # openpyxl is 1-indexed
        worksheet.freeze_panes = worksheet.cell(row=freeze_panes[0] + 1, column=freeze_panes[1] + 1)


def export_to_excel(
    run_dir: Path,
    output_path: Optional[Path] = None,
) -> Path:
    """
    Export a run directory to an Excel workbook.

    Args:
        run_dir: Path to run directory containing timeseries.csv / summary.json
        output_path: Optional custom output path (default: <run_dir>/results.xlsx)

    Returns:
        Path to created Excel file
    """
    run_dir = Path(run_dir)
    if output_path is None:
        output_path = run_dir / "results.xlsx"

    logger.info(f"Exporting backtest results to Excel: {output_path}")

    manifest_path = run_dir / "manifest.json"
    summary_path = run_dir / "summary.json"
    timeseries_path = run_dir / "timeseries.csv"

    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        # 1. Summary sheet
        summary_rows = []
        if manifest_path.exists():
            manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
            summary_rows.append(["Run ID", manifest.get("run_id", "N/A")])
            summary_rows.append(["Symbol", manifest.get("symbol", "N/A")])
            summary_rows.append(["Strategy", manifest.get("strategy_type", "N/A")])
            summary_rows.append(["Entry Date", manifest.get("entry_date", "N/A")])
            summary_rows.append(["End Date", manifest.get("end_date", "N/A")])
            summary_rows.append(["", ""])

        if summary_path.exists():
            summary = json.loads(summary_path.read_text(encoding="utf-8"))
            summary_rows.append(["=== Performance ===", ""])
            for key, label, fmt in SUMMARY_LABELS:
                if key in summary:
                    summary_rows.append([label, fmt.format(summary[key])])

        summary_df = pd.DataFrame(summary_rows, columns=["Metric", "Value"])
        summary_df.to_excel(writer, sheet_name="Summary", index=False)
        format_excel_sheet(writer, "Summary", summary_df)

        # 2. Timeseries sheet
        if timeseries_path.exists():
            ts_df = pd.read_csv(timeseries_path)
            for col in ["value", "pl", "drawdown"]:
                if col in ts_df.columns:
                    ts_df[col] = ts_df[col].round(2)
            ts_df = ts_df.rename(
                columns={"date": "Date", "value": "Position Value", "pl": "P/L", "drawdown": "Drawdown"}
            )
            ts_df.to_excel(writer, sheet_name="Timeseries", index=False)
            format_excel_sheet(writer, "Timeseries", ts_df)
            logger.info(f"Exported {len(ts_df)} timeseries rows to Excel")

    logger.info(f"Excel export complete: {output_path}")
    return output_path


def export_run_to_excel(run_id: str, runs_root: Path = Path("runs")) -> Path:
    """
    Export a specific run to Excel by run ID.

    Raises:
        FileNotFoundError: If runs_root/run_id does not exist
    """
    run_dir = Path(runs_root) / run_id

    if not run_dir.exists():
        raise FileNotFoundError(f"Run directory not found: {run_dir}")

    return export_to_excel(run_dir)
