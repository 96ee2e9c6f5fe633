"""Export an in-memory grid to files.

CSV is written Excel-compatible (UTF-8 with BOM). The HTML page is the
printable rendition of the table; open it in a browser to print or save as
PDF.
"""

from __future__ import annotations

import csv
import html
import os
import re
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from engine.grid import Grid
from engine.replace import placeholder_column
from helpers.logging_config import get_logger

logger = get_logger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"

HTML_STYLE = (
    "body { font-family: Arial, sans-serif; margin: 20px; }"
    "h1 { color: #333; text-align: center; margin-bottom: 20px; }"
    "table { border-collapse: collapse; width: 100%; margin: 0 auto; }"
    "th, td { border: 1px solid #ddd; padding: 8px; text-align: left; }"
    "th { background-color: #f2f2f2; font-weight: bold; }"
    "tr:nth-child(even) { background-color: #f9f9f9; }"
    ".info { font-size: 12px; color: #666; text-align: center; margin-top: 20px; }"
)


def header_labels(grid: Grid) -> List[str]:
    """Header labels with missing ones replaced by Column_<n>."""
    return [label or placeholder_column(i) for i, label in enumerate(grid.header)]


def export_grid_to_csv(grid: Grid, path: str) -> str:
    """Write ``grid`` as CSV. Fields with commas, quotes or newlines are quoted."""
    with open(path, "w", encoding="utf-8-sig", newline="") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerow(header_labels(grid))
        writer.writerows(grid.padded_rows())
    logger.info(f"Exported {grid.row_count} rows to CSV: {path}")
    return path


def generate_html_table(table: str, grid: Grid, now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    parts = [f"<html><head><meta charset='utf-8'><style>{HTML_STYLE}</style></head><body>"]
    parts.append(f"<h1>Table: {html.escape(table)}</h1>")
    parts.append("<table>")
    parts.append("<tr>" + "".join(f"<th>{html.escape(h)}</th>" for h in header_labels(grid)) + "</tr>")
    for row in grid.padded_rows():
        parts.append("<tr>" + "".join(f"<td>{html.escape(cell)}</td>" for cell in row) + "</tr>")
    parts.append("</table>")
    parts.append(
        f"<div class='info'>Exported on {now.strftime('%Y-%m-%d %H:%M:%S')} | Total rows: {grid.row_count}</div>"
    )
    parts.append("</body></html>")
    return "".join(parts)


def export_grid_to_html(grid: Grid, table: str, path: str, now: Optional[datetime] = None) -> str:
    Path(path).write_text(generate_html_table(table, grid, now), encoding="utf-8")
    logger.info(f"Exported {grid.row_count} rows to HTML: {path}")
    return path


def export_basename(table: str, now: Optional[datetime] = None) -> str:
    """``<table>_<YYYY-MM-DD_HH-MM-SS>`` with characters unsafe in file names replaced."""
    now = now or datetime.now()
    safe = re.sub(r'[\\/:*?"<>|\s]+', "_", table).strip("_") or "table"
    return f"{safe}_{now.strftime(TIMESTAMP_FORMAT)}"


def default_export_dir() -> str:
    downloads = Path.home() / "Downloads"
    if downloads.is_dir():
        return str(downloads)
    return str(Path.home())


def export_table(grid: Grid, table: str, export_dir: Optional[str] = None, now: Optional[datetime] = None) -> Dict[str, str]:
    """Write both the CSV and the HTML export into ``export_dir``.

    Returns:
        {"csv": path, "html": path}
    """
    export_dir = export_dir or default_export_dir()
    os.makedirs(export_dir, exist_ok=True)
    base = os.path.join(export_dir, export_basename(table, now))
    return {
        "csv": export_grid_to_csv(grid, base + ".csv"),
        "html": export_grid_to_html(grid, table, base + ".html", now),
    }
