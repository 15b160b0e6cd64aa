# edgelabel/core/batch.py
"""
Batch mode: fit every row of a CSV or JSON manifest.
Output: reports/batch_<run_name>/index.csv and fits.json.

Manifest columns (CSV header or JSON object keys): left_text, right_text,
container_width, container_height, and optionally font_family, font_size_pt,
minimum_spacing, auto_shrink, minimum_scale_factor, truncation_style.
"""

from __future__ import annotations

import csv
import json
import logging
import time
from pathlib import Path

from edgelabel.core.config import DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE_PT, DEFAULT_HEIGHT_RATIO, REPORTS_DIR
from edgelabel.core.fitter import fit
from edgelabel.core.reporting import ensure_report_dir, fit_to_dict
from edgelabel.core.text_metrics import PillowTextMeasurer, TextMeasurer
from edgelabel.core.types import FitRequest, FontDescriptor, Size, parse_truncation_style
from edgelabel.core.validate import validate_fit

logger = logging.getLogger(__name__)

INDEX_FIELDS = [
    "case_id", "left_text", "right_text", "container_width", "truncation_style",
    "font_size_pt", "missing_width_pt", "left_truncation", "right_truncation",
    "valid", "warnings", "duration_ms",
]


def _as_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() in ("1", "true", "yes", "y")


def _as_float(value: object, default: float) -> float:
    if value is None or str(value).strip() == "":
        return default
    return float(value)


def load_manifest(path: str | Path) -> list[dict]:
    """Read manifest rows from .csv or .json (list of objects)."""
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Manifest not found: {p}")
    if p.suffix.lower() == ".json":
        data = json.loads(p.read_text(encoding="utf-8"))
        if not isinstance(data, list):
            raise ValueError(f"JSON manifest must be a list of objects: {p}")
        return [dict(row) for row in data]
    with p.open(newline="", encoding="utf-8") as f:
        return list(csv.DictReader(f))


def request_from_row(row: dict) -> FitRequest:
    """Build a FitRequest from one manifest row; missing optional fields use defaults."""
    font = FontDescriptor(
        family=(row.get("font_family") or DEFAULT_FONT_FAMILY),
        size_pt=_as_float(row.get("font_size_pt"), DEFAULT_FONT_SIZE_PT),
    )
    return FitRequest(
        container_size=Size(
            _as_float(row.get("container_width"), 0.0),
            _as_float(row.get("container_height"), font.size_pt * DEFAULT_HEIGHT_RATIO),
        ),
        left_text=row.get("left_text"),
        right_text=row.get("right_text"),
        base_font=font,
        minimum_spacing=_as_float(row.get("minimum_spacing"), 0.0),
        auto_shrink=_as_bool(row.get("auto_shrink")),
        minimum_scale_factor=_as_float(row.get("minimum_scale_factor"), 0.0),
        truncation_style=parse_truncation_style(row.get("truncation_style")),
    )


def run_batch(
    run_name: str,
    manifest: str | Path,
    repo_root: Path,
    measurer: TextMeasurer | None = None,
    limit: int | None = None,
    output_dir: str = REPORTS_DIR,
) -> Path:
    """Fit each manifest row. Returns path to the batch report dir."""
    measurer = measurer or PillowTextMeasurer()
    rows = load_manifest(manifest)[: (limit or None)]
    batch_dir = ensure_report_dir(repo_root, f"batch_{run_name}", output_dir=output_dir)
    index_rows: list[dict] = []
    fits: list[dict] = []

    for i, row in enumerate(rows):
        case_id = f"case_{i:04d}"
        t0 = time.perf_counter()
        try:
            request = request_from_row(row)
        except ValueError as e:
            logger.warning(f"{case_id}: bad manifest row: {e}")
            index_rows.append({
                "case_id": case_id, "left_text": row.get("left_text", ""), "right_text": row.get("right_text", ""),
                "container_width": row.get("container_width", ""), "truncation_style": row.get("truncation_style", ""),
                "font_size_pt": "", "missing_width_pt": "", "left_truncation": "", "right_truncation": "",
                "valid": False, "warnings": "bad_row",
                "duration_ms": int((time.perf_counter() - t0) * 1000),
            })
            continue
        result = fit(request, measurer)
        ok, issues = validate_fit(request, result)
        data = fit_to_dict(request, result)
        data["case_id"] = case_id
        data["issues"] = issues
        fits.append(data)
        index_rows.append({
            "case_id": case_id,
            "left_text": request.resolved_left_text,
            "right_text": request.resolved_right_text,
            "container_width": request.container_size.width,
            "truncation_style": request.truncation_style.name.lower(),
            "font_size_pt": result.effective_font.size_pt,
            "missing_width_pt": round(result.missing_width, 4),
            "left_truncation": result.left_truncation,
            "right_truncation": result.right_truncation,
            "valid": ok,
            "warnings": ";".join(result.warnings),
            "duration_ms": int((time.perf_counter() - t0) * 1000),
        })

    with (batch_dir / "index.csv").open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=INDEX_FIELDS)
        writer.writeheader()
        writer.writerows(index_rows)
    (batch_dir / "fits.json").write_text(json.dumps(fits, indent=2), encoding="utf-8")
    logger.info(f"Batch {run_name}: {len(fits)}/{len(rows)} rows fitted -> {batch_dir}")
    return batch_dir
