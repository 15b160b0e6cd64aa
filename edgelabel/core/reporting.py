# edgelabel/core/reporting.py
"""
Create reports/<run_name>/ and write fit.json (schema 1.0) and run_metadata.json.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from edgelabel.core.config import (
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE_PT,
    FIT_TOLERANCE_PT,
    MAX_SHRINK_STEPS,
    MIN_FONT_SIZE_PT,
    REPORTS_DIR,
    SHRINK_STEP_PT,
)
from edgelabel.core.types import FitRequest, FitResult, Rect

SCHEMA_VERSION = "1.0"


def _rect_dict(rect: Rect) -> dict:
    return {"x": rect.x, "y": rect.y, "width": rect.width, "height": rect.height}


def request_to_dict(request: FitRequest) -> dict:
    font = request.resolved_font
    return {
        "left_text": request.resolved_left_text,
        "right_text": request.resolved_right_text,
        "font_family": font.family,
        "font_size_pt": font.size_pt,
        "container": {"width": request.container_size.width, "height": request.container_size.height},
        "minimum_spacing": request.resolved_spacing,
        "auto_shrink": request.auto_shrink,
        "minimum_scale_factor": request.minimum_scale_factor,
        "truncation_style": request.truncation_style.name.lower(),
    }


def fit_to_dict(request: FitRequest, result: FitResult) -> dict:
    """Exact structure for fit.json."""
    return {
        "schema_version": SCHEMA_VERSION,
        "request": request_to_dict(request),
        "result": {
            "font_family": result.effective_font.family,
            "font_size_pt": result.effective_font.size_pt,
            "left_rect": _rect_dict(result.left_rect),
            "right_rect": _rect_dict(result.right_rect),
            "left_truncation": result.left_truncation,
            "right_truncation": result.right_truncation,
        },
        "metrics": {
            "missing_width_pt": result.missing_width,
            "shrink_steps": result.shrink_steps,
            "scale": result.effective_font.size_pt / max(1e-9, request.resolved_font.size_pt),
        },
        "warnings": list(result.warnings),
    }


def run_metadata_dict(run_name: str, request: FitRequest, measurer_name: str) -> dict:
    """Timestamp and config snapshot for run_metadata.json."""
    return {
        "run_name": run_name,
        "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        "measurer": measurer_name,
        "request": request_to_dict(request),
        "config": {
            "SHRINK_STEP_PT": SHRINK_STEP_PT,
            "MIN_FONT_SIZE_PT": MIN_FONT_SIZE_PT,
            "MAX_SHRINK_STEPS": MAX_SHRINK_STEPS,
            "FIT_TOLERANCE_PT": FIT_TOLERANCE_PT,
            "DEFAULT_FONT_FAMILY": DEFAULT_FONT_FAMILY,
            "DEFAULT_FONT_SIZE_PT": DEFAULT_FONT_SIZE_PT,
        },
    }


def ensure_report_dir(
    repo_root: Path,
    run_name: str,
    output_dir: str | None = None,
) -> Path:
    """Create output_dir/<run_name>/ under repo_root; return path. Default output_dir from config."""
    base = output_dir if output_dir is not None else REPORTS_DIR
    out = (repo_root / base).resolve() / run_name
    out.mkdir(parents=True, exist_ok=True)
    return out


def write_fit_json(report_dir: Path, request: FitRequest, result: FitResult) -> Path:
    """Write fit.json to report_dir. Returns path to file."""
    path = report_dir / "fit.json"
    path.write_text(json.dumps(fit_to_dict(request, result), indent=2), encoding="utf-8")
    return path


def write_run_metadata_json(
    report_dir: Path,
    run_name: str,
    request: FitRequest,
    measurer_name: str,
) -> Path:
    """Write run_metadata.json to report_dir."""
    path = report_dir / "run_metadata.json"
    data = run_metadata_dict(run_name, request, measurer_name)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path
