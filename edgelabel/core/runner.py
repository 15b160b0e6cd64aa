# edgelabel/core/runner.py
"""
CLI entrypoint: fit one left/right pair, write fit.json, render label.png and debug.png.
Batch mode fits every row of a manifest instead.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from edgelabel.core.batch import run_batch
from edgelabel.core.config import (
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE_PT,
    DEFAULT_HEIGHT_RATIO,
    LOG_LEVEL,
    REPORTS_DIR,
)
from edgelabel.core.fitter import fit
from edgelabel.core.render import render_debug, render_label_png
from edgelabel.core.reporting import (
    ensure_report_dir,
    fit_to_dict,
    write_fit_json,
    write_run_metadata_json,
)
from edgelabel.core.text_metrics import FixedAdvanceMeasurer, PillowTextMeasurer, TextMeasurer
from edgelabel.core.types import FitRequest, FontDescriptor, Size, TruncationStyle, parse_truncation_style
from edgelabel.core.warning_codes import user_message

logger = logging.getLogger(__name__)

_STYLE_CHOICES = [s.name.lower() for s in TruncationStyle]


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Fit edge-justified left/right text into one line.")
    p.add_argument("--left", type=str, default="", help="Left-justified text")
    p.add_argument("--right", type=str, default="", help="Right-justified text")
    p.add_argument("--width", type=float, default=200.0, help="Container width (pt)")
    p.add_argument("--height", type=float, default=None, help="Container height (pt); default 1.5 x font size")
    p.add_argument("--font-family", type=str, default=DEFAULT_FONT_FAMILY, dest="font_family", help="Font family")
    p.add_argument("--font-size-pt", type=float, default=DEFAULT_FONT_SIZE_PT, dest="font_size_pt", help="Font size (pt)")
    p.add_argument("--spacing", type=float, default=0.0, help="Minimum spacing between the two texts (pt)")
    p.add_argument("--auto-shrink", action="store_true", dest="auto_shrink", help="Shrink font before truncating")
    p.add_argument("--min-scale", type=float, default=0.0, dest="min_scale", help="Minimum scale factor (0 disables shrink)")
    p.add_argument("--style", type=str, default="none", help=f"Truncation style: {', '.join(_STYLE_CHOICES)} or 0-5")
    p.add_argument("--measurer", choices=("pillow", "fixed"), default="pillow", help="Text measurer for fitting; label.png is always drawn and elided with Pillow")
    p.add_argument("--run-name", type=str, default="run", dest="run_name", help="Reports subdir name")
    p.add_argument("--output-dir", type=str, default=REPORTS_DIR, dest="output_dir", help="Output directory (repo-relative)")
    p.add_argument("--repo-root", type=str, default=None, dest="repo_root", help="Repo root (default: cwd)")
    p.add_argument("--no-render", action="store_true", dest="no_render", help="Skip PNG output")
    p.add_argument("--print", action="store_true", dest="print_json", help="Print fit.json to stdout")
    p.add_argument("--batch-manifest", type=str, default=None, dest="batch_manifest", help="Batch mode: CSV/JSON manifest path")
    p.add_argument("--batch-limit", type=int, default=None, dest="batch_limit", help="Max rows in batch")
    return p.parse_args(argv)


def _make_measurer(name: str) -> TextMeasurer:
    return FixedAdvanceMeasurer() if name == "fixed" else PillowTextMeasurer()


def build_request(args: argparse.Namespace) -> FitRequest:
    """FitRequest from parsed CLI arguments."""
    height = args.height if args.height is not None else args.font_size_pt * DEFAULT_HEIGHT_RATIO
    return FitRequest(
        container_size=Size(args.width, height),
        left_text=args.left,
        right_text=args.right,
        base_font=FontDescriptor(args.font_family, args.font_size_pt),
        minimum_spacing=args.spacing,
        auto_shrink=args.auto_shrink,
        minimum_scale_factor=args.min_scale,
        truncation_style=parse_truncation_style(args.style),
    )


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
    args = _parse_args(argv)
    repo_root = Path(args.repo_root).resolve() if args.repo_root else Path.cwd().resolve()
    measurer = _make_measurer(args.measurer)

    if args.batch_manifest:
        manifest = Path(args.batch_manifest)
        if not manifest.is_absolute():
            manifest = repo_root / manifest
        out = run_batch(
            args.run_name,
            manifest,
            repo_root,
            measurer=measurer,
            limit=args.batch_limit,
            output_dir=args.output_dir,
        )
        print(f"Batch report: {out}")
        return

    request = build_request(args)
    result = fit(request, measurer)
    for key in result.warnings:
        logger.warning(user_message(key))

    report_dir = ensure_report_dir(repo_root, args.run_name, output_dir=args.output_dir)
    write_fit_json(report_dir, request, result)
    write_run_metadata_json(report_dir, args.run_name, request, args.measurer)
    if not args.no_render:
        left, right = render_label_png(request, result, report_dir / "label.png")
        logger.info(f"Drew {left!r} | {right!r} at {result.effective_font.size_pt:.1f}pt")
        render_debug(request, result, report_dir / "debug.png")
    if args.print_json:
        print(json.dumps(fit_to_dict(request, result), indent=2))
    else:
        print(f"Report: {report_dir}")


if __name__ == "__main__":
    main()
