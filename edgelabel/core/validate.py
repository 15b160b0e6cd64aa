# edgelabel/core/validate.py
"""
Check a FitResult against the layout invariants. Return (ok, issues).
"""

from __future__ import annotations

from edgelabel.core.config import FIT_TOLERANCE_PT
from edgelabel.core.geometry import rect_inside_container, rects_overlap
from edgelabel.core.types import FitRequest, FitResult, TruncationStyle


def validate_fit(
    request: FitRequest,
    result: FitResult,
    tolerance_pt: float = FIT_TOLERANCE_PT,
) -> tuple[bool, list[str]]:
    """
    Issues are short strings naming the broken invariant. Overlap is only an
    issue when a truncation style is set; TruncationStyle.NONE permits it.
    """
    issues: list[str] = []
    container = request.container_size
    left, right = result.left_rect, result.right_rect

    if result.effective_font.size_pt > request.resolved_font.size_pt + tolerance_pt:
        issues.append("font_grew")
    if not request.shrink_enabled and result.effective_font != request.resolved_font:
        issues.append("font_changed_without_shrink")
    if abs(left.x) > tolerance_pt:
        issues.append("left_not_at_origin")
    if abs(right.max_x - container.width) > tolerance_pt:
        issues.append("right_not_flush")
    for name, rect in (("left", left), ("right", right)):
        if abs(rect.max_y - container.height) > tolerance_pt:
            issues.append(f"{name}_not_bottom_aligned")

    if request.truncation_style != TruncationStyle.NONE:
        used = left.width + right.width + request.resolved_spacing
        if used > container.width + tolerance_pt:
            issues.append("width_exceeded")
        if rects_overlap(left, right, tolerance_pt=tolerance_pt):
            issues.append("rects_overlap")
        # Heights can exceed a short container; only horizontal containment is checked.
        if container.height >= max(left.height, right.height):
            for name, rect in (("left", left), ("right", right)):
                if not rect_inside_container(rect, container, tolerance_pt=tolerance_pt):
                    issues.append(f"{name}_outside_container")

    return (not issues), issues
