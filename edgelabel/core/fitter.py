# edgelabel/core/fitter.py
"""
Dual text fitter: place a left-justified and a right-justified string on one
line, shrinking a shared font and then truncating each side to fit.

Steps:
  1. Measure both strings at the base font; the taller one is the reference height.
  2. While auto-shrink is on and the pair overflows, drop the font by one step
     and re-measure. Stop once the line height falls below
     reference * minimum_scale_factor (checked after the step, so the final
     font may sit one step below the floor), at the minimum point size, or
     at the iteration cap.
  3. Overflow still left is split between the sides per TruncationStyle.
  4. Rects are bottom-aligned; left at x=0, right flush with the container.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from edgelabel.core.config import MAX_SHRINK_STEPS, MIN_FONT_SIZE_PT, SHRINK_STEP_PT
from edgelabel.core.text_metrics import TextMeasurer
from edgelabel.core.types import (
    FitRequest,
    FitResult,
    FontDescriptor,
    Rect,
    Size,
    TruncationMode,
    TruncationStyle,
)
from edgelabel.core.warning_codes import (
    MIN_FONT_SIZE_REACHED,
    OVERLAP,
    SCALE_FLOOR_OVERSHOOT,
    SHRINK_STEP_CAP,
    SIDE_COLLAPSED,
)

logger = logging.getLogger(__name__)


_DIRECTIVES: dict[TruncationStyle, tuple[TruncationMode, TruncationMode]] = {
    TruncationStyle.NONE: ("none", "none"),
    TruncationStyle.LEFT_TAIL: ("tail", "none"),
    TruncationStyle.RIGHT_TAIL: ("none", "tail"),
    TruncationStyle.RIGHT_HEAD: ("none", "head"),
    TruncationStyle.BOTH_TAILS: ("tail", "tail"),
    TruncationStyle.BOTH_CENTER: ("tail", "head"),
}


@dataclass(frozen=True)
class ShrinkOutcome:
    """One state of the shrink fold: font and both measured sizes."""
    font: FontDescriptor
    left: Size
    right: Size
    steps: int = 0
    halt_reason: str | None = None


def measure_pair(
    left_text: str,
    right_text: str,
    font: FontDescriptor,
    measurer: TextMeasurer,
) -> tuple[Size, Size]:
    """Natural sizes of both strings at one font."""
    return measurer.measure(left_text, font), measurer.measure(right_text, font)


def compute_missing_width(
    left_width: float,
    right_width: float,
    spacing: float,
    container_width: float,
) -> float:
    """Width that does not fit; <= 0 means both strings fit."""
    return spacing + left_width + right_width - container_width


def _overflows(state: ShrinkOutcome, spacing: float, container_width: float) -> bool:
    return compute_missing_width(state.left.width, state.right.width, spacing, container_width) > 0


def shrink_font(
    left_text: str,
    right_text: str,
    font: FontDescriptor,
    spacing: float,
    container_width: float,
    minimum_scale_factor: float,
    measurer: TextMeasurer,
    *,
    shrink_step_pt: float = SHRINK_STEP_PT,
    min_font_size_pt: float = MIN_FONT_SIZE_PT,
    max_shrink_steps: int = MAX_SHRINK_STEPS,
) -> ShrinkOutcome:
    """
    Reduce the font until the pair fits or a stop condition fires.
    halt_reason is a warning code when shrinking stopped before the pair fit
    (or overshot the scale floor); None otherwise.
    """
    left, right = measure_pair(left_text, right_text, font, measurer)
    floor_height = max(left.height, right.height) * minimum_scale_factor
    state = ShrinkOutcome(font=font, left=left, right=right)

    while _overflows(state, spacing, container_width):
        if state.steps >= max_shrink_steps:
            logger.warning("Shrink stopped at step cap (%d) at %.2fpt", max_shrink_steps, state.font.size_pt)
            return replace(state, halt_reason=SHRINK_STEP_CAP)
        next_size = state.font.size_pt - shrink_step_pt
        if next_size < min_font_size_pt:
            logger.info("Shrink stopped at minimum font size (%.2fpt)", state.font.size_pt)
            return replace(state, halt_reason=MIN_FONT_SIZE_REACHED)

        next_font = state.font.with_size(next_size)
        left, right = measure_pair(left_text, right_text, next_font, measurer)
        state = ShrinkOutcome(font=next_font, left=left, right=right, steps=state.steps + 1)
        logger.debug(
            "Shrink step %d: %.2fpt, widths=(%.2f, %.2f) container=%.2f",
            state.steps, next_size, left.width, right.width, container_width,
        )
        if max(left.height, right.height) < floor_height:
            return replace(state, halt_reason=SCALE_FLOOR_OVERSHOOT)
    return state


def apportion_overflow(
    left_width: float,
    right_width: float,
    missing_width: float,
    style: TruncationStyle,
) -> tuple[float, float]:
    """
    Subtract overflow from the layout widths per style. Measured sizes are not
    re-measured; the renderer cuts the text through its truncation mode.
    """
    if missing_width <= 0:
        return left_width, right_width
    if style in (TruncationStyle.BOTH_CENTER, TruncationStyle.BOTH_TAILS):
        return left_width - missing_width * 0.5, right_width - missing_width * 0.5
    if style == TruncationStyle.LEFT_TAIL:
        return left_width - missing_width, right_width
    if style in (TruncationStyle.RIGHT_HEAD, TruncationStyle.RIGHT_TAIL):
        return left_width, right_width - missing_width
    return left_width, right_width


def clamp_collapsed(
    left_width: float,
    right_width: float,
    style: TruncationStyle,
) -> tuple[float, float]:
    """
    Clamp apportioned widths at 0. For BOTH_CENTER and BOTH_TAILS the share a
    collapsed side could not absorb is taken from the other side; single-side
    styles keep the untruncated side whole.
    """
    if style in (TruncationStyle.BOTH_CENTER, TruncationStyle.BOTH_TAILS):
        if left_width < 0:
            left_width, right_width = 0.0, right_width + left_width
        elif right_width < 0:
            left_width, right_width = left_width + right_width, 0.0
    return max(0.0, left_width), max(0.0, right_width)


def truncation_directives(style: TruncationStyle) -> tuple[TruncationMode, TruncationMode]:
    """(left, right) truncation mode for a style."""
    return _DIRECTIVES.get(style, ("none", "none"))


def layout_rects(left: Size, right: Size, container: Size) -> tuple[Rect, Rect]:
    """Bottom-aligned rects: left at x=0, right flush with the container's right edge."""
    left_rect = Rect(0.0, container.height - left.height, left.width, left.height)
    right_rect = Rect(
        container.width - right.width,
        container.height - right.height,
        right.width,
        right.height,
    )
    return left_rect, right_rect


def fit(
    request: FitRequest,
    measurer: TextMeasurer,
    *,
    shrink_step_pt: float = SHRINK_STEP_PT,
    min_font_size_pt: float = MIN_FONT_SIZE_PT,
    max_shrink_steps: int = MAX_SHRINK_STEPS,
) -> FitResult:
    """
    Fit both strings into request.container_size. Pure: same request and
    measurer give an equal FitResult. Never raises on layout input.
    """
    left_text = request.resolved_left_text
    right_text = request.resolved_right_text
    spacing = request.resolved_spacing
    container = request.container_size
    style = request.truncation_style
    warnings: list[str] = []

    if request.shrink_enabled:
        state = shrink_font(
            left_text,
            right_text,
            request.resolved_font,
            spacing,
            container.width,
            request.minimum_scale_factor,
            measurer,
            shrink_step_pt=shrink_step_pt,
            min_font_size_pt=min_font_size_pt,
            max_shrink_steps=max_shrink_steps,
        )
        if state.halt_reason:
            warnings.append(state.halt_reason)
    else:
        left, right = measure_pair(left_text, right_text, request.resolved_font, measurer)
        state = ShrinkOutcome(font=request.resolved_font, left=left, right=right)

    missing = compute_missing_width(state.left.width, state.right.width, spacing, container.width)
    left_w, right_w = apportion_overflow(state.left.width, state.right.width, missing, style)
    if missing > 0 and style == TruncationStyle.NONE:
        warnings.append(OVERLAP)
    if left_w < 0 or right_w < 0:
        warnings.append(SIDE_COLLAPSED)
        left_w, right_w = clamp_collapsed(left_w, right_w, style)

    left_rect, right_rect = layout_rects(
        Size(left_w, state.left.height),
        Size(right_w, state.right.height),
        container,
    )
    left_mode, right_mode = truncation_directives(style)
    if missing > 0:
        logger.debug(
            "Overflow %.2fpt apportioned as %s: widths=(%.2f, %.2f)", missing, style.name, left_w, right_w
        )

    return FitResult(
        left_rect=left_rect,
        right_rect=right_rect,
        left_truncation=left_mode,
        right_truncation=right_mode,
        effective_font=state.font,
        missing_width=max(0.0, missing),
        shrink_steps=state.steps,
        warnings=tuple(warnings),
    )
