# tests/test_fitter.py
"""
Deterministic tests for the dual text fitter using the fixed-advance measurer
(advance 0.5 x size, line height 1.2 x size): at 12pt "Hello" is 30 x 14.4.
"""

from __future__ import annotations

import pytest

from edgelabel.core.fitter import (
    apportion_overflow,
    clamp_collapsed,
    compute_missing_width,
    fit,
    layout_rects,
    shrink_font,
    truncation_directives,
)
from edgelabel.core.text_metrics import FixedAdvanceMeasurer
from edgelabel.core.types import FitRequest, FontDescriptor, Size, TruncationStyle
from edgelabel.core.validate import validate_fit
from edgelabel.core.warning_codes import (
    MIN_FONT_SIZE_REACHED,
    OVERLAP,
    SCALE_FLOOR_OVERSHOOT,
    SHRINK_STEP_CAP,
    SIDE_COLLAPSED,
)

FONT = FontDescriptor("DejaVu Sans", 12.0)
MEASURER = FixedAdvanceMeasurer()


def _request(width: float, style: TruncationStyle = TruncationStyle.NONE, **kw) -> FitRequest:
    return FitRequest(
        container_size=Size(width, 20.0),
        left_text=kw.pop("left_text", "Hello"),
        right_text=kw.pop("right_text", "World"),
        base_font=kw.pop("base_font", FONT),
        truncation_style=style,
        **kw,
    )


class _ConstantMeasurer:
    """Ignores the font size; the pair never shrinks."""

    def measure(self, text, font):
        return Size(100.0, 10.0)


class _DegenerateMeasurer:
    def measure(self, text, font):
        return Size(-5.0, -1.0)


def test_wide_container_no_truncation() -> None:
    result = fit(_request(500.0), MEASURER)
    assert result.missing_width == 0.0
    assert result.effective_font == FONT
    assert result.left_rect.x == 0.0
    assert result.left_rect.width == pytest.approx(30.0)
    assert result.right_rect.width == pytest.approx(30.0)
    assert result.right_rect.x == pytest.approx(470.0)
    assert result.warnings == ()


def test_both_center_splits_overflow() -> None:
    result = fit(_request(40.0, TruncationStyle.BOTH_CENTER), MEASURER)
    assert result.missing_width == pytest.approx(20.0)
    assert result.left_rect.width == pytest.approx(20.0)
    assert result.right_rect.width == pytest.approx(20.0)
    assert result.left_truncation == "tail"
    assert result.right_truncation == "head"
    assert result.effective_font == FONT


def test_style_none_allows_overlap() -> None:
    result = fit(_request(40.0, TruncationStyle.NONE), MEASURER)
    assert result.left_rect.width == pytest.approx(30.0)
    assert result.right_rect.width == pytest.approx(30.0)
    assert result.right_rect.x == pytest.approx(10.0)
    assert result.left_rect.max_x > result.right_rect.x
    assert (result.left_truncation, result.right_truncation) == ("none", "none")
    assert OVERLAP in result.warnings


@pytest.mark.parametrize(
    "style, expected",
    [
        (TruncationStyle.NONE, ("none", "none")),
        (TruncationStyle.LEFT_TAIL, ("tail", "none")),
        (TruncationStyle.RIGHT_TAIL, ("none", "tail")),
        (TruncationStyle.RIGHT_HEAD, ("none", "head")),
        (TruncationStyle.BOTH_TAILS, ("tail", "tail")),
        (TruncationStyle.BOTH_CENTER, ("tail", "head")),
    ],
)
def test_truncation_directives_table(style: TruncationStyle, expected: tuple[str, str]) -> None:
    assert truncation_directives(style) == expected
    result = fit(_request(500.0, style), MEASURER)
    assert (result.left_truncation, result.right_truncation) == expected


@pytest.mark.parametrize(
    "style",
    [s for s in TruncationStyle if s != TruncationStyle.NONE],
)
def test_truncation_conserves_container_width(style: TruncationStyle) -> None:
    req = _request(40.0, style, minimum_spacing=4.0)
    result = fit(req, MEASURER)
    total = result.left_rect.width + result.right_rect.width + 4.0
    assert total == pytest.approx(40.0)
    assert result.right_rect.max_x == pytest.approx(40.0)


def test_apportion_overflow_per_style() -> None:
    assert apportion_overflow(30.0, 30.0, 10.0, TruncationStyle.BOTH_TAILS) == (25.0, 25.0)
    assert apportion_overflow(30.0, 30.0, 10.0, TruncationStyle.LEFT_TAIL) == (20.0, 30.0)
    assert apportion_overflow(30.0, 30.0, 10.0, TruncationStyle.RIGHT_HEAD) == (30.0, 20.0)
    assert apportion_overflow(30.0, 30.0, 10.0, TruncationStyle.RIGHT_TAIL) == (30.0, 20.0)
    assert apportion_overflow(30.0, 30.0, 10.0, TruncationStyle.NONE) == (30.0, 30.0)
    # No overflow: unchanged regardless of style
    assert apportion_overflow(30.0, 30.0, -5.0, TruncationStyle.BOTH_CENTER) == (30.0, 30.0)


def test_compute_missing_width() -> None:
    assert compute_missing_width(30.0, 30.0, 5.0, 60.0) == pytest.approx(5.0)
    assert compute_missing_width(30.0, 30.0, 0.0, 100.0) == pytest.approx(-40.0)


def test_layout_rects_bottom_aligned() -> None:
    left, right = layout_rects(Size(30.0, 14.4), Size(20.0, 12.0), Size(100.0, 20.0))
    assert left.x == 0.0
    assert left.y == pytest.approx(20.0 - 14.4)
    assert right.y == pytest.approx(8.0)
    assert right.x + right.width == pytest.approx(100.0)


def test_no_shrink_when_disabled() -> None:
    result = fit(_request(40.0, TruncationStyle.BOTH_TAILS, auto_shrink=False, minimum_scale_factor=0.5), MEASURER)
    assert result.effective_font == FONT
    assert result.shrink_steps == 0


def test_no_shrink_when_scale_factor_zero() -> None:
    result = fit(_request(40.0, TruncationStyle.BOTH_TAILS, auto_shrink=True, minimum_scale_factor=0.0), MEASURER)
    assert result.effective_font == FONT


def test_shrink_until_fits() -> None:
    # 10 glyphs at 0.5 x size fit 40pt at 8pt: 8 steps of 0.5pt
    result = fit(_request(40.0, TruncationStyle.BOTH_TAILS, auto_shrink=True, minimum_scale_factor=0.5), MEASURER)
    assert result.effective_font.size_pt == pytest.approx(8.0)
    assert result.effective_font.family == FONT.family
    assert result.shrink_steps == 8
    assert result.missing_width == 0.0
    assert result.left_rect.width + result.right_rect.width == pytest.approx(40.0)
    assert result.warnings == ()


def test_scale_floor_overshoots_by_one_step() -> None:
    # Floor height 0.9 * 14.4 = 12.96; 11.0pt -> 13.2 ok, 10.5pt -> 12.6 halts
    req = _request(40.0, TruncationStyle.BOTH_TAILS, auto_shrink=True, minimum_scale_factor=0.9)
    result = fit(req, MEASURER)
    assert result.effective_font.size_pt == pytest.approx(10.5)
    assert SCALE_FLOOR_OVERSHOOT in result.warnings
    original_height = 14.4
    final_height = result.left_rect.height
    assert final_height < 0.9 * original_height
    assert final_height >= 0.9 * original_height - 0.5 * 1.2
    # Remaining overflow is truncated: 52.5 - 40 split evenly
    assert result.missing_width == pytest.approx(12.5)
    assert result.left_rect.width == pytest.approx(20.0)


def test_shrink_stops_at_min_font_size() -> None:
    req = _request(
        1.0,
        TruncationStyle.BOTH_TAILS,
        base_font=FontDescriptor("DejaVu Sans", 3.0),
        auto_shrink=True,
        minimum_scale_factor=0.01,
    )
    result = fit(req, MEASURER)
    assert result.effective_font.size_pt == pytest.approx(1.0)
    assert result.shrink_steps == 4
    assert MIN_FONT_SIZE_REACHED in result.warnings


def test_shrink_step_cap_terminates() -> None:
    outcome = shrink_font(
        "a", "b", FONT, 0.0, 50.0, 0.5, _ConstantMeasurer(), max_shrink_steps=10,
    )
    assert outcome.steps == 10
    assert outcome.font.size_pt == pytest.approx(7.0)
    assert outcome.halt_reason == SHRINK_STEP_CAP


def test_side_collapsed_clamped_to_zero() -> None:
    req = _request(20.0, TruncationStyle.LEFT_TAIL, left_text="Hi")
    result = fit(req, MEASURER)
    assert result.left_rect.width == 0.0
    assert result.right_rect.width == pytest.approx(30.0)
    assert SIDE_COLLAPSED in result.warnings


def test_missing_texts_and_font_default() -> None:
    req = FitRequest(container_size=Size(100.0, 20.0))
    result = fit(req, MEASURER)
    assert result.left_rect.width == 0.0
    assert result.right_rect.width == 0.0
    assert result.right_rect.x == pytest.approx(100.0)
    assert result.effective_font == FontDescriptor()


def test_degenerate_measurer_does_not_raise() -> None:
    req = _request(40.0, TruncationStyle.BOTH_CENTER, auto_shrink=True, minimum_scale_factor=0.5)
    result = fit(req, _DegenerateMeasurer())
    assert result.effective_font == FONT
    assert result.left_rect.width >= 0.0


def test_fit_is_idempotent() -> None:
    req = _request(40.0, TruncationStyle.BOTH_CENTER, auto_shrink=True, minimum_scale_factor=0.9)
    assert fit(req, MEASURER) == fit(req, MEASURER)


def test_effective_font_never_grows() -> None:
    for width in (5.0, 25.0, 45.0, 60.0, 500.0):
        req = _request(width, TruncationStyle.BOTH_TAILS, auto_shrink=True, minimum_scale_factor=0.3)
        result = fit(req, MEASURER)
        assert result.effective_font.size_pt <= FONT.size_pt


@pytest.mark.parametrize("style", [TruncationStyle.BOTH_CENTER, TruncationStyle.BOTH_TAILS])
def test_both_sides_collapse_moves_shortfall_to_other_side(style: TruncationStyle) -> None:
    # Half of the 42pt overflow exceeds "Hi" (12pt); the rest comes off the right side
    req = _request(60.0, style, left_text="Hi", right_text="Wonderful world")
    result = fit(req, MEASURER)
    assert result.left_rect.width == 0.0
    assert result.right_rect.width == pytest.approx(60.0)
    assert result.right_rect.x == pytest.approx(0.0)
    assert result.left_rect.width + result.right_rect.width <= 60.0 + 1e-9
    assert SIDE_COLLAPSED in result.warnings
    assert validate_fit(req, result)[0] is True


def test_both_sides_collapse_on_right() -> None:
    req = _request(60.0, TruncationStyle.BOTH_TAILS, left_text="Wonderful world", right_text="Hi")
    result = fit(req, MEASURER)
    assert result.right_rect.width == 0.0
    assert result.left_rect.width == pytest.approx(60.0)
    assert result.right_rect.x == pytest.approx(60.0)
    assert validate_fit(req, result)[0] is True


def test_clamp_collapsed_single_side_keeps_other_whole() -> None:
    assert clamp_collapsed(-10.0, 30.0, TruncationStyle.LEFT_TAIL) == (0.0, 30.0)
    assert clamp_collapsed(-9.0, 69.0, TruncationStyle.BOTH_CENTER) == (0.0, 60.0)
    assert clamp_collapsed(69.0, -9.0, TruncationStyle.BOTH_TAILS) == (60.0, 0.0)


@pytest.mark.parametrize("raw, expected", [(5, TruncationStyle.BOTH_CENTER), ("rightHead", TruncationStyle.RIGHT_HEAD)])
def test_raw_style_values_are_normalized(raw, expected: TruncationStyle) -> None:
    req = _request(40.0, raw)
    assert req.truncation_style is expected
    result = fit(req, MEASURER)
    assert (result.left_truncation, result.right_truncation) == truncation_directives(expected)
    assert result.left_rect.width + result.right_rect.width == pytest.approx(40.0)


_SINGLE_SIDE = (TruncationStyle.LEFT_TAIL, TruncationStyle.RIGHT_TAIL, TruncationStyle.RIGHT_HEAD)

_EDGE_CASES = [
    # left, right, width, auto_shrink, minimum_scale_factor
    ("Hello", "World", 500.0, False, 0.0),
    ("Hello", "World", 60.0, False, 0.0),
    ("Hello", "World", 40.0, False, 0.0),
    ("Hello", "World", 40.0, True, 0.5),
    ("Hello", "World", 40.0, True, 0.9),
    ("Hello", "World", 1.0, True, 0.01),
    ("Hi", "Wonderful world", 60.0, False, 0.0),
    ("Wonderful world", "Hi", 60.0, False, 0.0),
    ("", "World", 20.0, False, 0.0),
    (None, None, 10.0, True, 0.5),
]


@pytest.mark.parametrize("style", [s for s in TruncationStyle if s != TruncationStyle.NONE])
@pytest.mark.parametrize("left, right, width, shrink, scale", _EDGE_CASES)
def test_fit_output_passes_validation(style, left, right, width, shrink, scale) -> None:
    req = FitRequest(
        container_size=Size(width, 20.0),
        left_text=left,
        right_text=right,
        base_font=FONT,
        auto_shrink=shrink,
        minimum_scale_factor=scale,
        truncation_style=style,
    )
    result = fit(req, MEASURER)
    ok, issues = validate_fit(req, result)
    if style in _SINGLE_SIDE and SIDE_COLLAPSED in result.warnings:
        # The untruncated side is kept whole and alone exceeds the container.
        assert "width_exceeded" in issues
        assert set(issues) <= {"width_exceeded", "left_outside_container", "right_outside_container"}
    else:
        assert ok is True, issues
