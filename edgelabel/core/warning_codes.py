"""
Structured warning codes attached to FitResult.warnings.
The fitter never raises on layout input; degraded outcomes are reported here.
"""

# Known warning keys (set by fitter.fit)
OVERLAP = "overlap"
SCALE_FLOOR_OVERSHOOT = "scale_floor_overshoot"
MIN_FONT_SIZE_REACHED = "min_font_size_reached"
SHRINK_STEP_CAP = "shrink_step_cap"
SIDE_COLLAPSED = "side_collapsed"

# User-facing messages (short, actionable)
USER_MESSAGES: dict[str, str] = {
    OVERLAP: "Left and right text overlap. Pick a truncation style or widen the label.",
    SCALE_FLOOR_OVERSHOOT: "Font shrank one step past the minimum scale factor before stopping.",
    MIN_FONT_SIZE_REACHED: "Font reached the minimum point size and could not shrink further.",
    SHRINK_STEP_CAP: "Shrinking stopped at the iteration limit. Check the text measurer.",
    SIDE_COLLAPSED: "One side has no room left and is fully truncated.",
}


def user_message(warning_key: str | None, fallback: str = "Something went wrong.") -> str:
    """Return a user-facing message for the given warning key."""
    if not warning_key:
        return fallback
    return USER_MESSAGES.get(warning_key, fallback)
