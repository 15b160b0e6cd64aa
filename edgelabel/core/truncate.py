# edgelabel/core/truncate.py
"""
Apply a truncation directive to text for a given layout width.
This is the host-side counterpart of the fitter's directives: 'tail' keeps
the start and ends with an ellipsis, 'head' keeps the end and starts with one.
"""

from __future__ import annotations

from edgelabel.core.config import ELLIPSIS, FIT_TOLERANCE_PT
from edgelabel.core.text_metrics import TextMeasurer
from edgelabel.core.types import FontDescriptor, TruncationMode


def _fits(text: str, width: float, font: FontDescriptor, measurer: TextMeasurer) -> bool:
    return measurer.measure(text, font).width <= width + FIT_TOLERANCE_PT


def elide_text(
    text: str,
    width: float,
    mode: TruncationMode,
    font: FontDescriptor,
    measurer: TextMeasurer,
    ellipsis: str = ELLIPSIS,
) -> str:
    """
    Longest elided form of text whose measured width fits in width.
    Mode 'none' returns text unchanged (the drawer clips or overlaps).
    Returns '' if not even the ellipsis fits.
    """
    if mode == "none" or not text or _fits(text, width, font, measurer):
        return text
    if not _fits(ellipsis, width, font, measurer):
        return ""

    def candidate(n: int) -> str:
        if mode == "tail":
            return text[:n] + ellipsis
        return ellipsis + text[len(text) - n:]

    # Binary search on kept character count; widths grow with n.
    lo, hi = 0, len(text) - 1
    while lo < hi:
        mid = (lo + hi + 1) // 2
        if _fits(candidate(mid), width, font, measurer):
            lo = mid
        else:
            hi = mid - 1
    return candidate(lo)
