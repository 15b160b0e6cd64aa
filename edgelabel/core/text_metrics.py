# edgelabel/core/text_metrics.py
"""
Measure natural single-line text size in pt. 1 pt = 1 layout unit.
PillowTextMeasurer uses real font files; FixedAdvanceMeasurer is a
deterministic model for headless hosts and tests.
"""

from __future__ import annotations

import warnings
from functools import lru_cache
from typing import Protocol

from edgelabel.core.config import FIXED_ADVANCE_RATIO, FIXED_LINE_HEIGHT_RATIO
from edgelabel.core.types import FontDescriptor, Size

_font_warning_emitted: set[str] = set()


class TextMeasurer(Protocol):
    def measure(self, text: str, font: FontDescriptor) -> Size:
        """Natural (unclipped) size of one line of text at the given font."""
        ...


@lru_cache(maxsize=256)
def _load_font(font_family: str, font_size_pt: float):
    """Load PIL ImageFont; fallback with warning if font not found."""
    from PIL import ImageFont

    size = max(1.0, float(font_size_pt))
    candidates = [
        font_family + ".ttf",
        font_family.replace(" ", "") + ".ttf",
        font_family.replace(" ", "-") + ".ttf",
        "DejaVuSans.ttf",
        "arial.ttf",
        "Arial.ttf",
    ]
    for name in candidates:
        try:
            return ImageFont.truetype(name, size=size)
        except (OSError, IOError):
            continue
    if font_family not in _font_warning_emitted:
        _font_warning_emitted.add(font_family)
        warnings.warn(f"Font not found: {font_family!r}; using default.", UserWarning)
    return ImageFont.load_default(size=size)


def load_font(font: FontDescriptor):
    """Realize a FontDescriptor as a Pillow font (cached per family and size)."""
    return _load_font(font.family, float(font.size_pt))


def measure_text_pt(text: str, font_family: str, font_size_pt: float) -> tuple[float, float]:
    """
    Return (width_pt, height_pt). Height is the font's line height
    (ascent + descent) so empty and non-empty strings share a baseline.
    """
    from PIL import Image, ImageDraw

    font = _load_font(font_family, float(font_size_pt))
    img = Image.new("RGB", (1, 1))
    draw = ImageDraw.Draw(img)
    w = float(draw.textlength(text, font=font)) if text else 0.0
    if hasattr(font, "getmetrics"):
        ascent, descent = font.getmetrics()
        h = float(ascent + descent)
    else:
        bbox = draw.textbbox((0, 0), text or " ", font=font)
        h = float(bbox[3] - bbox[1])
    return (w, h)


class PillowTextMeasurer:
    """TextMeasurer backed by Pillow. At 72 DPI, 1 pt = 1 px."""

    def measure(self, text: str, font: FontDescriptor) -> Size:
        w, h = measure_text_pt(text, font.family, font.size_pt)
        return Size(w, h)


class FixedAdvanceMeasurer:
    """
    Every glyph advances advance_ratio * size_pt; line height is
    line_height_ratio * size_pt regardless of content.
    """

    def __init__(
        self,
        advance_ratio: float = FIXED_ADVANCE_RATIO,
        line_height_ratio: float = FIXED_LINE_HEIGHT_RATIO,
    ) -> None:
        self.advance_ratio = advance_ratio
        self.line_height_ratio = line_height_ratio

    def measure(self, text: str, font: FontDescriptor) -> Size:
        return Size(
            len(text) * self.advance_ratio * font.size_pt,
            self.line_height_ratio * font.size_pt,
        )
