# edgelabel/core/types.py
"""
Dataclasses for fit requests, results, fonts and rectangles.
Schema aligns with reporting.fit_to_dict.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import Literal

from edgelabel.core.config import DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE_PT

logger = logging.getLogger(__name__)


TruncationMode = Literal["none", "head", "tail"]


class TruncationStyle(IntEnum):
    """How overflow is split between the left and right text."""
    NONE = 0
    """No truncation; left and right text may overlap."""
    LEFT_TAIL = 1
    """All right text is shown; left text is tail truncated."""
    RIGHT_TAIL = 2
    """All left text is shown; right text is tail truncated."""
    RIGHT_HEAD = 3
    """All left text is shown; right text is head truncated."""
    BOTH_TAILS = 4
    """Both sides tail truncated by equal amounts."""
    BOTH_CENTER = 5
    """Equal truncation on the left tail and the right head."""


def _normalize_name(name: str) -> str:
    return "".join(ch for ch in name.lower() if ch.isalnum())


_STYLE_BY_NAME: dict[str, TruncationStyle] = {_normalize_name(s.name): s for s in TruncationStyle}


def parse_truncation_style(
    value: TruncationStyle | int | str | None,
    default: TruncationStyle = TruncationStyle.NONE,
) -> TruncationStyle:
    """
    Accept an enum member, its raw int, or a name ('bothCenter', 'both_center', '5').
    Unsupported values are logged and the default is returned.
    """
    if value is None:
        return default
    if isinstance(value, TruncationStyle):
        return value
    if isinstance(value, str):
        s = value.strip()
        if s.lstrip("-").isdigit():
            value = int(s)
        else:
            style = _STYLE_BY_NAME.get(_normalize_name(s))
            if style is None:
                logger.warning(f"Unsupported truncation style {value!r}; using {default.name}")
                return default
            return style
    try:
        return TruncationStyle(int(value))
    except (TypeError, ValueError):
        logger.warning(f"Unsupported truncation style {value!r}; using {default.name}")
        return default


@dataclass(frozen=True)
class FontDescriptor:
    """Font family and point size. Never mutated; shrinking yields a new instance."""
    family: str = DEFAULT_FONT_FAMILY
    size_pt: float = DEFAULT_FONT_SIZE_PT

    def with_size(self, size_pt: float) -> FontDescriptor:
        return replace(self, size_pt=size_pt)


@dataclass(frozen=True)
class Size:
    width: float
    height: float


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle; y grows downward from the container top."""
    x: float
    y: float
    width: float
    height: float

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height


@dataclass(frozen=True)
class FitRequest:
    """
    Everything needed for one fit. Missing text is treated as empty and a
    missing font resolves to the default font.
    """
    container_size: Size
    left_text: str | None = None
    right_text: str | None = None
    base_font: FontDescriptor | None = None
    minimum_spacing: float = 0.0
    auto_shrink: bool = False
    minimum_scale_factor: float = 0.0
    truncation_style: TruncationStyle = TruncationStyle.NONE

    def __post_init__(self) -> None:
        # Accept raw ints and names as well as enum members.
        object.__setattr__(self, "truncation_style", parse_truncation_style(self.truncation_style))

    @property
    def resolved_left_text(self) -> str:
        return self.left_text or ""

    @property
    def resolved_right_text(self) -> str:
        return self.right_text or ""

    @property
    def resolved_font(self) -> FontDescriptor:
        return self.base_font if self.base_font is not None else FontDescriptor()

    @property
    def resolved_spacing(self) -> float:
        return max(0.0, float(self.minimum_spacing))

    @property
    def shrink_enabled(self) -> bool:
        return self.auto_shrink and self.minimum_scale_factor > 0


@dataclass(frozen=True)
class FitResult:
    """
    Geometry and truncation directives for drawing both strings.
    missing_width is the overflow after shrinking and before it was apportioned.
    """
    left_rect: Rect
    right_rect: Rect
    left_truncation: TruncationMode
    right_truncation: TruncationMode
    effective_font: FontDescriptor
    missing_width: float = 0.0
    shrink_steps: int = 0
    warnings: tuple[str, ...] = field(default_factory=tuple)
