# edgelabel/core/render.py
"""
PNG rendering: label.png (Pillow, the drawn label) and debug.png (matplotlib
overlay of container and both layout rects).
"""

from __future__ import annotations

import math
import warnings
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from PIL import Image, ImageDraw

from edgelabel.core.config import (
    DEBUG_FIG_HEIGHT_PX,
    DEBUG_FIG_WIDTH_PX,
    RENDER_BACKGROUND,
    RENDER_FOREGROUND,
    RENDER_SCALE,
)
from edgelabel.core.text_metrics import PillowTextMeasurer, TextMeasurer, load_font
from edgelabel.core.truncate import elide_text
from edgelabel.core.types import FitRequest, FitResult, Rect


def visible_texts(
    request: FitRequest,
    result: FitResult,
    measurer: TextMeasurer,
) -> tuple[str, str]:
    """Left and right strings as they will be drawn, after truncation."""
    font = result.effective_font
    left = elide_text(request.resolved_left_text, result.left_rect.width, result.left_truncation, font, measurer)
    right = elide_text(request.resolved_right_text, result.right_rect.width, result.right_truncation, font, measurer)
    return left, right


def render_label_png(
    request: FitRequest,
    result: FitResult,
    output_path: str | Path,
    scale: int = RENDER_SCALE,
) -> tuple[str, str]:
    """
    Draw the label at scale px per pt. Left text is left aligned in its rect,
    right text right aligned in its rect, both on the rect's top edge.
    Elision is measured with Pillow, the same metrics the glyphs are drawn with.
    Returns the drawn (left, right) strings.
    """
    left_text, right_text = visible_texts(request, result, PillowTextMeasurer())
    w = max(1, int(math.ceil(request.container_size.width * scale)))
    h = max(1, int(math.ceil(request.container_size.height * scale)))
    img = Image.new("RGB", (w, h), RENDER_BACKGROUND)
    draw = ImageDraw.Draw(img)
    font = load_font(result.effective_font.with_size(result.effective_font.size_pt * scale))

    if left_text:
        rect = result.left_rect
        draw.text((rect.x * scale, rect.y * scale), left_text, font=font, fill=RENDER_FOREGROUND, anchor="la")
    if right_text:
        rect = result.right_rect
        draw.text((rect.max_x * scale, rect.y * scale), right_text, font=font, fill=RENDER_FOREGROUND, anchor="ra")
    img.save(output_path)
    return left_text, right_text


def _rect_xy(rect: Rect) -> np.ndarray:
    return np.array([
        (rect.x, rect.y),
        (rect.max_x, rect.y),
        (rect.max_x, rect.max_y),
        (rect.x, rect.max_y),
        (rect.x, rect.y),
    ])


def render_debug(
    request: FitRequest,
    result: FitResult,
    output_path: str | Path,
    width_px: int = DEBUG_FIG_WIDTH_PX,
    height_px: int = DEBUG_FIG_HEIGHT_PX,
) -> None:
    """Container outline, left and right rects, and spacing gap. y axis points down."""
    fig = plt.figure(figsize=(width_px / 100.0, height_px / 100.0), dpi=100, constrained_layout=False)
    ax = fig.add_axes([0.05, 0.2, 0.9, 0.7])
    container = Rect(0.0, 0.0, request.container_size.width, request.container_size.height)

    xy = _rect_xy(container)
    ax.plot(xy[:, 0], xy[:, 1], color="gray", linestyle="--", linewidth=1, label="container")
    xy = _rect_xy(result.left_rect)
    ax.fill(xy[:, 0], xy[:, 1], facecolor="tab:blue", alpha=0.4, edgecolor="tab:blue", label=f"left ({result.left_truncation})")
    xy = _rect_xy(result.right_rect)
    ax.fill(xy[:, 0], xy[:, 1], facecolor="tab:orange", alpha=0.4, edgecolor="tab:orange", label=f"right ({result.right_truncation})")

    pad = max(1.0, container.width * 0.02)
    ax.set_xlim(-pad, container.width + pad)
    top = min(0.0, result.left_rect.y, result.right_rect.y)
    ax.set_ylim(container.height + pad, top - pad)
    ax.set_title(f"{request.truncation_style.name}  font={result.effective_font.size_pt:.1f}pt", fontsize=9)
    leg = ax.legend(loc="upper center", bbox_to_anchor=(0.5, -0.1), ncol=3, fontsize=8)
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", message=".*constrained_layout.*", category=UserWarning)
        fig.savefig(output_path, dpi=100, facecolor="white", bbox_inches="tight", bbox_extra_artists=[leg])
    plt.close(fig)
