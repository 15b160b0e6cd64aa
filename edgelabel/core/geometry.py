# edgelabel/core/geometry.py
"""
Geometry helpers: Rect <-> shapely box, overlap, containment.
"""

from __future__ import annotations

from shapely.geometry import Point, Polygon, box

from edgelabel.core.config import FIT_TOLERANCE_PT
from edgelabel.core.types import Rect, Size


def rect_to_polygon(rect: Rect) -> Polygon:
    """Shapely box for a rect. Zero-width rects give an empty-area polygon."""
    return box(rect.x, rect.y, rect.max_x, rect.max_y)


def container_polygon(container: Size) -> Polygon:
    return box(0.0, 0.0, container.width, container.height)


def horizontal_overlap(a: Rect, b: Rect) -> float:
    """Width of the x-interval shared by a and b (0 if disjoint)."""
    return max(0.0, min(a.max_x, b.max_x) - max(a.x, b.x))


def rects_overlap(a: Rect, b: Rect, tolerance_pt: float = FIT_TOLERANCE_PT) -> bool:
    """True if the rects share more than tolerance_pt of width and have area in common."""
    if horizontal_overlap(a, b) <= tolerance_pt:
        return False
    return rect_to_polygon(a).intersection(rect_to_polygon(b)).area > 0


def rect_inside_container(
    rect: Rect,
    container: Size,
    tolerance_pt: float = FIT_TOLERANCE_PT,
) -> bool:
    """True if rect lies within the container, allowing tolerance_pt of slack."""
    outer = container_polygon(container).buffer(tolerance_pt, join_style=2)
    if rect.width <= 0 or rect.height <= 0:
        # Zero-area boxes are not valid polygons; test the two corners.
        return all(outer.covers(Point(x, y)) for x, y in ((rect.x, rect.y), (rect.max_x, rect.max_y)))
    return outer.covers(rect_to_polygon(rect))
