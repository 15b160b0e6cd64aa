# edgelabel/core/config.py
"""
Central configuration for edge-justified label fitting.
All tunable values live here; no magic numbers in other modules.
"""

from __future__ import annotations
import os

# ----- Paths (repo-relative) -----
REPORTS_DIR: str = "reports"

# ----- Default font -----
DEFAULT_FONT_FAMILY: str = "DejaVu Sans"
"""Family used when a request carries no font."""

DEFAULT_FONT_SIZE_PT: float = 12.0
"""Point size used when a request carries no font."""

DEFAULT_HEIGHT_RATIO: float = 1.5
"""Container height as a multiple of the font size when none is given."""

# ----- Shrink loop -----
SHRINK_STEP_PT: float = 0.5
"""Point size removed from the working font per shrink step."""

MIN_FONT_SIZE_PT: float = 1.0
"""Hard floor for the working font; the loop stops rather than go below it."""

MAX_SHRINK_STEPS: int = 400
"""Upper bound on shrink iterations, independent of the measurer."""

# ----- Tolerances -----
FIT_TOLERANCE_PT: float = 1e-6
"""Tolerance (pt) for width comparisons when validating a fit."""

# ----- Fixed-advance measurer -----
FIXED_ADVANCE_RATIO: float = 0.5
"""Glyph advance as a fraction of the point size."""

FIXED_LINE_HEIGHT_RATIO: float = 1.2
"""Line height as a fraction of the point size."""

# ----- Truncation -----
ELLIPSIS: str = "…"

# ----- Rendering -----
RENDER_SCALE: int = 2
"""Pixels per pt in rendered PNGs."""

RENDER_BACKGROUND: str = "white"
RENDER_FOREGROUND: str = "black"
DEBUG_FIG_WIDTH_PX: int = 800
DEBUG_FIG_HEIGHT_PX: int = 200

# ----- Logging -----
LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()
"""Log level for CLI entry points. Set env LOG_LEVEL=DEBUG to trace shrink steps."""
