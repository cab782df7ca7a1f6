"""Configuration constants for pointlegend.

Legend thresholds, tolerances and layout sizes shared by the controller
and the terminal front end.
"""

from pathlib import Path


# =============================================================================
# LEGEND SELECTION
# =============================================================================

# Categorical palettes with more colors than this get no swatch legend
MAX_CATEGORICAL_COLORS = 20

# Per-channel tolerance when matching a swatch color against row colors
COLOR_TOLERANCE = 1

# Source tag attached to selections made from a legend
SELECTION_SOURCE = "legend"

# Opacity of legend entries outside the active selection
DIMMED_OPACITY = 0.33


# =============================================================================
# COLORBAR / SWATCHES
# =============================================================================

DEFAULT_TICK_COUNT = 5

# Boxes drawn in a colormap option's preview swatch
DEFAULT_SWATCH_COLORS = 5

# Non-categorical palettes longer than this are sampled for previews
SWATCH_RESAMPLE_THRESHOLD = 16

# Rows used to draw the colorbar gradient in the terminal
COLORBAR_HEIGHT = 17

# Background assumed when dimming entries
DIM_BACKGROUND = (40, 40, 40)


# =============================================================================
# PATHS
# =============================================================================

CSS_PATH = Path(__file__).parent / "app.tcss"

LOG_FILE = "pointlegend.log"
