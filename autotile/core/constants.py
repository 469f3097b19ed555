"""
Wang Auto-Tiling - Signature Layout and Defaults

Shared constants for the 8-slot Wang signature layout, neighbor offsets
and default data locations used across the library and tools.
"""

from pathlib import Path
from typing import Tuple

# A Wang signature: one color id per slot, 0 meaning "no terrain"
Signature = Tuple[int, int, int, int, int, int, int, int]

SIGNATURE_LENGTH = 8

# Slot indices, clockwise from the top edge
TOP = 0
TOP_RIGHT = 1
RIGHT = 2
BOTTOM_RIGHT = 3
BOTTOM = 4
BOTTOM_LEFT = 5
LEFT = 6
TOP_LEFT = 7

SLOT_NAMES = (
    "top",
    "top-right",
    "right",
    "bottom-right",
    "bottom",
    "bottom-left",
    "left",
    "top-left",
)

EDGE_SLOTS = (TOP, RIGHT, BOTTOM, LEFT)
CORNER_SLOTS = (TOP_RIGHT, BOTTOM_RIGHT, BOTTOM_LEFT, TOP_LEFT)

# Each corner slot sits between two edge slots
CORNER_EDGES = {
    TOP_RIGHT: (TOP, RIGHT),
    BOTTOM_RIGHT: (RIGHT, BOTTOM),
    BOTTOM_LEFT: (BOTTOM, LEFT),
    TOP_LEFT: (LEFT, TOP),
}

# Neighbor offsets as (delta_row, delta_col), indexed by slot
NEIGHBOR_OFFSETS = (
    (-1, 0),  # top
    (-1, 1),  # top-right
    (0, 1),  # right
    (1, 1),  # bottom-right
    (1, 0),  # bottom
    (1, -1),  # bottom-left
    (0, -1),  # left
    (-1, -1),  # top-left
)

# Wang set types
WANG_TYPE_CORNER = "corner"
WANG_TYPE_EDGE = "edge"
WANG_TYPE_MIXED = "mixed"
WANG_TYPES = (WANG_TYPE_CORNER, WANG_TYPE_EDGE, WANG_TYPE_MIXED)

# "No tile" marker used by Tiled for fallback and representative tiles,
# and by the terrain tiler for empty cells
NO_TILE = -1

# Color id of the first (and in the sample data, only) terrain
DEFAULT_COLOR_ID = 1

# Bundled sample tileset: data/tilesets/watertiles-auto.tsx
DATA_DIR = Path(__file__).parent.parent.parent / "data"
DEFAULT_TILESET_PATH = DATA_DIR / "tilesets" / "watertiles-auto.tsx"
DEFAULT_WANGSET_NAME = "water"
