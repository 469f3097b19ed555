"""
Wang Auto-Tiling - Text Terrain Maps

Reads terrain grids drawn as plain text, one character per cell, and
writes tiled results as JSON.

    ..~~~.
    .~~~~.
    ..~~..

Characters listed in terrain_chars become color 1; everything else is
empty (0). Short rows are padded with empty cells.
"""

import json
from pathlib import Path

import numpy as np

DEFAULT_TERRAIN_CHARS = "~#1"


def parse_text_map(text: str, terrain_chars: str = DEFAULT_TERRAIN_CHARS) -> np.ndarray:
    """
    Parse a text map into a grid of color ids.

    Args:
        text: Map text, one row per line; blank lines are skipped
        terrain_chars: Characters that mark terrain cells

    Returns:
        2D int array (1 = terrain, 0 = empty)

    Raises:
        ValueError: If the map has no rows
    """
    rows = [line.rstrip("\r\n") for line in text.splitlines()]
    rows = [row for row in rows if row.strip()]
    if not rows:
        raise ValueError("Text map is empty")

    width = max(len(row) for row in rows)
    grid = np.zeros((len(rows), width), dtype=np.int64)
    for r, row in enumerate(rows):
        for c, char in enumerate(row):
            if char in terrain_chars:
                grid[r, c] = 1
    return grid


def load_text_map(path: str | Path, terrain_chars: str = DEFAULT_TERRAIN_CHARS) -> np.ndarray:
    """Load a text map from a file. See parse_text_map()."""
    with open(path, "r") as f:
        return parse_text_map(f.read(), terrain_chars)


def tiles_to_dict(tiles: np.ndarray, tileset_name: str = "", wang_set_name: str = "") -> dict:
    """Build the JSON document for a tiled grid."""
    return {
        "tileset": tileset_name,
        "wangset": wang_set_name,
        "width": int(tiles.shape[1]),
        "height": int(tiles.shape[0]),
        "rows": tiles.tolist(),
    }


def format_tiles(tiles: np.ndarray, tileset_name: str = "", wang_set_name: str = "") -> str:
    """
    Format a tiled grid as JSON with one line per map row.

    Example:
        {
          "tileset": "watertiles-auto",
          "wangset": "water",
          "width": 3,
          "height": 1,
          "rows": [
            [64, 65, 66]
          ]
        }
    """
    doc = tiles_to_dict(tiles, tileset_name, wang_set_name)
    rows = doc.pop("rows")

    lines = ["{"]
    for key, value in doc.items():
        lines.append(f"  {json.dumps(key)}: {json.dumps(value)},")
    if rows:
        lines.append('  "rows": [')
        lines.append(",\n".join("    " + json.dumps(row) for row in rows))
        lines.append("  ]")
    else:
        lines.append('  "rows": []')
    lines.append("}")
    return "\n".join(lines)


def save_tiles(
    tiles: np.ndarray,
    path: str | Path,
    tileset_name: str = "",
    wang_set_name: str = "",
) -> None:
    """Write a tiled grid as JSON (see format_tiles())."""
    with open(path, "w") as f:
        f.write(format_tiles(tiles, tileset_name, wang_set_name))
        f.write("\n")
