"""
Wang Auto-Tiling - Terrain Tiler

Applies an AutoTileResolver to every cell of a terrain grid.

The grid holds one color id per cell (0 = empty). Each non-empty cell is
tiled from the eight neighbors that hold the same color.
"""

import numpy as np

from .constants import NEIGHBOR_OFFSETS, NO_TILE
from .resolver import AutoTileResolver

# Spatial hash primes (Teschner et al.) for position-stable variant picks
_HASH_PRIME_ROW = 73856093
_HASH_PRIME_COL = 19349663
_HASH_PRIME_SEED = 83492791


def as_terrain_grid(terrain) -> np.ndarray:
    """
    Convert a 2D array-like of color ids (or booleans) to an int array.

    Raises:
        ValueError: If the input is not two-dimensional
    """
    grid = np.asarray(terrain)
    if grid.ndim != 2:
        raise ValueError(f"Terrain must be a 2D grid, got {grid.ndim} dimension(s)")
    if grid.dtype == np.bool_:
        return grid.astype(np.int64)
    return grid.astype(np.int64, copy=False)


def neighbor_mask(
    terrain,
    row: int,
    col: int,
    edge_is_terrain: bool = False,
) -> list[bool]:
    """
    Neighbor membership of one cell, in signature slot order.

    Args:
        terrain: 2D grid of color ids
        row: Cell row
        col: Cell column
        edge_is_terrain: Treat positions outside the grid as the cell's terrain

    Returns:
        8 booleans, True where the neighbor holds the cell's color
    """
    grid = as_terrain_grid(terrain)
    height, width = grid.shape
    color = grid[row, col]

    mask = []
    for d_row, d_col in NEIGHBOR_OFFSETS:
        n_row = row + d_row
        n_col = col + d_col
        if 0 <= n_row < height and 0 <= n_col < width:
            mask.append(bool(grid[n_row, n_col] == color))
        else:
            mask.append(edge_is_terrain)
    return mask


def position_variant(row: int, col: int, seed: int) -> int:
    """Deterministic non-negative variant index for a grid position."""
    return ((row * _HASH_PRIME_ROW) ^ (col * _HASH_PRIME_COL) ^ (seed * _HASH_PRIME_SEED)) & 0x7FFFFFFF


def tile_terrain(
    terrain,
    resolver: AutoTileResolver,
    edge_is_terrain: bool = False,
    variant_seed: int | None = None,
) -> np.ndarray:
    """
    Resolve a tile id for every cell of a terrain grid.

    Args:
        terrain: 2D array-like of color ids (0 = empty); booleans are
                 treated as color 1
        resolver: Resolver holding the Wang table
        edge_is_terrain: Treat positions outside the grid as matching terrain
        variant_seed: When set, visual variants are picked by a spatial
                      hash of (row, col, seed); otherwise the lowest tile
                      id of each variant group is used

    Returns:
        Int array of tile ids, same shape as terrain, NO_TILE for empty cells

    Raises:
        ValueError: If terrain is not 2D
        NoTileForSignature: If a cell cannot be resolved
        UnknownColorReference: If a cell holds a color the table does not declare
    """
    grid = as_terrain_grid(terrain)
    height, width = grid.shape
    tiles = np.full((height, width), NO_TILE, dtype=np.int64)

    # Pad with a sentinel that never equals a color id, then compare each
    # shifted view against the grid to get all neighbor masks at once
    sentinel = -1
    padded = np.pad(grid, 1, mode="constant", constant_values=sentinel)
    same = []
    for d_row, d_col in NEIGHBOR_OFFSETS:
        shifted = padded[1 + d_row : 1 + d_row + height, 1 + d_col : 1 + d_col + width]
        matches = shifted == grid
        if edge_is_terrain:
            matches |= shifted == sentinel
        same.append(matches)
    neighbors = np.stack(same, axis=-1)

    for row, col in zip(*np.nonzero(grid)):
        row = int(row)
        col = int(col)
        variant = 0
        if variant_seed is not None:
            variant = position_variant(row, col, variant_seed)
        tiles[row, col] = resolver.resolve(
            neighbors[row, col].tolist(),
            color_id=int(grid[row, col]),
            variant=variant,
        )

    return tiles
