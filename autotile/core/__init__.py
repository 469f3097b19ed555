"""
Core auto-tiling functionality.

This package contains the Wang signature table, the tile resolver and the
grid tiler that applies it to whole terrain maps.
"""

from .errors import (
    MalformedSignature,
    NoTileForSignature,
    TilesetFormatError,
    UnknownColorReference,
    WangSetError,
)
from .wang_table import WangTable
from .resolver import AutoTileResolver, encode_neighbors, similarity
from .terrain_tiler import tile_terrain

__all__ = [
    "WangTable",
    "AutoTileResolver",
    "encode_neighbors",
    "similarity",
    "tile_terrain",
    "WangSetError",
    "MalformedSignature",
    "UnknownColorReference",
    "NoTileForSignature",
    "TilesetFormatError",
]
