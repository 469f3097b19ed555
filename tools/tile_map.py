#!/usr/bin/env python3
"""
Wang Auto-Tiling - Text Map Tiler

Auto-tiles a terrain map drawn as text and writes the tile ids as JSON.

Usage:
    python tools/tile_map.py lake.txt
    python tools/tile_map.py data/tilesets/watertiles-auto.tsx lake.txt -o lake.json
    python tools/tile_map.py lake.txt --edge-is-terrain --seed 3
"""

import argparse
import sys
from pathlib import Path

from autotile.core.constants import DEFAULT_TILESET_PATH
from autotile.core.errors import WangSetError
from autotile.core.resolver import AutoTileResolver
from autotile.core.terrain_tiler import tile_terrain
from autotile.formats.text_map import DEFAULT_TERRAIN_CHARS, format_tiles, load_text_map, save_tiles
from autotile.formats.tileset import load_tileset


def main():
    parser = argparse.ArgumentParser(
        description="Auto-tile a text terrain map with a Wang set"
    )
    parser.add_argument(
        "paths",
        nargs="+",
        metavar="PATH",
        help="[TILESET] MAP - tileset .tsx (default: bundled water tileset) and text map",
    )
    parser.add_argument("-o", "--output", help="Output JSON file (default: stdout)")
    parser.add_argument("--wangset", help="Wang set name (default: first in tileset)")
    parser.add_argument(
        "--terrain-chars",
        default=DEFAULT_TERRAIN_CHARS,
        help=f"Characters that mark terrain cells (default: {DEFAULT_TERRAIN_CHARS!r})",
    )
    parser.add_argument(
        "--edge-is-terrain",
        action="store_true",
        help="Treat cells beyond the map border as terrain",
    )
    parser.add_argument("--seed", type=int, help="Seed for position-based variant selection")
    parser.add_argument(
        "--normalize-corners",
        action="store_true",
        help="Ignore corners whose adjacent edges are not both set",
    )

    args = parser.parse_args()

    if len(args.paths) == 1:
        tileset_path = str(DEFAULT_TILESET_PATH)
        map_path = args.paths[0]
    elif len(args.paths) == 2:
        tileset_path, map_path = args.paths
    else:
        parser.error("expected [TILESET] MAP")

    if not Path(map_path).exists():
        print(f"Error: Map file not found: {map_path}", file=sys.stderr)
        sys.exit(1)

    try:
        tileset = load_tileset(tileset_path)
        wang_set = tileset.wang_set(args.wangset)
        resolver = AutoTileResolver.from_wang_set(
            wang_set, normalize_corners=args.normalize_corners
        )
        terrain = load_text_map(map_path, args.terrain_chars)
        tiles = tile_terrain(
            terrain,
            resolver,
            edge_is_terrain=args.edge_is_terrain,
            variant_seed=args.seed,
        )
    except (WangSetError, FileNotFoundError, KeyError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    filled = int((terrain != 0).sum())
    print(
        f"Tiled {filled} terrain cell(s) in {terrain.shape[1]}x{terrain.shape[0]} map "
        f"with '{wang_set.name}'",
        file=sys.stderr,
    )

    if args.output:
        save_tiles(tiles, args.output, tileset.name, wang_set.name)
        print(f"Wrote {args.output}", file=sys.stderr)
    else:
        print(format_tiles(tiles, tileset.name, wang_set.name))


if __name__ == "__main__":
    main()
