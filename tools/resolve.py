#!/usr/bin/env python3
"""
Wang Auto-Tiling - Signature Resolver

Resolves a single Wang signature (or neighbor pattern) against a tileset
and prints the chosen tile with its position in the source image.

Usage:
    python tools/resolve.py --signature 1,0,1,0,1,0,1,1
    python tools/resolve.py data/tilesets/watertiles-auto.tsx --neighbors 10101011
    python tools/resolve.py --signature 1,0,0,0,1,0,0,0 --seed 7
"""

import argparse
import random
import sys

from autotile.core.constants import DEFAULT_TILESET_PATH, SIGNATURE_LENGTH
from autotile.core.errors import WangSetError
from autotile.core.resolver import AutoTileResolver, encode_neighbors, similarity
from autotile.formats.color_utils import parse_int_list
from autotile.formats.tileset import load_tileset


def parse_neighbors(pattern: str) -> list[bool]:
    """
    Parse a neighbor pattern such as "10101011" (one digit per slot).

    Raises:
        ValueError: If the pattern is not 8 binary digits
    """
    pattern = pattern.strip()
    if len(pattern) != SIGNATURE_LENGTH or any(c not in "01" for c in pattern):
        raise ValueError(f"Neighbor pattern must be {SIGNATURE_LENGTH} binary digits, got {pattern!r}")
    return [c == "1" for c in pattern]


def main():
    parser = argparse.ArgumentParser(
        description="Resolve a Wang signature to a tile id"
    )
    parser.add_argument(
        "tileset",
        nargs="?",
        default=str(DEFAULT_TILESET_PATH),
        help="Tileset .tsx file (default: bundled water tileset)",
    )
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--signature", help="Comma-separated 8-slot signature, e.g. 1,0,1,0,1,0,1,1")
    group.add_argument("--neighbors", help="8 binary digits, top then clockwise, e.g. 10101011")
    parser.add_argument("--wangset", help="Wang set name (default: first in tileset)")
    parser.add_argument("--color", type=int, default=1, help="Color id for --neighbors (default: 1)")
    parser.add_argument("--variant", type=int, help="Deterministic variant index")
    parser.add_argument("--seed", type=int, help="Seed for random variant selection")
    parser.add_argument(
        "--normalize-corners",
        action="store_true",
        help="Ignore corners whose adjacent edges are not both set",
    )

    args = parser.parse_args()

    try:
        tileset = load_tileset(args.tileset)
        wang_set = tileset.wang_set(args.wangset)
        resolver = AutoTileResolver.from_wang_set(
            wang_set, normalize_corners=args.normalize_corners
        )

        if args.signature is not None:
            signature = tuple(parse_int_list(args.signature))
        else:
            signature = encode_neighbors(
                parse_neighbors(args.neighbors), args.color, args.normalize_corners
            )

        rng = random.Random(args.seed) if args.seed is not None else None
        tile_id = resolver.resolve_signature(signature, variant=args.variant, rng=rng)
    except (WangSetError, FileNotFoundError, KeyError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    exact = resolver.candidates(signature)
    print(f"Tileset:   {tileset.name} ({args.tileset})")
    print(f"Wang set:  {wang_set.name} ({wang_set.type})")
    print(f"Signature: {list(signature)}")

    if exact:
        print(f"Match:     exact ({len(exact)} variant(s): {sorted(exact)})")
    elif resolver.has_fallback_tile:
        print("Match:     Wang set fallback tile")
    else:
        stored = resolver.table.signature_of(tile_id)
        print(
            f"Match:     nearest ({similarity(signature, stored)}/{SIGNATURE_LENGTH} slots, "
            f"candidates: {resolver.best_matches(signature)})"
        )

    row, col = tileset.tile_position(tile_id)
    x, y, w, h = tileset.tile_rect(tile_id)
    print(f"Tile:      {tile_id} (row {row}, col {col}, rect x={x} y={y} w={w} h={h})")


if __name__ == "__main__":
    main()
