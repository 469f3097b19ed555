#!/usr/bin/env python3
"""
Wang Auto-Tiling - Wang Set Analyzer

Reports how a Wang set covers all 256 neighbor configurations, which
signatures are missing, and which tiles are interchangeable variants.

Usage:
    python tools/analyze_wangset.py
    python tools/analyze_wangset.py data/tilesets/watertiles-auto.tsx --wangset water
    python tools/analyze_wangset.py --normalize-corners --show-missing
"""

import argparse
import sys

from autotile.core.constants import DEFAULT_TILESET_PATH
from autotile.core.coverage import coverage_report, variant_groups
from autotile.core.errors import WangSetError
from autotile.core.resolver import AutoTileResolver
from autotile.formats.color_utils import format_color
from autotile.formats.tileset import load_tileset


def print_stats(label, stats):
    if stats is None:
        print(f"{label}: n/a")
        return
    print(
        f"{label}: min={stats['min']:.0f} 25th={stats['25th']:.1f} "
        f"median={stats['50th']:.1f} 75th={stats['75th']:.1f} max={stats['max']:.0f} "
        f"(n={stats['count']})"
    )


def main():
    parser = argparse.ArgumentParser(description="Analyze Wang set coverage")
    parser.add_argument(
        "tileset",
        nargs="?",
        default=str(DEFAULT_TILESET_PATH),
        help="Tileset .tsx file (default: bundled water tileset)",
    )
    parser.add_argument("--wangset", help="Wang set name (default: every set)")
    parser.add_argument(
        "--normalize-corners",
        action="store_true",
        help="Ignore corners whose adjacent edges are not both set",
    )
    parser.add_argument(
        "--show-missing",
        action="store_true",
        help="List every signature without an exact match",
    )

    args = parser.parse_args()

    try:
        tileset = load_tileset(args.tileset)
        if args.wangset:
            wang_sets = [tileset.wang_set(args.wangset)]
        else:
            wang_sets = list(tileset.wang_sets)
    except (WangSetError, FileNotFoundError, KeyError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Tileset: {tileset.name}")
    print(
        f"  {tileset.tile_count} tiles of {tileset.tile_width}x{tileset.tile_height}, "
        f"{tileset.columns} columns, image {tileset.image_source}"
    )

    if not wang_sets:
        print("Warning: tileset has no Wang sets")
        return

    failed = False
    for wang_set in wang_sets:
        print(f"\nWang set '{wang_set.name}' ({wang_set.type}, fallback tile {wang_set.tile})")
        for color in wang_set.colors.values():
            print(
                f"  Color {color.id}: name={color.name!r} {format_color(color.color)} "
                f"probability={color.probability:g}"
            )

        try:
            resolver = AutoTileResolver.from_wang_set(
                wang_set, normalize_corners=args.normalize_corners
            )
        except (WangSetError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            failed = True
            continue

        print(f"  {len(resolver.table)} wang tiles, {len(resolver.table.signatures())} distinct signatures")

        for color_id in sorted(wang_set.color_ids):
            report = coverage_report(resolver, color_id)
            print(f"\n  Color {color_id} coverage:")
            print(f"    Configurations:      {report['configurations']}")
            print(f"    Distinct signatures: {report['distinct_signatures']}")
            print(f"    Exact matches:       {report['exact']}")
            print(f"    Fallback:            {report['fallback']}")
            print(f"    Unresolved:          {report['unresolved']}")
            print_stats("    Fallback similarity", report["fallback_similarity"])

            if args.show_missing and report["missing"]:
                print("    Missing signatures:")
                for signature in report["missing"]:
                    print(f"      {list(signature)}")

        groups = variant_groups(resolver.table)
        if groups:
            print("\n  Variant groups:")
            for signature, tiles in groups.items():
                print(f"    {list(signature)}: tiles {tiles}")

    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
