"""
Wang Auto-Tiling - Coverage Analysis

Measures how well a Wang set covers the 256 possible neighbor
configurations of a cell: how many resolve exactly, how many need the
fallback, and how close the fallback tiles are.
"""

from collections import defaultdict
from itertools import product

import numpy as np

from .constants import DEFAULT_COLOR_ID, SIGNATURE_LENGTH
from .resolver import AutoTileResolver, encode_neighbors, similarity
from .wang_table import WangTable


def percentile_stats(values):
    """Return min/25th/50th/75th/max statistics."""
    if not values:
        raise ValueError("values cannot be empty in percentile_stats call")
    arr = np.array(values)
    return {
        "min": float(np.min(arr)),
        "25th": float(np.percentile(arr, 25)),
        "50th": float(np.percentile(arr, 50)),
        "75th": float(np.percentile(arr, 75)),
        "max": float(np.max(arr)),
        "count": len(values),
    }


def variant_groups(table: WangTable) -> dict[tuple[int, ...], list[int]]:
    """Signatures carried by more than one tile, with their tile ids."""
    groups: dict[tuple[int, ...], list[int]] = defaultdict(list)
    for tile_id, signature in table.all():
        groups[signature].append(tile_id)
    return {sig: tiles for sig, tiles in groups.items() if len(tiles) > 1}


def coverage_report(
    resolver: AutoTileResolver,
    color_id: int = DEFAULT_COLOR_ID,
) -> dict:
    """
    Resolve every neighbor configuration and summarize the results.

    Args:
        resolver: Resolver to analyze (its normalize_corners setting applies)
        color_id: Terrain color used to encode configurations

    Returns:
        Dictionary with:
            configurations: number of configurations tried (256)
            distinct_signatures: distinct signatures after encoding
            exact: configurations with an exact match
            fallback: configurations resolved by the fallback policy
            unresolved: configurations that raised NoTileForSignature
            fallback_similarity: percentile stats of slot agreement for
                                 similarity fallbacks (None if there were none)
            missing: sorted list of signatures without an exact match
            variant_groups: signatures shared by several tiles
    """
    exact = 0
    fallback = 0
    unresolved = 0
    scores = []
    missing = set()
    seen = set()

    for flags in product((False, True), repeat=SIGNATURE_LENGTH):
        signature = encode_neighbors(flags, color_id, resolver.normalize_corners)
        seen.add(signature)

        if resolver.is_exact(signature):
            exact += 1
            continue

        missing.add(signature)
        if resolver.has_fallback_tile:
            fallback += 1
            continue
        if not resolver.similarity_fallback or len(resolver.table) == 0:
            unresolved += 1
            continue

        fallback += 1
        tile_id = resolver.resolve_signature(signature)
        scores.append(similarity(signature, resolver.table.signature_of(tile_id)))

    return {
        "configurations": 2 ** SIGNATURE_LENGTH,
        "distinct_signatures": len(seen),
        "exact": exact,
        "fallback": fallback,
        "unresolved": unresolved,
        "fallback_similarity": percentile_stats(scores) if scores else None,
        "missing": sorted(missing),
        "variant_groups": variant_groups(resolver.table),
    }
