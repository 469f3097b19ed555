"""
Wang Auto-Tiling - Tile Resolver

Selects the tile for a grid cell from the terrain membership of its eight
neighbors, using the signatures stored in a WangTable.

Algorithm:
    1. Encode neighbor membership into an 8-slot signature
    2. Exact lookup in the WangTable
    3. Several exact matches are visual variants: pick one by index or RNG
    4. No exact match: use the Wang set's fallback tile if it declares one,
       otherwise the tile(s) agreeing on the most slots, lowest id first
"""

import random
from typing import TYPE_CHECKING, Sequence

from .constants import (
    CORNER_EDGES,
    DEFAULT_COLOR_ID,
    NO_TILE,
    SIGNATURE_LENGTH,
    Signature,
)
from .errors import NoTileForSignature, UnknownColorReference
from .wang_table import WangTable, normalize_signature

if TYPE_CHECKING:
    from ..formats.tileset import WangSet


def similarity(a: Sequence[int], b: Sequence[int]) -> int:
    """Number of slots on which two signatures agree (8 minus Hamming distance)."""
    return sum(1 for x, y in zip(a, b) if x == y)


def encode_neighbors(
    neighbors: Sequence[bool],
    color_id: int = DEFAULT_COLOR_ID,
    normalize_corners: bool = False,
) -> Signature:
    """
    Encode neighbor terrain membership as a Wang signature.

    Args:
        neighbors: 8 booleans in slot order (top, top-right, right, ...,
                   top-left); True when the neighbor shares the cell's terrain
        color_id: Color id written into slots of matching neighbors
        normalize_corners: Clear a corner slot unless both adjacent edge
                           slots are set (47-tile blob reduction)

    Returns:
        8-tuple signature

    Raises:
        ValueError: If neighbors does not hold exactly 8 values
    """
    flags = [bool(n) for n in neighbors]
    if len(flags) != SIGNATURE_LENGTH:
        raise ValueError(
            f"Expected {SIGNATURE_LENGTH} neighbor flags, got {len(flags)}"
        )

    if normalize_corners:
        for corner, (edge_a, edge_b) in CORNER_EDGES.items():
            if not (flags[edge_a] and flags[edge_b]):
                flags[corner] = False

    return tuple(color_id if flag else 0 for flag in flags)  # type: ignore[return-value]


class AutoTileResolver:
    """
    Resolves Wang signatures to tile ids.

    The resolver keeps no state between calls. Random variant selection
    draws from a caller-supplied random.Random when given, so callers that
    need reproducible output (or per-thread generators) pass their own.
    """

    def __init__(
        self,
        table: WangTable,
        fallback_tile: int = NO_TILE,
        similarity_fallback: bool = True,
        normalize_corners: bool = False,
        tile_weights: dict[int, float] | None = None,
    ):
        """
        Args:
            table: Wang table to resolve against
            fallback_tile: Tile used whenever no exact match exists
                           (NO_TILE means the Wang set declares none)
            similarity_fallback: Fall back to the most similar signature
                                 when there is no exact match and no
                                 fallback tile
            normalize_corners: Passed to encode_neighbors() by resolve()
            tile_weights: Relative probability per tile id for weighted
                          variant selection (missing tiles weigh 1.0)
        """
        self.table = table
        self.fallback_tile = fallback_tile
        self.similarity_fallback = similarity_fallback
        self.normalize_corners = normalize_corners
        self.tile_weights = dict(tile_weights) if tile_weights else {}

    @classmethod
    def from_wang_set(cls, wang_set: "WangSet", **options) -> "AutoTileResolver":
        """
        Build a resolver for a loaded Wang set.

        The table is built from the set's wang tiles, the fallback tile
        comes from the set's tile attribute, and variant weights from the
        probabilities of its colors. Keyword options override both and
        are passed to the constructor.
        """
        options.setdefault("fallback_tile", wang_set.tile)
        options.setdefault(
            "tile_weights",
            {tile.tile_id: wang_set.tile_probability(tile.tile_id) for tile in wang_set.tiles},
        )
        return cls(wang_set.table(), **options)

    @property
    def has_fallback_tile(self) -> bool:
        return self.fallback_tile is not None and self.fallback_tile != NO_TILE

    def candidates(self, signature) -> frozenset[int]:
        """Tile ids whose signature matches exactly (empty if none)."""
        return self.table.lookup(signature)

    def best_matches(self, signature) -> list[int]:
        """
        Tiles whose signatures agree with the query on the most slots.

        Returns:
            Tile ids in ascending order (empty only for an empty table)
        """
        query = normalize_signature(signature)
        best_score = -1
        best: list[int] = []

        for tile_id, stored in self.table.all():
            score = similarity(query, stored)
            if score > best_score:
                best_score = score
                best = [tile_id]
            elif score == best_score:
                best.append(tile_id)

        return best

    def resolve_signature(
        self,
        signature,
        variant: int | None = None,
        rng: random.Random | None = None,
        weighted: bool = False,
    ) -> int:
        """
        Select the tile for a signature.

        Args:
            signature: 8-slot signature required by the cell
            variant: Deterministic variant index into the sorted exact
                     matches (wraps around)
            rng: Random generator for variant choice when variant is None
            weighted: Weight random variant choice by tile_weights

        Returns:
            Tile id

        Raises:
            MalformedSignature: If the signature is not 8 valid slots
            NoTileForSignature: If nothing matches and no fallback applies
        """
        matches = self.candidates(signature)

        if matches:
            return self._choose_variant(sorted(matches), variant, rng, weighted)

        if self.has_fallback_tile:
            return self.fallback_tile

        if not self.similarity_fallback:
            raise NoTileForSignature(signature, "no exact match and fallback disabled")

        best = self.best_matches(signature)
        if not best:
            raise NoTileForSignature(signature)
        return best[0]

    def resolve(
        self,
        neighbors: Sequence[bool],
        color_id: int = DEFAULT_COLOR_ID,
        variant: int | None = None,
        rng: random.Random | None = None,
        weighted: bool = False,
    ) -> int:
        """
        Select the tile for a cell from its neighbor membership.

        Args:
            neighbors: 8 booleans in slot order, True where the neighbor
                       shares the cell's terrain
            color_id: Color id of the cell's terrain

        See resolve_signature() for the remaining arguments.

        Raises:
            UnknownColorReference: If color_id is not declared by the table
        """
        signature = encode_neighbors(neighbors, color_id, self.normalize_corners)
        if color_id not in self.table.color_ids:
            raise UnknownColorReference(None, signature, color_id, self.table.color_ids)
        return self.resolve_signature(signature, variant=variant, rng=rng, weighted=weighted)

    def is_exact(self, signature) -> bool:
        """True when the signature has at least one exact match."""
        return bool(self.candidates(signature))

    def _choose_variant(
        self,
        tiles: list[int],
        variant: int | None,
        rng: random.Random | None,
        weighted: bool,
    ) -> int:
        if len(tiles) == 1:
            return tiles[0]

        if variant is not None:
            return tiles[variant % len(tiles)]

        source = rng if rng is not None else random
        if weighted:
            weights = [self.tile_weights.get(t, 1.0) for t in tiles]
            if sum(weights) > 0:
                return source.choices(tiles, weights=weights)[0]
        return source.choice(tiles)
