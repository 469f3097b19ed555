"""
Wang Auto-Tiling - Wang Table

Immutable lookup structure mapping Wang tile signatures to tile ids,
built once from the wang tile entries of a single Wang set.
"""

from collections import defaultdict
from numbers import Integral
from typing import Iterable

from .constants import (
    CORNER_EDGES,
    CORNER_SLOTS,
    EDGE_SLOTS,
    SIGNATURE_LENGTH,
    WANG_TYPE_CORNER,
    WANG_TYPE_EDGE,
    WANG_TYPE_MIXED,
    WANG_TYPES,
    Signature,
)
from .errors import MalformedSignature, UnknownColorReference


def normalize_signature(signature, tile_id: int | None = None) -> Signature:
    """
    Convert a signature-like sequence into the hashable 8-tuple form.

    Args:
        signature: Sequence of exactly 8 non-negative integers
        tile_id: Tile the signature belongs to (used in error messages only)

    Returns:
        Tuple of 8 ints

    Raises:
        MalformedSignature: If the slot count is wrong or a slot is not a
            non-negative integer
    """
    try:
        slots = tuple(signature)
    except TypeError:
        raise MalformedSignature(
            f"Tile {tile_id}: signature {signature!r} is not a sequence",
            tile_id=tile_id,
            signature=signature,
        ) from None

    where = f"Tile {tile_id}" if tile_id is not None else "Query"
    if len(slots) != SIGNATURE_LENGTH:
        raise MalformedSignature(
            f"{where}: signature has {len(slots)} slots, expected {SIGNATURE_LENGTH}",
            tile_id=tile_id,
            signature=slots,
        )

    for slot in slots:
        if isinstance(slot, bool) or not isinstance(slot, Integral) or slot < 0:
            raise MalformedSignature(
                f"{where}: invalid slot value {slot!r} in {list(slots)}",
                tile_id=tile_id,
                signature=slots,
            )

    return tuple(int(slot) for slot in slots)  # type: ignore[return-value]


def check_structure(tile_id: int, signature: Signature, wang_type: str) -> None:
    """
    Check a signature against the corner/edge rules of its Wang set type.

    mixed:  a corner holding a color needs both adjacent edges to hold it too
    corner: only corner slots may hold colors
    edge:   only edge slots may hold colors

    Raises:
        MalformedSignature: If the signature breaks the rule for wang_type
    """
    if wang_type == WANG_TYPE_MIXED:
        for corner in CORNER_SLOTS:
            color = signature[corner]
            if color == 0:
                continue
            for edge in CORNER_EDGES[corner]:
                if signature[edge] != color:
                    raise MalformedSignature(
                        f"Tile {tile_id}: corner slot {corner} holds color {color} "
                        f"but adjacent edge slot {edge} holds {signature[edge]} "
                        f"in {list(signature)}",
                        tile_id=tile_id,
                        signature=signature,
                    )
    elif wang_type == WANG_TYPE_CORNER:
        if any(signature[i] for i in EDGE_SLOTS):
            raise MalformedSignature(
                f"Tile {tile_id}: corner set signature {list(signature)} sets edge slots",
                tile_id=tile_id,
                signature=signature,
            )
    elif wang_type == WANG_TYPE_EDGE:
        if any(signature[i] for i in CORNER_SLOTS):
            raise MalformedSignature(
                f"Tile {tile_id}: edge set signature {list(signature)} sets corner slots",
                tile_id=tile_id,
                signature=signature,
            )


class WangTable:
    """
    Read-only signature table for one Wang set.

    Build with WangTable.build(); the instance is never mutated afterwards
    and can be shared freely between threads.
    """

    __slots__ = ("_by_signature", "_by_tile", "_entries", "_color_ids", "_wang_type")

    def __init__(
        self,
        entries: tuple[tuple[int, Signature], ...],
        color_ids: frozenset[int],
        wang_type: str,
    ):
        by_signature: dict[Signature, set[int]] = defaultdict(set)
        for tile_id, signature in entries:
            by_signature[signature].add(tile_id)

        self._entries = entries
        self._by_tile = dict(entries)
        self._by_signature = {
            signature: frozenset(tiles) for signature, tiles in by_signature.items()
        }
        self._color_ids = color_ids
        self._wang_type = wang_type

    @classmethod
    def build(
        cls,
        entries: Iterable[tuple[int, Iterable[int]]],
        color_ids: Iterable[int],
        wang_type: str = WANG_TYPE_MIXED,
        check_consistency: bool = True,
    ) -> "WangTable":
        """
        Validate wang tile entries and build a table.

        Args:
            entries: (tile_id, signature) pairs
            color_ids: Declared color ids of the Wang set (all >= 1)
            wang_type: "corner", "edge" or "mixed"
            check_consistency: Reject signatures that break the corner/edge
                rules of wang_type

        Returns:
            New WangTable

        Raises:
            MalformedSignature: Bad slot count, slot value, tile id, duplicate
                tile id or inconsistent signature
            UnknownColorReference: A slot references an undeclared color
            ValueError: Unknown wang_type or invalid color id
        """
        if wang_type not in WANG_TYPES:
            raise ValueError(
                f"Unknown Wang set type {wang_type!r} (expected one of {', '.join(WANG_TYPES)})"
            )

        declared_ids = []
        for color_id in color_ids:
            if isinstance(color_id, bool) or not isinstance(color_id, Integral) or color_id < 1:
                raise ValueError(f"Invalid color id {color_id!r}: must be an integer >= 1")
            declared_ids.append(int(color_id))
        declared = frozenset(declared_ids)

        validated: list[tuple[int, Signature]] = []
        seen: set[int] = set()

        for tile_id, raw_signature in entries:
            if isinstance(tile_id, bool) or not isinstance(tile_id, Integral) or tile_id < 0:
                raise MalformedSignature(
                    f"Invalid tile id {tile_id!r}: must be an integer >= 0",
                    tile_id=tile_id,
                    signature=raw_signature,
                )
            if tile_id in seen:
                raise MalformedSignature(
                    f"Tile {tile_id} appears more than once",
                    tile_id=tile_id,
                    signature=raw_signature,
                )

            tile_id = int(tile_id)
            signature = normalize_signature(raw_signature, tile_id)

            for slot in signature:
                if slot != 0 and slot not in declared:
                    raise UnknownColorReference(tile_id, signature, slot, declared)

            if check_consistency:
                check_structure(tile_id, signature, wang_type)

            seen.add(tile_id)
            validated.append((tile_id, signature))

        validated.sort(key=lambda entry: entry[0])
        return cls(tuple(validated), declared, wang_type)

    @property
    def color_ids(self) -> frozenset[int]:
        return self._color_ids

    @property
    def wang_type(self) -> str:
        return self._wang_type

    def lookup(self, signature) -> frozenset[int]:
        """
        Exact-match lookup.

        Args:
            signature: 8-slot signature to look up

        Returns:
            Tile ids whose stored signature equals the query (empty if none)

        Raises:
            MalformedSignature: If the query is not a valid 8-slot signature
        """
        return self._by_signature.get(normalize_signature(signature), frozenset())

    def all(self) -> tuple[tuple[int, Signature], ...]:
        """All (tile_id, signature) entries in ascending tile id order."""
        return self._entries

    def signatures(self) -> list[Signature]:
        """Distinct signatures present in the table."""
        return list(self._by_signature)

    def signature_of(self, tile_id: int) -> Signature:
        """
        Get the stored signature of a tile.

        Raises:
            KeyError: If the tile has no entry in this table
        """
        return self._by_tile[tile_id]

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, tile_id) -> bool:
        return tile_id in self._by_tile

    def __repr__(self) -> str:
        return (
            f"WangTable({len(self._entries)} tiles, {len(self._by_signature)} signatures, "
            f"type={self._wang_type!r})"
        )
