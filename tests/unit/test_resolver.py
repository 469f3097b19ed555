"""
Unit tests for AutoTileResolver.
"""

import random

import pytest

from autotile.core.constants import NO_TILE
from autotile.core.errors import MalformedSignature, NoTileForSignature, UnknownColorReference
from autotile.core.resolver import AutoTileResolver, encode_neighbors, similarity
from autotile.core.wang_table import WangTable


# =============================================================================
# Helpers
# =============================================================================

class TestSimilarity:
    """Tests for similarity function."""

    def test_identical(self):
        assert similarity([1] * 8, [1] * 8) == 8

    def test_disjoint(self):
        assert similarity([1] * 8, [0] * 8) == 0

    def test_partial(self):
        assert similarity([1, 0, 1, 0, 1, 0, 1, 0], [1, 1, 1, 1, 1, 1, 1, 1]) == 4

    def test_symmetric(self):
        a = [1, 0, 0, 1, 0, 1, 1, 0]
        b = [0, 0, 1, 1, 1, 1, 0, 0]
        assert similarity(a, b) == similarity(b, a)


class TestEncodeNeighbors:
    """Tests for encode_neighbors function."""

    def test_all_same(self):
        assert encode_neighbors([True] * 8) == (1, 1, 1, 1, 1, 1, 1, 1)

    def test_none_same(self):
        assert encode_neighbors([False] * 8) == (0,) * 8

    def test_uses_color_id(self):
        flags = [True, False, True, False, False, False, False, False]
        assert encode_neighbors(flags, color_id=3) == (3, 0, 3, 0, 0, 0, 0, 0)

    def test_accepts_ints(self):
        assert encode_neighbors([1, 0, 0, 0, 1, 0, 0, 0]) == (1, 0, 0, 0, 1, 0, 0, 0)

    def test_wrong_count_raises(self):
        with pytest.raises(ValueError, match="Expected 8"):
            encode_neighbors([True] * 7)

    def test_corners_kept_without_normalization(self):
        flags = [False, True, False, False, False, False, False, False]
        assert encode_neighbors(flags) == (0, 1, 0, 0, 0, 0, 0, 0)

    def test_normalize_clears_lone_corner(self):
        flags = [False, True, False, False, False, False, False, False]
        assert encode_neighbors(flags, normalize_corners=True) == (0,) * 8

    def test_normalize_keeps_supported_corner(self):
        flags = [True, True, True, False, False, False, False, False]
        assert encode_neighbors(flags, normalize_corners=True) == (1, 1, 1, 0, 0, 0, 0, 0)

    def test_normalize_needs_both_edges(self):
        # top-left corner with only the top edge set
        flags = [True, False, False, False, False, False, False, True]
        assert encode_neighbors(flags, normalize_corners=True) == (1, 0, 0, 0, 0, 0, 0, 0)


# =============================================================================
# Resolver
# =============================================================================

class TestExactMatch:
    """Tests for exact-match resolution."""

    def test_single_match(self, small_resolver):
        assert small_resolver.resolve_signature([1, 0, 0, 0, 0, 0, 0, 0]) == 0

    def test_single_match_is_stable(self, small_resolver):
        results = {small_resolver.resolve_signature([0, 0, 1, 0, 0, 0, 0, 0]) for _ in range(20)}
        assert results == {1}

    def test_resolve_from_neighbors(self, small_resolver):
        neighbors = [True, False, True, False, False, False, False, False]
        assert small_resolver.resolve(neighbors, variant=0) == 5

    def test_candidates(self, small_resolver):
        assert small_resolver.candidates([1, 0, 1, 0, 0, 0, 0, 0]) == {5, 6}
        assert small_resolver.candidates([0] * 8) == frozenset()

    def test_is_exact(self, small_resolver):
        assert small_resolver.is_exact([1, 0, 0, 0, 0, 0, 0, 0])
        assert not small_resolver.is_exact([0, 0, 0, 0, 1, 0, 0, 0])

    def test_malformed_query_raises(self, small_resolver):
        with pytest.raises(MalformedSignature):
            small_resolver.resolve_signature([1, 0, 1])

    def test_undeclared_cell_color_raises(self, small_resolver):
        with pytest.raises(UnknownColorReference, match="undeclared color 2") as exc_info:
            small_resolver.resolve([True] * 8, color_id=2)
        assert exc_info.value.color_id == 2
        assert exc_info.value.tile_id is None
        assert exc_info.value.declared == (1,)


class TestVariants:
    """Tests for variant selection among several exact matches."""

    SIGNATURE = [1, 0, 1, 0, 0, 0, 0, 0]

    def test_indexed_variant(self, small_resolver):
        assert small_resolver.resolve_signature(self.SIGNATURE, variant=0) == 5
        assert small_resolver.resolve_signature(self.SIGNATURE, variant=1) == 6

    def test_indexed_variant_wraps(self, small_resolver):
        assert small_resolver.resolve_signature(self.SIGNATURE, variant=2) == 5
        assert small_resolver.resolve_signature(self.SIGNATURE, variant=7) == 6

    def test_random_variant_is_a_candidate(self, small_resolver):
        for _ in range(20):
            assert small_resolver.resolve_signature(self.SIGNATURE) in {5, 6}

    def test_seeded_rng_is_reproducible(self, small_resolver):
        rng_a = random.Random(1234)
        rng_b = random.Random(1234)
        first = [small_resolver.resolve_signature(self.SIGNATURE, rng=rng_a) for _ in range(10)]
        second = [small_resolver.resolve_signature(self.SIGNATURE, rng=rng_b) for _ in range(10)]
        assert first == second

    def test_random_choice_reaches_every_variant(self, small_resolver):
        rng = random.Random(0)
        picks = {small_resolver.resolve_signature(self.SIGNATURE, rng=rng) for _ in range(100)}
        assert picks == {5, 6}

    def test_weighted_choice_respects_zero_weight(self, small_table):
        resolver = AutoTileResolver(small_table, tile_weights={5: 0.0, 6: 1.0})
        rng = random.Random(99)
        picks = {resolver.resolve_signature(self.SIGNATURE, rng=rng, weighted=True) for _ in range(50)}
        assert picks == {6}

    def test_variant_beats_rng(self, small_resolver):
        rng = random.Random(5)
        assert small_resolver.resolve_signature(self.SIGNATURE, variant=1, rng=rng) == 6


class TestFallback:
    """Tests for behavior when no exact match exists."""

    def test_best_matches_are_sorted(self, small_resolver):
        # tiles 0 and 1 agree on 7 slots with the empty signature, 5 and 6 on 6
        assert small_resolver.best_matches([0] * 8) == [0, 1]

    def test_similarity_fallback_lowest_id(self, small_resolver):
        assert small_resolver.resolve_signature([0] * 8) == 0

    def test_similarity_fallback_prefers_closest(self, small_resolver):
        # agrees with tile 1 on all but the bottom slot
        assert small_resolver.resolve_signature([0, 0, 1, 0, 1, 0, 0, 0]) == 1

    def test_similarity_fallback_is_deterministic(self, small_resolver):
        results = {small_resolver.resolve_signature([1, 0, 1, 0, 1, 0, 1, 0]) for _ in range(10)}
        assert len(results) == 1

    def test_declared_fallback_tile_wins(self, small_table):
        resolver = AutoTileResolver(small_table, fallback_tile=99)
        assert resolver.has_fallback_tile
        assert resolver.resolve_signature([0] * 8) == 99

    def test_declared_fallback_not_used_for_exact(self, small_table):
        resolver = AutoTileResolver(small_table, fallback_tile=99)
        assert resolver.resolve_signature([1, 0, 0, 0, 0, 0, 0, 0]) == 0

    def test_no_fallback_marker(self, small_table):
        resolver = AutoTileResolver(small_table, fallback_tile=NO_TILE)
        assert not resolver.has_fallback_tile

    def test_similarity_disabled_raises(self, small_table):
        resolver = AutoTileResolver(small_table, similarity_fallback=False)
        with pytest.raises(NoTileForSignature, match="fallback disabled"):
            resolver.resolve_signature([0] * 8)

    def test_empty_table_raises(self):
        resolver = AutoTileResolver(WangTable.build([], {1}))
        with pytest.raises(NoTileForSignature) as exc_info:
            resolver.resolve_signature([1, 0, 0, 0, 0, 0, 0, 0])
        assert exc_info.value.signature == (1, 0, 0, 0, 0, 0, 0, 0)

    def test_empty_table_best_matches(self):
        resolver = AutoTileResolver(WangTable.build([], {1}))
        assert resolver.best_matches([0] * 8) == []

    def test_empty_table_with_fallback_tile(self):
        resolver = AutoTileResolver(WangTable.build([], {1}), fallback_tile=3)
        assert resolver.resolve_signature([0] * 8) == 3


class TestNormalizedResolution:
    """Tests for resolve() with corner normalization enabled."""

    def test_lone_corner_resolves_as_plain_edge(self, small_table):
        resolver = AutoTileResolver(small_table, normalize_corners=True)
        # top set, top-right set without the right edge: corner is dropped
        neighbors = [True, True, False, False, False, False, False, False]
        assert resolver.resolve(neighbors) == 0
