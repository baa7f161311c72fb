"""
Test script for the result cache

Covers key construction, LRU eviction and the cancelled-result rule.

Usage:
    python -m pytest tests/test_cache.py
"""

import dataclasses
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from orbdrag.generators import fixed_board, random_board
from orbdrag.solver import Axis, ResultCache, SolverConfig, SolveResult, make_cache_key, solve


def test_cache_key():
    """Keys change with every input that can change a result."""
    print("\n" + "="*60)
    print("TEST: Cache Key")
    print("="*60)

    board = fixed_board()
    config = SolverConfig()
    key = make_cache_key(board, config, 3)
    print(f"  Key: {key[:60]}...")

    assert key == make_cache_key(fixed_board(), SolverConfig(), 3)
    assert key.startswith(board.key() + "|cfg:")
    assert key != make_cache_key(board, config, 4)
    assert key != make_cache_key(board, SolverConfig(axis=Axis.VERTICAL), 3)
    assert key != make_cache_key(board, SolverConfig(chain_enabled=True), 3)
    assert key != make_cache_key(random_board(1), config, 3)
    assert key != make_cache_key(board, config, 3, strategy_name="other")

    print("  [PASS] Cache key tests")


def test_lru_eviction():
    """Least recently used entries are dropped first."""
    print("\n" + "="*60)
    print("TEST: LRU Eviction")
    print("="*60)

    cache = ResultCache(max_entries=2)
    cache.put("a", SolveResult(path=((1, 0),), total_clusters=1))
    cache.put("b", SolveResult(path=((2, 0),), total_clusters=2))

    assert cache.get("a").total_clusters == 1  # "a" is now most recent
    cache.put("c", SolveResult(path=((3, 0),), total_clusters=3))

    print(f"  Entries after overflow: {len(cache)}")
    assert len(cache) == 2
    assert "a" in cache
    assert "b" not in cache
    assert "c" in cache

    assert cache.get("b") is None
    assert (cache.hits, cache.misses) == (1, 1)

    cache.clear()
    assert len(cache) == 0

    print("  [PASS] LRU eviction tests")


def test_cancelled_not_cached():
    """Partial results from a cancelled solve are never stored."""
    print("\n" + "="*60)
    print("TEST: Cancelled Results")
    print("="*60)

    cache = ResultCache()
    cache.put("x", SolveResult(was_cancelled=True))
    assert "x" not in cache

    cache.put("y", SolveResult(budget_exhausted=True))
    assert "y" in cache

    print("  [PASS] Cancelled result tests")


def test_cached_result_is_shared_safely():
    """A cached result cannot be altered through the object a caller got back."""
    print("\n" + "="*60)
    print("TEST: Shared Cached Result")
    print("="*60)

    cache = ResultCache()
    board = fixed_board()
    config = SolverConfig(beam_width=20, max_steps=6)

    first = solve(board, config, target=1, cache=cache)
    with pytest.raises(dataclasses.FrozenInstanceError):
        first.total_clusters = 99
    with pytest.raises(dataclasses.FrozenInstanceError):
        first.metrics.states_explored = 0

    second = solve(board, config, target=1, cache=cache)
    print(f"  Hits: {cache.hits}, clusters: {second.total_clusters}")
    assert cache.hits == 1
    assert second.metrics.from_cache
    assert not first.metrics.from_cache
    assert second.total_clusters == first.total_clusters
    assert second.path == first.path

    print("  [PASS] Shared cached result tests")
