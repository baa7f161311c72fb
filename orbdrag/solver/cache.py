"""
Result Cache Module - Memoizes solves by board and full configuration.
"""

import json
import logging
import threading
from collections import OrderedDict
from typing import Optional

from .board import BoardState
from .config import SolverConfig
from .solution import SolveResult

logger = logging.getLogger(__name__)


def make_cache_key(board: BoardState, config: SolverConfig, target: int,
                   strategy_name: str = "beam") -> str:
    """
    Serialize everything that can change a solve result.

    Args:
        board: Board being solved
        config: Full search configuration
        target: Target cluster count
        strategy_name: Strategy used

    Returns:
        String key: board codes, then a sorted-keys JSON of the settings
    """
    settings = config.to_dict()
    settings["target"] = target
    settings["strategy"] = strategy_name
    return f"{board.key()}|cfg:{json.dumps(settings, sort_keys=True)}"


class ResultCache:
    """
    LRU map of cache key to SolveResult.

    Safe to share between worker threads; solves themselves never touch it.

    Attributes:
        max_entries: Entries kept before the least recently used is evicted
        hits: Lookups served from the cache
        misses: Lookups that found nothing
    """

    def __init__(self, max_entries: int = 256):
        self.max_entries = max_entries
        self.hits = 0
        self.misses = 0
        self._entries: "OrderedDict[str, SolveResult]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[SolveResult]:
        with self._lock:
            result = self._entries.get(key)
            if result is None:
                self.misses += 1
                return None
            self._entries.move_to_end(key)
            self.hits += 1
            return result

    def put(self, key: str, result: SolveResult) -> None:
        """
        Store a finished result.

        Cancelled results are partial and are never stored.
        """
        if result.was_cancelled:
            logger.debug("Not caching cancelled result")
            return
        with self._lock:
            self._entries[key] = result
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"Cache evicted {evicted[:32]}...")

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
