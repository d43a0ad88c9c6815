"""Selector cache shared by parser runs."""

import logging
import threading
import time
from collections import OrderedDict
from typing import Any, Callable, Dict, Hashable, Optional

from ..utils.config import SELECTOR_CACHE_SIZE

logger = logging.getLogger(__name__)


class SelectorCache:
    """LRU memo of parsed selector groups.

    Keys hold the selector text together with its line, column and whether it
    was parsed as a nested relative selector, so a hit always returns the
    selectors a fresh parse of the current source would produce.
    Parsed selectors are treated as read-only by every consumer.
    """

    def __init__(self, max_entries: int = SELECTOR_CACHE_SIZE):
        """Initialize selector cache.

        Args:
            max_entries: Maximum number of cached selector groups

        Raises:
            ValueError: If max_entries is not positive
        """
        if max_entries <= 0:
            raise ValueError("Cache size must be positive")

        self.max_entries = max_entries
        self._entries: 'OrderedDict[Hashable, Any]' = OrderedDict()
        self._lock = threading.RLock()
        self.stats = {
            'hits': 0,
            'misses': 0,
            'evictions': 0,
            'clears': 0,
            'start_time': time.time(),
        }

    def get(self, key: Hashable) -> Optional[Any]:
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                self.stats['hits'] += 1
                return self._entries[key]
            self.stats['misses'] += 1
            return None

    def put(self, key: Hashable, value: Any) -> None:
        with self._lock:
            self._entries[key] = value
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)
                self.stats['evictions'] += 1

    def get_or_parse(self, key: Hashable, parse: Callable[[], Any]) -> Any:
        """Return the cached value for key, parsing and storing it on a miss.

        Exceptions raised by parse are not cached.
        """
        value = self.get(key)
        if value is None:
            value = parse()
            self.put(key, value)
        return value

    def clear(self) -> None:
        with self._lock:
            if self._entries:
                logger.debug(f"Clearing {len(self._entries)} cached selector groups")
            self._entries.clear()
            self.stats['clears'] += 1

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics.

        Returns:
            Dictionary with entry count and hit/miss/eviction counters
        """
        with self._lock:
            stats = dict(self.stats)
            stats['total_entries'] = len(self._entries)
            return stats

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ['SelectorCache']
