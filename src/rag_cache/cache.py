"""Fixed-capacity least-recently-used cache.

Recency is tracked with an explicit index (key -> node) and a doubly linked
list between two sentinels. The node after ``_head`` is the least recently
used entry, the node before ``_tail`` the most recently used one. Every
operation is O(1) and runs under a single re-entrant lock, so read-then-move
and check-then-evict-then-insert never interleave between callers.
"""

import logging
import threading
from collections.abc import Callable

from rag_cache.entities import CacheEntryEntity

logger = logging.getLogger(__name__)

EvictionListener = Callable[[str, CacheEntryEntity], None]


class _Node:
    __slots__ = ("key", "entry", "prev", "next")

    def __init__(self, key: str = "", entry: CacheEntryEntity | None = None) -> None:
        self.key = key
        self.entry = entry
        self.prev: _Node | None = None
        self.next: _Node | None = None


class LRUCache:
    """Bounded cache that evicts the least recently used entry on overflow.

    Both ``get`` and ``put`` refresh an entry's recency. Evictions caused by
    capacity pressure are reported through ``on_eviction``; ``clear`` is a
    reset and reports nothing.

    Example:
        ```python
        cache = LRUCache(capacity=2, on_eviction=lambda key, entry: print(key))
        cache.put("a", entry_a)
        cache.put("b", entry_b)
        cache.get("a")
        cache.put("c", entry_c)  # prints "b"
        ```
    """

    def __init__(self, capacity: int, on_eviction: EvictionListener | None = None) -> None:
        """Initialize the cache.

        Args:
            capacity: Maximum number of entries. Must be a positive integer.
            on_eviction: Called once with ``(key, entry)`` for every entry
                removed to make room for a new one. Runs after the new
                entry is stored and outside the lock.

        Raises:
            ValueError: If capacity is not a positive integer.
        """
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise ValueError(f"capacity must be a positive integer, got {capacity!r}")

        self._capacity = capacity
        self._on_eviction = on_eviction
        self._index: dict[str, _Node] = {}
        self._head = _Node()
        self._tail = _Node()
        self._head.next = self._tail
        self._tail.prev = self._head
        self._lock = threading.RLock()

        logger.debug("LRUCache initialized (capacity=%d)", capacity)

    def get(self, key: str) -> CacheEntryEntity | None:
        """Return the entry for ``key`` and mark it most recently used.

        Args:
            key: The cache key

        Returns:
            The cached entry, or None if the key is absent
        """
        with self._lock:
            node = self._index.get(key)
            if node is None:
                return None
            self._unlink(node)
            self._append(node)
            return node.entry

    def put(self, key: str, entry: CacheEntryEntity) -> None:
        """Insert or replace ``entry`` under ``key`` as most recently used.

        Replacing an existing key never evicts. Inserting a new key into a
        full cache evicts the least recently used entry first.

        Args:
            key: The cache key
            entry: The entry to store
        """
        evicted = None
        with self._lock:
            node = self._index.get(key)
            if node is not None:
                node.entry = entry
                self._unlink(node)
                self._append(node)
                return

            if len(self._index) >= self._capacity:
                evicted = self._evict_oldest()

            node = _Node(key, entry)
            self._index[key] = node
            self._append(node)

        # Notified outside the lock, once the new entry is in place
        if evicted is not None and self._on_eviction is not None:
            self._on_eviction(*evicted)

    def size(self) -> int:
        """Return the number of cached entries."""
        with self._lock:
            return len(self._index)

    @property
    def capacity(self) -> int:
        """Get the fixed maximum number of entries."""
        return self._capacity

    def clear(self) -> None:
        """Remove every entry without reporting evictions."""
        with self._lock:
            self._index.clear()
            self._head.next = self._tail
            self._tail.prev = self._head

    def keys(self) -> list[str]:
        """Return the cached keys from least to most recently used.

        Does not change recency order.
        """
        with self._lock:
            keys = []
            node = self._head.next
            while node is not self._tail:
                keys.append(node.key)
                node = node.next
            return keys

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._index

    def _evict_oldest(self) -> tuple[str, CacheEntryEntity] | None:
        oldest = self._head.next
        if oldest is self._tail:
            return None
        self._unlink(oldest)
        del self._index[oldest.key]
        logger.info("Evicted least recently used entry: %s", oldest.key)
        return oldest.key, oldest.entry

    def _unlink(self, node: _Node) -> None:
        node.prev.next = node.next
        node.next.prev = node.prev
        node.prev = None
        node.next = None

    def _append(self, node: _Node) -> None:
        last = self._tail.prev
        last.next = node
        node.prev = last
        node.next = self._tail
        self._tail.prev = node
