"""Per-key critical sections for aggregate mutations.

Carts are serialized per owning user and orders per order id. A lock entry
lives only while some caller holds or waits for it, so the registry does not
grow with the number of users.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class _Entry:
    __slots__ = ("lock", "holders")

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.holders = 0


class KeyedLocks:
    """A registry of re-entrant locks, one per key.

    Callers using different keys never contend; callers using the same key
    run one at a time.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._guard = threading.Lock()
        self._entries: dict[str, _Entry] = {}

    @contextmanager
    def hold(self, key) -> Iterator[None]:
        key = str(key)
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = _Entry()
            entry.holders += 1

        entry.lock.acquire()
        try:
            yield
        finally:
            entry.lock.release()
            with self._guard:
                entry.holders -= 1
                if entry.holders == 0:
                    del self._entries[key]

    def active_keys(self) -> list[str]:
        with self._guard:
            return list(self._entries)


cart_locks = KeyedLocks("cart")
order_locks = KeyedLocks("order")
