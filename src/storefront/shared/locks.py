"""Keyed in-process locks for cart and stock writes.

Keys are acquired in sorted order, so ``cart:*`` keys always come before
``product:*`` keys and two holders can never wait on each other in a cycle.
"""

import threading
from collections import defaultdict
from contextlib import ExitStack, contextmanager


def cart_key(customer_id) -> str:
    return f"cart:{customer_id}"


def product_key(product_id) -> str:
    return f"product:{product_id}"


class KeyedLocks:
    """A registry of re-entrant locks, one per key, created on first use."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks = defaultdict(threading.RLock)

    def _lock_for(self, key: str) -> threading.RLock:
        with self._guard:
            return self._locks[key]

    @contextmanager
    def hold(self, *keys: str):
        """Hold the locks for all ``keys`` for the duration of the block."""
        with ExitStack() as stack:
            for key in sorted(set(keys)):
                lock = self._lock_for(key)
                lock.acquire()
                stack.callback(lock.release)
            yield


locks = KeyedLocks()
