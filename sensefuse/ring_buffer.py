"""A bounded FIFO buffer shared between threads."""

import queue
import threading
from collections import deque


class ConcurrentRingBuffer:
    """Fixed-capacity thread-safe FIFO.

    Non-blocking and conditional pops raise :class:`queue.Empty` when no
    element was taken.
    """

    def __init__(self, size):
        if size < 1:
            raise ValueError("buffer size must be positive")
        self._capacity = size
        self._items = deque()
        self._lock = threading.Lock()
        self._not_empty = threading.Condition(self._lock)
        self._not_full = threading.Condition(self._lock)

    def _do_push(self, val):
        self._items.append(val)
        self._not_empty.notify()

    def _do_pop(self):
        val = self._items.popleft()
        self._not_full.notify()
        return val

    def _wait_available(self, timeout_ms):
        timeout = None if timeout_ms is None else timeout_ms / 1000.0
        return self._not_empty.wait_for(lambda: bool(self._items), timeout)

    def push_nb(self, val, force=False):
        """Push without blocking; with ``force`` the oldest element is dropped when full.

        Returns whether the element was pushed.
        """
        with self._lock:
            if len(self._items) >= self._capacity:
                if not force:
                    return False
                self._do_pop()
            self._do_push(val)
            return True

    def push(self, val):
        """Push, blocking until there is room."""
        with self._not_full:
            self._not_full.wait_for(lambda: len(self._items) < self._capacity)
            self._do_push(val)

    def pop_nb(self, timeout_ms=0):
        """Pop the oldest element, waiting at most ``timeout_ms`` milliseconds."""
        with self._lock:
            if not self._wait_available(timeout_ms):
                raise queue.Empty
            return self._do_pop()

    def pop(self):
        """Pop the oldest element, blocking until one is available."""
        with self._lock:
            self._wait_available(None)
            return self._do_pop()

    def pop_nb_if(self, func, timeout_ms=0):
        """Pop the oldest element if ``func`` accepts it, waiting at most ``timeout_ms``.

        Raises :class:`queue.Empty` on timeout or when ``func`` rejects the element.
        """
        with self._lock:
            if not self._wait_available(timeout_ms) or not func(self._items[0]):
                raise queue.Empty
            return self._do_pop()

    def pop_if(self, func):
        """Wait for an element and pop it if ``func`` accepts it.

        Raises :class:`queue.Empty` when ``func`` rejects the element.
        """
        with self._lock:
            self._wait_available(None)
            if not func(self._items[0]):
                raise queue.Empty
            return self._do_pop()

    def peek_nb(self, timeout_ms=0):
        """Return the oldest element without removing it, waiting at most ``timeout_ms``."""
        with self._lock:
            if not self._wait_available(timeout_ms):
                raise queue.Empty
            return self._items[0]

    def peek(self):
        """Return the oldest element without removing it, blocking until one exists."""
        with self._lock:
            self._wait_available(None)
            return self._items[0]

    def clear(self):
        """Remove all elements and wake blocked pushers."""
        with self._lock:
            self._items.clear()
            self._not_full.notify_all()

    def __len__(self):
        return len(self._items)

    def capacity(self):
        """Return the maximum number of elements."""
        return self._capacity

    def empty(self):
        """Return whether the buffer holds no elements."""
        return not self._items

    def full(self):
        """Return whether the buffer is at capacity."""
        return len(self._items) == self._capacity