"""A fixed pool of reusable buffers and a bounded blocking FIFO queue."""

from __future__ import annotations

import threading
from collections import deque
from typing import Any, Callable

from gpiofeed.frames import BUFFER_BYTES, QUEUE_SIZE


def _new_buffer() -> bytearray:
    return bytearray(BUFFER_BYTES)


class BufferPool:
    """A fixed set of preallocated buffers handed out and returned by threads.

    ``get`` blocks until a buffer is free.
    """

    def __init__(self, size: int = QUEUE_SIZE, factory: Callable[[], Any] | None = None):
        if size < 1:
            raise ValueError("a buffer pool needs at least one buffer")
        make = factory or _new_buffer
        self.size = size
        self._buffers = [make() for _ in range(size)]
        self._slots = {id(buffer): slot for slot, buffer in enumerate(self._buffers)}
        if len(self._slots) != size:
            raise ValueError("the factory must return a new object on every call")
        self._free = list(range(size))
        self._cond = threading.Condition()

    def get(self) -> Any:
        """Take a free buffer, waiting until one is released if none is free."""
        with self._cond:
            self._cond.wait_for(lambda: bool(self._free))
            return self._buffers[self._free.pop()]

    def release(self, buffer: Any) -> None:
        """Return a buffer taken with ``get`` to the pool."""
        slot = self._slots.get(id(buffer))
        if slot is None or self._buffers[slot] is not buffer:
            raise ValueError("buffer does not belong to this pool")
        with self._cond:
            if slot in self._free:
                raise ValueError("buffer released more than once")
            self._free.append(slot)
            self._cond.notify()

    def available(self) -> int:
        """Number of buffers currently free."""
        with self._cond:
            return len(self._free)


class ThreadSafeQueue:
    """A bounded FIFO queue for one producer and one consumer.

    ``pop`` waits for an item, and returns ``None`` once the producer has
    marked the queue done and nothing is left in it.
    """

    def __init__(self, max_size: int = 10):
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self._items: deque[Any] = deque()
        self._done = False
        self._cond = threading.Condition()

    def push(self, value: Any) -> None:
        """Append a value; raises OverflowError when the queue is full."""
        with self._cond:
            if len(self._items) >= self.max_size:
                raise OverflowError(f"queue is full ({self.max_size} items)")
            self._items.append(value)
            self._cond.notify()

    def pop(self) -> Any:
        """Remove and return the oldest value, or None when done and empty."""
        with self._cond:
            self._cond.wait_for(lambda: bool(self._items) or self._done)
            return self._items.popleft() if self._items else None

    def set_done(self) -> None:
        """Mark that the producer will push nothing more."""
        with self._cond:
            self._done = True
            self._cond.notify_all()

    def is_done(self) -> bool:
        return self._done

    def is_empty(self) -> bool:
        with self._cond:
            return not self._items

    def __len__(self) -> int:
        with self._cond:
            return len(self._items)