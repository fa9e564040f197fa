"""Reads packed GPIO frames from a command file into pooled buffers."""

from __future__ import annotations

import logging
import threading
import time
from pathlib import Path

from gpiofeed.frames import QUEUE_SIZE
from gpiofeed.pool import BufferPool, ThreadSafeQueue

log = logging.getLogger(__name__)


class FileReader:
    """Fills buffers from a command file on a background thread and queues them.

    Each queued item is a buffer taken from ``pool``; whoever pops it from
    ``queue`` must release it back to the pool.  Once the file is exhausted
    the queue is marked done.  A trailing part-buffer is dropped.
    """

    def __init__(
        self,
        file_path: str | Path,
        pool: BufferPool | None = None,
        queue: ThreadSafeQueue | None = None,
        *,
        delay: float = 5e-6,
    ):
        self.file_path = Path(file_path)
        try:
            self._file = open(self.file_path, "rb")
        except OSError:
            log.error("[FileReader] Error opening command file %s", self.file_path)
            raise
        log.info("[FileReader] Successfully opened command file %s", self.file_path)
        self.pool = pool if pool is not None else BufferPool(QUEUE_SIZE)
        self.queue = queue if queue is not None else ThreadSafeQueue(QUEUE_SIZE)
        self.delay = delay
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        """Start reading on a background thread."""
        if self._thread is not None:
            raise RuntimeError("reader has already been started")
        self._thread = threading.Thread(target=self._run, name="gpiofeed-reader", daemon=True)
        self._thread.start()

    def _run(self) -> None:
        try:
            while True:
                buffer = self.pool.get()
                count = self._file.readinto(buffer)
                if count != len(buffer):
                    self.pool.release(buffer)
                    if count:
                        log.warning("[FileReader] dropping %d trailing bytes", count)
                    break
                self.queue.push(buffer)
                if self.delay > 0:
                    time.sleep(self.delay)
        finally:
            log.info("[FileReader] End of File Reached")
            self.queue.set_done()

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the reading thread; return True once it has finished."""
        if self._thread is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def close(self) -> None:
        """Wait for reading to finish and close the command file."""
        self.join()
        self._file.close()