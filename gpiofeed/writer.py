"""Drives GPIO pins from queued buffers of frames."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Callable

from gpiofeed.frames import GPIO_PIN_COUNT, GpioFrame, parse_buffer
from gpiofeed.pin import GpioPin, PinState
from gpiofeed.pool import BufferPool, ThreadSafeQueue

log = logging.getLogger(__name__)


def pins_from_config(config: Mapping[str, Any], sysfs_root: str | Path = "/") -> list[GpioPin | None]:
    """Create the pins listed under ``GPIOPins``, placed by their 1-based ``Num``.

    The result has one slot per GPIO bit; slots with no configured pin are None.
    """
    slots: list[GpioPin | None] = [None] * GPIO_PIN_COUNT
    try:
        for name, entry in config["GPIOPins"].items():
            num = int(entry["Num"])
            if not 1 <= num <= GPIO_PIN_COUNT:
                raise ValueError(f"pin {name!r}: Num must be between 1 and {GPIO_PIN_COUNT}, got {num}")
            if slots[num - 1] is not None:
                raise ValueError(f"pin {name!r}: Num {num} is used more than once")
            slots[num - 1] = GpioPin(
                num,
                str(entry["AbsNum"]),
                str(entry["HdrNum"]),
                entry["Mode"],
                sysfs_root=sysfs_root,
            )
    except BaseException:
        for pin in slots:
            if pin is not None:
                pin.close()
        raise
    return slots


class GpioWriter:
    """Writes frames to pins, bit ``i`` of each frame going to ``pins[i]``."""

    def __init__(
        self,
        pins: Sequence[GpioPin | None],
        pool: BufferPool | None = None,
        queue: ThreadSafeQueue | None = None,
        *,
        sleep: Callable[[float], Any] | None = None,
    ):
        if len(pins) > GPIO_PIN_COUNT:
            raise ValueError(f"at most {GPIO_PIN_COUNT} pins can be driven, got {len(pins)}")
        self.pins = list(pins)
        self.pool = pool
        self.queue = queue
        self._sleep = sleep or time.sleep
        self._writing = False
        self._thread: threading.Thread | None = None

    def write_frame(self, frame: GpioFrame) -> None:
        """Set every pin from the frame, then hold for the frame's time."""
        for pin, bit in zip(self.pins, frame.pin_states()):
            if pin is not None:
                pin.digital_write(PinState(bit))
        log.info("[GpioWriter] Wrote: %08b | Holding for: %d s", frame.gpio_byte, frame.hold_s)
        self._sleep(max(0, frame.hold_s))

    def set_high(self, hold_s: float = 300) -> None:
        """Drive every pin HIGH and hold for ``hold_s`` seconds."""
        for pin in self.pins:
            if pin is not None:
                pin.digital_write(PinState.HIGH)
        self._sleep(max(0, hold_s))

    def start(self) -> None:
        """Start consuming the queue on a background thread."""
        if self.queue is None or self.pool is None:
            raise RuntimeError("writer needs a buffer pool and a queue to start")
        if self._thread is not None:
            raise RuntimeError("writer has already been started")
        self._writing = True
        self._thread = threading.Thread(target=self._run, name="gpiofeed-writer", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Ask the writing thread to stop after its current buffer."""
        self._writing = False

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the writing thread; return True once it has finished."""
        if self._thread is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def _run(self) -> None:
        while self._writing:
            buffer = self.queue.pop()
            if buffer is None:
                log.info("[GPIOWriter] FileReader is done and Buffer Queue Is Empty. Exiting..")
                break
            try:
                for frame in parse_buffer(bytes(buffer)):
                    self.write_frame(frame)
            finally:
                self.pool.release(buffer)
        self._writing = False