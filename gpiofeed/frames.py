"""Binary GPIO command frames and the layout of the command file."""

from __future__ import annotations

import struct
from dataclasses import dataclass

# One packed frame: an unsigned byte of pin values followed by a signed
# 32-bit hold time in seconds, with no padding in between.
_FRAME = struct.Struct("<Bi")

FRAME_SIZE = _FRAME.size
GPIO_PIN_COUNT = 8
BUFFER_FRAMES = 50
BUFFER_BYTES = FRAME_SIZE * BUFFER_FRAMES
QUEUE_SIZE = 50

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


@dataclass(frozen=True)
class GpioFrame:
    """Eight GPIO pin values and how long to hold them, in seconds."""

    gpio_byte: int = 0
    hold_s: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.gpio_byte <= 0xFF:
            raise ValueError(f"gpio_byte must fit in one byte, got {self.gpio_byte}")
        if not _INT32_MIN <= self.hold_s <= _INT32_MAX:
            raise ValueError(f"hold_s must fit in a signed 32-bit integer, got {self.hold_s}")

    def to_bytes(self) -> bytes:
        """Return the packed on-disk form of this frame."""
        return _FRAME.pack(self.gpio_byte, self.hold_s)

    @classmethod
    def from_bytes(cls, data: bytes) -> GpioFrame:
        """Build a frame from exactly one packed frame of bytes."""
        if len(data) != FRAME_SIZE:
            raise ValueError(f"a frame is {FRAME_SIZE} bytes, got {len(data)}")
        gpio_byte, hold_s = _FRAME.unpack(data)
        return cls(gpio_byte, hold_s)

    def pin_states(self) -> tuple[int, ...]:
        """Return the value (0 or 1) of each pin, pin 0 being the lowest bit."""
        return tuple((self.gpio_byte >> bit) & 1 for bit in range(GPIO_PIN_COUNT))

    def describe(self) -> str:
        """Return a one-line human readable summary of the frame."""
        return f"GPIO: {self.gpio_byte:08b} | Hold: {self.hold_s} s"


def parse_buffer(data: bytes) -> list[GpioFrame]:
    """Split packed bytes into frames; the length must be a whole number of frames."""
    if len(data) % FRAME_SIZE:
        raise ValueError(
            f"buffer length {len(data)} is not a multiple of the frame size {FRAME_SIZE}"
        )
    if not data:
        return []
    return [GpioFrame(gpio_byte, hold_s) for gpio_byte, hold_s in _FRAME.iter_unpack(data)]