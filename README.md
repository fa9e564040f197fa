# gpiofeed

gpiofeed replays a recorded stream of GPIO frames on up to eight GPIO pins
of a BeagleBone Black. It uses the Linux sysfs GPIO interface.

## Command file format

A command file is a flat binary sequence of packed 5-byte frames:

| bytes | meaning                                                     |
|-------|-------------------------------------------------------------|
| 0     | pin values; bit *i* drives the pin configured with `Num` *i + 1* |
| 1–4   | hold time in seconds, signed 32-bit little-endian           |

The file is read in buffers of 50 frames (250 bytes). A reader thread fills
buffers from a pool of 50 and puts them on a queue. A writer thread sets the
pins for each frame and then waits for that frame's hold time. A negative hold
time counts as zero. If the file ends partway through a buffer, that last
partial buffer is dropped.

## Installation

```
pip install .
```

## Configuration

The program reads a JSON file. The file names the command file and describes
each pin:

```json
{
  "GPIOCmdsFile": "/home/debian/commands.bin",
  "GPIOPins": {
    "Pin01": {"Num": 1, "AbsNum": "66", "HdrNum": "P8_07", "Mode": "out"},
    "Pin02": {"Num": 2, "AbsNum": "67", "HdrNum": "P8_08", "Mode": "out"}
  }
}
```

- `GPIOCmdsFile` (required, string): path to the command file.
- `Num`: the pin's position, 1–8, matching bit `Num - 1` of each frame.
  Each number may be used only once.
- `AbsNum`: the sysfs GPIO number.
- `HdrNum`: the header pin name, used to set the pinmux to `gpio`.
- `Mode`: `in` or `out`.

Bits that have no pin configured are ignored.

## Running

```
gpiofeed /path/to/config.json
gpiofeed /path/to/config.json --sysfs-root /some/root
```

`--sysfs-root` (default `/`) is the directory under which
`sys/class/gpio` and `sys/devices/platform/ocp` are looked up.

When each pin is set up, it is unexported, muxed to GPIO, exported and
given its direction. The program then plays the whole command file and
exits once the last full buffer has been written. Ctrl-C stops it early.
All pins are unexported on the way out. A missing config argument, an
unreadable config or command file, or a bad pin entry makes the command
print an error and exit with status 1.

## Using the library

```python
from gpiofeed.frames import GpioFrame, parse_buffer
from gpiofeed.pool import BufferPool, ThreadSafeQueue
from gpiofeed.pin import GpioPin, PinState, PinMode
from gpiofeed.reader import FileReader
from gpiofeed.writer import GpioWriter, pins_from_config
from gpiofeed.cli import load_config, main

frame = GpioFrame(gpio_byte=0b0000_0101, hold_s=2)
data = frame.to_bytes()
assert GpioFrame.from_bytes(data) == frame
assert parse_buffer(data * 2) == [frame, frame]
print(frame.describe())   # GPIO: 00000101 | Hold: 2 s
print(frame.pin_states()) # (1, 0, 1, 0, 0, 0, 0, 0)
```

- `gpiofeed.frames`: the `GpioFrame` dataclass and `parse_buffer`.
  `GpioFrame` checks that `gpio_byte` fits in one byte and `hold_s` fits in
  32 bits. `parse_buffer` raises `ValueError` unless the data is a whole
  number of frames.
- `gpiofeed.pool`:
  - `BufferPool` hands out preallocated buffers. `get` blocks until one is
    free. `release` raises `ValueError` for a foreign buffer or a second
    release.
  - `ThreadSafeQueue` is a bounded FIFO. `push` raises `OverflowError` when
    the queue is full. `pop` blocks, and returns `None` once `set_done` has
    been called and the queue is empty.
- `gpiofeed.pin`: `GpioPin` sets up a pin with `digital_write` and
  `digital_read`. It is a context manager, and leaving the `with` block
  unexports the pin. `PinState` is `LOW`/`HIGH` and `PinMode` is
  `INPUT`/`OUTPUT`. Passing `timeout=` makes the waits for export and for
  the direction file raise `TimeoutError`. By default they wait forever.
- `gpiofeed.reader`: `FileReader` with `start`, `join` and `close`.
- `gpiofeed.writer`:
  - `pins_from_config` builds the eight pin slots from a config mapping.
  - `GpioWriter` has `write_frame`, `set_high`, `start`, `stop` and `join`.
    It takes an optional `sleep` callable, so that tests can skip real hold
    times.

## Limits

gpiofeed only uses the legacy sysfs GPIO files. It has no support for the
GPIO character device. The pinmux path it uses is the one found on the
BeagleBone Black.

## Tests

```
pip install .[test]
pytest
```