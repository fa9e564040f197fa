"""Control of a single BeagleBone Black GPIO pin through sysfs."""

from __future__ import annotations

import contextlib
import logging
import time
from enum import Enum, IntEnum
from pathlib import Path

log = logging.getLogger(__name__)

SYSFS_GPIO_PATH = "sys/class/gpio"
_PINMUX_DIR = "sys/devices/platform/ocp"

# Header numbering (PX_YY) is needed to switch the pinmux to GPIO; the
# absolute numbers select the pin under the sysfs GPIO directory.
HEADER_PIN_NUMS = ("P8_07", "P8_08", "P8_09", "P8_10", "P8_15", "P8_16", "P8_17", "P8_18")
ABS_PIN_NUMS = ("66", "67", "69", "68", "47", "46", "27", "65")


class PinState(IntEnum):
    LOW = 0
    HIGH = 1


class PinMode(Enum):
    INPUT = "in"
    OUTPUT = "out"


class GpioPin:
    """A GPIO pin that is muxed, exported and given a direction on creation.

    Closing the pin (or leaving its ``with`` block) unexports it.
    """

    def __init__(
        self,
        pin_num: int,
        abs_pin_num: str,
        hdr_pin_num: str,
        mode: PinMode | str = PinMode.OUTPUT,
        *,
        sysfs_root: str | Path = "/",
        poll_interval: float = 0.05,
        settle_time: float = 2.0,
        timeout: float | None = None,
    ):
        self.pin_num = pin_num
        self.abs_pin_num = str(abs_pin_num)
        self.hdr_pin_num = hdr_pin_num
        self.mode = PinMode(mode)
        self.poll_interval = poll_interval
        self.settle_time = settle_time
        self.timeout = timeout

        root = Path(sysfs_root)
        self.gpio_dir = root / SYSFS_GPIO_PATH
        self.pin_dir = self.gpio_dir / f"gpio{self.abs_pin_num}"
        self.pinmux_path = root / _PINMUX_DIR / f"ocp:{hdr_pin_num}_pinmux" / "state"
        self.value_path = self.pin_dir / "value"
        self._closed = False

        # Unexport first in case the pin was left exported.
        self._unexport()
        try:
            self._configure_pinmux()
            self._export()
            self._set_mode()
        except OSError:
            log.error("[GPIOPin%s] error initializing pin, recheck configuration", self.abs_pin_num)
            self.close()
            raise
        log.info("[GPIOPin%s] has been successfully initialized", self.abs_pin_num)

    def _write(self, path: Path, text: str, what: str) -> None:
        try:
            with open(path, "w") as handle:
                handle.write(text)
        except OSError as exc:
            raise OSError(f"[GPIOPin{self.abs_pin_num}] failed to write {what} at {path}") from exc

    def _unexport(self) -> None:
        with contextlib.suppress(OSError):
            with open(self.gpio_dir / "unexport", "w") as handle:
                handle.write(f"{self.abs_pin_num}\n")

    def _configure_pinmux(self) -> None:
        self._write(self.pinmux_path, "gpio\n", "pinmux state")

    def _wait_for(self, path: Path, what: str) -> None:
        deadline = None if self.timeout is None else time.monotonic() + self.timeout
        while not path.exists():
            if deadline is not None and time.monotonic() >= deadline:
                raise TimeoutError(f"[GPIOPin{self.abs_pin_num}] timed out waiting on {what}: {path}")
            log.debug("[GPIOPin%s] waiting on %s: %s", self.abs_pin_num, what, path)
            time.sleep(self.poll_interval)

    def _export(self) -> None:
        self._write(self.gpio_dir / "export", f"{self.abs_pin_num}\n", "GPIO export")
        self._wait_for(self.pin_dir, "export")
        log.info("[GPIOPin%s] exported successfully", self.abs_pin_num)
        if self.settle_time > 0:
            time.sleep(self.settle_time)

    def _set_mode(self) -> None:
        direction = self.pin_dir / "direction"
        self._wait_for(direction, "direction file")
        self._write(direction, f"{self.mode.value}\n", "direction")

    def digital_write(self, state: PinState | int) -> None:
        """Drive the pin LOW or HIGH."""
        state = PinState(state)
        self._write(self.value_path, f"{int(state)}\n", "value")

    def digital_read(self) -> PinState:
        """Read the current pin value."""
        try:
            text = self.value_path.read_text()
        except OSError as exc:
            raise OSError(f"[GPIOPin{self.abs_pin_num}] failed to read value at {self.value_path}") from exc
        try:
            return PinState(int(text.strip()))
        except ValueError as exc:
            raise ValueError(f"[GPIOPin{self.abs_pin_num}] unexpected pin value {text!r}") from exc

    def close(self) -> None:
        """Unexport the pin; further calls do nothing."""
        if self._closed:
            return
        self._closed = True
        log.info("[GPIOPin%s] unexporting pin", self.abs_pin_num)
        self._unexport()

    def __enter__(self) -> GpioPin:
        return self

    def __exit__(self, *args) -> None:
        self.close()