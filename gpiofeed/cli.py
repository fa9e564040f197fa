"""Command line entry point: play a GPIO command file onto the pins."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from gpiofeed.reader import FileReader
from gpiofeed.writer import GpioWriter, pins_from_config


def load_config(path: str | Path) -> dict[str, Any]:
    """Load the JSON configuration and check it names a command file."""
    with open(path, encoding="utf-8") as handle:
        config = json.load(handle)
    if not isinstance(config, dict):
        raise ValueError("configuration must be a JSON object")
    if not isinstance(config.get("GPIOCmdsFile"), str):
        raise ValueError("configuration must name the command file in 'GPIOCmdsFile'")
    return config


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="gpiofeed", description="Play a GPIO command file onto pins.")
    parser.add_argument("config", nargs="?", help="path to the JSON config file")
    parser.add_argument("--sysfs-root", default="/", help="root under which sysfs is found")
    args = parser.parse_args(argv)

    if args.config is None:
        print(f"Usage: {parser.prog} [/path/to/json-config-file]", file=sys.stderr)
        return 1

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    try:
        config = load_config(args.config)
        reader = FileReader(config["GPIOCmdsFile"])
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    try:
        pins = pins_from_config(config, args.sysfs_root)
    except (OSError, ValueError, KeyError, TimeoutError) as exc:
        reader.close()
        print(f"error: bad pin configuration: {exc}", file=sys.stderr)
        return 1

    writer = GpioWriter(pins, reader.pool, reader.queue)
    try:
        reader.start()
        writer.start()
        writer.join()
    except KeyboardInterrupt:
        print("Interrupt received.")
        writer.stop()
    finally:
        if reader.join(timeout=1.0):
            reader.close()
        for pin in pins:
            if pin is not None:
                pin.close()

    print("Exiting")
    return 0