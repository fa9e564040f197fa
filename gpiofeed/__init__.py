"""Replay binary GPIO frame files onto BeagleBone Black sysfs GPIO pins."""

__version__ = "1.0.0"
__all__ = ["frames", "pool", "pin", "reader", "writer", "cli"]