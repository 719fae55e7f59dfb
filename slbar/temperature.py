"""Temperature from a thermal sensor file reporting millidegrees Celsius."""

from __future__ import annotations

from .util import read_int


def temp(file: str) -> str | None:
    """Whole degrees Celsius read from sensor ``file``."""
    millidegrees = read_int(file)
    if millidegrees is None:
        return None
    degrees = abs(millidegrees) // 1000
    return str(degrees if millidegrees >= 0 else -degrees)