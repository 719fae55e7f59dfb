"""Memory and swap usage from /proc/meminfo."""

from __future__ import annotations

import re

from .util import fmt_human, read_text

MEMINFO_PATH = "/proc/meminfo"

_LINE_RE = re.compile(r"^([^:\s]+):\s*([+-]?\d+)", re.MULTILINE)


def _meminfo() -> dict[str, int] | None:
    text = read_text(MEMINFO_PATH)
    if text is None:
        return None
    return {name: int(value) for name, value in _LINE_RE.findall(text)}


def _fields(*names: str) -> tuple[int, ...] | None:
    info = _meminfo()
    if info is None:
        return None
    try:
        return tuple(info[name] for name in names)
    except KeyError:
        return None


def _trunc_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator >= 0) else -quotient


def ram_free() -> str | None:
    """Memory available for new allocations, binary prefixes."""
    values = _fields("MemAvailable")
    if values is None:
        return None
    (available,) = values
    return fmt_human(available * 1024, 1024)


def ram_perc() -> str | None:
    """Memory in use, excluding buffers and page cache, in percent."""
    values = _fields("MemTotal", "MemFree", "Buffers", "Cached")
    if values is None:
        return None
    total, free, buffers, cached = values
    if total == 0:
        return None
    return str(_trunc_div(100 * ((total - free) - (buffers + cached)), total))


def ram_total() -> str | None:
    """Total usable memory, binary prefixes."""
    values = _fields("MemTotal")
    if values is None:
        return None
    (total,) = values
    return fmt_human(total * 1024, 1024)


def ram_used() -> str | None:
    """Memory in use, excluding buffers and page cache, binary prefixes."""
    values = _fields("MemTotal", "MemFree", "Buffers", "Cached")
    if values is None:
        return None
    total, free, buffers, cached = values
    return fmt_human((total - free - buffers - cached) * 1024, 1024)


def swap_free() -> str | None:
    """Unused swap space, binary prefixes."""
    values = _fields("SwapFree")
    if values is None:
        return None
    (free,) = values
    return fmt_human(free * 1024, 1024)


def swap_perc() -> str | None:
    """Swap in use, excluding swap cache, in percent."""
    values = _fields("SwapTotal", "SwapFree", "SwapCached")
    if values is None:
        return None
    total, free, cached = values
    if total == 0:
        return None
    return str(_trunc_div(100 * (total - free - cached), total))


def swap_total() -> str | None:
    """Total swap space, binary prefixes."""
    values = _fields("SwapTotal")
    if values is None:
        return None
    (total,) = values
    return fmt_human(total * 1024, 1024)


def swap_used() -> str | None:
    """Swap in use, excluding swap cache, binary prefixes."""
    values = _fields("SwapTotal", "SwapFree", "SwapCached")
    if values is None:
        return None
    total, free, cached = values
    return fmt_human((total - free - cached) * 1024, 1024)