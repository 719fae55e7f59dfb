"""Shared helpers: diagnostics, human-readable sizes and sysfs/procfs reads."""

from __future__ import annotations

import re
import sys

#: Program name used to prefix diagnostics; set by the command-line entry point.
argv0: str | None = None

_PREFIXES = {
    1000: ("", "k", "M", "G", "T", "P", "E", "Z", "Y"),
    1024: ("", "Ki", "Mi", "Gi", "Ti", "Pi", "Ei", "Zi", "Yi"),
}

_INT_RE = re.compile(r"\s*([+-]?\d+)")


def warn(message: str) -> None:
    """Write a diagnostic line to standard error."""
    if argv0 and not message.startswith("usage"):
        message = f"{argv0}: {message}"
    print(message, file=sys.stderr)


def die(message: str) -> None:
    """Write a diagnostic line and exit with status 1."""
    warn(message)
    raise SystemExit(1)


def fmt_human(num: float, base: int) -> str:
    """Scale ``num`` by ``base`` (1000 or 1024) and add the matching unit prefix."""
    try:
        prefixes = _PREFIXES[base]
    except KeyError:
        raise ValueError(f"fmt_human: Invalid base {base!r}") from None

    scaled = float(num)
    index = 0
    while index < len(prefixes) - 1 and scaled >= base:
        scaled /= base
        index += 1
    return f"{scaled:.1f} {prefixes[index]}"


def read_text(path: str) -> str | None:
    """Return the contents of ``path``, or None (with a warning) if it cannot be read."""
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            return handle.read()
    except OSError as exc:
        warn(f"fopen '{path}': {exc.strerror or exc}")
        return None


def read_int(path: str) -> int | None:
    """Return the leading integer of the file at ``path``, or None."""
    text = read_text(path)
    if text is None:
        return None
    match = _INT_RE.match(text)
    return int(match.group(1)) if match else None