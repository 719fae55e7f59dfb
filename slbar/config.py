"""Status bar layout: update interval, fallback text and the list of items."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable

from .battery import battery_perc
from .cpu import cpu_freq
from .memory import ram_free, ram_used
from .network import wifi_essid, wifi_perc
from .system import datetime, separator, uptime

#: Interval between updates, in milliseconds.
INTERVAL_MS = 1000

#: Text shown when a component cannot produce a value.
UNKNOWN_STR = "n/a"

#: Maximum length of the whole status line, in bytes.
MAXLEN = 2048

_NO_ARGUMENT: Any = object()

_DIRECTIVE_RE = re.compile(r"%(.?)", re.DOTALL)


def _format(fmt: str, value: str) -> str:
    """Expand ``%s`` to ``value`` and ``%%`` to a percent sign."""

    def replace(match: re.Match[str]) -> str:
        conversion = match.group(1)
        if conversion == "%":
            return "%"
        if conversion == "s":
            return value
        raise ValueError(f"unsupported conversion '%{conversion}' in {fmt!r}")

    return _DIRECTIVE_RE.sub(replace, fmt)


@dataclass(frozen=True)
class Item:
    """One component of the status line and the format it is shown with."""

    func: Callable[..., str | None]
    fmt: str
    argument: Any = _NO_ARGUMENT

    def render(self, unknown: str) -> str:
        """Run the component and format its value, using ``unknown`` on failure."""
        if self.argument is _NO_ARGUMENT:
            value = self.func()
        else:
            value = self.func(self.argument)
        if value is None:
            value = unknown
        return _format(self.fmt, value)


ITEMS: tuple[Item, ...] = (
    Item(uptime, "^c#d9dbda^ up %s "),
    Item(battery_perc, "^c#b1e0c5^ battery %s ", "BAT1"),
    Item(cpu_freq, "^c#bbd5d4^ cpu %s "),
    Item(ram_used, "^c#d5d5bb^ mem %s"),
    Item(separator, "^c#d5d5bb^/", None),
    Item(ram_free, "^c#d5d5bb^%s "),
    Item(wifi_perc, "^c#bbd5bd^ wlp0s20f3 %s%% ", "wlp0s20f3"),
    Item(wifi_essid, "^c#bbd5bd^ %s ", "wlp0s20f3"),
    Item(datetime, "^c#c8c7dc^ %s ", "%b %d %Y, %R"),
)