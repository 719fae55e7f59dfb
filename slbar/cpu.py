"""CPU frequency and utilisation."""

from __future__ import annotations

from dataclasses import dataclass, field

from .util import fmt_human, read_int, read_text

CPU_FREQ_PATH = "/sys/devices/system/cpu/cpu0/cpufreq/scaling_cur_freq"
PROC_STAT = "/proc/stat"


def cpu_freq() -> str | None:
    """Current frequency of the first CPU, scaled with decimal prefixes."""
    freq_khz = read_int(CPU_FREQ_PATH)
    if freq_khz is None:
        return None
    return fmt_human(freq_khz * 1000, 1000)


@dataclass
class CpuUsage:
    """Utilisation computed from the difference between successive samples."""

    path: str = PROC_STAT
    _previous: tuple[float, ...] | None = field(default=None, repr=False)

    def _read(self) -> tuple[float, ...] | None:
        text = read_text(self.path)
        if text is None:
            return None
        fields = text.split()[1:8]
        if len(fields) != 7:
            return None
        try:
            return tuple(float(value) for value in fields)
        except ValueError:
            return None

    def sample(self) -> str | None:
        """Percentage of non-idle time since the previous sample, or None."""
        current = self._read()
        if current is None:
            return None
        previous, self._previous = self._previous, current
        if previous is None or previous[0] == 0:
            return None

        total = sum(previous) - sum(current)
        if total == 0:
            return None

        busy = [0, 1, 2, 5, 6]
        used = sum(previous[i] for i in busy) - sum(current[i] for i in busy)
        return str(int(100 * used / total))


_usage = CpuUsage()


def cpu_perc() -> str | None:
    """System-wide CPU utilisation in percent since the last call."""
    return _usage.sample()