"""Small system facts: time, host, kernel, load, users and shell commands."""

from __future__ import annotations

import os
import pwd
import socket
import subprocess
import time

from .util import read_int, warn

ENTROPY_PATH = "/proc/sys/kernel/random/entropy_avail"

_BUFFER_SIZE = 1024
_LINE_LIMIT = _BUFFER_SIZE - 2

if hasattr(time, "CLOCK_BOOTTIME"):
    _UPTIME_CLOCK = time.CLOCK_BOOTTIME
elif hasattr(time, "CLOCK_UPTIME"):
    _UPTIME_CLOCK = time.CLOCK_UPTIME
else:
    _UPTIME_CLOCK = time.CLOCK_MONOTONIC


def datetime(fmt: str) -> str | None:
    """Local time formatted with strftime ``fmt``."""
    result = time.strftime(fmt, time.localtime())
    if not result or len(result.encode()) >= _BUFFER_SIZE:
        warn("strftime: Result string exceeds buffer size")
        return None
    return result


def entropy() -> str | None:
    """Entropy available in the kernel pool."""
    value = read_int(ENTROPY_PATH)
    return None if value is None else str(value)


def hostname() -> str | None:
    """Name of this host."""
    try:
        return socket.gethostname()
    except OSError as exc:
        warn(f"gethostname: {exc.strerror or exc}")
        return None


def kernel_release() -> str | None:
    """Kernel release, as printed by ``uname -r``."""
    try:
        return os.uname().release
    except OSError as exc:
        warn(f"uname: {exc.strerror or exc}")
        return None


def load_avg() -> str | None:
    """1, 5 and 15 minute load averages."""
    try:
        one, five, fifteen = os.getloadavg()
    except OSError:
        warn("getloadavg: Failed to obtain load average")
        return None
    return f"{one:.2f} {five:.2f} {fifteen:.2f}"


def num_files(path: str) -> str | None:
    """Number of entries in directory ``path``."""
    try:
        with os.scandir(path) as entries:
            count = sum(1 for _ in entries)
    except OSError as exc:
        warn(f"opendir '{path}': {exc.strerror or exc}")
        return None
    return str(count)


def run_command(cmd: str) -> str | None:
    """First line printed by shell command ``cmd``, or None if it is empty."""
    try:
        completed = subprocess.run(
            cmd, shell=True, stdout=subprocess.PIPE, check=False
        )
    except OSError as exc:
        warn(f"popen '{cmd}': {exc.strerror or exc}")
        return None

    output = completed.stdout.decode(errors="replace")
    if not output:
        return None
    line = output[:_LINE_LIMIT]
    newline = line.find("\n")
    if newline >= 0:
        line = line[:newline]
    return line or None


def separator(separator: str) -> str:
    """Return ``separator`` unchanged."""
    return separator


def uptime() -> str | None:
    """Time since boot as 'Hh Mm'."""
    try:
        seconds = int(time.clock_gettime(_UPTIME_CLOCK))
    except OSError:
        warn(f"clock_gettime {_UPTIME_CLOCK}")
        return None
    hours, rest = divmod(seconds, 3600)
    return f"{hours}h {rest // 60}m"


def gid() -> str:
    """Real group id of this process."""
    return str(os.getgid())


def username() -> str | None:
    """Name of the effective user."""
    euid = os.geteuid()
    try:
        return pwd.getpwuid(euid).pw_name
    except KeyError:
        warn(f"getpwuid '{euid}': no such user")
        return None


def uid() -> str:
    """Effective user id of this process."""
    return str(os.geteuid())