"""Interface addresses, traffic rates and wireless link details."""

from __future__ import annotations

import array
import fcntl
import ipaddress
import os
import re
import socket
import struct
from dataclasses import dataclass, field

from .util import fmt_human, read_int, read_text, warn

NET_CLASS_DIR = "/sys/class/net"
IF_INET6_PATH = "/proc/net/if_inet6"
PROC_WIRELESS = "/proc/net/wireless"

#: Update interval in milliseconds used to turn byte deltas into rates.
INTERVAL_MS = 1000

IFNAMSIZ = 16
IW_ESSID_MAX_SIZE = 32
SIOCGIFADDR = 0x8915
SIOCGIWESSID = 0x8B1B

_IFREQ_SIZE = 40
_IWREQ_SIZE = 32
_WIRELESS_LINE_MAX = 1022
_WIRELESS_QUALITY_MAX = 70
_COUNTER_MODULUS = 2**64
_LINK_QUALITY_RE = re.compile(r"\s*[+-]?\d+\s*([+-]?\d+)")


def _interface_name(interface: str) -> bytes | None:
    name = interface.encode()
    if len(name) >= IFNAMSIZ:
        return None
    return name


def ipv4(interface: str) -> str | None:
    """IPv4 address of ``interface`` in dotted-quad form, or None."""
    name = _interface_name(interface)
    if name is None:
        return None
    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    except OSError as exc:
        warn(f"socket 'AF_INET': {exc.strerror or exc}")
        return None
    with sock:
        request = struct.pack(f"{IFNAMSIZ}s", name).ljust(_IFREQ_SIZE, b"\0")
        try:
            reply = fcntl.ioctl(sock.fileno(), SIOCGIFADDR, request)
        except OSError:
            return None
    return socket.inet_ntoa(reply[20:24])


def ipv6(interface: str) -> str | None:
    """First IPv6 address of ``interface``; link-local ones carry a zone suffix."""
    text = read_text(IF_INET6_PATH)
    if text is None:
        return None
    for line in text.splitlines():
        fields = line.split()
        if len(fields) < 6 or fields[5] != interface:
            continue
        try:
            address = ipaddress.IPv6Address(bytes.fromhex(fields[0]))
        except ValueError:
            continue
        host = str(address)
        if address.is_link_local:
            host = f"{host}%{interface}"
        return host
    return None


@dataclass
class ByteRate:
    """Transfer rate of one direction, from the change of a byte counter."""

    direction: str = "rx"
    interval: int = INTERVAL_MS
    root: str = NET_CLASS_DIR
    _previous: int = field(default=0, repr=False)

    def __post_init__(self) -> None:
        if self.direction not in ("rx", "tx"):
            raise ValueError(f"direction must be 'rx' or 'tx', not {self.direction!r}")
        if self.interval <= 0:
            raise ValueError("interval must be positive")

    def sample(self, interface: str) -> str | None:
        """Bytes per second on ``interface`` since the previous sample, or None."""
        path = os.path.join(
            self.root, interface, "statistics", f"{self.direction}_bytes"
        )
        current = read_int(path)
        if current is None:
            return None
        previous, self._previous = self._previous, current
        if previous == 0:
            return None
        delta = ((current - previous) * 1000) % _COUNTER_MODULUS
        return fmt_human(delta // self.interval, 1024)


_rx = ByteRate("rx")
_tx = ByteRate("tx")


def netspeed_rx(interface: str) -> str | None:
    """Receive rate of ``interface`` since the last call."""
    return _rx.sample(interface)


def netspeed_tx(interface: str) -> str | None:
    """Transmit rate of ``interface`` since the last call."""
    return _tx.sample(interface)


def wifi_perc(interface: str) -> str | None:
    """Link quality of wireless ``interface`` in percent, or None if it is down."""
    state = read_text(os.path.join(NET_CLASS_DIR, interface, "operstate"))
    if state is None or not state.startswith("up\n"):
        return None

    text = read_text(PROC_WIRELESS)
    if text is None:
        return None
    lines = text.splitlines(keepends=True)
    if len(lines) < 3:
        return None
    line = lines[2][:_WIRELESS_LINE_MAX]

    position = line.find(interface)
    if position < 0:
        return None
    match = _LINK_QUALITY_RE.match(line, position + len(interface) + 2)
    if match is None:
        return None
    quality = int(match.group(1))
    return str(int(quality / _WIRELESS_QUALITY_MAX * 100))


def wifi_essid(interface: str) -> str | None:
    """ESSID the wireless ``interface`` is associated with, or None."""
    name = _interface_name(interface)
    if name is None:
        warn("vsnprintf: Output truncated")
        return None
    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    except OSError as exc:
        warn(f"socket 'AF_INET': {exc.strerror or exc}")
        return None

    essid = array.array("B", bytes(IW_ESSID_MAX_SIZE + 1))
    address, _ = essid.buffer_info()
    request = bytearray(
        struct.pack(f"{IFNAMSIZ}sPHH", name, address, IW_ESSID_MAX_SIZE + 1, 0)
    )
    request.extend(bytes(max(0, _IWREQ_SIZE - len(request))))
    with sock:
        try:
            fcntl.ioctl(sock.fileno(), SIOCGIWESSID, request, True)
        except OSError as exc:
            warn(f"ioctl 'SIOCGIWESSID': {exc.strerror or exc}")
            return None

    value = essid.tobytes().split(b"\0", 1)[0]
    if not value:
        return None
    return value.decode(errors="replace")