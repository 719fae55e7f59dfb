"""Command-line entry point: build the status line and publish it."""

from __future__ import annotations

import os
import signal
import socket
import struct
import sys
import threading
import time
from dataclasses import dataclass
from typing import Iterable

from . import config, util
from .config import Item

_X_PROTOCOL_MAJOR = 11
_X_CHANGE_PROPERTY = 18
_X_ATOM_WM_NAME = 39
_X_ATOM_STRING = 31
_X_TCP_PORT = 6000
_X_UNIX_SOCKET = "/tmp/.X11-unix/X{}"
_XAUTH_FAMILY_WILD = 65535
_XAUTH_COOKIE = b"MIT-MAGIC-COOKIE-1"


@dataclass(frozen=True)
class Options:
    """Parsed command-line flags."""

    single: bool = False
    once: bool = False


def _usage() -> None:
    util.die(f"usage: {util.argv0 or 'slbar'} [-s] [-1]")


def parse_args(argv: Iterable[str]) -> Options:
    """Parse ``-s`` (print to stdout) and ``-1`` (print once) from ``argv``."""
    single = once = False
    args = list(argv)
    while args and args[0].startswith("-") and len(args[0]) > 1:
        arg = args.pop(0)
        if arg == "--":
            break
        for flag in arg[1:]:
            if flag == "1":
                once = single = True
            elif flag == "s":
                single = True
            else:
                _usage()
    if args:
        _usage()
    return Options(single=single, once=once)


def build_status(
    items: Iterable[Item],
    unknown: str = config.UNKNOWN_STR,
    maxlen: int = config.MAXLEN,
) -> str:
    """Concatenate rendered items, stopping before the first that does not fit."""
    parts: list[str] = []
    used = 0
    for item in items:
        piece = item.render(unknown)
        size = len(piece.encode())
        if size >= maxlen - used:
            util.warn("vsnprintf: Output truncated")
            break
        parts.append(piece)
        used += size
    return "".join(parts)


def _pad(data: bytes) -> bytes:
    return data + b"\0" * (-len(data) % 4)


def _recv_exact(sock: socket.socket, size: int) -> bytes:
    chunks = bytearray()
    while len(chunks) < size:
        chunk = sock.recv(size - len(chunks))
        if not chunk:
            raise OSError("X server closed the connection")
        chunks.extend(chunk)
    return bytes(chunks)


def _parse_display(display: str) -> tuple[str, int, int]:
    host, colon, rest = display.rpartition(":")
    if not colon:
        raise ValueError(f"invalid display {display!r}")
    number, _, screen = rest.partition(".")
    try:
        return host, int(number), int(screen) if screen else 0
    except ValueError:
        raise ValueError(f"invalid display {display!r}") from None


def _read_cookie(number: int, hostname: bytes) -> tuple[bytes, bytes]:
    path = os.environ.get("XAUTHORITY") or os.path.join(
        os.path.expanduser("~"), ".Xauthority"
    )
    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError:
        return b"", b""

    wanted = str(number).encode()
    fallback: tuple[bytes, bytes] | None = None
    pos = 0
    while pos + 2 <= len(data):
        (family,) = struct.unpack_from(">H", data, pos)
        pos += 2
        fields = []
        for _ in range(4):
            if pos + 2 > len(data):
                return fallback or (b"", b"")
            (length,) = struct.unpack_from(">H", data, pos)
            pos += 2
            fields.append(data[pos:pos + length])
            pos += length
        address, display_number, name, cookie = fields
        if name != _XAUTH_COOKIE:
            continue
        if display_number and display_number != wanted:
            continue
        if family == _XAUTH_FAMILY_WILD or address == hostname:
            return name, cookie
        if fallback is None:
            fallback = (name, cookie)
    return fallback or (b"", b"")


def _root_window(body: bytes, screen: int) -> int:
    (vendor_len,) = struct.unpack_from("<H", body, 16)
    screens, formats = body[20], body[21]
    if screen >= screens:
        raise ValueError(f"screen {screen} does not exist")
    offset = 32 + len(_pad(bytes(vendor_len))) + 8 * formats
    for index in range(screens):
        (root,) = struct.unpack_from("<I", body, offset)
        if index == screen:
            return root
        depths = body[offset + 39]
        offset += 40
        for _ in range(depths):
            (visuals,) = struct.unpack_from("<H", body, offset + 2)
            offset += 8 + 24 * visuals
    raise ValueError(f"screen {screen} does not exist")


class _XConnection:
    """Minimal X11 client able to set the root window name."""

    def __init__(self, display: str | None) -> None:
        if not display:
            raise ValueError("DISPLAY is not set")
        host, number, screen = _parse_display(display)
        if host in ("", "unix"):
            sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
            try:
                sock.connect(_X_UNIX_SOCKET.format(number))
            except OSError:
                sock.close()
                raise
            auth_host = socket.gethostname().encode()
        else:
            sock = socket.create_connection((host, _X_TCP_PORT + number))
            auth_host = host.encode()

        try:
            self.root = self._handshake(sock, number, screen, auth_host)
        except (OSError, ValueError, struct.error):
            sock.close()
            raise
        self._sock = sock

    @staticmethod
    def _handshake(
        sock: socket.socket, number: int, screen: int, auth_host: bytes
    ) -> int:
        name, cookie = _read_cookie(number, auth_host)
        request = struct.pack(
            "<BxHHHH2x", 0x6C, _X_PROTOCOL_MAJOR, 0, len(name), len(cookie)
        )
        sock.sendall(request + _pad(name) + _pad(cookie))
        head = _recv_exact(sock, 8)
        (extra,) = struct.unpack_from("<H", head, 6)
        body = _recv_exact(sock, extra * 4)
        if head[0] != 1:
            reason = body[: head[1]] if head[0] == 0 else body
            text = reason.rstrip(b"\0").decode(errors="replace").strip()
            raise OSError(f"X server refused connection: {text}")
        return _root_window(body, screen)

    def store_name(self, name: bytes) -> None:
        """Replace WM_NAME of the root window with ``name``."""
        padded = _pad(name)
        request = struct.pack(
            "<BBHIIIB3xI",
            _X_CHANGE_PROPERTY,
            0,
            6 + len(padded) // 4,
            self.root,
            _X_ATOM_WM_NAME,
            _X_ATOM_STRING,
            8,
            len(name),
        )
        self._sock.sendall(request + padded)

    def close(self) -> None:
        self._sock.close()


def main(argv: list[str] | None = None) -> int:
    """Run the status loop; returns the exit status."""
    if argv is None:
        argv = sys.argv[1:]
    util.argv0 = sys.argv[0] if sys.argv and sys.argv[0] else "slbar"
    options = parse_args(argv)

    wake = threading.Event()
    done = options.once

    def terminate(signo: int, _frame: object) -> None:
        nonlocal done
        if signo != signal.SIGUSR1:
            done = True
        wake.set()

    previous = {}
    if threading.current_thread() is threading.main_thread():
        for signo in (signal.SIGINT, signal.SIGTERM, signal.SIGUSR1):
            previous[signo] = signal.signal(signo, terminate)

    display: _XConnection | None = None
    try:
        if not options.single:
            try:
                display = _XConnection(os.environ.get("DISPLAY"))
            except (OSError, ValueError):
                util.die("XOpenDisplay: Failed to open display")

        while True:
            start = time.monotonic()
            status = build_status(config.ITEMS, config.UNKNOWN_STR, config.MAXLEN)

            if display is None:
                try:
                    print(status, flush=True)
                except OSError as exc:
                    util.die(f"puts: {exc.strerror or exc}")
            else:
                try:
                    display.store_name(status.encode())
                except OSError:
                    util.die("XStoreName: Allocation failed")

            if not done:
                wait = config.INTERVAL_MS / 1000 - (time.monotonic() - start)
                if wait >= 0:
                    wake.wait(wait)
                    wake.clear()
            if done:
                break
    finally:
        for signo, handler in previous.items():
            signal.signal(signo, handler)
        if display is not None:
            try:
                display.store_name(b"")
            except OSError:
                pass
            try:
                display.close()
            except OSError:
                util.die("XCloseDisplay: Failed to close display")

    return 0


if __name__ == "__main__":
    sys.exit(main())