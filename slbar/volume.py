"""Master volume from an OSS mixer device."""

from __future__ import annotations

import fcntl
import os
import struct

from .util import warn

SOUND_DEVICE_NAMES = (
    "vol", "bass", "treble", "synth", "pcm", "speaker", "line", "mic", "cd",
    "mix", "pcm2", "rec", "igain", "ogain", "line1", "line2", "line3",
    "dig1", "dig2", "dig3", "phin", "phout", "video", "radio", "monitor",
)

_SOUND_MIXER_DEVMASK = 0xFE


def _mixer_read(device: int) -> int:
    """Request number reading an int from mixer channel ``device``."""
    return (2 << 30) | (struct.calcsize("i") << 16) | (ord("M") << 8) | device


SOUND_MIXER_READ_DEVMASK = _mixer_read(_SOUND_MIXER_DEVMASK)


def _ioctl_int(fd: int, request: int) -> int:
    reply = fcntl.ioctl(fd, request, struct.pack("i", 0))
    return struct.unpack("i", reply)[0]


def vol_perc(card: str) -> str | None:
    """Volume of the master channel of mixer ``card`` in percent."""
    try:
        fd = os.open(card, os.O_RDONLY | os.O_NONBLOCK)
    except OSError as exc:
        warn(f"open '{card}': {exc.strerror or exc}")
        return None

    try:
        try:
            devmask = _ioctl_int(fd, SOUND_MIXER_READ_DEVMASK)
        except OSError as exc:
            warn(f"ioctl 'SOUND_MIXER_READ_DEVMASK': {exc.strerror or exc}")
            return None

        value = None
        for channel, name in enumerate(SOUND_DEVICE_NAMES):
            if devmask & (1 << channel) and name == "vol":
                try:
                    value = _ioctl_int(fd, _mixer_read(channel))
                except OSError as exc:
                    warn(f"ioctl 'MIXER_READ({channel})': {exc.strerror or exc}")
                    return None
    finally:
        os.close(fd)

    if value is None:
        warn(f"mixer '{card}': no volume channel")
        return None
    return str(value & 0xFF)