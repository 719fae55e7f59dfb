"""Battery charge, state and remaining time from the power-supply sysfs class."""

from __future__ import annotations

import os

from .util import read_int, read_text

POWER_SUPPLY_DIR = "/sys/class/power_supply"

_STATE_SYMBOLS = {
    "Charging": "+",
    "Discharging": "-",
    "Full": "o",
}


def _battery_file(bat: str, name: str) -> str:
    return os.path.join(POWER_SUPPLY_DIR, bat, name)


def _pick(bat: str, *names: str) -> str | None:
    for name in names:
        path = _battery_file(bat, name)
        if os.access(path, os.R_OK):
            return path
    return None


def _read_state(bat: str) -> str | None:
    text = read_text(_battery_file(bat, "status"))
    if text is None:
        return None
    words = text.split()
    return words[0][:12] if words else None


def battery_perc(bat: str) -> str | None:
    """Charge of battery ``bat`` in percent."""
    perc = read_int(_battery_file(bat, "capacity"))
    return None if perc is None else str(perc)


def battery_state(bat: str) -> str | None:
    """'+' while charging, '-' while discharging, 'o' when full, '?' otherwise."""
    state = _read_state(bat)
    if state is None:
        return None
    return _STATE_SYMBOLS.get(state, "?")


def battery_remaining(bat: str) -> str | None:
    """Time left while discharging as 'Hh Mm'; empty string otherwise."""
    state = _read_state(bat)
    if state is None:
        return None

    charge_path = _pick(bat, "charge_now", "energy_now")
    if charge_path is None:
        return None
    charge_now = read_int(charge_path)
    if charge_now is None:
        return None

    if state != "Discharging":
        return ""

    current_path = _pick(bat, "current_now", "power_now")
    if current_path is None:
        return None
    current_now = read_int(current_path)
    if not current_now:
        return None

    timeleft = charge_now / current_now
    hours = int(timeleft)
    minutes = int((timeleft - hours) * 60)
    return f"{hours}h {minutes}m"