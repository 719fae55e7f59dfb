# slbar

`slbar` builds a one-line status text from small system readings (uptime,
CPU frequency, memory, Wi-Fi signal and ESSID, battery, date and time, and
more) and refreshes it once a second. By default the line becomes the name
(`WM_NAME`) of the X root window, which is where many tiling window managers
read their bar text from. It can also write the line to standard output.

It reads Linux interfaces (`/proc`, `/sys`, ioctls on sockets and the OSS
mixer) and runs on Linux only.

## Installation

```
pip install .
```

## Running

```
slbar
```

Without options `slbar` connects to the X server named by `DISPLAY` (a local
Unix socket or TCP), authenticating with an `MIT-MAGIC-COOKIE-1` entry from
`$XAUTHORITY` or `~/.Xauthority`, and sets the root window name on every
update. If the display cannot be opened it prints
`XOpenDisplay: Failed to open display` and exits with status 1. When the loop
ends, the root window name is cleared.

```
slbar -s
```

With `-s` the status line is written to standard output once per interval,
ready to be piped into a bar program. With `-1` a single line is written to
standard output and the program exits:

```
slbar -1
```

Flags may be combined (`-s1`), and `--` ends option parsing. Any other
option, or any leftover argument, prints `usage: ... [-s] [-1]` and exits with
status 1. SIGINT and SIGTERM end the loop; SIGUSR1 wakes it for an immediate
refresh.

## Components

Each reading is a plain function that returns a string, or `None` when the
value cannot be obtained (a warning goes to standard error where something
failed). `None` is shown as `n/a` in the status line.

| Module               | Functions                                                        |
|----------------------|------------------------------------------------------------------|
| `slbar.battery`      | `battery_perc`, `battery_state`, `battery_remaining`             |
| `slbar.cpu`          | `cpu_freq`, `cpu_perc`, `CpuUsage`                               |
| `slbar.disk`         | `disk_free`, `disk_perc`, `disk_total`, `disk_used`              |
| `slbar.memory`       | `ram_free`, `ram_perc`, `ram_total`, `ram_used`, `swap_free`, `swap_perc`, `swap_total`, `swap_used` |
| `slbar.system`       | `datetime`, `entropy`, `hostname`, `kernel_release`, `load_avg`, `num_files`, `run_command`, `separator`, `uptime`, `gid`, `username`, `uid` |
| `slbar.temperature`  | `temp`                                                           |
| `slbar.network`      | `ipv4`, `ipv6`, `netspeed_rx`, `netspeed_tx`, `wifi_perc`, `wifi_essid`, `ByteRate` |
| `slbar.volume`       | `vol_perc`                                                       |

Some notes on their behaviour:

- `battery_*` take a battery name such as `BAT0` under
  `/sys/class/power_supply`. `battery_state` gives `+` (charging),
  `-` (discharging), `o` (full) or `?`; `battery_remaining` gives `Hh Mm`
  while discharging and an empty string otherwise.
- `cpu_perc` and `netspeed_rx`/`netspeed_tx` compare against the previous
  call, so the first call returns `None`. `CpuUsage` and
  `ByteRate(direction, interval, root)` hold that state if separate counters
  are wanted; call their `sample` method.
- `run_command` runs a shell command and returns the first line it printed,
  or `None` if that is empty.
- `temp` takes a sensor file reporting millidegrees, such as one under
  `/sys/class/thermal`, and returns whole degrees Celsius.
- `vol_perc` takes an OSS mixer device such as `/dev/mixer`.
- `ipv6` appends `%interface` to link-local addresses.

Sizes are formatted by `slbar.util.fmt_human`, using binary (`Ki`, `Mi`,
`Gi`, …) or decimal (`k`, `M`, `G`, …) prefixes; any base other than 1000 or
1024 raises `ValueError`:

```python
from slbar.util import fmt_human

fmt_human(1536, 1024)   # '1.5 Ki'
```

## Configuring the line

The status line is described in `slbar.config`: `INTERVAL_MS` (1000),
`UNKNOWN_STR` (`"n/a"`), `MAXLEN` (2048 bytes) and `ITEMS`, a tuple of `Item`
entries. Each `Item` pairs a component function with a format and an optional
argument. Formats understand `%s` (the reading) and `%%` (a literal percent
sign); any other conversion raises `ValueError`. `Item.render(unknown)` runs
the component and produces the item's text, putting `unknown` in place of a
missing reading.

`slbar.cli.build_status(items, unknown, maxlen)` joins the rendered items,
stopping before any item that would push the line to `maxlen` bytes or more.
To change the bar, edit `ITEMS` in `slbar/config.py`; there is no separate
configuration file.

## Limitations

- Only Linux is supported.
- There are no readings for keyboard LED indicators or the active keyboard
  layout.

## Tests

```
pip install .[test]
pytest
```