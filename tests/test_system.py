import os
import pwd
import re
import socket
import time

import pytest

from slbar import system


def test_separator_returns_argument():
    assert system.separator(" | ") == " | "


def test_datetime_matches_strftime():
    assert system.datetime("%Y") == time.strftime("%Y")


def test_datetime_empty_result_is_none():
    assert system.datetime("") is None


def test_datetime_too_long_is_none():
    assert system.datetime("x" * 2000) is None


def test_entropy_reads_file(tmp_path, monkeypatch):
    path = tmp_path / "entropy_avail"
    path.write_text("256\n")
    monkeypatch.setattr(system, "ENTROPY_PATH", str(path))
    assert system.entropy() == "256"


def test_entropy_missing_file(tmp_path, monkeypatch):
    monkeypatch.setattr(system, "ENTROPY_PATH", str(tmp_path / "absent"))
    assert system.entropy() is None


def test_hostname():
    assert system.hostname() == socket.gethostname()


def test_kernel_release():
    assert system.kernel_release() == os.uname().release


def test_load_avg_format():
    result = system.load_avg()
    parts = result.split(" ")
    assert len(parts) == 3
    assert [bool(re.fullmatch(r"\d+\.\d{2}", part)) for part in parts] == [
        True,
        True,
        True,
    ]
    assert [float(part) for part in parts] == pytest.approx(
        list(os.getloadavg()), abs=1.0
    )


def test_num_files_counts_entries(tmp_path):
    for name in ("a", "b", "c"):
        (tmp_path / name).write_text("")
    (tmp_path / "sub").mkdir()
    assert system.num_files(str(tmp_path)) == "4"


def test_num_files_empty_dir(tmp_path):
    assert system.num_files(str(tmp_path)) == "0"


def test_num_files_missing_dir(tmp_path):
    assert system.num_files(str(tmp_path / "absent")) is None


def test_run_command_first_line():
    assert system.run_command("printf 'first\\nsecond\\n'") == "first"


def test_run_command_plain_echo():
    assert system.run_command("echo hello") == "hello"


def test_run_command_no_output():
    assert system.run_command("true") is None


def test_run_command_empty_line():
    assert system.run_command("echo") is None


def test_run_command_truncates_long_line():
    result = system.run_command("printf '%02000d' 0")
    assert len(result) < 1024
    assert set(result) == {"0"}


def test_uptime_format():
    hours, minutes = system.uptime().split(" ")
    assert hours[-1] == "h"
    assert minutes[-1] == "m"
    assert hours[:-1].isdigit() is True
    assert minutes[:-1].isdigit() is True


def test_uptime_minutes_below_sixty():
    minutes = int(system.uptime().split()[1].rstrip("m"))
    assert 0 <= minutes < 60


def test_uid_and_gid():
    assert system.uid() == str(os.geteuid())
    assert system.gid() == str(os.getgid())


def test_username():
    assert system.username() == pwd.getpwuid(os.geteuid()).pw_name


@pytest.mark.parametrize("fmt", ["%H:%M", "%d"])
def test_datetime_length_matches(fmt):
    assert len(system.datetime(fmt)) == len(time.strftime(fmt))