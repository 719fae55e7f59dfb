import pytest

from slbar import network
from slbar.network import ByteRate
from slbar.util import fmt_human

WIRELESS_HEADER = (
    "Inter-| sta-|   Quality        |   Discarded packets               | Missed | WE\n"
    " face | tus | link level noise |  nwid  crypt   frag  retry   misc | beacon | 22\n"
)


def _write_counter(root, interface, direction, value):
    stats = root / interface / "statistics"
    stats.mkdir(parents=True, exist_ok=True)
    (stats / f"{direction}_bytes").write_text(f"{value}\n")


def _setup_wifi(tmp_path, monkeypatch, operstate, wireless):
    net = tmp_path / "net"
    (net / "wlan9").mkdir(parents=True)
    (net / "wlan9" / "operstate").write_text(operstate)
    wireless_file = tmp_path / "wireless"
    wireless_file.write_text(wireless)
    monkeypatch.setattr(network, "NET_CLASS_DIR", str(net))
    monkeypatch.setattr(network, "PROC_WIRELESS", str(wireless_file))


def test_byte_rate_first_sample_is_none(tmp_path):
    _write_counter(tmp_path, "eth9", "rx", 1000)
    rate = ByteRate("rx", root=str(tmp_path))
    assert rate.sample("eth9") is None


def test_byte_rate_second_sample_reports_delta(tmp_path):
    rate = ByteRate("rx", root=str(tmp_path))
    _write_counter(tmp_path, "eth9", "rx", 1000)
    rate.sample("eth9")
    _write_counter(tmp_path, "eth9", "rx", 3048)
    assert rate.sample("eth9") == fmt_human(2048, 1024)


def test_byte_rate_scales_by_interval(tmp_path):
    rate = ByteRate("tx", interval=500, root=str(tmp_path))
    _write_counter(tmp_path, "eth9", "tx", 5000)
    rate.sample("eth9")
    _write_counter(tmp_path, "eth9", "tx", 6024)
    assert rate.sample("eth9") == fmt_human(2048, 1024)


def test_byte_rate_tx_reads_tx_counter(tmp_path):
    _write_counter(tmp_path, "eth9", "rx", 10)
    _write_counter(tmp_path, "eth9", "tx", 100)
    rate = ByteRate("tx", root=str(tmp_path))
    rate.sample("eth9")
    _write_counter(tmp_path, "eth9", "rx", 999999)
    _write_counter(tmp_path, "eth9", "tx", 100)
    assert rate.sample("eth9") == fmt_human(0, 1024)


def test_byte_rate_keeps_previous_on_read_failure(tmp_path):
    rate = ByteRate("rx", root=str(tmp_path))
    _write_counter(tmp_path, "eth9", "rx", 4096)
    rate.sample("eth9")
    assert rate.sample("missing0") is None
    _write_counter(tmp_path, "eth9", "rx", 8192)
    assert rate.sample("eth9") == fmt_human(4096, 1024)


def test_byte_rate_rejects_bad_direction():
    with pytest.raises(ValueError):
        ByteRate("up")


def test_byte_rate_rejects_bad_interval():
    with pytest.raises(ValueError):
        ByteRate("rx", interval=0)


def test_netspeed_unknown_interface_is_none():
    assert network.netspeed_rx("nosuchif0") is None
    assert network.netspeed_tx("nosuchif0") is None


def test_ipv4_unknown_interface_is_none():
    assert network.ipv4("nosuchif0") is None


def test_ipv4_overlong_name_is_none():
    assert network.ipv4("x" * 40) is None


def test_ipv6_global_address(tmp_path, monkeypatch):
    table = tmp_path / "if_inet6"
    table.write_text("20010db8000000000000000000000001 03 40 00 80     eth9\n")
    monkeypatch.setattr(network, "IF_INET6_PATH", str(table))
    assert network.ipv6("eth9") == "2001:db8::1"


def test_ipv6_link_local_has_zone(tmp_path, monkeypatch):
    table = tmp_path / "if_inet6"
    table.write_text(
        "20010db8000000000000000000000001 03 40 00 80     eth9\n"
        "fe800000000000000000000000000001 04 40 20 80    wlan9\n"
    )
    monkeypatch.setattr(network, "IF_INET6_PATH", str(table))
    assert network.ipv6("wlan9") == "fe80::1%wlan9"


def test_ipv6_unknown_interface_is_none(tmp_path, monkeypatch):
    table = tmp_path / "if_inet6"
    table.write_text("20010db8000000000000000000000001 03 40 00 80     eth9\n")
    monkeypatch.setattr(network, "IF_INET6_PATH", str(table))
    assert network.ipv6("eth8") is None


def test_ipv6_missing_table_warns(tmp_path, monkeypatch, capsys):
    missing = tmp_path / "absent"
    monkeypatch.setattr(network, "IF_INET6_PATH", str(missing))
    assert network.ipv6("eth9") is None
    assert str(missing) in capsys.readouterr().err


def test_wifi_perc_full_quality(tmp_path, monkeypatch):
    _setup_wifi(
        tmp_path,
        monkeypatch,
        "up\n",
        WIRELESS_HEADER
        + " wlan9: 0000   70.  -40.  -256        0      0      0      0      0        0\n",
    )
    assert network.wifi_perc("wlan9") == "100"


def test_wifi_perc_is_bounded(tmp_path, monkeypatch):
    _setup_wifi(
        tmp_path,
        monkeypatch,
        "up\n",
        WIRELESS_HEADER
        + " wlan9: 0000   57.  -53.  -256        0      0      0      0     18        0\n",
    )
    value = int(network.wifi_perc("wlan9"))
    assert 0 < value < 100


def test_wifi_perc_down_interface(tmp_path, monkeypatch):
    _setup_wifi(
        tmp_path,
        monkeypatch,
        "down\n",
        WIRELESS_HEADER
        + " wlan9: 0000   70.  -40.  -256        0      0      0      0      0        0\n",
    )
    assert network.wifi_perc("wlan9") is None


def test_wifi_perc_without_data_line(tmp_path, monkeypatch):
    _setup_wifi(tmp_path, monkeypatch, "up\n", WIRELESS_HEADER)
    assert network.wifi_perc("wlan9") is None


def test_wifi_perc_interface_not_listed(tmp_path, monkeypatch):
    _setup_wifi(
        tmp_path,
        monkeypatch,
        "up\n",
        WIRELESS_HEADER
        + " wlan7: 0000   70.  -40.  -256        0      0      0      0      0        0\n",
    )
    assert network.wifi_perc("wlan9") is None


def test_wifi_essid_overlong_name(capsys):
    assert network.wifi_essid("x" * 40) is None
    assert "truncated" in capsys.readouterr().err


def test_wifi_essid_unknown_interface(capsys):
    assert network.wifi_essid("nosuchif0") is None
    assert "SIOCGIWESSID" in capsys.readouterr().err