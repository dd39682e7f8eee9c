import pytest

from dvrouter.config import DEFAULT_HOST, DEFAULT_INTERVAL_MS, DEFAULT_PORT, parse_args


def test_id_only_uses_defaults():
    cfg = parse_args(["2"])
    assert cfg.router_id == 2
    assert (cfg.host, cfg.port, cfg.interval_ms) == (DEFAULT_HOST, DEFAULT_PORT, DEFAULT_INTERVAL_MS)
    assert (cfg.host, cfg.port, cfg.interval_ms) == ("localhost", 2227, 1000)
    assert cfg.transport == "socket"


def test_all_four_values():
    cfg = parse_args(["1", "relay.example", "3000", "250"])
    assert (cfg.router_id, cfg.host, cfg.port, cfg.interval_ms) == (1, "relay.example", 3000, 250)


def test_options():
    cfg = parse_args(["--transport", "redis", "--log", "DEBUG", "--channel-prefix", "lab", "0"])
    assert cfg.transport == "redis" and cfg.log_level == "DEBUG" and cfg.channel_prefix == "lab"


def test_environment_defaults(monkeypatch):
    monkeypatch.setenv("DVR_TRANSPORT", "redis")
    monkeypatch.setenv("REDIS_PASSWORD", "s3cret")
    cfg = parse_args(["0"])
    assert cfg.transport == "redis" and cfg.redis_password == "s3cret"


@pytest.mark.parametrize("argv", [
    [],
    ["1", "host"],
    ["1", "host", "2227"],
    ["1", "host", "2227", "1000", "extra"],
    ["x"],
    ["1", "host", "port", "1000"],
    ["1", "host", "70000", "1000"],
    ["1", "host", "2227", "0"],
    ["--transport", "xmpp", "1"],
])
def test_usage_errors_exit_non_zero(argv, capsys):
    with pytest.raises(SystemExit) as exc:
        parse_args(argv)
    assert exc.value.code != 0
