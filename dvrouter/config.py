from __future__ import annotations
import argparse, os
from dataclasses import dataclass
from typing import List, Optional

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 2227
DEFAULT_INTERVAL_MS = 1000
TRANSPORTS = ("socket", "redis", "xmpp")

@dataclass
class RouterConfig:
    router_id: int
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    interval_ms: int = DEFAULT_INTERVAL_MS
    transport: str = "socket"
    log_level: str = "INFO"
    channel_prefix: str = "dvr"
    redis_password: Optional[str] = None
    jid: Optional[str] = None
    password: Optional[str] = None
    relay_jid: Optional[str] = None

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="dvrouter", description="Distance-vector router node",
                                usage="%(prog)s [options] ROUTER_ID [HOST PORT INTERVAL_MS]")
    p.add_argument("params", nargs="*", help="router id, optionally followed by relay host, relay port and update interval (ms)")
    p.add_argument("--transport", default=os.getenv("DVR_TRANSPORT", "socket"), choices=TRANSPORTS)
    p.add_argument("--log", default=os.getenv("DVR_LOG_LEVEL", "INFO"))
    p.add_argument("--channel-prefix", default=os.getenv("DVR_CHANNEL_PREFIX", "dvr"), help="redis channel prefix")
    p.add_argument("--redis-password", default=os.getenv("REDIS_PASSWORD"))
    p.add_argument("--jid", default=os.getenv("XMPP_JID"))
    p.add_argument("--password", default=os.getenv("XMPP_PASSWORD"))
    p.add_argument("--relay-jid", default=os.getenv("XMPP_RELAY_JID"))
    return p

def _int(p: argparse.ArgumentParser, name: str, raw: str) -> int:
    try: return int(raw)
    except ValueError: p.error(f"{name} must be an integer, got {raw!r}")

def parse_args(argv: Optional[List[str]] = None) -> RouterConfig:
    p = build_parser()
    args = p.parse_args(argv)
    if len(args.params) not in (1, 4): p.error("incorrect usage, expected ROUTER_ID or ROUTER_ID HOST PORT INTERVAL_MS")
    cfg = RouterConfig(router_id=_int(p, "router id", args.params[0]), transport=args.transport, log_level=args.log,
                       channel_prefix=args.channel_prefix, redis_password=args.redis_password,
                       jid=args.jid, password=args.password, relay_jid=args.relay_jid)
    if len(args.params) == 4:
        cfg.host = args.params[1]
        cfg.port = _int(p, "port", args.params[2])
        cfg.interval_ms = _int(p, "interval", args.params[3])
    if cfg.router_id < 0: p.error(f"router id must be non-negative, got {cfg.router_id}")
    if not 0 < cfg.port < 65536: p.error(f"port out of range: {cfg.port}")
    if cfg.interval_ms <= 0: p.error(f"interval must be positive, got {cfg.interval_ms}")
    if cfg.transport == "xmpp" and not (cfg.jid and cfg.password and cfg.relay_jid):
        p.error("xmpp transport needs --jid, --password and --relay-jid")
    return cfg
