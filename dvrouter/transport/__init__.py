from __future__ import annotations
from typing import Protocol
from ..messages import Message

class TransportError(Exception):
    """The link to the relay failed (refused, reset, closed or an I/O error)."""

class Transport(Protocol):
    def connect(self) -> None: ...
    def send(self, msg: Message) -> None: ...
    def receive(self) -> Message: ...
    def close(self) -> None: ...

def make_transport(cfg) -> Transport:
    if cfg.transport=="socket":
        from .socket_transport import SocketTransport
        return SocketTransport(cfg.router_id, cfg.host, cfg.port, log_level=cfg.log_level)
    if cfg.transport=="redis":
        from .redis_transport import RedisTransport
        return RedisTransport(cfg.router_id, cfg.host, cfg.port, password=cfg.redis_password, prefix=cfg.channel_prefix, log_level=cfg.log_level)
    if cfg.transport=="xmpp":
        from .xmpp_transport import XMPPTransport
        if not (cfg.jid and cfg.password and cfg.relay_jid): raise ValueError("xmpp transport needs --jid, --password and --relay-jid")
        return XMPPTransport(cfg.router_id, jid=cfg.jid, password=cfg.password, relay_jid=cfg.relay_jid, host=cfg.host, port=cfg.port, log_level=cfg.log_level)
    raise ValueError(f"Unknown transport {cfg.transport!r}")

__all__ = ["Transport", "TransportError", "make_transport"]
