from __future__ import annotations
from typing import Optional
import redis
from ..messages import Message
from ..utils import make_logger
from . import TransportError

class RedisTransport:
    """Relay link over Redis pub/sub.

    The router listens on ``<prefix>.<router_id>`` and publishes everything to
    ``<prefix>.relay``; the relay fans messages out to the destination channels.
    """

    def __init__(self, router_id: int, host: str = "localhost", port: int = 6379, password: Optional[str] = None, prefix: str = "dvr", poll_timeout: float = 1.0, log_level="INFO"):
        self.router_id=router_id; self.host=host; self.port=port; self.password=password
        self.inbox=f"{prefix}.{router_id}"; self.relay_channel=f"{prefix}.relay"; self.poll_timeout=poll_timeout
        self.log=make_logger(f"Redis({router_id})",log_level)
        self.r: Optional[redis.Redis]=None; self.pubsub=None

    def connect(self):
        try:
            self.r=redis.Redis(host=self.host, port=self.port, password=self.password)
            self.pubsub=self.r.pubsub()
            self.pubsub.subscribe(self.inbox)
        except redis.RedisError as e: raise TransportError(f"cannot reach redis {self.host}:{self.port}: {e}") from e
        self.log.info(f"Subscribed to {self.inbox} on {self.host}:{self.port}")

    def send(self, msg: Message):
        if self.r is None: raise TransportError("send on a closed connection")
        try: self.r.publish(self.relay_channel, msg.to_json())
        except redis.RedisError as e: raise TransportError(f"publish to {self.relay_channel} failed: {e}") from e

    def receive(self) -> Message:
        while True:
            # close() from another thread ends the wait at the next poll
            ps=self.pubsub
            if ps is None: raise TransportError("receive on a closed connection")
            try: raw=ps.get_message(ignore_subscribe_messages=True, timeout=self.poll_timeout)
            except redis.RedisError as e: raise TransportError(f"receive on {self.inbox} failed: {e}") from e
            if raw and raw.get("type")=="message": return Message.from_json(raw["data"])

    def close(self):
        if self.pubsub is not None:
            try: self.pubsub.close()
            except redis.RedisError as e: self.log.warning(f"pubsub close failed: {e}")
            self.pubsub=None
        if self.r is not None:
            try: self.r.close()
            except redis.RedisError as e: self.log.warning(f"redis close failed: {e}")
            self.r=None
