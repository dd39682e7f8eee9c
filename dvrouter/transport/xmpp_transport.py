from __future__ import annotations
import asyncio, threading, logging, queue
from typing import Callable, Optional, Union
from slixmpp import ClientXMPP
from ..messages import Message
from ..utils import make_logger
from . import TransportError

class _SlixClient(ClientXMPP):
    def __init__(self, jid: str, password: str, relay_jid: str, on_text: Callable[[str], None], on_ready: Callable[[], None]):
        super().__init__(jid, password)
        self._relay_jid=relay_jid; self._on_text=on_text; self._on_ready=on_ready
        self.add_event_handler("session_start", self._on_session_start)
        self.add_event_handler("message", self._on_message)
    async def _on_session_start(self, event):
        self.send_presence(); await self.get_roster(); self._on_ready()
    def _on_message(self, msg):
        # only the relay speaks the routing protocol
        if msg['type'] in ('chat','normal') and str(msg['from'].bare)==self._relay_jid and msg['body']:
            self._on_text(str(msg['body']))

_CLOSED = object()

class XMPPTransport:
    """Relay link over XMPP chat messages; each body is one JSON message."""

    def __init__(self, router_id: int, jid: str, password: str, relay_jid: str, host: Optional[str]=None, port: int=5222, use_tls: bool=True, connect_timeout: float=15.0, log_level: str="INFO"):
        self.router_id=router_id; self.jid=jid; self.password=password; self.relay_jid=relay_jid
        self.host=host; self.port=port; self.use_tls=use_tls; self.connect_timeout=connect_timeout
        self.log=make_logger(f"XMPP({router_id})",log_level)
        self._loop=None; self._thread=None; self._client=None
        self._inbox: "queue.Queue[Union[str, object]]"=queue.Queue(); self._ready=threading.Event()
        logging.getLogger("slixmpp").setLevel(getattr(logging, log_level.upper(), logging.INFO))

    def connect(self):
        if self._thread and self._thread.is_alive(): return
        self._thread=threading.Thread(target=self._run_loop, name=f"xmpp-{self.router_id}", daemon=True); self._thread.start()
        if not self._ready.wait(self.connect_timeout):
            self.close(); raise TransportError(f"XMPP session for {self.jid} not established within {self.connect_timeout}s")
        self.log.info(f"Session started as {self.jid}, relay {self.relay_jid}")

    def _run_loop(self):
        self._loop=asyncio.new_event_loop(); asyncio.set_event_loop(self._loop)
        self._client=_SlixClient(self.jid, self.password, self.relay_jid, self._inbox.put, self._ready.set)
        self._client.add_event_handler("disconnected", lambda _e: self._inbox.put(_CLOSED))
        self._client.use_ipv6=False
        if not self.use_tls: self._client.enable_starttls=False
        try:
            self._client.connect(address=(self.host, self.port)) if self.host else self._client.connect()
            self._loop.run_forever()
        except Exception as e:
            self.log.error(f"XMPP loop failed: {e}")
        finally:
            self._inbox.put(_CLOSED)

    def send(self, msg: Message):
        if not (self._client and self._loop and self._ready.is_set()): raise TransportError("send on a closed connection")
        body=msg.to_json()
        async def _send(): self._client.send_message(mto=self.relay_jid, mbody=body, mtype='chat')
        try: asyncio.run_coroutine_threadsafe(_send(), self._loop).result(timeout=5)
        except Exception as e: raise TransportError(f"XMPP send failed: {e}") from e

    def receive(self) -> Message:
        if self._thread is None: raise TransportError("receive on a closed connection")
        item=self._inbox.get()
        if item is _CLOSED: raise TransportError("XMPP session closed")
        return Message.from_json(item)

    def close(self):
        self._ready.clear()
        if self._client and self._loop and self._loop.is_running():
            async def _disconnect():
                pending=self._client.disconnect()
                if asyncio.isfuture(pending) or asyncio.iscoroutine(pending): await pending
            try: asyncio.run_coroutine_threadsafe(_disconnect(), self._loop).result(timeout=3)
            except Exception as e: self.log.warning(f"disconnect failed: {e}")
            self._loop.call_soon_threadsafe(self._loop.stop)
        if self._thread: self._thread.join(timeout=3); self._thread=None
