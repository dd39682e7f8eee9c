from __future__ import annotations
import threading
from enum import Enum
from typing import Optional
from .algorithms.dvr import DistanceVector, RoutingTable
from .config import RouterConfig
from .messages import Kind, Message, ProtocolError, hello, route_update, INFINITY
from .scheduler import PeriodicTask
from .transport import Transport, TransportError, make_transport
from .utils import format_vector, make_logger

class SessionState(str, Enum):
    INIT = "init"
    HANDSHAKING = "handshaking"
    RUNNING = "running"
    TERMINATING = "terminating"
    DONE = "done"

class Router:
    """One distance-vector router attached to the relay/authority.

    ``start()`` blocks until the relay sends QUIT (or the session fails) and returns
    the final routing table. Everything under ``_lock`` is the routing state plus the
    send path; receiving happens outside of it.
    """

    def __init__(self, cfg: RouterConfig, transport: Optional[Transport] = None):
        self.cfg=cfg; self.router_id=cfg.router_id
        self.log=make_logger(f"Router({cfg.router_id})",cfg.log_level)
        self.transport=transport if transport is not None else make_transport(cfg)
        self.dv=DistanceVector(cfg.router_id)
        self.state=SessionState.INIT
        self.error: Optional[BaseException]=None
        self._lock=threading.Lock()
        self.broadcaster=PeriodicTask(self._broadcast, cfg.interval_ms, name=f"Broadcast({cfg.router_id})",
                                      log=make_logger(f"Broadcast({cfg.router_id})",cfg.log_level), on_error=self._abort)

    def _set_state(self, state: SessionState):
        self.log.debug(f"{self.state.value} -> {state.value}"); self.state=state

    def _record_error(self, e: BaseException):
        if self.error is None: self.error=e

    def _abort(self, e: BaseException):
        """Broadcast tick failed: end the session and wake the blocked receive loop."""
        self._record_error(e)
        self.log.error(f"Broadcast failed, terminating: {e}")
        self._set_state(SessionState.TERMINATING)
        try: self.transport.close()
        except TransportError as ce: self.log.warning(f"close failed: {ce}")

    def start(self) -> RoutingTable:
        self._set_state(SessionState.HANDSHAKING)
        try:
            self.transport.connect()
            self._handshake()
            self._set_state(SessionState.RUNNING)
            self.broadcaster.start()
            self._receive_loop()
        except (TransportError, ProtocolError) as e:
            self.log.error(f"Session failed in state {self.state.value}: {e}")
            self._record_error(e)
        finally:
            table=self._shutdown()
        return table

    def _handshake(self):
        with self._lock: self.transport.send(hello(self.router_id))
        reply=self.transport.receive()
        if not reply.from_authority or reply.kind not in (Kind.HELLO, Kind.LINK_COST) or reply.costs is None:
            raise ProtocolError(f"expected link costs from the authority, got {reply.kind.value} from {reply.source}")
        with self._lock: self.dv.initialize(reply.costs)
        self.log.info(f"Handshake done, network size {self.dv.size}, neighbors {self.dv.neighbors()}")

    def _receive_loop(self):
        while True:
            msg=self.transport.receive()
            if msg.kind==Kind.QUIT:
                self.log.info("QUIT received"); return
            self.dispatch(msg)

    def dispatch(self, msg: Message):
        if msg.from_authority:
            if msg.costs is None: raise ProtocolError(f"{msg.kind.value} from the authority without link costs")
            with self._lock: self.dv.initialize(msg.costs)
            self.log.info(f"Link costs changed: {format_vector(msg.costs, INFINITY)}")
        elif msg.kind==Kind.ROUTE:
            if msg.costs is None: raise ProtocolError(f"route update from router {msg.source} without costs")
            with self._lock:
                changed=self.dv.apply_neighbor_update(msg.source, msg.costs)
                vec=self.dv.own_vector()
            if changed: self.log.debug(f"Update from {msg.source} improved mincost to {format_vector(vec, INFINITY)}")
        else:
            raise ProtocolError(f"unexpected {msg.kind.value} message from router {msg.source}")

    def _broadcast(self):
        with self._lock:
            if self.state is not SessionState.RUNNING: return
            vec=self.dv.own_vector()
            for n in self.dv.neighbors():
                self.transport.send(route_update(self.router_id, n, vec))
        self.log.debug(f"Advertised {format_vector(vec, INFINITY)}")

    def _shutdown(self) -> RoutingTable:
        self._set_state(SessionState.TERMINATING)
        self.broadcaster.cancel()
        try: self.transport.close()
        except TransportError as e: self.log.warning(f"close failed: {e}")
        with self._lock: table=self.dv.snapshot()
        self._set_state(SessionState.DONE)
        return table
