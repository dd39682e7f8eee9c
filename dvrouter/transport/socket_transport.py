from __future__ import annotations
import socket
from typing import Optional
from ..messages import Message, ProtocolError
from ..utils import make_logger
from . import TransportError

class SocketTransport:
    """Long-lived TCP link to the relay; one JSON message per line."""

    def __init__(self, router_id: int, host: str = "localhost", port: int = 2227, connect_timeout: float = 10.0, log_level="INFO"):
        self.router_id=router_id; self.host=host; self.port=port; self.connect_timeout=connect_timeout
        self.log=make_logger(f"Socket({router_id})",log_level)
        self._sock: Optional[socket.socket]=None; self._reader=None

    def connect(self):
        try: self._sock=socket.create_connection((self.host,self.port),timeout=self.connect_timeout)
        except OSError as e: raise TransportError(f"cannot connect to relay {self.host}:{self.port}: {e}") from e
        self._sock.settimeout(None)
        self._reader=self._sock.makefile("r",encoding="utf-8",newline="\n")
        self.log.info(f"Connected to relay {self.host}:{self.port}")

    def send(self, msg: Message):
        sock=self._sock
        if sock is None: raise TransportError("send on a closed connection")
        try: sock.sendall((msg.to_json()+"\n").encode("utf-8"))
        except OSError as e: raise TransportError(f"send to relay failed: {e}") from e

    def receive(self) -> Message:
        reader=self._reader
        if reader is None: raise TransportError("receive on a closed connection")
        try: line=reader.readline()
        except UnicodeDecodeError as e: raise ProtocolError(f"undecodable frame: {e}") from e
        except (OSError, ValueError) as e: raise TransportError(f"receive from relay failed: {e}") from e
        if not line: raise TransportError("connection closed by relay")
        return Message.from_json(line)

    def close(self):
        # shutdown first: it wakes a reader blocked in readline() on another thread
        sock, reader = self._sock, self._reader
        self._sock=None; self._reader=None
        if sock is not None:
            try: sock.shutdown(socket.SHUT_RDWR)
            except OSError: pass
        if reader is not None:
            try: reader.close()
            except OSError: pass
        if sock is not None:
            sock.close()
            self.log.info("Connection closed")
