from __future__ import annotations
import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

INFINITY = 999      # relay's "no link" cost
MAX_COST = INFINITY - 1
NONE = -1           # next hop for unreachable destinations
AUTHORITY = 100     # sender id of the relay/authority

class ProtocolError(Exception):
    """A message that is malformed or unexpected at this point of the session."""

class Kind(str, Enum):
    HELLO = "hello"
    LINK_COST = "linkcost"
    ROUTE = "route"
    QUIT = "quit"

def normalize_costs(raw: Any) -> List[int]:
    if not isinstance(raw, list): raise ProtocolError(f"cost vector must be a list, got {type(raw).__name__}")
    costs=[]
    for c in raw:
        if isinstance(c, bool) or not isinstance(c, int): raise ProtocolError(f"non-integer cost {c!r}")
        if c < 0: raise ProtocolError(f"negative cost {c}")
        costs.append(min(c, INFINITY))
    return costs

def _int_field(obj: dict, key: str) -> int:
    v = obj.get(key)
    if isinstance(v, bool) or not isinstance(v, int): raise ProtocolError(f"field {key!r} must be an integer, got {v!r}")
    return v

@dataclass
class Message:
    kind: Kind
    source: int
    dest: int
    costs: Optional[List[int]] = None

    @property
    def from_authority(self) -> bool: return self.source == AUTHORITY

    def to_json(self) -> str:
        return json.dumps({"type":self.kind.value,"source":self.source,"dest":self.dest,"costs":self.costs}, separators=(",",":"))

    @staticmethod
    def from_json(s: str | bytes) -> "Message":
        try: obj = json.loads(s.decode("utf-8") if isinstance(s, bytes) else s)
        except ValueError as e: raise ProtocolError(f"undecodable frame: {e}") from e
        if not isinstance(obj, dict): raise ProtocolError("frame is not a JSON object")
        try: kind = Kind(obj.get("type"))
        except ValueError: raise ProtocolError(f"unknown message type {obj.get('type')!r}") from None
        costs = obj.get("costs")
        if costs is not None: costs = normalize_costs(costs)
        elif kind in (Kind.LINK_COST, Kind.ROUTE): raise ProtocolError(f"{kind.value} message without cost vector")
        return Message(kind=kind, source=_int_field(obj,"source"), dest=_int_field(obj,"dest"), costs=costs)

def hello(router_id: int) -> Message: return Message(Kind.HELLO, router_id, AUTHORITY)

def route_update(router_id: int, dest: int, costs: List[int]) -> Message:
    return Message(Kind.ROUTE, router_id, dest, list(costs))

def link_cost(dest: int, costs: List[int]) -> Message:
    return Message(Kind.LINK_COST, AUTHORITY, dest, list(costs))

def quit_msg(dest: int) -> Message: return Message(Kind.QUIT, AUTHORITY, dest)
