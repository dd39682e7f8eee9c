from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
from ..messages import INFINITY, MAX_COST, NONE, ProtocolError

def add_cost(a: int, b: int) -> int:
    if a >= INFINITY or b >= INFINITY: return INFINITY
    s = a + b
    return INFINITY if s > MAX_COST else s

@dataclass
class RoutingTable:
    """Final view of a router: its min-cost vector and next hop per destination."""
    mincost: List[int] = field(default_factory=list)
    nexthop: List[int] = field(default_factory=list)

    def rows(self) -> List[Tuple[int, Optional[int], Optional[int]]]:
        out=[]
        for d,(c,h) in enumerate(zip(self.mincost, self.nexthop)):
            if c>=INFINITY or h==NONE: out.append((d,None,None))
            else: out.append((d,c,h))
        return out

    def __str__(self) -> str:
        lines=[]
        for d,c,h in self.rows():
            if c is None: lines.append(f"{d}  unreachable")
            else: lines.append(f"{d}  cost={c}  next={h}")
        return "\n".join(lines) + ("\n" if lines else "")

class DistanceVector:
    """Routing state of one router: link costs, the min-cost matrix and the next-hop vector.

    Not thread-safe; the owning Router serializes every call under its lock.
    """
    name = "dvr"

    def __init__(self, router_id: int):
        self.router_id = router_id
        self.linkcost: List[int] = []
        self.mincost: List[List[int]] = []
        self.nexthop: List[int] = []

    @property
    def size(self) -> int: return len(self.linkcost)

    @property
    def initialized(self) -> bool: return bool(self.linkcost)

    def _check_vector(self, vector: List[int], what: str):
        if len(vector) != self.size: raise ProtocolError(f"{what} has {len(vector)} entries, network size is {self.size}")

    def initialize(self, linkcost: List[int]):
        """Hard reset from a link-cost vector issued by the authority."""
        me = self.router_id
        if self.initialized: self._check_vector(linkcost, "link-cost vector")
        n = len(linkcost)
        if not 0 <= me < n: raise ProtocolError(f"router id {me} outside network of size {n}")
        if linkcost[me] != 0: raise ProtocolError(f"link cost to self is {linkcost[me]}, expected 0")
        self.linkcost = list(linkcost)
        self.mincost = [[INFINITY]*n for _ in range(n)]
        self.mincost[me] = list(linkcost)
        self.nexthop = [self._direct_hop(i, c) for i, c in enumerate(linkcost)]

    def _direct_hop(self, dest: int, cost: int) -> int:
        if cost == 0: return self.router_id
        if cost >= INFINITY: return NONE
        return dest

    def apply_neighbor_update(self, neighbor: int, vector: List[int]) -> bool:
        """Store a neighbor's vector and relax our own row. Returns True if anything improved."""
        if not self.initialized: raise ProtocolError("route update before link costs are known")
        if not 0 <= neighbor < self.size or neighbor == self.router_id:
            raise ProtocolError(f"route update from invalid router id {neighbor}")
        self._check_vector(vector, f"vector from router {neighbor}")
        self.mincost[neighbor] = list(vector)
        return self._relax()

    def _relax(self) -> bool:
        me = self.router_id; own = self.mincost[me]; changed = False
        for i in range(self.size):
            best = own[i]; hop = self.nexthop[i]
            for k in range(self.size):
                cand = add_cost(self.linkcost[k], self.mincost[k][i])
                # strict improvement only; equal-cost paths keep the current hop
                if cand < best: best = cand; hop = k
            if best < own[i]:
                own[i] = best; self.nexthop[i] = hop; changed = True
        return changed

    def own_vector(self) -> List[int]: return list(self.mincost[self.router_id]) if self.initialized else []

    def neighbors(self) -> List[int]:
        return [i for i, c in enumerate(self.linkcost) if i != self.router_id and c < INFINITY]

    def snapshot(self) -> RoutingTable:
        return RoutingTable(mincost=self.own_vector(), nexthop=list(self.nexthop))
