from .dvr import DistanceVector, RoutingTable, add_cost

__all__ = ["DistanceVector", "RoutingTable", "add_cost"]
