from typing import Dict, Any

DIRECT = "direct"
MULTI_RIDE = "multi_ride"
NO_ROUTE = "no_route"
ERROR = "error"

PLAN_TYPES = (DIRECT, MULTI_RIDE, NO_ROUTE, ERROR)


class Connection:
    """A candidate transfer between two routes at a shared stop."""

    def __init__(self, first_route, second_route, connection_point, priority=0):
        self.first_route = first_route
        self.second_route = second_route
        self.connection_point = connection_point
        self.priority = priority

    def __repr__(self):
        return (f"Connection({self.first_route.code} -> {self.second_route.code} "
                f"at {self.connection_point}, priority={self.priority})")


class RoutePlan:
    """
    The outcome of one planning call.

    `type` is one of direct, multi_ride, no_route or error. `routes` are in
    travel order and `transfer_points[i]` is where the traveller leaves
    `routes[i]` for `routes[i + 1]`.
    """

    def __init__(self, plan_type, origin="", destination="", routes=None, transfer_points=None,
                 suggestions=None, instructions=""):
        if plan_type not in PLAN_TYPES:
            raise ValueError(f"Unknown plan type '{plan_type}'")
        self.type = plan_type
        self.origin = origin
        self.destination = destination
        self.routes = list(routes or [])
        self.transfer_points = list(transfer_points or [])
        self.suggestions = suggestions
        self.instructions = instructions

    @property
    def transfers(self):
        if self.type == MULTI_RIDE:
            return len(self.transfer_points)
        return 0

    @property
    def found(self):
        return self.type in (DIRECT, MULTI_RIDE)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the plan to a JSON-friendly dictionary."""
        plan_dict = {
            "type": self.type,
            "origin": self.origin,
            "destination": self.destination,
            "routes": [route.to_dict() for route in self.routes],
            "transfers": self.transfers,
            "transfer_points": list(self.transfer_points),
            "instructions": self.instructions,
        }
        if self.suggestions:
            plan_dict["suggestions"] = self.suggestions
        return plan_dict

    def __repr__(self):
        codes = [route.code for route in self.routes]
        return f"RoutePlan({self.type}, routes={codes}, transfer_points={self.transfer_points})"
