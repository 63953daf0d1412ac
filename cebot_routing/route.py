import logging
import datetime
from typing import Dict, Any

import pytz

from .config import Config

JEEPNEY = "jeepney"
MODERN_JEEP = "modern_jeep"
BUS = "bus"
TAXI = "taxi"
MULTICAB = "multicab"

ROUTE_MODES = (JEEPNEY, MODERN_JEEP, BUS, TAXI, MULTICAB)

# Bus records name both endpoints in one field, e.g. "SM City Cebu ↔ Talamban"
ROUTE_NAME_SEPARATOR = "↔"


class Route:
    """
    A named transit service with a mode, two endpoints and the landmarks it passes.

    Routes are treated as bidirectional: a route from A to B also carries
    travellers from B to A under the same code.
    """

    def __init__(self, code, mode, origin, destination, landmarks=None, notes="",
                 fare=None, frequency=None, service=None, route_name=None, last_verified=None):
        if mode not in ROUTE_MODES:
            raise ValueError(f"Unknown route mode '{mode}' for route {code}")
        self.code = code
        self.mode = mode
        self.origin = origin
        self.destination = destination
        self.landmarks = tuple(landmarks or ())
        self.notes = notes or ""
        self.fare = fare
        self.frequency = frequency
        self.service = service
        self.route_name = route_name
        self.last_verified = last_verified  # timezone-aware datetime

    @classmethod
    def from_dict(cls, record: Dict[str, Any]) -> "Route":
        """Build a Route from a catalog record."""
        mode = record.get('type') or record.get('mode') or JEEPNEY
        origin = record.get('origin')
        destination = record.get('destination')
        route_name = record.get('route_name')

        if (not origin or not destination) and route_name and ROUTE_NAME_SEPARATOR in route_name:
            parts = [part.strip() for part in route_name.split(ROUTE_NAME_SEPARATOR)]
            destination = destination or parts[0] or "Unknown"
            origin = origin or parts[1] or "Unknown"

        code = record.get('route_code') or record.get('code') or record.get('service')
        if not code:
            raise ValueError(f"Route record has no code: {record}")

        landmarks = record.get('route_landmarks')
        if landmarks is None:
            landmarks = record.get('via', [])

        return cls(
            code=code,
            mode=mode,
            origin=origin or "Unknown",
            destination=destination or "Unknown",
            landmarks=landmarks,
            notes=record.get('notes', ''),
            fare=record.get('fare'),
            frequency=record.get('frequency'),
            service=record.get('service'),
            route_name=route_name,
            last_verified=parse_verified_date(record.get('last_verified')),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the route to a catalog record."""
        route_dict = {
            "route_code": self.code,
            "type": self.mode,
            "origin": self.origin,
            "destination": self.destination,
            "route_landmarks": list(self.landmarks),
            "notes": self.notes,
        }
        for key in ("fare", "frequency", "service", "route_name"):
            value = getattr(self, key)
            if value:
                route_dict[key] = value
        if self.last_verified:
            route_dict["last_verified"] = self.last_verified.isoformat()
        return route_dict

    def __eq__(self, other):
        if not isinstance(other, Route):
            return NotImplemented
        return self.code == other.code

    def __hash__(self):
        return hash(self.code)

    def __repr__(self):
        return f"Route({self.code}, {self.mode}, {self.origin} -> {self.destination})"


def parse_verified_date(value):
    """
    Parse a verification timestamp into a timezone-aware datetime.
    Naive values are taken to be local time in Config.TIMEZONE.
    """
    if not value:
        return None
    if isinstance(value, datetime.datetime):
        parsed = value
    else:
        try:
            parsed = datetime.datetime.fromisoformat(str(value).replace('Z', '+00:00'))
        except ValueError:
            logging.warning(f"Ignoring unparseable last_verified value: {value}")
            return None
    if parsed.tzinfo is None:
        parsed = pytz.timezone(Config.TIMEZONE).localize(parsed)
    return parsed
