import json
import logging
from collections import OrderedDict

from .route import Route, ROUTE_MODES


class CatalogError(Exception):
    """Raised when the route catalog cannot answer a query."""


def _contains(field, text):
    return bool(field) and text.lower() in field.lower()


def _in_landmarks(route, text):
    return any(_contains(landmark, text) for landmark in route.landmarks)


class RouteCatalog:
    """
    Read-only view of the route catalog used by the planner.

    Subclasses provide `all_routes()`; every query filters that snapshot with
    case-insensitive substring matching, keeping catalog order.
    """

    def all_routes(self):
        raise NotImplementedError

    def _select(self, predicate, limit=None):
        selected = []
        for route in self.all_routes():
            if limit is not None and len(selected) >= limit:
                break
            if predicate(route):
                selected.append(route)
        return selected

    def find_direct(self, origin, destination, limit=5):
        """
        Routes connecting origin and destination in either direction, or
        passing through both as landmarks.
        """
        if not origin or not destination:
            return []

        def serves(route, start, end):
            return ((_contains(route.origin, start) or _in_landmarks(route, start)) and
                    (_contains(route.destination, end) or _in_landmarks(route, end)))

        def connects(route):
            if serves(route, origin, destination) or serves(route, destination, origin):
                return True
            return _in_landmarks(route, origin) and _in_landmarks(route, destination)

        return self._select(connects, limit)

    def find_by_origin_or_landmark(self, place, limit=20):
        if not place:
            return []
        return self._select(lambda r: _contains(r.origin, place) or _in_landmarks(r, place), limit)

    def find_by_destination_or_landmark(self, place, limit=20):
        if not place:
            return []
        return self._select(lambda r: _contains(r.destination, place) or _in_landmarks(r, place), limit)

    def find_all(self, limit=None):
        routes = list(self.all_routes())
        return routes if limit is None else routes[:limit]

    def find_by_code(self, code):
        if not code:
            return None
        wanted = code.strip().upper()
        for route in self.all_routes():
            if route.code.upper() == wanted:
                return route
        return None

    def find_by_mode(self, mode):
        if mode not in ROUTE_MODES:
            raise ValueError(f"Unknown route mode '{mode}'")
        return sorted(self._select(lambda r: r.mode == mode), key=lambda r: r.code)

    def suggest(self, origin, destination, limit=3):
        """
        Places close to what the user asked for: routes whose origin resembles
        the requested origin and routes whose destination resembles the
        requested destination.
        """
        similar_origins = []
        if origin:
            similar_origins = [
                {"code": r.code, "location": r.origin}
                for r in self._select(lambda r: _contains(r.origin, origin), limit)
            ]
        similar_destinations = []
        if destination:
            similar_destinations = [
                {"code": r.code, "location": r.destination}
                for r in self._select(lambda r: _contains(r.destination, destination), limit)
            ]
        return {"similar_origins": similar_origins, "similar_destinations": similar_destinations}

    def stats(self):
        """Route counts and codes grouped by mode."""
        grouped = OrderedDict()
        for route in self.all_routes():
            grouped.setdefault(route.mode, []).append(route.code)
        return {
            "total_routes": sum(len(codes) for codes in grouped.values()),
            "by_mode": {mode: {"count": len(codes), "routes": codes} for mode, codes in grouped.items()},
        }


class InMemoryRouteCatalog(RouteCatalog):
    """Route catalog backed by a list of Route objects."""

    def __init__(self, routes=None):
        self.routes = list(routes or [])

    def all_routes(self):
        return self.routes

    @classmethod
    def from_records(cls, records):
        return cls(parse_route_records(records))

    @classmethod
    def from_file(cls, path):
        return cls(load_routes_file(path))


def parse_route_records(records):
    """
    Parses route records into Route objects.

    Accepts a flat list of records or the seed layout with `jeepney_routes`,
    `modern_jeepney_routes` and `bus_routes` sections.
    """
    if isinstance(records, dict):
        flattened = []
        for section, default_mode in (("jeepney_routes", "jeepney"),
                                      ("modern_jeepney_routes", "modern_jeep"),
                                      ("bus_routes", "bus")):
            for record in records.get(section, []):
                record = dict(record)
                record.setdefault("type", default_mode)
                flattened.append(record)
        records = flattened

    routes = []
    for record in records:
        try:
            routes.append(Route.from_dict(record))
        except ValueError as e:
            logging.error(f"Skipping invalid route record: {e}")
    logging.info(f"Parsed {len(routes)} routes from {len(records)} records")
    return routes


def load_routes_file(path):
    """Loads routes from a JSON file."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise CatalogError(f"Route catalog file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise CatalogError(f"Invalid JSON in route catalog file {path}: {e}") from e
    return parse_route_records(data)
