import logging

from .config import Config
from .instructions import format_plan
from .location import LocationMatcher, clean_location_name
from .ranking import ConnectionRanker
from .route_plan import RoutePlan, Connection, DIRECT, MULTI_RIDE, NO_ROUTE, ERROR


class RoutePlanner:
    def __init__(self, catalog, matcher=None, ranker=None, max_transfers=None):
        """
        Initialize the RoutePlanner with a route catalog.

        Args:
            catalog: a RouteCatalog answering the planner's route queries
            matcher: decides when two place labels are the same place
            ranker: scores one-transfer connection points
            max_transfers: the most vehicle changes a plan may require
        """
        self.catalog = catalog
        self.matcher = matcher or LocationMatcher()
        self.ranker = ranker or ConnectionRanker()
        self.max_transfers = Config.MAX_TRANSFERS if max_transfers is None else max_transfers

    def plan(self, origin, destination):
        """
        Plans a journey from origin to destination.

        Tries a direct route first, then one transfer, then longer journeys up
        to max_transfers; the first strategy that succeeds wins, so a plan
        never has more transfers than necessary. Never raises: failures come
        back as a plan of type "error".
        """
        origin = clean_location_name(origin)
        destination = clean_location_name(destination)

        try:
            if not origin or not destination:
                logging.info(f"Incomplete query: origin='{origin}', destination='{destination}'")
                return self._finish(RoutePlan(NO_ROUTE, origin, destination))

            logging.info(f"Planning route from '{origin}' to '{destination}'")

            direct_routes = self.catalog.find_direct(origin, destination, limit=Config.DIRECT_ROUTE_LIMIT)
            if direct_routes:
                logging.info(f"Found {len(direct_routes)} direct routes: {[r.code for r in direct_routes]}")
                return self._finish(RoutePlan(DIRECT, origin, destination, routes=direct_routes))

            if self.max_transfers >= 1:
                plan = self.find_multi_ride_journey(origin, destination)
                if plan:
                    return self._finish(plan)

            logging.info(f"No route found from '{origin}' to '{destination}'")
            return self._finish(RoutePlan(NO_ROUTE, origin, destination,
                                          suggestions=self._suggestions(origin, destination)))

        except Exception as e:
            logging.error(f"Error planning route from '{origin}' to '{destination}': {e}", exc_info=True)
            return self._finish(RoutePlan(ERROR, origin, destination))

    def _finish(self, plan):
        plan.instructions = format_plan(plan)
        return plan

    def _suggestions(self, origin, destination):
        try:
            return self.catalog.suggest(origin, destination)
        except Exception as e:
            logging.error(f"Error getting route suggestions: {e}")
            return None

    def find_multi_ride_journey(self, origin, destination):
        """Finds a journey needing one or more transfers, or returns None."""
        from_origin_routes = self.catalog.find_by_origin_or_landmark(origin, limit=Config.CONNECTION_ROUTE_LIMIT)
        to_destination_routes = self.catalog.find_by_destination_or_landmark(destination, limit=Config.CONNECTION_ROUTE_LIMIT)
        logging.debug(f"{len(from_origin_routes)} routes from '{origin}', "
                      f"{len(to_destination_routes)} routes to '{destination}'")

        if not from_origin_routes or not to_destination_routes:
            return None

        connections = self.find_connections(from_origin_routes, to_destination_routes, origin, destination)
        if connections:
            best = connections[0]
            logging.info(f"Best connection: {best}")
            return RoutePlan(MULTI_RIDE, origin, destination,
                             routes=[best.first_route, best.second_route],
                             transfer_points=[best.connection_point])

        if self.max_transfers >= 2:
            return self.find_multi_transfer_journey(origin, destination, from_origin_routes, to_destination_routes)
        return None

    def find_connections(self, from_origin_routes, to_destination_routes, origin, destination):
        """
        Lists every single-transfer connection between the two route sets,
        best ranked first.
        """
        connections = []
        for first_route in from_origin_routes:
            first_stops = self.matcher.stops_of(first_route, origin)
            for second_route in to_destination_routes:
                second_stops = self.matcher.stops_of(second_route, destination, destination_side=True)
                for stop1 in first_stops:
                    for stop2 in second_stops:
                        if self.matcher.matches(stop1, stop2):
                            connections.append(Connection(
                                first_route, second_route, stop1,
                                self.ranker.priority(stop1, first_route, second_route)))
        return self.ranker.rank(connections)

    def find_multi_transfer_journey(self, origin, destination, from_origin_routes, to_destination_routes):
        """
        Searches for journeys with two or more transfers, one depth at a time.

        The first and last rides come from the first few routes serving the
        origin and the destination; the rides in between come from a sample of
        the whole catalog. Within a depth the first chain found in catalog order
        is returned (first-fit, not best-fit).
        """
        first_routes = from_origin_routes[:Config.LEG_SAMPLE_SIZE]
        last_routes = to_destination_routes[:Config.LEG_SAMPLE_SIZE]
        middle_routes = self.catalog.find_all(limit=Config.MIDDLE_ROUTE_SAMPLE)
        if not middle_routes:
            return None

        middle_stops = [self.matcher.stops_of(route, "") for route in middle_routes]
        first_stops = [self.matcher.stops_of(route, origin) for route in first_routes]
        last_stops = [self.matcher.stops_of(route, destination, destination_side=True) for route in last_routes]

        # Connection points computed once per (leg, middle route) pair
        first_links = self._link_table(first_stops, middle_stops)
        last_links = self._link_table(last_stops, middle_stops)
        adjacency = None

        for transfers in range(2, self.max_transfers + 1):
            if transfers > 2 and adjacency is None:
                adjacency = self._build_adjacency(middle_stops)
            logging.debug(f"Searching journeys with {transfers} transfers")

            for first_route, links_from_first in zip(first_routes, first_links):
                for last_route, links_to_last in zip(last_routes, last_links):
                    used = {i for i, route in enumerate(middle_routes) if route in (first_route, last_route)}
                    for index, first_connection in enumerate(links_from_first):
                        if index in used or first_connection is None:
                            continue
                        chain = self._chain_to_last(index, transfers - 1, links_to_last,
                                                    adjacency, used | {index})
                        if chain:
                            indices, points = chain
                            routes = [first_route] + [middle_routes[i] for i in indices] + [last_route]
                            logging.info(f"Found {transfers}-transfer journey: {[r.code for r in routes]}")
                            return RoutePlan(MULTI_RIDE, origin, destination, routes=routes,
                                             transfer_points=[first_connection] + points)
        return None

    def _link_table(self, leg_stops, middle_stops):
        """For each leg, where it meets each middle route (None when it doesn't)."""
        return [[self.matcher.first_connection(stops, other_stops) for other_stops in middle_stops]
                for stops in leg_stops]

    def _build_adjacency(self, middle_stops):
        """For each middle route, the middle routes it connects to and where, in catalog order."""
        adjacency = []
        for i, stops in enumerate(middle_stops):
            neighbours = []
            for j, other_stops in enumerate(middle_stops):
                if i == j:
                    continue
                point = self.matcher.first_connection(stops, other_stops)
                if point is not None:
                    neighbours.append((j, point))
            adjacency.append(neighbours)
        return adjacency

    def _chain_to_last(self, index, remaining, links_to_last, adjacency, used):
        """
        Extends a chain of `remaining` middle routes starting at `index` until
        it meets the last ride. Returns (middle indices, transfer points after
        the first one) or None.
        """
        if remaining == 1:
            point = links_to_last[index]
            if point is None:
                return None
            return [index], [point]

        for next_index, point in adjacency[index]:
            if next_index in used:
                continue
            chain = self._chain_to_last(next_index, remaining - 1, links_to_last,
                                        adjacency, used | {next_index})
            if chain:
                indices, points = chain
                return [index] + indices, [point] + points
        return None
