from .config import Config


class ConnectionRanker:
    """
    Scores candidate transfer points.

    Well-known hubs are easier to find and change vehicles at, and a stop named
    in a route's notes is one the operators themselves point out.
    """

    def __init__(self, major_hubs=None, hub_bonus=None, notes_bonus=None):
        self.major_hubs = [hub.lower() for hub in (major_hubs if major_hubs is not None else Config.MAJOR_HUBS)]
        self.hub_bonus = Config.HUB_BONUS if hub_bonus is None else hub_bonus
        self.notes_bonus = Config.NOTES_BONUS if notes_bonus is None else notes_bonus

    def priority(self, connection_point, first_route, second_route):
        clean_point = connection_point.lower()
        priority = 0

        if any(hub in clean_point for hub in self.major_hubs):
            priority += self.hub_bonus

        if first_route.notes and clean_point in first_route.notes.lower():
            priority += self.notes_bonus
        if second_route.notes and clean_point in second_route.notes.lower():
            priority += self.notes_bonus

        return priority

    def rank(self, connections):
        """Sorts connections best first. Ties keep their discovery order."""
        return sorted(connections, key=lambda c: c.priority, reverse=True)
