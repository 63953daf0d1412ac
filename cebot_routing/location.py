import re

# Filler words users put in front of place names ("brgy Apas", "the Fuente")
FILLER_WORDS = re.compile(r'\b(brgy|the|sa|ng)\b', re.IGNORECASE)
PUNCTUATION = re.compile(r'[^\w\s]')
WHITESPACE = re.compile(r'\s+')


def clean_location_name(location):
    """
    Normalizes a free-text place mention for searching.
    Lower-cases, drops filler words and punctuation, and collapses whitespace.
    """
    if not location:
        return ""
    cleaned = FILLER_WORDS.sub('', location.lower())
    cleaned = PUNCTUATION.sub(' ', cleaned)
    return WHITESPACE.sub(' ', cleaned).strip()


def locations_match(loc1, loc2):
    """
    Fuzzy equality between two place labels.

    Catalog labels are inconsistent ("SM", "SM City", "SM City Cebu"), so two
    labels match when they are equal ignoring case and surrounding whitespace,
    or when either one contains the other.
    """
    if not loc1 or not loc2:
        return False

    clean1 = loc1.lower().strip()
    clean2 = loc2.lower().strip()
    if not clean1 or not clean2:
        return False

    if clean1 == clean2:
        return True
    return clean1 in clean2 or clean2 in clean1


class LocationMatcher:
    """
    Decides whether two place labels denote the same place, and which stops
    of a route can serve as transfer points.
    """

    def matches(self, loc1, loc2):
        return locations_match(loc1, loc2)

    def stops_of(self, route, reference_location, destination_side=False):
        """
        Returns the labels a traveller can reach on a route, in route order.

        On the origin side these are the route's destination and landmarks; on
        the destination side its origin and landmarks. Stops matching the
        reference location are dropped so a place is never proposed as a
        transfer point to itself.
        """
        terminus = route.origin if destination_side else route.destination
        stops = []
        for stop in (terminus,) + tuple(route.landmarks):
            if not stop or stop in stops:
                continue
            if self.matches(stop, reference_location):
                continue
            stops.append(stop)
        return stops

    def first_connection(self, stops, other_stops):
        """Returns the first stop in `stops` matching any of `other_stops`, or None."""
        for stop in stops:
            if any(self.matches(stop, other) for other in other_stops):
                return stop
        return None
