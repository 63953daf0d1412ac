from unittest.mock import MagicMock

import pytest

from cebot_routing.catalog import InMemoryRouteCatalog, CatalogError
from cebot_routing.location import LocationMatcher
from cebot_routing.route import Route
from cebot_routing.route_planner import RoutePlanner


def make_route(code, origin, destination, landmarks=None, notes="", mode="jeepney"):
    return Route(code, mode, origin, destination, landmarks, notes)


def make_planner(*routes, **kwargs):
    return RoutePlanner(InMemoryRouteCatalog(routes), **kwargs)


def codes(plan):
    return [route.code for route in plan.routes]


def failing_catalog(error=None):
    catalog = MagicMock()
    catalog.find_direct.side_effect = error or CatalogError("database unavailable")
    return catalog


def test_direct_route_both_directions():
    planner = make_planner(make_route("17B", "Apas", "Carbon"))

    plan = planner.plan("Apas", "Carbon")
    assert plan.type == "direct"
    assert codes(plan) == ["17B"]
    assert plan.transfers == 0

    reverse = planner.plan("Carbon", "Apas")
    assert reverse.type == "direct"
    assert codes(reverse) == ["17B"]


def test_every_route_is_found_in_both_directions():
    routes = [
        make_route("17B", "Apas", "Carbon", ["IT Park"]),
        make_route("04L", "Lahug", "Ayala"),
        make_route("62B", "Bacayan", "Carbon", ["Talamban"]),
    ]
    planner = make_planner(*routes)
    for route in routes:
        assert route in planner.plan(route.origin, route.destination).routes
        assert route in planner.plan(route.destination, route.origin).routes


def test_direct_route_wins_over_transfer():
    planner = make_planner(
        make_route("04L", "Apas", "Fuente"),
        make_route("01C", "Fuente", "Carbon"),
        make_route("17B", "Apas", "Carbon"),
    )
    plan = planner.plan("Apas", "Carbon")
    assert plan.type == "direct"
    assert codes(plan) == ["17B"]


def test_one_transfer_journey():
    planner = make_planner(
        make_route("04L", "Apas", "Fuente"),
        make_route("01C", "Fuente", "Ayala"),
    )
    plan = planner.plan("Apas", "Ayala")
    assert plan.type == "multi_ride"
    assert plan.transfers == 1
    assert plan.transfer_points == ["Fuente"]
    assert codes(plan) == ["04L", "01C"]


def test_one_transfer_prefers_major_hub():
    planner = make_planner(
        make_route("10A", "Apas", "Zapatera"),
        make_route("10B", "Apas", "Fuente Circle"),
        make_route("20A", "Zapatera", "Ayala"),
        make_route("20B", "Fuente", "Ayala"),
    )
    plan = planner.plan("Apas", "Ayala")
    assert plan.type == "multi_ride"
    assert codes(plan) == ["10B", "20B"]
    assert plan.transfer_points == ["Fuente Circle"]


def test_one_transfer_prefers_stop_named_in_notes():
    planner = make_planner(
        make_route("10A", "Apas", "Mabolo"),
        make_route("10B", "Apas", "Zapatera", notes="Transfer at Zapatera for Pardo"),
        make_route("20A", "Mabolo", "Pardo"),
        make_route("20B", "Zapatera", "Pardo"),
    )
    plan = planner.plan("Apas", "Pardo")
    assert codes(plan) == ["10B", "20B"]


def test_one_transfer_ties_keep_discovery_order():
    planner = make_planner(
        make_route("10A", "Apas", "Mabolo"),
        make_route("10B", "Apas", "Zapatera"),
        make_route("20A", "Zapatera", "Pardo"),
        make_route("20B", "Mabolo", "Pardo"),
    )
    plan = planner.plan("Apas", "Pardo")
    assert codes(plan) == ["10A", "20B"]
    assert plan.transfer_points == ["Mabolo"]


def test_two_transfer_journey():
    planner = make_planner(
        make_route("F1", "Apas", "Talamban"),
        make_route("M1", "Mabolo", "Talamban", ["Banilad"]),
        make_route("L1", "Banilad", "Pardo"),
    )
    plan = planner.plan("Apas", "Pardo")
    assert plan.type == "multi_ride"
    assert plan.transfers == 2
    assert codes(plan) == ["F1", "M1", "L1"]
    assert plan.transfer_points == ["Talamban", "Banilad"]


def test_two_transfer_journey_is_first_fit():
    planner = make_planner(
        make_route("F1", "Apas", "Talamban"),
        make_route("M1", "Mabolo", "Talamban", ["Banilad"]),
        make_route("M2", "Guadalupe", "Talamban", ["Banilad Fuente"]),
        make_route("L1", "Banilad", "Pardo"),
    )
    plan = planner.plan("Apas", "Pardo")
    assert codes(plan) == ["F1", "M1", "L1"]


def three_transfer_routes():
    return [
        make_route("F1", "Apas", "Talamban"),
        make_route("M1", "Guadalupe", "Talamban", ["Capitol"]),
        make_route("M2", "Labangon", "Capitol", ["Basak"]),
        make_route("L1", "Basak", "Tisa"),
    ]


def test_three_transfer_journey_within_max_transfers():
    planner = make_planner(*three_transfer_routes(), max_transfers=3)
    plan = planner.plan("Apas", "Tisa")
    assert plan.type == "multi_ride"
    assert plan.transfers == 3
    assert codes(plan) == ["F1", "M1", "M2", "L1"]
    assert plan.transfer_points == ["Talamban", "Capitol", "Basak"]


def test_max_transfers_bounds_the_search():
    planner = make_planner(*three_transfer_routes(), max_transfers=2)
    assert planner.plan("Apas", "Tisa").type == "no_route"

    planner = make_planner(make_route("04L", "Apas", "Fuente"), make_route("01C", "Fuente", "Ayala"),
                           max_transfers=0)
    assert planner.plan("Apas", "Ayala").type == "no_route"


def test_no_route():
    planner = make_planner(make_route("17B", "Apas", "Carbon"))
    plan = planner.plan("Apas", "Talisay")
    assert plan.type == "no_route"
    assert plan.routes == []
    assert plan.transfers == 0
    assert plan.suggestions["similar_origins"] == [{"code": "17B", "location": "Apas"}]
    assert "Talisay".lower() in plan.instructions


def test_no_route_when_suggestions_fail():
    catalog = MagicMock()
    catalog.find_direct.return_value = []
    catalog.find_by_origin_or_landmark.return_value = []
    catalog.find_by_destination_or_landmark.return_value = []
    catalog.suggest.side_effect = CatalogError("timeout")
    plan = RoutePlanner(catalog).plan("Apas", "Talisay")
    assert plan.type == "no_route"
    assert plan.suggestions is None


def test_catalog_failure_becomes_error_plan():
    plan = RoutePlanner(failing_catalog()).plan("Apas", "Carbon")
    assert plan.type == "error"
    assert plan.routes == []
    assert "try again" in plan.instructions


def test_unexpected_exception_becomes_error_plan():
    plan = RoutePlanner(failing_catalog(RuntimeError("bug"))).plan("Apas", "Carbon")
    assert plan.type == "error"


@pytest.mark.parametrize("origin,destination", [
    ("", ""),
    ("Apas", ""),
    ("   ", "Carbon"),
    ("Ñañá ☃", "Lapu-Lapu"),
    ("x" * 10000, "y" * 10000),
    ("(.*", "[unclosed"),
])
def test_plan_never_raises(origin, destination):
    plan = RoutePlanner(failing_catalog()).plan(origin, destination)
    assert plan.type in ("error", "no_route")
    assert plan.instructions


def test_empty_query_skips_catalog():
    catalog = MagicMock()
    plan = RoutePlanner(catalog).plan("brgy", "Carbon")
    assert plan.type == "no_route"
    catalog.find_direct.assert_not_called()


def test_query_is_cleaned_before_search():
    planner = make_planner(make_route("17B", "Apas", "Carbon"))
    plan = planner.plan("Brgy. Apas", "the Carbon!")
    assert plan.type == "direct"
    assert plan.origin == "apas"
    assert plan.destination == "carbon"


class CountingMatcher(LocationMatcher):
    def __init__(self):
        self.connection_calls = 0

    def first_connection(self, stops, other_stops):
        self.connection_calls += 1
        return super().first_connection(stops, other_stops)


def test_multi_transfer_search_computes_each_connection_once():
    first_routes = [make_route(f"F{i}", "Apas", "Fuente") for i in range(5)]
    last_routes = [make_route(f"L{i}", f"Basak {i}", "Pardo") for i in range(5)]
    middle_routes = [make_route(f"M{i}", f"Mid {i}", "Fuente") for i in range(40)]
    matcher = CountingMatcher()
    planner = RoutePlanner(InMemoryRouteCatalog(first_routes + last_routes + middle_routes),
                           matcher=matcher, max_transfers=3)

    plan = planner.plan("Apas", "Pardo")

    assert plan.type == "no_route"
    # one lookup per (leg, middle route) pair plus one per pair of middle routes
    assert matcher.connection_calls <= 10 * 50 + 50 * 49


def test_multi_transfer_never_reuses_a_route():
    # F1 passes back through "Apas", which L1 starts from; only F1 -> F1 -> L1 would connect
    planner = make_planner(
        make_route("F1", "Apas Terminal", "Talamban", ["Apas"]),
        make_route("L1", "Apas", "Pardo"),
        max_transfers=2,
    )
    plan = planner.plan("Apas Terminal", "Pardo")
    assert plan.type == "no_route"


def test_multi_transfer_skips_reused_route_for_later_middle():
    planner = make_planner(
        make_route("F1", "Apas Terminal", "Talamban", ["Apas"]),
        make_route("M1", "Guadalupe", "Talamban", ["Apas"]),
        make_route("L1", "Apas", "Pardo"),
        max_transfers=2,
    )
    plan = planner.plan("Apas Terminal", "Pardo")
    assert plan.type == "multi_ride"
    assert codes(plan) == ["F1", "M1", "L1"]
    assert len(set(codes(plan))) == len(plan.routes)
    assert plan.transfer_points == ["Talamban", "Apas"]


def test_three_transfer_search_does_not_loop_back():
    # M1 only meets F1 again, so F1 -> M1 -> F1 -> L1 is the only chain
    planner = make_planner(
        make_route("F1", "Apas Terminal", "Talamban", ["Apas"]),
        make_route("M1", "Guadalupe", "Talamban", ["Capitol"]),
        make_route("L1", "Apas", "Pardo"),
        max_transfers=3,
    )
    plan = planner.plan("Apas Terminal", "Pardo")
    assert plan.type == "no_route"
