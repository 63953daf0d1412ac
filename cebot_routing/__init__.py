"""
CeBot Routing

This module provides jeepney and bus route planning for Metro Cebu.
Given an origin and a destination it finds a direct route, or a journey with
transfers, using a catalog of routes and their landmarks.

Example:
    from cebot_routing import RoutePlanner, InMemoryRouteCatalog

    catalog = InMemoryRouteCatalog.from_file("cebu_transport_routes.json")
    planner = RoutePlanner(catalog)
    plan = planner.plan("Apas", "Ayala")
    print(plan.instructions)
"""

from .route_planner import RoutePlanner
from .route_plan import RoutePlan
from .route import Route
from .catalog import RouteCatalog, InMemoryRouteCatalog, CatalogError
from .catalog_client import APIRouteCatalog
from .location import LocationMatcher, locations_match

__all__ = ['RoutePlanner', 'RoutePlan', 'Route', 'RouteCatalog', 'InMemoryRouteCatalog',
           'APIRouteCatalog', 'CatalogError', 'LocationMatcher', 'locations_match']
