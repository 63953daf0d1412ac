#!/usr/bin/env python3
import argparse
import logging
import json
import sys
import os

# Add the parent directory to the path so we can import the package
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from cebot_routing.route_planner import RoutePlanner
from cebot_routing.catalog import InMemoryRouteCatalog, CatalogError
from cebot_routing.catalog_client import APIRouteCatalog
from cebot_routing.config import Config


def setup_logging(debug=False):
    """Configure logging based on debug flag."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def build_catalog(catalog_file=None, url=None):
    """Pick the route catalog: a local JSON file wins over the route service."""
    catalog_file = catalog_file or Config.CATALOG_FILE
    if catalog_file:
        logging.debug(f"Loading routes from file: {catalog_file}")
        return InMemoryRouteCatalog.from_file(catalog_file)
    return APIRouteCatalog(base_url=url or Config.CATALOG_URL or None)


def route_between(catalog, from_location, to_location, as_json=False):
    """Plan a journey between two locations and print it."""
    planner = RoutePlanner(catalog)
    plan = planner.plan(from_location, to_location)

    if as_json:
        print(json.dumps(plan.to_dict(), indent=2, ensure_ascii=False))
        return plan

    print(plan.instructions)
    if plan.found:
        print("\nRoutes used:")
        for i, route in enumerate(plan.routes):
            print(f"  Ride {i+1}: {route.code} ({route.mode}) {route.origin} ↔ {route.destination}")
    return plan


def show_route(catalog, code):
    """Print the details of a single route."""
    route = catalog.find_by_code(code)
    if not route:
        print(f"❌ Route with code {code} not found")
        return None

    print(f"🚌 Route {route.code} ({route.mode})")
    print(f"  📍 From: {route.origin}")
    print(f"  🏁 To: {route.destination}")
    if route.landmarks:
        print(f"  🗺️ Via: {', '.join(route.landmarks)}")
    if route.fare:
        print(f"  💰 Fare: {route.fare}")
    if route.frequency:
        print(f"  ⏱️ Frequency: {route.frequency}")
    if route.notes:
        print(f"  💡 {route.notes}")
    if route.last_verified:
        print(f"  ✅ Last verified: {route.last_verified.strftime('%Y-%m-%d')}")
    return route


def show_stats(catalog):
    """Print route counts grouped by mode."""
    stats = catalog.stats()
    print(f"📊 Total routes: {stats['total_routes']}")
    for mode, info in stats["by_mode"].items():
        print(f"  {mode}: {info['count']}")
    return stats


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="CeBot Routing CLI - plan jeepney and bus journeys around Metro Cebu",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Plan a journey using a local route file
  ./main_cli.py --catalog cebu_transport_routes.json route "Apas" "Ayala"

  # Plan a journey against the route service and print JSON
  ./main_cli.py --url http://localhost:5000/api route "brgy Apas" "SM City" --json

  # Show a single route
  ./main_cli.py --catalog cebu_transport_routes.json show 17B
        """
    )

    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    parser.add_argument('--catalog', type=str, help='JSON file with route data')
    parser.add_argument('--url', type=str, help='Base URL of the route service API')

    subparsers = parser.add_subparsers(dest='command', help='Sub-command help')

    route_parser = subparsers.add_parser('route', help='Plan a journey between two locations')
    route_parser.add_argument('from_location', type=str, help='Starting location')
    route_parser.add_argument('to_location', type=str, help='Destination location')
    route_parser.add_argument('--json', action='store_true', help='Print the plan as JSON')

    show_parser = subparsers.add_parser('show', help='Show a route by its code')
    show_parser.add_argument('code', type=str, help='Route code, e.g. 17B')

    subparsers.add_parser('stats', help='Show route counts by mode')

    args = parser.parse_args(argv)
    setup_logging(args.debug or Config.DEBUG)

    if not args.command:
        parser.print_help()
        return 1

    try:
        catalog = build_catalog(args.catalog, args.url)
        if args.command == 'route':
            route_between(catalog, args.from_location, args.to_location, as_json=args.json)
        elif args.command == 'show':
            show_route(catalog, args.code)
        elif args.command == 'stats':
            show_stats(catalog)
    except CatalogError as e:
        print(f"❌ Route catalog unavailable: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
