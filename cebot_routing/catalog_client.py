import logging

import requests

from .catalog import RouteCatalog, CatalogError, parse_route_records
from .config import Config
from .route import Route


class APIRouteCatalog(RouteCatalog):
    """
    Route catalog served by the CeBot route service REST API.

    The full route list is fetched once and kept as this client's snapshot;
    call `refresh()` to fetch it again. Every failure raises CatalogError so
    the planner can turn it into an error plan.
    """

    def __init__(self, base_url=None, timeout=None, session=None):
        self.base_url = (base_url or Config.CATALOG_URL or "http://localhost:5000/api").rstrip('/')
        self.timeout = timeout or Config.REQUEST_TIMEOUT
        self.session = session or requests.Session()
        self.route_cache = None  # list of Route, fetched lazily
        self.headers = {"accept": "application/json"}

    def _get(self, path):
        url = f"{self.base_url}{path}"
        logging.debug(f"Fetching {url}")
        try:
            response = self.session.get(url, headers=self.headers, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            logging.warning(f"Timeout connecting to route service {url}")
            raise CatalogError(f"Connection timeout for {url}") from e
        except requests.exceptions.RequestException as e:
            logging.warning(f"Request error with route service {url}: {str(e)}")
            raise CatalogError(f"Request error: {str(e)}") from e

        if response.status_code != 200:
            response_text = response.text[:200]  # Limit to first 200 chars to avoid huge logs
            logging.error(f"Route service {url} returned {response.status_code}: {response_text}")
            raise CatalogError(f"HTTP {response.status_code}: {response_text}")

        try:
            payload = response.json()
        except ValueError as e:
            raise CatalogError(f"Route service returned invalid JSON from {url}") from e

        if isinstance(payload, dict) and payload.get('success') is False:
            message = payload.get('message', 'Unknown route service error')
            logging.error(f"Route service reported failure for {url}: {message}")
            raise CatalogError(message)
        return payload

    def refresh(self):
        """Fetches the route list from the service, replacing the snapshot."""
        payload = self._get("/routes")

        # Handle both possible response formats (list or dictionary with 'data' key)
        if isinstance(payload, dict) and 'data' in payload:
            records = payload['data']
        elif isinstance(payload, list):
            records = payload
        else:
            logging.warning("Unexpected route service response format")
            raise CatalogError("Unexpected route service response format")

        self.route_cache = parse_route_records(records)
        logging.info(f"Loaded {len(self.route_cache)} routes from {self.base_url}")
        return self.route_cache

    def all_routes(self):
        if self.route_cache is None:
            self.refresh()
        return self.route_cache

    def find_by_code(self, code):
        if not code:
            return None
        if self.route_cache is not None:
            return super().find_by_code(code)

        payload = self._get(f"/routes/code/{requests.utils.quote(code.strip().upper(), safe='')}")
        data = payload.get('data') if isinstance(payload, dict) else None
        # The service answers unknown codes with an empty list
        if not data or not isinstance(data, dict):
            logging.info(f"Route with code {code} not found")
            return None
        try:
            return Route.from_dict(data)
        except ValueError as e:
            raise CatalogError(f"Invalid route record for {code}: {e}") from e
