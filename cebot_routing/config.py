import os
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()


def _env_list(name, default):
    value = os.environ.get(name)
    if not value:
        return list(default)
    return [item.strip().lower() for item in value.split(',') if item.strip()]


class Config:
    """
    Configuration class for CeBot Routing.
    This class loads configuration values from environment variables or uses default values.
    """
    # General configuration
    DEBUG = os.environ.get('DEBUG', 'False') == 'True'

    # Timezone used for route verification timestamps
    TIMEZONE = os.environ.get('TIMEZONE', 'Asia/Manila')

    # Route catalog sources
    CATALOG_URL = os.environ.get('CATALOG_URL', '')
    CATALOG_FILE = os.environ.get('CATALOG_FILE', '')
    REQUEST_TIMEOUT = int(os.environ.get('REQUEST_TIMEOUT', 30))

    # Search bounds
    MAX_TRANSFERS = int(os.environ.get('MAX_TRANSFERS', 3))
    DIRECT_ROUTE_LIMIT = int(os.environ.get('DIRECT_ROUTE_LIMIT', 5))
    CONNECTION_ROUTE_LIMIT = int(os.environ.get('CONNECTION_ROUTE_LIMIT', 20))
    LEG_SAMPLE_SIZE = int(os.environ.get('LEG_SAMPLE_SIZE', 5))
    MIDDLE_ROUTE_SAMPLE = int(os.environ.get('MIDDLE_ROUTE_SAMPLE', 50))

    # Transfer point ranking
    MAJOR_HUBS = _env_list('MAJOR_HUBS', ['fuente', 'colon', 'carbon', 'ayala', 'sm', 'lahug', 'jones'])
    HUB_BONUS = int(os.environ.get('HUB_BONUS', 10))
    NOTES_BONUS = int(os.environ.get('NOTES_BONUS', 5))
