"""
Unified geocoding module.

Provides one interface over several geocoding web services:
- BingMaps: Bing Maps Locations API (JSON, API key required)
- TomTom: TomTom LBS geocoding (XML, API key required)
- Chain: tries several providers in order

Usage:
    from geofacade.geocoding import BingMaps, geocode_address
    from geofacade.core import HttpAdapter

    # Using specific provider
    geocoder = BingMaps(HttpAdapter(), api_key="...")
    results = geocoder.geocode("10 avenue Gambetta, Paris")

    # Using convenience function (keys from settings)
    results = geocode_address("10 avenue Gambetta, Paris", fallback_providers=["tomtom"])
"""

from geofacade.geocoding.base import (
    Address,
    Bounds,
    GeocodingError,
    InvalidCredentials,
    UnsupportedOperation,
    NoResult,
    InvalidArgument,
    ChainNoResult,
    HttpTransport,
    Provider,
    ProviderConfig,
    MAX_RESULTS,
)
from geofacade.geocoding.providers.bing_maps import BingMaps
from geofacade.geocoding.providers.tomtom import TomTom
from geofacade.geocoding.providers.chain import Chain
from geofacade.geocoding.aggregator import ProviderAggregator
from geofacade.geocoding.formatter import StringFormatter
from geofacade.geocoding.facade import (
    get_geocoder,
    geocode_address,
    reverse_geocode,
    compare_providers,
)

__all__ = [
    # Records and interfaces
    "Address",
    "Bounds",
    "HttpTransport",
    "Provider",
    "ProviderConfig",
    "MAX_RESULTS",
    # Errors
    "GeocodingError",
    "InvalidCredentials",
    "UnsupportedOperation",
    "NoResult",
    "InvalidArgument",
    "ChainNoResult",
    # Providers
    "BingMaps",
    "TomTom",
    "Chain",
    "ProviderAggregator",
    # Formatting
    "StringFormatter",
    # Convenience functions
    "get_geocoder",
    "geocode_address",
    "reverse_geocode",
    "compare_providers",
]
