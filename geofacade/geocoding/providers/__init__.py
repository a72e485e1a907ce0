"""
Geocoding provider implementations.
"""

from geofacade.geocoding.providers.bing_maps import BingMaps
from geofacade.geocoding.providers.tomtom import TomTom
from geofacade.geocoding.providers.chain import Chain

__all__ = ["BingMaps", "TomTom", "Chain"]
