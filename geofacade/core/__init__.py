"""
Core module providing shared configuration, HTTP transport, and utilities.

Usage:
    from geofacade.core import settings, HttpAdapter
    from geofacade.core.utils import haversine_distance, is_ip_address
"""

from geofacade.core.config import settings, Settings
from geofacade.core.http import HttpAdapter, mask_api_key

__all__ = [
    "settings",
    "Settings",
    "HttpAdapter",
    "mask_api_key",
]
