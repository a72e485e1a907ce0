"""
Shared utility functions for geofacade.

Modules:
- address: Query inspection and address field normalization
- geo: Geographic calculations (haversine distance)
"""

from geofacade.core.utils.address import (
    is_ip_address,
    clean_field,
    to_float,
    culture_code,
    language_code,
)
from geofacade.core.utils.geo import haversine_distance

__all__ = [
    # Address utilities
    "is_ip_address",
    "clean_field",
    "to_float",
    "culture_code",
    "language_code",
    # Geo utilities
    "haversine_distance",
]
