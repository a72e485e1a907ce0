"""
Bing Maps Locations API provider.

Forward and reverse geocoding through the REST Locations service.
https://learn.microsoft.com/en-us/bingmaps/rest-services/locations/
"""

import json
import logging
from typing import Optional, List, Dict, Any
from urllib.parse import quote_plus

from geofacade.core.http import mask_api_key
from geofacade.core.utils.address import clean_field, culture_code, is_ip_address, to_float
from geofacade.geocoding.base import (
    Address,
    Bounds,
    HttpTransport,
    NoResult,
    Provider,
    ProviderConfig,
    UnsupportedOperation,
    MAX_RESULTS,
)

logger = logging.getLogger(__name__)

GEOCODE_ENDPOINT_URL = "http://dev.virtualearth.net/REST/v1/Locations/?maxResults={limit}&q={query}&key={key}"
REVERSE_ENDPOINT_URL = "http://dev.virtualearth.net/REST/v1/Locations/{latitude:.6f},{longitude:.6f}?key={key}"

# The Locations API accepts maxResults between 1 and 20
BING_MAX_LIMIT = 20


class BingMaps(Provider):
    """
    Bing Maps geocoder.

    Pros:
    - Global coverage
    - Localized results via the culture parameter

    Cons:
    - Requires API key
    - Street addresses only (no IP lookups)

    Usage:
        geocoder = BingMaps(HttpAdapter(), api_key="...", locale="fr_FR")
        results = geocoder.geocode("10 avenue Gambetta, Paris")
    """

    def __init__(
        self,
        adapter: HttpTransport,
        api_key: Optional[str],
        locale: Optional[str] = None,
        limit: int = MAX_RESULTS,
    ):
        """
        Initialize Bing Maps geocoder.

        Args:
            adapter: HTTP transport used for the requests
            api_key: Bing Maps key (None leaves the provider unusable)
            locale: Optional locale, sent as the culture code
            limit: Maximum number of results (capped at 20)
        """
        self.adapter = adapter
        self.config = ProviderConfig(
            api_key=api_key, locale=locale, limit=limit, max_limit=BING_MAX_LIMIT
        )

    @property
    def name(self) -> str:
        return "bing_maps"

    @property
    def limit(self) -> int:
        return self.config.limit

    @property
    def locale(self) -> Optional[str]:
        return self.config.locale

    def with_limit(self, limit: int) -> "BingMaps":
        return BingMaps(self.adapter, self.config.api_key, self.config.locale, limit)

    def geocode(self, address: str) -> List[Address]:
        key = self.config.require_api_key("No API key provided.", provider=self.name)

        # This API doesn't handle IPs
        if is_ip_address(address):
            raise UnsupportedOperation(
                "The BingMaps provider does not support IP addresses, only street addresses.",
                provider=self.name,
                address=address,
            )

        query = GEOCODE_ENDPOINT_URL.format(
            limit=self.config.limit, query=quote_plus(address), key=key
        )
        return self._execute_query(query)

    def reverse(self, latitude: float, longitude: float) -> List[Address]:
        key = self.config.require_api_key("No API key provided.", provider=self.name)

        query = REVERSE_ENDPOINT_URL.format(latitude=latitude, longitude=longitude, key=key)
        return self._execute_query(query)

    def _execute_query(self, query: str) -> List[Address]:
        if self.config.locale:
            query = f"{query}&culture={culture_code(self.config.locale)}"

        logger.debug(f"Bing Maps query: {mask_api_key(query)}")
        content = self.adapter.get(query)

        if not content:
            raise NoResult(f'Could not execute query "{mask_api_key(query)}".', provider=self.name)

        try:
            data = json.loads(content)
        except (ValueError, RecursionError):
            raise NoResult(f'Could not parse response for query "{mask_api_key(query)}".', provider=self.name)

        resources = self._resources(data)
        if resources is None:
            raise NoResult(f'Could not execute query "{mask_api_key(query)}".', provider=self.name)

        results = []
        for item in resources:
            address = self._parse_resource(item)
            if address is not None:
                results.append(address)

        if not results:
            raise NoResult(f'No results for query "{mask_api_key(query)}".', provider=self.name)

        return self.config.truncate(results)

    @staticmethod
    def _resources(data: Any) -> Optional[list]:
        """resourceSets[0].resources, or None if the payload lacks it."""
        if not isinstance(data, dict):
            return None
        resource_sets = data.get("resourceSets")
        if not isinstance(resource_sets, list) or not resource_sets:
            return None
        first = resource_sets[0]
        if not isinstance(first, dict) or not isinstance(first.get("resources"), list):
            return None
        return first["resources"]

    @staticmethod
    def _parse_resource(item: Dict[str, Any]) -> Optional[Address]:
        if not isinstance(item, dict):
            return None

        coordinates = None
        points = item.get("geocodePoints")
        if isinstance(points, list) and points and isinstance(points[0], dict):
            coordinates = points[0].get("coordinates")
        if coordinates is None and isinstance(item.get("point"), dict):
            coordinates = item["point"].get("coordinates")
        if not isinstance(coordinates, list) or len(coordinates) < 2:
            logger.debug("Bing Maps: skipping resource without coordinates")
            return None

        bounds = None
        bbox = item.get("bbox")
        if isinstance(bbox, list) and len(bbox) == 4:
            south, west, north, east = (to_float(v) for v in bbox)
            if None not in (south, west, north, east):
                bounds = Bounds(south=south, west=west, north=north, east=east)

        fields = item.get("address")
        if not isinstance(fields, dict):
            fields = {}

        return Address(
            latitude=to_float(coordinates[0]),
            longitude=to_float(coordinates[1]),
            bounds=bounds,
            street_name=clean_field(fields.get("addressLine")),
            postal_code=clean_field(fields.get("postalCode")),
            locality=clean_field(fields.get("locality")),
            county=clean_field(fields.get("adminDistrict2")),
            region=clean_field(fields.get("adminDistrict")),
            country=clean_field(fields.get("countryRegion")),
            country_code=clean_field(fields.get("countryRegionIso2")),
        )
