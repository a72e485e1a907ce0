"""
TomTom LBS geocoding provider.

Forward geocoding through the LBS geocode service and reverse geocoding
through reverseGeocode/3; both answer in XML.
"""

import logging
from typing import Optional, List
from urllib.parse import quote

from bs4 import BeautifulSoup, Tag
from lxml import etree

from geofacade.core.http import mask_api_key
from geofacade.core.utils.address import clean_field, is_ip_address, language_code, to_float
from geofacade.geocoding.base import (
    Address,
    HttpTransport,
    InvalidCredentials,
    NoResult,
    Provider,
    ProviderConfig,
    UnsupportedOperation,
    MAX_RESULTS,
)

logger = logging.getLogger(__name__)

GEOCODE_ENDPOINT_URL = "https://api.tomtom.com/lbs/geocoding/geocode?key={key}&query={query}&maxResults={limit}"
REVERSE_ENDPOINT_URL = "https://api.tomtom.com/lbs/services/reverseGeocode/3/xml?key={key}&point={latitude:.6f},{longitude:.6f}"

TOMTOM_MAX_LIMIT = 100

# errorCode attribute value for a rejected key
INVALID_KEY_ERROR = "403"


def _is_well_formed(content: str) -> bool:
    """Strict parse of the body; truncated or broken XML is rejected."""
    parser = etree.XMLParser(recover=False, encoding="utf-8", resolve_entities=False)
    try:
        etree.fromstring(content.encode("utf-8", "replace"), parser)
    except etree.XMLSyntaxError:
        return False
    return True


def _as_int(value: str) -> int:
    """Integer value of an attribute; anything unparsable counts as 0."""
    try:
        return int(value.strip())
    except ValueError:
        return 0


class TomTom(Provider):
    """
    TomTom geocoder.

    Supported languages are de, en, es, fr, it, nl, pl, pt and sv; the
    locale is reduced to its first two letters.

    Usage:
        geocoder = TomTom(HttpAdapter(), api_key="...")
        results = geocoder.reverse(48.8631507, 2.3889114)
    """

    def __init__(
        self,
        adapter: HttpTransport,
        api_key: Optional[str],
        locale: Optional[str] = None,
        limit: int = MAX_RESULTS,
    ):
        self.adapter = adapter
        self.config = ProviderConfig(
            api_key=api_key, locale=locale, limit=limit, max_limit=TOMTOM_MAX_LIMIT
        )

    @property
    def name(self) -> str:
        return "tomtom"

    @property
    def limit(self) -> int:
        return self.config.limit

    @property
    def locale(self) -> Optional[str]:
        return self.config.locale

    def with_limit(self, limit: int) -> "TomTom":
        return TomTom(self.adapter, self.config.api_key, self.config.locale, limit)

    def geocode(self, address: str) -> List[Address]:
        key = self.config.require_api_key("No Geocoding API Key provided.", provider=self.name)

        # This API doesn't handle IPs
        if is_ip_address(address):
            raise UnsupportedOperation(
                "The TomTom provider does not support IP addresses.",
                provider=self.name,
                address=address,
            )

        query = GEOCODE_ENDPOINT_URL.format(
            key=key, query=quote(address, safe=""), limit=self.config.limit
        )
        return self._execute_query(query)

    def reverse(self, latitude: float, longitude: float) -> List[Address]:
        key = self.config.require_api_key("No Map API Key provided.", provider=self.name)

        query = REVERSE_ENDPOINT_URL.format(key=key, latitude=latitude, longitude=longitude)
        return self._execute_query(query)

    def _execute_query(self, query: str) -> List[Address]:
        if self.config.locale:
            query = f"{query}&language={language_code(self.config.locale)}"

        logger.debug(f"TomTom query: {mask_api_key(query)}")
        content = self.adapter.get(query)

        if not content or not content.strip():
            raise NoResult(f"Could not execute query {mask_api_key(query)}", provider=self.name)

        if not _is_well_formed(content):
            raise NoResult(f"Could not parse response for query {mask_api_key(query)}", provider=self.name)

        root = BeautifulSoup(content, "xml").find()
        if root is None:
            raise NoResult(f"Could not parse response for query {mask_api_key(query)}", provider=self.name)

        count = root.get("count")
        if count is not None and _as_int(count) == 0:
            raise NoResult(f"No results for query {mask_api_key(query)}", provider=self.name)

        error_code = root.get("errorCode")
        if error_code is not None:
            if error_code.strip() == INVALID_KEY_ERROR:
                raise InvalidCredentials("Map API Key provided is not valid.", provider=self.name)
            logger.debug(f"TomTom error code {error_code} for {mask_api_key(query)}")
            raise NoResult(f"Could not execute query {mask_api_key(query)}", provider=self.name)

        items = (
            root.find_all("geoResult", recursive=False) or
            root.find_all("reverseGeoResult", recursive=False)
        )
        if not items:
            raise NoResult(f"No results for query {mask_api_key(query)}", provider=self.name)

        return self.config.truncate([self._parse_result(item) for item in items])

    @staticmethod
    def _child_text(item: Tag, name: str) -> Optional[str]:
        child = item.find(name, recursive=False)
        if child is None:
            return None
        return child.get_text()

    def _parse_result(self, item: Tag) -> Address:
        return Address(
            latitude=to_float(self._child_text(item, "latitude")),
            longitude=to_float(self._child_text(item, "longitude")),
            street_number=clean_field(self._child_text(item, "houseNumber")),
            street_name=clean_field(self._child_text(item, "street")),
            postal_code=clean_field(self._child_text(item, "postcode")),
            locality=clean_field(self._child_text(item, "city")),
            region=clean_field(self._child_text(item, "state")),
            country=clean_field(self._child_text(item, "country")),
            country_code=clean_field(self._child_text(item, "countryISO3")),
        )
