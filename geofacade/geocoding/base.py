"""
Base classes and interfaces for geocoding providers.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict, replace
from typing import Optional, List, Dict, Any, Protocol, Sequence, Tuple, TypeVar

logger = logging.getLogger(__name__)

# Default number of results returned by a provider
MAX_RESULTS = 5

T = TypeVar("T")


@dataclass(frozen=True)
class Bounds:
    """Bounding box of a result, in decimal degrees."""

    south: float
    west: float
    north: float
    east: float

    def contains(self, latitude: float, longitude: float) -> bool:
        return (
            self.south <= latitude <= self.north and
            self.west <= longitude <= self.east
        )

    @property
    def as_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Address:
    """Normalized result from any geocoding provider. Unset fields are None."""

    latitude: Optional[float] = None
    longitude: Optional[float] = None
    bounds: Optional[Bounds] = None
    street_number: Optional[str] = None
    street_name: Optional[str] = None
    locality: Optional[str] = None
    postal_code: Optional[str] = None
    sub_locality: Optional[str] = None
    county: Optional[str] = None
    county_code: Optional[str] = None
    region: Optional[str] = None
    region_code: Optional[str] = None
    country: Optional[str] = None
    country_code: Optional[str] = None
    timezone: Optional[str] = None

    @property
    def coordinates(self) -> Optional[Tuple[float, float]]:
        """(latitude, longitude), or None if either is unset."""
        if self.latitude is None or self.longitude is None:
            return None
        return self.latitude, self.longitude

    @property
    def as_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


class GeocodingError(Exception):
    """Exception raised when geocoding fails."""

    def __init__(self, message: str, provider: str = "", address: str = ""):
        self.message = message
        self.provider = provider
        self.address = address
        super().__init__(f"[{provider}] {message}" if provider else message)


class InvalidCredentials(GeocodingError):
    """API key missing or rejected by the provider."""


class UnsupportedOperation(GeocodingError):
    """The provider cannot handle this kind of query."""


class NoResult(GeocodingError):
    """Empty, malformed or zero-result response."""


class InvalidArgument(GeocodingError):
    """Bad input to a provider or to the provider plumbing."""


class ChainNoResult(NoResult):
    """Every provider in a chain failed."""

    def __init__(self, message: str, exceptions: Sequence[GeocodingError] = (), **kwargs):
        self.exceptions = list(exceptions)
        super().__init__(message, **kwargs)


class HttpTransport(Protocol):
    """Anything able to fetch a URL and return the body as text."""

    def get(self, url: str) -> str: ...


@dataclass(frozen=True)
class ProviderConfig:
    """
    Per-provider settings shared by every adapter.

    Providers hold one of these instead of inheriting the handling: it
    validates the credentials and the result limit, and truncates result
    lists.

    Attributes:
        api_key: Provider API key (None when not configured)
        locale: Optional locale hint, e.g. "fr_FR"
        limit: Maximum number of results to return
        max_limit: Provider cap; larger limits are lowered to it
    """

    api_key: Optional[str] = None
    locale: Optional[str] = None
    limit: int = MAX_RESULTS
    max_limit: Optional[int] = None

    def __post_init__(self):
        if isinstance(self.limit, bool) or not isinstance(self.limit, int):
            raise InvalidArgument(f"Limit must be an integer, got {self.limit!r}")
        if self.limit <= 0:
            raise InvalidArgument(f"Limit must be a positive integer, got {self.limit}")
        if self.max_limit is not None and self.limit > self.max_limit:
            logger.debug(f"Capping limit {self.limit} to provider maximum {self.max_limit}")
            object.__setattr__(self, "limit", self.max_limit)

    def with_limit(self, limit: int) -> "ProviderConfig":
        return replace(self, limit=limit)

    def require_api_key(self, message: str, provider: str = "") -> str:
        """Return the API key, raising InvalidCredentials if it is missing."""
        if not self.api_key:
            raise InvalidCredentials(message, provider=provider)
        return self.api_key

    def truncate(self, items: Sequence[T]) -> List[T]:
        """First `limit` items, in provider order."""
        return list(items[:self.limit])


class Provider(ABC):
    """
    Interface implemented by every geocoding provider.

    Subclasses must implement:
    - geocode(): Forward lookup of a free-text address
    - reverse(): Reverse lookup of a coordinate pair
    - name: Constant provider identifier
    - limit: Maximum number of results returned
    - with_limit(): Copy of the provider with another result limit
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of the geocoding provider."""

    @property
    @abstractmethod
    def limit(self) -> int:
        """Maximum number of results returned by a call."""

    @property
    def locale(self) -> Optional[str]:
        """Locale hint sent to the provider, if any."""
        return None

    @abstractmethod
    def geocode(self, address: str) -> List[Address]:
        """
        Geocode a free-text address.

        Args:
            address: Address to look up

        Returns:
            Results in provider order, at most `limit` of them

        Raises:
            InvalidCredentials: No API key configured, or key rejected
            UnsupportedOperation: The query is not supported (e.g. an IP)
            NoResult: Empty, malformed or zero-result response
        """

    @abstractmethod
    def reverse(self, latitude: float, longitude: float) -> List[Address]:
        """
        Find addresses at a coordinate pair.

        Raises:
            InvalidCredentials: No API key configured, or key rejected
            NoResult: Empty, malformed or zero-result response
        """

    @abstractmethod
    def with_limit(self, limit: int) -> "Provider":
        """Return a copy of this provider returning at most `limit` results."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r} limit={self.limit}>"
