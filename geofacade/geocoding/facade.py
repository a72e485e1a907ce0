"""
Geocoding facade providing a simple interface to all providers.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional, List, Dict, Literal

from geofacade.core import settings, HttpAdapter
from geofacade.core.utils.geo import haversine_distance
from geofacade.geocoding.base import Address, GeocodingError, HttpTransport, Provider
from geofacade.geocoding.providers.bing_maps import BingMaps
from geofacade.geocoding.providers.chain import Chain
from geofacade.geocoding.providers.tomtom import TomTom

logger = logging.getLogger(__name__)

ProviderType = Literal["bing_maps", "tomtom"]

PROVIDERS = {
    "bing_maps": (BingMaps, "BING_MAPS_API_KEY"),
    "tomtom": (TomTom, "TOMTOM_API_KEY"),
}


def get_geocoder(
    provider: ProviderType = "bing_maps",
    adapter: Optional[HttpTransport] = None,
    api_key: Optional[str] = None,
    locale: Optional[str] = None,
    limit: Optional[int] = None,
) -> Provider:
    """
    Get a geocoder instance by provider name.

    Values not given explicitly are taken from settings.

    Args:
        provider: Provider name ("bing_maps", "tomtom")
        adapter: HTTP transport (a new HttpAdapter by default)
        api_key: API key override
        locale: Locale override
        limit: Result limit override

    Returns:
        Geocoder instance
    """
    if provider not in PROVIDERS:
        raise ValueError(f"Unknown provider: {provider}. Choose from: {list(PROVIDERS.keys())}")

    provider_class, key_setting = PROVIDERS[provider]
    return provider_class(
        adapter if adapter is not None else HttpAdapter(),
        api_key if api_key is not None else getattr(settings, key_setting),
        locale=locale if locale is not None else settings.GEOCODER_LOCALE,
        limit=limit if limit is not None else settings.GEOCODER_LIMIT,
    )


@contextmanager
def _adapter_scope(adapter: Optional[HttpTransport]) -> Iterator[HttpTransport]:
    """Yield the given transport, or a fresh HttpAdapter closed on exit."""
    if adapter is not None:
        yield adapter
        return
    with HttpAdapter() as owned:
        yield owned


def _build(
    provider: ProviderType,
    fallback_providers: Optional[List[str]],
    adapter: HttpTransport,
) -> Provider:
    primary = get_geocoder(provider, adapter=adapter)
    if not fallback_providers:
        return primary

    chain = [primary]
    for fallback in fallback_providers:
        if fallback == provider:
            continue
        chain.append(get_geocoder(fallback, adapter=adapter))
    return Chain(chain, limit=primary.limit)


def geocode_address(
    address: str,
    provider: ProviderType = "bing_maps",
    fallback_providers: Optional[List[str]] = None,
    adapter: Optional[HttpTransport] = None,
) -> List[Address]:
    """
    Geocode a single address with optional fallback providers.

    Args:
        address: Address to geocode
        provider: Primary provider to use
        fallback_providers: Providers to try if the primary fails
        adapter: HTTP transport shared by all providers

    Returns:
        Results of the first provider that succeeded

    Raises:
        GeocodingError: The primary provider failed (no fallbacks), or
            ChainNoResult when every provider failed

    Example:
        results = geocode_address(
            "10 avenue Gambetta, Paris",
            provider="bing_maps",
            fallback_providers=["tomtom"]
        )
    """
    with _adapter_scope(adapter) as transport:
        return _build(provider, fallback_providers, transport).geocode(address)


def reverse_geocode(
    latitude: float,
    longitude: float,
    provider: ProviderType = "bing_maps",
    fallback_providers: Optional[List[str]] = None,
    adapter: Optional[HttpTransport] = None,
) -> List[Address]:
    """Reverse geocode a coordinate pair with optional fallback providers."""
    with _adapter_scope(adapter) as transport:
        return _build(provider, fallback_providers, transport).reverse(latitude, longitude)


def compare_providers(
    address: str,
    providers: Optional[List[str]] = None,
    adapter: Optional[HttpTransport] = None,
) -> Dict[str, Optional[Address]]:
    """
    Compare geocoding results from multiple providers.

    Useful for validating accuracy or finding discrepancies.

    Args:
        address: Address to geocode
        providers: Providers to compare (default: all with a configured key)
        adapter: HTTP transport shared by all providers

    Returns:
        Dict mapping provider name to its best result, or None on failure
    """
    if providers is None:
        providers = []
        if settings.validate_bing_maps():
            providers.append("bing_maps")
        if settings.validate_tomtom():
            providers.append("tomtom")

    results: Dict[str, Optional[Address]] = {}
    with _adapter_scope(adapter) as transport:
        for provider in providers:
            geocoder = get_geocoder(provider, adapter=transport)
            try:
                found = geocoder.geocode(address)
            except GeocodingError as e:
                logger.warning(f"{provider}: {e}")
                found = []
            results[provider] = found[0] if found else None

    # Calculate distances between results
    located = {k: v for k, v in results.items() if v is not None and v.coordinates}
    provider_names = list(located.keys())
    for i, p1 in enumerate(provider_names):
        for p2 in provider_names[i+1:]:
            r1, r2 = located[p1], located[p2]
            dist = haversine_distance(
                r1.latitude, r1.longitude,
                r2.latitude, r2.longitude
            )
            logger.info(f"Distance {p1} vs {p2}: {dist:.1f}m")

    return results
