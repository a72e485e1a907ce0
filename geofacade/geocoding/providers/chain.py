"""
Chain provider: tries several providers in order until one returns results.
"""

import logging
from typing import Iterable, List

from geofacade.geocoding.base import (
    Address,
    ChainNoResult,
    GeocodingError,
    InvalidArgument,
    Provider,
    ProviderConfig,
    MAX_RESULTS,
)

logger = logging.getLogger(__name__)


class Chain(Provider):
    """
    Fallback chain over other providers.

    Each provider is asked in turn; a provider raising a GeocodingError is
    skipped. The first provider with results wins.

    Usage:
        chain = Chain([BingMaps(adapter, bing_key), TomTom(adapter, tomtom_key)])
        results = chain.geocode("10 avenue Gambetta, Paris")
    """

    def __init__(self, providers: Iterable[Provider], limit: int = MAX_RESULTS):
        self.providers = list(providers)
        if not self.providers:
            raise InvalidArgument("A chain needs at least one provider.", provider="chain")
        self.config = ProviderConfig(limit=limit)

    @property
    def name(self) -> str:
        return "chain"

    @property
    def limit(self) -> int:
        return self.config.limit

    def with_limit(self, limit: int) -> "Chain":
        return Chain(self.providers, limit=limit)

    def geocode(self, address: str) -> List[Address]:
        return self._first_success(
            lambda provider: provider.geocode(address),
            f"No provider could geocode address {address!r}.",
            address=address,
        )

    def reverse(self, latitude: float, longitude: float) -> List[Address]:
        return self._first_success(
            lambda provider: provider.reverse(latitude, longitude),
            f"No provider could reverse geocode {latitude:.6f}, {longitude:.6f}.",
        )

    def _first_success(self, call, message: str, address: str = "") -> List[Address]:
        exceptions = []
        for provider in self.providers:
            try:
                results = call(provider)
            except GeocodingError as e:
                logger.warning(f"Chain: provider {provider.name} failed: {e}")
                exceptions.append(e)
                continue

            if results:
                return self.config.truncate(results)

            logger.debug(f"Chain: provider {provider.name} returned no results")

        raise ChainNoResult(message, exceptions=exceptions, provider=self.name, address=address)
