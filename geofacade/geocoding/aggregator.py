"""
Registry of named providers with a selectable default.
"""

import logging
from typing import Dict, Iterable, List, Optional

from geofacade.geocoding.base import Address, InvalidArgument, Provider

logger = logging.getLogger(__name__)


class ProviderAggregator:
    """
    Holds several providers and forwards lookups to the selected one.

    Usage:
        aggregator = ProviderAggregator()
        aggregator.register_providers([BingMaps(adapter, key), TomTom(adapter, key)])
        aggregator.using("tomtom").geocode("Kalverstraat 1, Amsterdam")
    """

    def __init__(self):
        self._providers: Dict[str, Provider] = {}
        self._selected: Optional[str] = None

    @property
    def providers(self) -> Dict[str, Provider]:
        return dict(self._providers)

    def register(self, provider: Provider) -> "ProviderAggregator":
        if provider.name in self._providers:
            logger.debug(f"Replacing registered provider {provider.name}")
        self._providers[provider.name] = provider
        return self

    def register_providers(self, providers: Iterable[Provider]) -> "ProviderAggregator":
        for provider in providers:
            self.register(provider)
        return self

    def using(self, name: str) -> "ProviderAggregator":
        """Select the provider used by geocode() and reverse()."""
        if name not in self._providers:
            raise InvalidArgument(
                f"Provider {name!r} is not registered. Registered: {list(self._providers)}"
            )
        self._selected = name
        return self

    def current(self) -> Provider:
        """Selected provider, or the first registered one when none is selected."""
        if not self._providers:
            raise InvalidArgument("No provider registered.")
        if self._selected is None:
            return next(iter(self._providers.values()))
        return self._providers[self._selected]

    def geocode(self, address: str) -> List[Address]:
        if not address or not address.strip():
            raise InvalidArgument("Address cannot be empty.")
        return self.current().geocode(address)

    def reverse(self, latitude: float, longitude: float) -> List[Address]:
        return self.current().reverse(latitude, longitude)
