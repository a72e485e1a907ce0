import json

import pytest


class FakeAdapter:
    """HTTP transport returning a canned body and recording requested URLs."""

    def __init__(self, body=""):
        self.body = body
        self.urls = []

    def get(self, url):
        self.urls.append(url)
        return self.body


def bing_resource(lat, lon, bbox=None, **address):
    return {
        "bbox": bbox if bbox is not None else [],
        "geocodePoints": [{"coordinates": [lat, lon]}],
        "address": address,
    }


def bing_payload(*resources):
    return json.dumps({"resourceSets": [{"estimatedTotal": len(resources), "resources": list(resources)}]})


@pytest.fixture
def adapter():
    return FakeAdapter()


@pytest.fixture
def paris_resource():
    return bing_resource(
        48.86321675999999,
        2.3887721299999995,
        bbox=[48.859354042429, 2.3809438666389, 48.867079477571, 2.3966003933611],
        addressLine="10 Avenue Gambetta",
        postalCode="75020",
        locality="Paris",
        adminDistrict2="Paris",
        adminDistrict="IdF",
        countryRegion="France",
        countryRegionIso2="FR",
    )
