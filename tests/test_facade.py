"""Tests for the facade functions, the formatter and the HTTP transport."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from conftest import FakeAdapter, bing_payload, bing_resource
from geofacade.core import HttpAdapter, Settings, mask_api_key
from geofacade.core.utils import haversine_distance, is_ip_address
from geofacade.geocoding import (
    Address,
    BingMaps,
    Bounds,
    Chain,
    ChainNoResult,
    NoResult,
    StringFormatter,
    TomTom,
    compare_providers,
    geocode_address,
    get_geocoder,
    reverse_geocode,
)


@pytest.fixture
def configured(monkeypatch):
    from geofacade.core import settings

    monkeypatch.setattr(settings, "BING_MAPS_API_KEY", "bing_key")
    monkeypatch.setattr(settings, "TOMTOM_API_KEY", "tomtom_key")
    monkeypatch.setattr(settings, "GEOCODER_LOCALE", None)
    monkeypatch.setattr(settings, "GEOCODER_LIMIT", 5)
    return settings


def test_get_geocoder_reads_settings(configured):
    geocoder = get_geocoder("tomtom", adapter=FakeAdapter())

    assert isinstance(geocoder, TomTom)
    assert geocoder.config.api_key == "tomtom_key"
    assert geocoder.limit == 5


def test_get_geocoder_overrides(configured):
    geocoder = get_geocoder("bing_maps", adapter=FakeAdapter(), api_key="other", locale="nl_NL", limit=3)

    assert isinstance(geocoder, BingMaps)
    assert geocoder.config.api_key == "other"
    assert geocoder.locale == "nl_NL"
    assert geocoder.limit == 3


def test_get_geocoder_unknown_provider():
    with pytest.raises(ValueError):
        get_geocoder("yahoo", adapter=FakeAdapter())


def test_geocode_address_single_provider(configured):
    adapter = FakeAdapter(bing_payload(bing_resource(1.0, 2.0, locality="Somewhere")))

    results = geocode_address("Somewhere", adapter=adapter)

    assert [r.locality for r in results] == ["Somewhere"]
    assert "key=bing_key" in adapter.urls[0]


def test_geocode_address_falls_back(configured):
    # Bing cannot parse the XML body, TomTom can
    adapter = FakeAdapter('<geoResponse count="1"><geoResult><city>Aarhus</city></geoResult></geoResponse>')

    results = geocode_address("Aarhus", provider="bing_maps", fallback_providers=["tomtom"], adapter=adapter)

    assert [r.locality for r in results] == ["Aarhus"]
    assert len(adapter.urls) == 2
    assert adapter.urls[1].startswith("https://api.tomtom.com/")


def test_reverse_geocode_all_fail(configured):
    with pytest.raises(ChainNoResult) as excinfo:
        reverse_geocode(1.0, 2.0, fallback_providers=["tomtom"], adapter=FakeAdapter(""))
    assert len(excinfo.value.exceptions) == 2


def test_reverse_geocode_without_fallback_raises_provider_error(configured):
    with pytest.raises(NoResult) as excinfo:
        reverse_geocode(1.0, 2.0, provider="tomtom", adapter=FakeAdapter(""))
    assert not isinstance(excinfo.value, ChainNoResult)


def test_compare_providers(configured):
    adapter = FakeAdapter(bing_payload(bing_resource(48.85, 2.35, locality="Paris")))

    results = compare_providers("Paris", providers=["bing_maps", "tomtom"], adapter=adapter)

    assert results["bing_maps"].locality == "Paris"
    assert results["tomtom"] is None


def test_string_formatter():
    address = Address(
        street_number="10", street_name="Avenue Gambetta", postal_code="75020",
        locality="Paris", country="France", country_code="FR",
    )

    formatted = StringFormatter().format(address, "%n %S, %z %L, %C (%c)%R %x")

    assert formatted == "10 Avenue Gambetta, 75020 Paris, France (FR) %x"


def test_address_helpers():
    address = Address(latitude=1.5, longitude=2.5, bounds=Bounds(1.0, 2.0, 3.0, 4.0))

    assert address.coordinates == (1.5, 2.5)
    assert Address(latitude=1.5).coordinates is None
    assert address.bounds.contains(2.0, 3.0)
    assert not address.bounds.contains(5.0, 3.0)
    assert address.as_dict["bounds"] == {"south": 1.0, "west": 2.0, "north": 3.0, "east": 4.0}
    assert address.as_dict["locality"] is None


def test_is_ip_address():
    assert is_ip_address("192.168.0.1")
    assert is_ip_address("2001:db8::1")
    assert not is_ip_address("10 Downing Street, London")
    assert not is_ip_address("999.1.1.1")


def test_haversine_distance():
    assert haversine_distance(0.0, 0.0, 0.0, 0.0) == 0.0
    # One degree of latitude is about 111 km
    assert haversine_distance(0.0, 0.0, 1.0, 0.0, unit="kilometers") == pytest.approx(111.19, rel=1e-3)


def test_mask_api_key():
    url = "https://api.tomtom.com/lbs/geocoding/geocode?key=secret&query=x"
    assert mask_api_key(url) == "https://api.tomtom.com/lbs/geocoding/geocode?key=***&query=x"


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("TOMTOM_API_KEY", "from_env")
    monkeypatch.setenv("BING_MAPS_API_KEY", "")
    monkeypatch.setenv("GEOCODER_LIMIT", "7")

    fresh = Settings()

    assert fresh.TOMTOM_API_KEY == "from_env"
    assert fresh.BING_MAPS_API_KEY is None
    assert fresh.GEOCODER_LIMIT == 7
    assert fresh.validate_tomtom()
    assert not fresh.validate_bing_maps()


def test_http_adapter_returns_body():
    session = MagicMock()
    session.headers = {}
    session.get.return_value = MagicMock(status_code=200, text="<ok/>")

    adapter = HttpAdapter(session=session, timeout=3)

    assert adapter.get("http://example.com/?key=k") == "<ok/>"
    session.get.assert_called_once_with("http://example.com/?key=k", timeout=3)


def test_http_adapter_returns_error_body():
    session = MagicMock()
    session.headers = {}
    session.get.return_value = MagicMock(status_code=403, text='<errorResponse errorCode="403"/>')

    assert HttpAdapter(session=session).get("http://example.com/") == '<errorResponse errorCode="403"/>'


@pytest.mark.parametrize("error", [requests.Timeout("slow"), requests.ConnectionError("down")])
def test_http_adapter_transport_error_is_empty_body(error):
    session = MagicMock()
    session.headers = {}
    session.get.side_effect = error

    assert HttpAdapter(session=session).get("http://example.com/") == ""


def test_transport_error_becomes_no_result():
    with patch("geofacade.core.http.requests.Session") as session_class:
        session_class.return_value.headers = {}
        session_class.return_value.get.side_effect = requests.ConnectionError("down")
        geocoder = BingMaps(HttpAdapter(), "key")

        with pytest.raises(NoResult):
            geocoder.geocode("Paris")


def test_chain_built_from_facade_is_a_chain(configured):
    from geofacade.geocoding.facade import _build

    assert isinstance(_build("bing_maps", ["tomtom"], FakeAdapter()), Chain)
    assert isinstance(_build("bing_maps", None, FakeAdapter()), BingMaps)


def _response(body, content_type):
    response = requests.Response()
    response.status_code = 200
    response._content = body.encode("utf-8")
    response.headers["Content-Type"] = content_type
    return response


def test_http_adapter_decodes_xml_without_charset_as_utf8():
    body = '<?xml version="1.0" encoding="UTF-8"?><geoResponse count="1"><geoResult><city>København</city></geoResult></geoResponse>'
    session = requests.Session()
    with patch.object(session, "get", return_value=_response(body, "text/xml")):
        adapter = HttpAdapter(session=session)

        [address] = TomTom(adapter, "key").geocode("Copenhagen")

    assert address.locality == "København"


def test_http_adapter_keeps_declared_charset():
    response = requests.Response()
    response.status_code = 200
    response._content = "<city>Málaga</city>".encode("iso-8859-1")
    response.headers["Content-Type"] = "text/xml; charset=ISO-8859-1"
    session = requests.Session()
    with patch.object(session, "get", return_value=response):
        assert HttpAdapter(session=session).get("http://example.com/") == "<city>Málaga</city>"


def test_http_adapter_sends_configured_user_agent():
    assert HttpAdapter(user_agent="geofacade-test/2").session.headers["User-Agent"] == "geofacade-test/2"


def test_http_adapter_defaults_to_settings_user_agent(monkeypatch):
    from geofacade.core import settings

    monkeypatch.setattr(settings, "USER_AGENT", "geofacade-settings/1")
    session = requests.Session()

    assert HttpAdapter(session=session).session.headers["User-Agent"] == "geofacade-settings/1"


@pytest.mark.parametrize("call", [
    lambda: geocode_address("Paris"),
    lambda: reverse_geocode(1.0, 2.0, fallback_providers=["tomtom"]),
    lambda: compare_providers("Paris", providers=["bing_maps"]),
])
def test_facade_closes_the_adapter_it_creates(configured, call):
    with patch("geofacade.geocoding.facade.HttpAdapter") as adapter_class:
        adapter_class.return_value.__enter__.return_value = FakeAdapter("")

        try:
            call()
        except NoResult:
            pass

        adapter_class.return_value.__exit__.assert_called_once()


def test_facade_leaves_caller_adapter_open(configured):
    adapter = MagicMock()
    adapter.get.return_value = bing_payload(bing_resource(1.0, 2.0, locality="Somewhere"))

    geocode_address("Somewhere", adapter=adapter)

    adapter.close.assert_not_called()
    adapter.__exit__.assert_not_called()
