"""
HTTP transport used by the geocoding providers.

Providers only need one operation from the network layer: fetch a URL and
hand back the body as text. Anything else (pooling, proxies, TLS) belongs to
the underlying `requests.Session`.

Usage:
    from geofacade.core.http import HttpAdapter

    adapter = HttpAdapter()
    body = adapter.get("https://example.com/")
"""

import logging
import re
from typing import Optional

import requests

from geofacade.core.config import settings

logger = logging.getLogger(__name__)

_KEY_PARAM = re.compile(r"([?&]key=)[^&]*")


def mask_api_key(url: str) -> str:
    """Hide the value of a `key=` query parameter so URLs can be logged."""
    return _KEY_PARAM.sub(r"\1***", url)


class HttpAdapter:
    """
    Thin wrapper around a requests session.

    Transport failures (timeouts, connection errors) are logged and reported
    as an empty body; providers turn an empty body into a NoResult error.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
    ):
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT
        self.session.headers["User-Agent"] = user_agent or settings.USER_AGENT

    def get(self, url: str) -> str:
        """
        Perform a GET request and return the response body.

        Args:
            url: Fully formatted request URL

        Returns:
            Response body as text, or "" if the request failed
        """
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.Timeout:
            logger.warning(f"Timeout fetching {mask_api_key(url)}")
            return ""
        except requests.RequestException as e:
            logger.warning(f"Request error fetching {mask_api_key(url)}: {e}")
            return ""

        # Error bodies are returned as-is; providers read error codes from them
        if response.status_code != 200:
            logger.warning(f"HTTP {response.status_code} for {mask_api_key(url)}")

        # Bodies without a declared charset are UTF-8
        if "charset" in response.headers.get("Content-Type", "").lower():
            response.encoding = requests.utils.get_encoding_from_headers(response.headers)
        else:
            response.encoding = "utf-8"

        return response.text

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "HttpAdapter":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
