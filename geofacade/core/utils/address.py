"""
Address and query helpers shared by the geocoding providers.

Usage:
    from geofacade.core.utils.address import is_ip_address, clean_field

    is_ip_address("192.168.0.1")  # True
    is_ip_address("10 Downing St")  # False
    clean_field("  ")  # None
"""

import ipaddress
from typing import Any, Optional


def is_ip_address(value: str) -> bool:
    """
    Check whether a query string is an IPv4 or IPv6 literal.

    Args:
        value: Raw geocoding query

    Returns:
        True if the whole string parses as an IP address
    """
    try:
        ipaddress.ip_address(value.strip())
    except ValueError:
        return False
    return True


def clean_field(value: Any) -> Optional[str]:
    """
    Normalize a free-text address component.

    None and empty/whitespace-only strings become None; anything else is
    converted to a stripped string.
    """
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def to_float(value: Any) -> Optional[float]:
    """Convert a coordinate-like value to float, or None if it isn't one."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def culture_code(locale: str) -> str:
    """Turn a POSIX-style locale ("fr_FR") into a culture code ("fr-FR")."""
    return locale.replace("_", "-")


def language_code(locale: str) -> str:
    """Reduce a locale ("fr_FR") to its two-letter language ("fr")."""
    return locale[:2]
