"""
Render an Address as text using %-placeholders.

    %S  street name       %n  street number
    %L  locality          %z  postal code
    %D  sub-locality      %P  county
    %p  county code       %R  region
    %r  region code       %C  country
    %c  country code      %T  timezone

Unset fields render as empty strings; unknown placeholders are left alone.
"""

import re

from geofacade.geocoding.base import Address

PLACEHOLDERS = {
    "S": "street_name",
    "n": "street_number",
    "L": "locality",
    "z": "postal_code",
    "D": "sub_locality",
    "P": "county",
    "p": "county_code",
    "R": "region",
    "r": "region_code",
    "C": "country",
    "c": "country_code",
    "T": "timezone",
}

_PLACEHOLDER = re.compile(r"%([A-Za-z])")


class StringFormatter:

    def format(self, address: Address, template: str) -> str:
        def substitute(match: re.Match) -> str:
            field_name = PLACEHOLDERS.get(match.group(1))
            if field_name is None:
                return match.group(0)
            value = getattr(address, field_name)
            return "" if value is None else str(value)

        return _PLACEHOLDER.sub(substitute, template)
