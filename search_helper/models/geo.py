from __future__ import annotations

import pydantic
from camel_converter.pydantic_base import CamelBase

from search_helper._utils import parse_decimal


class LatLng(CamelBase):
    lat: float
    lng: float

    model_config = pydantic.ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.lat!r},{self.lng!r}"

    @classmethod
    def from_string(cls, value: str) -> LatLng | None:
        """Parse a `"lat,lng"` pair as sent by the search service.

        The value is split on the first comma and both halves must be plain decimal numbers.
        Anything else gives None rather than an error.
        """
        lat, sep, lng = value.partition(",")
        if not sep:
            return None

        parsed_lat = parse_decimal(lat)
        parsed_lng = parse_decimal(lng)
        if parsed_lat is None or parsed_lng is None:
            return None

        return cls(lat=parsed_lat, lng=parsed_lng)
