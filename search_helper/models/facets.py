from __future__ import annotations

import pydantic
from camel_converter.pydantic_base import CamelBase


class FacetValue(CamelBase):
    value: str
    count: int

    model_config = pydantic.ConfigDict(frozen=True)


class FacetStats(CamelBase):
    min: float
    avg: float
    max: float
    sum: float

    model_config = pydantic.ConfigDict(frozen=True)
