from __future__ import annotations

import logging
from collections.abc import Mapping
from functools import cached_property
from typing import Any, Generic, Literal, TypeVar

import pydantic
from camel_converter.pydantic_base import CamelBase
from pydantic import Field

from search_helper._utils import bool_or, non_negative_int_or, parse_non_negative_int, str_or_none
from search_helper.facets import FacetExtractor
from search_helper.models.facets import FacetStats, FacetValue
from search_helper.models.geo import LatLng
from search_helper.models.query import QueryParameters
from search_helper.query_params import decode_query_parameters
from search_helper.types import JsonDict

T = TypeVar("T")

logger = logging.getLogger(__name__)


class HighlightResult(CamelBase):
    value: str
    match_level: Literal["none", "partial", "full"]
    matched_words: list[str] = []
    fully_highlighted: bool | None = None

    model_config = pydantic.ConfigDict(frozen=True)


class SnippetResult(CamelBase):
    value: str
    match_level: Literal["none", "partial", "full"]

    model_config = pydantic.ConfigDict(frozen=True)


class RankingInfo(CamelBase):
    nb_typos: int = 0
    first_matched_word: int = 0
    proximity_distance: int = 0
    user_score: int = 0
    geo_distance: int = 0
    geo_precision: int = 0
    nb_exact_words: int = 0
    words: int = 0
    filters: int = 0
    promoted: bool = False

    model_config = pydantic.ConfigDict(frozen=True)

    @pydantic.field_validator(  # type: ignore[attr-defined]
        "nb_typos",
        "first_matched_word",
        "proximity_distance",
        "user_score",
        "geo_distance",
        "geo_precision",
        "nb_exact_words",
        "words",
        "filters",
        mode="before",
    )
    @classmethod
    def validate_counts(cls, v: Any) -> int:
        return non_negative_int_or(v)

    @pydantic.field_validator("promoted", mode="before")  # type: ignore[attr-defined]
    @classmethod
    def validate_promoted(cls, v: Any) -> bool:
        return bool_or(v)


class SearchResults(CamelBase, Generic[T]):
    """Decoded response of a search query.

    `hits`, `nb_hits`, `processing_time_ms`, `query` and `params` are required and must have
    the right type, otherwise validation fails. Every other field falls back to its default
    when it is missing or has the wrong type so changes in the response format do not break
    decoding.
    """

    hits: list[T]
    nb_hits: int = Field(strict=True, ge=0)
    processing_time_ms: int = Field(alias="processingTimeMS", strict=True, ge=0)
    query: str = Field(strict=True)
    params: QueryParameters
    page: int = 0
    nb_pages: int = 0
    hits_per_page: int = 0
    exhaustive_facets_count: bool = False
    timeout_counts: bool = False
    timeout_hits: bool = False
    message: str | None = None
    query_after_removal: str | None = None
    server_used: str | None = None
    parsed_query: str | None = None
    around_lat_lng: LatLng | None = None
    # Sent as a string by the service, e.g. "666".
    automatic_radius: int = 0
    index: str | None = None
    query_id: str | None = Field(None, alias="queryID")
    raw_facets: JsonDict | None = Field(None, alias="facets")
    raw_facets_stats: JsonDict | None = Field(None, alias="facets_stats")
    disjunctive_facets: list[str] = Field(default_factory=list)

    model_config = pydantic.ConfigDict(frozen=True, populate_by_name=False)

    @pydantic.field_validator("params", mode="before")  # type: ignore[attr-defined]
    @classmethod
    def validate_params(cls, v: Any, info: pydantic.ValidationInfo) -> QueryParameters:
        if isinstance(v, QueryParameters):
            return v

        if not isinstance(v, str):
            raise ValueError("params must be a query string")

        json_handler = info.context.get("json_handler") if info.context else None

        return decode_query_parameters(v, json_handler=json_handler)

    @pydantic.field_validator("page", "nb_pages", "hits_per_page", mode="before")  # type: ignore[attr-defined]
    @classmethod
    def validate_counts(cls, v: Any, info: pydantic.ValidationInfo) -> int:
        validated = non_negative_int_or(v)
        if validated != v:
            _log_default(info, v)

        return validated

    @pydantic.field_validator(  # type: ignore[attr-defined]
        "exhaustive_facets_count", "timeout_counts", "timeout_hits", mode="before"
    )
    @classmethod
    def validate_flags(cls, v: Any, info: pydantic.ValidationInfo) -> bool:
        if not isinstance(v, bool):
            _log_default(info, v)

        return bool_or(v)

    @pydantic.field_validator(  # type: ignore[attr-defined]
        "message",
        "query_after_removal",
        "server_used",
        "parsed_query",
        "index",
        "query_id",
        mode="before",
    )
    @classmethod
    def validate_text(cls, v: Any, info: pydantic.ValidationInfo) -> str | None:
        validated = str_or_none(v)
        if validated is None and v is not None:
            _log_default(info, v)

        return validated

    @pydantic.field_validator("around_lat_lng", mode="before")  # type: ignore[attr-defined]
    @classmethod
    def validate_around_lat_lng(cls, v: Any, info: pydantic.ValidationInfo) -> LatLng | None:
        if isinstance(v, LatLng) or v is None:
            return v

        lat_lng = LatLng.from_string(v) if isinstance(v, str) else None
        if lat_lng is None:
            _log_default(info, v)

        return lat_lng

    @pydantic.field_validator("automatic_radius", mode="before")  # type: ignore[attr-defined]
    @classmethod
    def validate_automatic_radius(cls, v: Any, info: pydantic.ValidationInfo) -> int:
        radius = parse_non_negative_int(v) if isinstance(v, str) else None
        if radius is None:
            _log_default(info, v)
            return 0

        return radius

    @pydantic.field_validator("raw_facets", "raw_facets_stats", mode="before")  # type: ignore[attr-defined]
    @classmethod
    def validate_raw_facets(cls, v: Any, info: pydantic.ValidationInfo) -> JsonDict | None:
        if isinstance(v, Mapping):
            return dict(v)

        if v is not None:
            _log_default(info, v)

        return None

    @pydantic.field_validator("disjunctive_facets", mode="before")  # type: ignore[attr-defined]
    @classmethod
    def validate_disjunctive_facets(cls, v: Any) -> list[str]:
        if isinstance(v, str) or not isinstance(v, (list, tuple, set, frozenset)):
            return []

        return [x for x in v if isinstance(x, str)]

    @property
    def requested_facets(self) -> list[str]:
        """Disjunctive facet names followed by the facets named in the query, without duplicates."""
        return list(dict.fromkeys([*self.disjunctive_facets, *(self.params.facets or [])]))

    @cached_property
    def facet_extractor(self) -> FacetExtractor:
        return FacetExtractor(self.raw_facets, self.raw_facets_stats, self.requested_facets)

    def facets(self, name: str) -> list[FacetValue] | None:
        """Values of a facet with their counts.

        Args:
            name: The name of the facet.

        Returns:
            None if the facet was neither requested nor returned by the service. An empty list
            if the facet was requested but has no values. Otherwise the values in the order
            they were returned.
        """
        return self.facet_extractor.values(name)

    def facet_stats(self, name: str) -> FacetStats | None:
        return self.facet_extractor.stats(name)

    def is_disjunctive_facet(self, name: str) -> bool:
        return name in self.disjunctive_facets

    def highlight_result(self, hit: Mapping[str, Any], path: str) -> HighlightResult | None:
        """Highlighting information of an attribute of a hit.

        Args:
            hit: One of the hits, as a mapping.
            path: Dotted path of the attribute, for example `author.name`.

        Returns:
            The highlight result or None if the hit has no valid highlighting for the path.
        """
        entry = _metadata_entry(hit, "_highlightResult", path)
        if entry is None:
            return None

        try:
            return HighlightResult.model_validate(entry)
        except pydantic.ValidationError:
            logger.debug("Ignoring malformed highlight result for %r", path)
            return None

    def snippet_result(self, hit: Mapping[str, Any], path: str) -> SnippetResult | None:
        entry = _metadata_entry(hit, "_snippetResult", path)
        if entry is None:
            return None

        try:
            return SnippetResult.model_validate(entry)
        except pydantic.ValidationError:
            logger.debug("Ignoring malformed snippet result for %r", path)
            return None

    def ranking_info(self, hit: Mapping[str, Any]) -> RankingInfo | None:
        if not isinstance(hit, Mapping):
            return None

        entry = hit.get("_rankingInfo")
        if not isinstance(entry, Mapping):
            return None

        return RankingInfo.model_validate(entry)


def _metadata_entry(hit: Mapping[str, Any], key: str, path: str) -> Mapping[str, Any] | None:
    if not isinstance(hit, Mapping):
        return None

    node: Any = hit.get(key)
    for part in path.split("."):
        if not isinstance(node, Mapping):
            return None
        node = node.get(part)

    return node if isinstance(node, Mapping) else None


def _log_default(info: pydantic.ValidationInfo, value: Any) -> None:
    logger.debug("Invalid value %r for %s, using the default", value, info.field_name)
