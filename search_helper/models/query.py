from __future__ import annotations

import pydantic
from camel_converter.pydantic_base import CamelBase
from pydantic import Field

from search_helper.models.geo import LatLng
from search_helper.types import Filter


class QueryParameters(CamelBase):
    """Typed view of the query string echoed by the search service in `params`.

    Every attribute is None when the matching key is absent from the query string. The
    query string keys are the camelCase aliases of the attributes.
    """

    query: str | None = None
    filters: str | None = None
    facets: list[str] | None = None
    facet_filters: Filter | None = None
    numeric_filters: Filter | None = None
    tag_filters: Filter | None = None
    page: int | None = None
    hits_per_page: int | None = None
    offset: int | None = None
    length: int | None = None
    max_values_per_facet: int | None = None
    attributes_to_retrieve: list[str] | None = None
    attributes_to_highlight: list[str] | None = None
    attributes_to_snippet: list[str] | None = None
    restrict_searchable_attributes: list[str] | None = None
    highlight_pre_tag: str | None = None
    highlight_post_tag: str | None = None
    snippet_ellipsis_text: str | None = None
    query_type: str | None = None
    remove_words_if_no_results: str | None = None
    typo_tolerance: str | None = None
    distinct: int | None = None
    around_lat_lng: LatLng | None = None
    around_lat_lng_via_ip: bool | None = Field(None, alias="aroundLatLngViaIP")
    around_radius: int | None = None
    minimum_around_radius: int | None = None
    get_ranking_info: bool | None = None
    advanced_syntax: bool | None = None
    synonyms: bool | None = None
    facetting_after_distinct: bool | None = None
    analytics: bool | None = None
    analytics_tags: list[str] | None = None
    click_analytics: bool | None = None
    user_token: str | None = None

    model_config = pydantic.ConfigDict(frozen=True)

    @pydantic.field_validator("facets")  # type: ignore[attr-defined]
    @classmethod
    def validate_facets(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return None

        return list(dict.fromkeys(v))
