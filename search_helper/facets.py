from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from search_helper._utils import is_integer, is_number
from search_helper.models.facets import FacetStats, FacetValue

logger = logging.getLogger(__name__)

_STATS_KEYS = ("min", "avg", "max", "sum")


class FacetExtractor:
    """Reads facet counts and facet statistics out of a raw search response.

    Args:
        facets: The raw `facets` object of the response, mapping facet names to
            `{value: count}` objects. Anything that is not a mapping is treated as empty.
        facets_stats: The raw `facets_stats` object of the response, mapping facet names to
            `{"min": ..., "avg": ..., "max": ..., "sum": ...}` objects.
        requested_facets: The facet names that were asked for, either in the query or as
            disjunctive facets. A requested facet always has values, possibly an empty list.
    """

    def __init__(
        self,
        facets: Mapping[str, Any] | None,
        facets_stats: Mapping[str, Any] | None,
        requested_facets: Iterable[str],
    ) -> None:
        self._facets = facets if isinstance(facets, Mapping) else {}
        self._facets_stats = facets_stats if isinstance(facets_stats, Mapping) else {}
        self.requested_facets = frozenset(requested_facets)
        self._values_cache: dict[str, list[FacetValue] | None] = {}

    def values(self, name: str) -> list[FacetValue] | None:
        """Values and counts of a facet, in the order the service sent them.

        Returns None when the facet was neither requested nor returned, and an empty list
        when it was requested but the response has no usable values for it.
        """
        if name not in self._values_cache:
            self._values_cache[name] = self._extract_values(name)

        cached = self._values_cache[name]

        return list(cached) if cached is not None else None

    def stats(self, name: str) -> FacetStats | None:
        entry = self._facets_stats.get(name)
        if not isinstance(entry, Mapping):
            return None

        if not all(is_number(entry.get(key)) for key in _STATS_KEYS):
            logger.debug("Ignoring incomplete facet stats for %r", name)
            return None

        return FacetStats(**{key: entry[key] for key in _STATS_KEYS})

    def _extract_values(self, name: str) -> list[FacetValue] | None:
        if name not in self.requested_facets and name not in self._facets:
            return None

        entry = self._facets.get(name)
        if not isinstance(entry, Mapping):
            if entry is not None:
                logger.debug("Facet %r is not an object, treating it as empty", name)
            return []

        values = []
        for value, count in entry.items():
            if not isinstance(value, str) or not is_integer(count) or count < 0:
                logger.debug("Skipping malformed value %r for facet %r", value, name)
                continue

            values.append(FacetValue(value=value, count=count))

        return values
