from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Generic, TypeVar

import pydantic
from httpx import Response

from search_helper.errors import SearchApiError, SearchResultsDecodeError
from search_helper.json_handler import BuiltinHandler, OrjsonHandler, UjsonHandler
from search_helper.models.search import SearchResults
from search_helper.types import JsonDict

T = TypeVar("T")

logger = logging.getLogger(__name__)


class SearchResultsDecoder(Generic[T]):
    def __init__(
        self,
        json_handler: BuiltinHandler | OrjsonHandler | UjsonHandler | None = None,
        hits_type: Any = JsonDict,
    ) -> None:
        """Decodes raw search responses into SearchResults.

        Args:
            json_handler: The module to use for json operations. The options are BuiltinHandler
                (uses the json module from the standard library), OrjsonHandler (uses orjson),
                or UjsonHandler (uses ujson). Note that in order use orjson or ujson the
                corresponding extra needs to be included. Default: BuiltinHandler.
            hits_type: The type the hits are validated as. Defaults to JsonDict, pass a
                pydantic model to get typed hits.
        """
        self.json_handler = json_handler if json_handler else BuiltinHandler()
        self.hits_type = hits_type

    def decode(
        self,
        content: Mapping[str, Any] | str | bytes | bytearray,
        disjunctive_facets: Iterable[str] = (),
    ) -> SearchResults[T]:
        """Build SearchResults from the body of a search response.

        Args:
            content: The response body, either already parsed or as JSON text.
            disjunctive_facets: Names of the facets that are disjunctive. These facets are
                reported as available by `SearchResults.facets` even when the query did not
                list them.

        Returns:
            The decoded results.

        Raises:
            SearchResultsDecodeError: If the content is not a JSON object or a mandatory
                field (hits, nbHits, processingTimeMS, query, params) is missing or has the
                wrong type.

        Examples:
            >>> from search_helper.decoder import SearchResultsDecoder
            >>> decoder = SearchResultsDecoder()
            >>> results = decoder.decode(
            >>>     {
            >>>         "hits": [{"objectID": "1"}],
            >>>         "nbHits": 1,
            >>>         "processingTimeMS": 2,
            >>>         "query": "phone",
            >>>         "params": "query=phone&facets=%5B%22brand%22%5D",
            >>>         "facets": {"brand": {"Apple": 1}},
            >>>     },
            >>>     disjunctive_facets=["category"],
            >>> )
            >>> results.facets("brand")
            [FacetValue(value='Apple', count=1)]
        """
        if isinstance(content, (str, bytes, bytearray)):
            content = self._loads(content)

        if not isinstance(content, Mapping):
            logger.debug("Search response is a %s, not an object", type(content).__name__)
            raise SearchResultsDecodeError("The search response must be a JSON object.")

        if isinstance(disjunctive_facets, str):
            disjunctive_facets = [disjunctive_facets]

        data = {**content, "disjunctiveFacets": list(disjunctive_facets)}
        try:
            return SearchResults[self.hits_type].model_validate(  # type: ignore[name-defined]
                data, context={"json_handler": self.json_handler}
            )
        except pydantic.ValidationError as e:
            fields = [".".join(str(x) for x in error["loc"]) for error in e.errors()]
            logger.debug("Unable to decode search response, invalid fields: %s", fields)
            raise SearchResultsDecodeError(
                "The search response is missing a mandatory field or has a field of the wrong type.",
                fields,
            ) from e

    def decode_response(
        self, response: Response, disjunctive_facets: Iterable[str] = ()
    ) -> SearchResults[T]:
        """Build SearchResults from an already received HTTP response.

        Args:
            response: The response returned by the search service.
            disjunctive_facets: Names of the facets that are disjunctive.

        Returns:
            The decoded results.

        Raises:
            SearchApiError: If the response status is not a success.
            SearchResultsDecodeError: If the body is not a valid search response.
        """
        if not response.is_success:
            raise SearchApiError(f"Search failed with status {response.status_code}", response)

        return self.decode(response.content, disjunctive_facets)

    def _loads(self, content: str | bytes | bytearray) -> Any:
        try:
            return self.json_handler.loads(content)
        except (ValueError, RecursionError) as e:
            logger.debug("Search response is not valid JSON: %s", e)
            raise SearchResultsDecodeError("The search response is not valid JSON.") from e


def decode_search_results(
    content: Mapping[str, Any] | str | bytes | bytearray,
    disjunctive_facets: Iterable[str] = (),
    *,
    json_handler: BuiltinHandler | OrjsonHandler | UjsonHandler | None = None,
    hits_type: Any = JsonDict,
) -> SearchResults:
    """Build SearchResults from the body of a search response.

    Shortcut for `SearchResultsDecoder(json_handler, hits_type).decode(content, disjunctive_facets)`.

    Raises:
        SearchResultsDecodeError: If a mandatory field is missing or has the wrong type.
    """
    return SearchResultsDecoder(json_handler=json_handler, hits_type=hits_type).decode(
        content, disjunctive_facets
    )
