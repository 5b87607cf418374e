from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote, unquote

from search_helper._utils import parse_bool, parse_non_negative_int
from search_helper.errors import InvalidQueryParametersError
from search_helper.json_handler import BuiltinHandler, OrjsonHandler, UjsonHandler
from search_helper.models.geo import LatLng
from search_helper.models.query import QueryParameters
from search_helper.types import JsonDict

logger = logging.getLogger(__name__)

_INT_PARAMETERS = frozenset(
    (
        "page",
        "hits_per_page",
        "offset",
        "length",
        "max_values_per_facet",
        "distinct",
        "around_radius",
        "minimum_around_radius",
    )
)
_BOOL_PARAMETERS = frozenset(
    (
        "around_lat_lng_via_ip",
        "get_ranking_info",
        "advanced_syntax",
        "synonyms",
        "facetting_after_distinct",
        "analytics",
        "click_analytics",
    )
)
_LIST_PARAMETERS = frozenset(
    (
        "facets",
        "attributes_to_retrieve",
        "attributes_to_highlight",
        "attributes_to_snippet",
        "restrict_searchable_attributes",
        "analytics_tags",
    )
)
_FILTER_PARAMETERS = frozenset(("facet_filters", "numeric_filters", "tag_filters"))
_GEO_PARAMETERS = frozenset(("around_lat_lng",))

_FIELDS_BY_KEY = {
    (field.alias or name): name for name, field in QueryParameters.model_fields.items()
}


def decode_query_parameters(
    query_string: str,
    *,
    json_handler: BuiltinHandler | OrjsonHandler | UjsonHandler | None = None,
) -> QueryParameters:
    """Decode a URL-encoded query string into QueryParameters.

    The string is a `&` separated list of `key=value` pairs. Each value is percent-decoded
    on its own and then parsed according to the type of the parameter. Array parameters such
    as `facets` carry a JSON array, for example `facets=%5B%22abc%22,%22def%22%5D`.

    Decoding is best effort and never raises: pieces without an `=`, unknown keys, and values
    that do not parse as the expected type are dropped. When a key is repeated the last
    value wins.

    Args:
        query_string: The query string to decode. A leading `?` is ignored.
        json_handler: The handler used to parse the JSON arrays. Defaults to BuiltinHandler.

    Returns:
        The decoded parameters.

    Examples:
        >>> from search_helper.query_params import decode_query_parameters
        >>> params = decode_query_parameters("query=some%20text&facets=%5B%22abc%22%5D")
        >>> params.query
        'some text'
        >>> params.facets
        ['abc']
    """
    handler = json_handler if json_handler else BuiltinHandler()
    values: JsonDict = {}

    if query_string.startswith("?"):
        query_string = query_string[1:]

    for piece in query_string.split("&"):
        if not piece:
            continue

        key, sep, raw_value = piece.partition("=")
        if not sep:
            logger.debug("Dropping query string piece without a value: %r", piece)
            continue

        name = _FIELDS_BY_KEY.get(key)
        if name is None:
            logger.debug("Ignoring unknown query parameter %r", key)
            continue

        try:
            value = unquote(raw_value, errors="strict")
        except UnicodeDecodeError:
            logger.debug("Dropping %r, the value is not valid percent-encoded UTF-8", key)
            values.pop(name, None)
            continue

        parsed = _parse_value(name, value, handler)
        if parsed is None:
            logger.debug("Dropping %r, unable to parse %r", key, value)
            values.pop(name, None)
            continue

        values[name] = parsed

    return QueryParameters(**values)


def encode_query_parameters(
    params: QueryParameters,
    *,
    json_handler: BuiltinHandler | OrjsonHandler | UjsonHandler | None = None,
) -> str:
    """Encode QueryParameters into a URL-encoded query string.

    Only the parameters that are set are written, in the order they are declared on
    QueryParameters. Array parameters are JSON encoded before being percent-encoded.

    Args:
        params: The parameters to encode.
        json_handler: The handler used to serialize the JSON arrays. Defaults to BuiltinHandler.

    Returns:
        The query string, without a leading `?`.

    Raises:
        InvalidQueryParametersError: If params is not a QueryParameters instance.
    """
    if not isinstance(params, QueryParameters):
        raise InvalidQueryParametersError(
            f"Expected QueryParameters, got {type(params).__name__}"
        )

    handler = json_handler if json_handler else BuiltinHandler()
    pieces = []
    for name, field in QueryParameters.model_fields.items():
        value = getattr(params, name)
        if value is None:
            continue

        key = field.alias or name
        pieces.append(f"{key}={quote(_format_value(name, value, handler), safe='')}")

    return "&".join(pieces)


def _parse_value(
    name: str, value: str, handler: BuiltinHandler | OrjsonHandler | UjsonHandler
) -> Any:
    if name in _INT_PARAMETERS:
        return parse_non_negative_int(value)

    if name in _BOOL_PARAMETERS:
        return parse_bool(value)

    if name in _GEO_PARAMETERS:
        return LatLng.from_string(value)

    if name in _LIST_PARAMETERS:
        loaded = _load_json(value, handler)
        if isinstance(loaded, list) and all(isinstance(x, str) for x in loaded):
            return loaded

        return None

    if name in _FILTER_PARAMETERS:
        loaded = _load_json(value, handler)
        if isinstance(loaded, list) and all(_is_filter_item(x) for x in loaded):
            return loaded

        return None

    return value


def _format_value(
    name: str, value: Any, handler: BuiltinHandler | OrjsonHandler | UjsonHandler
) -> str:
    if name in _BOOL_PARAMETERS:
        return "true" if value else "false"

    if name in _LIST_PARAMETERS or name in _FILTER_PARAMETERS:
        return handler.dumps(value)

    return str(value)


def _load_json(value: str, handler: BuiltinHandler | OrjsonHandler | UjsonHandler) -> Any:
    try:
        return handler.loads(value)
    except (ValueError, RecursionError):
        return None


def _is_filter_item(item: Any) -> bool:
    if isinstance(item, str):
        return True

    return isinstance(item, list) and all(isinstance(x, str) for x in item)
