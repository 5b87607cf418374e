from search_helper._version import VERSION
from search_helper.decoder import SearchResultsDecoder, decode_search_results
from search_helper.facets import FacetExtractor
from search_helper.models.facets import FacetStats, FacetValue
from search_helper.models.geo import LatLng
from search_helper.models.query import QueryParameters
from search_helper.models.search import SearchResults
from search_helper.query_params import decode_query_parameters, encode_query_parameters

__version__ = VERSION


__all__ = [
    "FacetExtractor",
    "FacetStats",
    "FacetValue",
    "LatLng",
    "QueryParameters",
    "SearchResults",
    "SearchResultsDecoder",
    "decode_query_parameters",
    "decode_search_results",
    "encode_query_parameters",
]
