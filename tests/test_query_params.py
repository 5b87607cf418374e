import pytest

from search_helper.errors import InvalidQueryParametersError
from search_helper.models.geo import LatLng
from search_helper.models.query import QueryParameters
from search_helper.query_params import decode_query_parameters, encode_query_parameters


def test_decode():
    params = decode_query_parameters("query=some%20text&facets=%5B%22abc%22,%22def%22%5D")

    assert params.query == "some text"
    assert params.facets == ["abc", "def"]


def test_decode_empty():
    assert decode_query_parameters("") == QueryParameters()


def test_decode_leading_question_mark():
    assert decode_query_parameters("?query=abc").query == "abc"


@pytest.mark.parametrize(
    "query_string",
    ["foo=bar&query=abc", "query=abc&unknownKey=%5B1%5D", "query=abc&&", "noValue&query=abc"],
)
def test_decode_ignores_unknown_and_malformed_pieces(query_string):
    assert decode_query_parameters(query_string) == QueryParameters(query="abc")


def test_decode_keys_are_case_sensitive():
    assert decode_query_parameters("Query=abc").query is None


def test_decode_empty_value():
    assert decode_query_parameters("query=").query == ""


def test_decode_plus_is_not_a_space():
    assert decode_query_parameters("query=a+b").query == "a+b"


def test_decode_invalid_utf8_is_dropped():
    assert decode_query_parameters("query=%FF").query is None


def test_decode_last_value_wins():
    assert decode_query_parameters("query=abc&query=def").query == "def"


@pytest.mark.parametrize(
    "value", ["abc", "%5B1,2%5D", "%7B%22a%22:1%7D", "%5B%22abc%22", "%22abc%22"]
)
def test_decode_invalid_facets(value):
    assert decode_query_parameters(f"facets={value}").facets is None


def test_decode_facets_are_distinct():
    params = decode_query_parameters("facets=%5B%22abc%22,%22def%22,%22abc%22%5D")

    assert params.facets == ["abc", "def"]


def test_decode_facets_with_json_handler(json_handler):
    params = decode_query_parameters(
        "facets=%5B%22abc%22,%22def%22%5D", json_handler=json_handler
    )

    assert params.facets == ["abc", "def"]


@pytest.mark.parametrize(
    "query_string, expected",
    [
        ("page=3", 3),
        ("page=0", 0),
        ("page=-1", None),
        ("page=abc", None),
        ("page=1.5", None),
        ("page=%201", None),
    ],
)
def test_decode_int(query_string, expected):
    assert decode_query_parameters(query_string).page == expected


@pytest.mark.parametrize(
    "query_string, expected",
    [("getRankingInfo=true", True), ("getRankingInfo=false", False), ("getRankingInfo=1", None)],
)
def test_decode_bool(query_string, expected):
    assert decode_query_parameters(query_string).get_ranking_info is expected


def test_decode_around_lat_lng_via_ip():
    assert decode_query_parameters("aroundLatLngViaIP=true").around_lat_lng_via_ip is True


@pytest.mark.parametrize(
    "value, expected",
    [
        ("12.34%2C45.67", LatLng(lat=12.34, lng=45.67)),
        ("12.34,45.67", LatLng(lat=12.34, lng=45.67)),
        ("12.34", None),
        ("abc,def", None),
    ],
)
def test_decode_around_lat_lng(value, expected):
    assert decode_query_parameters(f"aroundLatLng={value}").around_lat_lng == expected


def test_decode_filters():
    params = decode_query_parameters(
        "filters=brand%3AApple%20AND%20price%20%3C%20100"
        "&facetFilters=%5B%5B%22brand%3AApple%22,%22brand%3ASamsung%22%5D,%22type%3Aphone%22%5D"
        "&numericFilters=%5B%22price%3C100%22%5D"
    )

    assert params.filters == "brand:Apple AND price < 100"
    assert params.facet_filters == [["brand:Apple", "brand:Samsung"], "type:phone"]
    assert params.numeric_filters == ["price<100"]


def test_decode_invalid_filters():
    assert decode_query_parameters("tagFilters=%5B%5B1%5D%5D").tag_filters is None


def test_encode():
    params = QueryParameters(query="some text", facets=["abc", "def"])

    assert (
        encode_query_parameters(params) == "query=some%20text&facets=%5B%22abc%22%2C%22def%22%5D"
    )


def test_encode_empty():
    assert encode_query_parameters(QueryParameters()) == ""


def test_encode_typed_values():
    params = QueryParameters(
        page=2,
        analytics=False,
        around_lat_lng_via_ip=True,
        around_lat_lng=LatLng(lat=12.34, lng=45.67),
    )

    assert encode_query_parameters(params) == (
        "page=2&aroundLatLng=12.34%2C45.67&aroundLatLngViaIP=true&analytics=false"
    )


def test_encode_invalid_type():
    with pytest.raises(InvalidQueryParametersError):
        encode_query_parameters({"query": "abc"})  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "query_string",
    [
        "query=some%20text&facets=%5B%22abc%22,%22def%22%5D",
        "query=&page=0&hitsPerPage=20&getRankingInfo=true",
        "facetFilters=%5B%5B%22a%3A1%22,%22a%3A2%22%5D,%22b%3A3%22%5D&tagFilters=%5B%5D",
        "aroundLatLng=-12.5,0.25&aroundRadius=1000&query=caf%C3%A9%20%26%20bar",
        "highlightPreTag=%3Cem%3E&highlightPostTag=%3C%2Fem%3E&typoTolerance=min",
    ],
)
def test_round_trip(query_string, json_handler):
    decoded = decode_query_parameters(query_string, json_handler=json_handler)
    encoded = encode_query_parameters(decoded, json_handler=json_handler)

    assert decode_query_parameters(encoded, json_handler=json_handler) == decoded


def test_round_trip_keeps_facet_order():
    params = QueryParameters(facets=["zeta", "alpha", "mid"])

    assert decode_query_parameters(encode_query_parameters(params)).facets == [
        "zeta",
        "alpha",
        "mid",
    ]


def test_decode_deeply_nested_facets():
    params = decode_query_parameters("query=abc&facets=" + "%5B" * 100000 + "%5D" * 100000)

    assert params.query == "abc"
    assert params.facets is None
