import pytest

from search_helper.json_handler import BuiltinHandler, OrjsonHandler, UjsonHandler


@pytest.fixture
def search_json():
    """A response holding only the mandatory fields."""
    return {
        "hits": [],
        "nbHits": 0,
        "processingTimeMS": 66,
        "query": "",
        "params": "",
    }


@pytest.fixture(params=[BuiltinHandler, OrjsonHandler, UjsonHandler])
def json_handler(request):
    return request.param()
