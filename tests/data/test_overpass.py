# tests/data/test_overpass.py
import asyncio

import httpx
import pytest

from roadroute.config import RoadDataConfig
from roadroute.data.overpass import OverpassClient, build_road_query
from roadroute.exceptions import DataFetchError
from roadroute.graph.geo import BoundingBox

BBOX = BoundingBox(south=51.49, west=-0.14, north=51.52, east=-0.10)
CONFIG = RoadDataConfig(overpass_url="https://overpass.test/api/interpreter", timeout_s=1.0)


def fetch(handler):
    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await OverpassClient(client, CONFIG).fetch_road_network(BBOX)

    return asyncio.run(run())


def test_query_selects_highways_in_bbox_with_member_nodes():
    query = build_road_query(BBOX)
    assert query.startswith("[out:json];")
    assert 'way["highway"](51.49,-0.14,51.52,-0.1);' in query
    assert "out body;" in query
    assert ">;" in query
    assert "out skel qt;" in query


def test_fetch_posts_plain_text_query():
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["content_type"] = request.headers["content-type"]
        seen["body"] = request.content.decode()
        return httpx.Response(200, json={"elements": [{"type": "node", "id": 1, "lat": 0, "lon": 0}]})

    data = fetch(handler)

    assert data["elements"][0]["id"] == 1
    assert seen["method"] == "POST"
    assert seen["url"] == CONFIG.overpass_url
    assert seen["content_type"] == "text/plain"
    assert seen["body"] == build_road_query(BBOX)


def test_server_error_is_data_fetch_failure():
    with pytest.raises(DataFetchError):
        fetch(lambda request: httpx.Response(504, text="Gateway Timeout"))


def test_timeout_is_data_fetch_failure():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(DataFetchError) as info:
        fetch(handler)
    assert info.value.to_payload()["error"] == "Failed to fetch OSM data"


def test_non_json_body_is_data_fetch_failure():
    with pytest.raises(DataFetchError):
        fetch(lambda request: httpx.Response(200, text="<html>rate limited</html>"))


def test_missing_element_list_is_data_fetch_failure():
    with pytest.raises(DataFetchError):
        fetch(lambda request: httpx.Response(200, json={"remark": "runtime error"}))
