import asyncio

import httpx

from src.app.services.transport.client import OptimizationClient
from src.app.services.transport.errors import ServiceError
from src.app.services.transport.models import OptimizationRequest

URL = "http://optimizer.test/optimize-transport/"


def _request() -> OptimizationRequest:
    return OptimizationRequest(dataset=b"store,item,qty\nS1,X,4\n", cost_rate=10.5, min_quantity=0)


def _submit(handler) -> object:
    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
            client = OptimizationClient(url=URL, http_client=http_client)
            return await client.submit(_request())

    return asyncio.run(run())


def test_submit_posts_multipart_fields(sample_payload):
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["method"] = request.method
        captured["url"] = str(request.url)
        captured["content_type"] = request.headers["content-type"]
        captured["body"] = request.content
        return httpx.Response(200, json=sample_payload)

    routes = _submit(handler)

    assert captured["method"] == "POST"
    assert captured["url"] == URL
    assert captured["content_type"].startswith("multipart/form-data")
    body = captured["body"]
    assert b'name="stock_file"; filename="stock.csv"' in body
    assert b"store,item,qty\r\nS1,X,4" in body or b"store,item,qty\nS1,X,4" in body
    assert b'name="cost_rate"\r\n\r\n10.5\r\n' in body
    assert b'name="min_quantity"\r\n\r\n0\r\n' in body
    assert isinstance(routes, list)


def test_submit_returns_routes_unchanged(sample_payload):
    routes = _submit(lambda request: httpx.Response(200, json=sample_payload))

    assert len(routes) == 2
    assert [route.stops[0].to_store for route in routes] == ["B", "C"]
    first = routes[0].stops[0]
    assert (first.from_store, first.item, first.units, first.distance, first.cost, first.time) == ("A", "X", 5, 10, 50, 15)


def test_submit_accepts_empty_route_list_and_empty_routes():
    routes = _submit(lambda request: httpx.Response(200, json=[{"stops": []}]))

    assert len(routes) == 1
    assert routes[0].stops == ()


def test_submit_coerces_numeric_store_codes():
    payload = [{"stops": [{"from_store": 101, "to_store": 202, "item": "X", "units": 1, "distance": 1, "cost": 1, "time": 1}]}]

    routes = _submit(lambda request: httpx.Response(200, json=payload))

    assert routes[0].stops[0].from_store == "101"
    assert routes[0].stops[0].to_store == "202"


def test_submit_surfaces_service_error_verbatim():
    outcome = _submit(lambda request: httpx.Response(200, json={"error": "invalid file"}))

    assert isinstance(outcome, ServiceError)
    assert outcome.message == "invalid file"


def test_submit_maps_connection_errors_to_transport_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    outcome = _submit(handler)

    assert isinstance(outcome, ServiceError)
    assert outcome.message == "transport failure"


def test_submit_maps_timeouts_to_transport_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    assert _submit(handler).message == "transport failure"


def test_submit_maps_http_status_errors_to_transport_failure():
    outcome = _submit(lambda request: httpx.Response(500, json={"error": "boom"}))

    assert isinstance(outcome, ServiceError)
    assert outcome.message == "transport failure"


def test_submit_rejects_malformed_bodies():
    assert _submit(lambda request: httpx.Response(200, text="<html>oops</html>")).message == "transport failure"
    assert _submit(lambda request: httpx.Response(200, json={"routes": []})).message == "transport failure"
    assert _submit(lambda request: httpx.Response(200, json=[{"stops": [{"from_store": "A"}]}])).message == "transport failure"
    assert _submit(lambda request: httpx.Response(200, json=42)).message == "transport failure"


def test_submit_maps_invalid_url_to_transport_failure():
    async def run():
        handler = lambda request: httpx.Response(200, json=[])
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
            client = OptimizationClient(url="http://[not-a-host/optimize", http_client=http_client)
            return await client.submit(_request())

    outcome = asyncio.run(run())

    assert isinstance(outcome, ServiceError)
    assert outcome.message == "transport failure"


def test_submit_maps_unexpected_errors_to_transport_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise RuntimeError("socket layer blew up")

    outcome = _submit(handler)

    assert isinstance(outcome, ServiceError)
    assert outcome.message == "transport failure"


def test_submit_renders_float_store_codes_like_integers():
    payload = [{"stops": [{"from_store": 101.0, "to_store": 202.5, "item": 7, "units": 1, "distance": 1, "cost": 1, "time": 1}]}]

    stop = _submit(lambda request: httpx.Response(200, json=payload))[0].stops[0]

    assert (stop.from_store, stop.to_store, stop.item) == ("101", "202.5", "7")
