import httpx
import pytest

from shopify_client import ClientSettings, ShopifyClient, ShopifyHTTPError, ShopifyRateLimitError
from shopify_client.resources import SmartCollectionService
from shopify_client.urls import build_url, normalize_shop_url

BASE = "https://test.myshopify.com"


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw",
    [
        "test.myshopify.com",
        "https://test.myshopify.com",
        "https://test.myshopify.com/",
        "https://test.myshopify.com/admin",
        "  test.myshopify.com/admin/  ",
    ],
)
def test_normalize_shop_url(raw):
    assert normalize_shop_url(raw) == BASE


@pytest.mark.unit
def test_build_url_with_and_without_version():
    assert build_url(BASE, "smart_collections.json") == f"{BASE}/admin/smart_collections.json"
    assert (
        build_url(BASE, "/smart_collections/count.json", "2024-01")
        == f"{BASE}/admin/api/2024-01/smart_collections/count.json"
    )


@pytest.mark.unit
def test_shop_url_required():
    with pytest.raises(ValueError):
        ShopifyClient()


@pytest.mark.unit
def test_settings_apply_and_kwargs_override():
    cfg = ClientSettings(
        shop_url="other.myshopify.com",
        access_token="from-settings",
        api_version="2024-01",
        retries=5,
        timeout=12.0,
    )
    c = ShopifyClient(BASE, settings=cfg, retries=1)
    assert c.shop_url == BASE
    assert c.api_version == "2024-01"
    assert c.retries == 1
    assert c.timeout == 12.0
    assert c._access_token == "from-settings"


@pytest.mark.unit
def test_resource_satisfies_service_protocol():
    c = ShopifyClient(BASE)
    assert isinstance(c.smart_collections, SmartCollectionService)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_access_token_header_and_versioned_path(respx_mock):
    route = respx_mock.get(f"{BASE}/admin/api/2024-01/smart_collections/count.json").mock(
        return_value=httpx.Response(200, json={"count": 0})
    )
    async with ShopifyClient(BASE, access_token="shpat_secret", api_version="2024-01") as c:
        assert await c.count_smart_collections() == 0

    req = route.calls.last.request
    assert req.headers["X-Shopify-Access-Token"] == "shpat_secret"
    assert req.headers["Accept"] == "application/json"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_retried_on_server_error(respx_mock):
    route = respx_mock.get(f"{BASE}/admin/smart_collections/count.json").mock(
        side_effect=[
            httpx.Response(503, json={"errors": "Service Unavailable"}),
            httpx.Response(200, json={"count": 4}),
        ]
    )
    async with ShopifyClient(BASE, retries=1) as c:
        assert await c.count_smart_collections() == 4
    assert route.call_count == 2


@pytest.mark.unit
@pytest.mark.asyncio
async def test_put_not_retried_on_server_error(respx_mock):
    route = respx_mock.put(f"{BASE}/admin/smart_collections/1/order.json").mock(
        return_value=httpx.Response(500, json={"errors": "Internal Server Error"})
    )
    async with ShopifyClient(BASE, retries=3) as c:
        with pytest.raises(ShopifyHTTPError) as ei:
            await c.update_smart_collection_product_order(1, [1])
    assert route.call_count == 1
    assert ei.value.status_code == 500


@pytest.mark.unit
@pytest.mark.asyncio
async def test_rate_limit_error(respx_mock):
    respx_mock.get(f"{BASE}/admin/smart_collections.json").mock(
        return_value=httpx.Response(
            429,
            json={"errors": "Exceeded 2 calls per second for api client. Reduce request rates to resume uninterrupted service."},
            headers={"Retry-After": "2.0", "X-Request-Id": "req-123"},
        )
    )
    async with ShopifyClient(BASE) as c:
        with pytest.raises(ShopifyRateLimitError) as ei:
            await c.get_smart_collections()

    err = ei.value
    assert isinstance(err, ShopifyHTTPError)
    assert err.status_code == 429
    assert err.retry_after == 2.0
    assert err.request_id == "req-123"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_transport_error_surfaces_as_http_error(respx_mock):
    respx_mock.get(f"{BASE}/admin/smart_collections/count.json").mock(
        side_effect=httpx.ConnectError("connection refused")
    )
    async with ShopifyClient(BASE) as c:
        with pytest.raises(ShopifyHTTPError) as ei:
            await c.count_smart_collections()
    assert ei.value.status_code == 0
    assert isinstance(ei.value.__cause__, httpx.ConnectError)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_invalid_json_body(respx_mock):
    respx_mock.get(f"{BASE}/admin/smart_collections/count.json").mock(
        return_value=httpx.Response(200, content=b"<html>maintenance</html>")
    )
    async with ShopifyClient(BASE) as c:
        with pytest.raises(ShopifyHTTPError) as ei:
            await c.count_smart_collections()
    assert ei.value.payload["body"].startswith("<html>")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_execute_request_without_root_returns_body(respx_mock):
    respx_mock.get(f"{BASE}/admin/shop.json").mock(
        return_value=httpx.Response(200, json={"shop": {"id": 1}})
    )
    async with ShopifyClient(BASE) as c:
        data = await c.execute_request(c.prepare_request("shop.json"), "GET")
    assert data == {"shop": {"id": 1}}


@pytest.mark.unit
@pytest.mark.asyncio
async def test_aclose_is_idempotent_and_client_reopens(respx_mock):
    respx_mock.get(f"{BASE}/admin/smart_collections/count.json").mock(
        return_value=httpx.Response(200, json={"count": 1})
    )
    c = ShopifyClient(BASE)
    await c.aclose()
    await c.aclose()
    assert await c.count_smart_collections() == 1
    await c.aclose()
    assert c._client is None
