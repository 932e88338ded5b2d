import httpx
import pytest

from services.shopify_client import ShopifyAdminAPI
from utils.error_handler import ShopifyAPIError

pytestmark = pytest.mark.anyio


async def test_requests_use_admin_base_url_and_token(shopify, fake_shopify):
    shop = await shopify.get_shop()

    assert shop == {"name": "PeachTree Test"}
    request = fake_shopify.requests[0]
    assert str(request.url) == "https://peachtree-test.myshopify.com/admin/api/2023-10/shop.json"
    assert request.headers["X-Shopify-Access-Token"] == "shpat_test"


async def test_list_endpoints_pass_limit(shopify, fake_shopify):
    products = await shopify.list_products(limit=3)
    rules = await shopify.list_price_rules(limit=1)

    assert products[0]["title"] == "Peach Jam"
    assert rules == []
    assert fake_shopify.requests[0].url.params["limit"] == "3"
    assert fake_shopify.requests[1].url.params["limit"] == "1"


async def test_error_status_raises_with_upstream_body(shopify, fake_shopify):
    fake_shopify.price_rule_status = 403

    with pytest.raises(ShopifyAPIError) as exc_info:
        await shopify.create_price_rule({"title": "x"})

    assert exc_info.value.status_code == 403
    assert exc_info.value.details == {"errors": "Invalid API key or access token"}


async def test_non_json_body_raises():
    client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(200, text="<html>")))
    api = ShopifyAdminAPI(domain="s.myshopify.com", token="t", client=client)

    with pytest.raises(ShopifyAPIError) as exc_info:
        await api.get_shop()

    assert exc_info.value.details == {"response": "<html>"}


async def test_unconfigured_client_makes_no_request(fake_shopify):
    client = httpx.AsyncClient(transport=httpx.MockTransport(fake_shopify.handler))
    api = ShopifyAdminAPI(domain=None, token=None, client=client)

    assert api.configured is False
    with pytest.raises(ShopifyAPIError):
        await api.create_discount_code(1, "CODE")
    assert fake_shopify.requests == []
