import json
from datetime import datetime, timezone
from decimal import Decimal

import httpx
import pytest

from database.directory import InMemoryWholesaleDirectory
from services.checkout import CheckoutOrchestrator
from services.discount_codes import CodeSequence, DiscountCodeGenerator
from services.provisioner import DiscountProvisioner
from services.shopify_client import ShopifyAdminAPI

FIXED_NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def anyio_backend():
    # asyncio only, no trio needed
    return "asyncio"


DEFAULT = object()


def json_response(status_code, body):
    # json=None would send an empty body; Shopify bodies may literally be null
    return httpx.Response(status_code, content=json.dumps(body).encode(), headers={"content-type": "application/json"})


class FakeShopify:
    """Records Admin API requests and answers like Shopify would"""

    def __init__(self):
        self.requests = []
        self.price_rule_status = 201
        self.price_rule_body = DEFAULT
        self.discount_code_status = 201
        self.discount_code_body = DEFAULT
        self.raise_on = None  # (path suffix, exception class)
        self.next_rule_id = 1001

    def bodies(self):
        return [json.loads(r.content) if r.content else None for r in self.requests]

    def paths(self):
        return [r.url.path for r in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if self.raise_on and path.endswith(self.raise_on[0]):
            raise self.raise_on[1]("simulated transport failure", request=request)

        if request.method == "POST" and path.endswith("/discount_codes.json"):
            if self.discount_code_status >= 400:
                return httpx.Response(self.discount_code_status, json={"errors": {"code": ["must be unique"]}})
            payload = json.loads(request.content)["discount_code"]
            body = self.discount_code_body
            if body is DEFAULT:
                body = {"discount_code": {"id": 5001, **payload}}
            return json_response(self.discount_code_status, body)

        if request.method == "POST" and path.endswith("/price_rules.json"):
            if self.price_rule_status >= 400:
                return httpx.Response(self.price_rule_status, json={"errors": "Invalid API key or access token"})
            payload = json.loads(request.content)["price_rule"]
            body = self.price_rule_body
            if body is DEFAULT:
                body = {"price_rule": {"id": self.next_rule_id, **payload}}
                self.next_rule_id += 1
            return json_response(self.price_rule_status, body)

        if path.endswith("/shop.json"):
            return httpx.Response(200, json={"shop": {"name": "PeachTree Test"}})
        if path.endswith("/products.json"):
            return httpx.Response(200, json={"products": [{"id": 1, "title": "Peach Jam"}]})
        if path.endswith("/price_rules.json"):
            return httpx.Response(200, json={"price_rules": []})

        return httpx.Response(404, json={"errors": "Not Found"})


@pytest.fixture
def fake_shopify():
    return FakeShopify()


@pytest.fixture
def shopify(fake_shopify):
    client = httpx.AsyncClient(transport=httpx.MockTransport(fake_shopify.handler))
    return ShopifyAdminAPI(
        domain="peachtree-test.myshopify.com",
        token="shpat_test",
        api_version="2023-10",
        client=client
    )


@pytest.fixture
def directory():
    directory = InMemoryWholesaleDirectory()
    directory.add_customer("a@b.com")
    directory.set_wholesale_price("P1", Decimal("10"))
    return directory


@pytest.fixture
def generator():
    return DiscountCodeGenerator(clock=lambda: FIXED_NOW, sequence=CodeSequence(start=0))


@pytest.fixture
def provisioner(shopify):
    return DiscountProvisioner(shopify, clock=lambda: FIXED_NOW)


@pytest.fixture
def orchestrator(directory, generator, provisioner):
    return CheckoutOrchestrator(directory, generator, provisioner)
