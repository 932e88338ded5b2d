import httpx
import logging
from typing import Any, Dict, List, Optional
from config.settings import (
    SHOPIFY_STORE_DOMAIN,
    SHOPIFY_ACCESS_TOKEN,
    SHOPIFY_API_VERSION,
    SHOPIFY_TIMEOUT_SECONDS
)
from utils.error_handler import ShopifyAPIError

logger = logging.getLogger(__name__)


class ShopifyAdminAPI:
    """Shopify REST Admin API client (Async)"""

    def __init__(
        self,
        domain: Optional[str] = SHOPIFY_STORE_DOMAIN,
        token: Optional[str] = SHOPIFY_ACCESS_TOKEN,
        api_version: str = SHOPIFY_API_VERSION,
        timeout: float = SHOPIFY_TIMEOUT_SECONDS,
        client: Optional[httpx.AsyncClient] = None
    ):
        self.domain = domain
        self.token = token
        self.api_version = api_version
        self.base_url = f"https://{domain}/admin/api/{api_version}"
        self.headers = {
            "X-Shopify-Access-Token": token or "",
            "Content-Type": "application/json"
        }
        self.client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def configured(self) -> bool:
        return bool(self.domain and self.token)

    async def _request(self, method: str, path: str, json: dict = None, params: dict = None) -> Dict[str, Any]:
        """
        Send a request to the Admin API and return the decoded JSON body

        Raises:
            ShopifyAPIError: not configured, transport failure, timeout,
                non-2xx status or a body that is not JSON
        """
        if not self.configured:
            raise ShopifyAPIError(
                message="Shopify API is not configured",
                status_code=500,
                details={"error": "SHOPIFY_STORE_DOMAIN and SHOPIFY_ACCESS_TOKEN must be set"}
            )

        url = f"{self.base_url}{path}"

        try:
            response = await self.client.request(method, url, headers=self.headers, json=json, params=params)
            response.raise_for_status()

        except httpx.HTTPStatusError as e:
            logger.error(f"❌ Shopify {method} {path} returned {e.response.status_code}")
            try:
                error_details = e.response.json()
            except ValueError:
                error_details = {"response": e.response.text[:500]}
            raise ShopifyAPIError(
                message=f"Shopify {method} {path} failed",
                status_code=e.response.status_code,
                details=error_details
            )
        except httpx.TimeoutException as e:
            logger.error(f"❌ Shopify {method} {path} timed out: {e}")
            raise ShopifyAPIError(
                message=f"Shopify {method} {path} timed out",
                status_code=504,
                details={"error": "timeout"}
            )
        except httpx.RequestError as e:
            logger.error(f"❌ Error calling Shopify {method} {path}: {e}")
            raise ShopifyAPIError(
                message=f"Shopify {method} {path} failed",
                status_code=500,
                details={"error": str(e)}
            )

        try:
            return response.json()
        except ValueError:
            raise ShopifyAPIError(
                message=f"Shopify {method} {path} returned a non-JSON body",
                status_code=502,
                details={"response": response.text[:500]}
            )

    async def create_price_rule(self, price_rule: dict) -> Dict[str, Any]:
        """
        Create a price rule

        Args:
            price_rule: Price rule attributes (title, value_type, value, ...)

        Returns:
            dict: Response body, ``{"price_rule": {...}}``
        """
        return await self._request("POST", "/price_rules.json", json={"price_rule": price_rule})

    async def create_discount_code(self, price_rule_id: int, code: str) -> Dict[str, Any]:
        """Create a discount code bound to an existing price rule"""
        payload = {
            "discount_code": {
                "code": code,
                "usage_count": 0
            }
        }
        return await self._request("POST", f"/price_rules/{price_rule_id}/discount_codes.json", json=payload)

    async def get_shop(self) -> Dict[str, Any]:
        """Get shop information"""
        data = await self._request("GET", "/shop.json")
        return data.get("shop", {})

    async def list_products(self, limit: int = 3) -> List[Dict[str, Any]]:
        """List products"""
        data = await self._request("GET", "/products.json", params={"limit": limit})
        return data.get("products", [])

    async def list_price_rules(self, limit: int = 1) -> List[Dict[str, Any]]:
        """List existing price rules"""
        data = await self._request("GET", "/price_rules.json", params={"limit": limit})
        return data.get("price_rules", [])

    async def close(self):
        """Close the HTTP client"""
        await self.client.aclose()
