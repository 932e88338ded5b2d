"""
Check the Shopify Admin API connection
Verifies shop access, product reads and price rule access before going live
"""

import sys
import os
import asyncio
import logging

# Add parent directory to path so we can import modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config.settings import SHOPIFY_STORE_DOMAIN, SHOPIFY_API_VERSION, SHOPIFY_ACCESS_TOKEN
from services.shopify_client import ShopifyAdminAPI
from utils.error_handler import ShopifyAPIError

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)


async def check_connection(api: ShopifyAdminAPI) -> bool:
    """Run the connection checks, returning True when all pass"""
    logger.info("Testing Shopify API Connection...")
    logger.info(f"Store: {api.domain}")
    logger.info(f"API Version: {api.api_version}")
    logger.info(f"Token: {'Present' if api.token else 'Missing'}")
    logger.info("---")

    try:
        logger.info("Test 1: Getting shop information...")
        shop = await api.get_shop()
        logger.info(f"✅ Shop API working! Shop name: {shop.get('name')}")

        logger.info("\nTest 2: Getting products...")
        products = await api.list_products(limit=3)
        logger.info(f"✅ Products API working! Found {len(products)} products")
        if products:
            first = products[0]
            logger.info(f"First product: {first.get('title')} (ID: {first.get('id')})")

        logger.info("\nTest 3: Checking discount capabilities...")
        price_rules = await api.list_price_rules(limit=1)
        logger.info(f"✅ Price rules API working! Found {len(price_rules)} existing price rules")

        logger.info("\n🎉 All tests passed! Your Shopify API is ready for wholesale integration.")
        return True

    except ShopifyAPIError as e:
        logger.error("❌ API Test Failed:")
        logger.error(f"Status: {e.status_code}")
        logger.error(f"Error: {e.details or e.message}")
        return False


async def main() -> int:
    api = ShopifyAdminAPI(SHOPIFY_STORE_DOMAIN, SHOPIFY_ACCESS_TOKEN, SHOPIFY_API_VERSION)
    try:
        ok = await check_connection(api)
    finally:
        await api.close()
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
